"""Tests for product catalog endpoints."""

from decimal import Decimal

from tests.factories import create_category, create_product, create_warehouse, stock

PRODUCTS = "/api/warehouse/products"


class TestCreateProduct:
    def test_create_assigns_public_id(self, client):
        category = create_category(client)

        data = create_product(
            client,
            sku="GLV-001",
            name="Gloves",
            unit="box",
            is_hazardous=False,
            price="12.50",
            category_id=category["id"],
        )

        assert data["public_id"]
        assert "id" not in data
        assert data["sku"] == "GLV-001"
        assert Decimal(str(data["price"])) == Decimal("12.50")
        assert data["category_id"] == category["id"]

    def test_duplicate_sku(self, client):
        create_product(client, sku="DUP-1")

        response = client.post(PRODUCTS, json={"name": "Other", "sku": "DUP-1", "price": "1"})

        assert response.status_code == 409
        assert response.json()["error_code"] == "PRODUCT_SKU_EXISTS"

    def test_unknown_category(self, client):
        response = client.post(
            PRODUCTS,
            json={"name": "Orphan", "sku": "ORP-1", "price": "1", "category_id": 55},
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "CATEGORY_NOT_FOUND"

    def test_negative_price(self, client):
        response = client.post(PRODUCTS, json={"name": "Bad", "sku": "BAD-1", "price": "-1"})

        assert response.status_code == 422


class TestReadProducts:
    def test_list_sorted_by_name(self, client):
        create_product(client, name="Zinc")
        create_product(client, name="Acid")

        response = client.get(PRODUCTS)

        assert [p["name"] for p in response.json()["data"]] == ["Acid", "Zinc"]

    def test_get_unknown(self, client):
        response = client.get(f"{PRODUCTS}/nope")

        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"


class TestUpdateProduct:
    def test_put_replaces_all_fields(self, client):
        category = create_category(client)
        product = create_product(client)

        response = client.put(
            f"{PRODUCTS}/{product['public_id']}",
            json={
                "name": "Solvent",
                "sku": "SOL-1",
                "description": "Flammable",
                "unit": "litre",
                "is_hazardous": True,
                "expiration_required": True,
                "price": "30.00",
                "category_id": category["id"],
            },
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["public_id"] == product["public_id"]
        assert data["name"] == "Solvent"
        assert data["is_hazardous"] is True
        assert data["expiration_required"] is True

    def test_patch_applies_only_given_fields(self, client):
        product = create_product(client, name="Rope", unit="metre")

        response = client.patch(f"{PRODUCTS}/{product['public_id']}", json={"is_hazardous": True})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["is_hazardous"] is True
        assert data["name"] == "Rope"
        assert data["unit"] == "metre"

    def test_patch_can_clear_optional_fields(self, client):
        product = create_product(client, description="Temporary")

        response = client.patch(f"{PRODUCTS}/{product['public_id']}", json={"description": None})

        assert response.status_code == 200
        assert response.json()["data"]["description"] is None

    def test_patch_rejects_null_for_required_fields(self, client):
        product = create_product(client)

        response = client.patch(
            f"{PRODUCTS}/{product['public_id']}",
            json={"name": None, "price": None},
        )

        assert response.status_code == 400
        assert response.json()["details"] == {"fields": ["name", "price"]}

    def test_patch_sku_to_existing(self, client):
        create_product(client, sku="TAKEN")
        product = create_product(client)

        response = client.patch(f"{PRODUCTS}/{product['public_id']}", json={"sku": "TAKEN"})

        assert response.status_code == 409


class TestDeleteProduct:
    def test_soft_delete_hides_product(self, client):
        product = create_product(client)

        response = client.delete(f"{PRODUCTS}/{product['public_id']}")

        assert response.status_code == 200
        assert client.get(f"{PRODUCTS}/{product['public_id']}").status_code == 404
        assert client.get(PRODUCTS).json()["data"] == []

    def test_soft_deleted_sku_stays_reserved(self, client):
        product = create_product(client, sku="KEEP-1")
        client.delete(f"{PRODUCTS}/{product['public_id']}")

        response = client.post(PRODUCTS, json={"name": "Again", "sku": "KEEP-1", "price": "1"})

        assert response.status_code == 409

    def test_stocked_product_cannot_be_deleted(self, client):
        warehouse = create_warehouse(client)
        product = create_product(client)
        stock(client, warehouse["id"], product["public_id"], 3)

        response = client.delete(f"{PRODUCTS}/{product['public_id']}")

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "PRODUCT_STOCKED"
        assert body["details"] == {"warehouse_id": warehouse["id"]}
        assert client.get(f"{PRODUCTS}/{product['public_id']}").status_code == 200


class TestHealth:
    def test_health_check(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
