"""Tests for warehouse administration endpoints."""

from tests.factories import create_product, create_warehouse, get_warehouse, stock


class TestCreateWarehouse:
    def test_create_starts_empty(self, client):
        data = create_warehouse(client, name="Central", max_capacity=250, location="Zone A")

        assert data["name"] == "Central"
        assert data["location"] == "Zone A"
        assert data["max_capacity"] == 250
        assert data["current_capacity"] == 0
        assert data["available_capacity"] == 250

    def test_duplicate_name(self, client):
        create_warehouse(client, name="Central")

        response = client.post(
            "/warehouses",
            json={"name": "Central", "location": "Elsewhere", "max_capacity": 10},
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "WAREHOUSE_NAME_EXISTS"

    def test_max_capacity_must_be_positive(self, client):
        response = client.post(
            "/warehouses",
            json={"name": "Tiny", "location": "Nowhere", "max_capacity": 0},
        )

        assert response.status_code == 422

    def test_list_in_creation_order(self, client):
        first = create_warehouse(client)
        second = create_warehouse(client)

        response = client.get("/warehouses")

        assert response.status_code == 200
        assert [w["id"] for w in response.json()["data"]] == [first["id"], second["id"]]


class TestUpdateWarehouse:
    def test_put_replaces_fields(self, client):
        warehouse = create_warehouse(client)

        response = client.put(
            f"/warehouses/{warehouse['id']}",
            json={"name": "Renamed", "location": "Zone B", "max_capacity": 80},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Renamed"
        assert data["location"] == "Zone B"
        assert data["max_capacity"] == 80

    def test_patch_changes_only_given_fields(self, client):
        warehouse = create_warehouse(client, location="Zone A", max_capacity=60)

        response = client.patch(f"/warehouses/{warehouse['id']}", json={"location": "Zone C"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["location"] == "Zone C"
        assert data["name"] == warehouse["name"]
        assert data["max_capacity"] == 60

    def test_empty_patch(self, client):
        warehouse = create_warehouse(client)

        response = client.patch(f"/warehouses/{warehouse['id']}", json={})

        assert response.status_code == 400

    def test_patch_rejects_null_fields(self, client):
        warehouse = create_warehouse(client, name="Keep", max_capacity=70)

        response = client.patch(
            f"/warehouses/{warehouse['id']}",
            json={"name": None, "max_capacity": None},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"] == {"fields": ["max_capacity", "name"]}
        unchanged = get_warehouse(client, warehouse["id"])
        assert unchanged["name"] == "Keep"
        assert unchanged["max_capacity"] == 70

    def test_max_capacity_below_usage(self, client):
        warehouse = create_warehouse(client, max_capacity=100)
        stock(client, warehouse["id"], create_product(client)["public_id"], 60)

        response = client.patch(f"/warehouses/{warehouse['id']}", json={"max_capacity": 50})

        assert response.status_code == 409
        assert response.json()["error_code"] == "WAREHOUSE_CAPACITY_BELOW_USAGE"
        assert get_warehouse(client, warehouse["id"])["max_capacity"] == 100

    def test_max_capacity_can_shrink_to_usage(self, client):
        warehouse = create_warehouse(client, max_capacity=100)
        stock(client, warehouse["id"], create_product(client)["public_id"], 60)

        response = client.patch(f"/warehouses/{warehouse['id']}", json={"max_capacity": 60})

        assert response.status_code == 200
        assert response.json()["data"]["available_capacity"] == 0

    def test_rename_to_existing_name(self, client):
        create_warehouse(client, name="Taken")
        warehouse = create_warehouse(client)

        response = client.patch(f"/warehouses/{warehouse['id']}", json={"name": "Taken"})

        assert response.status_code == 409
        assert response.json()["error_code"] == "WAREHOUSE_NAME_EXISTS"


class TestDeleteWarehouse:
    def test_delete_empty_warehouse(self, client):
        warehouse = create_warehouse(client)

        assert client.delete(f"/warehouses/{warehouse['id']}").status_code == 200
        assert client.get(f"/warehouses/{warehouse['id']}").status_code == 404

    def test_delete_stocked_warehouse(self, client):
        warehouse = create_warehouse(client)
        stock(client, warehouse["id"], create_product(client)["public_id"], 1)

        response = client.delete(f"/warehouses/{warehouse['id']}")

        assert response.status_code == 409
        assert response.json()["error_code"] == "WAREHOUSE_NOT_EMPTY"

    def test_unknown_warehouse(self, client):
        response = client.get("/warehouses/321")

        assert response.status_code == 404
        assert response.json()["error_code"] == "WAREHOUSE_NOT_FOUND"
