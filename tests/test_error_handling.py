"""Tests for the error envelope, request ids and constraint mapping."""

import logging

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

import app.routers.masters.category_router as category_router_module

from app.constants.error_codes import ErrorCode
from app.core.error_handlers import constraint_error_code
from app.core.logging import ExtraFieldsFormatter
from app.middleware.request_logging import RequestIdFilter
from main import app


def _integrity_error(message):
    return IntegrityError("INSERT ...", {}, Exception(message))


class TestErrorEnvelope:
    def test_not_found_envelope(self, client):
        response = client.get("/warehouses/404")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "Warehouse not found with ID: 404",
            "error_code": "WAREHOUSE_NOT_FOUND",
            "details": None,
        }

    def test_validation_envelope(self, client):
        response = client.post("/warehouses", json={"name": "No capacity"})

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "VALIDATION_ERROR"
        assert isinstance(body["details"], list)

    def test_unknown_route(self, client):
        response = client.get("/no/such/route")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"


class TestRequestId:
    def test_generated_when_missing(self, client):
        response = client.get("/")

        assert response.headers["X-Request-ID"]
        assert "X-Process-Time-Ms" in response.headers

    def test_echoes_caller_id(self, client):
        response = client.get("/", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"


class TestConstraintErrorCode:
    def test_sqlite_messages(self):
        assert (
            constraint_error_code(_integrity_error("UNIQUE constraint failed: warehouse_inventory.product_id"))
            == ErrorCode.INVENTORY_PRODUCT_ALREADY_STOCKED
        )
        assert (
            constraint_error_code(_integrity_error("UNIQUE constraint failed: products.sku"))
            == ErrorCode.PRODUCT_SKU_EXISTS
        )

    def test_postgres_constraint_name(self):
        error = _integrity_error(
            'duplicate key value violates unique constraint "ix_warehouses_name"'
        )

        assert constraint_error_code(error) == ErrorCode.WAREHOUSE_NAME_EXISTS

    def test_unknown_constraint(self):
        assert constraint_error_code(_integrity_error("CHECK constraint failed")) == ErrorCode.CONFLICT


class TestExtraFieldsFormatter:
    def test_extra_fields_are_appended(self):
        formatter = ExtraFieldsFormatter("%(levelname)s | %(message)s")
        record = logging.LogRecord("inventory", logging.INFO, __file__, 1, "Stocked product", (), None)
        record.warehouse_id = 3
        record.quantity = 50

        assert formatter.format(record) == "INFO | Stocked product | quantity=50 warehouse_id=3"


class _CollectingHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []
        self.addFilter(RequestIdFilter())

    def emit(self, record):
        self.records.append(record)


class TestUnhandledErrors:
    @pytest.fixture()
    def failing_client(self, monkeypatch):
        async def _boom(db):
            raise RuntimeError("database went away")

        monkeypatch.setattr(category_router_module, "list_categories", _boom)
        with TestClient(app, raise_server_exceptions=False) as c:
            yield c

    @pytest.fixture()
    def captured(self):
        handler = _CollectingHandler()
        loggers = [logging.getLogger("access"), logging.getLogger("app.core.error_handlers")]
        for log in loggers:
            log.addHandler(handler)
        yield handler.records
        for log in loggers:
            log.removeHandler(handler)

    def test_500_carries_request_id(self, failing_client):
        response = failing_client.get("/api/categories", headers={"X-Request-ID": "req-500"})

        assert response.status_code == 500
        assert response.json()["error_code"] == "INTERNAL_ERROR"
        assert response.headers["X-Request-ID"] == "req-500"

    def test_500_is_logged_with_request_id(self, failing_client, captured):
        failing_client.get("/api/categories", headers={"X-Request-ID": "req-501"})

        access = [r for r in captured if r.name == "access"]
        errors = [r for r in captured if r.name == "app.core.error_handlers"]
        assert [(r.status_code, r.request_id) for r in access] == [(500, "req-501")]
        assert [r.request_id for r in errors] == ["req-501"]
