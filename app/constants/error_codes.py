# app/constants/error_codes.py

from enum import Enum


class ErrorCode(str, Enum):
    # Generic
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Warehouses
    WAREHOUSE_NOT_FOUND = "WAREHOUSE_NOT_FOUND"
    WAREHOUSE_NAME_EXISTS = "WAREHOUSE_NAME_EXISTS"
    WAREHOUSE_NOT_EMPTY = "WAREHOUSE_NOT_EMPTY"
    WAREHOUSE_CAPACITY_EXCEEDED = "WAREHOUSE_CAPACITY_EXCEEDED"
    WAREHOUSE_CAPACITY_BELOW_USAGE = "WAREHOUSE_CAPACITY_BELOW_USAGE"

    # Products
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    PRODUCT_SKU_EXISTS = "PRODUCT_SKU_EXISTS"
    PRODUCT_STOCKED = "PRODUCT_STOCKED"

    # Categories
    CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
    CATEGORY_NAME_EXISTS = "CATEGORY_NAME_EXISTS"

    # Inventory
    INVENTORY_NOT_FOUND = "INVENTORY_NOT_FOUND"
    INVENTORY_PRODUCT_ALREADY_STOCKED = "INVENTORY_PRODUCT_ALREADY_STOCKED"
    INVENTORY_INVALID_QUANTITY = "INVENTORY_INVALID_QUANTITY"
    INVENTORY_INVARIANT_VIOLATION = "INVENTORY_INVARIANT_VIOLATION"
    TRANSFER_SAME_WAREHOUSE = "TRANSFER_SAME_WAREHOUSE"
    INVALID_ALERT_DAYS = "INVALID_ALERT_DAYS"
