from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.utils.response import error_response
from app.middleware.request_logging import REQUEST_ID_HEADER, request_id_ctx
import logging

logger = logging.getLogger(__name__)


# -------------------------
# APP EXCEPTIONS
# -------------------------
async def app_exception_handler(request: Request, exc: AppException):
    if exc.status_code >= 500:
        # stored capacity disagrees with inventory rows; needs an operator
        logger.error(
            "Inventory invariant violated",
            extra={
                "path": request.url.path,
                "method": request.method,
                "error_code": exc.error_code.value,
                "details": exc.details,
            },
        )

    return error_response(exc.status_code, exc.detail, exc.error_code, exc.details)


# -------------------------
# FASTAPI VALIDATION
# -------------------------
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    return error_response(
        422,
        "Invalid request data",
        ErrorCode.VALIDATION_ERROR,
        jsonable_encoder(exc.errors()),
    )


# -------------------------
# HTTP EXCEPTIONS (mapped)
# -------------------------
HTTP_STATUS_TO_ERROR_CODE = {
    400: ErrorCode.VALIDATION_ERROR,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.VALIDATION_ERROR,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION_ERROR,
}


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
):
    error_code = HTTP_STATUS_TO_ERROR_CODE.get(
        exc.status_code,
        ErrorCode.INTERNAL_ERROR,
    )
    return error_response(exc.status_code, exc.detail, error_code)


# -------------------------
# DB INTEGRITY ERRORS
# -------------------------
# Fragments of constraint names / columns as they appear in driver messages
# (SQLite reports "table.column", Postgres reports the constraint name).
CONSTRAINT_ERROR_CODES = (
    ("warehouse_inventory", ErrorCode.INVENTORY_PRODUCT_ALREADY_STOCKED),
    ("warehouses.name", ErrorCode.WAREHOUSE_NAME_EXISTS),
    ("warehouses_name", ErrorCode.WAREHOUSE_NAME_EXISTS),
    ("products.sku", ErrorCode.PRODUCT_SKU_EXISTS),
    ("products_sku", ErrorCode.PRODUCT_SKU_EXISTS),
    ("categories.name", ErrorCode.CATEGORY_NAME_EXISTS),
    ("categories_name", ErrorCode.CATEGORY_NAME_EXISTS),
)


def constraint_error_code(exc: IntegrityError) -> ErrorCode:
    message = str(exc.orig).lower()
    for fragment, code in CONSTRAINT_ERROR_CODES:
        if fragment in message:
            return code
    return ErrorCode.CONFLICT


async def integrity_error_handler(
    request: Request, exc: IntegrityError
):
    error_code = constraint_error_code(exc)
    logger.warning(
        "DB integrity error",
        extra={"path": request.url.path, "error_code": error_code.value},
    )
    return error_response(409, "Database constraint violation", error_code)


# -------------------------
# LAST RESORT
# -------------------------
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )
    response = error_response(
        500,
        "Something went wrong. Please try again.",
        ErrorCode.INTERNAL_ERROR,
    )

    request_id = request_id_ctx.get()
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response
