from fastapi import HTTPException
from app.constants.error_codes import ErrorCode


class AppException(HTTPException):
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.error_code = error_code
        self.details = details


class InventoryInvariantError(AppException):
    """Stored capacity figures disagree with the inventory rows. Never user-correctable."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            500,
            message,
            ErrorCode.INVENTORY_INVARIANT_VIOLATION,
            details,
        )
