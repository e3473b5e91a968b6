import time
import uuid
import logging
from contextvars import ContextVar
from fastapi import Request

logger = logging.getLogger("access")

REQUEST_ID_HEADER = "X-Request-ID"

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


class RequestIdFilter(logging.Filter):
    """Stamps the current request id on every record emitted while serving it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_ctx.get() or "-"
        return True


def _log_access(request: Request, request_id: str, status_code: int, start_time: float) -> float:
    process_time = round((time.perf_counter() - start_time) * 1000, 2)

    # 5xx here means an invariant fault or an unhandled error
    log = logger.warning if status_code >= 500 else logger.info
    log(
        "",
        extra={
            "request_id": request_id,
            "client_addr": request.client.host if request.client else "unknown",
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "process_time_ms": process_time,
        },
    )
    return process_time


async def request_logging_middleware(request: Request, call_next):
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    token = request_id_ctx.set(request_id)
    start_time = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception:
        # The catch-all handler renders the 500 outside this middleware; the
        # request id stays set so its log record and response carry it.
        _log_access(request, request_id, 500, start_time)
        raise

    request_id_ctx.reset(token)

    process_time = _log_access(request, request_id, response.status_code, start_time)
    response.headers[REQUEST_ID_HEADER] = request_id
    response.headers["X-Process-Time-Ms"] = str(process_time)

    return response
