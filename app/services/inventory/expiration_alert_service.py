from sqlalchemy.ext.asyncio import AsyncSession

from app.services.inventory.warehouse_inventory_service import summarize_expirations
from app.utils.logger import get_logger

logger = get_logger(__name__)


async def log_expiration_alerts(db: AsyncSession, days: int) -> dict:
    summary = await summarize_expirations(db, days)

    if summary["expired"]:
        logger.warning(
            "Expired inventory on hand",
            extra={"expired": summary["expired"], "window_days": days},
        )

    logger.info(
        "Expiration sweep finished",
        extra={
            "expired": summary["expired"],
            "expiring": summary["expiring"],
            "window_days": days,
        },
    )

    return summary
