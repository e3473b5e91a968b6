from apscheduler.schedulers.asyncio import AsyncIOScheduler
from app.core.db import AsyncSessionLocal
from app.core.config import EXPIRATION_ALERT_DAYS

from app.services.inventory.expiration_alert_service import log_expiration_alerts

scheduler = AsyncIOScheduler()

@scheduler.scheduled_job("cron", hour=0, minute=15)  # daily @ 00:15
async def expiration_alerts_job():
    async with AsyncSessionLocal() as db:
        await log_expiration_alerts(db, EXPIRATION_ALERT_DAYS)
