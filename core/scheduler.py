import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from core.schemas import UserSettings

# Setup logging
logger = logging.getLogger("scheduler")

JOB_ID = "history_auto_clear"

TRIGGERS = {
    "daily": lambda: CronTrigger(hour=0, minute=0),
    "weekly": lambda: CronTrigger(day_of_week="mon", hour=0, minute=0),
}


class HistoryRetentionService:
    """Enforces UserSettings.autoClearHistory against a HistoryStore.

    daily/weekly become cron jobs, "exit" clears on shutdown, "never" does nothing.
    Call sync() whenever the settings object is replaced or reset.
    """

    def __init__(self, history, scheduler: Optional[AsyncIOScheduler] = None):
        self.history = history
        self.scheduler = scheduler or AsyncIOScheduler()
        self.policy = "never"
        self.initialized = False

    def initialize(self, settings: UserSettings):
        if self.initialized:
            return
        self.scheduler.start()
        self.initialized = True
        logger.info("✅ History retention service started")
        self.sync(settings)

    def sync(self, settings: UserSettings):
        policy = settings.autoClearHistory
        if self.scheduler.get_job(JOB_ID):
            self.scheduler.remove_job(JOB_ID)

        make_trigger = TRIGGERS.get(policy)
        if make_trigger is not None:
            self.scheduler.add_job(
                self.clear_history,
                make_trigger(),
                id=JOB_ID,
                name=f"Auto-clear history ({policy})",
                replace_existing=True,
            )
            logger.info(f"⏰ History auto-clear scheduled: {policy}")
        self.policy = policy

    async def clear_history(self):
        # Runs on the event loop, alongside the request handlers that mutate history
        self._clear_now()

    def _clear_now(self):
        logger.info(f"⏰ Auto-clearing history (policy: {self.policy})")
        self.history.clear()

    def shutdown(self):
        if self.policy == "exit":
            self._clear_now()
        if self.initialized:
            self.scheduler.shutdown(wait=False)
            self.initialized = False
