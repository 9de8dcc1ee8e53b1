import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from railops.core.config import Settings
from railops.core.metrics import record_job_run
from railops.services.dashboard import DashboardService
from railops.services.response_cache import ResponseCache

logger = logging.getLogger(__name__)

SYNC_JOB_ID = "train_registry_sync"
SWEEP_JOB_ID = "response_cache_sweep"


class TrainSyncScheduler:
    """Runs the periodic registry resync and response cache sweep.

    The two jobs are independent of each other and of request handling.
    Each job body is a failure boundary: errors are logged and counted and
    the job keeps its schedule.
    """

    def __init__(
        self,
        settings: Settings,
        dashboard: DashboardService,
        cache: ResponseCache,
    ):
        self.settings = settings
        self.dashboard = dashboard
        self.cache = cache
        self.scheduler = AsyncIOScheduler()
        self._setup_jobs()

    def _setup_jobs(self):
        """Setup scheduled jobs."""
        self.scheduler.add_job(
            func=self._sync_registry,
            trigger=IntervalTrigger(seconds=self.settings.train_sync_interval_seconds),
            id=SYNC_JOB_ID,
            name="Resync train registry",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self.scheduler.add_job(
            func=self._sweep_cache,
            trigger=IntervalTrigger(seconds=self.settings.cache_sweep_interval_seconds),
            id=SWEEP_JOB_ID,
            name="Clear response cache",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

    async def start(self):
        """Start the scheduler."""
        logger.info("Starting train sync scheduler")
        self.scheduler.start()

    async def stop(self):
        """Stop the scheduler."""
        logger.info("Stopping train sync scheduler")
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)

    async def _sync_registry(self):
        """Merge a provider refresh into the registry."""
        try:
            synced = await self.dashboard.sync_trains()
        except Exception:
            logger.exception("Scheduled train sync failed")
            record_job_run(SYNC_JOB_ID, "error")
            return
        record_job_run(SYNC_JOB_ID, "success" if synced else "fallback")

    async def _sweep_cache(self):
        """Drop every cached response."""
        try:
            dropped = await self.cache.clear()
        except Exception:
            logger.exception("Scheduled cache sweep failed")
            record_job_run(SWEEP_JOB_ID, "error")
            return
        logger.info("Response cache sweep removed %s entries", dropped)
        record_job_run(SWEEP_JOB_ID, "success")

    def get_job_info(self) -> dict:
        """Get information about scheduled jobs."""
        jobs = []
        for job in self.scheduler.get_jobs():
            jobs.append(
                {
                    "id": job.id,
                    "name": job.name,
                    "next_run": (
                        job.next_run_time.isoformat()
                        if getattr(job, "next_run_time", None)
                        else None
                    ),
                    "trigger": str(job.trigger),
                }
            )

        return {
            "scheduler_running": self.scheduler.running,
            "jobs": jobs,
        }
