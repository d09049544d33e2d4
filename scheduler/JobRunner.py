"""
Job Runner Module

Manages the periodic detection job using APScheduler. A single job drives
every cycle; it never overlaps with itself (max_instances=1) and missed
runs are collapsed into one (coalesce=True).
"""

from datetime import datetime

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED, EVENT_JOB_MAX_INSTANCES
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from config.Config import Config
from logs.logger import get_logger
from scheduler.SchedulerConstants import JobIds, SchedulerDefaults
from scheduler.SignalScheduler import SignalScheduler

logger = get_logger(__name__)


def run_signal_cycle_job(signalScheduler: SignalScheduler):
    """Run one detection cycle; unexpected errors are logged so later ticks still run."""
    try:
        signalScheduler.runCycle()
    except Exception as e:
        logger.error(f"Signal cycle failed: {e}", exc_info=True)


class JobRunner:
    """
    Manages APScheduler for the detection job.

    Features:
    - Interval trigger every POLL_INTERVAL_MINUTES, or a cron trigger aligned to
      POLL_ALIGN_SECOND of every POLL_INTERVAL_MINUTES-th minute
    - First run immediately on start
    - Job execution monitoring and logging
    """

    def __init__(self, config: Config, signalScheduler: SignalScheduler):
        self.config = config
        self.signalScheduler = signalScheduler
        self.scheduler = BlockingScheduler(job_defaults={
            'coalesce': True,
            'max_instances': 1,
            'misfire_grace_time': SchedulerDefaults.MISFIRE_GRACE_SECONDS
        })
        self.scheduler.add_listener(self._job_listener, EVENT_JOB_ERROR | EVENT_JOB_EXECUTED | EVENT_JOB_MAX_INSTANCES)
        self.setup_jobs()
        logger.info("JobRunner initialized")

    def build_trigger(self):
        if self.config.isAlignedSchedule:
            interval = self.config.POLL_INTERVAL_MINUTES
            # cron steps cannot exceed 59; hourly runs at minute 0
            minute = "0" if interval == 60 else f"*/{interval}"
            return CronTrigger(minute=minute, second=self.config.POLL_ALIGN_SECOND)
        return IntervalTrigger(minutes=self.config.POLL_INTERVAL_MINUTES)

    def setup_jobs(self):
        trigger = self.build_trigger()
        self.scheduler.add_job(
            func=run_signal_cycle_job,
            trigger=trigger,
            args=[self.signalScheduler],
            id=JobIds.SIGNAL_CYCLE,
            name=JobIds.SIGNAL_CYCLE.replace("_", " ").title(),
            next_run_time=datetime.now(trigger.timezone),
            replace_existing=True,
        )
        logger.info(f"Added job: {JobIds.SIGNAL_CYCLE} ({trigger})")

    def _job_listener(self, event):
        """Log job execution events."""
        job_id = event.job_id
        if event.code == EVENT_JOB_MAX_INSTANCES:
            logger.warning(f"Job {job_id} skipped: previous run still in progress")
        elif event.exception:
            logger.error(f"Job {job_id} failed: {event.exception}")
        else:
            logger.debug(f"Job {job_id} succeeded")

    def start(self):
        """Start the scheduler. Blocks until shutdown() is called."""
        if not self.scheduler.running:
            logger.info("Scheduler started")
            self.scheduler.start()

    def shutdown(self):
        """Shutdown the scheduler without waiting for the running cycle."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Scheduler stopped")
