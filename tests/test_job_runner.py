from datetime import timedelta
from types import SimpleNamespace

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED, EVENT_JOB_MAX_INSTANCES
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from scheduler.JobRunner import JobRunner, run_signal_cycle_job
from scheduler.SchedulerConstants import JobIds


class FakeSignalScheduler:
    def __init__(self, error=None):
        self.error = error
        self.cycles = 0

    def runCycle(self):
        self.cycles += 1
        if self.error:
            raise self.error


def test_interval_trigger_by_default(config):
    jobRunner = JobRunner(config, FakeSignalScheduler())

    job = jobRunner.scheduler.get_job(JobIds.SIGNAL_CYCLE)

    assert isinstance(job.trigger, IntervalTrigger)
    assert job.trigger.interval == timedelta(minutes=5)
    assert job.next_run_time is not None
    assert not jobRunner.scheduler.running


def test_cron_trigger_when_aligned(configFactory):
    jobRunner = JobRunner(configFactory(POLL_INTERVAL_MINUTES=5, POLL_ALIGN_SECOND=10), FakeSignalScheduler())

    trigger = jobRunner.scheduler.get_job(JobIds.SIGNAL_CYCLE).trigger

    assert isinstance(trigger, CronTrigger)
    assert "minute='*/5'" in str(trigger)
    assert "second='10'" in str(trigger)


def test_single_job_registered(config):
    jobRunner = JobRunner(config, FakeSignalScheduler())

    assert [job.id for job in jobRunner.scheduler.get_jobs()] == [JobIds.SIGNAL_CYCLE]


def test_job_runs_cycle():
    signalScheduler = FakeSignalScheduler()
    run_signal_cycle_job(signalScheduler)
    assert signalScheduler.cycles == 1


def test_job_swallows_cycle_errors():
    signalScheduler = FakeSignalScheduler(error=RuntimeError('boom'))
    run_signal_cycle_job(signalScheduler)
    run_signal_cycle_job(signalScheduler)
    assert signalScheduler.cycles == 2


def test_listener_handles_every_event(config, caplog):
    jobRunner = JobRunner(config, FakeSignalScheduler())

    jobRunner._job_listener(SimpleNamespace(job_id='x', code=EVENT_JOB_MAX_INSTANCES, exception=None))
    jobRunner._job_listener(SimpleNamespace(job_id='x', code=EVENT_JOB_ERROR, exception=RuntimeError('boom')))
    jobRunner._job_listener(SimpleNamespace(job_id='x', code=EVENT_JOB_EXECUTED, exception=None))

    messages = [record.getMessage() for record in caplog.records]
    assert 'Job x skipped: previous run still in progress' in messages
    assert 'Job x failed: boom' in messages


def test_shutdown_before_start_is_noop(config):
    jobRunner = JobRunner(config, FakeSignalScheduler())
    jobRunner.shutdown()
    assert not jobRunner.scheduler.running


def test_every_valid_aligned_interval_builds_a_cron_trigger(configFactory):
    for interval in (1, 2, 3, 4, 5, 6, 10, 12, 15, 20, 30, 60):
        config = configFactory(POLL_INTERVAL_MINUTES=interval, POLL_ALIGN_SECOND=5)
        config.validate()
        assert isinstance(JobRunner(config, FakeSignalScheduler()).build_trigger(), CronTrigger)
