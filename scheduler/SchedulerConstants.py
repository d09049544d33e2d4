"""
SchedulerConstants - Constants for scheduler operations
"""


class SchedulerDefaults:
    """Fetch sizes and job settings"""
    # Covers a few missed ticks without a reseed
    INCREMENTAL_FETCH_LIMIT = 10
    # The live (unconfirmed) candle is dropped from every response
    SEED_FETCH_EXTRA = 1
    MISFIRE_GRACE_SECONDS = 60


class JobIds:
    """Constants for scheduled job identifiers"""
    SIGNAL_CYCLE = 'signal_cycle'
