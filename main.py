"""
BSC EMA bullish alignment monitor - process entry point

Validates configuration, then runs a detection cycle immediately and every
POLL_INTERVAL_MINUTES until SIGINT/SIGTERM.
"""

import argparse
import signal
import sys

from dotenv import find_dotenv, load_dotenv

from config.Config import get_config
from logs.logger import configure_logging, get_logger
from notification.NotificationManager import NotificationService
from scheduler.JobRunner import JobRunner
from scheduler.SignalScheduler import SignalScheduler
from services.OKXDexServiceHandler import OKXDexServiceHandler
from utils.Exceptions import ConfigurationError

logger = get_logger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Monitor BSC tokens for EMA21/55/144 bullish alignment")
    parser.add_argument("--once", action="store_true", help="run a single cycle and exit")
    parser.add_argument("--log-level", default=None, help="override LOG_LEVEL")
    return parser.parse_args(argv)


def build_signal_scheduler(config) -> SignalScheduler:
    marketDataService = OKXDexServiceHandler(config)
    notificationService = NotificationService(config.TELEGRAM_BOT_TOKEN, timeout=config.REQUEST_TIMEOUT_SECONDS)
    return SignalScheduler(config, marketDataService, notificationService)


def main(argv=None) -> int:
    args = parse_args(argv)
    # .env must be loaded before LOG_LEVEL / LOG_FILE are read
    load_dotenv(find_dotenv(usecwd=True))
    configure_logging(level=args.log_level)

    config = get_config()
    try:
        config.validate()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    logger.info("=== Starting EMA bullish alignment monitor ===")
    signalScheduler = build_signal_scheduler(config)

    if args.once:
        signalScheduler.runCycle()
        return 0

    jobRunner = JobRunner(config, signalScheduler)

    def handle_shutdown(signum, frame):
        logger.info(f"Received signal {signum}, stopping monitor")
        jobRunner.shutdown()

    signal.signal(signal.SIGINT, handle_shutdown)
    signal.signal(signal.SIGTERM, handle_shutdown)

    jobRunner.start()
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
