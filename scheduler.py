"""
Masterpiece collection – Daily Scheduler.

Regenerates data.json once per day using the schedule library.
Alternative to cron for environments where cron isn't available.

Usage:
    python scheduler.py

Configuration:
    - DATA_RUN_TIME: Time to run daily (HH:MM format, 24-hour), default 06:00
    - LIMIT: Number of results requested (see generate_data.py)
"""

import logging
import os
import time
from datetime import datetime

import schedule
from dotenv import load_dotenv

from generate_data import generate

load_dotenv()
logger = logging.getLogger(__name__)

RUN_TIME = os.getenv("DATA_RUN_TIME", "06:00")


def daily_job() -> bool:
    """Run one regeneration; failures are logged so the schedule keeps running."""
    logger.info(f"Daily job started: {datetime.now().isoformat()}")
    try:
        count = generate()
    except Exception:
        logger.exception("Regeneration failed. Keeping previous data.json.")
        return False
    logger.info(f"Daily job completed successfully ({count} items).")
    return True


def run_now_and_schedule():
    """Run immediately, then schedule for daily execution."""
    logger.info(f"Scheduler started at {datetime.now().isoformat()}")
    logger.info(f"Scheduled to run daily at {RUN_TIME}")

    daily_job()

    schedule.every().day.at(RUN_TIME).do(daily_job)

    logger.info(f"Scheduler active. Next run at {RUN_TIME} daily. Press Ctrl+C to stop.")

    while True:
        schedule.run_pending()
        time.sleep(60)


def main():
    """Entry point for the scheduler."""
    logging.basicConfig(level=logging.INFO)
    try:
        run_now_and_schedule()
    except KeyboardInterrupt:
        logger.info("Scheduler stopped.")


if __name__ == "__main__":
    main()
