"""
Courseware Background Scheduler

Runs periodic tasks:
- Delete stale and undersized files from the uploads directory

Only starts when ENABLE_SCHEDULER=true to prevent running on multiple instances.
"""

import os
import logging

from apscheduler.schedulers.background import BackgroundScheduler

from maintenance import cleanup_uploads

logger = logging.getLogger(__name__)


def _cleanup_uploads(app):
    """Apply the upload retention policy from the app config."""
    with app.app_context():
        cleanup_uploads(
            app.config['UPLOAD_FOLDER'],
            max_age_days=app.config['UPLOAD_MAX_AGE_DAYS'],
            min_size_bytes=app.config['UPLOAD_MIN_SIZE_BYTES'],
        )


def init_scheduler(app):
    """Initialize and start the background scheduler.

    Only runs if ENABLE_SCHEDULER=true env var is set.
    """
    if os.environ.get("ENABLE_SCHEDULER", "").lower() != "true":
        logger.info("Scheduler disabled (set ENABLE_SCHEDULER=true to enable)")
        return None

    scheduler = BackgroundScheduler(daemon=True)

    scheduler.add_job(
        _cleanup_uploads,
        "interval",
        hours=app.config['UPLOAD_CLEANUP_INTERVAL_HOURS'],
        args=[app],
        id="cleanup_uploads",
        name="Delete stale uploads",
    )

    scheduler.start()
    logger.info("Background scheduler started with 1 job")
    return scheduler
