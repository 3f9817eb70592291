"""Background scheduler for periodic EOL report exports."""

import logging

from apscheduler.schedulers.background import BackgroundScheduler

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler(daemon=True)


def init_scheduler(app):
    """Initialize and start the background scheduler."""
    from config.settings import EXPORT_INTERVAL_HOURS

    if scheduler.running:
        return

    scheduler.add_job(
        func=run_scheduled_export,
        args=[app],
        trigger="interval",
        hours=EXPORT_INTERVAL_HOURS,
        id="eol_report_export",
        replace_existing=True,
    )

    scheduler.start()
    logger.info("Scheduler started: EOL report export every %d hour(s)", EXPORT_INTERVAL_HOURS)


def run_scheduled_export(app):
    """Build the EOL report and write today's CSV to the daily reports directory."""
    logger.info("Running scheduled EOL report export...")

    with app.app_context():
        try:
            from web.services import get_daily_reports_dir, get_report_generator

            path = get_report_generator().export_csv(str(get_daily_reports_dir()))
            logger.info("EOL report exported to %s", path)
            return path
        except Exception:
            logger.exception("Scheduled EOL report export failed")
            return None
