# library_app/tasks/scheduler.py
from __future__ import annotations

import atexit
import os

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from library_app.tasks.session_cleanup import run_session_cleanup_job


def start_scheduler(app):
    """
    Starts the expired-session purge job.
    - Disabled with SCHEDULER_ENABLED=0 (tests).
    - Debug reloader runs two processes; only the real one schedules.
    - Shuts down at interpreter exit.
    """
    if not app.config.get("SCHEDULER_ENABLED"):
        return None

    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        app.logger.info("[scheduler] Debug reloader secondary process: scheduler skipped.")
        return None

    scheduler = BackgroundScheduler(timezone="UTC")
    minutes = app.config["SESSION_PURGE_INTERVAL_MINUTES"]

    def _job_wrapper():
        try:
            run_session_cleanup_job(app)
        except Exception as ex:
            app.logger.exception(f"[scheduler] session_cleanup_job error: {ex}")

    scheduler.add_job(
        func=_job_wrapper,
        trigger=IntervalTrigger(minutes=minutes),
        id="session_cleanup_job",
        replace_existing=True,
        max_instances=1,        # never overlap
        coalesce=True,
        misfire_grace_time=120
    )

    scheduler.start()
    app.logger.info(f"[scheduler] Session cleanup job started (every {minutes} minutes).")

    app.extensions["apscheduler"] = scheduler

    def _shutdown():
        if scheduler.running:
            scheduler.shutdown(wait=False)
            app.logger.info("[scheduler] Scheduler shutdown.")

    atexit.register(_shutdown)
    return scheduler
