"""
Background scheduler driving the reminder evaluator
"""
import schedule
import time
import threading
from datetime import datetime, timezone

class ReminderScheduler:
    """Runs the reminder tick on a fixed cadence in a daemon thread

    Jobs registered on one schedule.Scheduler run one after the other in
    the polling thread, so a tick never starts before the previous one has
    finished. The tick lock also keeps manual triggers from overlapping it.
    """

    def __init__(self):
        self.running = False
        self.job_thread = None
        self.app = None
        self.reminder_service = None
        self.interval_seconds = 60
        self.last_run = None
        self.last_result = None
        self._scheduler = schedule.Scheduler()
        self._tick_lock = threading.Lock()

    def init_app(self, app, reminder_service):
        self.app = app
        self.reminder_service = reminder_service
        self.interval_seconds = app.config.get('REMINDER_INTERVAL_SECONDS', 60)

    def start(self):
        """Start the scheduler; call only once the store is reachable"""
        if self.running:
            return

        self.running = True

        self._scheduler.clear()
        self._scheduler.every(self.interval_seconds).seconds.do(self.trigger_now)

        self.job_thread = threading.Thread(target=self._run_scheduler, name='reminder-scheduler', daemon=True)
        self.job_thread.start()

        self.app.logger.info(f"🕐 Reminder scheduler started (every {self.interval_seconds}s)")

    def stop(self):
        """Stop the scheduler"""
        self.running = False
        if self.job_thread:
            self.job_thread.join(timeout=5)
        self._scheduler.clear()
        if self.app:
            self.app.logger.info("🛑 Reminder scheduler stopped")

    def _run_scheduler(self):
        """Poll for due jobs until stopped"""
        while self.running:
            try:
                self._scheduler.run_pending()
            except Exception as e:
                self.app.logger.error(f"Error in reminder scheduler: {e}")
            time.sleep(1)

    def trigger_now(self, now=None):
        """Run one tick inside an application context

        Returns:
            TickResult or None: None if another tick is still running
        """
        if not self._tick_lock.acquire(blocking=False):
            self.app.logger.warning("Reminder tick skipped, previous tick still running")
            return None

        try:
            with self.app.app_context():
                self.app.logger.info("⏰ Reminder check started")
                result = self.reminder_service.run_tick(now)
                self.last_run = datetime.now(timezone.utc)
                self.last_result = result
                self.app.logger.info(
                    f"⏰ Reminder check done: {result.notifications_sent} sent, "
                    f"{len(result.identities_failed)} identities failed, {result.links_swept} codes expired"
                )
                return result
        except Exception as e:
            self.app.logger.error(f"Error in reminder tick: {e}")
            return None
        finally:
            self._tick_lock.release()

    def get_status(self):
        """Get status of the scheduler"""
        return {
            'running': self.running,
            'interval_seconds': self.interval_seconds,
            'last_run': self.last_run.isoformat() if self.last_run else None,
            'last_result': self.last_result.to_dict() if self.last_result else None,
            'next_run': str(self._scheduler.next_run) if self._scheduler.jobs else None
        }

# Global scheduler instance
reminder_scheduler = ReminderScheduler()
