"""
Reminder evaluation: the periodic sweep that pushes due reminders to LINE
"""
from datetime import timedelta
from enum import Enum
from typing import Callable, NamedTuple
from flask import current_app
from utils.helpers import utc_now, to_local, local_now, parse_event_time, local_time_on

MORNING_HOUR = 8
ONE_HOUR_LEAD = timedelta(hours=1)
EXACT_WINDOW = timedelta(minutes=10)

class TriggerKind(Enum):
    MORNING = 'morning'
    ONE_HOUR = 'one_hour'
    EXACT = 'exact'

class Trigger(NamedTuple):
    kind: TriggerKind
    flag_field: str
    enabled: Callable[[dict], bool]
    due: Callable  # (now, event_time, tz_name) -> bool
    template: str

def _morning_due(now, event_time, tz_name):
    event_day = to_local(event_time, tz_name).date()
    return now >= local_time_on(event_day, MORNING_HOUR, tz_name=tz_name)

def _one_hour_due(now, event_time, tz_name):
    return now >= event_time - ONE_HOUR_LEAD

def _exact_due(now, event_time, tz_name):
    # Reminders more than 10 minutes late are skipped, not caught up
    return timedelta(0) <= now - event_time < EXACT_WINDOW

TRIGGERS = (
    Trigger(TriggerKind.MORNING, 'morning_sent',
            lambda reminder: bool(reminder.get('morning')),
            _morning_due, "🌅 today's plan:\n{text}"),
    Trigger(TriggerKind.ONE_HOUR, 'one_hour_sent',
            lambda reminder: bool(reminder.get('one_hour')),
            _one_hour_due, "⏰ one hour left:\n{text}"),
    Trigger(TriggerKind.EXACT, 'exact_sent',
            lambda reminder: True,
            _exact_due, "🔔 time's up:\n{text}"),
)

class TickResult:
    """Counters for one evaluator tick"""

    def __init__(self, started_at):
        self.started_at = started_at
        self.fired = []  # (owner_key, reminder_id, TriggerKind)
        self.delivery_failures = 0
        self.flag_write_failures = 0
        self.identities_processed = 0
        self.identities_failed = []
        self.links_swept = 0

    @property
    def notifications_sent(self):
        return len(self.fired)

    def to_dict(self):
        return {
            'started_at': self.started_at.isoformat(),
            'notifications_sent': self.notifications_sent,
            'delivery_failures': self.delivery_failures,
            'flag_write_failures': self.flag_write_failures,
            'identities_processed': self.identities_processed,
            'identities_failed': list(self.identities_failed),
            'links_swept': self.links_swept
        }

class ReminderService:
    """Evaluates every reminder against the clock and sends what is due

    Each (reminder, trigger kind) pair fires at most once: the matching
    *_sent flag is written right after the push and is never reset.
    """

    def __init__(self, store, gateway, registry, tz_name='Asia/Tokyo'):
        self.store = store
        self.gateway = gateway
        self.registry = registry
        self.tz_name = tz_name

    def run_tick(self, now=None):
        """Run one sweep

        Args:
            now (datetime): Instant to evaluate at, defaults to the current time

        Returns:
            TickResult: What fired and what failed
        """
        instant = now or utc_now()
        result = TickResult(instant)

        result.links_swept = self.registry.sweep_expired(instant)

        local = local_now(self.tz_name, instant)
        reminders_by_owner = self.store.load_reminders()
        if not reminders_by_owner:
            return result
        links = self.store.load_links()

        for owner_key, reminders in reminders_by_owner.items():
            link = links.get(owner_key)
            if not link:
                continue

            try:
                self._process_owner(owner_key, reminders, link['line_user_id'], local, result)
                result.identities_processed += 1
            except Exception as e:
                result.identities_failed.append(owner_key)
                current_app.logger.error(f"Error processing reminders for {owner_key}: {e}")

        return result

    def _process_owner(self, owner_key, reminders, line_user_id, now, result):
        for reminder_id, reminder in reminders.items():
            event_time = parse_event_time(reminder.get('time_iso'), self.tz_name)

            for trigger in TRIGGERS:
                if reminder.get(trigger.flag_field) or not trigger.enabled(reminder):
                    continue
                if not trigger.due(now, event_time, self.tz_name):
                    continue
                self._fire(owner_key, reminder_id, reminder, trigger, line_user_id, result)

    def _fire(self, owner_key, reminder_id, reminder, trigger, line_user_id, result):
        message = trigger.template.format(text=reminder.get('text') or '')
        if not self.gateway.push(line_user_id, message):
            result.delivery_failures += 1
            current_app.logger.warning(
                f"Delivery failed for {owner_key}/{reminder_id} ({trigger.kind.value})"
            )
        result.fired.append((owner_key, reminder_id, trigger.kind))

        try:
            self.store.mark_sent(owner_key, reminder_id, trigger.flag_field)
        except Exception as e:
            result.flag_write_failures += 1
            current_app.logger.error(
                f"Could not persist {trigger.flag_field} for {owner_key}/{reminder_id}: {e}"
            )
