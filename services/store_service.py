"""
Persistence for reminders and LINE links
"""
from datetime import datetime, timezone
from sqlalchemy import text
from models import db, Reminder, LineLink

SENT_FLAGS = ('morning_sent', 'one_hour_sent', 'exact_sent')

class ReminderStore:
    """Store access used by the reminder evaluator and the linking flow

    Loads return plain dict snapshots so callers never hold live ORM rows
    across commits.
    """

    def ping(self):
        """Raise if the database does not answer"""
        db.session.execute(text('SELECT 1'))

    def load_reminders(self):
        """Snapshot of every reminder, grouped by owner

        Returns:
            dict: {owner_key: {reminder_id: reminder_dict}}
        """
        grouped = {}
        for reminder in Reminder.query.order_by(Reminder.owner_key, Reminder.id).all():
            grouped.setdefault(reminder.owner_key, {})[reminder.reminder_id] = reminder.to_dict()
        return grouped

    def load_links(self):
        """Snapshot of every LINE link, keyed by owner"""
        return {link.owner_key: link.to_dict() for link in LineLink.query.all()}

    def save_link(self, owner_key, line_user_id, linked_at=None):
        """Create or replace the link for an identity"""
        linked_at = linked_at or datetime.now(timezone.utc)

        try:
            link = LineLink.query.filter_by(owner_key=owner_key).first()
            if link:
                link.line_user_id = line_user_id
                link.linked_at = linked_at
            else:
                link = LineLink(owner_key=owner_key, line_user_id=line_user_id, linked_at=linked_at)
                db.session.add(link)

            db.session.commit()
            return link.to_dict()
        except Exception:
            db.session.rollback()
            raise

    def mark_sent(self, owner_key, reminder_id, flag_field):
        """Flip one *_sent flag from false to true

        The update only matches rows where the flag is still false, so a
        flag is never reset.

        Returns:
            bool: True if this call changed the flag
        """
        if flag_field not in SENT_FLAGS:
            raise ValueError(f"Unknown sent flag: {flag_field}")

        column = getattr(Reminder, flag_field)
        try:
            updated = Reminder.query.filter(
                Reminder.owner_key == owner_key,
                Reminder.reminder_id == reminder_id,
                column.is_(False)
            ).update({flag_field: True}, synchronize_session=False)
            db.session.commit()
            return updated > 0
        except Exception:
            db.session.rollback()
            raise

# Global store instance
reminder_store = ReminderStore()
