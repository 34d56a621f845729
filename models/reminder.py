from datetime import datetime, timezone
from . import db

class Reminder(db.Model):
    """A user reminder, keyed by sanitized owner identity then reminder id"""
    __tablename__ = 'reminders'
    __table_args__ = (
        db.UniqueConstraint('owner_key', 'reminder_id', name='uq_reminder_owner_id'),
    )
    
    id = db.Column(db.Integer, primary_key=True)
    owner_key = db.Column(db.String(255), nullable=False, index=True)  # sanitized email
    reminder_id = db.Column(db.String(100), nullable=False)
    text = db.Column(db.Text, nullable=False, default='')
    time_iso = db.Column(db.String(64), nullable=False)  # raw ISO-8601, parsed at evaluation time
    
    # Which trigger kinds apply
    morning = db.Column(db.Boolean, default=False, nullable=False)
    one_hour = db.Column(db.Boolean, default=False, nullable=False)
    
    # Set once by the reminder evaluator, never reset
    morning_sent = db.Column(db.Boolean, default=False, nullable=False)
    one_hour_sent = db.Column(db.Boolean, default=False, nullable=False)
    exact_sent = db.Column(db.Boolean, default=False, nullable=False)
    
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    
    def to_dict(self):
        return {
            'reminder_id': self.reminder_id,
            'text': self.text,
            'time_iso': self.time_iso,
            'morning': bool(self.morning),
            'one_hour': bool(self.one_hour),
            'morning_sent': bool(self.morning_sent),
            'one_hour_sent': bool(self.one_hour_sent),
            'exact_sent': bool(self.exact_sent)
        }
    
    def __repr__(self):
        return f'<Reminder {self.owner_key}/{self.reminder_id}>'
