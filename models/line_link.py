from datetime import datetime, timezone
from . import db

class LineLink(db.Model):
    """Link a sanitized email identity to a LINE user"""
    __tablename__ = 'line_links'
    
    id = db.Column(db.Integer, primary_key=True)
    owner_key = db.Column(db.String(255), nullable=False, unique=True)  # sanitized email
    line_user_id = db.Column(db.String(100), nullable=False)
    linked_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    
    def to_dict(self):
        return {
            'owner_key': self.owner_key,
            'line_user_id': self.line_user_id,
            'linked_at': self.linked_at.isoformat() if self.linked_at else None
        }
