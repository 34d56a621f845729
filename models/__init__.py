from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

# Import all models to ensure they're registered
from .reminder import Reminder
from .line_link import LineLink

__all__ = ['db', 'Reminder', 'LineLink']
