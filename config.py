import os
from dotenv import load_dotenv

load_dotenv()

def _env_flag(name, default):
    return os.getenv(name, default).lower() in ['true', '1', 'yes']

class Config:
    """Base configuration class"""
    SECRET_KEY = os.getenv('SECRET_KEY', "dev_key_change_in_production")

    # Store credential - required, the app refuses to start without it
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # LINE Messaging API
    LINE_CHANNEL_ACCESS_TOKEN = os.getenv('LINE_CHANNEL_ACCESS_TOKEN')
    LINE_CHANNEL_SECRET = os.getenv('LINE_CHANNEL_SECRET')

    # Gemini passthrough
    GEMINI_API_KEY = os.getenv('GEMINI_API_KEY')
    GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-2.0-flash')

    # Reminders
    REMINDER_TIMEZONE = os.getenv('REMINDER_TIMEZONE', 'Asia/Tokyo')
    REMINDER_INTERVAL_SECONDS = int(os.getenv('REMINDER_INTERVAL_SECONDS', 60))
    ENABLE_REMINDER_SCHEDULER = _env_flag('ENABLE_REMINDER_SCHEDULER', 'True')

    # Account linking
    LINK_CODE_TTL_SECONDS = int(os.getenv('LINK_CODE_TTL_SECONDS', 300))

    # Applies to every outbound HTTP call (LINE, Gemini)
    OUTBOUND_TIMEOUT_SECONDS = int(os.getenv('OUTBOUND_TIMEOUT_SECONDS', 10))

class DevelopmentConfig(Config):
    """Development configuration, only used when FLASK_CONFIG=development"""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///suzi_dev.db')

class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False

class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    ENABLE_REMINDER_SCHEDULER = False
    LINE_CHANNEL_ACCESS_TOKEN = 'test-access-token'
    LINE_CHANNEL_SECRET = 'test-channel-secret'
    GEMINI_API_KEY = 'test-gemini-key'

# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    # Without FLASK_CONFIG a missing DATABASE_URL must stop startup
    'default': ProductionConfig
}
