import pytz
from datetime import datetime, time, timezone

DEFAULT_TIMEZONE = 'Asia/Tokyo'

def get_timezone(tz_name=None):
    """Return the pytz timezone for a name, defaulting to the reminder timezone"""
    return pytz.timezone(tz_name or DEFAULT_TIMEZONE)

def utc_now():
    """Current instant as an aware UTC datetime"""
    return datetime.now(timezone.utc)

def to_local(instant, tz_name=None):
    """Convert an instant to civil time in the given timezone
    
    Naive datetimes are taken to be UTC.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(get_timezone(tz_name))

def local_now(tz_name=None, instant=None):
    """Civil time in the given timezone, independent of the host's local zone
    
    Args:
        tz_name (str): Timezone identifier, e.g. 'Asia/Tokyo'
        instant (datetime): Instant to convert, defaults to now
        
    Returns:
        datetime: Aware datetime in the requested timezone
    """
    return to_local(instant or utc_now(), tz_name)

def parse_event_time(value, tz_name=None):
    """Parse an ISO-8601 reminder time into an aware datetime
    
    A trailing 'Z' means UTC. Values without an offset are interpreted
    as civil time in the reminder timezone.
    
    Raises:
        ValueError: if the value is not a usable ISO-8601 string
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid reminder time: {value!r}")
    
    parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        return get_timezone(tz_name).localize(parsed)
    return parsed

def local_time_on(day, hour, minute=0, tz_name=None):
    """Aware datetime for a civil date at a given wall-clock time"""
    return get_timezone(tz_name).localize(datetime.combine(day, time(hour, minute)))

def sanitize_identity(identity):
    """Make an identity safe as a store key segment ('.' -> '_')"""
    if not identity:
        return identity
    return identity.replace('.', '_')
