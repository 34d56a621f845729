from .helpers import (
    get_timezone, utc_now, to_local, local_now, parse_event_time,
    local_time_on, sanitize_identity
)

from .decorators import (
    line_signature_required, validate_json, handle_exceptions
)

__all__ = [
    # Helpers
    'get_timezone', 'utc_now', 'to_local', 'local_now', 'parse_event_time',
    'local_time_on', 'sanitize_identity',
    
    # Decorators
    'line_signature_required', 'validate_json', 'handle_exceptions'
]
