from functools import wraps
from flask import jsonify, request, current_app

SIGNATURE_HEADER = 'X-Line-Signature'

def line_signature_required(f):
    """Decorator that rejects webhook calls not signed with the channel secret

    The HMAC is computed over the raw request bytes, so the body is read
    with get_data() before anything parses it. Returns 401 on failure.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from services.signature import verify_signature

        raw_body = request.get_data(cache=True)
        signature = request.headers.get(SIGNATURE_HEADER)
        secret = current_app.config.get('LINE_CHANNEL_SECRET')

        if not verify_signature(secret, raw_body, signature):
            current_app.logger.warning(f"Rejected webhook with invalid signature from {request.remote_addr}")
            return jsonify({'error': 'Invalid signature'}), 401

        return f(*args, **kwargs)
    return decorated_function

def validate_json(required_fields=None):
    """Decorator to validate JSON request data

    Args:
        required_fields (list): List of required field names; None and
            blank strings count as missing
    """
    if required_fields is None:
        required_fields = []

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                return jsonify({'error': 'Invalid JSON'}), 400

            # Check required fields
            missing_fields = []
            for field in required_fields:
                value = data.get(field)
                if value is None or (isinstance(value, str) and not value.strip()):
                    missing_fields.append(field)

            if missing_fields:
                return jsonify({
                    'error': f'Missing required fields: {", ".join(missing_fields)}'
                }), 400

            return f(*args, **kwargs)
        return decorated_function
    return decorator

def handle_exceptions(f):
    """Decorator to handle common exceptions in API routes"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except ValueError as e:
            current_app.logger.warning(f"ValueError in {f.__name__}: {str(e)}")
            return jsonify({'error': str(e)}), 400
        except Exception as e:
            current_app.logger.error(f"Unexpected error in {f.__name__}: {str(e)}")
            if current_app.debug:
                return jsonify({'error': str(e)}), 500
            else:
                return jsonify({'error': 'Internal server error'}), 500
    return decorated_function
