import base64
import hashlib
import hmac

def compute_signature(secret, raw_body):
    """Base64 HMAC-SHA256 of the raw body, as LINE sends it in X-Line-Signature"""
    if isinstance(raw_body, str):
        raw_body = raw_body.encode('utf-8')
    digest = hmac.new(secret.encode('utf-8'), raw_body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode('ascii')

def verify_signature(secret, raw_body, provided_signature):
    """Check that a webhook body was signed with the channel secret
    
    The HMAC must be computed over the exact bytes received; re-serializing
    parsed JSON changes the byte sequence.
    
    Args:
        secret (str): Channel secret; empty or None fails closed
        raw_body (bytes): Request body as received
        provided_signature (str): Value of the signature header
        
    Returns:
        bool: True only if the signatures match exactly
    """
    if not secret or not provided_signature or raw_body is None:
        return False
    
    try:
        expected = compute_signature(secret, raw_body)
    except (TypeError, ValueError):
        return False
    
    return hmac.compare_digest(expected.encode('ascii'), str(provided_signature).encode('utf-8'))
