"""
Security Module - Client IP lookup, rate limiting and operator credentials
"""

import time
from flask import request, current_app
from werkzeug.security import generate_password_hash, check_password_hash


# Rate Limiting
RATE_LIMIT_REQUESTS = {}  # {ip: [(timestamp, endpoint), ...]}
RATE_LIMIT_WINDOW = 60  # Per 60 seconds


def get_client_ip():
    """Get real client IP address"""
    forwarded = request.environ.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.environ.get('REMOTE_ADDR', 'unknown')


def check_rate_limit(endpoint='contact', max_requests=None):
    """Check if IP is within rate limit"""
    if max_requests is None:
        max_requests = current_app.config.get('CONTACT_RATE_LIMIT', 5)
    client_ip = get_client_ip()
    current_time = time.time()

    # Clean old requests outside the window
    RATE_LIMIT_REQUESTS[client_ip] = [
        (ts, ep) for ts, ep in RATE_LIMIT_REQUESTS.get(client_ip, [])
        if current_time - ts < RATE_LIMIT_WINDOW
    ]

    endpoint_requests = [
        ep for ts, ep in RATE_LIMIT_REQUESTS[client_ip] if ep == endpoint
    ]
    if len(endpoint_requests) >= max_requests:
        current_app.logger.warning(f"Rate limit hit for {client_ip} on {endpoint}")
        return False

    RATE_LIMIT_REQUESTS[client_ip].append((current_time, endpoint))
    return True


def reset_rate_limits():
    RATE_LIMIT_REQUESTS.clear()


def get_admin_credentials():
    """Load bootstrap operator credentials from configuration"""
    email = current_app.config.get('ADMIN_EMAIL')
    password = current_app.config.get('ADMIN_PASSWORD')
    if not email or not password:
        return {'email': None, 'password': None}
    return {'email': email.strip().lower(), 'password': password}


def hash_password(password):
    return generate_password_hash(password)


def verify_password(password, password_hash):
    """Verify password against hash"""
    if not password or not password_hash:
        return False
    return check_password_hash(password_hash, password)


__all__ = [
    'get_client_ip',
    'check_rate_limit',
    'reset_rate_limits',
    'get_admin_credentials',
    'hash_password',
    'verify_password',
]
