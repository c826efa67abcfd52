"""
Decorators Module - Authentication gate for admin views
"""

from functools import wraps
from flask import redirect, url_for, flash
from flask_login import current_user


def login_required(f):
    """Decorator to require an authenticated operator"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            flash('Please login to access this page.', 'error')
            return redirect(url_for('auth.login'))
        return f(*args, **kwargs)
    return decorated_function
