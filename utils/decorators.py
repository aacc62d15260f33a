"""
Decorators Module - Admin access decorators
"""

from functools import wraps
from flask import redirect, url_for, flash, request
from flask_login import current_user


def admin_required(f):
    """Decorator to require a logged-in admin"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            flash('Please login to access this page.', 'error')
            return redirect(url_for('auth.login', next=request.path))
        return f(*args, **kwargs)
    return decorated_function
