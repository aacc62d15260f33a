"""
Auth Routes - Admin authentication
"""

from flask import render_template, redirect, url_for, request, flash, current_app
from flask_login import login_user, logout_user, current_user
from werkzeug.security import check_password_hash
from models import AdminUser
from utils.security import get_client_ip
from . import auth_bp


def _safe_next(target):
    # Only follow local paths
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return url_for('admin.index')


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login"""
    if current_user.is_authenticated:
        return redirect(url_for('admin.index'))

    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        password = request.form.get('password', '')

        user = AdminUser.query.filter_by(username=username).first()
        if user and user.is_active and check_password_hash(user.password_hash, password):
            login_user(user, remember=bool(request.form.get('remember')))
            current_app.logger.info(f"Admin login: {username} from {get_client_ip()}")
            flash(f'Welcome back, {username}!', 'success')
            return redirect(_safe_next(request.args.get('next')))

        current_app.logger.warning(f"Failed admin login for {username!r} from {get_client_ip()}")
        flash('Invalid credentials. Please try again.', 'error')

    return render_template('auth/login.html')


@auth_bp.route('/logout')
def logout():
    """Logout current admin"""
    if not current_user.is_authenticated:
        flash('Please login to access this page.', 'error')
        return redirect(url_for('auth.login'))

    logout_user()
    flash('Logged out successfully', 'success')
    return redirect(url_for('auth.login'))
