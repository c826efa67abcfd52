"""
Auth Routes - Operator authentication
"""

from flask import render_template, redirect, url_for, request, flash, current_app
from flask_login import current_user, login_user, logout_user
from sqlalchemy.exc import SQLAlchemyError
from utils.security import get_admin_credentials, get_client_ip, hash_password, verify_password
from models import User
from extensions import db
from . import auth_bp


def provision_admin(email, password):
    """Create the bootstrap operator row from configured credentials"""
    user = User(email=email, password_hash=hash_password(password))
    db.session.add(user)
    db.session.commit()
    current_app.logger.info(f"Provisioned operator account {email}")
    return user


def authenticate(email, password):
    """Return the matching User, provisioning the configured operator on first login"""
    user = User.query.filter_by(email=email).first()
    if user:
        return user if verify_password(password, user.password_hash) else None

    credentials = get_admin_credentials()
    if credentials['email'] and email == credentials['email'] and password == credentials['password']:
        return provision_admin(email, password)
    return None


@auth_bp.route('/admin', methods=['GET', 'POST'])
def login():
    """Operator login"""
    if current_user.is_authenticated:
        return redirect(url_for('dashboard.index'))

    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')

        try:
            user = authenticate(email, password)
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Login error for {email}: {str(e)}")
            flash('Sign-in is temporarily unavailable. Please try again.', 'error')
            return render_template('admin/login.html', email=email), 500

        if user:
            login_user(user)
            current_app.logger.info(f"Operator login: {email} from {get_client_ip()}")
            flash('Signed in successfully', 'success')
            return redirect(url_for('dashboard.index'))

        current_app.logger.warning(f"Failed login for {email} from {get_client_ip()}")
        flash('Invalid credentials. Please try again.', 'error')
        return render_template('admin/login.html', email=email), 401

    return render_template('admin/login.html')


@auth_bp.route('/admin/logout', methods=['POST'])
def logout():
    """Sign out current operator"""
    if not current_user.is_authenticated:
        flash('Please login to access this page.', 'error')
        return redirect(url_for('auth.login'))

    logout_user()
    flash('Signed out successfully', 'success')
    return redirect(url_for('auth.login'))
