"""
Portfolio - Main Application Entry Point
Application Factory Pattern for modular architecture

This module initializes the Flask application with all necessary extensions,
configurations, and middleware. All actual route handling is delegated to blueprints.
"""

import logging
import os
from datetime import datetime

import click
from flask import Flask, render_template, redirect, request, flash
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from config import get_config
from extensions import db, login_manager
from utils.helpers import format_paragraphs, safe_redirect_target
from utils.i18n import init_preferences
from utils.security import hash_password
from utils.storage import init_storage

# Import all blueprints
from blueprints.auth import auth_bp
from blueprints.dashboard import dashboard_bp
from blueprints.portfolio import portfolio_bp


def create_app(config_name=None, overrides=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)
        overrides (dict): Config values applied on top of the environment config

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(get_config(config_name))
    if overrides:
        app.config.update(overrides)

    app.logger.setLevel(getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    # Initialize extensions with app
    initialize_extensions(app)

    # Register Jinja filters
    app.jinja_env.filters['paragraphs'] = format_paragraphs

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Register CLI commands
    register_commands(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'message': 'Portfolio application is running'}, 200

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)
    login_manager.init_app(app)
    init_storage(app)
    init_preferences(app)

    # Create tables if they don't exist
    with app.app_context():
        import models  # noqa: F401  registers the mappings before create_all
        try:
            db.create_all()
            # Verify connection
            db.session.execute(text('SELECT 1'))
            app.logger.info("✓ Database initialized successfully")
        except SQLAlchemyError as e:
            app.logger.error(f"✗ Database initialization failed: {str(e)}")


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(portfolio_bp)


def register_error_handlers(app):
    """Register custom error handlers"""

    @app.errorhandler(404)
    def page_not_found(e):
        return render_template('404.html'), 404

    @app.errorhandler(500)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}")
        return render_template('500.html'), 500

    @app.errorhandler(413)
    def file_too_large(e):
        limit_mb = app.config.get('MAX_CONTENT_LENGTH', 0) // (1024 * 1024)
        flash(f'File is too large. Maximum size is {limit_mb}MB.', 'error')
        return redirect(safe_redirect_target(request.path, '/')), 303


def register_hooks(app):
    """Register request/response hooks and context processors"""

    @app.context_processor
    def inject_global_vars():
        return {
            'current_year': datetime.now().year,
        }

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        if not app.debug:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response


def register_commands(app):
    """Register flask CLI commands"""

    @app.cli.command('create-admin')
    @click.argument('email')
    @click.password_option()
    def create_admin(email, password):
        """Create or reset the operator account."""
        from models import User

        email = email.strip().lower()
        user = User.query.filter_by(email=email).first()
        if user:
            user.password_hash = hash_password(password)
            action = 'updated'
        else:
            db.session.add(User(email=email, password_hash=hash_password(password)))
            action = 'created'
        db.session.commit()
        click.echo(f"Operator {email} {action}")


if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Create app
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 5000)),
        debug=(env == 'development')
    )
