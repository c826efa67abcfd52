"""
Extensions Module - Centralized initialization of Flask extensions
Keeps extension objects importable from models and blueprints without
importing the application factory.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Initialize extensions without binding to app
db = SQLAlchemy()
login_manager = LoginManager()
login_manager.login_view = 'auth.login'
login_manager.login_message = 'Please log in to access this page.'
login_manager.login_message_category = 'info'

__all__ = ['db', 'login_manager']
