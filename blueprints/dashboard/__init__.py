"""
Dashboard Blueprint - Operator content management
Handles: Profile, projects and skills CRUD, uploads, visibility toggles
"""

from flask import Blueprint

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/admin')

from . import routes
