"""
Portfolio Blueprint - Public portfolio views
Handles: Home sections, project details, CV download, contact form, visitor preferences
"""

from flask import Blueprint

portfolio_bp = Blueprint('portfolio', __name__, url_prefix='')

from . import routes
