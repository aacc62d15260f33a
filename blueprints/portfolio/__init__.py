"""
Portfolio Blueprint - Public portfolio views
Handles: Section rendering from the content loader, project details, contact form
"""

from flask import Blueprint

portfolio_bp = Blueprint('portfolio', __name__, url_prefix='')

from . import routes
