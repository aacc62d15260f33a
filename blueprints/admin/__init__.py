"""
Admin Blueprint - Content management screens
Handles: About, skills, projects, experience, contact info and messages
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')

from . import routes
