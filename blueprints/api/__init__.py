"""
API Blueprint - JSON content endpoints
Handles: Remote content API backed by the database, bundled static JSON files
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__, url_prefix='')

from . import routes
