"""
Extensions Module - Centralized initialization of Flask extensions
Keeps extension objects out of app.py so blueprints and models can import
them without circular imports.
"""

from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

CONTENT_LOADER_KEY = 'content_loader'

# Initialize extensions without binding to app
db = SQLAlchemy()
login_manager = LoginManager()
login_manager.login_view = 'auth.login'
login_manager.login_message = 'Please log in to manage portfolio content.'
login_manager.login_message_category = 'info'


def get_content_loader():
    """Return the ContentLoader registered on the current app"""
    return current_app.extensions[CONTENT_LOADER_KEY]


__all__ = ['db', 'login_manager', 'get_content_loader', 'CONTENT_LOADER_KEY']
