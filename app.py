"""
Portfolio - Main Application Entry Point
Application Factory Pattern with blueprints for the public site, content API,
admin authentication and content management.

This module wires configuration, extensions, the content loader and the
blueprints together. All route handling is delegated to blueprints.
"""

import os
from datetime import datetime
from flask import Flask, render_template, request, jsonify
from werkzeug.security import generate_password_hash
from config import get_config
from extensions import db, login_manager, CONTENT_LOADER_KEY
from utils.content_config import ContentSourceConfig
from utils.content_loader import ContentLoader, LoggingObserver
from utils.security import get_admin_credentials

# Import all blueprints
from blueprints.admin import admin_bp
from blueprints.api import api_bp
from blueprints.auth import auth_bp
from blueprints.portfolio import portfolio_bp


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    conf = get_config(config_name)
    app.config.from_object(conf)

    # Initialize extensions with app
    initialize_extensions(app)

    # Content loader used by the public sections
    initialize_content_loader(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'content_source': app.extensions[CONTENT_LOADER_KEY].config.source}, 200

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)
    login_manager.init_app(app)

    # Create tables if they don't exist
    with app.app_context():
        # Models must be imported before create_all
        import models  # noqa: F401
        try:
            from sqlalchemy import text
            db.create_all()
            # Verify connection
            db.session.execute(text('SELECT 1'))
            app.logger.info("✓ Database initialized successfully")
        except Exception as e:
            app.logger.error(f"✗ Database initialization failed: {str(e)}")
            return

        ensure_admin_user(app)


def ensure_admin_user(app):
    """Create the bootstrap admin from ADMIN_USERNAME / ADMIN_PASSWORD if missing"""
    from models import AdminUser

    credentials = get_admin_credentials()
    if not credentials['username']:
        app.logger.info("Admin credentials not configured, skipping admin bootstrap")
        return None

    user = AdminUser.query.filter_by(username=credentials['username']).first()
    if user:
        return user

    user = AdminUser(
        username=credentials['username'],
        password_hash=generate_password_hash(credentials['password'])
    )
    try:
        db.session.add(user)
        db.session.commit()
        app.logger.info(f"✓ Created admin user {user.username}")
    except Exception as e:
        db.session.rollback()
        app.logger.error(f"✗ Could not create admin user: {str(e)}")
        return None
    return user


def initialize_content_loader(app):
    """Build the immutable content config and register the loader"""
    content_config = ContentSourceConfig.from_mapping(app.config)
    app.extensions[CONTENT_LOADER_KEY] = ContentLoader(
        content_config,
        observer=LoggingObserver(app.logger)
    )

    if content_config.use_remote and not content_config.base_url:
        app.logger.warning("✗ CONTENT_USE_REMOTE is set but CONTENT_BASE_URL is empty; sections will render empty")
    else:
        app.logger.info(f"✓ Content source: {content_config.source}")
    return app.extensions[CONTENT_LOADER_KEY]


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(portfolio_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)


def _wants_json():
    return request.path.startswith('/api/') or request.is_json


def register_error_handlers(app):
    """Register custom error handlers"""

    @app.errorhandler(404)
    def page_not_found(e):
        if _wants_json():
            return jsonify({'error': 'Not found'}), 404
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}")
        if _wants_json():
            return jsonify({'error': 'Internal server error'}), 500
        return render_template('errors/500.html'), 500

    @app.errorhandler(413)
    def file_too_large(e):
        from flask import flash, redirect
        flash('File is too large. Maximum size is 16MB.', 'error')
        return redirect(request.url), 413


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
        return response


if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Create app
    app = create_app(env)

    # Run development server; threaded so static-mode loads can reach /data/
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 5000)),
        debug=(env == 'development'),
        threaded=True
    )
