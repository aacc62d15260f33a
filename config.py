import os
from datetime import timedelta


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'CHANGE-THIS-SECRET-KEY-IN-PRODUCTION')
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Database Settings
    _database_url = os.environ.get('DATABASE_URL')
    if _database_url and _database_url.startswith("postgres://"):
        _database_url = _database_url.replace("postgres://", "postgresql://", 1)

    SQLALCHEMY_DATABASE_URI = _database_url or 'sqlite:///portfolio.db'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Upload Settings
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB
    UPLOAD_FOLDER = 'static/uploads'  # disk, relative to the app root or absolute
    UPLOAD_URL_PATH = '/static/uploads'  # where UPLOAD_FOLDER is served
    ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}

    # JSON Settings
    JSON_AS_ASCII = False

    # Content Source Settings
    # CONTENT_USE_REMOTE=false loads sections from the static JSON files,
    # true loads them from CONTENT_BASE_URL + endpoint.
    CONTENT_USE_REMOTE = _env_flag('CONTENT_USE_REMOTE')
    CONTENT_BASE_URL = os.environ.get('CONTENT_BASE_URL', '')
    CONTENT_STATIC_ORIGIN = os.environ.get('CONTENT_STATIC_ORIGIN', 'http://127.0.0.1:5000')
    CONTENT_DEBUG = _env_flag('CONTENT_DEBUG', True)
    CONTENT_ENDPOINTS = {
        'about': '/about',
        'skills': '/skills',
        'projects': '/projects',
        'experience': '/experience',
        'contact': '/contact',
    }
    CONTENT_STATIC_PATHS = {
        'about': '/data/about.json',
        'skills': '/data/skills.json',
        'projects': '/data/projects.json',
        'experience': '/data/experience.json',
        'contact': '/data/contact.json',
    }

    # Admin Settings
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')

    # Admin Notification Settings
    ADMIN_TELEGRAM_BOT_TOKEN = os.environ.get('ADMIN_TELEGRAM_BOT_TOKEN')
    ADMIN_TELEGRAM_CHAT_ID = os.environ.get('ADMIN_TELEGRAM_CHAT_ID')
    ADMIN_SMTP_HOST = os.environ.get('ADMIN_SMTP_HOST')
    ADMIN_SMTP_PORT = os.environ.get('ADMIN_SMTP_PORT', '587')
    ADMIN_SMTP_EMAIL = os.environ.get('ADMIN_SMTP_EMAIL')
    ADMIN_SMTP_PASSWORD = os.environ.get('ADMIN_SMTP_PASSWORD')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    CONTENT_DEBUG = _env_flag('CONTENT_DEBUG', False)


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # For in-memory SQLite during tests, keep engine options empty to avoid
    # passing pool settings to SQLite's StaticPool.
    SQLALCHEMY_ENGINE_OPTIONS = {}
    CONTENT_USE_REMOTE = False
    CONTENT_BASE_URL = ''
    CONTENT_DEBUG = False
    ADMIN_USERNAME = None
    ADMIN_PASSWORD = None
    ADMIN_TELEGRAM_BOT_TOKEN = None
    ADMIN_TELEGRAM_CHAT_ID = None
    ADMIN_SMTP_HOST = None


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}

def get_config(config_name=None):
    """Get configuration by name, falling back to FLASK_ENV"""
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
