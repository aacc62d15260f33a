"""
Utils Package - Centralized utility modules initialization
"""

from .content_config import ContentType, ContentSourceConfig, SOURCE_STATIC, SOURCE_REMOTE
from .content_loader import ContentLoader, LoadFailure, LoggingObserver
from .decorators import admin_required
from .icons import get_skill_icon, get_social_icon
from .helpers import allowed_file, save_upload, parse_list_field, parse_lines_field, slugify
from .security import get_client_ip, check_rate_limit, get_admin_credentials

__all__ = [
    # Content
    'ContentType',
    'ContentSourceConfig',
    'SOURCE_STATIC',
    'SOURCE_REMOTE',
    'ContentLoader',
    'LoadFailure',
    'LoggingObserver',

    # Decorators
    'admin_required',

    # Icons
    'get_skill_icon',
    'get_social_icon',

    # Helpers
    'allowed_file',
    'save_upload',
    'parse_list_field',
    'parse_lines_field',
    'slugify',

    # Security
    'get_client_ip',
    'check_rate_limit',
    'get_admin_credentials'
]
