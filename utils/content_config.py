"""
Content Configuration Module - Which source each portfolio section loads from

Holds the closed set of content types and the immutable source settings the
ContentLoader reads. Built once by the application factory from app.config.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ContentType(str, Enum):
    ABOUT = 'about'
    SKILLS = 'skills'
    PROJECTS = 'projects'
    EXPERIENCE = 'experience'
    CONTACT = 'contact'

    def __str__(self):
        return self.value


SOURCE_STATIC = 'static'
SOURCE_REMOTE = 'remote'

DEFAULT_STATIC_PATHS = {t: f'/data/{t.value}.json' for t in ContentType}
DEFAULT_ENDPOINTS = {t: f'/{t.value}' for t in ContentType}


def _freeze_paths(paths):
    return MappingProxyType({ContentType(key): value for key, value in paths.items()})


@dataclass(frozen=True)
class ContentSourceConfig:
    """
    Immutable content source settings

    Attributes:
        use_remote: Load from base_url + endpoint instead of the static files
        base_url: Remote API base address, may be empty
        static_origin: Origin used to resolve relative static paths
        static_paths: Static JSON path per content type
        endpoints: Remote endpoint path per content type
        debug: Report attempts and outcomes to the loader observer
    """

    use_remote: bool = False
    base_url: str = ''
    static_origin: str = ''
    static_paths: Mapping[ContentType, str] = field(
        default_factory=lambda: _freeze_paths(DEFAULT_STATIC_PATHS))
    endpoints: Mapping[ContentType, str] = field(
        default_factory=lambda: _freeze_paths(DEFAULT_ENDPOINTS))
    debug: bool = False

    def __post_init__(self):
        # frozen dataclass: normalise keys and make the tables read-only
        object.__setattr__(self, 'static_paths', _freeze_paths(self.static_paths))
        object.__setattr__(self, 'endpoints', _freeze_paths(self.endpoints))

    @property
    def source(self):
        return SOURCE_REMOTE if self.use_remote else SOURCE_STATIC

    @classmethod
    def from_mapping(cls, settings):
        """
        Build from a Flask config mapping

        Args:
            settings (Mapping): app.config or any mapping with CONTENT_* keys

        Returns:
            ContentSourceConfig: Frozen configuration value
        """
        return cls(
            use_remote=bool(settings.get('CONTENT_USE_REMOTE', False)),
            base_url=settings.get('CONTENT_BASE_URL') or '',
            static_origin=settings.get('CONTENT_STATIC_ORIGIN') or '',
            static_paths=settings.get('CONTENT_STATIC_PATHS') or DEFAULT_STATIC_PATHS,
            endpoints=settings.get('CONTENT_ENDPOINTS') or DEFAULT_ENDPOINTS,
            debug=bool(settings.get('CONTENT_DEBUG', False)),
        )


__all__ = [
    'ContentType',
    'ContentSourceConfig',
    'SOURCE_STATIC',
    'SOURCE_REMOTE',
    'DEFAULT_STATIC_PATHS',
    'DEFAULT_ENDPOINTS'
]
