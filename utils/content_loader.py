"""
Content Loader Module - Loads portfolio section content from static JSON or a remote API

Every section asks the loader for one content type. Which source answers is
decided by ContentSourceConfig.use_remote; both paths report failures as a
single LoadFailure tagged with the content type and the source.
"""

import asyncio
import json
import logging

import aiohttp

from .content_config import ContentType, SOURCE_REMOTE, SOURCE_STATIC

JSON_HEADERS = {
    'Content-Type': 'application/json',
    'Accept': 'application/json',
}

logger = logging.getLogger(__name__)


class LoadFailure(Exception):
    """Raised when a content type cannot be loaded from its configured source"""

    def __init__(self, content_type, source, cause):
        self.content_type = content_type
        self.source = source
        self.cause = cause
        super().__init__(f"Failed to load {source} content for {content_type}: {cause}")


class LoggingObserver:
    """Writes loader events to a standard logger"""

    def __init__(self, log=None):
        self.log = log or logger

    def on_attempt(self, content_type, source, url):
        self.log.info("[ContentLoader] Loading %s from %s: %s", content_type, source, url or '(unresolved)')

    def on_success(self, content_type, source, payload):
        self.log.info("[ContentLoader] ✓ %s loaded from %s: %s", content_type, source,
                      json.dumps(payload, ensure_ascii=False, default=str)[:500])

    def on_failure(self, failure):
        self.log.warning("[ContentLoader] ✗ %s load failed from %s: %s",
                         failure.content_type, failure.source, failure.cause)

    def on_batch_failures(self, failures):
        self.log.warning("[ContentLoader] ✗ %d of the requested content types failed: %s",
                         len(failures), ', '.join(str(f.content_type) for f in failures))


def _describe_error(exc):
    message = str(exc)
    return message if message else type(exc).__name__


class ContentLoader:
    """
    Loads one or several content types per the configured source

    Args:
        config (ContentSourceConfig): Source settings, read-only
        observer: Object with on_attempt/on_success/on_failure/on_batch_failures,
            notified only when config.debug is set
        session_factory: Callable returning an aiohttp.ClientSession
    """

    def __init__(self, config, observer=None, session_factory=aiohttp.ClientSession):
        self.config = config
        self.observer = observer or LoggingObserver()
        self.session_factory = session_factory

    def _notify(self, event, *args):
        if not self.config.debug:
            return
        try:
            getattr(self.observer, event)(*args)
        except Exception:
            logger.warning("Content loader observer failed on %s", event, exc_info=True)

    def _resolve(self, content_type):
        """Return (source, url) for a content type or raise LoadFailure"""
        config = self.config
        source = config.source

        if config.use_remote:
            if not config.base_url:
                raise LoadFailure(content_type, source,
                                  'remote mode is enabled but no base address (base_url) is configured')
            endpoint = config.endpoints.get(content_type)
            if endpoint is None:
                raise LoadFailure(content_type, source, 'no remote endpoint registered')
            return source, config.base_url.rstrip('/') + endpoint

        path = config.static_paths.get(content_type)
        if path is None:
            raise LoadFailure(content_type, source, 'no static path registered')
        if path.startswith(('http://', 'https://')):
            return source, path
        if not config.static_origin:
            raise LoadFailure(content_type, source,
                              'static path is relative but no static origin is configured')
        return source, config.static_origin.rstrip('/') + path

    async def _fetch(self, content_type, source, url):
        headers = JSON_HEADERS if source == SOURCE_REMOTE else None
        try:
            async with self.session_factory() as session:
                async with session.get(url, headers=headers) as response:
                    if not 200 <= response.status < 300:
                        raise LoadFailure(content_type, source,
                                          f"HTTP {response.status}: {response.reason}")
                    body = await response.text()
        except LoadFailure:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as exc:
            raise LoadFailure(content_type, source, _describe_error(exc)) from exc

        try:
            return json.loads(body)
        except ValueError as exc:
            raise LoadFailure(content_type, source, f"Invalid JSON: {exc}") from exc

    async def load(self, content_type):
        """
        Load a single content type

        Args:
            content_type (ContentType | str): Content type key

        Returns:
            The parsed JSON payload, unmodified

        Raises:
            LoadFailure: On configuration, network, HTTP status or JSON errors
        """
        content_type = ContentType(content_type)
        source = self.config.source
        try:
            try:
                source, url = self._resolve(content_type)
            except LoadFailure:
                # No address to report; the attempt still precedes the failure
                self._notify('on_attempt', content_type, source, None)
                raise
            self._notify('on_attempt', content_type, source, url)
            payload = await self._fetch(content_type, source, url)
        except LoadFailure as failure:
            self._notify('on_failure', failure)
            raise
        except Exception as exc:
            failure = LoadFailure(content_type, source, f"Unexpected error: {_describe_error(exc)}")
            self._notify('on_failure', failure)
            raise failure from exc

        self._notify('on_success', content_type, source, payload)
        return payload

    async def load_multiple(self, content_types):
        """
        Load several content types concurrently

        Each distinct type is attempted once. Failed types are left out of the
        result instead of being raised.

        Returns:
            dict: ContentType -> payload for the types that loaded
        """
        types = list(dict.fromkeys(ContentType(t) for t in content_types))
        results = await asyncio.gather(*(self.load(t) for t in types), return_exceptions=True)

        loaded = {}
        failures = []
        for content_type, result in zip(types, results):
            if isinstance(result, LoadFailure):
                failures.append(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                loaded[content_type] = result

        if failures:
            self._notify('on_batch_failures', failures)
        return loaded


__all__ = ['ContentLoader', 'LoadFailure', 'LoggingObserver', 'JSON_HEADERS']
