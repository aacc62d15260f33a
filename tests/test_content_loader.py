import asyncio
import unittest

import aiohttp
from aiohttp import web
from aiohttp.test_utils import TestServer

from utils.content_config import ContentSourceConfig, ContentType, SOURCE_REMOTE, SOURCE_STATIC
from utils.content_loader import ContentLoader, LoadFailure

DEMO_PROJECTS = [{"id": 1, "name": "Demo"}]


class RecordingObserver:
    def __init__(self):
        self.events = []

    def on_attempt(self, content_type, source, url):
        self.events.append(('attempt', content_type, source, url))

    def on_success(self, content_type, source, payload):
        self.events.append(('success', content_type, source, payload))

    def on_failure(self, failure):
        self.events.append(('failure', failure.content_type, failure.source, failure.cause))

    def on_batch_failures(self, failures):
        self.events.append(('batch_failures', [f.content_type for f in failures]))


class BrokenObserver:
    def __getattr__(self, name):
        def _raise(*args):
            raise RuntimeError(f"observer blew up in {name}")
        return _raise


class CountingSessionFactory:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return aiohttp.ClientSession()


class ContentServer:
    """Serves JSON per path and records every request it receives"""

    def __init__(self):
        self.routes = {}
        self.requests = []
        self.delay = 0
        app = web.Application()
        app.router.add_route('GET', '/{tail:.*}', self.handle)
        self.server = TestServer(app)

    async def handle(self, request):
        self.requests.append((request.path, request.headers.copy()))
        if self.delay:
            await asyncio.sleep(self.delay)
        status, body = self.routes.get(request.path, (404, {'error': 'not found'}))
        if isinstance(body, str):
            return web.Response(status=status, text=body, content_type='application/json')
        return web.json_response(body, status=status)

    @property
    def origin(self):
        return f"http://{self.server.host}:{self.server.port}"

    def paths(self):
        return [path for path, _ in self.requests]


class ContentLoaderTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.content = ContentServer()
        await self.content.server.start_server()
        self.observer = RecordingObserver()

    async def asyncTearDown(self) -> None:
        await self.content.server.close()

    def static_loader(self, **overrides):
        settings = {'static_origin': self.content.origin, 'debug': True}
        settings.update(overrides)
        return ContentLoader(ContentSourceConfig(**settings), observer=self.observer)

    def remote_loader(self, **overrides):
        settings = {'use_remote': True, 'base_url': self.content.origin + '/api', 'debug': True}
        settings.update(overrides)
        return ContentLoader(ContentSourceConfig(**settings), observer=self.observer)


class StaticModeTests(ContentLoaderTestCase):
    async def test_loads_static_projects_verbatim(self) -> None:
        self.content.routes['/data/projects.json'] = (200, DEMO_PROJECTS)

        result = await self.static_loader().load('projects')

        self.assertEqual(result, DEMO_PROJECTS)

    async def test_requests_only_the_static_path_for_every_type(self) -> None:
        for content_type in ContentType:
            self.content.routes[f'/data/{content_type.value}.json'] = (200, {'type': content_type.value})
        loader = self.static_loader()

        for content_type in ContentType:
            await loader.load(content_type)

        self.assertEqual(self.content.paths(), [f'/data/{t.value}.json' for t in ContentType])
        self.assertFalse(any(path.startswith('/api') for path in self.content.paths()))

    async def test_custom_static_path_is_used(self) -> None:
        self.content.routes['/content/me.json'] = (200, {'name': 'Me'})
        loader = self.static_loader(static_paths={'about': '/content/me.json'})

        self.assertEqual(await loader.load(ContentType.ABOUT), {'name': 'Me'})
        self.assertEqual(self.content.paths(), ['/content/me.json'])

    async def test_absolute_static_path_ignores_origin(self) -> None:
        self.content.routes['/cdn/skills.json'] = (200, [])
        loader = self.static_loader(
            static_origin='',
            static_paths={'skills': self.content.origin + '/cdn/skills.json'},
        )

        self.assertEqual(await loader.load('skills'), [])

    async def test_non_2xx_fails_tagged_static_with_status(self) -> None:
        self.content.routes['/data/skills.json'] = (404, {'error': 'missing'})

        with self.assertRaises(LoadFailure) as ctx:
            await self.static_loader().load('skills')

        self.assertEqual(ctx.exception.source, SOURCE_STATIC)
        self.assertEqual(ctx.exception.content_type, ContentType.SKILLS)
        self.assertIn('404', ctx.exception.cause)
        self.assertIn('skills', str(ctx.exception))

    async def test_invalid_json_fails(self) -> None:
        self.content.routes['/data/about.json'] = (200, '{not json')

        with self.assertRaises(LoadFailure) as ctx:
            await self.static_loader().load('about')

        self.assertEqual(ctx.exception.source, SOURCE_STATIC)
        self.assertIn('Invalid JSON', ctx.exception.cause)

    async def test_connection_error_fails_tagged_static(self) -> None:
        loader = self.static_loader(static_origin='http://127.0.0.1:1')

        with self.assertRaises(LoadFailure) as ctx:
            await loader.load('experience')

        self.assertEqual(ctx.exception.source, SOURCE_STATIC)
        self.assertTrue(ctx.exception.cause)

    async def test_relative_path_without_origin_fails_before_request(self) -> None:
        factory = CountingSessionFactory()
        loader = ContentLoader(ContentSourceConfig(static_origin=''), session_factory=factory)

        with self.assertRaises(LoadFailure) as ctx:
            await loader.load('about')

        self.assertEqual(ctx.exception.source, SOURCE_STATIC)
        self.assertEqual(factory.calls, 0)


class RemoteModeTests(ContentLoaderTestCase):
    async def test_requests_base_plus_endpoint_with_json_headers(self) -> None:
        self.content.routes['/api/experience'] = (200, [{'company': 'Acme'}])

        result = await self.remote_loader().load('experience')

        self.assertEqual(result, [{'company': 'Acme'}])
        path, headers = self.content.requests[0]
        self.assertEqual(path, '/api/experience')
        self.assertEqual(headers.get('Accept'), 'application/json')
        self.assertEqual(headers.get('Content-Type'), 'application/json')

    async def test_never_requests_static_paths(self) -> None:
        for content_type in ContentType:
            self.content.routes[f'/api/{content_type.value}'] = (200, {})
        loader = self.remote_loader()

        for content_type in ContentType:
            await loader.load(content_type)

        self.assertEqual(self.content.paths(), [f'/api/{t.value}' for t in ContentType])

    async def test_empty_base_address_fails_without_network_call(self) -> None:
        for content_type in ContentType:
            factory = CountingSessionFactory()
            loader = ContentLoader(
                ContentSourceConfig(use_remote=True, base_url='', static_origin=self.content.origin),
                session_factory=factory,
            )

            with self.assertRaises(LoadFailure) as ctx:
                await loader.load(content_type)

            self.assertEqual(ctx.exception.source, SOURCE_REMOTE)
            self.assertEqual(ctx.exception.content_type, content_type)
            self.assertEqual(factory.calls, 0)

        self.assertEqual(self.content.requests, [])

    async def test_missing_base_address_scenario(self) -> None:
        loader = ContentLoader(ContentSourceConfig(use_remote=True, base_url=''))

        with self.assertRaises(LoadFailure) as ctx:
            await loader.load('about')

        self.assertEqual(ctx.exception.source, 'remote')
        self.assertIn('base address', ctx.exception.cause)

    async def test_server_error_fails_tagged_remote_with_status(self) -> None:
        self.content.routes['/api/projects'] = (500, {'error': 'boom'})

        with self.assertRaises(LoadFailure) as ctx:
            await self.remote_loader().load('projects')

        self.assertEqual(ctx.exception.source, SOURCE_REMOTE)
        self.assertIn('HTTP 500', ctx.exception.cause)

    async def test_trailing_slash_on_base_is_not_doubled(self) -> None:
        self.content.routes['/api/contact'] = (200, {'email': 'me@example.com'})

        await self.remote_loader(base_url=self.content.origin + '/api/').load('contact')

        self.assertEqual(self.content.paths(), ['/api/contact'])


class LoadBehaviourTests(ContentLoaderTestCase):
    async def test_sequential_loads_return_equal_payloads(self) -> None:
        self.content.routes['/data/projects.json'] = (200, DEMO_PROJECTS)
        loader = self.static_loader()

        first = await loader.load('projects')
        second = await loader.load('projects')

        self.assertEqual(first, second)
        self.assertIsNot(first, second)
        self.assertEqual(len(self.content.requests), 2)

    async def test_concurrent_identical_loads_are_not_deduplicated(self) -> None:
        self.content.routes['/data/projects.json'] = (200, DEMO_PROJECTS)
        self.content.delay = 0.05
        loader = self.static_loader()

        results = await asyncio.gather(loader.load('projects'), loader.load('projects'))

        self.assertEqual(results, [DEMO_PROJECTS, DEMO_PROJECTS])
        self.assertEqual(len(self.content.requests), 2)

    async def test_observer_sees_attempt_then_success(self) -> None:
        self.content.routes['/data/about.json'] = (200, {'name': 'Me'})

        await self.static_loader().load('about')

        kinds = [event[0] for event in self.observer.events]
        self.assertEqual(kinds, ['attempt', 'success'])
        self.assertEqual(self.observer.events[0][1:3], (ContentType.ABOUT, SOURCE_STATIC))
        self.assertTrue(self.observer.events[0][3].endswith('/data/about.json'))
        self.assertEqual(self.observer.events[1][3], {'name': 'Me'})

    async def test_observer_sees_failure(self) -> None:
        with self.assertRaises(LoadFailure):
            await self.static_loader().load('skills')

        self.assertEqual([e[0] for e in self.observer.events], ['attempt', 'failure'])

    async def test_observer_sees_attempt_before_fast_failure(self) -> None:
        loader = ContentLoader(
            ContentSourceConfig(use_remote=True, base_url='', debug=True),
            observer=self.observer,
        )

        with self.assertRaises(LoadFailure):
            await loader.load('about')

        self.assertEqual([e[0] for e in self.observer.events], ['attempt', 'failure'])
        self.assertEqual(self.observer.events[0], ('attempt', ContentType.ABOUT, SOURCE_REMOTE, None))

    async def test_observer_sees_attempt_before_missing_origin_failure(self) -> None:
        with self.assertRaises(LoadFailure):
            await self.static_loader(static_origin='').load('skills')

        self.assertEqual(self.observer.events[0], ('attempt', ContentType.SKILLS, SOURCE_STATIC, None))
        self.assertEqual(self.observer.events[1][0], 'failure')

    async def test_observer_not_called_without_debug(self) -> None:
        self.content.routes['/data/about.json'] = (200, {'name': 'Me'})

        await self.static_loader(debug=False).load('about')

        self.assertEqual(self.observer.events, [])

    async def test_raising_observer_does_not_change_outcome(self) -> None:
        self.content.routes['/data/about.json'] = (200, {'name': 'Me'})
        loader = ContentLoader(
            ContentSourceConfig(static_origin=self.content.origin, debug=True),
            observer=BrokenObserver(),
        )

        self.assertEqual(await loader.load('about'), {'name': 'Me'})
        with self.assertRaises(LoadFailure):
            await loader.load('skills')

    async def test_unknown_content_type_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            await self.static_loader().load('blog')


class LoadMultipleTests(ContentLoaderTestCase):
    async def test_failed_type_is_left_out(self) -> None:
        self.content.routes['/data/about.json'] = (200, {'name': 'Me'})
        self.content.routes['/data/skills.json'] = (500, {'error': 'boom'})
        self.content.routes['/data/projects.json'] = (200, DEMO_PROJECTS)

        result = await self.static_loader().load_multiple(['about', 'skills', 'projects'])

        self.assertEqual(result, {
            ContentType.ABOUT: {'name': 'Me'},
            ContentType.PROJECTS: DEMO_PROJECTS,
        })
        self.assertIn(('batch_failures', [ContentType.SKILLS]), self.observer.events)

    async def test_each_distinct_type_attempted_once(self) -> None:
        self.content.routes['/data/about.json'] = (200, {'name': 'Me'})

        result = await self.static_loader().load_multiple(['about', ContentType.ABOUT, 'about'])

        self.assertEqual(list(result), [ContentType.ABOUT])
        self.assertEqual(self.content.paths(), ['/data/about.json'])

    async def test_all_failing_returns_empty_mapping(self) -> None:
        loader = ContentLoader(ContentSourceConfig(use_remote=True, base_url=''))

        result = await loader.load_multiple(list(ContentType))

        self.assertEqual(result, {})

    async def test_loads_start_concurrently(self) -> None:
        for content_type in ContentType:
            self.content.routes[f'/data/{content_type.value}.json'] = (200, {})
        self.content.delay = 0.2
        loader = self.static_loader()

        started = asyncio.get_running_loop().time()
        result = await loader.load_multiple(list(ContentType))
        elapsed = asyncio.get_running_loop().time() - started

        self.assertEqual(set(result), set(ContentType))
        self.assertLess(elapsed, 0.2 * len(ContentType))

    async def test_empty_input(self) -> None:
        self.assertEqual(await self.static_loader().load_multiple([]), {})


if __name__ == "__main__":
    unittest.main()
