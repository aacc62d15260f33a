import unittest

from werkzeug.security import generate_password_hash

from app import create_app
from extensions import db, CONTENT_LOADER_KEY
from models import AdminUser
from utils.content_config import ContentSourceConfig, ContentType
from utils.content_loader import LoadFailure
from utils.security import reset_rate_limits


class StubLoader:
    """Async loader double that serves fixed payloads and records calls"""

    def __init__(self, payloads=None, failing=()):
        self.config = ContentSourceConfig()
        self.payloads = {ContentType(k): v for k, v in (payloads or {}).items()}
        self.failing = {ContentType(t) for t in failing}
        self.calls = []

    async def load(self, content_type):
        content_type = ContentType(content_type)
        self.calls.append(content_type)
        if content_type in self.failing or content_type not in self.payloads:
            raise LoadFailure(content_type, 'static', 'HTTP 404: Not Found')
        return self.payloads[content_type]

    async def load_multiple(self, content_types):
        loaded = {}
        for content_type in content_types:
            try:
                loaded[ContentType(content_type)] = await self.load(content_type)
            except LoadFailure:
                pass
        return loaded


class AppTestCase(unittest.TestCase):
    def setUp(self) -> None:
        reset_rate_limits()
        self.app = create_app('testing')
        self.app_context = self.app.app_context()
        self.app_context.push()
        self.client = self.app.test_client()

    def tearDown(self) -> None:
        db.session.remove()
        db.drop_all()
        self.app_context.pop()

    def use_loader(self, loader):
        self.app.extensions[CONTENT_LOADER_KEY] = loader
        return loader

    def create_admin(self, username='admin', password='s3cret-pass'):
        user = AdminUser(username=username, password_hash=generate_password_hash(password))
        db.session.add(user)
        db.session.commit()
        return user

    def login(self, username='admin', password='s3cret-pass'):
        return self.client.post('/admin/login', data={'username': username, 'password': password})
