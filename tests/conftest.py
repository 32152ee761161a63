from contextlib import asynccontextmanager, contextmanager

import httpx
import pytest

from pagerange import RangeSettings
from pagerange.middleware import wrap_asgi_with_range, wrap_wsgi_with_range
from tests.apps.asgi import app as asgi_app
from tests.apps.wsgi import app as wsgi_app


@contextmanager
def _wsgi_client(settings=None):
    app = wrap_wsgi_with_range(wsgi_app, settings)
    with httpx.Client(transport=httpx.WSGITransport(app=app), base_url='http://testserver') as client:
        yield client


@asynccontextmanager
async def _asgi_client(settings=None):
    app = wrap_asgi_with_range(asgi_app, settings)
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url='http://testserver') as client:
        yield client


@pytest.fixture(scope='function')
def range_settings():
    return RangeSettings(accept=('name', 'created_at'))


@pytest.fixture(scope='function')
def wsgi_client():
    return _wsgi_client


@pytest.fixture(scope='function')
def asgi_client():
    return _asgi_client
