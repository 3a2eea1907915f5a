import os
import sys
from functools import partialmethod
from pathlib import Path

import pytest
import anyio
import httpx
from sqlalchemy import create_engine, delete

BASE_DIR = Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

os.environ.setdefault("DATABASE_URL", "sqlite:///" + str(BASE_DIR / "test.db"))
os.environ.setdefault("LOG_LEVEL", "WARNING")

from app.core.config import get_settings
from app.core.db import build_engine
from app.core.dependencies import get_product_repository
from app.main import app
from app.models import Base, Category, Product
from app.repositories import ProductRepository

get_settings.cache_clear()

_db_path = BASE_DIR / "test.db"


def _create_engine():
    return build_engine(get_settings().DATABASE_URL)


@pytest.fixture(scope="session")
def engine():
    engine = _create_engine()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with engine.begin() as conn:
        conn.execute(
            Category.__table__.insert(),
            [
                {"id": 1, "category_name": "Hardware", "category_description": "Tools and parts"},
                {"id": 2, "category_name": "Garden", "category_description": None},
            ],
        )
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if _db_path.exists():
        _db_path.unlink()


@pytest.fixture(autouse=True)
def clean_products(engine):
    yield
    with engine.begin() as conn:
        conn.execute(delete(Product.__table__))


@pytest.fixture()
def repository(engine):
    return ProductRepository(engine)


@pytest.fixture()
def broken_repository():
    # The parent directory does not exist, so every connection attempt fails.
    engine = create_engine("sqlite:///" + str(BASE_DIR / "missing-dir" / "unreachable.db"))
    yield ProductRepository(engine)
    engine.dispose()


class _SyncASGIClient:
    def __init__(self, fastapi_app, raise_app_exceptions: bool = True):
        transport = httpx.ASGITransport(app=fastapi_app, raise_app_exceptions=raise_app_exceptions)
        self._client = httpx.AsyncClient(transport=transport, base_url="http://testserver")

    def request(self, method: str, url: str, **kwargs):
        async def _do_request():
            return await self._client.request(method, url, **kwargs)

        return anyio.run(_do_request)

    get = partialmethod(request, "GET")
    post = partialmethod(request, "POST")
    put = partialmethod(request, "PUT")
    delete = partialmethod(request, "DELETE")

    def close(self):
        anyio.run(self._client.aclose)


class _ExplodingRepository:
    """Stands in for the repository and fails with a non-store error."""

    def __init__(self, message: str):
        self.message = message

    def __getattr__(self, name):
        def _fail(*args, **kwargs):
            raise RuntimeError(self.message)

        return _fail


@pytest.fixture()
def make_client():
    clients = []

    def _make(repository, raise_app_exceptions: bool = True) -> _SyncASGIClient:
        app.dependency_overrides[get_product_repository] = lambda: repository
        test_client = _SyncASGIClient(app, raise_app_exceptions=raise_app_exceptions)
        clients.append(test_client)
        return test_client

    yield _make

    for test_client in clients:
        test_client.close()
    app.dependency_overrides.clear()


@pytest.fixture()
def client(make_client, repository):
    return make_client(repository)


@pytest.fixture()
def broken_client(make_client, broken_repository):
    return make_client(broken_repository)


@pytest.fixture()
def exploding_client(make_client):
    # The generic handler answers, then Starlette re-raises; keep the response.
    return make_client(_ExplodingRepository("kaboom"), raise_app_exceptions=False)
