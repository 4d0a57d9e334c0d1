"""Shared fixtures: an in-memory app, an HTTP client and signed tokens."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from auth.access import AccessControl, Role
from catalogs.service import CatalogService
from core.config import AuthSettings, Settings
from core.memory import MemoryCatalogRepository, MemoryProductRepository, MemoryStore
from main import create_app
from products.service import ProductService

TEST_SECRET = "test-secret-with-enough-length-for-hs256"


@pytest.fixture
def auth_settings() -> AuthSettings:
    return AuthSettings(jwt_secret=TEST_SECRET, jwt_algorithm="HS256", access_token_expire_minutes=5)


@pytest.fixture
def settings(auth_settings: AuthSettings) -> Settings:
    return Settings(storage_backend="memory", log_level="WARNING", auth=auth_settings)


@pytest.fixture
def access_control(auth_settings: AuthSettings) -> AccessControl:
    return AccessControl(auth_settings)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def catalog_repo(store: MemoryStore) -> MemoryCatalogRepository:
    return MemoryCatalogRepository(store)


@pytest.fixture
def product_repo(store: MemoryStore) -> MemoryProductRepository:
    return MemoryProductRepository(store)


@pytest.fixture
def catalog_service(catalog_repo, product_repo) -> CatalogService:
    return CatalogService(catalog_repo, product_repo)


@pytest.fixture
def product_service(catalog_repo, product_repo) -> ProductService:
    return ProductService(product_repo, catalog_repo)


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def admin_headers(access_control: AccessControl) -> dict:
    token = access_control.issue_token(user_id=1, username="admin", roles=[Role.ADMIN])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(access_control: AccessControl) -> dict:
    token = access_control.issue_token(user_id=2, username="shopper", roles=[Role.USER])
    return {"Authorization": f"Bearer {token}"}
