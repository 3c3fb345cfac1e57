"""
Test configuration and fixtures.
Uses a throwaway SQLite database (aiosqlite) per test, so no PostgreSQL
server is needed.
"""
import os

# Set test environment before any imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./mediahub_unused.db"
os.environ["SERVER_URL"] = "http://testserver"
os.environ["ENVIRONMENT"] = "test"

import uuid as uuid_module
from typing import AsyncGenerator, Optional

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from mediahub.database import create_session_factory, init_db
from mediahub.models.user import User
from mediahub.repositories.image_repository import ImageRepository
from mediahub.services.image_service import ImageService
from mediahub.services.url_service import UrlService

from factories import make_gif, make_jpeg, make_png

SERVER_URL = "http://testserver"
MAX_UPLOAD_SIZE = 1_000_000


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_jpeg()


@pytest.fixture
def gif_bytes() -> bytes:
    return make_gif()


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture(scope="function")
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh SQLite database with all tables."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    await init_db(engine)
    
    yield engine
    
    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(db_engine)


@pytest.fixture(scope="function")
async def test_user(session_factory) -> User:
    """Create a test user."""
    user = User(id=uuid_module.uuid4(), email="test@example.com")
    async with session_factory() as session:
        session.add(user)
        await session.commit()
    return user


@pytest.fixture
def repository(session_factory) -> ImageRepository:
    return ImageRepository(session_factory)


@pytest.fixture
def image_service(repository: ImageRepository) -> ImageService:
    return ImageService(
        repository=repository,
        url_service=UrlService(SERVER_URL),
        max_upload_size=MAX_UPLOAD_SIZE,
    )


# =============================================================================
# API client fixtures
# =============================================================================


def get_test_app(image_service: ImageService, user: Optional[User]) -> FastAPI:
    """Return the app with service and identity dependencies overridden."""
    from mediahub.main import app
    from mediahub.api.dependencies import get_image_service
    from mediahub.auth.dependencies import get_current_user_id
    
    app.dependency_overrides[get_image_service] = lambda: image_service
    if user is not None:
        async def override_get_current_user_id():
            return user.id
        
        app.dependency_overrides[get_current_user_id] = override_get_current_user_id
    
    return app


@pytest.fixture(scope="function")
async def client(image_service: ImageService, test_user: User) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client authenticated as test_user."""
    app = get_test_app(image_service, test_user)
    
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def anonymous_client(image_service: ImageService) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client with no identity override."""
    app = get_test_app(image_service, None)
    
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    
    app.dependency_overrides.clear()
