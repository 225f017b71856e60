"""Shared fixtures - a disposable SQLite database per test."""
import pytest
from httpx import ASGITransport, AsyncClient

from app.database import Database
from app.fixtures import FakeInventoryConstants
from app.main import app
from app.services.persistence import PersistenceGateway
from app.services.storage_manager import StorageManager


@pytest.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def gateway(database):
    return PersistenceGateway(database)


@pytest.fixture
def manager(gateway):
    return StorageManager(gateway)


@pytest.fixture
async def seeded_manager(manager):
    """Manager holding the sample boxes and goods."""
    await manager.add_boxes(FakeInventoryConstants.fresh_boxes())
    await manager.add_goods(FakeInventoryConstants.fresh_goods())
    return manager


@pytest.fixture
async def client(database, manager):
    """HTTP client wired to the test database (lifespan is not run)."""
    app.state.database = database
    app.state.storage = manager
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
