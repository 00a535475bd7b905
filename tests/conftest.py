"""
Pytest configuration for SV PG tests
"""
import os
import tempfile

# Must be set before the app module creates its uploads mount
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="svpg-uploads-"))

import httpx
import pytest
from datetime import date
from mongomock_motor import AsyncMongoMockClient

from svpg.config.database import db_config
from svpg.config.settings import settings
from svpg.config.topology import DEFAULT_ROOM_LAYOUT, Topology
from svpg.main import app
from svpg.models.booking import BookingCreate
from svpg.services.allocation_service import AllocationEngine


@pytest.fixture
async def database():
    """Fresh in-memory Mongo database with the production indexes"""
    client = AsyncMongoMockClient()
    db_config.client = client
    db_config.database = client["svpg_test"]
    await db_config.ensure_indexes()
    yield db_config.database
    db_config.client = None
    db_config.database = None


@pytest.fixture
def topology():
    return Topology.from_mapping(DEFAULT_ROOM_LAYOUT)


@pytest.fixture
def engine(database, topology):
    return AllocationEngine(topology)


@pytest.fixture
async def client(database):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def admin_code():
    return settings.PAYMENT_ADMIN_CODE


@pytest.fixture
def make_booking():
    """Factory for check-in data"""
    def _make(floor=1, room=1, bed=1, name="Test Guest", **overrides):
        data = {
            "name": name,
            "phone": "9000000001",
            "join_date": date(2026, 1, 5),
            "floor": floor,
            "room": room,
            "bed": bed,
        }
        data.update(overrides)
        return BookingCreate(**data)
    return _make
