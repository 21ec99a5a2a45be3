import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from estatehub.api.deps import get_media_store
from estatehub.core.database import Base, get_db
from estatehub.core.exceptions import MediaError
from estatehub.db.models import Property
from estatehub.main import app
from estatehub.models.property import MediaHandle
from estatehub.modules.media.store import MediaKind, MediaStore
import itertools

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


class FakeMediaStore(MediaStore):
    """In-memory media host that records uploads and deletions"""

    def __init__(self):
        self._ids = itertools.count(1)
        self.uploaded = []
        self.destroyed = []
        self.fail_uploads = set()
        self.fail_upload_after = None
        self.fail_destroys = False

    async def upload(self, data: bytes, kind: MediaKind) -> MediaHandle:
        if kind in self.fail_uploads:
            raise MediaError(f"{kind.value.capitalize()} upload failed", detail="simulated")
        if self.fail_upload_after is not None and len(self.uploaded) >= self.fail_upload_after:
            raise MediaError(f"{kind.value.capitalize()} upload failed", detail="simulated")

        public_id = f"properties/{kind.value}s/asset-{next(self._ids)}"
        self.uploaded.append(public_id)
        return MediaHandle(url=f"https://media.test/{public_id}", public_id=public_id)

    async def destroy(self, public_id: str, kind: MediaKind) -> None:
        self.destroyed.append(public_id)
        if self.fail_destroys:
            raise MediaError(f"{kind.value.capitalize()} deletion failed", detail="simulated")


@pytest.fixture(scope="function")
def test_engine():
    """Create a test database engine"""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    return engine


@pytest.fixture(scope="function")
def test_db_session(test_engine):
    """Create a test database session"""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def override_get_db(test_db_session):
    """Override the get_db dependency for testing"""
    def _override_get_db():
        try:
            yield test_db_session
        finally:
            pass
    return _override_get_db


@pytest.fixture(scope="function")
def media_store():
    return FakeMediaStore()


@pytest.fixture(scope="function")
def client(override_get_db, media_store):
    """Test client wired to the in-memory database and fake media store"""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_store] = lambda: media_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def admin_headers(client):
    """Register an admin and return its bearer header"""
    response = client.post("/api/admin/register", json={
        "name": "Test Admin",
        "email": "admin@example.com",
        "password": "secret123"
    })
    assert response.status_code == 201
    token = response.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def create_listing(test_db_session):
    """Insert a listing directly, bypassing the media host"""
    def _create_listing(**overrides):
        fields = {
            "title": "Sea view apartment",
            "description": "Bright two bedroom flat",
            "price": 7500000,
            "bhk": 2,
            "bathrooms": 2,
            "city": "Mumbai",
            "address": "12 Marine Drive",
            "area": "1100",
            "amenities": ["Gym", "Pool"],
            "images": [],
            "video": None,
        }
        fields.update(overrides)
        record = Property(**fields)
        test_db_session.add(record)
        test_db_session.commit()
        test_db_session.refresh(record)
        return record
    return _create_listing
