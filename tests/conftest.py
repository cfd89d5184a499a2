"""Pytest configuration and fixtures."""

from types import SimpleNamespace
from typing import Any, Generator

import pytest
from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from azure_blob import ImageStorage
from config import settings
from database import get_session
from dependencies import get_optional_image_storage
from main import create_app
from models import Base
from schemas.property import PropertyCreate
from services.property_service import PropertyService

ADMIN_PASSWORD = "letmein"
JWT_SECRET = "test-secret"


class FakeContainerClient:
    """In-memory stand-in for azure.storage.blob.ContainerClient."""

    def __init__(
        self,
        container_name: str = "property-images",
        url: str = "https://listings.blob.core.windows.net/property-images",
        public_access: str | None = "blob",
    ) -> None:
        self.container_name = container_name
        self.url = url
        self.public_access = public_access
        self.blobs: dict[str, bytes] = {}
        self.content_types: dict[str, str | None] = {}
        self.fail_deletes = False
        self.created = True

    def upload_blob(self, name: str, data: bytes, overwrite: bool = False, content_settings: Any = None) -> None:
        if name in self.blobs and not overwrite:
            raise ResourceExistsError("The specified blob already exists.")
        self.blobs[name] = data
        self.content_types[name] = content_settings.content_type if content_settings else None

    def delete_blob(self, blob: str) -> None:
        if self.fail_deletes or blob not in self.blobs:
            raise ResourceNotFoundError("The specified blob does not exist.")
        del self.blobs[blob]

    def exists(self) -> bool:
        return self.created

    def get_container_properties(self) -> SimpleNamespace:
        return SimpleNamespace(name=self.container_name, public_access=self.public_access, last_modified=None)


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory SQLite database with the schema created."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def container() -> FakeContainerClient:
    return FakeContainerClient()


@pytest.fixture
def storage(container: FakeContainerClient) -> ImageStorage:
    return ImageStorage(container)


@pytest.fixture
def service(db_session: Session, storage: ImageStorage) -> PropertyService:
    return PropertyService(db_session, storage)


@pytest.fixture
def property_data() -> dict[str, Any]:
    """Complete create payload."""
    return {
        "title": "Sunny Loft near the Park",
        "price": 888.0,
        "address": "12 Riverside Rd, Da'an District",
        "area": 32.5,
        "room_type": "2 bedrooms 1 bath",
        "property_type": "apartment",
        "description": "Bright corner unit with a balcony.",
        "images": ["https://listings.blob.core.windows.net/property-images/property_1_a.jpg"],
        "features": ["elevator", "balcony"],
        "floor": 5,
        "total_floors": 12,
        "age": 8,
        "direction": "south",
        "management_fee": 2500.0,
        "contact_phone": "0912-345-678",
        "contact_name": "Ms. Lin",
        "is_available": True,
    }


@pytest.fixture
def make_property(service: PropertyService, property_data: dict[str, Any]):
    """Factory creating properties through the service with overrides."""

    def _make(**overrides: Any):
        return service.create_property(PropertyCreate(**{**property_data, **overrides}))

    return _make


@pytest.fixture
def admin_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings.admin, "password", ADMIN_PASSWORD)
    monkeypatch.setattr(settings.admin, "jwt_secret", JWT_SECRET)


@pytest.fixture
def app(session_factory: sessionmaker, storage: ImageStorage):
    application = create_app()

    def override_get_session() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    application.dependency_overrides[get_session] = override_get_session
    application.dependency_overrides[get_optional_image_storage] = lambda: storage
    return application


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client: TestClient, admin_settings: None) -> dict[str, str]:
    response = client.post("/api/admin/auth", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
