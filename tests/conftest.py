# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Builds an app around an in-memory MongoDB (mongomock), a fake geocoder
#   and a mailer that records messages instead of sending them
# - Factories for users and bearer tokens
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-key-0123456789")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import mongomock
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.config import Settings
from app.context import AppContext
from app.exceptions import EmailDeliveryError, GeocodingError
from app.main import create_app
from lib.geocoder import GeoLocation
from lib.mongo_client import BOOTCAMPS, USERS, MongoClientFactory
from lib.security import create_access_token, hash_password
from lib.utils import slugify, utcnow

TEST_PASSWORD = "123456"

BOSTON = GeoLocation(
    latitude=42.350846,
    longitude=-71.104028,
    formatted_address="233 Bay State Rd, Boston, MA 02215, US",
    street="233 Bay State Rd",
    city="Boston",
    state="MA",
    zipcode="02215",
    country="US",
)


# =============================================================================
# Fakes
# =============================================================================

class FakeGeocoder:
    """Resolves every query to Boston, except queries listed in `unknown`."""

    def __init__(self, location: GeoLocation = BOSTON):
        self.location = location
        self.unknown = {"00000"}
        self.queries: list[str] = []

    def geocode(self, query: str) -> GeoLocation:
        self.queries.append(query)
        if query in self.unknown:
            raise GeocodingError(query, "No results")
        return self.location


class FakeMailer:
    """Keeps sent messages in memory; set `fail` to simulate SMTP errors."""

    def __init__(self):
        self.sent: list[dict[str, str]] = []
        self.fail = False

    def send(self, to: str, subject: str, body: str) -> None:
        if self.fail:
            raise EmailDeliveryError("connection refused")
        self.sent.append({"to": to, "subject": subject, "body": body})


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def settings(tmp_path):
    """Settings with a small upload limit and a temporary upload directory."""
    return Settings(
        FILE_UPLOAD_PATH=str(tmp_path / "uploads"),
        MAX_FILE_UPLOAD=1000,
    )


@pytest.fixture
def db():
    """Fresh in-memory database with the application indexes."""
    client = mongomock.MongoClient(tz_aware=True)
    database = client["devcamper_test"]
    MongoClientFactory.ensure_indexes(database)
    yield database
    client.close()


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def context(settings, db, geocoder, mailer):
    return AppContext(settings=settings, db=db, geocoder=geocoder, mailer=mailer)


@pytest.fixture
def client(context):
    """TestClient running the app lifespan against the test context."""
    with TestClient(create_app(context=context)) as test_client:
        yield test_client


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def password_hash():
    """bcrypt is slow; hash the shared test password once."""
    return hash_password(TEST_PASSWORD)


@pytest.fixture
def create_user(db, password_hash):
    """Factory inserting a user directly into the database."""

    def _create(name: str, email: str, role: str = "user") -> dict:
        doc = {
            "name": name,
            "email": email,
            "role": role,
            "password": password_hash,
            "createdAt": utcnow(),
        }
        db[USERS].insert_one(doc)
        return doc

    return _create


@pytest.fixture
def auth_headers(settings):
    """Factory building an Authorization header for a user document."""

    def _headers(user: dict) -> dict:
        token = create_access_token(
            user_id=str(user["_id"]),
            role=user["role"],
            secret=settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def admin(create_user):
    return create_user("Admin Account", "admin@gmail.com", "admin")


@pytest.fixture
def publisher(create_user):
    return create_user("Publisher Account", "publisher@gmail.com", "publisher")


@pytest.fixture
def other_publisher(create_user):
    return create_user("John Doe", "john@gmail.com", "publisher")


@pytest.fixture
def reviewer(create_user):
    return create_user("User Account", "user@gmail.com", "user")


# =============================================================================
# Bootcamp Fixtures
# =============================================================================

@pytest.fixture
def bootcamp_payload():
    """Valid request body for creating a bootcamp."""
    return {
        "name": "Devworks Bootcamp",
        "description": "Devworks is a full stack JavaScript Bootcamp located in the heart of Boston",
        "website": "https://devworks.com",
        "phone": "(111) 111-1111",
        "email": "enroll@devworks.com",
        "address": "233 Bay State Rd Boston MA 02215",
        "careers": ["Web Development", "UI/UX", "Business"],
        "housing": True,
        "jobAssistance": True,
        "jobGuarantee": False,
        "acceptGi": True,
    }


@pytest.fixture
def insert_bootcamp(db):
    """Factory inserting a bootcamp document directly (no geocoding, no claim)."""

    def _insert(name: str, owner: dict | None = None, **fields) -> dict:
        doc = {
            "name": name,
            "slug": slugify(name),
            "description": f"{name} description",
            "careers": ["Web Development"],
            "housing": False,
            "jobAssistance": False,
            "jobGuarantee": False,
            "acceptGi": False,
            "photo": "no-photo.jpg",
            "location": BOSTON.to_geojson(),
            "user": owner["_id"] if owner else ObjectId(),
            "createdAt": utcnow(),
        }
        doc.update(fields)
        db[BOOTCAMPS].insert_one(doc)
        return doc

    return _insert


@pytest.fixture
def bootcamp(client, publisher, auth_headers, bootcamp_payload):
    """A bootcamp created through the API by `publisher`."""
    response = client.post("/api/v1/bootcamps", json=bootcamp_payload, headers=auth_headers(publisher))
    assert response.status_code == 201
    return response.json()["data"]
