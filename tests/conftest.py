import pytest
from fastapi.testclient import TestClient
from lab_portal import models  # noqa: F401  registers tables on Base.metadata
from lab_portal.config import Settings
from lab_portal.database import Base
from lab_portal.main import create_app

ADMIN_KEY = "test-admin-key"
ADMIN_EMAIL = "admin@college.edu"
USER_EMAIL = "student@college.edu"
PASSWORD = "Pass1!234"


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        secret_key="test-secret-key",
        super_admin_key=ADMIN_KEY,
        google_client_id="test-client-id.apps.googleusercontent.com",
        password_hash_iterations=1000,
    )


@pytest.fixture
def app(settings):
    application = create_app(settings)
    Base.metadata.create_all(bind=application.state.engine)
    yield application
    Base.metadata.drop_all(bind=application.state.engine)
    application.state.engine.dispose()


@pytest.fixture
def session_factory(app):
    return app.state.session_factory


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin_headers(client):
    client.post("/api/auth/admin/signup", json={"email": ADMIN_EMAIL, "password": PASSWORD})
    r = client.post(
        "/api/auth/admin/signin",
        json={"email": ADMIN_EMAIL, "password": PASSWORD, "adminKey": ADMIN_KEY},
    )
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def user_headers(client):
    client.post("/api/auth/signup", json={"email": USER_EMAIL, "password": PASSWORD})
    r = client.post("/api/auth/signin", json={"email": USER_EMAIL, "password": PASSWORD})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def lab_payload():
    return {
        "labName": "Physics Lab A",
        "department": "Physics",
        "location": "Block B, Room 204",
        "capacity": 30,
        "equipments": "Oscilloscopes, signal generators",
        "availableSystem": 0,
        "workingSystem": 0,
        "incharge": "Dr. R. Iyer",
        "technician": "S. Kumar",
        "software": "LabVIEW",
        "specifications": "Core i5, 8GB RAM",
        "labType": "A",
    }


@pytest.fixture
def create_lab(client, admin_headers, lab_payload):
    def _create(**overrides):
        r = client.post("/api/admin/labs", json={**lab_payload, **overrides}, headers=admin_headers)
        assert r.status_code == 201, r.json()
        return r.json()
    return _create
