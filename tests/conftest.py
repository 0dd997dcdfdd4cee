import pytest
from fastapi.testclient import TestClient

from zaprelay.config import Settings
from zaprelay.database import Database
from zaprelay.deps import get_automation_engine, get_gateway
from zaprelay.main import create_app
from zaprelay.models import TenantUser
from zaprelay.services.auth_service import create_access_token, hash_password

TEST_JWT_SECRET = "test-secret"
BOT_NUMBER = "5511888"


class FakeAutomationEngine:
    """Stands in for the n8n client; records every forwarded payload."""

    def __init__(self, response=None, error=None):
        self.response = {"reply": "Olá! Como posso ajudar?"} if response is None else response
        self.error = error
        self.calls = []

    async def invoke(self, payload):
        self.calls.append(payload)
        if self.error:
            raise self.error
        return self.response


class FakeGateway:
    def __init__(self, response=None, error=None):
        self.response = {"status": "sent"} if response is None else response
        self.error = error
        self.calls = []

    async def send_text(self, number, text):
        self.calls.append((number, text))
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        jwt_secret=TEST_JWT_SECRET,
        n8n_webhook_url="http://n8n.test/webhook/zap",
        uazapi_url="http://gateway.test",
        uazapi_token="gateway-token",
    )


@pytest.fixture
def database(settings):
    db = Database(settings.database_url)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def automation():
    return FakeAutomationEngine()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def app(settings, automation, gateway):
    application = create_app(settings)
    application.dependency_overrides[get_automation_engine] = lambda: automation
    application.dependency_overrides[get_gateway] = lambda: gateway
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def tenant_factory(db_session):
    def _create(email="dono@example.com", bot_number=BOT_NUMBER, password="segredo"):
        tenant = TenantUser(email=email, password_hash=hash_password(password), bot_number=bot_number)
        db_session.add(tenant)
        db_session.commit()
        db_session.refresh(tenant)
        return tenant

    return _create


@pytest.fixture
def tenant(tenant_factory):
    return tenant_factory()


@pytest.fixture
def auth_headers(tenant):
    token = create_access_token(tenant, TEST_JWT_SECRET)
    return {"Authorization": f"Bearer {token}"}
