import pytest
from fastapi.testclient import TestClient

from dbplayground.core.config import Settings
from dbplayground.interfaces.dependencies import get_chat_client, get_database
from dbplayground.main import create_application
from tests.fakes import FakeChatClient, FakeDatabase


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def fake_chat() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def app(fake_db, fake_chat):
    application = create_application(Settings())
    application.dependency_overrides[get_database] = lambda: fake_db
    application.dependency_overrides[get_chat_client] = lambda: fake_chat
    # The lifespan is not run by a bare TestClient, so wire state directly.
    application.state.database = fake_db
    application.state.chat_client = fake_chat
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
