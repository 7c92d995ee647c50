import pytest
from fastapi.testclient import TestClient

from chat_backend.config import Settings
from chat_backend.db.store import ChatStore
from chat_backend.main import create_app
from chat_backend.services.upload_service import UploadCredentialIssuer
from tests.helpers import JWT_SECRET, StubSigner


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        auth_jwt_key=JWT_SECRET,
        auth_jwt_algorithms=["HS256"],
        auth_jwt_issuer=None,
        auth_jwt_audience=None,
        image_kit_endpoint="",
        image_kit_public_key="",
        image_kit_private_key="",
        client_url="http://localhost:5173",
        environment="development",
    )


@pytest.fixture
def store(settings):
    return ChatStore(settings.database_url)


@pytest.fixture
def signer():
    return StubSigner()


@pytest.fixture
def upload_issuer(signer):
    return UploadCredentialIssuer(
        signer=signer,
        public_key="public_test_key",
        url_endpoint="https://ik.imagekit.io/demo",
    )


@pytest.fixture
def app(settings, store, upload_issuer):
    return create_app(settings=settings, store=store, upload_issuer=upload_issuer)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
