import time

import pytest
from fastapi.testclient import TestClient

from chat_backend.config import Settings
from chat_backend.main import create_app
from chat_backend.services.upload_service import UploadCredentialIssuer, build_upload_issuer
from tests.helpers import StubSigner


def test_upload_credentials_without_identity(client, signer):
    response = client.get("/api/upload")

    assert response.status_code == 200
    assert response.json() == {
        "token": "token-123",
        "expire": 1893456000,
        "signature": "abc123signature",
        "publicKey": "public_test_key",
        "urlEndpoint": "https://ik.imagekit.io/demo",
    }
    assert signer.calls == 1


def test_upload_not_configured(settings, store):
    app = create_app(settings=settings, store=store)
    with TestClient(app) as client:
        response = client.get("/api/upload")
    assert response.status_code == 503
    assert response.json() == {"error": "Image uploads are not configured"}


def test_signer_failure_is_reported(settings, store):
    issuer = UploadCredentialIssuer(
        signer=StubSigner(error=RuntimeError("signer down")),
        public_key="public_test_key",
        url_endpoint="https://ik.imagekit.io/demo",
    )
    app = create_app(settings=settings, store=store, upload_issuer=issuer)
    with TestClient(app) as client:
        response = client.get("/api/upload")
    assert response.status_code == 503
    assert response.json() == {"error": "Upload credentials unavailable"}


def test_build_issuer_requires_all_keys():
    settings = Settings(image_kit_endpoint="https://ik.imagekit.io/demo",
                        image_kit_public_key="public_test_key",
                        image_kit_private_key="")
    assert build_upload_issuer(settings) is None


@pytest.mark.filterwarnings("ignore::DeprecationWarning")
def test_imagekit_signed_parameters():
    settings = Settings(
        image_kit_endpoint="https://ik.imagekit.io/demo",
        image_kit_public_key="public_test_key",
        image_kit_private_key="private_test_key",
    )
    issuer = build_upload_issuer(settings)

    credentials = issuer.issue()
    assert credentials.token
    assert credentials.signature
    assert credentials.expire > time.time()
    assert credentials.public_key == "public_test_key"
    assert credentials.url_endpoint == "https://ik.imagekit.io/demo"
