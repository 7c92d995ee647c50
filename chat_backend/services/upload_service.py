"""Upload credentials for direct client uploads to ImageKit."""
import logging
from typing import Any, Optional

from imagekitio import ImageKit

from chat_backend.config import Settings
from chat_backend.errors import UploadCredentialError
from chat_backend.schemas.upload import UploadCredentials

logger = logging.getLogger(__name__)


class UploadCredentialIssuer:
    """Asks the ImageKit SDK for short-lived signed upload parameters."""

    def __init__(self, signer: Any, public_key: str, url_endpoint: str):
        self.signer = signer
        self.public_key = public_key
        self.url_endpoint = url_endpoint

    def issue(self) -> UploadCredentials:
        try:
            params = self.signer.get_authentication_parameters()
        except Exception as e:
            logger.error(f"Upload credential signing failed: {str(e)}", exc_info=True)
            raise UploadCredentialError() from e

        return UploadCredentials(
            token=params["token"],
            expire=int(params["expire"]),
            signature=params["signature"],
            public_key=self.public_key,
            url_endpoint=self.url_endpoint,
        )


def build_upload_issuer(settings: Settings) -> Optional[UploadCredentialIssuer]:
    """Issuer backed by ImageKit, or None when ImageKit keys are not configured."""
    if not settings.image_kit_configured:
        logger.warning("ImageKit is not configured; /api/upload will answer 503")
        return None

    imagekit = ImageKit(
        private_key=settings.image_kit_private_key,
        public_key=settings.image_kit_public_key,
        url_endpoint=settings.image_kit_endpoint,
    )
    return UploadCredentialIssuer(
        signer=imagekit,
        public_key=settings.image_kit_public_key,
        url_endpoint=settings.image_kit_endpoint,
    )
