"""Image upload credentials router."""
from typing import Optional

from fastapi import APIRouter, Depends, Request

from chat_backend.errors import UploadCredentialError
from chat_backend.schemas.upload import UploadCredentials
from chat_backend.services.upload_service import UploadCredentialIssuer

router = APIRouter(tags=["upload"])


def get_upload_issuer(request: Request) -> UploadCredentialIssuer:
    issuer: Optional[UploadCredentialIssuer] = request.app.state.upload_issuer
    if issuer is None:
        raise UploadCredentialError("Image uploads are not configured")
    return issuer


@router.get("/upload", response_model=UploadCredentials)
def get_upload_credentials(issuer: UploadCredentialIssuer = Depends(get_upload_issuer)):
    """Signed parameters for a direct client upload. No sign-in required."""
    return issuer.issue()
