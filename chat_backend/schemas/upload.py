"""Upload credential schema."""
from pydantic import BaseModel, ConfigDict, Field


class UploadCredentials(BaseModel):
    """Signed parameters for a direct client-side upload to ImageKit."""
    model_config = ConfigDict(populate_by_name=True)

    token: str
    expire: int
    signature: str
    public_key: str = Field(..., alias="publicKey")
    url_endpoint: str = Field(..., alias="urlEndpoint")
