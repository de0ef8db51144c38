from pydantic import BaseModel
from typing import Optional, Any

class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    error: str
    code: str
    details: Optional[Any] = None


class UrlResponse(BaseModel):
    """
    Redirect target for a provider-hosted page (checkout, billing portal).
    """
    url: str


class OkResponse(BaseModel):
    ok: bool = True


class WebhookAck(BaseModel):
    received: bool = True
