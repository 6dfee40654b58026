"""API response data models."""

from pydantic import BaseModel


class WebhookResponse(BaseModel):
    """Response from webhook handler."""

    status: str
    message: str


class WebhookResult(BaseModel):
    """HTTP status and message produced for one service hook delivery."""

    status_code: int
    message: str
