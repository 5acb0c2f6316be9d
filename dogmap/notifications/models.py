from __future__ import annotations

from pydantic import BaseModel, Field


class NotificationRequest(BaseModel):
    token: str | None = Field(default=None, description="Target device FCM token")
    title: str = ""
    body: str = ""
    type: str | None = Field(default=None, description="Notification kind, also the Android channel")
    data: dict[str, str] = Field(default_factory=dict)
    image_url: str | None = None


class NotificationResult(BaseModel):
    success: bool
    message_id: str | None = None


class NotificationDeliveryError(Exception):
    """FCM refused or never received the message."""

    def __init__(self, status_code: int, reason: str) -> None:
        super().__init__(reason)
        self.status_code = status_code
        self.reason = reason
