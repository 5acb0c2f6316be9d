from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _private_key_from_env() -> str:
    # Keys pasted into .env usually carry literal "\n" sequences.
    return os.getenv("FIREBASE_PRIVATE_KEY", "").replace("\\n", "\n")


@dataclass(frozen=True)
class NotificationConfig:
    project_id: str = os.getenv("FIREBASE_PROJECT_ID", "")
    client_email: str = os.getenv("FIREBASE_CLIENT_EMAIL", "")
    private_key: str = _private_key_from_env()
    token_uri: str = "https://oauth2.googleapis.com/token"
    timeout: float = 10.0

    @property
    def is_configured(self) -> bool:
        return bool(self.project_id and self.client_email and self.private_key)

    @property
    def send_url(self) -> str:
        return f"https://fcm.googleapis.com/v1/projects/{self.project_id}/messages:send"


DEFAULT_NOTIFICATION_CONFIG = NotificationConfig()
