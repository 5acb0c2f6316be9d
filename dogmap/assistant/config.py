from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class AssistantConfig:
    api_key: str = os.getenv("GEMINI_API_KEY", os.getenv("API_KEY", ""))
    model: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    timeout_ms: int = 30_000
    enabled: bool = True


DEFAULT_ASSISTANT_CONFIG = AssistantConfig()
