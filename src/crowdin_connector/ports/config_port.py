from __future__ import annotations

from typing import Protocol, runtime_checkable

PERSONAL_TOKEN = "personal_token"
PROJECT_ID = "project_id"
DOMAIN = "domain"
WEBHOOK_ID = "webhook_id"


@runtime_checkable
class ConfigPort(Protocol):
    def get(self, key: str) -> str | None:
        """Return a connector setting, or None if unset."""

    def set(self, key: str, value: str | None) -> None:
        """Persist a connector setting; None removes it."""
