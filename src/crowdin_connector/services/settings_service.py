from __future__ import annotations

import logging

from crowdin_connector.domain.errors import ConnectorError, ValidationError
from crowdin_connector.ports.config_port import DOMAIN, PERSONAL_TOKEN, PROJECT_ID, ConfigPort
from crowdin_connector.ports.crowdin_port import CrowdinPort

logger = logging.getLogger(__name__)

TOKEN_MASK = "**********"


class SettingsService:
    def __init__(self, crowdin: CrowdinPort, config: ConfigPort) -> None:
        self._crowdin = crowdin
        self._config = config

    def check_available(self) -> tuple[bool, str | None]:
        if self._config.get(PERSONAL_TOKEN):
            return True, None
        return False, "Crowdin is not available. Make sure it is properly configured."

    def masked_token(self) -> str:
        return TOKEN_MASK if self._config.get(PERSONAL_TOKEN) else ""

    def supported_languages(self) -> dict[str, str]:
        try:
            return self._crowdin.list_languages()
        except ConnectorError as exc:
            logger.warning("Failed to list Crowdin languages: %s", exc)
            return {}

    def save_settings(self, token: str, project_id: str, domain: str | None = None) -> None:
        """Store connector settings, keeping the token only if Crowdin accepts it.

        A masked token means "keep the stored token".
        """
        self._config.set(PROJECT_ID, project_id)
        self._config.set(DOMAIN, domain or None)

        resolved = self._config.get(PERSONAL_TOKEN) if token == TOKEN_MASK else token
        if resolved and self._is_valid_token(resolved):
            self._config.set(PERSONAL_TOKEN, resolved)
            return

        self._config.set(PERSONAL_TOKEN, None)
        raise ValidationError("Personal Access Token is not valid.")

    def _is_valid_token(self, token: str) -> bool:
        try:
            return bool(self._crowdin.get_user(token))
        except ConnectorError as exc:
            logger.warning("Crowdin rejected the personal token: %s", exc)
            return False
