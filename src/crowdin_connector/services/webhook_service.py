from __future__ import annotations

import logging

from crowdin_connector.domain.models import FILE_APPROVED_EVENT, FILE_TRANSLATED_EVENT
from crowdin_connector.ports.config_port import WEBHOOK_ID, ConfigPort
from crowdin_connector.ports.crowdin_port import CrowdinPort
from crowdin_connector.services.connector_config import require_project_id

logger = logging.getLogger(__name__)

WEBHOOK_NAME = "Files Webhooks for Drupal Connector"


class WebhookService:
    def __init__(self, crowdin: CrowdinPort, config: ConfigPort, webhook_url: str) -> None:
        self._crowdin = crowdin
        self._config = config
        self._webhook_url = webhook_url

    def ensure_webhook(self) -> str | None:
        """Register the file webhook once per connector configuration."""
        existing = self._config.get(WEBHOOK_ID)
        if existing:
            return existing
        if not self._webhook_url:
            logger.warning("Webhook URL is not configured; translations must be fetched manually.")
            return None
        webhook_id = self._crowdin.add_webhook(
            require_project_id(self._config),
            WEBHOOK_NAME,
            self._webhook_url,
            [FILE_TRANSLATED_EVENT, FILE_APPROVED_EVENT],
        )
        self._config.set(WEBHOOK_ID, str(webhook_id))
        logger.info("Registered Crowdin webhook %s", webhook_id)
        return str(webhook_id)
