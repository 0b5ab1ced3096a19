from __future__ import annotations

from typing import Any

from crowdin_connector.adapters.crowdin_api import CrowdinApiAdapter
from crowdin_connector.adapters.sqlite_config import SQLiteConfigStorage
from crowdin_connector.domain.webxml import WebXMLCodec
from crowdin_connector.ports.config_port import ConfigPort
from crowdin_connector.ports.storage_port import JobStoragePort
from crowdin_connector.services.completion_service import CompletionService
from crowdin_connector.services.import_service import ImportService
from crowdin_connector.services.provisioning_service import ProvisioningService
from crowdin_connector.services.settings_service import SettingsService
from crowdin_connector.services.submission_service import SubmissionService
from crowdin_connector.services.webhook_service import WebhookService
from crowdin_connector.settings import (
    CROWDIN_HTTP_TIMEOUT,
    CROWDIN_SETTINGS_DB,
    CROWDIN_WEBHOOK_URL,
)


def build_services(
    jobs: JobStoragePort,
    config: ConfigPort | None = None,
    settings_db: str = CROWDIN_SETTINGS_DB,
    webhook_url: str = CROWDIN_WEBHOOK_URL,
) -> dict[str, Any]:
    config = config or SQLiteConfigStorage(settings_db)
    crowdin = CrowdinApiAdapter(config, timeout=CROWDIN_HTTP_TIMEOUT)
    codec = WebXMLCodec()
    provisioning = ProvisioningService(crowdin, config)
    webhooks = WebhookService(crowdin, config, webhook_url)
    importer = ImportService(crowdin, codec, jobs, config)
    return {
        "completion_service": CompletionService(crowdin, importer, jobs, config),
        "import_service": importer,
        "provisioning_service": provisioning,
        "settings_service": SettingsService(crowdin, config),
        "submission_service": SubmissionService(
            crowdin, codec, provisioning, webhooks, jobs, config
        ),
        "webhook_service": webhooks,
        "codec": codec,
        "config": config,
        "crowdin": crowdin,
    }
