from .completion_service import CompletionService
from .import_service import ImportService
from .provisioning_service import ProvisioningService
from .settings_service import SettingsService
from .submission_service import SubmissionService
from .webhook_service import WebhookService

__all__ = [
    "CompletionService",
    "ImportService",
    "ProvisioningService",
    "SettingsService",
    "SubmissionService",
    "WebhookService",
]
