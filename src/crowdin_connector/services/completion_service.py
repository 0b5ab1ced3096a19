from __future__ import annotations

import logging

from crowdin_connector.domain.completion import is_translation_ready
from crowdin_connector.domain.errors import ConnectorError
from crowdin_connector.domain.file_names import parse_file_name
from crowdin_connector.domain.models import (
    FILE_APPROVED_EVENT,
    MESSAGE_STATUS,
    MESSAGE_WARNING,
    FetchSummary,
    Job,
    JobItem,
    ProjectSnapshot,
    WebhookEvent,
    WebhookResponse,
)
from crowdin_connector.ports.config_port import ConfigPort
from crowdin_connector.ports.crowdin_port import CrowdinPort
from crowdin_connector.ports.storage_port import JobStoragePort
from crowdin_connector.services.connector_config import require_project_id
from crowdin_connector.services.import_service import ImportService

logger = logging.getLogger(__name__)

NOTHING_TRANSLATED = "No job item has been translated yet."


class CompletionService:
    """Decides when remote files are done and drives their import."""

    def __init__(
        self,
        crowdin: CrowdinPort,
        importer: ImportService,
        jobs: JobStoragePort,
        config: ConfigPort,
    ) -> None:
        self._crowdin = crowdin
        self._importer = importer
        self._jobs = jobs
        self._config = config

    def update_translation(
        self,
        job_item: JobItem,
        project: ProjectSnapshot,
        file_id: int,
        target_language: str,
    ) -> bool:
        progress = self._crowdin.get_file_progress(project.project_id, file_id)
        if not is_translation_ready(project, progress, target_language):
            return False
        self._importer.import_translation(job_item, file_id, target_language)
        return True

    def handle_webhook(self, payload: dict) -> WebhookResponse:
        """Process one Crowdin file event.

        Returns 200 for every handled outcome (including recorded domain
        failures), 404 when the job or item is no longer active and 500 for
        unexpected errors so Crowdin retries delivery.
        """
        event = WebhookEvent.from_payload(payload)
        not_updated = WebhookResponse(200, {"success": True, "translations_updated": False})

        identity = parse_file_name(event.file_path)
        if identity is None:
            return not_updated
        job_id, job_item_id = identity

        try:
            return self._handle_file_event(event, job_id, job_item_id, not_updated)
        except Exception:
            logger.exception("Unexpected failure handling webhook for job item %s", job_item_id)
            return WebhookResponse(500, None)

    def _handle_file_event(
        self,
        event: WebhookEvent,
        job_id: int,
        job_item_id: int,
        not_updated: WebhookResponse,
    ) -> WebhookResponse:
        job = self._jobs.get_job(job_id)
        job_item = self._jobs.get_job_item(job_item_id)
        if job is None or job_item is None:
            logger.warning("Webhook for unknown job %s / item %s ignored.", job_id, job_item_id)
            return WebhookResponse(404, None)
        if job.is_aborted or job_item.is_aborted:
            logger.warning(
                "The job (%s) you receive translation from is not active.", job.job_id
            )
            self._jobs.add_job_message(
                job.job_id,
                f"The job id ({job_item.item_id}) you receive translation from is not active. "
                "Please contact your Crowdin manager.",
                MESSAGE_WARNING,
            )
            return WebhookResponse(404, None)

        try:
            project = self._crowdin.get_project(require_project_id(self._config))
            if project.export_approved_only and event.event != FILE_APPROVED_EVENT:
                return not_updated
            if event.file_id is None:
                return not_updated
            if self.update_translation(job_item, project, event.file_id, event.language):
                return WebhookResponse(200, {"success": True, "translations_updated": True})
        except ConnectorError as exc:
            logger.warning("Webhook for job item %s failed: %s", job_item.item_id, exc)
            self._jobs.add_job_item_message(job_item.item_id, str(exc))
        return not_updated

    def fetch_translations(self, job: Job) -> FetchSummary:
        """Poll every remote file of a job and import the finished ones."""
        mappings = self._jobs.list_remote_mappings(job.job_id)
        translated = 0
        try:
            project = self._crowdin.get_project(require_project_id(self._config))
            for mapping in mappings:
                job_item = self._jobs.get_job_item(mapping.job_item_id)
                if job_item is None:
                    continue
                if self.update_translation(
                    job_item, project, mapping.remote_file_id, job.target_language
                ):
                    translated += 1
        except ConnectorError as exc:
            logger.warning("Fetching translations for job %s failed: %s", job.job_id, exc)
            return FetchSummary(
                translated=translated,
                untranslated=len(mappings) - translated,
                message=f"Fetching translations failed with following error: {exc}",
                error=str(exc),
            )

        untranslated = len(mappings) - translated
        if not translated:
            return FetchSummary(translated=0, untranslated=untranslated, message=NOTHING_TRANSLATED)
        if untranslated > 0:
            message = (
                f"Fetched translations for {translated} job items, "
                f"{untranslated} items are not translated yet."
            )
        else:
            message = f"Fetched translations for {translated} job items."
        self._jobs.add_job_message(job.job_id, message, MESSAGE_STATUS)
        return FetchSummary(translated=translated, untranslated=untranslated, message=message)
