from __future__ import annotations

import logging

from crowdin_connector.domain.completion import excluded_target_languages
from crowdin_connector.domain.errors import ConnectorError, ValidationError
from crowdin_connector.domain.file_names import build_file_name, job_directory_name
from crowdin_connector.domain.models import (
    ITEM_ABORTED,
    ITEM_ACTIVE,
    JOB_ABORTED,
    JOB_ACTIVE,
    JOB_REJECTED,
    MESSAGE_ERROR,
    Job,
    JobItem,
    RemoteMapping,
)
from crowdin_connector.domain.webxml import WebXMLCodec
from crowdin_connector.ports.config_port import ConfigPort
from crowdin_connector.ports.crowdin_port import CrowdinPort
from crowdin_connector.ports.storage_port import JobStoragePort
from crowdin_connector.services.connector_config import require_project_id
from crowdin_connector.services.provisioning_service import ProvisioningService
from crowdin_connector.services.webhook_service import WebhookService

logger = logging.getLogger(__name__)


class SubmissionService:
    def __init__(
        self,
        crowdin: CrowdinPort,
        codec: WebXMLCodec,
        provisioning: ProvisioningService,
        webhooks: WebhookService,
        jobs: JobStoragePort,
        config: ConfigPort,
    ) -> None:
        self._crowdin = crowdin
        self._codec = codec
        self._provisioning = provisioning
        self._webhooks = webhooks
        self._jobs = jobs
        self._config = config

    def request_translation(self, job: Job, items: list[JobItem]) -> bool:
        if not self.request_job_items_translation(job, items):
            return False
        self._jobs.set_job_state(
            job.job_id, JOB_ACTIVE, "Job has been successfully submitted for translation."
        )
        return True

    def request_job_items_translation(self, job: Job, items: list[JobItem]) -> bool:
        """Upload one file per item and record its remote mapping.

        Any connector error rejects the whole job. Files uploaded before the
        failure keep their mappings, so a later abort still removes them.
        """
        try:
            if not items:
                raise ValidationError("The job has no items to submit.")
            project = self._crowdin.get_project(require_project_id(self._config))
            excluded = excluded_target_languages(project, job.target_language)

            root_id = self._provisioning.ensure_root_folder()
            folder_id = self._provisioning.ensure_job_folder(root_id, job_directory_name(job))

            for item in items:
                file_name = build_file_name(
                    job.job_id, item.item_id, job.source_language, job.target_language
                )
                file_id = self._provisioning.upload_file(
                    folder_id,
                    file_name,
                    item.label or file_name,
                    self._codec.encode(job, [item]),
                    excluded,
                )
                self._jobs.set_job_item_state(item.item_id, ITEM_ACTIVE)
                self._jobs.add_remote_mapping(
                    job.job_id,
                    RemoteMapping(
                        job_item_id=item.item_id,
                        remote_file_id=file_id,
                        remote_directory_id=folder_id,
                    ),
                )

            self._webhooks.ensure_webhook()
        except ConnectorError as exc:
            logger.warning("Job %s rejected: %s", job.job_id, exc)
            self._jobs.set_job_state(
                job.job_id,
                JOB_REJECTED,
                f"Job has been rejected with following error: {exc}",
            )
            return False
        return True

    def abort_translation(self, job: Job) -> bool:
        folder_id: int | None = None
        for mapping in self._jobs.list_remote_mappings(job.job_id):
            folder_id = mapping.remote_directory_id
            source = f"job item {mapping.job_item_id}"
            try:
                item = self._jobs.get_job_item(mapping.job_item_id)
                if item is not None and item.label:
                    source = item.label
                self._jobs.set_job_item_state(
                    mapping.job_item_id,
                    ITEM_ABORTED,
                    f"The translation of {source} has been aborted by the user.",
                )
            except (ConnectorError, RuntimeError) as exc:
                self._jobs.add_job_item_message(
                    mapping.job_item_id,
                    f"Failed to abort {source} item. {exc}",
                    MESSAGE_ERROR,
                )

        if folder_id is not None:
            try:
                self._provisioning.delete_folder(folder_id)
            except ConnectorError as exc:
                logger.warning("Failed to delete Crowdin directory %s: %s", folder_id, exc)
                self._jobs.add_job_message(
                    job.job_id,
                    f"Failed to remove the remote directory. {exc}",
                    MESSAGE_ERROR,
                )

        try:
            if job.is_abortable:
                self._jobs.set_job_state(
                    job.job_id, JOB_ABORTED, "Translation job has been aborted."
                )
                return True
        except ConnectorError as exc:
            self._jobs.add_job_message(
                job.job_id, f"Failed to abort translation job. {exc}", MESSAGE_ERROR
            )
        return False
