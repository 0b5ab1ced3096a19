from __future__ import annotations

import logging

from crowdin_connector.domain.errors import (
    EmptyPayloadError,
    IdentityMismatchError,
    ValidationError,
)
from crowdin_connector.domain.models import JobItem
from crowdin_connector.domain.webxml import WebXMLCodec
from crowdin_connector.ports.config_port import ConfigPort
from crowdin_connector.ports.crowdin_port import CrowdinPort
from crowdin_connector.ports.storage_port import JobStoragePort
from crowdin_connector.services.connector_config import require_project_id

logger = logging.getLogger(__name__)


class ImportService:
    def __init__(
        self,
        crowdin: CrowdinPort,
        codec: WebXMLCodec,
        jobs: JobStoragePort,
        config: ConfigPort,
    ) -> None:
        self._crowdin = crowdin
        self._codec = codec
        self._jobs = jobs
        self._config = config

    def import_translation(
        self, job_item: JobItem, file_id: int, target_language: str
    ) -> dict[str, str]:
        """Fetch a built translation and apply it to the item's job.

        Importing the same build twice re-applies identical content, so the
        webhook and polling paths may both reach this for one file.
        """
        url = self._crowdin.build_file_translation(
            require_project_id(self._config), file_id, target_language
        )
        document = self._codec.load(self._crowdin.download(url))

        try:
            validated_job = self._codec.validate_and_identify(document, self._jobs)
        except EmptyPayloadError as exc:
            raise EmptyPayloadError(
                f"Could not process received translation data for the target file {file_id}. {exc}"
            ) from exc
        except ValidationError as exc:
            raise IdentityMismatchError(
                f"Failed to validate remote translation, import aborted. {exc}"
            ) from exc

        if validated_job.job_id != job_item.job_id:
            raise IdentityMismatchError(
                f"The remote translation (File ID: {file_id}, Job ID: {validated_job.job_id}) "
                f"does not match the current job ID {job_item.job_id}."
            )

        data = self._codec.decode(document)
        self._jobs.add_translated_data(job_item.job_id, data)
        self._jobs.add_job_item_message(job_item.item_id, "The translation has been received.")
        logger.info(
            "Imported %d units from Crowdin file %s into job %s",
            len(data),
            file_id,
            job_item.job_id,
        )
        return data
