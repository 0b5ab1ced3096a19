from __future__ import annotations

import logging

from crowdin_connector.domain.errors import RemoteError
from crowdin_connector.domain.file_names import ROOT_DIRECTORY_NAME
from crowdin_connector.domain.models import RemoteDirectory
from crowdin_connector.ports.config_port import ConfigPort
from crowdin_connector.ports.crowdin_port import CrowdinPort
from crowdin_connector.services.connector_config import require_project_id

logger = logging.getLogger(__name__)


class ProvisioningService:
    """Idempotent creation of the remote directories and files of a job."""

    def __init__(self, crowdin: CrowdinPort, config: ConfigPort) -> None:
        self._crowdin = crowdin
        self._config = config

    def ensure_root_folder(self) -> int:
        return self._ensure_directory(ROOT_DIRECTORY_NAME, parent_id=None)

    def ensure_job_folder(self, root_id: int, name: str) -> int:
        return self._ensure_directory(name, parent_id=root_id)

    def upload_file(
        self,
        folder_id: int,
        file_name: str,
        title: str,
        content: bytes,
        excluded_target_languages: list[str],
    ) -> int:
        project_id = require_project_id(self._config)
        storage = self._crowdin.add_storage(file_name, content)
        file_id = self._crowdin.add_file(
            project_id,
            storage,
            title,
            folder_id,
            excluded_target_languages,
        )
        logger.info("Uploaded %s as Crowdin file %s", file_name, file_id)
        return file_id

    def delete_folder(self, folder_id: int) -> None:
        project_id = require_project_id(self._config)
        self._crowdin.delete_directory(project_id, folder_id)
        logger.info("Deleted Crowdin directory %s", folder_id)

    def _ensure_directory(self, name: str, parent_id: int | None) -> int:
        project_id = require_project_id(self._config)
        existing = self._find_directory(project_id, name, parent_id)
        if existing is not None:
            return existing.directory_id
        try:
            created = self._crowdin.create_directory(project_id, name, parent_id)
        except RemoteError as exc:
            if not exc.is_conflict:
                raise
            # Lost a creation race; the winner's directory is the one to use.
            existing = self._find_directory(project_id, name, parent_id)
            if existing is None:
                raise
            return existing.directory_id
        logger.info("Created Crowdin directory %r (%s)", name, created.directory_id)
        return created.directory_id

    def _find_directory(
        self, project_id: int, name: str, parent_id: int | None
    ) -> RemoteDirectory | None:
        for directory in self._crowdin.list_directories(project_id, name):
            if directory.name == name and directory.parent_id == parent_id:
                return directory
        return None
