from __future__ import annotations

from typing import Protocol

from crowdin_connector.domain.models import (
    LanguageProgress,
    ProjectSnapshot,
    RemoteDirectory,
    StorageRef,
)


class CrowdinPort(Protocol):
    def list_languages(self) -> dict[str, str]:
        """Return supported languages keyed by Crowdin language id."""

    def get_project(self, project_id: int) -> ProjectSnapshot:
        """Return a fresh snapshot of a project."""

    def get_user(self, token: str | None = None) -> dict:
        """Return the authenticated user; token overrides the stored one."""

    def list_directories(self, project_id: int, name_filter: str) -> list[RemoteDirectory]:
        """Return project directories whose name matches the filter."""

    def create_directory(
        self, project_id: int, name: str, parent_id: int | None = None
    ) -> RemoteDirectory:
        """Create a directory and return it."""

    def delete_directory(self, project_id: int, directory_id: int) -> None:
        """Delete a directory and everything in it."""

    def add_storage(self, file_name: str, content: bytes) -> StorageRef:
        """Upload raw bytes and return the storage handle."""

    def add_file(
        self,
        project_id: int,
        storage: StorageRef,
        title: str,
        directory_id: int,
        excluded_target_languages: list[str],
    ) -> int:
        """Create a project file from a storage handle and return its id."""

    def get_file_progress(self, project_id: int, file_id: int) -> list[LanguageProgress]:
        """Return per-language progress for a file."""

    def build_file_translation(
        self, project_id: int, file_id: int, target_language: str
    ) -> str:
        """Build a translated file and return its download URL."""

    def download(self, url: str) -> bytes:
        """Fetch a built file."""

    def add_webhook(self, project_id: int, name: str, url: str, events: list[str]) -> int:
        """Register a webhook and return its id."""
