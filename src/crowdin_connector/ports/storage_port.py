from __future__ import annotations

from typing import Protocol

from crowdin_connector.domain.models import Job, JobItem, RemoteMapping


class JobStoragePort(Protocol):
    def get_job(self, job_id: int) -> Job | None:
        """Return a job by id, or None if missing."""

    def get_job_item(self, item_id: int) -> JobItem | None:
        """Return a job item by id, or None if missing."""

    def set_job_state(self, job_id: int, state: str, message: str | None = None) -> None:
        """Transition a job, raising StateTransitionError if refused."""

    def set_job_item_state(
        self, item_id: int, state: str, message: str | None = None
    ) -> None:
        """Transition a job item, raising StateTransitionError if refused."""

    def add_job_message(self, job_id: int, message: str, level: str = "status") -> None:
        """Attach a user-visible message to a job."""

    def add_job_item_message(
        self, item_id: int, message: str, level: str = "status"
    ) -> None:
        """Attach a user-visible message to a job item."""

    def add_translated_data(self, job_id: int, data: dict[str, str]) -> None:
        """Apply translated units keyed by '<item id>][<key>' to a job."""

    def add_remote_mapping(self, job_id: int, mapping: RemoteMapping) -> None:
        """Persist the link between a job item and its remote file."""

    def list_remote_mappings(self, job_id: int) -> list[RemoteMapping]:
        """Return remote mappings for a job in creation order."""
