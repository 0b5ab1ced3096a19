from __future__ import annotations

from dataclasses import dataclass, field

JOB_DRAFT = "draft"
JOB_ACTIVE = "active"
JOB_REJECTED = "rejected"
JOB_ABORTED = "aborted"
JOB_FINISHED = "finished"

ITEM_INACTIVE = "inactive"
ITEM_ACTIVE = "active"
ITEM_ABORTED = "aborted"
ITEM_TRANSLATED = "translated"

MESSAGE_STATUS = "status"
MESSAGE_WARNING = "warning"
MESSAGE_ERROR = "error"

FILE_TRANSLATED_EVENT = "file.translated"
FILE_APPROVED_EVENT = "file.approved"


@dataclass
class TextUnit:
    key: str
    text: str
    parent_label: list[str] = field(default_factory=list)
    translatable: bool = True


@dataclass
class Job:
    job_id: int
    source_language: str
    target_language: str
    state: str = JOB_DRAFT
    label: str | None = None
    cdata: bool = True

    @property
    def is_aborted(self) -> bool:
        return self.state == JOB_ABORTED

    @property
    def is_abortable(self) -> bool:
        return self.state == JOB_ACTIVE


@dataclass
class JobItem:
    item_id: int
    job_id: int
    units: list[TextUnit] = field(default_factory=list)
    state: str = ITEM_INACTIVE
    label: str | None = None

    @property
    def is_aborted(self) -> bool:
        return self.state == ITEM_ABORTED

    def translatable_units(self) -> list[TextUnit]:
        return [unit for unit in self.units if unit.translatable]


@dataclass
class RemoteMapping:
    job_item_id: int
    remote_file_id: int
    remote_directory_id: int


@dataclass
class ProjectSnapshot:
    project_id: int
    target_language_ids: list[str]
    export_approved_only: bool


@dataclass
class LanguageProgress:
    language_id: str
    translation_progress: int
    approval_progress: int


@dataclass
class RemoteDirectory:
    directory_id: int
    name: str
    parent_id: int | None = None


@dataclass
class StorageRef:
    storage_id: int
    file_name: str


@dataclass
class WebhookEvent:
    file_path: str
    file_id: int | None
    language: str
    event: str

    @classmethod
    def from_payload(cls, payload: dict) -> "WebhookEvent":
        raw_file_id = payload.get("file_id")
        try:
            file_id = int(raw_file_id) if raw_file_id is not None else None
        except (TypeError, ValueError):
            file_id = None
        return cls(
            file_path=str(payload.get("file") or ""),
            file_id=file_id,
            language=str(payload.get("language") or ""),
            event=str(payload.get("event") or ""),
        )


@dataclass
class WebhookResponse:
    status_code: int
    body: dict | None


@dataclass
class FetchSummary:
    translated: int
    untranslated: int
    message: str
    error: str | None = None

    @property
    def nothing_translated(self) -> bool:
        return self.translated == 0
