from datetime import datetime, timezone
from unittest.mock import Mock, call

from crowdin_connector.domain.errors import RemoteError, StateTransitionError
from crowdin_connector.domain.models import (
    Job,
    JobItem,
    ProjectSnapshot,
    RemoteMapping,
    TextUnit,
)
from crowdin_connector.domain.webxml import WebXMLCodec
from crowdin_connector.services.submission_service import SubmissionService


def _job(state: str = "active") -> Job:
    return Job(
        job_id=42, source_language="en", target_language="de", state=state, label="Homepage"
    )


def _item(item_id: int, label: str | None = None) -> JobItem:
    return JobItem(
        item_id=item_id,
        job_id=42,
        units=[TextUnit(key="title][0][value", text=f"Text {item_id}")],
        label=label,
    )


def _build() -> tuple[SubmissionService, Mock, Mock, Mock, Mock]:
    crowdin = Mock()
    crowdin.get_project.return_value = ProjectSnapshot(
        project_id=5, target_language_ids=["de", "fr", "uk"], export_approved_only=False
    )
    provisioning = Mock()
    provisioning.ensure_root_folder.return_value = 10
    provisioning.ensure_job_folder.return_value = 20
    provisioning.upload_file.side_effect = [101, 102]
    webhooks = Mock()
    jobs = Mock()
    config = Mock()
    config.get.side_effect = {"project_id": "5"}.get
    codec = WebXMLCodec(clock=lambda: datetime(2025, 1, 1, tzinfo=timezone.utc))
    service = SubmissionService(crowdin, codec, provisioning, webhooks, jobs, config)
    return service, crowdin, provisioning, webhooks, jobs


def test_request_translation_uploads_one_file_per_item() -> None:
    service, _, provisioning, webhooks, jobs = _build()
    parent = Mock()
    parent.attach_mock(provisioning, "provisioning")
    parent.attach_mock(webhooks, "webhooks")

    assert service.request_translation(_job(), [_item(7, "About"), _item(8)]) is True

    provisioning.ensure_job_folder.assert_called_once_with(10, "Homepage (42)")
    first_upload = provisioning.upload_file.call_args_list[0].args
    assert first_upload[0] == 20
    assert first_upload[1] == "Job_42_JobItem_7_en_de.xml"
    assert first_upload[2] == "About"
    assert b'job-id="42"' in first_upload[3]
    assert first_upload[4] == ["fr", "uk"]
    assert provisioning.upload_file.call_args_list[1].args[1] == "Job_42_JobItem_8_en_de.xml"

    assert jobs.set_job_item_state.call_args_list == [call(7, "active"), call(8, "active")]
    assert jobs.add_remote_mapping.call_args_list == [
        call(42, RemoteMapping(job_item_id=7, remote_file_id=101, remote_directory_id=20)),
        call(42, RemoteMapping(job_item_id=8, remote_file_id=102, remote_directory_id=20)),
    ]
    jobs.set_job_state.assert_called_once_with(
        42, "active", "Job has been successfully submitted for translation."
    )
    call_names = [name for name, _, _ in parent.mock_calls]
    assert call_names.index("provisioning.ensure_root_folder") < call_names.index(
        "provisioning.ensure_job_folder"
    )
    assert call_names.index("provisioning.upload_file") < call_names.index(
        "webhooks.ensure_webhook"
    )


def test_upload_failure_rejects_job_without_rollback() -> None:
    service, _, provisioning, webhooks, jobs = _build()
    provisioning.upload_file.side_effect = [101, RemoteError(500, "Server Error")]

    assert service.request_translation(_job(), [_item(7), _item(8)]) is False

    jobs.add_remote_mapping.assert_called_once()
    webhooks.ensure_webhook.assert_not_called()
    provisioning.delete_folder.assert_not_called()
    job_id, state, message = jobs.set_job_state.call_args.args
    assert (job_id, state) == (42, "rejected")
    assert message.startswith("Job has been rejected with following error: Crowdin API error #500")
    assert jobs.set_job_state.call_count == 1


def test_abort_isolates_item_failures_and_deletes_folder_once() -> None:
    service, _, provisioning, _, jobs = _build()
    jobs.list_remote_mappings.return_value = [
        RemoteMapping(job_item_id=1, remote_file_id=101, remote_directory_id=20),
        RemoteMapping(job_item_id=2, remote_file_id=102, remote_directory_id=20),
        RemoteMapping(job_item_id=3, remote_file_id=103, remote_directory_id=20),
    ]
    jobs.get_job_item.side_effect = lambda item_id: _item(item_id, f"Item {item_id}")
    jobs.set_job_item_state.side_effect = [None, StateTransitionError("locked"), None]

    assert service.abort_translation(_job()) is True

    assert [c.args[0] for c in jobs.set_job_item_state.call_args_list] == [1, 2, 3]
    assert all(c.args[1] == "aborted" for c in jobs.set_job_item_state.call_args_list)
    jobs.add_job_item_message.assert_called_once_with(
        2, "Failed to abort Item 2 item. locked", "error"
    )
    provisioning.delete_folder.assert_called_once_with(20)
    jobs.set_job_state.assert_called_once_with(42, "aborted", "Translation job has been aborted.")


def test_abort_of_non_abortable_job_reports_failure() -> None:
    service, _, provisioning, _, jobs = _build()
    jobs.list_remote_mappings.return_value = []

    assert service.abort_translation(_job(state="finished")) is False

    provisioning.delete_folder.assert_not_called()
    jobs.set_job_state.assert_not_called()


def test_abort_records_folder_deletion_failure() -> None:
    service, _, provisioning, _, jobs = _build()
    jobs.list_remote_mappings.return_value = [
        RemoteMapping(job_item_id=1, remote_file_id=101, remote_directory_id=20)
    ]
    jobs.get_job_item.return_value = None
    provisioning.delete_folder.side_effect = RemoteError(404, "Not Found")

    assert service.abort_translation(_job()) is True

    job_id, message, level = jobs.add_job_message.call_args.args
    assert job_id == 42
    assert message.startswith("Failed to remove the remote directory.")
    assert level == "error"


def test_request_translation_without_items_rejects_job() -> None:
    service, crowdin, provisioning, webhooks, jobs = _build()

    assert service.request_translation(_job(), []) is False

    crowdin.get_project.assert_not_called()
    provisioning.upload_file.assert_not_called()
    webhooks.ensure_webhook.assert_not_called()
    jobs.set_job_state.assert_called_once_with(
        42,
        "rejected",
        "Job has been rejected with following error: The job has no items to submit.",
    )


def test_abort_continues_when_item_lookup_fails() -> None:
    service, _, provisioning, _, jobs = _build()
    jobs.list_remote_mappings.return_value = [
        RemoteMapping(job_item_id=1, remote_file_id=101, remote_directory_id=20),
        RemoteMapping(job_item_id=2, remote_file_id=102, remote_directory_id=20),
    ]
    jobs.get_job_item.side_effect = [RuntimeError("Failed to load job item 1"), _item(2, "About")]

    assert service.abort_translation(_job()) is True

    jobs.add_job_item_message.assert_called_once_with(
        1, "Failed to abort job item 1 item. Failed to load job item 1", "error"
    )
    jobs.set_job_item_state.assert_called_once_with(
        2, "aborted", "The translation of About has been aborted by the user."
    )
    provisioning.delete_folder.assert_called_once_with(20)
    jobs.set_job_state.assert_called_once_with(42, "aborted", "Translation job has been aborted.")
