from unittest.mock import Mock

import pytest
import requests

from crowdin_connector.adapters import crowdin_api
from crowdin_connector.adapters.crowdin_api import CrowdinApiAdapter
from crowdin_connector.domain.errors import RemoteError
from crowdin_connector.domain.models import LanguageProgress, RemoteDirectory, StorageRef


class _FakeResponse:
    def __init__(self, status_code: int = 200, payload: dict | None = None, reason: str = "OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload
        self.content = b"" if payload is None else b"{}"

    def json(self) -> dict:
        return self._payload or {}


def _config(**values: str) -> Mock:
    config = Mock()
    config.get.side_effect = values.get
    return config


def _adapter(**values: str) -> CrowdinApiAdapter:
    values.setdefault("personal_token", "secret")
    return CrowdinApiAdapter(_config(**values), timeout=5)


def _capture(monkeypatch, response: _FakeResponse) -> list[dict]:
    calls: list[dict] = []

    def _fake_request(method, url, **kwargs):
        calls.append({"method": method, "url": url, **kwargs})
        return response

    monkeypatch.setattr(crowdin_api.requests, "request", _fake_request)
    return calls


def test_base_url_without_and_with_enterprise_domain() -> None:
    assert _adapter().base_url() == "https://api.crowdin.com/api/v2/"
    assert _adapter(domain="acme").base_url() == "https://acme.api.crowdin.com/api/v2/"


def test_get_request_sends_query_params_and_bearer_token(monkeypatch) -> None:
    calls = _capture(
        monkeypatch,
        _FakeResponse(payload={"data": [{"data": {"id": "de", "name": "German"}}]}),
    )

    languages = _adapter().list_languages()

    assert languages == {"de": "German"}
    assert calls[0]["method"] == "GET"
    assert calls[0]["url"] == "https://api.crowdin.com/api/v2/languages"
    assert calls[0]["params"] == {"limit": 500}
    assert calls[0]["headers"]["Authorization"] == "Bearer secret"
    assert calls[0]["timeout"] == 5


def test_write_request_merges_payload_into_options(monkeypatch) -> None:
    calls = _capture(
        monkeypatch,
        _FakeResponse(payload={"data": {"id": 11, "fileName": "Job_1_JobItem_2_en_de.xml"}}),
    )

    storage = _adapter().add_storage("Job_1_JobItem_2_en_de.xml", b"<content/>")

    assert storage == StorageRef(storage_id=11, file_name="Job_1_JobItem_2_en_de.xml")
    call = calls[0]
    assert call["method"] == "POST"
    assert call["url"].endswith("/storages")
    assert call["data"] == b"<content/>"
    assert call["headers"] == {
        "Authorization": "Bearer secret",
        "Content-Type": "application/octet-stream",
        "Crowdin-API-FileName": "Job_1_JobItem_2_en_de.xml",
    }
    assert "params" not in call


def test_add_file_sends_exclusions_and_returns_id(monkeypatch) -> None:
    calls = _capture(monkeypatch, _FakeResponse(payload={"data": {"id": 99}}))

    file_id = _adapter().add_file(
        5, StorageRef(storage_id=11, file_name="a.xml"), "Homepage", 3, ["fr", "uk"]
    )

    assert file_id == 99
    assert calls[0]["url"].endswith("/projects/5/files")
    assert calls[0]["json"] == {
        "storageId": 11,
        "name": "a.xml",
        "title": "Homepage",
        "directoryId": 3,
        "excludedTargetLanguages": ["fr", "uk"],
        "type": "webxml",
    }


def test_get_project_maps_snapshot(monkeypatch) -> None:
    _capture(
        monkeypatch,
        _FakeResponse(
            payload={
                "data": {"id": 5, "targetLanguageIds": ["de", "fr"], "exportApprovedOnly": True}
            }
        ),
    )

    project = _adapter().get_project(5)

    assert project.project_id == 5
    assert project.target_language_ids == ["de", "fr"]
    assert project.export_approved_only is True


def test_list_directories_and_progress_unwrap_entries(monkeypatch) -> None:
    _capture(
        monkeypatch,
        _FakeResponse(
            payload={
                "data": [
                    {"data": {"id": 1, "name": "Drupal Connector", "directoryId": None}},
                    {"data": {"id": 2, "name": "Job (4)", "directoryId": 1}},
                ]
            }
        ),
    )
    directories = _adapter().list_directories(5, "Job")
    assert directories == [
        RemoteDirectory(directory_id=1, name="Drupal Connector", parent_id=None),
        RemoteDirectory(directory_id=2, name="Job (4)", parent_id=1),
    ]

    _capture(
        monkeypatch,
        _FakeResponse(
            payload={
                "data": [
                    {"data": {"languageId": "de", "translationProgress": 100, "approvalProgress": 40}}
                ]
            }
        ),
    )
    assert _adapter().get_file_progress(5, 99) == [
        LanguageProgress(language_id="de", translation_progress=100, approval_progress=40)
    ]


def test_status_at_or_above_400_raises_remote_error(monkeypatch) -> None:
    _capture(monkeypatch, _FakeResponse(status_code=400, reason="Bad Request", payload={}))

    with pytest.raises(RemoteError) as excinfo:
        _adapter().create_directory(5, "Job (4)", parent_id=1)

    assert excinfo.value.status_code == 400
    assert excinfo.value.reason == "Bad Request"
    assert excinfo.value.is_conflict


def test_transport_failure_raises_remote_error(monkeypatch) -> None:
    def _boom(method, url, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(crowdin_api.requests, "request", _boom)

    with pytest.raises(RemoteError, match="Unable to connect") as excinfo:
        _adapter().get_user()

    assert excinfo.value.status_code is None
    assert excinfo.value.kind == "transport"


def test_delete_with_empty_body_returns_nothing(monkeypatch) -> None:
    calls = _capture(monkeypatch, _FakeResponse(status_code=204))

    assert _adapter().delete_directory(5, 3) is None
    assert calls[0]["method"] == "DELETE"
    assert calls[0]["url"].endswith("/projects/5/directories/3")


def test_get_user_accepts_token_override(monkeypatch) -> None:
    calls = _capture(monkeypatch, _FakeResponse(payload={"data": {"id": 1}}))

    assert _adapter().get_user("candidate") == {"id": 1}
    assert calls[0]["headers"]["Authorization"] == "Bearer candidate"


def test_download_does_not_send_token(monkeypatch) -> None:
    captured: dict = {}

    def _fake_get(url, **kwargs):
        captured.update(url=url, **kwargs)
        response = _FakeResponse(payload={})
        response.content = b"<content/>"
        return response

    monkeypatch.setattr(crowdin_api.requests, "get", _fake_get)

    assert _adapter().download("https://signed.example/build") == b"<content/>"
    assert captured["url"] == "https://signed.example/build"
    assert "headers" not in captured


def test_non_json_success_body_raises_remote_error(monkeypatch) -> None:
    class _HtmlResponse(_FakeResponse):
        def json(self) -> dict:
            raise requests.JSONDecodeError("Expecting value", "<html>", 0)

    response = _HtmlResponse(payload={})
    response.content = b"<html>maintenance</html>"
    _capture(monkeypatch, response)

    with pytest.raises(RemoteError, match="Invalid JSON response") as excinfo:
        _adapter().get_project(5)

    assert excinfo.value.status_code == 200
    assert excinfo.value.kind == "server"
    assert isinstance(excinfo.value.__cause__, ValueError)
