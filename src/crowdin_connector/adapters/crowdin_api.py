from __future__ import annotations

import logging
from typing import Any

import requests

from crowdin_connector.domain.errors import KIND_SERVER, RemoteError
from crowdin_connector.domain.models import (
    LanguageProgress,
    ProjectSnapshot,
    RemoteDirectory,
    StorageRef,
)
from crowdin_connector.ports.config_port import DOMAIN, PERSONAL_TOKEN, ConfigPort
from crowdin_connector.ports.crowdin_port import CrowdinPort

logger = logging.getLogger(__name__)


class CrowdinApiAdapter(CrowdinPort):
    _PROTOCOL = "https"
    _PRIMARY_DOMAIN = "api.crowdin.com/api/v2/"
    _PAGE_LIMIT = 500

    def __init__(self, config: ConfigPort, timeout: float = 20) -> None:
        self._config = config
        self._timeout = timeout

    def base_url(self) -> str:
        domain = self._config.get(DOMAIN)
        host = f"{domain}.{self._PRIMARY_DOMAIN}" if domain else self._PRIMARY_DOMAIN
        return f"{self._PROTOCOL}://{host}"

    def request(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        method: str = "GET",
        token: str | None = None,
    ) -> dict:
        """Execute one Crowdin API call and return the decoded JSON body.

        GET params are sent as the query string; for other methods params is
        a set of request options (headers, json, data) merged over the
        defaults.
        """
        resolved_token = token or self._config.get(PERSONAL_TOKEN) or ""
        options: dict[str, Any] = {
            "headers": {
                "Authorization": f"Bearer {resolved_token}",
                "Content-Type": "application/json",
            }
        }
        if method == "GET":
            options["params"] = params or {}
        else:
            options = _merge_options(options, params or {})

        context = f"{method} {path}"
        logger.debug("Crowdin request %s", context)
        try:
            response = requests.request(
                method, f"{self.base_url()}{path}", timeout=self._timeout, **options
            )
        except requests.RequestException as exc:
            raise RemoteError(None, str(exc), context=context) from exc
        if response.status_code >= 400:
            raise RemoteError(response.status_code, response.reason or "", context=context)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteError(
                response.status_code, "Invalid JSON response", context=context, kind=KIND_SERVER
            ) from exc

    def list_languages(self) -> dict[str, str]:
        payload = self.request("languages", {"limit": self._PAGE_LIMIT})
        languages: dict[str, str] = {}
        for entry in payload.get("data", []):
            language = entry.get("data", {})
            languages[language.get("id", "")] = language.get("name", "")
        return languages

    def get_project(self, project_id: int) -> ProjectSnapshot:
        data = self.request(f"projects/{project_id}").get("data", {})
        return ProjectSnapshot(
            project_id=int(data.get("id", project_id)),
            target_language_ids=list(data.get("targetLanguageIds") or []),
            export_approved_only=bool(data.get("exportApprovedOnly", False)),
        )

    def get_user(self, token: str | None = None) -> dict:
        return self.request("user", token=token).get("data", {})

    def list_directories(self, project_id: int, name_filter: str) -> list[RemoteDirectory]:
        payload = self.request(
            f"projects/{project_id}/directories",
            {"filter": name_filter, "limit": self._PAGE_LIMIT},
        )
        return [_directory(entry.get("data", {})) for entry in payload.get("data", [])]

    def create_directory(
        self, project_id: int, name: str, parent_id: int | None = None
    ) -> RemoteDirectory:
        body: dict[str, Any] = {"name": name}
        if parent_id is not None:
            body["directoryId"] = parent_id
        payload = self.request(f"projects/{project_id}/directories", {"json": body}, "POST")
        return _directory(payload.get("data", {}))

    def delete_directory(self, project_id: int, directory_id: int) -> None:
        self.request(f"projects/{project_id}/directories/{directory_id}", method="DELETE")

    def add_storage(self, file_name: str, content: bytes) -> StorageRef:
        payload = self.request(
            "storages",
            {
                "headers": {
                    "Content-Type": "application/octet-stream",
                    "Crowdin-API-FileName": file_name,
                },
                "data": content,
            },
            "POST",
        )
        data = payload.get("data", {})
        return StorageRef(storage_id=int(data["id"]), file_name=data.get("fileName", file_name))

    def add_file(
        self,
        project_id: int,
        storage: StorageRef,
        title: str,
        directory_id: int,
        excluded_target_languages: list[str],
    ) -> int:
        payload = self.request(
            f"projects/{project_id}/files",
            {
                "json": {
                    "storageId": storage.storage_id,
                    "name": storage.file_name,
                    "title": title,
                    "directoryId": directory_id,
                    "excludedTargetLanguages": excluded_target_languages,
                    "type": "webxml",
                }
            },
            "POST",
        )
        return int(payload["data"]["id"])

    def get_file_progress(self, project_id: int, file_id: int) -> list[LanguageProgress]:
        payload = self.request(
            f"projects/{project_id}/files/{file_id}/languages/progress",
            {"limit": self._PAGE_LIMIT},
        )
        progress: list[LanguageProgress] = []
        for entry in payload.get("data", []):
            data = entry.get("data", {})
            progress.append(
                LanguageProgress(
                    language_id=data.get("languageId", ""),
                    translation_progress=int(data.get("translationProgress", 0)),
                    approval_progress=int(data.get("approvalProgress", 0)),
                )
            )
        return progress

    def build_file_translation(
        self, project_id: int, file_id: int, target_language: str
    ) -> str:
        payload = self.request(
            f"projects/{project_id}/translations/builds/files/{file_id}",
            {"json": {"targetLanguageId": target_language}},
            "POST",
        )
        return payload["data"]["url"]

    def download(self, url: str) -> bytes:
        # Build URLs are pre-signed; the bearer token must not be sent.
        try:
            response = requests.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            raise RemoteError(None, str(exc), context="download translation") from exc
        if response.status_code >= 400:
            raise RemoteError(
                response.status_code, response.reason or "", context="download translation"
            )
        return response.content

    def add_webhook(self, project_id: int, name: str, url: str, events: list[str]) -> int:
        payload = self.request(
            f"projects/{project_id}/webhooks",
            {
                "json": {
                    "name": name,
                    "url": url,
                    "events": events,
                    "requestType": "POST",
                }
            },
            "POST",
        )
        return int(payload["data"]["id"])


def _directory(data: dict) -> RemoteDirectory:
    parent_id = data.get("directoryId")
    return RemoteDirectory(
        directory_id=int(data["id"]),
        name=data.get("name", ""),
        parent_id=int(parent_id) if parent_id is not None else None,
    )


def _merge_options(base: dict[str, Any], extra: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in extra.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_options(merged[key], value)
        else:
            merged[key] = value
    return merged
