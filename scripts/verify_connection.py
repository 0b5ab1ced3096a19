from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)

from crowdin_connector.adapters.crowdin_api import CrowdinApiAdapter
from crowdin_connector.adapters.sqlite_config import SQLiteConfigStorage
from crowdin_connector.domain.errors import ConnectorError
from crowdin_connector.services.connector_config import require_project_id
from crowdin_connector.services.settings_service import SettingsService
from crowdin_connector.settings import CROWDIN_HTTP_TIMEOUT, CROWDIN_SETTINGS_DB


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    token = os.getenv("CROWDIN_PERSONAL_TOKEN")
    project_id = os.getenv("CROWDIN_PROJECT_ID")
    domain = os.getenv("CROWDIN_DOMAIN")
    if not token or not project_id:
        raise SystemExit("Missing CROWDIN_PERSONAL_TOKEN or CROWDIN_PROJECT_ID in .env or environment.")

    config = SQLiteConfigStorage(CROWDIN_SETTINGS_DB)
    crowdin = CrowdinApiAdapter(config, timeout=CROWDIN_HTTP_TIMEOUT)
    settings_service = SettingsService(crowdin, config)
    try:
        settings_service.save_settings(token, project_id, domain)
        project = crowdin.get_project(require_project_id(config))
    except ConnectorError as exc:
        raise SystemExit(f"Crowdin connection check failed: {exc}") from exc

    languages = settings_service.supported_languages()
    print("Crowdin connection check passed.")
    print(f"base_url={crowdin.base_url()}")
    print(f"project_id={project.project_id}")
    print(f"target_languages={', '.join(project.target_language_ids) or '-'}")
    print(f"export_approved_only={project.export_approved_only}")
    print(f"supported_languages={len(languages)}")


if __name__ == "__main__":
    main()
