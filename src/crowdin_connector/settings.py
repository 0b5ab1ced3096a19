from __future__ import annotations

import os

CROWDIN_SETTINGS_DB = os.getenv("CROWDIN_SETTINGS_DB", "./crowdin_settings.db")
CROWDIN_WEBHOOK_URL = os.getenv("CROWDIN_WEBHOOK_URL", "")
CROWDIN_HTTP_TIMEOUT = float(os.getenv("CROWDIN_HTTP_TIMEOUT", "20"))
