from __future__ import annotations

from crowdin_connector.domain.errors import ValidationError
from crowdin_connector.ports.config_port import PROJECT_ID, ConfigPort


def require_project_id(config: ConfigPort) -> int:
    raw = config.get(PROJECT_ID)
    if not raw:
        raise ValidationError("Crowdin project id is not configured.")
    try:
        return int(raw)
    except ValueError as exc:
        raise ValidationError(f"Crowdin project id {raw} is not valid.") from exc
