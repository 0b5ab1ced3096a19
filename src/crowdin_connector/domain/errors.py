from __future__ import annotations

KIND_TRANSPORT = "transport"
KIND_AUTH = "auth"
KIND_NOT_FOUND = "not_found"
KIND_CONFLICT = "conflict"
KIND_SERVER = "server"
KIND_CLIENT = "client"


class ConnectorError(Exception):
    """Base class for recoverable connector failures.

    Every subclass carries an explicit ``kind`` so callers never have to
    inspect the message to decide how to react.
    """

    kind = "connector"

    def __init__(self, message: str, kind: str | None = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind


def classify_status(status_code: int | None) -> str:
    if status_code is None:
        return KIND_TRANSPORT
    if status_code in (401, 403):
        return KIND_AUTH
    if status_code == 404:
        return KIND_NOT_FOUND
    # Crowdin reports duplicate names as 400 validation errors.
    if status_code in (400, 409):
        return KIND_CONFLICT
    if status_code >= 500:
        return KIND_SERVER
    return KIND_CLIENT


class RemoteError(ConnectorError):
    def __init__(
        self,
        status_code: int | None,
        reason: str,
        context: str = "",
        kind: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.context = context
        suffix = f" while attempting to {context}" if context else ""
        if status_code is None:
            message = f"Unable to connect to Crowdin service{suffix}: {reason}"
        else:
            message = f"Crowdin API error #{status_code} {reason}{suffix}."
        super().__init__(message, kind=kind or classify_status(status_code))

    @property
    def is_conflict(self) -> bool:
        return self.kind == KIND_CONFLICT


class ValidationError(ConnectorError):
    kind = "validation"


class IdentityMismatchError(ConnectorError):
    kind = "identity_mismatch"


class EmptyPayloadError(ConnectorError):
    kind = "empty_payload"


class UnknownLanguageError(ConnectorError):
    kind = "unknown_language"


class StateTransitionError(ConnectorError):
    kind = "state_transition"
