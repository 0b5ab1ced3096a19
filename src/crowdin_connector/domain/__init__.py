from .completion import excluded_target_languages, is_translation_ready
from .errors import (
    ConnectorError,
    EmptyPayloadError,
    IdentityMismatchError,
    RemoteError,
    StateTransitionError,
    UnknownLanguageError,
    ValidationError,
)
from .file_names import build_file_name, parse_file_name
from .models import Job, JobItem, RemoteMapping, TextUnit
from .webxml import WebXMLCodec, WebXMLDocument

__all__ = [
    "ConnectorError",
    "EmptyPayloadError",
    "IdentityMismatchError",
    "Job",
    "JobItem",
    "RemoteError",
    "RemoteMapping",
    "StateTransitionError",
    "TextUnit",
    "UnknownLanguageError",
    "ValidationError",
    "WebXMLCodec",
    "WebXMLDocument",
    "build_file_name",
    "excluded_target_languages",
    "is_translation_ready",
    "parse_file_name",
]
