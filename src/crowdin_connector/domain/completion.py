from __future__ import annotations

from .errors import UnknownLanguageError
from .models import LanguageProgress, ProjectSnapshot

COMPLETE = 100


def find_language_progress(
    progress: list[LanguageProgress], language: str
) -> LanguageProgress:
    for entry in progress:
        if entry.language_id == language:
            return entry
    raise UnknownLanguageError(f"Crowdin target language '{language}' does not exist.")


def is_translation_ready(
    project: ProjectSnapshot, progress: list[LanguageProgress], language: str
) -> bool:
    """
    Decide whether a remote file is ready to import for one target language.

    Projects that export approved strings only are ready once approval
    reaches 100; every other project is ready once translation reaches 100.
    """
    entry = find_language_progress(progress, language)
    if project.export_approved_only:
        return entry.approval_progress == COMPLETE
    return entry.translation_progress == COMPLETE


def excluded_target_languages(project: ProjectSnapshot, target_language: str) -> list[str]:
    return [
        language for language in project.target_language_ids if language != target_language
    ]
