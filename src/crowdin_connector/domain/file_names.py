from __future__ import annotations

import re

from .models import Job

FILE_NAME_TEMPLATE = "Job_{job_id}_JobItem_{job_item_id}_{source}_{target}.xml"
ROOT_DIRECTORY_NAME = "Drupal Connector"

_FILE_NAME_PATTERN = re.compile(r"^Job_(\d+)_JobItem_(\d+)_")


def build_file_name(job_id: int, job_item_id: int, source: str, target: str) -> str:
    """
    Build the remote file name that binds a Crowdin file to a local job item.

    Example:
        >>> build_file_name(42, 7, "en", "de")
        'Job_42_JobItem_7_en_de.xml'
    """
    return FILE_NAME_TEMPLATE.format(
        job_id=int(job_id),
        job_item_id=int(job_item_id),
        source=source,
        target=target,
    )


def parse_file_name(file_path: str) -> tuple[int, int] | None:
    """
    Recover (job_id, job_item_id) from a remote file path, or None when the
    basename was not produced by build_file_name.

    Example:
        >>> parse_file_name("/Drupal Connector/Job (42)/Job_42_JobItem_7_en_de.xml")
        (42, 7)
        >>> parse_file_name("/docs/readme.md") is None
        True
    """
    basename = file_path.rsplit("/", 1)[-1]
    match = _FILE_NAME_PATTERN.match(basename)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def job_directory_name(job: Job) -> str:
    return f"{job.label or 'Job'} ({job.job_id})"
