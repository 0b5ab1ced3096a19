from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from functools import cached_property
from typing import Protocol
from xml.dom import minidom

from .errors import EmptyPayloadError, ValidationError
from .models import Job, JobItem, TextUnit

TOOL_ID = "tmgmt"
UNIT_KEY_DELIMITER = "]["
ITEM_ELEMENT = "JobItem"
ROOT_ELEMENT = "content"
REQUIRED_ATTRIBUTES = ("job-id", "source-language", "target-language")

_CDATA_END = "]]>"
_CARRIAGE_RETURN = "\r"
_INDENT = "  "
_ELEMENT_NAME_STRIP = re.compile(r"[^a-zA-Z0-9_-]+")
_WORD_START = re.compile(r"(^|\s)(\S)")


class JobLookup(Protocol):
    def get_job(self, job_id: int) -> Job | None:
        """Return a job by id, or None if missing."""


def unit_id(item_id: int, key: str) -> str:
    return f"{item_id}{UNIT_KEY_DELIMITER}{key}"


def unit_element_name(unit: TextUnit) -> str:
    """
    Derive the element name for a translatable unit from its label path,
    falling back to the raw key.

    Examples:
        >>> unit_element_name(TextUnit(key="title][0][value", text="", parent_label=["Title"]))
        'Title'
        >>> unit_element_name(TextUnit(key="body][0][value", text=""))
        'Body0value'
    """
    label = "".join(unit.parent_label) or unit.key
    capitalized = _WORD_START.sub(lambda match: match.group(1) + match.group(2).upper(), label)
    name = _ELEMENT_NAME_STRIP.sub("", capitalized)
    if not name or not (name[0].isalpha() or name[0] == "_"):
        name = f"Unit{name}"
    return name


class WebXMLDocument:
    """Imported interchange document.

    The payload is parsed at most once per instance, whichever accessor is
    used first.
    """

    def __init__(self, content: bytes | str) -> None:
        self._content = content

    @cached_property
    def root(self) -> ET.Element:
        try:
            return ET.fromstring(self._content)
        except ET.ParseError as exc:
            raise ValidationError("The imported file is not a valid XML.") from exc

    @property
    def attributes(self) -> dict[str, str]:
        return dict(self.root.attrib)

    @cached_property
    def units(self) -> dict[str, str]:
        units: dict[str, str] = {}
        for item in self.root.findall(ITEM_ELEMENT):
            for element in item:
                element_id = element.get("id")
                if element_id is None:
                    continue
                units[element_id] = "".join(element.itertext())
        return units


class WebXMLCodec:
    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def encode(self, job: Job, items: Iterable[JobItem]) -> bytes:
        document = minidom.Document()
        root = document.createElement(ROOT_ELEMENT)
        root.setAttribute("source-language", job.source_language)
        root.setAttribute("target-language", job.target_language)
        root.setAttribute("date", self._clock().strftime("%Y-%m-%dT%H:%M:%SZ"))
        root.setAttribute("tool-id", TOOL_ID)
        root.setAttribute("job-id", str(job.job_id))
        document.appendChild(root)

        for item in items:
            root.appendChild(document.createTextNode("\n" + _INDENT))
            root.appendChild(self._item_element(document, job, item))
        root.appendChild(document.createTextNode("\n"))
        # Parsers normalise a literal CR to LF; only a character reference survives.
        return document.toxml(encoding="UTF-8").replace(b"\r", b"&#13;")

    def load(self, content: bytes | str) -> WebXMLDocument:
        return WebXMLDocument(content)

    def decode(self, content: bytes | str | WebXMLDocument) -> dict[str, str]:
        return self._document(content).units

    def validate_and_identify(
        self, content: bytes | str | WebXMLDocument, jobs: JobLookup
    ) -> Job:
        """Resolve the local job an imported document belongs to.

        Raises ValidationError when a required root attribute is missing, the
        referenced job does not exist or its languages differ from the
        document's. Raises EmptyPayloadError when the document carries no
        translation units.
        """
        document = self._document(content)
        attributes = document.attributes

        missing = [name for name in REQUIRED_ATTRIBUTES if not attributes.get(name)]
        if missing:
            raise ValidationError(
                "The imported file is missing required attributes: " + ", ".join(missing) + "."
            )

        try:
            job_id = int(attributes["job-id"])
        except ValueError as exc:
            raise ValidationError(
                f"The imported file job id {attributes['job-id']} is not valid."
            ) from exc

        job = jobs.get_job(job_id)
        if job is None:
            raise ValidationError(f"The imported file job id {job_id} is not available.")

        if attributes["source-language"] != job.source_language:
            raise ValidationError(
                f"The imported file source language {attributes['source-language']} does not "
                f"match the job source language {job.source_language}."
            )
        if attributes["target-language"] != job.target_language:
            raise ValidationError(
                f"The imported file target language {attributes['target-language']} does not "
                f"match the job target language {job.target_language}."
            )

        if not document.units:
            raise EmptyPayloadError("The imported file seems to be missing translation.")
        return job

    def _document(self, content: bytes | str | WebXMLDocument) -> WebXMLDocument:
        if isinstance(content, WebXMLDocument):
            return content
        return self.load(content)

    def _item_element(
        self, document: minidom.Document, job: Job, item: JobItem
    ) -> minidom.Element:
        element = document.createElement(ITEM_ELEMENT)
        element.setAttribute("id", str(item.item_id))
        for unit in item.translatable_units():
            element.appendChild(document.createTextNode("\n" + _INDENT * 2))
            element.appendChild(self._unit_element(document, job, item, unit))
        element.appendChild(document.createTextNode("\n" + _INDENT))
        return element

    def _unit_element(
        self, document: minidom.Document, job: Job, item: JobItem, unit: TextUnit
    ) -> minidom.Element:
        key = unit_id(item.item_id, unit.key)
        element = document.createElement(unit_element_name(unit))
        element.setAttribute("id", key)
        element.setAttribute("resname", key)
        element.appendChild(self._body(document, job, unit.text))
        return element

    @staticmethod
    def _body(document: minidom.Document, job: Job, text: str) -> minidom.Node:
        if not job.cdata:
            return document.createTextNode(text)
        trimmed = text.strip()
        # A CDATA section cannot hold its own terminator or a CR character reference.
        if _CDATA_END in trimmed or _CARRIAGE_RETURN in trimmed:
            return document.createTextNode(trimmed)
        return document.createCDATASection(trimmed)
