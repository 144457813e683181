"""
Create/import payload handling.

A payload is given as a mapping, a path to a file, or raw JSON/XML text.
It is classified once, read, parsed and validated before any request is
made, so a malformed payload never reaches the server.
"""

import json
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from jsonschema import Draft202012Validator

from .errors import InputError

logger = logging.getLogger(__name__)

PARSE_ERROR = "Data could not be parsed. Should be a Hash, filename or JSON string."


@dataclass(frozen=True)
class InlineObject:
    data: Mapping[str, Any]


@dataclass(frozen=True)
class FilePath:
    path: Path


@dataclass(frozen=True)
class RawText:
    text: str


PayloadSource = Union[InlineObject, FilePath, RawText]


@dataclass(frozen=True)
class Payload:
    """Request body ready to send, plus its content type."""

    body: Union[str, Mapping[str, Any]]
    xml: bool = False


def classify_input(data: Any) -> PayloadSource:
    """
    Decide which kind of payload the caller passed.

    Strings naming an existing file are file paths; other strings are raw text.
    """
    if isinstance(data, (InlineObject, FilePath, RawText)):
        return data
    if isinstance(data, Mapping):
        return InlineObject(data)
    if isinstance(data, Path):
        return FilePath(data)
    if isinstance(data, str):
        try:
            if Path(data).is_file():
                return FilePath(Path(data))
        except (OSError, ValueError):
            pass
        return RawText(data)
    if isinstance(data, (ET.Element, ET.ElementTree)):
        root = data.getroot() if isinstance(data, ET.ElementTree) else data
        return RawText(ET.tostring(root, encoding="unicode"))
    raise InputError(PARSE_ERROR)


def _read_text(source: PayloadSource) -> str:
    if isinstance(source, FilePath):
        try:
            return source.path.read_text(encoding="utf-8")
        except OSError as e:
            raise InputError(f"Could not read {source.path}: {e}") from e
    return source.text


def _validate(data: Any, schema: Optional[Dict[str, Any]]) -> None:
    if not isinstance(data, Mapping):
        raise InputError(PARSE_ERROR)
    if not schema:
        return

    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        for err in errors:
            logger.error(f"Schema error at {list(err.path)}: {err.message}")
        raise InputError(f"{len(errors)} schema validation errors: {errors[0].message}")


def load_payload(
    data: Any,
    schema: Optional[Dict[str, Any]] = None,
    xml: bool = False,
) -> Payload:
    """
    Turn caller input into a request body.

    Args:
        data: Mapping, JSON text, XML text, XML element, or path to a file
        schema: JSON schema the JSON payload must satisfy
        xml: Expect an XML (DDI) document instead of JSON

    Returns:
        Payload with the parsed mapping (JSON) or the XML text

    Raises:
        InputError: If the payload cannot be read, parsed or validated
    """
    source = classify_input(data)

    if xml:
        if isinstance(source, InlineObject):
            raise InputError("Expected an XML document, got a mapping.")
        text = _read_text(source)
        try:
            ET.fromstring(text)
        except ET.ParseError as e:
            raise InputError(f"XML could not be parsed: {e}") from e
        return Payload(body=text, xml=True)

    if isinstance(source, InlineObject):
        parsed = source.data
    else:
        try:
            parsed = json.loads(_read_text(source))
        except json.JSONDecodeError as e:
            raise InputError(PARSE_ERROR) from e

    _validate(parsed, schema)
    return Payload(body=dict(parsed))
