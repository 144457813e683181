"""
Core HTTP request handling for the Dataverse client.

Issues one request per logical operation, attaches the API key header and
content negotiation, unwraps the ``{status, data|message}`` envelope and
turns error envelopes into ``ApiError``.
"""

import json
import logging
import re
import traceback
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Union

import requests

from .errors import ApiError, NotFoundError
from .shared.auth import DataverseAuth, get_auth
from .shared.config import REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

JSON_CONTENT = "application/json"
XML_CONTENT = "application/xml"

_ERROR_ENVELOPE = re.compile(r'^\s*{\s*"status"\s*:\s*"ERROR"\s*,\s*"message"\s*:\s*"')


class ResponseFormat(str, Enum):
    """How ``api_call`` shapes the server response."""

    API = "api"
    JSON = "json"
    XML = "xml"
    RAW = "raw"
    BLOCK = "block"
    RESPONSE = "response"
    STATUS = "status"
    TEXT = "text"

    @classmethod
    def _missing_(cls, value):
        # Unknown format names fall back to the body text
        return cls.TEXT


def _trimmed_stack():
    """Current call stack without the frames of this module."""
    return [frame for frame in traceback.extract_stack() if frame.filename != __file__]


def _api_error(error: requests.HTTPError) -> Optional[ApiError]:
    """Build an ApiError from an HTTP error carrying an error envelope."""
    response = error.response
    if response is None or not _ERROR_ENVELOPE.match(response.text or ""):
        return None

    message = json.loads(response.text).get("message")
    error_class = NotFoundError if response.status_code == 404 else ApiError
    return error_class(message, status_code=response.status_code, backtrace=_trimmed_stack())


def _serialize_body(body: Any, content_type: Optional[str]) -> Any:
    if isinstance(body, Mapping) and content_type == JSON_CONTENT:
        return json.dumps(body)
    if isinstance(body, ET.ElementTree) and content_type == XML_CONTENT:
        body = body.getroot()
    if isinstance(body, ET.Element) and content_type == XML_CONTENT:
        return ET.tostring(body, encoding="unicode")
    return body


def api_call(
    url: str,
    method: str = "GET",
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, Any]] = None,
    body: Any = None,
    format: Union[ResponseFormat, str] = ResponseFormat.API,
    sink: Optional[Callable[[requests.Response], Any]] = None,
    auth: Optional[DataverseAuth] = None,
) -> Any:
    """
    Make an authenticated API request.

    Args:
        url: Resource path relative to the API base URL
        method: HTTP method (GET, POST, PUT, DELETE)
        headers: Extra request headers; an explicit Content-Type wins
        params: Query parameters
        body: Mapping, XML document, text, bytes or file object
        format: Response shape (see ResponseFormat)
        sink: Called with the streamed response; forces the block format
        auth: Endpoint and token, the global auth instance if omitted

    Returns:
        ``data`` of the envelope for ``api``, parsed JSON for ``json``,
        an Element for ``xml``, the response for ``raw``/``block``/``response``,
        the status code for ``status`` and the body text otherwise.

    Raises:
        ConfigurationError: If endpoint or token is missing
        ApiError: If the server answered with an error envelope
    """
    auth = auth or get_auth()
    full_url = auth.url_for(url)

    fmt = ResponseFormat.BLOCK if sink is not None else ResponseFormat(format)

    headers = dict(headers or {})
    headers.update(auth.get_headers())

    if fmt is ResponseFormat.XML:
        headers.setdefault("Accept", XML_CONTENT)
        headers.setdefault("Content-Type", XML_CONTENT)
    elif fmt in (ResponseFormat.API, ResponseFormat.JSON):
        headers.setdefault("Accept", JSON_CONTENT)
        headers.setdefault("Content-Type", JSON_CONTENT)

    body = _serialize_body(body, headers.get("Content-Type"))
    stream = fmt in (ResponseFormat.RAW, ResponseFormat.BLOCK)

    logger.debug(f"API Request: {method} {full_url}")
    if params:
        logger.debug(f"Params: {params}")

    try:
        response = requests.request(
            method,
            full_url,
            headers=headers,
            params=params or None,
            data=body,
            stream=stream,
            timeout=REQUEST_TIMEOUT,
        )

        if fmt is ResponseFormat.BLOCK:
            if sink is not None:
                try:
                    sink(response)
                finally:
                    response.close()
            return response

        response.raise_for_status()

    except requests.HTTPError as e:
        error = _api_error(e)
        if error is None:
            raise
        logger.debug(f"API Error: {method} {full_url} -> {error.status_code} {error.message}")
        raise error from None

    if fmt is ResponseFormat.API:
        data = response.json()
        if data.get("status") != "OK":
            raise ApiError(
                data.get("message"),
                status_code=response.status_code,
                backtrace=_trimmed_stack(),
            )
        return data.get("data")
    if fmt is ResponseFormat.JSON:
        return response.json()
    if fmt is ResponseFormat.XML:
        return ET.fromstring(response.content)
    if fmt in (ResponseFormat.RAW, ResponseFormat.RESPONSE):
        return response
    if fmt is ResponseFormat.STATUS:
        return response.status_code
    return response.text
