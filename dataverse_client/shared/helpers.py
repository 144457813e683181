"""
Helper functions for parsing Dataverse server responses.
"""

import re
from typing import Any, Dict, Optional

from ..errors import DataverseError


# =============================================================================
# Size Messages
# =============================================================================

_SIZE_PATTERN = re.compile(r"\d[,\d]*")


def parse_size_message(message: str) -> int:
    """
    Extract a byte count from a human readable storage size message.

    Examples:
        "Total size of the files stored in this dataset: 1,234,567 bytes" -> 1234567
    """
    match = _SIZE_PATTERN.search(message or "")
    if not match:
        raise DataverseError(f"Could not find a size in message: '{message}'")
    return int(match.group(0).replace(",", ""))


def size_from_result(result: Dict[str, Any]) -> int:
    """Parse the ``message`` of a storage size API result."""
    return parse_size_message(result.get("message", ""))


# =============================================================================
# License Scraping
# =============================================================================

# termsOfUse holds an HTML anchor like:
#   <a href="http://creativecommons.org/..."><img src="https://.../cc0.png"/>CC0 1.0</a>.
_LICENSE_URL = re.compile(r'(?<=href=")[^"]*(?=")')
_LICENSE_ICON = re.compile(r'(?<=src=")[^"]*(?=")')
_LICENSE_NAME = re.compile(r"[^>]*(?=</a>.$)", re.MULTILINE)
_ANCHOR = re.compile(r"<a\s", re.IGNORECASE)


def _scrape(pattern: re.Pattern, terms: Optional[str]) -> Optional[str]:
    # More than one link: no way to tell which one is the license
    if not isinstance(terms, str) or len(_ANCHOR.findall(terms)) > 1:
        return None
    match = pattern.search(terms)
    return match.group(0) if match else None


def license_url(terms: Optional[str]) -> Optional[str]:
    """Get the license link target from a termsOfUse text."""
    return _scrape(_LICENSE_URL, terms)


def license_icon(terms: Optional[str]) -> Optional[str]:
    """Get the license icon image source from a termsOfUse text."""
    return _scrape(_LICENSE_ICON, terms)


def license_name(terms: Optional[str]) -> Optional[str]:
    """Get the anchor text of the license link (anchor must close the text)."""
    return _scrape(_LICENSE_NAME, terms) or None


def license_info(terms: Optional[str]) -> Dict[str, Optional[str]]:
    """Build the license entry of the rdm export from a termsOfUse text."""
    return {
        "label": license_name(terms),
        "uri": license_url(terms),
        "iconUrl": license_icon(terms),
    }
