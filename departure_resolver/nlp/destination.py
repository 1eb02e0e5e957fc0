"""Separate the routable address from an embedded appointment phrase.

Example
-------
    "Doctor appointment at 11:30am in 1805 Deer Drive PA" -> "1805 Deer Drive PA"

Extraction is heuristic: when no pattern yields a plausible address the
original text is returned and callers route with it as-is.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from ..domain.models import TemporalPhrase

logger = logging.getLogger(__name__)

MIN_ADDRESS_LENGTH = 5

_KEYWORD = r"(doctor|dentist|appointment|meeting)"
_TIME_AT = r"[^\n]{0,80}?\b(at|@)\s*(?:\d{1,2}[:.][0-5]\d|\d{3,4})\s*(am|pm)?"

_ADDRESS_AFTER_IN = re.compile(_KEYWORD + _TIME_AT + r"\s+in\s+(.+)", re.IGNORECASE)
_ADDRESS_AFTER_SEPARATOR = re.compile(_KEYWORD + _TIME_AT + r"[,\-]\s*(.+)", re.IGNORECASE)
_KEYWORD_WORD = re.compile(r"\b" + _KEYWORD + r"\b", re.IGNORECASE)
_IN_SPLIT = re.compile(r"\b in \b", re.IGNORECASE)


def _plausible(candidate: str) -> Optional[str]:
    address = candidate.strip()
    return address if len(address) >= MIN_ADDRESS_LENGTH else None


def _after_pattern(pattern: re.Pattern[str], text: str) -> Optional[str]:
    match = pattern.search(text)
    if not match:
        return None
    return _plausible(match.groups()[-1])


def _after_last_in(text: str) -> Optional[str]:
    if not _KEYWORD_WORD.search(text) or not _IN_SPLIT.search(text):
        return None
    return _plausible(_IN_SPLIT.split(text)[-1])


def sanitize_destination(
    destination: Optional[str], resolved: Optional[TemporalPhrase]
) -> Optional[str]:
    """Return the address part of ``destination`` for routing.

    Args:
        destination: Raw destination text.
        resolved: The appointment time found in the text, if any.

    Returns:
        The extracted address, or ``destination`` unchanged when it is
        empty, no appointment time was resolved, or nothing plausible
        could be extracted.
    """
    if not destination or resolved is None:
        return destination

    extractors = (
        ("after_in", lambda text: _after_pattern(_ADDRESS_AFTER_IN, text)),
        ("after_separator", lambda text: _after_pattern(_ADDRESS_AFTER_SEPARATOR, text)),
        ("last_in", _after_last_in),
    )
    for name, extract in extractors:
        address = extract(destination)
        if address is not None:
            logger.debug(
                "Destination sanitized",
                extra={"pattern": name, "address_length": len(address)},
            )
            return address

    return destination
