"""Intent detection for travel queries.

This module implements a rule-based intent classification for the
origin/destination pair of a travel query. It distinguishes plain travel,
a nearby-food search and appointment-driven departure planning.

Example
-------
    >>> classify_intent(destination="best italian restaurants near me")
    IntentResult(intent=<Intent.NEARBY_FOOD: 'NearbyFood'>, cuisine='italian')
    >>> classify_intent(destination="Drive to JFK Airport").intent
    <Intent.TRAVEL_TIME: 'TravelTime'>
    >>> classify_intent().intent
    <Intent.UNKNOWN: 'Unknown'>
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from ..domain.models import Intent, IntentResult

logger = logging.getLogger(__name__)

# Order matters: the first specific cuisine found becomes the cuisine.
FOOD_KEYWORDS = ("restaurant", "restaurants", "italian", "sushi", "mexican", "thai", "indian")
GENERIC_FOOD_KEYWORDS = frozenset({"restaurant", "restaurants"})
APPOINTMENT_KEYWORDS = ("appointment", "doctor", "dentist", "meeting")

_AIRPORT = re.compile(r"\b(?:jfk|phl|ewr|lga)\b|airport")


def _has_appointment_keyword(*texts: str) -> bool:
    return any(keyword in text for text in texts for keyword in APPOINTMENT_KEYWORDS)


def _food_cuisine(text: str) -> tuple[bool, Optional[str]]:
    """Return whether ``text`` mentions food, and the specific cuisine if any."""
    found = [keyword for keyword in FOOD_KEYWORDS if keyword in text]
    if not found:
        return False, None
    cuisine = next((k for k in found if k not in GENERIC_FOOD_KEYWORDS), None)
    return True, cuisine


def classify_intent(
    origin: Optional[str] = None,
    destination: Optional[str] = None,
    explicit_intent: Optional[str] = None,
    explicit_cuisine: Optional[str] = None,
    appt_time_present: bool = False,
) -> IntentResult:
    """Classify the intent of a travel query.

    Explicit overrides beat keyword heuristics, appointment detection
    beats food detection, and a query with any text defaults to travel.

    Parameters
    ----------
    origin : str, optional
        Raw origin text.
    destination : str, optional
        Raw, unsanitized destination text.
    explicit_intent : str, optional
        Intent override; only "AppointmentLeaveTime" is acted upon.
    explicit_cuisine : str, optional
        Cuisine override; implies a nearby-food search.
    appt_time_present : bool
        Whether an appointment time is known for the query.

    Returns
    -------
    IntentResult
        The intent, with the cuisine set for food searches.
    """
    origin_lower = (origin or "").lower()
    destination_lower = (destination or "").lower()
    is_food, cuisine = _food_cuisine(destination_lower)

    if Intent.from_value(explicit_intent) is Intent.APPOINTMENT_LEAVE_TIME:
        result, rule = IntentResult(Intent.APPOINTMENT_LEAVE_TIME), "explicit_intent"
    elif appt_time_present and _has_appointment_keyword(destination_lower, origin_lower):
        result, rule = IntentResult(Intent.APPOINTMENT_LEAVE_TIME), "appointment_keyword"
    elif explicit_cuisine:
        result, rule = IntentResult(Intent.NEARBY_FOOD, explicit_cuisine.lower()), "explicit_cuisine"
    elif is_food:
        result, rule = IntentResult(Intent.NEARBY_FOOD, cuisine), "food_keyword"
    elif not destination and not origin:
        result, rule = IntentResult(Intent.UNKNOWN), "empty"
    elif _AIRPORT.search(destination_lower):
        result, rule = IntentResult(Intent.TRAVEL_TIME), "airport"
    else:
        result, rule = IntentResult(Intent.TRAVEL_TIME), "default"

    logger.debug(
        "Intent classified",
        extra={"intent": result.intent.value, "cuisine": result.cuisine, "rule": rule},
    )
    return result
