"""Rule-based text processing for travel queries.

- time_phrases: free-text scheduling phrases to absolute times
- destination: address extraction from appointment phrases
- intent: intent classification
"""

from .destination import sanitize_destination
from .intent import classify_intent
from .time_phrases import resolve_time_phrase, roll_forward

__all__ = [
    "resolve_time_phrase",
    "roll_forward",
    "sanitize_destination",
    "classify_intent",
]
