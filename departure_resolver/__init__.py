"""Top-level package for the Departure Resolver project.

Turns a travel query such as "Doctor appointment at 11:30am in 1805 Deer
Drive PA" into an appointment time, a routable address, a classified
intent and a live departure plan.
"""

from .nlp import classify_intent, resolve_time_phrase, sanitize_destination
from .planner import plan_departure

__all__ = [
    "resolve_time_phrase",
    "sanitize_destination",
    "classify_intent",
    "plan_departure",
]
