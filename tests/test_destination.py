"""Tests for destination sanitizing."""

from datetime import datetime, timezone

import pytest

from departure_resolver.domain.models import TemporalPhrase
from departure_resolver.nlp.destination import sanitize_destination

RESOLVED = TemporalPhrase(instant=datetime(2030, 1, 1, 16, 30, tzinfo=timezone.utc), strategy="clock")


@pytest.mark.parametrize(
    "destination,expected",
    [
        ("Doctor appointment at 11:30am in 1805 Deer Drive PA", "1805 Deer Drive PA"),
        ("Dentist at 1130am in 42 Main Street Springfield", "42 Main Street Springfield"),
        ("Meeting @ 9.15 am in 500 Market St Philadelphia", "500 Market St Philadelphia"),
        ("DOCTOR APPOINTMENT AT 11:30AM IN 1805 DEER DRIVE PA", "1805 DEER DRIVE PA"),
    ],
)
def test_address_after_time_and_in(destination, expected):
    assert sanitize_destination(destination, RESOLVED) == expected


@pytest.mark.parametrize(
    "destination,expected",
    [
        ("Meeting at 10:00, 500 Market St Philadelphia", "500 Market St Philadelphia"),
        ("Appointment at 9:15am-1 Elm Street Boston", "1 Elm Street Boston"),
    ],
)
def test_address_after_separator(destination, expected):
    assert sanitize_destination(destination, RESOLVED) == expected


def test_address_after_last_in_without_time():
    destination = "Doctor checkup tomorrow morning in Springfield Clinic"
    assert sanitize_destination(destination, RESOLVED) == "Springfield Clinic"


def test_short_candidate_keeps_original():
    destination = "Meeting at 10:00 in NYC"
    assert sanitize_destination(destination, RESOLVED) == destination


def test_no_keyword_keeps_original():
    destination = "Lunch at 12:30 in Center City Philadelphia"
    assert sanitize_destination(destination, RESOLVED) == destination


def test_unresolved_time_keeps_original():
    destination = "Doctor appointment at 11:30am in 1805 Deer Drive PA"
    assert sanitize_destination(destination, None) == destination


@pytest.mark.parametrize("destination", ["", None])
def test_empty_destination(destination):
    assert sanitize_destination(destination, RESOLVED) == destination


def test_plain_address_is_untouched():
    assert sanitize_destination("1805 Deer Drive PA", RESOLVED) == "1805 Deer Drive PA"
