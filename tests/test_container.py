"""Tests for dependency wiring, configuration and logging setup."""

import json
import logging

import pytest

from departure_resolver.adapters.geocoding import NominatimGeocoderAdapter
from departure_resolver.adapters.routing import GeodesicDurationEstimator, MockDurationEstimator
from departure_resolver.config import AppConfig, ObservabilityConfig, get_config, reset_config
from departure_resolver.container import Container, get_container, reset_container
from departure_resolver.monitoring import JsonFormatter, logger, setup_logging
from departure_resolver.ports import GeocoderPort, TravelDurationPort
from departure_resolver.services import TripPlannerService


@pytest.fixture(autouse=True)
def fresh_state():
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


def test_default_bindings():
    container = Container.create_default(AppConfig())
    service = container.resolve(TripPlannerService)

    assert isinstance(container.resolve(GeocoderPort), NominatimGeocoderAdapter)
    assert isinstance(service.duration_estimator, GeodesicDurationEstimator)
    assert isinstance(service.fallback_estimator, MockDurationEstimator)
    assert service.fallback_estimator.duration_seconds == 5100


def test_singletons_are_shared():
    container = Container.create_default()
    assert container.resolve(TripPlannerService) is container.resolve(TripPlannerService)


def test_override_binding():
    container = Container.create_default()
    container.register(TravelDurationPort, lambda: MockDurationEstimator(60))
    service = container.resolve(TripPlannerService)
    assert isinstance(service.duration_estimator, MockDurationEstimator)


def test_transient_binding():
    container = Container()
    container.register(TravelDurationPort, MockDurationEstimator, singleton=False)
    assert container.resolve(TravelDurationPort) is not container.resolve(TravelDurationPort)


def test_unregistered_type_raises():
    with pytest.raises(KeyError):
        Container().resolve(TripPlannerService)


def test_global_container_is_reset():
    first = get_container()
    assert get_container() is first
    reset_container()
    assert get_container() is not first


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DR_PLANNER_DEFAULT_BUFFER_MINUTES", "20")
    monkeypatch.setenv("DR_ROUTING_MOCK_DURATION_SECONDS", "900")
    reset_config()

    config = get_config()
    assert config.planner.default_buffer_minutes == 20
    assert config.routing.mock_duration_seconds == 900
    assert config.resolver.rollover_grace_minutes == 5


def test_json_formatter_includes_extra_fields():
    record = logging.makeLogRecord(
        {"name": "departure_resolver.test", "levelname": "INFO", "msg": "Query classified", "intent": "NearbyFood"}
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "Query classified"
    assert payload["intent"] == "NearbyFood"
    assert payload["logger"] == "departure_resolver.test"


def test_setup_logging_replaces_its_handler():
    before = list(logger.handlers)
    try:
        setup_logging(ObservabilityConfig(level="DEBUG"))
        handler = setup_logging(ObservabilityConfig(level="WARNING", structured=True))

        ours = [h for h in logger.handlers if h not in before]
        assert ours == [handler]
        assert isinstance(handler.formatter, JsonFormatter)
        assert logger.level == logging.WARNING
    finally:
        for h in list(logger.handlers):
            if h not in before:
                logger.removeHandler(h)
