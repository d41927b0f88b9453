"""
Tests for the weather service.

No real API calls: every test routes the client through
httpx.MockTransport.
"""

import httpx
import pytest

from anthaathi.config import WeatherSettings
from anthaathi.models.audit import AuditEventType
from anthaathi.models.weather import fallback_snapshot
from anthaathi.services.weather import (
    WeatherService,
    WeatherUnavailableError,
    parse_current_weather,
)
from anthaathi.services.weather.openweather_service import round_half_up

from conftest import run


CHENNAI_RESPONSE = {
    "name": "Chennai",
    "sys": {"country": "IN"},
    "main": {"temp": 31.5, "feels_like": 37.2, "humidity": 66},
    "wind": {"speed": 4.1},
    "rain": {"1h": 2.34},
    "weather": [{"main": "Rain", "description": "light rain"}],
}


@pytest.fixture
def settings():
    return WeatherSettings(api_key="test-key", default_city="Chennai")


def make_service(handler, settings, audit_logger=None):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WeatherService(settings=settings, http_client=client, audit_logger=audit_logger)


def assert_is_fallback(snapshot):
    expected = fallback_snapshot()
    assert snapshot.is_fallback
    assert snapshot.model_dump(exclude={"fetched_at"}) == expected.model_dump(exclude={"fetched_at"})


class TestParseCurrentWeather:

    def test_maps_fields(self):
        snapshot = parse_current_weather(CHENNAI_RESPONSE)
        assert snapshot.temp == 32
        assert snapshot.feels_like == 37
        assert snapshot.humidity == 66
        assert snapshot.wind_speed == 15  # 4.1 m/s = 14.76 km/h
        assert snapshot.rain_chance == 23
        assert snapshot.condition == "Rain"
        assert snapshot.location == "Chennai, IN"
        assert snapshot.is_fallback is False

    def test_three_hour_rain_used_when_no_hourly(self):
        payload = {**CHENNAI_RESPONSE, "rain": {"3h": 5}}
        assert parse_current_weather(payload).rain_chance == 50

    def test_no_rain_block(self):
        payload = {k: v for k, v in CHENNAI_RESPONSE.items() if k != "rain"}
        assert parse_current_weather(payload).rain_chance == 0

    def test_rain_chance_is_capped(self):
        payload = {**CHENNAI_RESPONSE, "rain": {"1h": 25}}
        assert parse_current_weather(payload).rain_chance == 100

    @pytest.mark.parametrize("payload", [
        {},
        [],
        {**CHENNAI_RESPONSE, "weather": []},
        {**CHENNAI_RESPONSE, "main": {"temp": "hot"}},
        {**CHENNAI_RESPONSE, "main": {"temp": 30, "feels_like": 30, "humidity": 150}},
    ])
    def test_shape_mismatch_raises(self, payload):
        with pytest.raises(WeatherUnavailableError):
            parse_current_weather(payload)

    def test_round_half_up(self):
        assert round_half_up(28.5) == 29
        assert round_half_up(27.5) == 28
        assert round_half_up(-0.4) == 0


class TestFetchWeather:

    def test_sends_expected_request(self, settings):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=CHENNAI_RESPONSE)

        snapshot = run(make_service(handler, settings).fetch_weather())

        assert seen["path"] == "/data/2.5/weather"
        assert seen["params"] == {"q": "Chennai", "appid": "test-key", "units": "metric"}
        assert snapshot.location == "Chennai, IN"

    def test_city_override(self, settings):
        cities = []

        def handler(request):
            cities.append(request.url.params["q"])
            return httpx.Response(200, json={**CHENNAI_RESPONSE, "name": "Madurai"})

        snapshot = run(make_service(handler, settings).fetch_weather("Madurai"))
        assert cities == ["Madurai"]
        assert snapshot.location == "Madurai, IN"

    def test_server_error_returns_fallback(self, settings, audit_logger):
        service = make_service(lambda request: httpx.Response(500), settings, audit_logger)
        assert_is_fallback(run(service.fetch_weather()))

        event = audit_logger.recent_events[0]
        assert event.event_type == AuditEventType.WEATHER_FALLBACK_USED
        assert "500" in event.error_message

    def test_unauthorized_returns_fallback(self, settings):
        service = make_service(lambda request: httpx.Response(401, json={"cod": 401}), settings)
        assert_is_fallback(run(service.fetch_weather()))

    def test_transport_error_returns_fallback(self, settings):
        def handler(request):
            raise httpx.ConnectError("no network", request=request)

        assert_is_fallback(run(make_service(handler, settings).fetch_weather()))

    def test_non_json_body_returns_fallback(self, settings):
        service = make_service(lambda request: httpx.Response(200, text="<html>"), settings)
        assert_is_fallback(run(service.fetch_weather()))

    def test_malformed_body_returns_fallback(self, settings):
        service = make_service(lambda request: httpx.Response(200, json={"cod": 200}), settings)
        assert_is_fallback(run(service.fetch_weather()))

    def test_no_retry_after_failure(self, settings):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        run(make_service(handler, settings).fetch_weather())
        assert len(calls) == 1

    def test_missing_api_key_skips_request(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=CHENNAI_RESPONSE)

        service = make_service(handler, WeatherSettings(api_key=None))
        assert_is_fallback(run(service.fetch_weather()))
        assert calls == []

    def test_fetch_live_raises_instead_of_falling_back(self, settings):
        service = make_service(lambda request: httpx.Response(500), settings)
        with pytest.raises(WeatherUnavailableError):
            run(service.fetch_live())

    def test_success_is_audited(self, settings, audit_logger):
        service = make_service(
            lambda request: httpx.Response(200, json=CHENNAI_RESPONSE),
            settings,
            audit_logger,
        )
        run(service.fetch_weather())
        assert audit_logger.recent_events[0].event_type == AuditEventType.WEATHER_FETCHED
