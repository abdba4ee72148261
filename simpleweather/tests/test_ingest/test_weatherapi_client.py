"""Tests for the WeatherAPI.com client with mocked httpx."""

import httpx
import pytest
import respx

from simpleweather.config.schema import AppConfig
from simpleweather.ingest.weatherapi_client import (
    NetworkError,
    WeatherApiClient,
    parse_forecast,
)
from simpleweather.models.forecast import ForecastRequest

FORECAST_URL = "https://test-weather.example.com/v1/forecast.json"


@pytest.fixture
def client() -> WeatherApiClient:
    return WeatherApiClient(
        ForecastRequest(api_key="test-key", query="55.7569,37.6151"),
        base_url="https://test-weather.example.com/v1/",
        timeout=5.0,
    )


class TestFetch:
    @pytest.mark.asyncio
    async def test_success(self, client: WeatherApiClient, forecast_json: dict):
        with respx.mock:
            respx.get(FORECAST_URL).mock(
                return_value=httpx.Response(200, json=forecast_json)
            )
            payload = await client.fetch()

        assert payload.current.temp_c == -2.0
        assert payload.current.condition.text == "Light snow"
        assert payload.current.last_updated == "2023-11-20 13:45"
        assert len(payload.forecast_days) == 3
        assert payload.forecast_days[0].date == "2023-11-20"
        assert len(payload.forecast_days[0].hours) == 3
        assert payload.forecast_days[2].hours == []

    @pytest.mark.asyncio
    async def test_query_params(self, client: WeatherApiClient, forecast_json: dict):
        with respx.mock:
            route = respx.get(FORECAST_URL).mock(
                return_value=httpx.Response(200, json=forecast_json)
            )
            await client.fetch()

        assert route.call_count == 1
        params = route.calls.last.request.url.params
        assert params["key"] == "test-key"
        assert params["q"] == "55.7569,37.6151"
        assert params["days"] == "3"
        assert params["aqi"] == "no"
        assert params["alerts"] == "no"

    @pytest.mark.asyncio
    async def test_icon_urls_not_rewritten(self, client: WeatherApiClient, forecast_json: dict):
        with respx.mock:
            respx.get(FORECAST_URL).mock(
                return_value=httpx.Response(200, json=forecast_json)
            )
            payload = await client.fetch()
        assert payload.current.condition.icon.startswith("//cdn.weatherapi.com/")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 401, 403, 500, 503])
    async def test_http_error_status(self, client: WeatherApiClient, status: int):
        with respx.mock:
            respx.get(FORECAST_URL).mock(return_value=httpx.Response(status))
            with pytest.raises(NetworkError) as exc_info:
                await client.fetch()
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    @pytest.mark.asyncio
    async def test_timeout(self, client: WeatherApiClient):
        with respx.mock:
            respx.get(FORECAST_URL).mock(side_effect=httpx.ConnectTimeout)
            with pytest.raises(NetworkError) as exc_info:
                await client.fetch()
        assert isinstance(exc_info.value.__cause__, httpx.TimeoutException)

    @pytest.mark.asyncio
    async def test_connection_error(self, client: WeatherApiClient):
        with respx.mock:
            respx.get(FORECAST_URL).mock(side_effect=httpx.ConnectError)
            with pytest.raises(NetworkError):
                await client.fetch()

    @pytest.mark.asyncio
    async def test_malformed_body(self, client: WeatherApiClient):
        with respx.mock:
            respx.get(FORECAST_URL).mock(
                return_value=httpx.Response(200, text="<html>oops</html>")
            )
            with pytest.raises(NetworkError, match="Malformed"):
                await client.fetch()

    @pytest.mark.asyncio
    async def test_missing_blocks(self, client: WeatherApiClient):
        with respx.mock:
            respx.get(FORECAST_URL).mock(
                return_value=httpx.Response(200, json={"error": {"code": 1006}})
            )
            with pytest.raises(NetworkError, match="Malformed"):
                await client.fetch()

    @pytest.mark.asyncio
    async def test_single_request_no_retry(self, client: WeatherApiClient):
        with respx.mock:
            route = respx.get(FORECAST_URL).mock(return_value=httpx.Response(503))
            with pytest.raises(NetworkError):
                await client.fetch()
        assert route.call_count == 1


class TestFromConfig:
    def test_builds_request(self, app_config: AppConfig):
        client = WeatherApiClient.from_config(app_config)
        assert client.base_url == "https://test-weather.example.com/v1"
        assert client.request.api_key == "test-key"
        assert client.request.query == "55.7569,37.6151"
        assert client.request.days == 3
        assert client.timeout == 30.0


class TestParseForecast:
    def test_example_payload(self):
        raw = {
            "current": {
                "temp_c": 5.0,
                "condition": {"text": "Clear", "icon": "//x/y.png"},
                "last_updated": "2024-01-01 12:00",
            },
            "forecast": {"forecastday": []},
        }
        payload = parse_forecast(raw)
        assert payload.current.temp_c == 5.0
        assert payload.current.condition.icon == "//x/y.png"
        assert payload.forecast_days == []

    def test_integer_temps_become_floats(self, forecast_json: dict):
        forecast_json["current"]["temp_c"] = 3
        payload = parse_forecast(forecast_json)
        assert payload.current.temp_c == 3.0
        assert isinstance(payload.current.temp_c, float)

    def test_missing_hour_list(self, forecast_json: dict):
        del forecast_json["forecast"]["forecastday"][0]["hour"]
        payload = parse_forecast(forecast_json)
        assert payload.forecast_days[0].hours == []

    def test_missing_forecast_raises(self, forecast_json: dict):
        del forecast_json["forecast"]
        with pytest.raises(KeyError):
            parse_forecast(forecast_json)

    def test_daily_fields(self, forecast_json: dict):
        day = parse_forecast(forecast_json).forecast_days[1]
        assert day.date == "2023-11-21"
        assert day.day.maxtemp_c == 1.2
        assert day.day.mintemp_c == -2.8
        assert day.day.condition.text == "Partly cloudy"
