"""WeatherAPI.com forecast client."""

import logging

import httpx

from simpleweather.config.schema import WEATHERAPI_BASE_URL, AppConfig
from simpleweather.models.forecast import (
    Condition,
    CurrentWeather,
    DaySummary,
    ForecastDay,
    ForecastPayload,
    ForecastRequest,
    HourForecast,
)

logger = logging.getLogger(__name__)


class NetworkError(Exception):
    """Raised for any failed forecast fetch: transport, HTTP status or bad body."""


class WeatherApiClient:
    def __init__(
        self,
        request: ForecastRequest,
        base_url: str = WEATHERAPI_BASE_URL,
        timeout: float | None = 30.0,
    ):
        self.request = request
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: AppConfig) -> "WeatherApiClient":
        request = ForecastRequest(
            api_key=config.api.api_key,
            query=config.location.query,
            days=config.api.days,
            aqi=config.api.aqi,
            alerts=config.api.alerts,
        )
        return cls(
            request,
            base_url=config.api.base_url,
            timeout=config.api.timeout_seconds,
        )

    async def fetch(self) -> ForecastPayload:
        """Fetch the forecast once. No retries; the caller decides."""
        url = f"{self.base_url}/forecast.json"
        logger.debug("Fetching %d-day forecast for q=%s", self.request.days, self.request.query)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url, params=self.request.to_params())
            resp.raise_for_status()
            return parse_forecast(resp.json())
        except httpx.HTTPStatusError as e:
            raise NetworkError(f"HTTP {e.response.status_code} from {url}") from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Request to {url} failed: {e!r}") from e
        except (ValueError, KeyError, TypeError) as e:
            # json.JSONDecodeError is a ValueError
            raise NetworkError(f"Malformed forecast response: {e!r}") from e


def parse_forecast(raw: dict) -> ForecastPayload:
    """Build a ForecastPayload from a forecast.json body.

    ``current`` and ``forecast.forecastday`` are required; a missing
    ``hour`` list on a day is treated as empty.
    """
    days = [_parse_day(d) for d in raw["forecast"]["forecastday"]]
    return ForecastPayload(current=_parse_current(raw["current"]), forecast_days=days)


def _parse_condition(raw: dict) -> Condition:
    return Condition(text=str(raw["text"]), icon=str(raw["icon"]))


def _parse_current(raw: dict) -> CurrentWeather:
    return CurrentWeather(
        temp_c=float(raw["temp_c"]),
        condition=_parse_condition(raw["condition"]),
        last_updated=str(raw["last_updated"]),
    )


def _parse_day(raw: dict) -> ForecastDay:
    day = raw["day"]
    return ForecastDay(
        date=str(raw["date"]),
        day=DaySummary(
            maxtemp_c=float(day["maxtemp_c"]),
            mintemp_c=float(day["mintemp_c"]),
            condition=_parse_condition(day["condition"]),
        ),
        hours=[
            HourForecast(
                time=str(h["time"]),
                temp_c=float(h["temp_c"]),
                condition=_parse_condition(h["condition"]),
            )
            for h in raw.get("hour") or []
        ],
    )
