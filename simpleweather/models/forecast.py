"""WeatherAPI.com forecast request and payload models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ForecastRequest:
    api_key: str
    query: str  # "lat,lon"
    days: int = 3
    aqi: bool = False
    alerts: bool = False

    def to_params(self) -> dict[str, str | int]:
        return {
            "key": self.api_key,
            "q": self.query,
            "days": self.days,
            "aqi": "yes" if self.aqi else "no",
            "alerts": "yes" if self.alerts else "no",
        }


@dataclass(frozen=True)
class Condition:
    text: str
    icon: str  # may be protocol-relative ("//cdn.weatherapi.com/...")


@dataclass(frozen=True)
class CurrentWeather:
    temp_c: float
    condition: Condition
    last_updated: str  # server-local "YYYY-MM-DD HH:MM"


@dataclass(frozen=True)
class DaySummary:
    maxtemp_c: float
    mintemp_c: float
    condition: Condition


@dataclass(frozen=True)
class HourForecast:
    time: str
    temp_c: float
    condition: Condition


@dataclass(frozen=True)
class ForecastDay:
    date: str  # YYYY-MM-DD
    day: DaySummary
    hours: list[HourForecast] = field(default_factory=list)


@dataclass(frozen=True)
class ForecastPayload:
    current: CurrentWeather
    forecast_days: list[ForecastDay] = field(default_factory=list)
