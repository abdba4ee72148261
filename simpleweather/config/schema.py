"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field

WEATHERAPI_BASE_URL = "https://api.weatherapi.com/v1"


class StalePolicy(StrEnum):
    LAST_STARTED = "last-started"  # results of superseded fetches are dropped
    LAST_SETTLED = "last-settled"  # whichever fetch finishes last wins


class DateLocale(StrEnum):
    RU = "ru"
    EN = "en"


class Tab(StrEnum):
    CURRENT = "current"
    HOURLY = "hourly"
    DAILY = "daily"


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = WEATHERAPI_BASE_URL
    api_key: str = ""
    days: int = Field(default=3, ge=1, le=14)
    aqi: bool = False
    alerts: bool = False
    timeout_seconds: float | None = Field(default=30.0, gt=0.0)


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    name: str = "Moscow"
    latitude: float = Field(default=55.7569, ge=-90.0, le=90.0)
    longitude: float = Field(default=37.6151, ge=-180.0, le=180.0)

    @property
    def query(self) -> str:
        return f"{self.latitude},{self.longitude}"


class LoaderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    loading_delay_ms: int = Field(default=500, ge=0)
    stale_policy: StalePolicy = StalePolicy.LAST_STARTED


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    date_locale: DateLocale = DateLocale.RU
    default_tab: Tab = Tab.CURRENT


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    location: LocationConfig = LocationConfig()
    loader: LoaderConfig = LoaderConfig()
    display: DisplayConfig = DisplayConfig()
