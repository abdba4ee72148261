"""Plain text rendering of forecast tabs and UI states."""

from datetime import datetime

from simpleweather.config.schema import DateLocale, Tab
from simpleweather.models.forecast import (
    CurrentWeather,
    ForecastDay,
    ForecastPayload,
    HourForecast,
)
from simpleweather.models.ui_state import Error, ErrorKind, Loading, Success, UiState

TAB_TITLES = {
    Tab.CURRENT: "Current",
    Tab.HOURLY: "Hourly",
    Tab.DAILY: "3-day forecast",
}

ERROR_TITLE = "Error"
ERROR_MESSAGES = {
    ErrorKind.NO_INTERNET: "No internet connection. Check your network and try again.",
}
LOADING_TEXT = "Loading..."
NO_DATA_TEXT = "No data"

# Genitive month names, as in "05 января"
MONTHS = {
    DateLocale.RU: (
        "января", "февраля", "марта", "апреля", "мая", "июня",
        "июля", "августа", "сентября", "октября", "ноября", "декабря",
    ),
    DateLocale.EN: (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
}


def absolute_icon_url(url: str) -> str:
    """WeatherAPI icons come as "//cdn..."; make them fetchable."""
    return f"https:{url}" if url.startswith("//") else url


def hour_label(time: str) -> str:
    """'2023-11-20 14:00' -> '14:00'."""
    return time.split(" ")[-1]


def format_date(date: str, locale: DateLocale = DateLocale.RU) -> str:
    try:
        parsed = datetime.strptime(date, "%Y-%m-%d")
    except ValueError:
        return date
    return f"{parsed.day:02d} {MONTHS[locale][parsed.month - 1]}"


def format_current(current: CurrentWeather) -> str:
    return "\n".join([
        f"[{absolute_icon_url(current.condition.icon)}]",
        f"{current.temp_c}°C",
        current.condition.text,
        "",
        f"Updated: {current.last_updated}",
    ])


def format_hourly(hours: list[HourForecast]) -> str:
    return "\n".join(
        f"{hour_label(h.time):>5}  {h.temp_c}°  {h.condition.text}  "
        f"[{absolute_icon_url(h.condition.icon)}]"
        for h in hours
    )


def format_daily(days: list[ForecastDay], locale: DateLocale = DateLocale.RU) -> str:
    lines = []
    for d in days:
        lines.append(f"{format_date(d.date, locale)}  {d.day.condition.text}")
        lines.append(
            f"  Max: {d.day.maxtemp_c}°  Min: {d.day.mintemp_c}°  "
            f"[{absolute_icon_url(d.day.condition.icon)}]"
        )
    return "\n".join(lines)


def format_forecast(
    payload: ForecastPayload,
    tab: Tab = Tab.CURRENT,
    title: str = "",
    locale: DateLocale = DateLocale.RU,
) -> str:
    """Title, tab bar with the selected tab bracketed, then the tab body."""
    tab_bar = " | ".join(
        f"[{TAB_TITLES[t]}]" if t == tab else TAB_TITLES[t] for t in Tab
    )
    if tab == Tab.CURRENT:
        body = format_current(payload.current)
    elif tab == Tab.HOURLY:
        first_day = payload.forecast_days[0] if payload.forecast_days else None
        body = format_hourly(first_day.hours if first_day else [])
    else:
        body = format_daily(payload.forecast_days, locale)

    lines = [title] if title else []
    lines += [tab_bar, "", body]
    return "\n".join(lines)


def format_error_dialog(reason: ErrorKind) -> str:
    return f"{ERROR_TITLE}: {ERROR_MESSAGES[reason]}"


def format_state(
    state: UiState,
    tab: Tab = Tab.CURRENT,
    title: str = "",
    locale: DateLocale = DateLocale.RU,
) -> str:
    match state:
        case Loading():
            return LOADING_TEXT
        case Success(payload=payload):
            return format_forecast(payload, tab, title, locale)
        case Error():
            return NO_DATA_TEXT
    raise TypeError(f"Unknown UI state: {state!r}")
