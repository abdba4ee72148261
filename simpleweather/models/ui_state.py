"""UI state for the forecast screen: exactly one of Loading, Success, Error."""

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

from simpleweather.models.forecast import ForecastPayload


class ErrorKind(StrEnum):
    NO_INTERNET = "NO_INTERNET"


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Success:
    payload: ForecastPayload


@dataclass(frozen=True)
class Error:
    reason: ErrorKind


UiState: TypeAlias = Loading | Success | Error

LOADING = Loading()
