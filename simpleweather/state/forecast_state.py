"""Forecast state machine: turns reload requests into Loading/Success/Error."""

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from simpleweather.config.schema import AppConfig, StalePolicy
from simpleweather.ingest.weatherapi_client import NetworkError
from simpleweather.models.forecast import ForecastPayload
from simpleweather.models.ui_state import LOADING, Error, ErrorKind, Success, UiState
from simpleweather.state.observable import ObservableValue, Subscription

logger = logging.getLogger(__name__)

DEFAULT_LOADING_DELAY = 0.5  # keeps the loading indicator visible


class ForecastSource(Protocol):
    async def fetch(self) -> ForecastPayload: ...


class ForecastStateMachine:
    """Owns the screen's UiState and is its only writer.

    Must be constructed inside a running event loop; unless ``autostart``
    is False the first fetch starts immediately. Each ``reload()`` resets
    the state to Loading and starts a new fetch task. In-flight fetches are
    never cancelled; ``stale_policy`` decides whether a superseded fetch may
    still publish its result when it settles.
    """

    def __init__(
        self,
        client: ForecastSource,
        *,
        loading_delay: float = DEFAULT_LOADING_DELAY,
        stale_policy: StalePolicy = StalePolicy.LAST_STARTED,
        autostart: bool = True,
    ):
        self.client = client
        self.loading_delay = loading_delay
        self.stale_policy = stale_policy
        self._state: ObservableValue[UiState] = ObservableValue(LOADING)
        self._generation = 0
        self._tasks: set[asyncio.Task[None]] = set()

        if autostart:
            self.reload()

    @classmethod
    def from_config(
        cls, client: ForecastSource, config: AppConfig, autostart: bool = True
    ) -> "ForecastStateMachine":
        return cls(
            client,
            loading_delay=config.loader.loading_delay_ms / 1000,
            stale_policy=config.loader.stale_policy,
            autostart=autostart,
        )

    def current_state(self) -> UiState:
        return self._state.value

    def subscribe(self, observer: Callable[[UiState], None]) -> Subscription:
        return self._state.subscribe(observer)

    async def wait_for(self, predicate: Callable[[UiState], bool]) -> UiState:
        return await self._state.wait_for(predicate)

    def reload(self) -> asyncio.Task[None]:
        """Reset to Loading and start a fetch. Never coalesces."""
        self._generation += 1
        self._state.set(LOADING)
        task = asyncio.get_running_loop().create_task(self._load(self._generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def wait_idle(self) -> None:
        """Wait until every fetch started so far has settled."""
        while self._tasks:
            await asyncio.gather(*self._tasks)

    async def settle(self) -> UiState:
        await self.wait_idle()
        return self.current_state()

    async def _load(self, generation: int) -> None:
        if self.loading_delay > 0:
            await asyncio.sleep(self.loading_delay)
        try:
            payload = await self.client.fetch()
            state: UiState = Success(payload)
        except NetworkError as e:
            logger.error("Forecast fetch #%d failed: %s", generation, e)
            state = Error(ErrorKind.NO_INTERNET)
        except Exception:
            logger.exception("Forecast fetch #%d raised unexpectedly", generation)
            state = Error(ErrorKind.NO_INTERNET)
        self._publish(generation, state)

    def _publish(self, generation: int, state: UiState) -> None:
        if (
            self.stale_policy == StalePolicy.LAST_STARTED
            and generation != self._generation
        ):
            logger.info(
                "Discarding result of fetch #%d, superseded by #%d",
                generation, self._generation,
            )
            return
        self._state.set(state)
