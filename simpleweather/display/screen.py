"""Terminal weather screen: renders machine states and runs the error dialog."""

import asyncio
import logging
from collections.abc import Callable

from simpleweather.config.schema import DateLocale, Tab
from simpleweather.display.formatters import format_error_dialog, format_state
from simpleweather.models.ui_state import Error, Loading, UiState
from simpleweather.state.forecast_state import ForecastStateMachine

logger = logging.getLogger(__name__)


def _never_retry() -> bool:
    return False


class WeatherScreen:
    def __init__(
        self,
        machine: ForecastStateMachine,
        tab: Tab = Tab.CURRENT,
        title: str = "",
        locale: DateLocale = DateLocale.RU,
        write: Callable[[str], None] = print,
        confirm_retry: Callable[[], bool] = _never_retry,
    ):
        self.machine = machine
        self.tab = tab
        self.title = title
        self.locale = locale
        self.write = write
        self.confirm_retry = confirm_retry
        self.rendered: list[UiState] = []

    def render(self, state: UiState) -> None:
        self.rendered.append(state)
        self.write(format_state(state, self.tab, self.title, self.locale))
        if isinstance(state, Error):
            self.write(format_error_dialog(state.reason))

    async def run(self) -> UiState:
        """Render until a fetch settles; on Error, retry while the user agrees.

        ``confirm_retry`` may block on user input; it runs in a worker thread.
        Returns the final settled state.
        """
        with self.machine.subscribe(self.render):
            while True:
                if isinstance(self.machine.current_state(), Loading) and not self.machine.in_flight:
                    self.machine.reload()
                state = await self.machine.settle()
                if isinstance(state, Error) and await asyncio.to_thread(self.confirm_retry):
                    logger.info("Retrying forecast fetch")
                    self.machine.reload()
                    continue
                return state
