"""Single-slot observable value with replay-latest subscription."""

import asyncio
import logging
from collections import deque
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    def __init__(self, cell: "ObservableValue", observer: Callable):
        self._cell = cell
        self._observer = observer

    @property
    def active(self) -> bool:
        return self._observer in self._cell._observers

    def unsubscribe(self) -> None:
        if self.active:
            self._cell._observers.remove(self._observer)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc: object) -> None:
        self.unsubscribe()


class ObservableValue(Generic[T]):
    """Holds the latest value and pushes every change to its observers.

    New subscribers are called with the current value straight away.
    Setting a value equal to the current one publishes nothing. A value set
    from inside an observer is queued and delivered after the current value
    has reached every observer, so all observers see changes in order.
    """

    def __init__(self, initial: T):
        self._value = initial
        self._observers: list[Callable[[T], None]] = []
        # (value, observers subscribed when it was set)
        self._pending: deque[tuple[T, list[Callable[[T], None]]]] = deque()
        self._publishing = False

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> bool:
        """Store and publish a value. Returns False if it was conflated."""
        if value == self._value:
            return False
        self._value = value
        self._pending.append((value, list(self._observers)))
        if self._publishing:
            return True

        self._publishing = True
        try:
            while self._pending:
                current, observers = self._pending.popleft()
                for observer in observers:
                    if observer in self._observers:
                        self._notify(observer, current)
        finally:
            self._publishing = False
        return True

    def subscribe(self, observer: Callable[[T], None]) -> Subscription:
        self._observers.append(observer)
        self._notify(observer, self._value)
        return Subscription(self, observer)

    async def wait_for(self, predicate: Callable[[T], bool]) -> T:
        """Wait for the first current or published value matching predicate.

        An exception raised by the predicate is re-raised here.
        """
        future: asyncio.Future[T] = asyncio.get_running_loop().create_future()

        def _check(value: T) -> None:
            if future.done():
                return
            try:
                matched = predicate(value)
            except Exception as e:
                future.set_exception(e)
                return
            if matched:
                future.set_result(value)

        with self.subscribe(_check):
            return await future

    def _notify(self, observer: Callable[[T], None], value: T) -> None:
        try:
            observer(value)
        except Exception:
            logger.exception("Observer %r failed on %r", observer, value)
