"""Pointer-event bus used to dismiss the patient dropdown.

The host (terminal UI, web bridge, test) dispatches every pointer-down to
the bus; controls subscribe while mounted.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointerEvent:
    """A pointer-down at ``target`` (whatever node identity the host uses)."""

    target: Any


class PointerEventBus:
    """Synchronous publish/subscribe channel for pointer-down events."""

    def __init__(self) -> None:
        self._listeners: List[Callable[[PointerEvent], None]] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Callable[[PointerEvent], None]) -> Callable[[], None]:
        """Register a listener.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, event: PointerEvent) -> None:
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(event)


@contextmanager
def outside_pointer_listener(
    bus: PointerEventBus,
    contains: Callable[[Any], bool],
    on_outside: Callable[[], None],
) -> Iterator[None]:
    """Call ``on_outside`` for pointer-downs outside a region while active.

    The listener is removed on exit whatever the exit path.

    Args:
        bus: Host pointer-event bus
        contains: Predicate telling whether a target lies inside the region
        on_outside: Callback for pointer-downs outside the region
    """
    def listener(event: PointerEvent) -> None:
        if not contains(event.target):
            on_outside()

    unsubscribe = bus.subscribe(listener)
    logger.debug("Pointer listener registered (%d active)", bus.listener_count)
    try:
        yield
    finally:
        unsubscribe()
        logger.debug("Pointer listener removed (%d active)", bus.listener_count)
