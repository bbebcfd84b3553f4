# state_store.py
# Single-writer observable container for everything the UI renders.
# NavigationSession is the only writer; everything else subscribes.

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, List, Optional

from .models import NavigationState
from .route_model import Route

logger = logging.getLogger(__name__)


class StoreTopic(Enum):
    STATE   = auto()
    ROUTE   = auto()
    ERROR   = auto()
    LOADING = auto()


@dataclass(frozen=True)
class StoreEvent:
    """Change notification delivered to subscribers."""
    topic: StoreTopic
    value: Any


class NavigationStateStore:
    """
    Observable navigation state.

    Usage:
        store = NavigationStateStore()
        unsubscribe = store.subscribe(lambda ev: print(ev.topic, ev.value))
    """

    def __init__(self) -> None:
        self._state = NavigationState()
        self._route: Optional[Route] = None
        self._error_message: Optional[str] = None
        self._is_loading = False
        self._subscribers: List[Callable[[StoreEvent], None]] = []

    # -- Read side --
    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def route(self) -> Optional[Route]:
        return self._route

    @property
    def error_message(self) -> Optional[str]:
        return self._error_message

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    def subscribe(self, callback: Callable[[StoreEvent], None]) -> Callable[[], None]:
        """Register callback; returns a function that removes it."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # -- Write side (NavigationSession only) --
    def set_state(self, state: NavigationState) -> None:
        if state != self._state:
            self._state = state
            self._publish(StoreTopic.STATE, state)

    def set_route(self, route: Optional[Route]) -> None:
        self._route = route
        self._publish(StoreTopic.ROUTE, route)

    def set_error(self, message: Optional[str]) -> None:
        if message != self._error_message:
            self._error_message = message
            self._publish(StoreTopic.ERROR, message)

    def set_loading(self, loading: bool) -> None:
        if loading != self._is_loading:
            self._is_loading = loading
            self._publish(StoreTopic.LOADING, loading)

    def _publish(self, topic: StoreTopic, value: Any) -> None:
        event = StoreEvent(topic, value)
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Store subscriber error on {topic.name}: {e}")
