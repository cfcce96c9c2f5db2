"""
Debouncing of static gestures and fan-out to subscribers.
"""
import logging
from typing import Callable, Generic, List, Optional, TypeVar

from .types import STATIC_GESTURES, GestureCandidate

logger = logging.getLogger(__name__)

L = TypeVar("L", bound=Callable[..., None])


class Debouncer:
    """
    Per-hand filter for static gestures.

    A static gesture surfaces when its name differs from the last surfaced
    one, or when repeat_ms has passed since that gesture last surfaced.
    Pinch surfaces every frame so its strength can be followed. Temporal
    gestures rate-limit themselves and always pass.
    """

    def __init__(self, repeat_ms: int):
        self.repeat_s = repeat_ms / 1000.0
        self.last_gesture_name: Optional[str] = None
        self.last_gesture_time: Optional[float] = None

    def should_emit(self, gesture: GestureCandidate, t_now: float) -> bool:
        if gesture.name not in STATIC_GESTURES:
            return True

        emit = (gesture.name == "pinch" or
                gesture.name != self.last_gesture_name or
                self.last_gesture_time is None or
                t_now - self.last_gesture_time >= self.repeat_s)
        if emit:
            self.last_gesture_name = gesture.name
            self.last_gesture_time = t_now
        return emit


class ListenerRegistry(Generic[L]):
    """Ordered list of callbacks. Registration order is delivery order."""

    def __init__(self):
        self._listeners: List[L] = []

    def add(self, listener: L) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            A callable that unregisters this listener; calling it twice is harmless
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, *args) -> None:
        # Copy so a listener may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(*args)
