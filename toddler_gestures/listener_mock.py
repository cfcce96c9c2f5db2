"""
Mock listener implementation for observing surfaced gestures.
"""
import logging
from collections import Counter, deque
from typing import Any, Deque, List, Optional, Sequence, Tuple

from .types import GestureCandidate

logger = logging.getLogger(__name__)


class MockListener:
    """Mock listener that logs and records gestures instead of acting on them."""

    def __init__(self, history: int = 100):
        """
        Initialize the mock listener.

        Args:
            history: Number of most recent events kept in events
        """
        self.events: Deque[Tuple[GestureCandidate, str, bool]] = deque(maxlen=history)
        self.counts: Counter = Counter()

    def __call__(self, gesture: GestureCandidate, handedness: str,
                 landmarks: Optional[Sequence[Any]]) -> None:
        """Record a gesture notification."""
        self.events.append((gesture, handedness, landmarks is not None))
        self.counts[gesture.name] += 1

        detail = ""
        if gesture.direction:
            detail += f" direction={gesture.direction}"
        if gesture.strength is not None:
            detail += f" strength={gesture.strength:.2f}"
        if gesture.speed is not None:
            detail += f" speed={gesture.speed:.2f}"
        logger.info("[MockListener] %s %s%s (call #%d)",
                    handedness, gesture.name, detail, self.counts[gesture.name])

    @property
    def names(self) -> List[str]:
        """Names of the recent events, oldest first."""
        return [gesture.name for gesture, _, _ in self.events]

    def reset_counters(self) -> None:
        """Reset recorded events for testing."""
        self.events.clear()
        self.counts.clear()
