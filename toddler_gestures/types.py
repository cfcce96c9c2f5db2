"""
Type definitions for the toddler gesture engine.
"""
from dataclasses import dataclass
from typing import Any, List, Literal, Optional, Protocol, Sequence, Tuple, runtime_checkable


Landmark = Tuple[float, float, float]

GestureName = Literal["point", "open", "grab", "pinch", "wave", "swipe"]

STATIC_GESTURES = ("point", "open", "grab", "pinch")


class InvalidLandmarksError(ValueError):
    """Raised when a landmark set does not describe a full, finite hand."""


@dataclass
class PointVector:
    """Wrist to index-tip vector used to resolve a pointing direction."""
    dx: float
    dy: float
    dz: float


@dataclass
class GestureCandidate:
    """A gesture produced by one classifier or detector for one hand."""
    name: GestureName
    confidence: float
    direction: Optional[str] = None
    strength: Optional[float] = None  # pinch only, 0..1
    speed: Optional[float] = None  # swipe only, normalized units per second
    duration: Optional[float] = None  # pinch only, seconds
    vector: Optional[PointVector] = None  # point only


@dataclass
class TrackedHand:
    """One hand reported by a landmark source for a single frame."""
    landmarks: Sequence[Any]
    handedness: str
    score: float = 1.0


@runtime_checkable
class GestureListener(Protocol):
    """Subscriber notified for every gesture that survives dispatch."""

    def __call__(self, gesture: GestureCandidate, handedness: str,
                 landmarks: Optional[Sequence[Any]]) -> None:
        """Landmarks are None for temporal gestures."""
        ...


@runtime_checkable
class HandUpdateListener(Protocol):
    """Subscriber notified with every tracker frame before classification."""

    def __call__(self, hands: List[TrackedHand]) -> None:
        ...
