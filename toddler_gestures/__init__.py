"""
Toddler Gesture Engine

Turns streams of tracked hand landmarks into debounced gesture events
(point, open, grab, pinch, wave, swipe) for an educational toddler app.
"""

__version__ = "0.1.0"
__author__ = "Toddler Gestures Team"

from .types import GestureCandidate, PointVector, TrackedHand, InvalidLandmarksError
from .config import load_config, Cfg
from .engine import GestureEngine, hand_identity
from .listener_mock import MockListener
from .synthetic import SyntheticHand, SyntheticHandSource

__all__ = [
    "GestureCandidate",
    "PointVector",
    "TrackedHand",
    "InvalidLandmarksError",
    "load_config",
    "Cfg",
    "GestureEngine",
    "hand_identity",
    "MockListener",
    "SyntheticHand",
    "SyntheticHandSource",
]
