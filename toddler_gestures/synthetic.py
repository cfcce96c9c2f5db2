"""
Synthetic hand landmarks for testing without a camera.

Poses are built in a right-hand frame relative to the wrist (image y grows
downward, negative z is toward the camera), mirrored for left hands and then
placed in the image.
"""
import math
import time
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .landmarks import FINGERS, INDEX, INDEX_TIP, NUM_LANDMARKS, THUMB_TIP, finger_joints
from .types import Landmark, TrackedHand

FINGER_SPACING = 0.018
PALM_LENGTH = 0.10
FAN_ANGLE = 0.15  # radians between neighbouring extended fingers
EXTENDED_SEGMENTS = (0.04, 0.03, 0.025)
CURL_PROXIMAL = 0.03
CURL_DIP = np.array([0.0, 0.015, -0.025])
CURL_TIP = np.array([0.0, 0.024, -0.015])
THUMB = np.array([
    [-0.04, -0.03, 0.0],
    [-0.07, -0.06, 0.0],
    [-0.09, -0.08, 0.0],
    [-0.11, -0.10, 0.0],
])


class SyntheticHand:
    """Builds deterministic 21-point poses for one hand."""

    def __init__(self, handedness: str = "Right", center: Tuple[float, float] = (0.5, 0.5)):
        self.handedness = handedness
        self.wrist = np.array([center[0], center[1] + 0.1, 0.0])

    def open(self, offset: Tuple[float, float] = (0.0, 0.0)) -> List[Landmark]:
        """All four fingers extended."""
        rel = self._base()
        for finger in FINGERS:
            self._extend(rel, finger, self._fan_direction(finger))
        return self._place(rel, offset)

    def grab(self, offset: Tuple[float, float] = (0.0, 0.0)) -> List[Landmark]:
        """Closed fist."""
        rel = self._base()
        for finger in FINGERS:
            self._curl(rel, finger)
        return self._place(rel, offset)

    def point(self, direction: Sequence[float] = (0.0, -1.0, 0.0),
              offset: Tuple[float, float] = (0.0, 0.0)) -> List[Landmark]:
        """
        Index finger extended along direction, other fingers curled.

        Args:
            direction: 3D aim of the index finger in the right-hand frame
            offset: (dx, dy) translation of the whole hand
        """
        rel = self._base()
        aim = np.asarray(direction, dtype=float)
        self._extend(rel, INDEX, aim / np.linalg.norm(aim))
        for finger in FINGERS[1:]:
            self._curl(rel, finger)
        return self._place(rel, offset)

    def pinch(self, gap: float, offset: Tuple[float, float] = (0.0, 0.0)) -> List[Landmark]:
        """Open hand with the thumb tip gap away from the index tip."""
        rel = self._base()
        for finger in FINGERS:
            self._extend(rel, finger, self._fan_direction(finger))
        rel[THUMB_TIP] = rel[INDEX_TIP] + np.array([-gap, 0.0, 0.0])
        return self._place(rel, offset)

    def pose(self, name: str, offset: Tuple[float, float] = (0.0, 0.0)) -> List[Landmark]:
        if name == "open":
            return self.open(offset)
        if name == "grab":
            return self.grab(offset)
        if name == "point":
            return self.point(offset=offset)
        if name == "pinch":
            return self.pinch(0.02, offset)
        raise ValueError(f"Unknown pose: {name}")

    def _base(self) -> np.ndarray:
        rel = np.zeros((NUM_LANDMARKS, 3))
        rel[1:5] = THUMB
        for finger in FINGERS:
            mcp = finger_joints(finger)[0]
            rel[mcp] = [(finger - 2.5) * FINGER_SPACING, -PALM_LENGTH, 0.0]
        return rel

    @staticmethod
    def _fan_direction(finger: int) -> np.ndarray:
        theta = (finger - 2.5) * FAN_ANGLE
        return np.array([math.sin(theta), -math.cos(theta), 0.0])

    @staticmethod
    def _extend(rel: np.ndarray, finger: int, direction: np.ndarray) -> None:
        mcp, pip, dip, tip = finger_joints(finger)
        rel[pip] = rel[mcp] + EXTENDED_SEGMENTS[0] * direction
        rel[dip] = rel[pip] + EXTENDED_SEGMENTS[1] * direction
        rel[tip] = rel[dip] + EXTENDED_SEGMENTS[2] * direction

    def _curl(self, rel: np.ndarray, finger: int) -> None:
        mcp, pip, dip, tip = finger_joints(finger)
        rel[pip] = rel[mcp] + CURL_PROXIMAL * self._fan_direction(finger)
        rel[dip] = rel[pip] + CURL_DIP
        rel[tip] = rel[dip] + CURL_TIP

    def _place(self, rel: np.ndarray, offset: Tuple[float, float]) -> List[Landmark]:
        if self.handedness == "Left":
            rel = rel * np.array([-1.0, 1.0, 1.0])
        points = rel + self.wrist + np.array([offset[0], offset[1], 0.0])
        return [tuple(float(v) for v in p) for p in points]


class SyntheticHandSource:
    """
    Scripted stand-in for a camera and hand tracker.

    Cycles through point, open, grab, wave and pinch, holding each for
    gesture_duration seconds, while the hand drifts in a slow circle with a
    little jitter.
    """

    SCRIPT = ("point", "open", "grab", "wave", "pinch")

    def __init__(self, handedness: str = "Right", gesture_duration: float = 2.0,
                 drift_radius: float = 0.05, jitter: float = 0.003,
                 seed: Optional[int] = None):
        self.hand = SyntheticHand(handedness)
        self.gesture_duration = gesture_duration
        self.drift_radius = drift_radius
        self.jitter = jitter
        self.rng = np.random.default_rng(seed)
        self.start_time: Optional[float] = None

    def current_gesture(self, t_now: float) -> str:
        if self.start_time is None:
            self.start_time = t_now
        step = int((t_now - self.start_time) // self.gesture_duration)
        return self.SCRIPT[step % len(self.SCRIPT)]

    def frames(self, t_now: Optional[float] = None) -> List[TrackedHand]:
        """One tracker frame for time t_now (defaults to the wall clock)."""
        if t_now is None:
            t_now = time.time()
        gesture = self.current_gesture(t_now)
        elapsed = t_now - self.start_time

        dx = self.drift_radius * math.cos(elapsed)
        dy = self.drift_radius * math.sin(elapsed)
        if self.jitter:
            noise_x, noise_y = self.rng.uniform(-self.jitter, self.jitter, size=2)
            dx += noise_x
            dy += noise_y

        if gesture == "wave":
            landmarks = self.hand.open((dx + 0.1 * math.sin(elapsed * 6.0), dy))
        elif gesture == "pinch":
            landmarks = self.hand.pinch(0.03 + 0.015 * math.sin(elapsed * 3.0), (dx, dy))
        else:
            landmarks = self.hand.pose(gesture, (dx, dy))

        return [TrackedHand(landmarks=landmarks, handedness=self.hand.handedness, score=0.95)]
