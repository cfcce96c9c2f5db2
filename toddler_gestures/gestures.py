"""
Gesture recognition classes that turn landmark frames into gesture candidates.
"""
import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

import numpy as np

from .config import Cfg, PointConfig
from .landmarks import INDEX_TIP, WRIST, fingers_extended, thumb_index_distance
from .types import GestureCandidate, PointVector

logger = logging.getLogger(__name__)


@dataclass
class PositionSample:
    """Wrist position at a specific time."""
    timestamp: float
    x: float
    y: float


def resolve_point_direction(dx: float, dy: float, dz: float, cfg: PointConfig) -> str:
    """
    Map a wrist-to-index-tip vector onto one of ten pointing directions.

    Depth wins when it is large and dominates both image axes; otherwise a
    vector with enough travel on both axes is diagonal, and anything else
    falls back to the larger image axis. Image y grows downward.
    """
    abs_dx, abs_dy, abs_dz = abs(dx), abs(dy), abs(dz)

    if (abs_dz > cfg.depth_threshold and
            abs_dz > cfg.depth_dominance * abs_dx and
            abs_dz > cfg.depth_dominance * abs_dy):
        return "forward" if dz < 0 else "backward"

    if abs_dx > cfg.diagonal_threshold and abs_dy > cfg.diagonal_threshold:
        vertical = "top" if dy < 0 else "bottom"
        horizontal = "left" if dx < 0 else "right"
        return f"{vertical}-{horizontal}"

    if abs_dx > abs_dy:
        return "right" if dx > 0 else "left"
    return "down" if dy > 0 else "up"


class PinchTracker:
    """
    Two-threshold pinch state for one hand.

    Pinching starts below enter_distance and only ends once the thumb-index
    distance climbs above enter_distance + exit_margin, so jitter around the
    boundary does not flicker.
    """

    def __init__(self, cfg: Cfg):
        self.cfg = cfg
        self.is_pinching = False
        self.last_distance: Optional[float] = None
        self.start_time: Optional[float] = None

    def update(self, distance: float, t_now: float) -> Optional[GestureCandidate]:
        """
        Feed the current thumb-index distance.

        Returns:
            A pinch candidate on every frame while pinching, None otherwise
        """
        pinch = self.cfg.gestures.pinch
        self.last_distance = distance

        if not self.is_pinching and distance < pinch.enter_distance:
            self.is_pinching = True
            self.start_time = t_now
        elif self.is_pinching and distance > pinch.enter_distance + pinch.exit_margin:
            self.is_pinching = False
            self.start_time = None

        if not self.is_pinching:
            return None

        return GestureCandidate(
            name="pinch",
            confidence=self.cfg.gestures.confidence,
            strength=max(0.0, 1.0 - distance / pinch.enter_distance),
            duration=t_now - self.start_time
        )


class StaticGestureClassifier:
    """
    Classifies a single frame into pinch, point, open or grab.

    Pinch is stateful and takes priority: while the hand is pinching no other
    static gesture is reported for it.
    """

    def __init__(self, cfg: Cfg):
        """Initialize static classifier with configuration."""
        self.cfg = cfg
        self.pinch = PinchTracker(cfg)

    def classify(self, landmarks: np.ndarray, t_now: float) -> Optional[GestureCandidate]:
        """
        Classify one validated (21, 3) landmark array.

        Args:
            landmarks: Validated landmark array
            t_now: Frame timestamp in seconds

        Returns:
            The matching static gesture, or None if the pose matches nothing
        """
        gestures = self.cfg.gestures
        pinch_cmd = self.pinch.update(thumb_index_distance(landmarks), t_now)
        if pinch_cmd is not None:
            return pinch_cmd

        index, middle, ring, pinky = fingers_extended(landmarks, gestures.fingers)

        if index and not (middle or ring or pinky):
            dx, dy, dz = (float(v) for v in landmarks[INDEX_TIP] - landmarks[WRIST])
            return GestureCandidate(
                name="point",
                confidence=gestures.confidence,
                direction=resolve_point_direction(dx, dy, dz, gestures.point),
                vector=PointVector(dx=dx, dy=dy, dz=dz)
            )

        if index and middle and ring and pinky:
            return GestureCandidate(name="open", confidence=gestures.confidence)

        if not (index or middle or ring or pinky):
            return GestureCandidate(name="grab", confidence=gestures.confidence)

        return None


class WaveGesture:
    """
    Detects side-to-side waving from wrist motion.

    Features:
    - Time-windowed wrist history
    - Skip-one horizontal delta to ride over per-frame noise
    - Counts direction reversals; enough reversals inside the window is a wave
    - Stale partial waves are forgotten when the window ages out
    - Cooldown after each wave during which reversals are not counted
    """

    def __init__(self, cfg: Cfg):
        """Initialize wave detector."""
        self.cfg = cfg
        self.positions: Deque[PositionSample] = deque()
        self.direction_changes = 0
        self.window_start: Optional[float] = None
        self.last_direction: Optional[str] = None

    def update(self, x: float, y: float, t_now: float) -> Optional[GestureCandidate]:
        """
        Add a wrist sample and return a wave candidate if one completed.

        Args:
            x, y: Normalized wrist position
            t_now: Current timestamp in seconds

        Returns:
            GestureCandidate for the wave, None otherwise
        """
        wave = self.cfg.gestures.wave
        window_s = wave.window_ms / 1000.0

        if self.window_start is None:
            self.window_start = t_now

        self.positions.append(PositionSample(timestamp=t_now, x=x, y=y))

        # Clean old samples from buffer
        cutoff_time = t_now - window_s
        while self.positions and self.positions[0].timestamp < cutoff_time:
            self.positions.popleft()

        if len(self.positions) < wave.min_samples:
            return None

        if t_now - self.window_start > wave.reset_ms / 1000.0:
            self._reset_window(t_now)

        delta_x = self.positions[-1].x - self.positions[-3].x
        if abs(delta_x) < wave.min_delta_x:
            return None

        direction = "right" if delta_x > 0 else "left"
        cooling_down = t_now < self.window_start
        if (not cooling_down and self.last_direction is not None and
                direction != self.last_direction):
            self.direction_changes += 1
        self.last_direction = direction

        if (self.direction_changes >= wave.required_reversals and
                t_now - self.window_start <= window_s):
            self.direction_changes = 0
            self.window_start = t_now + wave.cooldown_ms / 1000.0
            logger.debug("Wave detected, cooling down until %.3f", self.window_start)
            return GestureCandidate(name="wave", confidence=self.cfg.gestures.confidence)

        return None

    def _reset_window(self, t_now: float) -> None:
        """Forget a stale partial wave."""
        self.direction_changes = 0
        self.window_start = t_now
        self.last_direction = None


class SwipeGesture:
    """
    Detects fast wrist swipes in one of four directions.

    Features:
    - Short look-back window
    - Travel distance and velocity thresholds on either axis
    - Dominant axis picks the direction
    - Refractory period after each swipe
    """

    def __init__(self, cfg: Cfg):
        """Initialize swipe detector."""
        self.cfg = cfg
        self.positions: Deque[PositionSample] = deque()
        self.last_detection_time: Optional[float] = None

    def update(self, x: float, y: float, t_now: float) -> Optional[GestureCandidate]:
        """
        Add a wrist sample and return a swipe candidate if one is detected.

        Args:
            x, y: Normalized wrist position
            t_now: Current timestamp in seconds

        Returns:
            GestureCandidate for the swipe, None otherwise
        """
        swipe = self.cfg.gestures.swipe

        if (self.last_detection_time is not None and
                t_now - self.last_detection_time < swipe.cooldown_ms / 1000.0):
            return None

        self.positions.append(PositionSample(timestamp=t_now, x=x, y=y))

        cutoff_time = t_now - swipe.window_ms / 1000.0
        while self.positions and self.positions[0].timestamp < cutoff_time:
            self.positions.popleft()

        if len(self.positions) < swipe.min_samples:
            return None

        oldest, newest = self.positions[0], self.positions[-1]
        elapsed = newest.timestamp - oldest.timestamp
        if elapsed <= 0:
            return None

        delta_x = newest.x - oldest.x
        delta_y = newest.y - oldest.y
        velocity_x = delta_x / elapsed
        velocity_y = delta_y / elapsed

        far_enough = abs(delta_x) > swipe.min_distance or abs(delta_y) > swipe.min_distance
        fast_enough = abs(velocity_x) > swipe.min_velocity or abs(velocity_y) > swipe.min_velocity
        if not (far_enough and fast_enough):
            return None

        if abs(delta_x) > abs(delta_y):
            direction = "right" if delta_x > 0 else "left"
        else:
            direction = "down" if delta_y > 0 else "up"

        # New swipe must re-accumulate samples
        self.last_detection_time = t_now
        self.positions.clear()

        return GestureCandidate(
            name="swipe",
            confidence=self.cfg.gestures.confidence,
            direction=direction,
            speed=float(np.hypot(velocity_x, velocity_y))
        )
