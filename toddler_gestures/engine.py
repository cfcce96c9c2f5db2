"""
Gesture engine: per-hand state, frame processing and notification.
"""
import logging
import math
import numbers
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from .config import Cfg, load_config
from .dispatch import Debouncer, ListenerRegistry
from .gestures import StaticGestureClassifier, SwipeGesture, WaveGesture
from .landmarks import WRIST, landmarks_to_array
from .types import (
    STATIC_GESTURES,
    GestureCandidate,
    GestureListener,
    HandUpdateListener,
    InvalidLandmarksError,
    TrackedHand,
)

logger = logging.getLogger(__name__)


def hand_identity(handedness: Optional[str], slot: int) -> str:
    """Per-hand key combining handedness and detection slot, e.g. 'Right_0'."""
    return f"{handedness or 'Unknown'}_{slot}"


def _is_valid_timestamp(t_now: Any) -> bool:
    return (isinstance(t_now, numbers.Real) and not isinstance(t_now, bool)
            and math.isfinite(t_now))


@dataclass
class HandState:
    """All detector state owned for one tracked hand."""
    static: StaticGestureClassifier
    wave: WaveGesture
    swipe: SwipeGesture
    debouncer: Debouncer
    last_timestamp: Optional[float] = None

    @classmethod
    def create(cls, cfg: Cfg) -> "HandState":
        return cls(
            static=StaticGestureClassifier(cfg),
            wave=WaveGesture(cfg),
            swipe=SwipeGesture(cfg),
            debouncer=Debouncer(cfg.gestures.debounce.repeat_ms)
        )


class GestureEngine:
    """
    Turns per-hand landmark frames into debounced gesture notifications.

    Each frame goes through the static classifier and both temporal
    detectors. Static results pass the debouncer; wave and swipe are
    surfaced as soon as they are detected. State is created lazily per hand
    identity and dropped on reset. Frames for one identity must arrive in
    non-decreasing timestamp order; the engine is not thread-safe.
    """

    def __init__(self, cfg: Optional[Cfg] = None):
        """Initialize the engine; loads the default config if none is given."""
        self.cfg = cfg if cfg is not None else load_config()
        self._hands: Dict[str, HandState] = {}
        self._gesture_listeners: ListenerRegistry[GestureListener] = ListenerRegistry()
        self._hand_listeners: ListenerRegistry[HandUpdateListener] = ListenerRegistry()

    @property
    def tracked_hands(self) -> List[str]:
        """Identities that currently hold detector state."""
        return list(self._hands)

    def on_gesture(self, listener: GestureListener) -> Callable[[], None]:
        """Subscribe to surfaced gestures. Returns an unsubscribe callable."""
        return self._gesture_listeners.add(listener)

    def on_hand_update(self, listener: HandUpdateListener) -> Callable[[], None]:
        """Subscribe to raw tracker frames. Returns an unsubscribe callable."""
        return self._hand_listeners.add(listener)

    def process_frame(self, hand_id: str, landmarks: Sequence[Any], handedness: str,
                      t_now: float) -> List[GestureCandidate]:
        """
        Process one landmark set for one hand.

        Malformed or out-of-order frames are skipped without touching the
        hand's state.

        Args:
            hand_id: Hand identity, see hand_identity()
            landmarks: 21 landmarks for this hand
            handedness: 'Left' or 'Right'
            t_now: Frame timestamp in seconds

        Returns:
            Gestures that survived dispatch, in the order listeners saw them
        """
        if not _is_valid_timestamp(t_now):
            logger.debug("Skipping frame for %s: invalid timestamp %r", hand_id, t_now)
            return []

        try:
            points = landmarks_to_array(landmarks)
        except InvalidLandmarksError as e:
            logger.debug("Skipping frame for %s: %s", hand_id, e)
            return []

        state = self._hands.get(hand_id)
        if state is not None and state.last_timestamp is not None and t_now < state.last_timestamp:
            logger.warning("Skipping out-of-order frame for %s: %.3f < %.3f",
                           hand_id, t_now, state.last_timestamp)
            return []

        if state is None:
            logger.debug("Tracking new hand %s", hand_id)
            state = HandState.create(self.cfg)
            self._hands[hand_id] = state
        state.last_timestamp = t_now

        surfaced: List[GestureCandidate] = []

        static_cmd = state.static.classify(points, t_now)
        if static_cmd is not None and state.debouncer.should_emit(static_cmd, t_now):
            surfaced.append(static_cmd)

        wrist_x, wrist_y = float(points[WRIST][0]), float(points[WRIST][1])
        for detector in (state.wave, state.swipe):
            temporal_cmd = detector.update(wrist_x, wrist_y, t_now)
            if temporal_cmd is not None:
                logger.info("%s %s%s", hand_id, temporal_cmd.name,
                            f" {temporal_cmd.direction}" if temporal_cmd.direction else "")
                surfaced.append(temporal_cmd)

        # Every detector has seen this frame before any listener runs
        for gesture in surfaced:
            pose = landmarks if gesture.name in STATIC_GESTURES else None
            self._gesture_listeners.notify(gesture, handedness, pose)

        return surfaced

    def process_hands(self, hands: List[TrackedHand], t_now: float) -> List[GestureCandidate]:
        """
        Process every hand of one tracker frame.

        Hand-update listeners see the whole frame first; each hand is then
        classified independently under an identity built from its
        handedness and slot.
        """
        self._hand_listeners.notify(hands)

        surfaced: List[GestureCandidate] = []
        for slot, hand in enumerate(hands):
            hand_id = hand_identity(hand.handedness, slot)
            surfaced.extend(self.process_frame(hand_id, hand.landmarks, hand.handedness, t_now))
        return surfaced

    def reset(self, hand_id: str) -> None:
        """Discard all state for one hand."""
        if self._hands.pop(hand_id, None) is not None:
            logger.debug("Reset hand %s", hand_id)

    def reset_all(self) -> None:
        """Discard all per-hand state, e.g. when tracking stops."""
        logger.debug("Reset %d tracked hand(s)", len(self._hands))
        self._hands.clear()
