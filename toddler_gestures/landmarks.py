"""
Hand landmark validation and finger extension classification.
"""
import numpy as np
from typing import Any, List, Sequence

from .config import FingerConfig
from .geometry import distance_3d, dot, normalize, vector_between
from .types import InvalidLandmarksError

NUM_LANDMARKS = 21

WRIST = 0
THUMB_TIP = 4
INDEX_MCP = 5
INDEX_TIP = 8
MIDDLE_TIP = 12

INDEX, MIDDLE, RING, PINKY = 1, 2, 3, 4
FINGERS = (INDEX, MIDDLE, RING, PINKY)


def finger_joints(finger: int) -> tuple:
    """(MCP, PIP, DIP, tip) landmark indices for a finger, 1=index .. 4=pinky."""
    mcp = finger * 4 + 1
    return mcp, mcp + 1, mcp + 2, mcp + 3


def landmarks_to_array(landmarks: Sequence[Any]) -> np.ndarray:
    """
    Convert a landmark set into a (21, 3) float array.

    Accepts (x, y, z) tuples, (x, y) tuples (z taken as 0) or objects with
    x/y/z attributes as produced by MediaPipe.

    Raises:
        InvalidLandmarksError: if the set is short, ragged or non-finite
    """
    if landmarks is None:
        raise InvalidLandmarksError("no landmarks supplied")

    try:
        points = [_as_xyz(point) for point in landmarks]
        arr = np.asarray(points, dtype=float)
    except (AttributeError, TypeError, ValueError) as e:
        raise InvalidLandmarksError(f"landmarks are not numeric points: {e}") from e

    if arr.shape != (NUM_LANDMARKS, 3):
        raise InvalidLandmarksError(
            f"expected {NUM_LANDMARKS} landmarks of 3 coordinates, got shape {arr.shape}"
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidLandmarksError("landmarks contain NaN or infinite coordinates")

    return arr


def _as_xyz(point: Any) -> tuple:
    if hasattr(point, "x"):
        return (point.x, point.y, getattr(point, "z", 0.0))
    if len(point) == 2:
        return (point[0], point[1], 0.0)
    return tuple(point)


def is_finger_extended(landmarks: np.ndarray, finger: int, cfg: FingerConfig) -> bool:
    """
    Decide whether a non-thumb finger is extended.

    Three signals are combined: tip/base distance ratio from the wrist,
    straightness of consecutive joint segments, and (index only) separation
    of the index tip from the middle tip. The index finger passes on any one
    signal; the other fingers need both the ratio and straightness.

    Args:
        landmarks: (21, 3) landmark array
        finger: 1=index, 2=middle, 3=ring, 4=pinky
        cfg: finger thresholds

    Returns:
        True if the finger is extended
    """
    mcp_i, pip_i, dip_i, tip_i = finger_joints(finger)
    wrist = landmarks[WRIST]
    mcp, pip, dip, tip = landmarks[mcp_i], landmarks[pip_i], landmarks[dip_i], landmarks[tip_i]
    is_index = finger == INDEX

    base_distance = distance_3d(mcp, wrist)
    ratio = distance_3d(tip, wrist) / base_distance if base_distance > 0 else 0.0
    ratio_threshold = cfg.index_distance_ratio if is_index else cfg.other_distance_ratio
    far_from_wrist = ratio > ratio_threshold

    palm_dir = normalize(vector_between(wrist, mcp))
    proximal_dir = normalize(vector_between(mcp, pip))
    middle_dir = normalize(vector_between(pip, dip))
    straight_threshold = cfg.index_straightness if is_index else cfg.other_straightness
    straight = (dot(palm_dir, proximal_dir) > straight_threshold and
                dot(proximal_dir, middle_dir) > straight_threshold)

    if not is_index:
        return far_from_wrist and straight

    middle_tip = landmarks[MIDDLE_TIP]
    separated = distance_3d(tip, middle_tip) > cfg.index_separation * distance_3d(mcp, middle_tip)
    return far_from_wrist or straight or separated


def fingers_extended(landmarks: np.ndarray, cfg: FingerConfig) -> List[bool]:
    """Extension flags for index, middle, ring and pinky, in that order."""
    return [is_finger_extended(landmarks, finger, cfg) for finger in FINGERS]


def thumb_index_distance(landmarks: np.ndarray) -> float:
    return distance_3d(landmarks[THUMB_TIP], landmarks[INDEX_TIP])
