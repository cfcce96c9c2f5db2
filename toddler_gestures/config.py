"""
Configuration management for the toddler gesture engine.
"""
import logging
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int
    model_complexity: int
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class FingerConfig:
    """Finger extension thresholds. Index finger uses the looser set."""
    index_distance_ratio: float
    other_distance_ratio: float
    index_straightness: float
    other_straightness: float
    index_separation: float


@dataclass
class PinchConfig:
    """Pinch hysteresis: enter below enter_distance, leave above enter_distance + exit_margin."""
    enter_distance: float
    exit_margin: float


@dataclass
class PointConfig:
    """Pointing direction resolution thresholds."""
    depth_threshold: float
    depth_dominance: float
    diagonal_threshold: float


@dataclass
class WaveConfig:
    """Wave gesture configuration."""
    window_ms: int
    reset_ms: int
    min_samples: int
    min_delta_x: float
    required_reversals: int
    cooldown_ms: int


@dataclass
class SwipeConfig:
    """Swipe gesture configuration."""
    window_ms: int
    cooldown_ms: int
    min_samples: int
    min_distance: float
    min_velocity: float


@dataclass
class DebounceConfig:
    """Repeat interval for an unchanged static gesture."""
    repeat_ms: int


@dataclass
class GesturesConfig:
    """Gesture recognition configuration."""
    fingers: FingerConfig
    pinch: PinchConfig
    point: PointConfig
    wave: WaveConfig
    swipe: SwipeConfig
    debounce: DebounceConfig
    confidence: float


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool
    show_gesture_text: bool
    window_name: str


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    gestures: GesturesConfig
    display: DisplayConfig


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses the packaged config.default.yaml

    Returns:
        Configuration object with all settings
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    logger.debug("Loaded config from %s", config_path)
    cfg = _dict_to_config(data)
    _validate(cfg)
    return cfg


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data['camera']
    camera = CameraConfig(
        index=camera_data['index'],
        width=camera_data['width'],
        height=camera_data['height'],
        fps=camera_data['fps']
    )

    mp_data = data['mediapipe']
    mediapipe = MediaPipeConfig(
        max_num_hands=mp_data['max_num_hands'],
        model_complexity=mp_data['model_complexity'],
        min_detection_confidence=mp_data['min_detection_confidence'],
        min_tracking_confidence=mp_data['min_tracking_confidence']
    )

    gestures_data = data['gestures']
    fingers_data = gestures_data['fingers']
    fingers = FingerConfig(
        index_distance_ratio=fingers_data['index_distance_ratio'],
        other_distance_ratio=fingers_data['other_distance_ratio'],
        index_straightness=fingers_data['index_straightness'],
        other_straightness=fingers_data['other_straightness'],
        index_separation=fingers_data['index_separation']
    )
    pinch = PinchConfig(
        enter_distance=gestures_data['pinch']['enter_distance'],
        exit_margin=gestures_data['pinch']['exit_margin']
    )
    point = PointConfig(
        depth_threshold=gestures_data['point']['depth_threshold'],
        depth_dominance=gestures_data['point']['depth_dominance'],
        diagonal_threshold=gestures_data['point']['diagonal_threshold']
    )
    wave_data = gestures_data['wave']
    wave = WaveConfig(
        window_ms=wave_data['window_ms'],
        reset_ms=wave_data['reset_ms'],
        min_samples=wave_data['min_samples'],
        min_delta_x=wave_data['min_delta_x'],
        required_reversals=wave_data['required_reversals'],
        cooldown_ms=wave_data['cooldown_ms']
    )
    swipe_data = gestures_data['swipe']
    swipe = SwipeConfig(
        window_ms=swipe_data['window_ms'],
        cooldown_ms=swipe_data['cooldown_ms'],
        min_samples=swipe_data['min_samples'],
        min_distance=swipe_data['min_distance'],
        min_velocity=swipe_data['min_velocity']
    )
    debounce = DebounceConfig(repeat_ms=gestures_data['debounce']['repeat_ms'])
    gestures = GesturesConfig(
        fingers=fingers,
        pinch=pinch,
        point=point,
        wave=wave,
        swipe=swipe,
        debounce=debounce,
        confidence=gestures_data['confidence']
    )

    display_data = data['display']
    display = DisplayConfig(
        show_landmarks=display_data['show_landmarks'],
        show_gesture_text=display_data['show_gesture_text'],
        window_name=display_data['window_name']
    )

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        gestures=gestures,
        display=display
    )


def _validate(cfg: Cfg) -> None:
    """Reject settings the detectors cannot work with."""
    g = cfg.gestures
    windows = {
        "gestures.wave.window_ms": g.wave.window_ms,
        "gestures.wave.reset_ms": g.wave.reset_ms,
        "gestures.swipe.window_ms": g.swipe.window_ms,
        "gestures.pinch.enter_distance": g.pinch.enter_distance,
    }
    for key, value in windows.items():
        if value <= 0:
            raise ValueError(f"{key} must be positive, got {value}")

    if g.pinch.exit_margin < 0:
        raise ValueError(f"gestures.pinch.exit_margin must not be negative, got {g.pinch.exit_margin}")

    # Skip-one delta needs the sample two positions back
    if g.wave.min_samples < 3:
        raise ValueError(f"gestures.wave.min_samples must be at least 3, got {g.wave.min_samples}")
    if g.swipe.min_samples < 2:
        raise ValueError(f"gestures.swipe.min_samples must be at least 2, got {g.swipe.min_samples}")

    if not 0.0 <= g.confidence <= 1.0:
        raise ValueError(f"gestures.confidence must be in [0, 1], got {g.confidence}")
