"""
Live hand landmark source using MediaPipe Hands.

Needs the ``camera`` extra (opencv-python, mediapipe).
"""
import cv2
import mediapipe as mp
import numpy as np
from typing import List

from .config import MediaPipeConfig
from .types import TrackedHand


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, cfg: MediaPipeConfig):
        """
        Initialize the hands tracker.

        Args:
            cfg: MediaPipe settings (hand count, model complexity, confidences)
        """
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=cfg.max_num_hands,
            model_complexity=cfg.model_complexity,
            min_detection_confidence=cfg.min_detection_confidence,
            min_tracking_confidence=cfg.min_tracking_confidence
        )

    def process(self, frame_bgr: np.ndarray) -> List[TrackedHand]:
        """
        Process a frame and return every detected hand.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            One TrackedHand per detection with 21 (x, y, z) landmarks, empty if no hands
        """
        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if not results.multi_hand_landmarks:
            return []

        hands = []
        for hand_landmarks, handedness in zip(results.multi_hand_landmarks, results.multi_handedness):
            classification = handedness.classification[0]
            landmarks = [(lm.x, lm.y, lm.z) for lm in hand_landmarks.landmark]
            hands.append(TrackedHand(
                landmarks=landmarks,
                handedness=classification.label,
                score=classification.score
            ))
        return hands

    def close(self) -> None:
        self.hands.close()


def draw_landmarks(frame: np.ndarray, landmarks: List[tuple]) -> np.ndarray:
    """
    Draw hand landmarks on the frame.

    Args:
        frame: Input frame
        landmarks: List of (x, y, z) coordinates in [0..1] range

    Returns:
        Frame with landmarks drawn
    """
    height, width = frame.shape[:2]

    for i, point in enumerate(landmarks):
        px = int(point[0] * width)
        py = int(point[1] * height)
        cv2.circle(frame, (px, py), 3, (0, 255, 0), -1)
        cv2.putText(frame, str(i), (px + 5, py - 5), cv2.FONT_HERSHEY_SIMPLEX, 0.3, (255, 255, 255), 1)

    return frame
