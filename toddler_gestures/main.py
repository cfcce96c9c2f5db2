"""
Main application for toddler gesture recognition.
"""
import argparse
import asyncio
import logging
import time
from typing import List, Optional

from .config import load_config
from .engine import GestureEngine
from .listener_mock import MockListener
from .synthetic import SyntheticHandSource
from .types import GestureCandidate

logger = logging.getLogger(__name__)


class GestureRecognitionApp:
    """Feeds hand frames from a camera or the synthetic source into the engine."""

    def __init__(self, config_path: Optional[str] = None, synthetic: bool = False):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        self.synthetic = synthetic
        self.engine = GestureEngine(self.config)
        self.listener = MockListener()
        self.engine.on_gesture(self.listener)
        self.last_gestures: List[GestureCandidate] = []

        self.cap = None
        self.tracker = None
        if synthetic:
            self.source = SyntheticHandSource()
        else:
            self._open_camera()

    def _open_camera(self) -> None:
        import cv2
        from .tracker import HandsTracker

        self.tracker = HandsTracker(self.config.mediapipe)
        self.cap = cv2.VideoCapture(self.config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not self.cap.isOpened():
            raise RuntimeError(f"Failed to open camera {self.config.camera.index}")

    async def run(self, max_frames: Optional[int] = None):
        """Run the main application loop."""
        logger.info("Starting %s (%s)", self.config.display.window_name,
                    "synthetic hands" if self.synthetic else f"camera {self.config.camera.index}")
        try:
            if self.synthetic:
                await self._run_synthetic(max_frames)
            else:
                await self._run_camera(max_frames)
        finally:
            self.close()

    async def _run_synthetic(self, max_frames: Optional[int]):
        frame_interval = 1.0 / self.config.camera.fps
        frame_count = 0
        while max_frames is None or frame_count < max_frames:
            t_now = time.time()
            surfaced = self.engine.process_hands(self.source.frames(t_now), t_now)
            if surfaced:
                self.last_gestures = surfaced
            frame_count += 1
            await asyncio.sleep(frame_interval)

    async def _run_camera(self, max_frames: Optional[int]):
        import cv2
        from .tracker import draw_landmarks

        logger.info("Press 'q' to quit")
        frame_count = 0
        while max_frames is None or frame_count < max_frames:
            ret, frame = self.cap.read()
            if not ret:
                logger.error("Failed to read frame from camera")
                break

            t_now = time.time()
            hands = self.tracker.process(frame)
            surfaced = self.engine.process_hands(hands, t_now)
            if surfaced:
                self.last_gestures = surfaced

            if self.config.display.show_landmarks:
                for hand in hands:
                    frame = draw_landmarks(frame, hand.landmarks)

            if self.config.display.show_gesture_text:
                status_text = f"Hands: {len(hands)}" if hands else "No hand detected"
                cv2.putText(frame, status_text, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
                gesture_text = " | ".join(_describe(g) for g in self.last_gestures)
                cv2.putText(frame, gesture_text, (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 255, 0), 2)
                cv2.putText(frame, "Press 'q' to quit", (10, frame.shape[0] - 20),
                            cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)

            cv2.imshow(self.config.display.window_name, frame)
            if cv2.waitKey(1) & 0xFF == ord('q'):
                break

            frame_count += 1
            # Let other tasks run between frames
            await asyncio.sleep(0)

    def close(self):
        """Stop tracking and release resources."""
        self.engine.reset_all()
        if self.cap is not None:
            import cv2
            self.cap.release()
            cv2.destroyAllWindows()
            self.cap = None
        if self.tracker is not None:
            self.tracker.close()
            self.tracker = None
        logger.info("Gesture counts: %s", dict(self.listener.counts))


def _describe(gesture: GestureCandidate) -> str:
    if gesture.direction:
        return f"{gesture.name} {gesture.direction}"
    if gesture.strength is not None:
        return f"{gesture.name} {gesture.strength:.2f}"
    return gesture.name


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Recognize toddler hand gestures from a camera or synthetic hands.")
    parser.add_argument("--config", help="Path to a YAML config file (defaults to the packaged one)")
    parser.add_argument("--synthetic", action="store_true", help="Use scripted synthetic hands instead of a camera")
    parser.add_argument("--frames", type=int, default=None, help="Stop after this many frames")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None):
    """Entry point for the application."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    app = GestureRecognitionApp(config_path=args.config, synthetic=args.synthetic)
    await app.run(max_frames=args.frames)


def cli():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")


if __name__ == "__main__":
    cli()
