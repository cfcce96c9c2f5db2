"""
Test cases for the synthetic hand source.
"""
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from toddler_gestures.config import load_config
from toddler_gestures.engine import GestureEngine
from toddler_gestures.listener_mock import MockListener
from toddler_gestures.synthetic import SyntheticHand, SyntheticHandSource


class TestSyntheticHand(unittest.TestCase):
    """Test pose construction."""

    def test_poses_have_21_points(self):
        hand = SyntheticHand()
        for name in ("open", "grab", "point", "pinch"):
            landmarks = hand.pose(name)
            self.assertEqual(len(landmarks), 21)
            self.assertTrue(all(len(p) == 3 for p in landmarks))

    def test_unknown_pose(self):
        with self.assertRaises(ValueError):
            SyntheticHand().pose("thumbs_up")

    def test_left_hand_is_mirrored(self):
        right = SyntheticHand("Right").open()
        left = SyntheticHand("Left").open()
        # Wrist shared, thumb on opposite sides
        self.assertEqual(right[0], left[0])
        self.assertLess(right[4][0], right[0][0])
        self.assertGreater(left[4][0], left[0][0])

    def test_offset_translates_hand(self):
        base = SyntheticHand().open()
        moved = SyntheticHand().open((0.1, -0.05))
        self.assertAlmostEqual(moved[0][0] - base[0][0], 0.1)
        self.assertAlmostEqual(moved[0][1] - base[0][1], -0.05)


class TestSyntheticHandSource(unittest.TestCase):
    """Test the scripted gesture cycle."""

    def test_script_order(self):
        source = SyntheticHandSource(gesture_duration=2.0, jitter=0.0)
        self.assertEqual(source.current_gesture(100.0), "point")
        self.assertEqual(source.current_gesture(102.5), "open")
        self.assertEqual(source.current_gesture(104.0), "grab")
        self.assertEqual(source.current_gesture(106.1), "wave")
        self.assertEqual(source.current_gesture(108.0), "pinch")
        self.assertEqual(source.current_gesture(110.0), "point")

    def test_frames(self):
        source = SyntheticHandSource(handedness="Left", seed=1)
        hands = source.frames(0.0)
        self.assertEqual(len(hands), 1)
        self.assertEqual(hands[0].handedness, "Left")
        self.assertEqual(len(hands[0].landmarks), 21)

    def test_script_drives_engine(self):
        """Ten seconds of scripted hands produce every scripted gesture."""
        engine = GestureEngine(load_config())
        listener = MockListener()
        engine.on_gesture(listener)
        source = SyntheticHandSource(jitter=0.0, seed=7)

        for i in range(100):
            t_now = round(i * 0.1, 3)
            engine.process_hands(source.frames(t_now), t_now)

        for name in ("point", "open", "grab", "wave", "pinch"):
            self.assertIn(name, listener.counts)


if __name__ == '__main__':
    unittest.main()
