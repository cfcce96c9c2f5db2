"""
Test cases for vector helpers and landmark validation.
"""
import unittest
import sys
from pathlib import Path
from types import SimpleNamespace

import numpy as np

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from toddler_gestures.geometry import distance_3d, dot, normalize, vector_between
from toddler_gestures.landmarks import finger_joints, landmarks_to_array, thumb_index_distance
from toddler_gestures.types import InvalidLandmarksError


class TestGeometry(unittest.TestCase):
    """Test pure vector helpers."""

    def test_vector_between(self):
        np.testing.assert_allclose(vector_between((1, 2, 3), (2, 4, 6)), [1, 2, 3])

    def test_normalize(self):
        np.testing.assert_allclose(normalize((3, 0, 4)), [0.6, 0.0, 0.8])

    def test_normalize_zero_vector(self):
        """Zero length gives the zero vector instead of a division error."""
        np.testing.assert_array_equal(normalize((0, 0, 0)), [0.0, 0.0, 0.0])

    def test_dot(self):
        self.assertEqual(dot(np.array([1, 0, 0]), np.array([0, 1, 0])), 0.0)
        self.assertEqual(dot(np.array([1, 2, 3]), np.array([4, 5, 6])), 32.0)

    def test_distance_3d(self):
        self.assertAlmostEqual(distance_3d((0, 0, 0), (1, 2, 2)), 3.0)
        self.assertIsInstance(distance_3d((0, 0, 0), (1, 0, 0)), float)


class TestLandmarkValidation(unittest.TestCase):
    """Test conversion of landmark sets into arrays."""

    def test_three_dimensional_tuples(self):
        arr = landmarks_to_array([(0.1 * i, 0.2, -0.01) for i in range(21)])
        self.assertEqual(arr.shape, (21, 3))

    def test_two_dimensional_tuples_get_zero_depth(self):
        arr = landmarks_to_array([(0.5, 0.5)] * 21)
        np.testing.assert_array_equal(arr[:, 2], np.zeros(21))

    def test_attribute_objects(self):
        points = [SimpleNamespace(x=0.5, y=0.4, z=-0.1) for _ in range(21)]
        arr = landmarks_to_array(points)
        np.testing.assert_allclose(arr[0], [0.5, 0.4, -0.1])

    def test_short_set_rejected(self):
        with self.assertRaises(InvalidLandmarksError):
            landmarks_to_array([(0.5, 0.5, 0.0)] * 20)

    def test_long_set_rejected(self):
        with self.assertRaises(InvalidLandmarksError):
            landmarks_to_array([(0.5, 0.5, 0.0)] * 22)

    def test_non_finite_rejected(self):
        points = [(0.5, 0.5, 0.0)] * 21
        points[3] = (0.5, float("inf"), 0.0)
        with self.assertRaises(InvalidLandmarksError):
            landmarks_to_array(points)

    def test_non_numeric_rejected(self):
        with self.assertRaises(InvalidLandmarksError):
            landmarks_to_array(["abc"] * 21)

    def test_missing_attribute_rejected(self):
        with self.assertRaises(InvalidLandmarksError):
            landmarks_to_array([SimpleNamespace(x=0.5) for _ in range(21)])

    def test_none_rejected(self):
        with self.assertRaises(InvalidLandmarksError):
            landmarks_to_array(None)

    def test_error_is_value_error(self):
        self.assertTrue(issubclass(InvalidLandmarksError, ValueError))


class TestLandmarkIndices(unittest.TestCase):

    def test_finger_joints(self):
        self.assertEqual(finger_joints(1), (5, 6, 7, 8))
        self.assertEqual(finger_joints(4), (17, 18, 19, 20))

    def test_thumb_index_distance(self):
        points = np.zeros((21, 3))
        points[4] = [0.3, 0.4, 0.0]
        self.assertAlmostEqual(thumb_index_distance(points), 0.5)


if __name__ == '__main__':
    unittest.main()
