"""
Unit tests for view state (core.view_parameters).
"""

import unittest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from core.view_parameters import ViewParameters


class TestViewParameters(unittest.TestCase):
    """Tests for ViewParameters."""

    def setUp(self):
        self.params = ViewParameters()
        self.extents = {"axial": 10, "coronal": 6, "sagittal": 8}

    def test_defaults(self):
        self.assertEqual(self.params.indices, {"axial": 0, "coronal": 0, "sagittal": 0})
        self.assertEqual((self.params.window_level, self.params.window_width), (40, 400))

    def test_set_index_clamps(self):
        self.assertTrue(self.params.set_index("axial", 42, 10))
        self.assertEqual(self.params.get_index("axial"), 9)
        self.assertTrue(self.params.set_index("axial", -3, 10))
        self.assertEqual(self.params.get_index("axial"), 0)

    def test_set_index_reports_no_change(self):
        self.assertFalse(self.params.set_index("coronal", 0, 6))

    def test_step(self):
        self.params.set_index("sagittal", 7, 8)
        self.assertFalse(self.params.step("sagittal", 1, 8))
        self.assertTrue(self.params.step("sagittal", -1, 8))
        self.assertEqual(self.params.get_index("sagittal"), 6)

    def test_reset_centers_and_restores_window(self):
        self.params.set_window(500, 1500)
        self.params.reset(self.extents)
        self.assertEqual(self.params.indices, {"axial": 4, "coronal": 2, "sagittal": 3})
        self.assertEqual((self.params.window_level, self.params.window_width), (40, 400))

    def test_reset_with_empty_extents(self):
        self.params.reset({})
        self.assertEqual(self.params.indices, {"axial": 0, "coronal": 0, "sagittal": 0})

    def test_window_width_at_least_one(self):
        self.params.set_window(10, 0)
        self.assertEqual(self.params.window_width, 1)


if __name__ == '__main__':
    unittest.main()
