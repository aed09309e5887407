"""
Unit tests for series selection (core.series_selector).

Tests grouping by series identifier, largest-series selection, tie-breaking
by first appearance, and the no-series outcome.
"""

import unittest
import sys
import os

import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from core.slice_source import SliceSource
from core.series_selector import group_sources_by_series, select_largest_series
from core.mpr_errors import NoSeriesFoundError


def make_source(series_uid, instance_number=1, width=2, height=2):
    return SliceSource(series_uid, instance_number, width, height,
                       np.zeros(width * height, dtype=np.int16))


class TestGroupSourcesBySeries(unittest.TestCase):
    """Tests for group_sources_by_series."""

    def test_groups_keep_first_seen_order(self):
        sources = [make_source("B"), make_source("A"), make_source("B")]
        groups = group_sources_by_series(sources)
        self.assertEqual(list(groups.keys()), ["B", "A"])
        self.assertEqual(len(groups["B"]), 2)
        self.assertEqual(len(groups["A"]), 1)

    def test_sources_without_series_are_skipped(self):
        sources = [make_source(None), make_source(""), make_source("A")]
        groups = group_sources_by_series(sources)
        self.assertEqual(list(groups.keys()), ["A"])


class TestSelectLargestSeries(unittest.TestCase):
    """Tests for select_largest_series."""

    def test_largest_series_wins(self):
        sources = [make_source("A", 1), make_source("B", 1), make_source("B", 2),
                   make_source("C", 1), make_source("B", 3)]
        selected = select_largest_series(sources)
        self.assertEqual(len(selected), 3)
        self.assertTrue(all(s.series_uid == "B" for s in selected))

    def test_selected_series_keeps_discovery_order(self):
        sources = [make_source("A", 3), make_source("A", 1), make_source("A", 2)]
        selected = select_largest_series(sources)
        self.assertEqual([s.instance_number for s in selected], [3, 1, 2])

    def test_tie_goes_to_first_encountered_series(self):
        sources = [make_source("X"), make_source("Y"), make_source("Y"), make_source("X")]
        selected = select_largest_series(sources)
        self.assertEqual(selected[0].series_uid, "X")

    def test_empty_input_raises_no_series(self):
        with self.assertRaises(NoSeriesFoundError):
            select_largest_series([])

    def test_only_unidentified_sources_raises_no_series(self):
        with self.assertRaises(NoSeriesFoundError):
            select_largest_series([make_source(None), make_source("")])


if __name__ == '__main__':
    unittest.main()
