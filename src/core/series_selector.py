"""
Series Selector

Groups decoded slice sources by series identifier and picks the series with
the most slices, which is the one the MPR engine reconstructs.

Inputs:
    - List of SliceSource objects in discovery order

Outputs:
    - Series groups (ordered by first appearance)
    - Slice list of the largest series

Requirements:
    - core.slice_source for the SliceSource type
    - core.mpr_errors for NoSeriesFoundError
"""

from typing import Dict, List
from core.slice_source import SliceSource
from core.mpr_errors import NoSeriesFoundError


def group_sources_by_series(sources: List[SliceSource]) -> Dict[str, List[SliceSource]]:
    """
    Partition sources by series identifier.

    Sources without a series identifier are skipped. Dict insertion order is
    the order in which each series was first encountered, and each list keeps
    discovery order.

    Args:
        sources: Slice sources in discovery order

    Returns:
        Dictionary mapping series identifier to its slice sources
    """
    series_groups: Dict[str, List[SliceSource]] = {}
    for source in sources:
        if source is None or not source.series_uid:
            continue
        if source.series_uid not in series_groups:
            series_groups[source.series_uid] = []
        series_groups[source.series_uid].append(source)
    return series_groups


def select_largest_series(sources: List[SliceSource]) -> List[SliceSource]:
    """
    Select the series with the most slices.

    Ties go to the series encountered first.

    Args:
        sources: Slice sources in discovery order

    Returns:
        Slice sources of the winning series, in discovery order

    Raises:
        NoSeriesFoundError: if there is nothing to group
    """
    series_groups = group_sources_by_series(sources)
    if not series_groups:
        raise NoSeriesFoundError("No series found in the given slice sources")

    best_uid = None
    max_count = 0
    for series_uid, series_sources in series_groups.items():
        # Strict comparison keeps the first series on ties
        if len(series_sources) > max_count:
            max_count = len(series_sources)
            best_uid = series_uid

    print(f"[SERIES] {len(series_groups)} series found, selected {best_uid} ({max_count} slices)")
    return series_groups[best_uid]
