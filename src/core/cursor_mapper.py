"""
Cursor Mapper

Converts the slice indices of the two axes not being rendered into normalized
cross-hair coordinates for the overlay of a view. The result positions the
overlay only; it plays no part in sampling.

Requirements:
    - core.slice_extractor for axis names
"""

from typing import Dict, Optional, Tuple

from core.slice_extractor import AXIS_AXIAL, AXIS_CORONAL, AXIS_SAGITTAL


def normalize_index(index: int, dimension: int) -> Optional[float]:
    """
    Map an index to [0, 1] along a dimension.

    Returns None when the dimension has a single sample, where there is no
    meaningful position, or when the index lies outside [0, dimension - 1].
    """
    if dimension <= 1 or not 0 <= index < dimension:
        return None
    return index / (dimension - 1)


def crosshair_indices(axis: str, indices: Dict[str, int]) -> Tuple[int, int]:
    """
    Pick the (horizontal, vertical) indices shown as cross-hair on a view.

    Axial shows sagittal (column) and coronal (row); coronal shows sagittal
    and axial (depth); sagittal shows coronal and axial.
    """
    if axis == AXIS_AXIAL:
        return indices[AXIS_SAGITTAL], indices[AXIS_CORONAL]
    if axis == AXIS_CORONAL:
        return indices[AXIS_SAGITTAL], indices[AXIS_AXIAL]
    if axis == AXIS_SAGITTAL:
        return indices[AXIS_CORONAL], indices[AXIS_AXIAL]
    raise ValueError(f"Unknown axis: {axis}")


def map_crosshair(axis: str, indices: Dict[str, int],
                  plane_width: int, plane_height: int) -> Tuple[Optional[float], Optional[float]]:
    """
    Normalized cross-hair position for a view.

    Args:
        axis: Axis being rendered
        indices: Current index per axis
        plane_width: Native width of the extracted plane
        plane_height: Native height of the extracted plane

    Returns:
        (x, y) each in [0, 1] or None
    """
    horizontal, vertical = crosshair_indices(axis, indices)
    return normalize_index(horizontal, plane_width), normalize_index(vertical, plane_height)
