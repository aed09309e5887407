"""
View Parameters

Caller-owned view state passed to every render call: one slice index per
axis plus window level and width. The engine itself holds no cursor state.

Inputs:
    - Axis extents (from MPREngine.volume_extent)
    - Slider, wheel and reset actions

Outputs:
    - Clamped indices and window values

Requirements:
    - core.slice_extractor for axis names
    - core.window_transform for defaults
"""

from typing import Dict

from core.slice_extractor import AXES
from core.window_transform import DEFAULT_WINDOW_LEVEL, DEFAULT_WINDOW_WIDTH


class ViewParameters:
    """
    Slice indices and window settings for the three views.

    Indices are keyed by axis name: "axial" holds the depth index (z),
    "coronal" the row index (y) and "sagittal" the column index (x).
    """

    def __init__(self, indices: Dict[str, int] = None,
                 window_level: float = DEFAULT_WINDOW_LEVEL,
                 window_width: float = DEFAULT_WINDOW_WIDTH):
        self.indices: Dict[str, int] = {axis: 0 for axis in AXES}
        if indices:
            for axis, index in indices.items():
                if axis in self.indices:
                    self.indices[axis] = int(index)
        self.window_level = window_level
        self.window_width = max(window_width, 1)

    def get_index(self, axis: str) -> int:
        return self.indices[axis]

    def set_index(self, axis: str, index: int, extent: int) -> bool:
        """
        Set the index for an axis, clamped to [0, extent - 1].

        Returns:
            True if the stored index changed
        """
        clamped = min(max(int(index), 0), max(extent - 1, 0))
        if clamped == self.indices[axis]:
            return False
        self.indices[axis] = clamped
        return True

    def step(self, axis: str, direction: int, extent: int) -> bool:
        """
        Move one slice along an axis (mouse wheel).

        Args:
            axis: Axis to move along
            direction: Positive to move forward, negative to move back
            extent: Number of slices along the axis

        Returns:
            True if the index changed
        """
        delta = 1 if direction > 0 else -1
        return self.set_index(axis, self.indices[axis] + delta, extent)

    def set_window(self, window_level: float, window_width: float) -> None:
        self.window_level = window_level
        self.window_width = max(window_width, 1)

    def reset(self, extents: Dict[str, int]) -> None:
        """Center every index and restore the default window."""
        for axis in AXES:
            # Same centre on load and on reset, the lower middle for even extents
            self.indices[axis] = max(extents.get(axis, 0) - 1, 0) // 2
        self.window_level = DEFAULT_WINDOW_LEVEL
        self.window_width = DEFAULT_WINDOW_WIDTH

    def __repr__(self) -> str:
        return (f"ViewParameters(indices={self.indices}, "
                f"window_level={self.window_level}, window_width={self.window_width})")
