"""
MPR Engine

Holds the currently loaded Volume and renders the axial, coronal and sagittal
views from it on request.

The engine has two states: Empty (no volume; renders return None) and Loaded
(exactly one volume). A successful build replaces the volume by reference; a
failed build leaves the current state untouched. Render calls are pure
functions of the current volume and the parameters passed in.

Inputs:
    - Slice sources from the DICOM loader (or any other decoder)
    - Axis, per-axis indices, window level/width, maximum display footprint

Outputs:
    - DisplayImage objects for the display layer
    - Volume extents and summary for the controls and info panel

Requirements:
    - numpy
    - core.series_selector, core.volume_builder, core.slice_extractor,
      core.window_transform, core.display_fitter, core.cursor_mapper
    - utils.debug_log for optional tracing
"""

from typing import Dict, List, Optional, Tuple
import numpy as np

from core.slice_source import SliceSource, UNKNOWN_SUBJECT
from core.series_selector import select_largest_series
from core.volume_builder import Volume, build_volume
from core.slice_extractor import AXES, axis_extent, extract_plane
from core.window_transform import window_plane
from core.display_fitter import DEFAULT_MAX_DISPLAY_SIZE, Footprint, fit_to_display
from core.cursor_mapper import map_crosshair
from core.view_parameters import ViewParameters
from core.mpr_errors import NoSeriesFoundError, EmptyVolumeError
from utils.debug_log import debug_log


class DisplayImage:
    """
    A rendered view ready for the display layer.

    Attributes:
        axis: Axis the view was rendered along
        width, height: Final pixel size
        pixels: uint8 array of shape (height, width, 3), identical channels
        crosshair: (x, y) normalized cross-hair position, each None when the
            corresponding plane dimension is 1
        plane_width, plane_height: Native size of the extracted plane
    """

    def __init__(self, axis: str, pixels: np.ndarray,
                 crosshair: Tuple[Optional[float], Optional[float]],
                 plane_width: int, plane_height: int):
        self.axis = axis
        self.pixels = np.ascontiguousarray(pixels, dtype=np.uint8)
        self.height, self.width = self.pixels.shape[:2]
        self.crosshair = crosshair
        self.plane_width = plane_width
        self.plane_height = plane_height

    def has_crosshair(self) -> bool:
        return self.crosshair[0] is not None and self.crosshair[1] is not None


class MPREngine:
    """
    Multi-planar reconstruction engine.

    Responsibilities:
    - Select the largest series from decoded slice sources
    - Build and hold the current Volume
    - Render one view per axis for caller-supplied view parameters
    - Report extents and a summary of the loaded volume
    """

    def __init__(self):
        """Initialize an engine in the Empty state."""
        self._volume: Optional[Volume] = None

    @property
    def volume(self) -> Optional[Volume]:
        return self._volume

    def is_loaded(self) -> bool:
        return self._volume is not None

    def select_series(self, sources: List[SliceSource]) -> List[SliceSource]:
        """
        Select the series with the most slices.

        Raises:
            NoSeriesFoundError: if there is nothing to group
        """
        return select_largest_series(sources)

    def build_volume(self, series_sources: List[SliceSource]) -> Volume:
        """
        Build a new volume and make it current.

        The held volume is replaced only after the build succeeded.

        Raises:
            EmptyVolumeError: if every slice was rejected
        """
        volume = build_volume(series_sources)
        self._volume = volume
        return volume

    def load_sources(self, sources: List[SliceSource]) -> bool:
        """
        Select the largest series and build its volume.

        Returns:
            True if a new volume was loaded, False if the state is unchanged
        """
        try:
            self.build_volume(self.select_series(sources))
            return True
        except NoSeriesFoundError as e:
            print(f"[MPR] No series loaded: {e}")
        except EmptyVolumeError as e:
            print(f"[MPR] Volume not built: {e}")
        return False

    def volume_extent(self, axis: str) -> int:
        """Number of slices along an axis, 0 when Empty."""
        return axis_extent(self._volume, axis)

    def volume_extents(self) -> Dict[str, int]:
        return {axis: self.volume_extent(axis) for axis in AXES}

    def volume_summary(self) -> Dict[str, object]:
        """
        Subject and geometry summary of the loaded volume.

        Returns:
            Dictionary with subject_name, subject_id, width, height, depth and
            slice_thickness; defaults when Empty
        """
        volume = self._volume
        if volume is None:
            return {
                "subject_name": UNKNOWN_SUBJECT,
                "subject_id": UNKNOWN_SUBJECT,
                "width": 0,
                "height": 0,
                "depth": 0,
                "slice_thickness": 0.0,
            }
        return {
            "subject_name": volume.patient_name,
            "subject_id": volume.patient_id,
            "width": volume.width,
            "height": volume.height,
            "depth": volume.depth,
            "slice_thickness": volume.slice_thickness,
        }

    def summary_text(self) -> str:
        """Multi-line info text for the side panel, or "No Data" when Empty."""
        if self._volume is None:
            return "No Data"
        summary = self.volume_summary()
        return (
            f"Name: {summary['subject_name']}\n"
            f"ID: {summary['subject_id']}\n"
            f"Size: {summary['width']} x {summary['height']}\n"
            f"Slices: {summary['depth']}\n"
            f"Thickness: {summary['slice_thickness']:g} mm"
        )

    def default_view_parameters(self) -> ViewParameters:
        """Centered indices and the default window for the loaded volume."""
        params = ViewParameters()
        params.reset(self.volume_extents())
        return params

    def render_view(self, axis: str, indices: Dict[str, int],
                    window_level: float, window_width: float,
                    max_footprint: Footprint = DEFAULT_MAX_DISPLAY_SIZE) -> Optional[DisplayImage]:
        """
        Render one view.

        Args:
            axis: Axis to render ("axial", "coronal" or "sagittal")
            indices: Current index for every axis
            window_level: Window center
            window_width: Window width (clamped to >= 1)
            max_footprint: Maximum display size

        Returns:
            DisplayImage, or None when no volume is loaded
        """
        volume = self._volume
        if volume is None:
            return None

        plane = extract_plane(volume, axis, indices[axis])
        rgb = window_plane(plane, window_level, window_width)
        pixels = fit_to_display(rgb, plane.pixel_aspect, max_footprint)
        crosshair = map_crosshair(axis, indices, plane.width, plane.height)
        debug_log(
            "mpr_engine.py:render_view",
            "View rendered",
            {
                "axis": axis,
                "index": int(indices[axis]),
                "plane": [plane.width, plane.height],
                "display": [int(pixels.shape[1]), int(pixels.shape[0])],
                "window": [window_level, window_width],
            },
        )
        return DisplayImage(axis, pixels, crosshair, plane.width, plane.height)

    def render_all_views(self, view_parameters: ViewParameters,
                         max_footprint: Footprint = DEFAULT_MAX_DISPLAY_SIZE) -> Dict[str, DisplayImage]:
        """
        Render the three views for one set of view parameters.

        Returns:
            Dictionary mapping axis to DisplayImage; empty when no volume is loaded
        """
        if self._volume is None:
            return {}
        return {
            axis: self.render_view(axis, view_parameters.indices,
                                   view_parameters.window_level,
                                   view_parameters.window_width,
                                   max_footprint)
            for axis in AXES
        }
