"""
Volume Builder

Packs the slices of one series into a single contiguous 3D sample buffer.

Slices are filtered to the dimensions of the first readable slice, stably
sorted by acquisition index (InstanceNumber), and concatenated. Voxel spacing
and subject metadata come from the first retained slice in discovery order.

Inputs:
    - List of SliceSource objects belonging to one series

Outputs:
    - Volume object (read-only int16 buffer plus spacing and subject metadata)

Requirements:
    - numpy for the volume buffer
    - core.slice_source, core.mpr_errors
    - utils.debug_log for optional tracing
"""

from typing import List, Optional
import numpy as np

from core.slice_source import SliceSource, normalize_spacing, UNKNOWN_SUBJECT
from core.mpr_errors import EmptyVolumeError
from utils.debug_log import debug_log


class Volume:
    """
    Immutable 3D sample volume.

    The buffer is a C-ordered int16 array of shape (depth, height, width), so
    the sample at (x, y, z) lives at flat offset z*W*H + y*W + x. It is marked
    read-only; a reload produces a new Volume instead of mutating this one.
    """

    def __init__(self, samples: np.ndarray,
                 column_spacing: float = 1.0,
                 row_spacing: float = 1.0,
                 slice_thickness: float = 1.0,
                 patient_name: str = UNKNOWN_SUBJECT,
                 patient_id: str = UNKNOWN_SUBJECT,
                 warnings: Optional[List[str]] = None):
        """
        Initialize the volume.

        Args:
            samples: Array of shape (depth, height, width)
            column_spacing: sx, distance between columns in mm
            row_spacing: sy, distance between rows in mm
            slice_thickness: sz, distance between slices in mm
            patient_name: Subject name
            patient_id: Subject identifier
            warnings: Consistency warnings collected while building
        """
        samples = np.ascontiguousarray(samples, dtype=np.int16)
        if samples.ndim != 3:
            raise ValueError(f"Expected a 3D sample array, got shape {samples.shape}")
        samples.flags.writeable = False
        self.samples = samples
        self.depth, self.height, self.width = samples.shape
        self.column_spacing = normalize_spacing(column_spacing)
        self.row_spacing = normalize_spacing(row_spacing)
        self.slice_thickness = normalize_spacing(slice_thickness)
        self.patient_name = patient_name
        self.patient_id = patient_id
        self.warnings = list(warnings) if warnings else []

    @property
    def buffer(self) -> np.ndarray:
        """Flat view of the samples (length W*H*D)."""
        return self.samples.reshape(-1)

    @property
    def size(self) -> int:
        return self.samples.size

    def __repr__(self) -> str:
        return (f"Volume({self.width}x{self.height}x{self.depth}, "
                f"spacing=({self.column_spacing}, {self.row_spacing}, {self.slice_thickness}))")


def filter_matching_dimensions(sources: List[SliceSource]) -> List[SliceSource]:
    """
    Keep only sources matching the dimensions of the first readable source.

    Unreadable sources (sample count not equal to width*height) are dropped
    before the canonical dimensions are chosen.

    Args:
        sources: Slice sources in discovery order

    Returns:
        Retained sources in discovery order
    """
    retained: List[SliceSource] = []
    canonical_size = None
    dropped = 0
    for source in sources:
        if source is None or not source.is_readable():
            dropped += 1
            continue
        if canonical_size is None:
            canonical_size = (source.width, source.height)
        if (source.width, source.height) != canonical_size:
            dropped += 1
            continue
        retained.append(source)
    if dropped:
        print(f"[VOLUME] Dropped {dropped} slice(s) with unreadable data or mismatched dimensions")
    return retained


def sort_by_instance_number(sources: List[SliceSource]) -> List[SliceSource]:
    """Stable sort by acquisition index; equal indices keep discovery order."""
    return sorted(sources, key=lambda source: source.instance_number)


def _collect_spacing_warnings(sources: List[SliceSource]) -> List[str]:
    """Report slices whose spacing differs from the first retained slice."""
    warnings: List[str] = []
    if not sources:
        return warnings
    first = sources[0]
    reference = (first.row_spacing, first.column_spacing, first.slice_thickness)
    for source in sources[1:]:
        spacing = (source.row_spacing, source.column_spacing, source.slice_thickness)
        if not np.allclose(spacing, reference):
            warnings.append(
                f"Slice {source.instance_number} spacing {spacing} differs from "
                f"first slice spacing {reference}"
            )
    return warnings


def build_volume(sources: List[SliceSource]) -> Volume:
    """
    Build a Volume from the slices of one series.

    Args:
        sources: Slice sources of the selected series, in discovery order

    Returns:
        New Volume

    Raises:
        EmptyVolumeError: if no source survives dimension filtering
    """
    retained = filter_matching_dimensions(sources)
    if not retained:
        raise EmptyVolumeError("No slices left after dimension filtering")

    ordered = sort_by_instance_number(retained)
    # Spacing and subject metadata come from the first slice in discovery order
    first = retained[0]
    width, height = first.width, first.height

    samples = np.empty((len(ordered), height, width), dtype=np.int16)
    for z, source in enumerate(ordered):
        samples[z] = source.pixels.reshape(height, width)

    warnings = _collect_spacing_warnings(retained)
    for warning in warnings:
        print(f"[VOLUME] Warning: {warning}")

    volume = Volume(
        samples,
        column_spacing=first.column_spacing,
        row_spacing=first.row_spacing,
        slice_thickness=first.slice_thickness,
        patient_name=first.patient_name,
        patient_id=first.patient_id,
        warnings=warnings,
    )
    debug_log(
        "volume_builder.py:build_volume",
        "Volume built",
        {
            "input_slices": len(sources),
            "retained_slices": len(ordered),
            "shape": [volume.width, volume.height, volume.depth],
            "spacing": [volume.column_spacing, volume.row_spacing, volume.slice_thickness],
        },
    )
    print(f"[VOLUME] Built {width}x{height}x{len(ordered)} volume")
    return volume
