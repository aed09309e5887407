"""
Slice Source

In-memory record for one decoded scan slice, as handed to the MPR core by the
DICOM loader (or by any other decoder). Missing metadata is replaced with the
defaults the core relies on.

Inputs:
    - Series identifier, acquisition index, dimensions, raw samples, spacing,
      subject name/id

Outputs:
    - SliceSource objects with normalized metadata

Requirements:
    - numpy for the sample buffer
"""

from typing import Optional
import numpy as np


DEFAULT_SPACING = 1.0
UNKNOWN_SUBJECT = "Unknown"


def normalize_spacing(value: Optional[float]) -> float:
    """
    Return a usable spacing value.

    Args:
        value: Spacing in mm, may be None, zero or negative

    Returns:
        value as float if it is > 0, otherwise DEFAULT_SPACING
    """
    try:
        if value is not None and float(value) > 0:
            return float(value)
    except (TypeError, ValueError):
        pass
    return DEFAULT_SPACING


class SliceSource:
    """
    One decoded slice of a series.

    The sample buffer is stored flat (row-major, length width * height) as int16.
    """

    def __init__(self, series_uid: Optional[str], instance_number: Optional[int],
                 width: int, height: int, pixels,
                 row_spacing: Optional[float] = None,
                 column_spacing: Optional[float] = None,
                 slice_thickness: Optional[float] = None,
                 patient_name: Optional[str] = None,
                 patient_id: Optional[str] = None,
                 file_path: Optional[str] = None):
        """
        Initialize the slice source.

        Args:
            series_uid: Series identifier (opaque string)
            instance_number: Acquisition index used for ordering (None -> 0)
            width: Pixel columns
            height: Pixel rows
            pixels: Raw samples, any array-like castable to int16
            row_spacing: Distance between rows in mm
            column_spacing: Distance between columns in mm
            slice_thickness: Through-plane spacing in mm
            patient_name: Subject name
            patient_id: Subject identifier
            file_path: Originating file, for diagnostics only
        """
        self.series_uid = str(series_uid) if series_uid is not None else ""
        self.instance_number = int(instance_number) if instance_number is not None else 0
        self.width = int(width)
        self.height = int(height)
        self.pixels = np.asarray(pixels).astype(np.int16, copy=False).ravel()
        self.row_spacing = normalize_spacing(row_spacing)
        self.column_spacing = normalize_spacing(column_spacing)
        self.slice_thickness = normalize_spacing(slice_thickness)
        self.patient_name = patient_name if patient_name else UNKNOWN_SUBJECT
        self.patient_id = patient_id if patient_id else UNKNOWN_SUBJECT
        self.file_path = file_path

    def is_readable(self) -> bool:
        """True if the sample buffer matches the declared dimensions."""
        return (
            self.width > 0
            and self.height > 0
            and self.pixels.size == self.width * self.height
        )

    def __repr__(self) -> str:
        return (f"SliceSource(series_uid={self.series_uid!r}, "
                f"instance_number={self.instance_number}, "
                f"size={self.width}x{self.height})")
