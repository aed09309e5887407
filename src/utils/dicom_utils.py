"""
DICOM Utility Functions

This module provides helper functions for reading the DICOM tags the MPR
pipeline needs:
- Series identity and instance ordering
- Pixel spacing and slice thickness
- Patient name and ID

Inputs:
    - pydicom.Dataset objects

Outputs:
    - Tag values converted to Python types (or None when absent)

Requirements:
    - pydicom library
"""

from typing import Optional, Tuple
from pydicom.dataset import Dataset
from pydicom.multival import MultiValue


def get_series_uid(dataset: Dataset) -> Optional[str]:
    """
    Get SeriesInstanceUID (0020,000E).

    Returns:
        UID string, or None if missing or empty
    """
    uid = getattr(dataset, 'SeriesInstanceUID', None)
    if uid is None:
        return None
    uid = str(uid).strip()
    return uid or None


def get_instance_number(dataset: Dataset) -> Optional[int]:
    """
    Get InstanceNumber (0020,0013).

    Returns:
        Instance number, or None if missing or not an integer
    """
    try:
        value = getattr(dataset, 'InstanceNumber', None)
        if value is not None and str(value).strip() != "":
            return int(value)
    except (TypeError, ValueError):
        pass
    return None


def get_pixel_spacing(dataset: Dataset) -> Optional[Tuple[float, float]]:
    """
    Get pixel spacing from DICOM dataset.
    Checks multiple sources in priority order:
    1. Pixel Spacing (0028,0030) - primary
    2. Imager Pixel Spacing (0018,1164) - fallback

    Args:
        dataset: pydicom Dataset

    Returns:
        Tuple of (row_spacing, column_spacing) in mm, or None if not available
    """
    for keyword in ('PixelSpacing', 'ImagerPixelSpacing'):
        try:
            spacing = getattr(dataset, keyword, None)
            if spacing and len(spacing) >= 2:
                row_spacing = float(spacing[0])
                col_spacing = float(spacing[1])
                if row_spacing > 0 and col_spacing > 0:
                    return (row_spacing, col_spacing)
        except (TypeError, ValueError):
            continue
    return None


def get_slice_thickness(dataset: Dataset) -> Optional[float]:
    """
    Get slice thickness from DICOM dataset.

    Args:
        dataset: pydicom Dataset

    Returns:
        Slice thickness in mm, or None if not available
    """
    try:
        if hasattr(dataset, 'SliceThickness') and dataset.SliceThickness is not None:
            return float(dataset.SliceThickness)
    except (TypeError, ValueError):
        pass
    return None


def get_patient_name(dataset: Dataset) -> Optional[str]:
    """Get PatientName (0010,0010) as a plain string, or None if empty."""
    name = getattr(dataset, 'PatientName', None)
    if name is None:
        return None
    name = str(name).strip()
    return name or None


def get_patient_id(dataset: Dataset) -> Optional[str]:
    """Get PatientID (0010,0020), or None if empty."""
    patient_id = getattr(dataset, 'PatientID', None)
    if patient_id is None:
        return None
    patient_id = str(patient_id).strip()
    return patient_id or None


def get_rescale_parameters(dataset: Dataset) -> Tuple[float, float]:
    """
    Get RescaleSlope (0028,1053) and RescaleIntercept (0028,1052).

    Args:
        dataset: pydicom Dataset

    Returns:
        Tuple of (rescale_slope, rescale_intercept); (1.0, 0.0) when absent
    """
    def first_float(value, default: float) -> float:
        if value is None:
            return default
        if isinstance(value, (list, tuple, MultiValue)):
            value = value[0] if len(value) else default
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    slope = first_float(getattr(dataset, 'RescaleSlope', None), 1.0)
    intercept = first_float(getattr(dataset, 'RescaleIntercept', None), 0.0)
    if slope == 0.0:
        slope = 1.0
    return slope, intercept
