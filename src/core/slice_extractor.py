"""
Slice Extractor

Extracts 2D sample planes from a Volume along one of the three principal axes:

    - axial: depth fixed, plane W x H, pixel aspect sy / sx
    - coronal: row fixed, plane W x D, pixel aspect sz / sx
    - sagittal: column fixed, plane H x D, pixel aspect sz / sy

Offsets that fall outside the volume buffer are skipped and leave the output
pixel at zero. Nothing is cached; every call samples the volume again.

Inputs:
    - Volume, axis name, index along that axis

Outputs:
    - ExtractedPlane (raw int16 samples plus pixel aspect ratio)

Requirements:
    - numpy for index arithmetic
"""

import numpy as np

AXIS_AXIAL = "axial"
AXIS_CORONAL = "coronal"
AXIS_SAGITTAL = "sagittal"
AXES = (AXIS_AXIAL, AXIS_CORONAL, AXIS_SAGITTAL)


class ExtractedPlane:
    """A 2D plane of raw samples cut from a volume."""

    def __init__(self, axis: str, samples: np.ndarray, pixel_aspect: float):
        """
        Args:
            axis: Axis the plane was extracted along
            samples: int16 array of shape (height, width)
            pixel_aspect: Vertical spacing over horizontal spacing
        """
        self.axis = axis
        self.samples = samples
        self.height, self.width = samples.shape
        self.pixel_aspect = pixel_aspect


def axis_extent(volume, axis: str) -> int:
    """
    Number of valid indices along an axis.

    Args:
        volume: Volume or None
        axis: One of AXES

    Returns:
        Extent, or 0 when there is no volume
    """
    if volume is None:
        return 0
    if axis == AXIS_AXIAL:
        return volume.depth
    if axis == AXIS_CORONAL:
        return volume.height
    if axis == AXIS_SAGITTAL:
        return volume.width
    raise ValueError(f"Unknown axis: {axis}")


def plane_shape(volume, axis: str):
    """Return (plane_width, plane_height) for an axis."""
    if axis == AXIS_AXIAL:
        return volume.width, volume.height
    if axis == AXIS_CORONAL:
        return volume.width, volume.depth
    if axis == AXIS_SAGITTAL:
        return volume.height, volume.depth
    raise ValueError(f"Unknown axis: {axis}")


def pixel_aspect_ratio(volume, axis: str) -> float:
    """Vertical over horizontal in-plane spacing for an axis."""
    if axis == AXIS_AXIAL:
        return volume.row_spacing / volume.column_spacing
    if axis == AXIS_CORONAL:
        return volume.slice_thickness / volume.column_spacing
    if axis == AXIS_SAGITTAL:
        return volume.slice_thickness / volume.row_spacing
    raise ValueError(f"Unknown axis: {axis}")


def _plane_offsets(volume, axis: str, index: int) -> np.ndarray:
    """
    Flat buffer offsets for every output pixel, shape (plane_height, plane_width).
    """
    w, h, d = volume.width, volume.height, volume.depth
    frame = w * h
    if axis == AXIS_AXIAL:
        ys = np.arange(h, dtype=np.int64)[:, np.newaxis]
        xs = np.arange(w, dtype=np.int64)[np.newaxis, :]
        return index * frame + ys * w + xs
    if axis == AXIS_CORONAL:
        zs = np.arange(d, dtype=np.int64)[:, np.newaxis]
        xs = np.arange(w, dtype=np.int64)[np.newaxis, :]
        return zs * frame + index * w + xs
    # sagittal
    zs = np.arange(d, dtype=np.int64)[:, np.newaxis]
    ys = np.arange(h, dtype=np.int64)[np.newaxis, :]
    return zs * frame + ys * w + index


def extract_plane(volume, axis: str, index: int) -> ExtractedPlane:
    """
    Extract the plane at a fixed index along an axis.

    An index outside [0, extent - 1] yields an all-zero plane of the right
    size instead of an error.

    Args:
        volume: Source Volume
        axis: One of AXES
        index: 0-based index along the axis

    Returns:
        ExtractedPlane
    """
    if axis not in AXES:
        raise ValueError(f"Unknown axis: {axis}")

    plane_width, plane_height = plane_shape(volume, axis)
    aspect = pixel_aspect_ratio(volume, axis)
    plane = np.zeros((plane_height, plane_width), dtype=np.int16)

    index = int(index)
    if not 0 <= index < axis_extent(volume, axis):
        print(f"[MPR] {axis} index {index} out of range, returning blank plane")
        return ExtractedPlane(axis, plane, aspect)

    if axis == AXIS_AXIAL:
        # Contiguous block
        offset = index * volume.width * volume.height
        block = volume.width * volume.height
        if offset + block <= volume.size:
            plane[:, :] = volume.buffer[offset:offset + block].reshape(plane_height, plane_width)
        return ExtractedPlane(axis, plane, aspect)

    offsets = _plane_offsets(volume, axis, index)
    valid = (offsets >= 0) & (offsets < volume.size)
    plane[valid] = volume.buffer[offsets[valid]]
    return ExtractedPlane(axis, plane, aspect)
