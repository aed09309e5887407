"""
MPR Error Types

Outcomes of series selection and volume building that the caller must handle.
Both leave any previously loaded volume untouched.

Requirements:
    - Standard library only
"""


class NoSeriesFoundError(ValueError):
    """Series selection had nothing to group (empty or all-undecodable input)."""


class EmptyVolumeError(ValueError):
    """Every candidate slice was rejected while building the volume."""
