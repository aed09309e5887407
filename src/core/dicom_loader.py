"""
DICOM File Loader

This module reads DICOM files and converts each one into a SliceSource for the
MPR engine. It supports:
- Single files
- Lists of files
- Directories (*.dcm files, optionally recursive)

Inputs:
    - File paths (single or multiple)
    - Directory paths

Outputs:
    - List of successfully decoded SliceSource objects
    - List of files that failed to load (with error messages)

Requirements:
    - pydicom library for DICOM file reading
    - numpy for pixel conversion
    - pathlib for path handling
"""

import os
import time
import warnings
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import numpy as np
import pydicom
from pydicom.dataset import Dataset
from pydicom.errors import InvalidDicomError

from core.slice_source import SliceSource
from utils.dicom_utils import (
    get_series_uid,
    get_instance_number,
    get_pixel_spacing,
    get_slice_thickness,
    get_patient_name,
    get_patient_id,
    get_rescale_parameters,
)
from utils.debug_log import debug_log

ProgressCallback = Callable[[int, int, str], None]

_INT16_MIN = np.iinfo(np.int16).min
_INT16_MAX = np.iinfo(np.int16).max


def slice_source_from_dataset(dataset: Dataset, file_path: Optional[str] = None) -> SliceSource:
    """
    Convert a decoded DICOM dataset into a SliceSource.

    The modality rescale (slope/intercept) is applied so that samples are in
    output units (e.g. HU for CT), then clipped to the int16 range.

    Args:
        dataset: pydicom Dataset with pixel data
        file_path: Originating file path, for diagnostics

    Returns:
        SliceSource

    Raises:
        ValueError: if the dataset has no single-frame grayscale pixel data
    """
    if 'PixelData' not in dataset:
        raise ValueError("Dataset has no pixel data")

    pixel_array = dataset.pixel_array
    if pixel_array.ndim != 2:
        raise ValueError(f"Expected a single-frame grayscale image, got shape {pixel_array.shape}")

    slope, intercept = get_rescale_parameters(dataset)
    if slope != 1.0 or intercept != 0.0:
        pixel_array = pixel_array.astype(np.float64) * slope + intercept
        pixel_array = np.rint(pixel_array)
    pixels = np.clip(pixel_array, _INT16_MIN, _INT16_MAX).astype(np.int16)

    height, width = pixels.shape
    spacing = get_pixel_spacing(dataset)
    row_spacing, column_spacing = spacing if spacing is not None else (None, None)

    return SliceSource(
        series_uid=get_series_uid(dataset),
        instance_number=get_instance_number(dataset),
        width=width,
        height=height,
        pixels=pixels,
        row_spacing=row_spacing,
        column_spacing=column_spacing,
        slice_thickness=get_slice_thickness(dataset),
        patient_name=get_patient_name(dataset),
        patient_id=get_patient_id(dataset),
        file_path=file_path,
    )


def find_dicom_files(directory_path: str, recursive: bool = False) -> List[str]:
    """
    List *.dcm files (case-insensitive) in a directory, sorted by path.

    Args:
        directory_path: Folder to scan
        recursive: If True, include subfolders

    Returns:
        File paths
    """
    dir_path = Path(directory_path)
    candidates = dir_path.rglob('*') if recursive else dir_path.iterdir()
    return sorted(
        str(p) for p in candidates
        if p.is_file() and p.suffix.lower() == '.dcm'
    )


class DICOMLoader:
    """
    Loads DICOM files into SliceSource objects.

    Files that cannot be read or decoded are recorded in failed_files and
    skipped; loading never stops on a single bad file.
    """

    def __init__(self):
        """Initialize the DICOM loader."""
        self.loaded_files: List[SliceSource] = []
        self.failed_files: List[Tuple[str, str]] = []  # (path, error_message)

    def clear(self) -> None:
        """Forget results of previous loads."""
        self.loaded_files = []
        self.failed_files = []

    def load_file(self, file_path: str) -> Optional[SliceSource]:
        """
        Load a single DICOM file.

        Args:
            file_path: Path to the DICOM file

        Returns:
            SliceSource if successful, None otherwise
        """
        try:
            with warnings.catch_warnings():
                warnings.filterwarnings('ignore', message='.*excess padding.*', category=UserWarning)
                dataset = pydicom.dcmread(file_path, force=True)
                return slice_source_from_dataset(dataset, file_path)
        except InvalidDicomError as e:
            self.failed_files.append((file_path, f"Invalid DICOM file: {str(e)}"))
        except OSError as e:
            self.failed_files.append((file_path, f"File system error: {str(e)}"))
        except MemoryError as e:
            self.failed_files.append((file_path, f"Memory error: File too large to load. Error: {str(e)}"))
        except Exception as e:
            error_msg = f"Error reading file: {str(e)}"
            error_type = type(e).__name__
            if error_type not in error_msg:
                error_msg = f"{error_type}: {error_msg}"
            self.failed_files.append((file_path, error_msg))
        return None

    def load_files(self, file_paths: List[str],
                   progress_callback: Optional[ProgressCallback] = None) -> List[SliceSource]:
        """
        Load multiple DICOM files.

        Args:
            file_paths: List of file paths to load
            progress_callback: Optional callback called during loading.
                               Signature: (current: int, total: int, filename: str) -> None

        Returns:
            List of successfully loaded slice sources, in input order
        """
        self.clear()
        total_files = len(file_paths)
        load_start_time = time.time()

        for idx, file_path in enumerate(file_paths):
            if progress_callback and idx % 10 == 0:
                progress_callback(idx, total_files, os.path.basename(file_path))
            source = self.load_file(file_path)
            if source is not None:
                self.loaded_files.append(source)

        if progress_callback and total_files > 0:
            progress_callback(total_files, total_files, "")

        total_time = time.time() - load_start_time
        print(f"[LOAD] Loaded {len(self.loaded_files)}/{total_files} files in {total_time:.2f}s")
        for failed_path, error_msg in self.failed_files[:5]:
            print(f"[LOAD]   Failed: {os.path.basename(failed_path)}: {error_msg}")
        if len(self.failed_files) > 5:
            print(f"[LOAD]   ... and {len(self.failed_files) - 5} more failures")
        debug_log(
            "dicom_loader.py:load_files",
            "Files loaded",
            {"total": total_files, "loaded": len(self.loaded_files),
             "failed": len(self.failed_files), "seconds": round(total_time, 3)},
        )
        return self.loaded_files

    def load_directory(self, directory_path: str, recursive: bool = False,
                       progress_callback: Optional[ProgressCallback] = None) -> List[SliceSource]:
        """
        Load all *.dcm files from a directory.

        Args:
            directory_path: Path to the directory
            recursive: If True, search subdirectories recursively
            progress_callback: Optional callback, see load_files

        Returns:
            List of successfully loaded slice sources
        """
        dir_path = Path(directory_path)
        if not dir_path.exists() or not dir_path.is_dir():
            self.clear()
            self.failed_files.append((directory_path, "Directory does not exist or is not a directory"))
            return []

        file_paths = find_dicom_files(directory_path, recursive)
        print(f"[LOAD] Found {len(file_paths)} .dcm file(s) in {directory_path}")
        return self.load_files(file_paths, progress_callback)
