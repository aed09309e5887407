"""
Unit tests for DICOM loader module.

Tests dataset conversion, file loading, directory loading, and error handling.
"""

import unittest
import os
import tempfile
from pathlib import Path

import numpy as np
from pydicom.dataset import Dataset, FileMetaDataset
from pydicom.uid import ExplicitVRLittleEndian, generate_uid

# Add src to path
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from core.dicom_loader import DICOMLoader, find_dicom_files, slice_source_from_dataset


SERIES_UID = "1.2.826.0.1.3680043.8.498.1"


def make_dataset(pixels, instance_number=1, series_uid=SERIES_UID,
                 slope=None, intercept=None, pixel_spacing=(0.7, 0.6),
                 slice_thickness=2.5):
    """Build an uncompressed 16-bit signed MONOCHROME2 dataset."""
    pixels = np.asarray(pixels, dtype=np.int16)
    file_meta = FileMetaDataset()
    file_meta.MediaStorageSOPClassUID = "1.2.840.10008.5.1.4.1.1.2"
    file_meta.MediaStorageSOPInstanceUID = generate_uid()
    file_meta.TransferSyntaxUID = ExplicitVRLittleEndian

    ds = Dataset()
    ds.file_meta = file_meta
    ds.SOPClassUID = file_meta.MediaStorageSOPClassUID
    ds.SOPInstanceUID = file_meta.MediaStorageSOPInstanceUID
    ds.PatientName = "Doe^Jane"
    ds.PatientID = "PID-42"
    ds.SeriesInstanceUID = series_uid
    ds.InstanceNumber = instance_number
    ds.Rows, ds.Columns = pixels.shape
    ds.SamplesPerPixel = 1
    ds.PhotometricInterpretation = "MONOCHROME2"
    ds.BitsAllocated = 16
    ds.BitsStored = 16
    ds.HighBit = 15
    ds.PixelRepresentation = 1
    if pixel_spacing is not None:
        ds.PixelSpacing = list(pixel_spacing)
    if slice_thickness is not None:
        ds.SliceThickness = slice_thickness
    if slope is not None:
        ds.RescaleSlope = slope
    if intercept is not None:
        ds.RescaleIntercept = intercept
    ds.PixelData = pixels.astype('<i2').tobytes()
    return ds


class TestSliceSourceFromDataset(unittest.TestCase):
    """Test cases for slice_source_from_dataset."""

    def test_converts_pixels_and_metadata(self):
        pixels = np.arange(12, dtype=np.int16).reshape(3, 4) - 5
        source = slice_source_from_dataset(make_dataset(pixels, instance_number=7), "a.dcm")
        self.assertEqual((source.width, source.height), (4, 3))
        self.assertEqual(source.series_uid, SERIES_UID)
        self.assertEqual(source.instance_number, 7)
        self.assertAlmostEqual(source.row_spacing, 0.7)
        self.assertAlmostEqual(source.column_spacing, 0.6)
        self.assertAlmostEqual(source.slice_thickness, 2.5)
        self.assertEqual(source.patient_name, "Doe^Jane")
        self.assertEqual(source.patient_id, "PID-42")
        self.assertEqual(source.file_path, "a.dcm")
        np.testing.assert_array_equal(source.pixels, pixels.ravel())

    def test_applies_rescale(self):
        pixels = np.array([[0, 1000], [1024, 2000]], dtype=np.int16)
        source = slice_source_from_dataset(make_dataset(pixels, slope=1, intercept=-1024))
        self.assertEqual(source.pixels.tolist(), [-1024, -24, 0, 976])

    def test_missing_spacing_defaults(self):
        ds = make_dataset(np.zeros((2, 2)), pixel_spacing=None, slice_thickness=None)
        source = slice_source_from_dataset(ds)
        self.assertEqual(source.row_spacing, 1.0)
        self.assertEqual(source.column_spacing, 1.0)
        self.assertEqual(source.slice_thickness, 1.0)

    def test_dataset_without_pixels_raises(self):
        ds = make_dataset(np.zeros((2, 2)))
        del ds.PixelData
        with self.assertRaises(ValueError):
            slice_source_from_dataset(ds)


class TestDICOMLoader(unittest.TestCase):
    """Test cases for DICOMLoader."""

    def setUp(self):
        """Set up test fixtures."""
        self.loader = DICOMLoader()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir_path = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def _write(self, name, dataset):
        path = self.dir_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        dataset.save_as(str(path), enforce_file_format=True)
        return str(path)

    def test_loader_initialization(self):
        """Test loader initialization."""
        self.assertEqual(len(self.loader.loaded_files), 0)
        self.assertEqual(len(self.loader.failed_files), 0)

    def test_load_nonexistent_file(self):
        """Test loading a non-existent file."""
        result = self.loader.load_file("/nonexistent/file.dcm")
        self.assertIsNone(result)
        self.assertEqual(len(self.loader.failed_files), 1)

    def test_load_nonexistent_directory(self):
        result = self.loader.load_directory(str(self.dir_path / "missing"))
        self.assertEqual(result, [])
        self.assertEqual(len(self.loader.failed_files), 1)

    def test_load_written_file(self):
        pixels = np.array([[1, 2], [3, 4]], dtype=np.int16)
        path = self._write("slice.dcm", make_dataset(pixels, instance_number=3))
        source = self.loader.load_file(path)
        self.assertIsNotNone(source)
        self.assertEqual(source.instance_number, 3)
        self.assertEqual(source.pixels.tolist(), [1, 2, 3, 4])

    def test_load_directory_skips_bad_files(self):
        self._write("b.dcm", make_dataset(np.zeros((2, 2)), instance_number=2))
        self._write("a.dcm", make_dataset(np.ones((2, 2)), instance_number=1))
        (self.dir_path / "broken.dcm").write_bytes(b"not a dicom file")
        (self.dir_path / "notes.txt").write_text("ignored")

        progress = []
        sources = self.loader.load_directory(
            str(self.dir_path), progress_callback=lambda c, t, f: progress.append((c, t))
        )
        self.assertEqual(len(sources), 2)
        self.assertEqual([s.instance_number for s in sources], [1, 2])
        self.assertEqual(len(self.loader.failed_files), 1)
        self.assertEqual(progress[-1], (3, 3))

    def test_find_dicom_files(self):
        self._write("x.DCM", make_dataset(np.zeros((1, 1))))
        self._write("sub/y.dcm", make_dataset(np.zeros((1, 1))))
        (self.dir_path / "z.txt").write_text("")
        flat = find_dicom_files(str(self.dir_path))
        nested = find_dicom_files(str(self.dir_path), recursive=True)
        self.assertEqual([os.path.basename(p) for p in flat], ["x.DCM"])
        self.assertEqual(sorted(os.path.basename(p) for p in nested), ["x.DCM", "y.dcm"])

    def test_clear(self):
        """Test clearing loaded files."""
        self.loader.load_file("/nonexistent/file.dcm")
        self.loader.clear()
        self.assertEqual(len(self.loader.loaded_files), 0)
        self.assertEqual(len(self.loader.failed_files), 0)


if __name__ == '__main__':
    unittest.main()
