"""
Tests for the MPR display widgets (gui.image_panel, gui.main_window,
gui.view_coordinator).

Requires QApplication (qapp fixture from conftest); runs offscreen.
"""

import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from core.mpr_engine import DisplayImage, MPREngine
from core.slice_source import SliceSource
from utils.config_manager import ConfigManager

TEST_CONFIG_FILENAME = "mpr_viewer_config_guitest.json"

pytestmark = pytest.mark.qt


@pytest.fixture
def config_manager():
    config = ConfigManager(TEST_CONFIG_FILENAME)
    yield config
    if config.config_path.exists():
        config.config_path.unlink()


@pytest.fixture
def loaded_engine():
    engine = MPREngine()
    sources = [
        SliceSource("1.2.3", z, 6, 4, np.full(24, z * 25, dtype=np.int16))
        for z in range(1, 8)
    ]
    assert engine.load_sources(sources)
    return engine


def test_display_image_to_qimage(qapp):
    from gui.image_panel import display_image_to_qimage

    pixels = np.zeros((3, 5, 3), dtype=np.uint8)
    pixels[1, 2] = (10, 10, 10)
    qimage = display_image_to_qimage(DisplayImage("axial", pixels, (0.5, 0.5), 5, 3))
    assert (qimage.width(), qimage.height()) == (5, 3)
    assert qimage.pixelColor(2, 1).red() == 10


def test_image_panel_set_and_clear(qapp):
    from gui.image_panel import ImagePanel

    panel = ImagePanel("coronal")
    assert not panel.has_image()
    panel.set_image(DisplayImage("coronal", np.zeros((4, 4, 3), dtype=np.uint8), (None, None), 4, 1))
    assert panel.has_image()
    panel.set_image(None)
    assert not panel.has_image()


def test_image_panel_crosshair_stays_inside_image(qapp):
    from gui.image_panel import ImagePanel

    panel = ImagePanel("axial")
    pixels = np.zeros((10, 20, 3), dtype=np.uint8)
    assert panel.crosshair_line_position(5, 5, 20, 10) is None

    panel.set_image(DisplayImage("axial", pixels, (1.0, 0.5), 20, 10))
    assert panel.crosshair_line_position(5, 5, 20, 10) == (24, 10)

    panel.set_image(DisplayImage("axial", pixels, (None, 0.5), 20, 10))
    assert panel.crosshair_line_position(5, 5, 20, 10) is None


def test_main_window_switch_layout(qapp, config_manager):
    from gui.main_window import MainWindow

    window = MainWindow(config_manager)
    window.switch_layout("sagittal")
    assert window.main_view_axis == "sagittal"
    assert config_manager.get_main_view_axis() == "sagittal"


def test_main_window_toggle_controls(qapp, config_manager):
    from gui.main_window import MainWindow

    window = MainWindow(config_manager)
    window.toggle_controls()
    assert window.control_panel.isHidden()
    assert config_manager.get_controls_visible() is False
    window.toggle_controls()
    assert not window.control_panel.isHidden()


def test_coordinator_renders_and_steps(qapp, config_manager, loaded_engine):
    from gui.main_window import MainWindow
    from gui.view_coordinator import ViewCoordinator

    window = MainWindow(config_manager)
    coordinator = ViewCoordinator(window, engine=loaded_engine, config_manager=config_manager)
    coordinator._on_volume_loaded()

    assert coordinator.view_parameters.indices == {"axial": 3, "coronal": 1, "sagittal": 2}
    assert all(panel.has_image() for panel in window.image_panels.values())
    assert window.control_panel.slice_sliders["axial"].maximum() == 6

    coordinator.step_slice("axial", 1)
    assert coordinator.view_parameters.get_index("axial") == 4
    assert window.control_panel.slice_sliders["axial"].value() == 4

    coordinator.set_slice("sagittal", 99)
    assert coordinator.view_parameters.get_index("sagittal") == 5

    coordinator.set_window(500, 1000)
    coordinator.reset_view()
    assert coordinator.view_parameters.indices == {"axial": 3, "coronal": 1, "sagittal": 2}
    assert (coordinator.view_parameters.window_level, coordinator.view_parameters.window_width) == (40, 400)


def test_coordinator_reset_ignored_when_empty(qapp, config_manager):
    from gui.main_window import MainWindow
    from gui.view_coordinator import ViewCoordinator

    window = MainWindow(config_manager)
    coordinator = ViewCoordinator(window, engine=MPREngine(), config_manager=config_manager)
    coordinator.reset_view()
    coordinator.step_slice("axial", 1)
    assert coordinator.view_parameters.get_index("axial") == 0
    assert not any(panel.has_image() for panel in window.image_panels.values())


def test_saved_default_window_is_restored_on_reset(qapp, config_manager, loaded_engine):
    from gui.main_window import MainWindow
    from gui.view_coordinator import ViewCoordinator

    window = MainWindow(config_manager)
    coordinator = ViewCoordinator(window, engine=loaded_engine, config_manager=config_manager)
    coordinator._on_volume_loaded()

    coordinator.set_window(300, 1500)
    window.control_panel.save_default_button.click()
    assert config_manager.get_default_window() == (300, 1500)

    coordinator.set_window(0, 10)
    coordinator.reset_view()
    assert (coordinator.view_parameters.window_level, coordinator.view_parameters.window_width) == (300, 1500)
    assert window.control_panel.level_slider.value() == 300
