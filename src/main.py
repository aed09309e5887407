"""
MPR Viewer - Main Application Entry Point

This module is the main entry point for the MPR viewer application.
It initializes the application, creates the main window and view coordinator,
and runs the application event loop.

Inputs:
    - Command line arguments (optional folder to open)

Outputs:
    - Running MPR viewer application

Requirements:
    - PySide6 for application framework
    - pydicom for DICOM file handling
    - PIL/Pillow for image resampling
    - numpy for array operations
"""

import sys
from pathlib import Path

# Add src directory to path
src_dir = Path(__file__).parent
sys.path.insert(0, str(src_dir))

from PySide6.QtWidgets import QApplication, QStyleFactory

from gui.main_window import MainWindow
from gui.view_coordinator import ViewCoordinator
from core.dicom_loader import DICOMLoader
from core.mpr_engine import MPREngine
from utils.config_manager import ConfigManager


class MPRViewerApp:
    """
    Main application class for the MPR viewer.

    Creates the Qt application, the engine and loader, the main window, and
    the coordinator that connects them.
    """

    def __init__(self, argv=None):
        """
        Initialize the application.

        Args:
            argv: Command line arguments (sys.argv if None)
        """
        argv = list(sys.argv if argv is None else argv)
        self.app = QApplication.instance() or QApplication(argv)
        self.app.setApplicationName("MPR Viewer")
        self.app.setStyle(QStyleFactory.create("Fusion"))

        self.config_manager = ConfigManager()
        self.engine = MPREngine()
        self.loader = DICOMLoader()
        self.main_window = MainWindow(self.config_manager)
        self.coordinator = ViewCoordinator(
            self.main_window, self.engine, self.loader, self.config_manager
        )
        self.initial_folder = argv[1] if len(argv) > 1 else None

    def run(self) -> int:
        """
        Run the application.

        Returns:
            Exit code
        """
        self.main_window.show()
        if self.initial_folder:
            self.coordinator.load_folder(self.initial_folder)
        return self.app.exec()


def exception_hook(exctype, value, tb):
    """Global exception handler to catch unhandled exceptions."""
    import traceback
    error_msg = ''.join(traceback.format_exception(exctype, value, tb))
    print(f"Unhandled exception:\n{error_msg}")

    # Try to show error dialog if QApplication exists
    try:
        from PySide6.QtWidgets import QMessageBox
        if QApplication.instance():
            QMessageBox.critical(
                None,
                "Error",
                f"An unexpected error occurred:\n\n{exctype.__name__}: {value}"
            )
    except Exception:
        pass  # If the dialog cannot be shown, the printed traceback is enough


def main():
    """Main entry point."""
    sys.excepthook = exception_hook

    try:
        app = MPRViewerApp()
        return app.run()
    except Exception as e:
        print(f"Fatal error: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
