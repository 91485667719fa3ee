import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from src.logging_setup import configure_logging
from src.settings_manager import SettingsManager
from src.ui.main_window import LineHopWindow


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="linehop", description="Plain-text editor with keyboard line jumping.")
    parser.add_argument("file", nargs="?", help="File to open on startup.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("--app-dir", default=None, help="Directory holding settings.json.")
    # Qt options such as -style are left for QApplication.
    return parser.parse_known_args(argv)[0]


def main(argv: list[str] | None = None) -> int:
    raw_args = sys.argv[1:] if argv is None else list(argv)
    args = _parse_args(raw_args)

    app = QApplication([sys.argv[0], *raw_args])
    app.setStyle("Fusion")
    app.setApplicationName(LineHopWindow.APP_NAME)

    manager = SettingsManager(args.app_dir)
    manager.load_all()
    logger = configure_logging(
        manager.log_level(),
        debug_enabled=args.debug,
        to_file=manager.log_to_file(),
    )
    logger.info("Settings loaded from %s", manager.settings_path)

    window = LineHopWindow(manager)
    if args.file:
        window.open_file(Path(args.file))
    window.show()
    exit_code = app.exec()
    logging.getLogger("linehop").info("Exiting with code %s", exit_code)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
