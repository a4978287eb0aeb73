"""Allow running Timertronics as a module: python -m timertronics."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import APP_NAME, TimerApp
from .settings import load_settings


def main() -> None:
    settings = load_settings()
    level = getattr(logging, settings.log_level.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(APP_NAME)
    app.setQuitOnLastWindowClosed(False)

    tray_app = TimerApp(settings)
    logging.getLogger(__name__).info(
        "%s ready with %d timer(s)", APP_NAME, len(tray_app.registry),
    )

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
