"""Allow running Ascent as a module: python -m ascent."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .app import AscentApp


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()

    app = QApplication(sys.argv)
    app.setApplicationName("Ascent")
    app.setOrganizationName("Ascent")

    window = AscentApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
