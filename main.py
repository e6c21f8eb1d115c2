import logging
import sys

from PySide6.QtWidgets import QApplication

from gui import MainWindow
from services.persistence import ConfigManager


def configure_logging(config: ConfigManager, level: int = logging.INFO) -> None:
    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(config.logs_dir / "luniconvert.log", encoding="utf-8"),
        ],
    )


if __name__ == "__main__":
    config = ConfigManager()
    configure_logging(config)

    app = QApplication(sys.argv)
    window = MainWindow(config)
    window.resize(600, 450)
    window.show()
    sys.exit(app.exec())
