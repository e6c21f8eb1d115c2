# gui/__init__.py

from .main_window import MainWindow

__all__ = ["MainWindow"]
