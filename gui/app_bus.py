# gui/app_bus.py
from PySide6.QtCore import QObject, Signal

class AppBus(QObject):
    """
    Centralized signal hub for the desktop app.
    Any widget or controller can subscribe or emit.
    """

    # ---- Registry ----
    conversionsChanged = Signal()         # a unit was added or overridden

    # ---- Conversions ----
    conversionFinished = Signal(str, str)  # (input, result)
    conversionFailed = Signal(str, str)    # (input, message)


# Singleton pattern
_app_bus: AppBus | None = None

def get_app_bus() -> AppBus:
    global _app_bus
    if _app_bus is None:
        _app_bus = AppBus()
    return _app_bus
