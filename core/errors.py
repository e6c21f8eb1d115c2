# core/errors.py
from __future__ import annotations


class ConversionError(ValueError):
    """Base class for everything `Converter.convert` can raise."""


class InvalidFormat(ConversionError):
    def __init__(self, message: str = "Invalid input format"):
        super().__init__(message)


class InvalidNumber(ConversionError):
    def __init__(self, message: str = "Invalid number format"):
        super().__init__(message)


class InvalidUnit(ConversionError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid unit: {token}")


class IncompatibleUnits(ConversionError):
    """Raised only when family checking is switched on."""

    def __init__(self, source: str, dest: str, source_family: str, dest_family: str):
        self.source = source
        self.dest = dest
        super().__init__(
            f"Cannot convert '{source}' ({source_family}) to '{dest}' ({dest_family})"
        )
