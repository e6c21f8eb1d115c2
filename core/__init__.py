# core/__init__.py

from .converter import Converter
from .errors import ConversionError, IncompatibleUnits, InvalidFormat, InvalidNumber, InvalidUnit
from .settings import ConverterSettings, CustomUnit
from .units import ConversionEntry, ResolvedUnit, UnitRegistry

__all__ = [
    "Converter",
    "ConversionError",
    "IncompatibleUnits",
    "InvalidFormat",
    "InvalidNumber",
    "InvalidUnit",
    "ConverterSettings",
    "CustomUnit",
    "ConversionEntry",
    "ResolvedUnit",
    "UnitRegistry",
]
