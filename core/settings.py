# core/settings.py

from __future__ import annotations
from dataclasses import dataclass, asdict, field
from typing import List, Optional

SETTINGS_VERSION = 1


# --------------------------- Custom units ---------------------------

@dataclass
class CustomUnit:
    """A user-registered unit, applied on top of the built-in registry."""
    symbol: str
    factor: float
    offset: float = 0.0
    family: Optional[str] = None


# --------------------------- Converter options ---------------------------

@dataclass
class ConverterSettings:
    precision: int = 2
    integer_only: bool = False      # legacy digit-run number parsing
    check_families: bool = False
    custom_units: List[CustomUnit] = field(default_factory=list)

    def add_unit(self, unit: CustomUnit) -> None:
        # last write wins, same as the registry
        self.custom_units = [u for u in self.custom_units if u.symbol != unit.symbol]
        self.custom_units.append(unit)

    def to_dict(self) -> dict:
        return {
            "version": SETTINGS_VERSION,
            "precision": self.precision,
            "integer_only": self.integer_only,
            "check_families": self.check_families,
            "custom_units": [asdict(u) for u in self.custom_units],
        }

    @staticmethod
    def from_dict(data: dict) -> "ConverterSettings":
        units_in = data.get("custom_units", []) or []
        units = [
            CustomUnit(
                symbol=str(u["symbol"]),
                factor=float(u["factor"]),
                offset=float(u.get("offset", 0.0) or 0.0),
                family=u.get("family") or None,
            )
            for u in units_in
        ]
        return ConverterSettings(
            precision=int(data.get("precision", 2)),
            integer_only=bool(data.get("integer_only", False)),
            check_families=bool(data.get("check_families", False)),
            custom_units=units,
        )
