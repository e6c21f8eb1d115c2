# core/units.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

import numpy as np
import pandas as pd

from core.errors import InvalidUnit
from core.prefixes import PrefixTable

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionEntry:
    """base = (value + offset) * factor"""
    factor: float
    offset: float = 0.0
    family: Optional[str] = None


@dataclass(frozen=True)
class ResolvedUnit:
    token: str
    base_symbol: str
    factor: float
    offset: float
    prefix: str = ""
    family: Optional[str] = None

    def to_base(self, value: float) -> float:
        return (value + self.offset) * self.factor

    def from_base(self, base_value: float) -> float:
        # IEEE division: a zero factor gives inf/nan rather than raising
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.float64(base_value) / self.factor) - self.offset


# Length (base: m), temperature (base: C)
DEFAULT_UNITS: Tuple[Tuple[str, ConversionEntry], ...] = (
    ("m",    ConversionEntry(1.0,     family="length")),
    ("mile", ConversionEntry(1609.34, family="length")),
    ("yard", ConversionEntry(0.9144,  family="length")),
    ("foot", ConversionEntry(0.3048,  family="length")),
    ("inch", ConversionEntry(0.0254,  family="length")),
    ("C",    ConversionEntry(1.0,     0.0,     family="temperature")),
    ("K",    ConversionEntry(1.0,     -273.15, family="temperature")),
    ("F",    ConversionEntry(5.0 / 9.0, -32.0, family="temperature")),
)


class UnitRegistry:
    """
    Symbol -> ConversionEntry table plus the prefix table used to resolve
    tokens such as "km" or "μm".

    Symbols are case-sensitive ("M" is the mega prefix, "m" the meter).
    Entries are only ever inserted or replaced; there is no removal.
    """

    def __init__(
        self,
        units: Iterable[Tuple[str, ConversionEntry]] = DEFAULT_UNITS,
        prefixes: Optional[PrefixTable] = None,
    ):
        self._units: Dict[str, ConversionEntry] = {}
        for symbol, entry in units:
            if symbol in self._units:
                raise ValueError(f"Duplicate unit key: {symbol}")
            self._units[symbol] = entry
        self._builtin = frozenset(self._units)
        self.prefixes = prefixes if prefixes is not None else PrefixTable()

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._units

    def __len__(self) -> int:
        return len(self._units)

    def symbols(self) -> list[str]:
        return list(self._units)

    def get(self, symbol: str) -> Optional[ConversionEntry]:
        return self._units.get(symbol)

    # ---- mutation ----
    def add_conversion(
        self,
        symbol: str,
        factor: float,
        offset: float = 0.0,
        family: Optional[str] = None,
    ) -> None:
        """Insert or overwrite the entry for `symbol`. The factor is not validated."""
        factor, offset = float(factor), float(offset)
        if factor == 0.0:
            log.warning("Unit '%s' registered with a zero factor; converting into it yields inf/nan.", symbol)
        if symbol in self._builtin:
            log.warning("Overriding built-in unit '%s'.", symbol)
        self._units[symbol] = ConversionEntry(factor, offset, family)
        log.debug("add_conversion %s: factor=%r offset=%r family=%r", symbol, factor, offset, family)

    # ---- lookup ----
    def resolve(self, token: str) -> ResolvedUnit:
        """
        Map a raw unit token to its effective factor/offset.

        An exact symbol match always wins over prefix stripping, so "m" is the
        meter and "mile" is never read as milli-"ile". Otherwise the first
        matching prefix (longest first) is stripped and the remainder looked up.
        The prefix scales the factor only; offsets are left untouched.
        """
        entry = self._units.get(token)
        if entry is not None:
            return ResolvedUnit(token, token, entry.factor, entry.offset, "", entry.family)

        matched = self.prefixes.match(token)
        if matched is None:
            raise InvalidUnit(token)
        prefix, base_symbol = matched

        entry = self._units.get(base_symbol)
        if entry is None:
            raise InvalidUnit(token)

        factor = entry.factor * self.prefixes.multiplier(prefix)
        log.debug("resolve %s -> prefix=%r base=%s factor=%r", token, prefix, base_symbol, factor)
        return ResolvedUnit(token, base_symbol, factor, entry.offset, prefix, entry.family)

    # ---- tables ----
    def units_table(self) -> pd.DataFrame:
        rows = [
            {"Symbol": s, "Factor": e.factor, "Offset": e.offset, "Family": e.family or ""}
            for s, e in self._units.items()
        ]
        return pd.DataFrame(rows, columns=["Symbol", "Factor", "Offset", "Family"])

    def prefixes_table(self) -> pd.DataFrame:
        rows = [{"Prefix": p, "Multiplier": m} for p, m in self.prefixes.items()]
        return pd.DataFrame(rows, columns=["Prefix", "Multiplier"])
