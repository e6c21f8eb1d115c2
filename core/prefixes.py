# core/prefixes.py
from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

# Declaration order doubles as the tie-break order for equal-length prefixes.
DEFAULT_PREFIXES: Tuple[Tuple[str, float], ...] = (
    ("n", 1e-9),   # nano
    ("μ", 1e-6),   # micro
    ("m", 1e-3),   # milli
    ("c", 1e-2),   # centi
    ("", 1.0),     # no prefix
    ("k", 1e3),    # kilo
    ("M", 1e6),    # mega
    ("G", 1e9),    # giga
)

# MICRO SIGN (U+00B5) -> GREEK SMALL LETTER MU (U+03BC)
_PREFIX_ALIASES = {"µ": "μ"}


class PrefixTable:
    """
    Immutable mapping of metric prefix -> multiplier.

    `match()` scans the non-empty prefixes longest first, then in declaration
    order, and returns the first one the token starts with.
    """

    def __init__(self, prefixes: Iterable[Tuple[str, float]] = DEFAULT_PREFIXES):
        self._multipliers: Dict[str, float] = {}
        for symbol, multiplier in prefixes:
            if symbol in self._multipliers:
                raise ValueError(f"Duplicate prefix: {symbol!r}")
            self._multipliers[symbol] = float(multiplier)
        self._multipliers.setdefault("", 1.0)

        declared = [p for p in self._multipliers if p]
        # sorted() is stable, so equal lengths keep declaration order
        self._scan_order: Tuple[str, ...] = tuple(sorted(declared, key=len, reverse=True))

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._multipliers

    def __len__(self) -> int:
        return len(self._multipliers)

    def items(self):
        return self._multipliers.items()

    @property
    def scan_order(self) -> Tuple[str, ...]:
        return self._scan_order

    def multiplier(self, symbol: str) -> float:
        return self._multipliers.get(_PREFIX_ALIASES.get(symbol, symbol), 1.0)

    def match(self, token: str) -> Optional[Tuple[str, str]]:
        """Return (prefix, remainder) for the first matching prefix, else None."""
        for alias, canonical in _PREFIX_ALIASES.items():
            if token.startswith(alias) and canonical in self._multipliers:
                return canonical, token[len(alias):]
        for prefix in self._scan_order:
            if token.startswith(prefix):
                return prefix, token[len(prefix):]
        return None
