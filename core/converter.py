# core/converter.py
from __future__ import annotations

import logging
from typing import Optional, Sequence, TYPE_CHECKING

import numpy as np
import pandas as pd

from core.errors import IncompatibleUnits
from core.expression import parse_expression
from core.formatting import MAX_PRECISION, format_result
from core.units import ResolvedUnit, UnitRegistry

if TYPE_CHECKING:
    from core.settings import ConverterSettings

log = logging.getLogger(__name__)


class Converter:
    """
    Text-in, text-out unit conversion engine.

        >>> Converter().convert("10km to mile")
        '6.21 mile'

    Each instance owns its own UnitRegistry; nothing is shared between
    instances. There is no locking: callers that mutate the registry from one
    thread while converting on another must serialize that themselves.

    Mixed-family conversions (e.g. "10m to C") return an unchecked number
    unless `check_families=True`.
    """

    def __init__(
        self,
        registry: Optional[UnitRegistry] = None,
        *,
        precision: int = 2,
        integer_only: bool = False,
        check_families: bool = False,
    ):
        self.registry = registry if registry is not None else UnitRegistry()
        if not 0 <= int(precision) <= MAX_PRECISION:
            raise ValueError(f"precision must be between 0 and {MAX_PRECISION}, got {precision!r}")
        self.precision = int(precision)
        self.integer_only = bool(integer_only)
        self.check_families = bool(check_families)

    @classmethod
    def from_settings(cls, settings: "ConverterSettings") -> "Converter":
        conv = cls(
            precision=settings.precision,
            integer_only=settings.integer_only,
            check_families=settings.check_families,
        )
        for cu in settings.custom_units:
            conv.add_conversion(cu.symbol, cu.factor, cu.offset, cu.family)
        return conv

    # ---- public API ----
    def convert(self, text: str) -> str:
        """
        "10km to mile" -> "6.21 mile".

        Raises InvalidFormat, InvalidNumber or InvalidUnit (all ConversionError).
        The unit in the output is the destination token exactly as given.
        """
        expr = parse_expression(text, integer_only=self.integer_only)
        source = self.resolve(expr.source_unit)
        dest = self.resolve(expr.dest_unit)
        result = self._apply(expr.value, source, dest)
        out = format_result(result, expr.dest_unit, self.precision)
        log.debug("convert %r -> %r", text, out)
        return out

    def add_conversion(
        self,
        symbol: str,
        factor: float,
        offset: float = 0.0,
        family: Optional[str] = None,
    ) -> None:
        self.registry.add_conversion(symbol, factor, offset, family)

    def resolve(self, token: str) -> ResolvedUnit:
        return self.registry.resolve(token)

    def convert_value(self, value: float, source: str, dest: str) -> float:
        """Numeric conversion between two unit tokens, no parsing or formatting."""
        return self._apply(float(value), self.resolve(source), self.resolve(dest))

    def convert_values(self, values: Sequence[float], source: str, dest: str) -> np.ndarray:
        """Vectorized `convert_value` over a sequence/array."""
        src, dst = self.resolve(source), self.resolve(dest)
        self._check(src, dst)
        arr = np.asarray(values, dtype=float)
        with np.errstate(divide="ignore", invalid="ignore"):
            return (arr + src.offset) * src.factor / dst.factor - dst.offset

    def units_table(self) -> pd.DataFrame:
        return self.registry.units_table()

    def prefixes_table(self) -> pd.DataFrame:
        return self.registry.prefixes_table()

    # ---- internals ----
    def _check(self, source: ResolvedUnit, dest: ResolvedUnit) -> None:
        if (
            self.check_families
            and source.family
            and dest.family
            and source.family != dest.family
        ):
            raise IncompatibleUnits(source.token, dest.token, source.family, dest.family)

    def _apply(self, value: float, source: ResolvedUnit, dest: ResolvedUnit) -> float:
        self._check(source, dest)
        return dest.from_base(source.to_base(value))
