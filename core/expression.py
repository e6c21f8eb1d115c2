# core/expression.py
from __future__ import annotations

import re
from dataclasses import dataclass

from core.errors import InvalidFormat, InvalidNumber

_NUMBER_RE = re.compile(r"[-+]?\d+(?:\.\d+)?")
_DIGITS_RE = re.compile(r"\d+")

# unit symbols are letter runs; anything else cannot be read back from the input
UNIT_CHARS = "A-Za-zμµ"
UNIT_SYMBOL_PATTERN = rf"^[{UNIT_CHARS}]+$"

_UNIT_RE = re.compile(rf"[{UNIT_CHARS}]+")


@dataclass(frozen=True)
class ParsedExpression:
    value: float
    source_unit: str
    dest_unit: str


def parse_expression(text: str, *, integer_only: bool = False) -> ParsedExpression:
    """
    Parse "<number><unit> [to <unit>]".

    Accepted shapes (whitespace separated):
      "10km"            -> 10, km -> km
      "10km to"         -> 10, km -> km
      "10km to mile"    -> 10, km -> mile

    The number and the unit are scanned independently inside the first token,
    so "km10" parses the same as "10km". The middle token of a three-token
    expression is ignored. The destination token is taken verbatim.

    integer_only=True reads just the first unsigned digit run ("3.5m" -> 3).
    """
    parts = (text or "").split()
    if not 1 <= len(parts) <= 3:
        raise InvalidFormat()

    quantity = parts[0]

    m = (_DIGITS_RE if integer_only else _NUMBER_RE).search(quantity)
    if m is None:
        raise InvalidNumber()
    value = float(m.group(0))

    u = _UNIT_RE.search(quantity)
    if u is None:
        raise InvalidFormat()
    source = u.group(0)

    dest = parts[2] if len(parts) == 3 else source
    return ParsedExpression(value, source, dest)


def is_unit_symbol(symbol: str) -> bool:
    """True if `symbol` can be read back as a source unit ("stone", not "m2")."""
    return _UNIT_RE.fullmatch(symbol or "") is not None
