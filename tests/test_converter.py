# tests/test_converter.py

import itertools

import numpy as np
import pytest

from core.converter import Converter
from core.errors import (
    IncompatibleUnits,
    InvalidFormat,
    InvalidNumber,
    InvalidUnit,
)
from core.settings import ConverterSettings, CustomUnit


@pytest.fixture
def converter():
    return Converter()


# ---- reference outputs ----

@pytest.mark.parametrize(
    "text, expected",
    [
        ("1Mm to mile", "621.37 mile"),
        ("10km to mile", "6.21 mile"),
        ("200m to mile", "0.12 mile"),
        ("45mm to inch", "1.77 inch"),
        ("10cm to inch", "3.94 inch"),
        ("45mm to cm", "4.5 cm"),
        ("10cm to m", "0.1 m"),
        ("1200m to km", "1.2 km"),
        ("1234km to Mm", "1.23 Mm"),
    ],
)
def test_lengths(converter, text, expected):
    assert converter.convert(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("25C to F", "77 F"),
        ("77F to C", "25 C"),
        ("25C to K", "298.15 K"),
        ("298K to C", "24.85 C"),
        ("76F to K", "297.59 K"),
        ("298K to F", "76.73 F"),
        ("0C to F", "32 F"),
        ("212F to C", "100 C"),
        ("0C to K", "273.15 K"),
    ],
)
def test_temperatures(converter, text, expected):
    assert converter.convert(text) == expected


# ---- properties ----

@pytest.mark.parametrize("unit", ["m", "mile", "yard", "foot", "inch", "C", "K", "F"])
@pytest.mark.parametrize("value", [0, 1, 7, 100, 2500])
def test_identity(converter, unit, value):
    assert converter.convert(f"{value}{unit}") == f"{value} {unit}"


LENGTHS = ["m", "km", "cm", "mile", "yard", "foot", "inch"]
TEMPERATURES = ["C", "K", "F"]


@pytest.mark.parametrize(
    "a, b",
    list(itertools.permutations(LENGTHS, 2)) + list(itertools.permutations(TEMPERATURES, 2)),
)
def test_round_trip(converter, a, b):
    v = 42.0
    there = converter.convert_value(v, a, b)
    back = converter.convert_value(there, b, a)
    assert back == pytest.approx(v, rel=1e-9)


def test_prefix_matches_base_value(converter):
    assert converter.convert_value(5, "km", "m") == pytest.approx(5000.0)
    assert converter.convert("5km to m") == converter.convert("5000m")


def test_micro_and_nano(converter):
    assert converter.convert("5μm to nm") == "5000 nm"
    assert converter.convert("5µm to nm") == "5000 nm"


def test_output_unit_is_token_as_typed(converter):
    assert converter.convert("1km to mm") == "1000000 mm"


def test_decimal_and_negative_input(converter):
    assert converter.convert("3.5m") == "3.5 m"
    assert converter.convert("-5C to F") == "23 F"


def test_integer_only_mode():
    legacy = Converter(integer_only=True)
    assert legacy.convert("3.5m") == "3 m"
    assert legacy.convert("-5C to F") == "41 F"


def test_cross_family_is_unchecked_by_default(converter):
    assert converter.convert("10m to C") == "10 C"


def test_family_check_is_opt_in():
    strict = Converter(check_families=True)
    with pytest.raises(IncompatibleUnits):
        strict.convert("10m to C")
    assert strict.convert("10km to m") == "10000 m"


def test_precision_option():
    assert Converter(precision=4).convert("10km to mile") == "6.2137 mile"


@pytest.mark.parametrize("precision", [-1, 13, 400])
def test_precision_out_of_range_rejected(precision):
    with pytest.raises(ValueError):
        Converter(precision=precision)


def test_max_precision_handles_huge_values():
    conv = Converter(precision=12)
    conv.add_conversion("huge", 1e300)
    out = conv.convert("17huge to m")
    assert out.endswith(" m")
    assert out.split()[0].isdigit()
    assert len(out.split()[0]) == 302


# ---- errors ----

@pytest.mark.parametrize("text", ["", "1m to km and more", "10"])
def test_invalid_format(converter, text):
    with pytest.raises(InvalidFormat):
        converter.convert(text)


def test_invalid_number(converter):
    with pytest.raises(InvalidNumber):
        converter.convert("abc")


def test_invalid_unit(converter):
    with pytest.raises(InvalidUnit) as exc:
        converter.convert("10xyz")
    assert exc.value.token == "xyz"

    with pytest.raises(InvalidUnit) as exc:
        converter.convert("10km to parsec")
    assert exc.value.token == "parsec"


def test_errors_are_value_errors(converter):
    with pytest.raises(ValueError):
        converter.convert("abc")


# ---- mutation ----

def test_add_conversion_source_and_destination(converter):
    converter.add_conversion("stone", 6.35029, 0.0)
    assert converter.convert("1stone to m") == "6.35 m"
    assert converter.convert("6.35029m to stone") == "1 stone"
    assert converter.convert("2kstone to stone") == "2000 stone"


def test_add_conversion_override(converter):
    converter.add_conversion("foot", 1.0)
    assert converter.convert("3foot to m") == "3 m"


def test_instances_do_not_share_registry():
    a, b = Converter(), Converter()
    a.add_conversion("stone", 6.35029)
    assert a.convert("1stone to m") == "6.35 m"
    with pytest.raises(InvalidUnit):
        b.convert("1stone to m")


def test_zero_factor_unit(converter):
    """A zero factor is accepted; dividing by it follows IEEE rules instead of raising."""
    converter.add_conversion("void", 0.0)
    assert converter.convert("1void to m") == "0 m"
    assert converter.convert("1m to void") == "inf void"
    assert converter.convert("-1m to void") == "-inf void"
    assert converter.convert("0void to void") == "nan void"


def test_zero_factor_in_batch(converter):
    converter.add_conversion("void", 0.0)
    out = converter.convert_values([1.0, -1.0], "m", "void")
    assert np.isposinf(out[0]) and np.isneginf(out[1])


# ---- numeric helpers ----

def test_convert_values(converter):
    out = converter.convert_values([0.0, 100.0, -40.0], "C", "F")
    assert isinstance(out, np.ndarray)
    assert out.tolist() == pytest.approx([32.0, 212.0, -40.0])


def test_units_table_reflects_additions(converter):
    converter.add_conversion("stone", 6.35029, family="mass")
    df = converter.units_table()
    assert "stone" in df["Symbol"].tolist()
    assert df.set_index("Symbol").loc["stone", "Family"] == "mass"


def test_from_settings():
    settings = ConverterSettings(
        precision=3,
        custom_units=[CustomUnit("stone", 6.35029, 0.0, "mass")],
    )
    conv = Converter.from_settings(settings)
    assert conv.precision == 3
    assert conv.convert("1stone to m") == "6.35 m"
    assert conv.convert("10km to mile") == "6.214 mile"
