# tests/test_formatting.py

import pytest

from core.formatting import MAX_PRECISION, format_number, format_result


@pytest.mark.parametrize(
    "value, expected",
    [
        (12.0, "12"),
        (12.5, "12.5"),
        (12.34, "12.34"),
        (12.345, "12.35"),
        (0.1, "0.1"),
        (100.00000000000001, "100"),
        (24.850000000000023, "24.85"),
        (0.0, "0"),
        (-0.001, "0"),
        (-3.456, "-3.46"),
        (1e-9, "0"),
        (1e20, "100000000000000000000"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_precision_is_configurable():
    assert format_number(2.0 / 3.0, precision=4) == "0.6667"
    assert format_number(12.5, precision=0) == "13"


def test_non_finite():
    assert format_number(float("inf")) == "inf"
    assert format_number(float("-inf")) == "-inf"
    assert format_number(float("nan")) == "nan"


def test_format_result_keeps_unit_token():
    assert format_result(1.2, "km") == "1.2 km"


def test_max_precision_on_largest_float():
    txt = format_number(1.7976931348623157e308, precision=MAX_PRECISION)
    assert txt.startswith("17976931348623157")
    assert "." not in txt
