"""Employee API — int32 path convertor matching."""

import re

import pytest

from employee_api.convertors import INT32_MAX, INT32_MIN, Int32Convertor

PATTERN = re.compile(f"^{Int32Convertor.regex}$")


@pytest.mark.parametrize("segment,expected", [
    ("0", 0),
    ("7", 7),
    ("007", 7),
    ("+7", 7),
    ("-7", -7),
    ("-0", 0),
    ("999999999", 999999999),
    ("1999999999", 1999999999),
    ("2147483647", INT32_MAX),
    ("-2147483647", -INT32_MAX),
    ("-2147483648", INT32_MIN),
    ("-002147483648", INT32_MIN),
])
def test_in_range_segments_match(segment, expected):
    assert PATTERN.match(segment)
    assert Int32Convertor().convert(segment) == expected


@pytest.mark.parametrize("segment", [
    "",
    "-",
    "abc",
    "1.5",
    "1e3",
    " 1",
    "2147483648",
    "2147483650",
    "2200000000",
    "3000000000",
    "-2147483649",
    "99999999999999999999",
])
def test_other_segments_do_not_match(segment):
    assert PATTERN.match(segment) is None


def test_to_string_rejects_out_of_range():
    convertor = Int32Convertor()
    assert convertor.to_string(-5) == "-5"
    with pytest.raises(ValueError):
        convertor.to_string(INT32_MAX + 1)
