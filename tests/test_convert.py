import math
from datetime import date, datetime, timezone
from fractions import Fraction

import pytest

from hdbwire.convert import (
    DEC128_DIGITS,
    DEC128_MAX_EXP,
    DEC128_MIN_EXP,
    MAX_BIGINT,
    MAX_DOUBLE,
    MAX_INTEGER,
    MAX_REAL,
    MAX_SMALLINT,
    MAX_TINYINT,
    MIN_BIGINT,
    MIN_INTEGER,
    MIN_SMALLINT,
    MIN_TINYINT,
    ConvertError,
    DecimalFlag,
    FloatOutOfRangeError,
    IntegerOutOfRangeError,
    Uint64OutOfRangeError,
    convert_bool,
    convert_bytes,
    convert_decimal,
    convert_decimal_to_rat,
    convert_fixed_to_rat,
    convert_float,
    convert_integer,
    convert_rat_to_decimal,
    convert_rat_to_fixed,
    convert_secondtime_to_time,
    convert_time,
    convert_time_to_secondtime,
    digits10,
    exp10,
)

INT_LIMITS = {
    "tinyint": (MIN_TINYINT, MAX_TINYINT),
    "smallint": (MIN_SMALLINT, MAX_SMALLINT),
    "integer": (MIN_INTEGER, MAX_INTEGER),
    "bigint": (MIN_BIGINT, MAX_BIGINT),
}


def conv_int(ft, v):
    lo, hi = INT_LIMITS[ft]
    return convert_integer(ft, v, lo, hi)


class CustomInt(int):
    pass


class CustomFloat(float):
    pass


class CustomString(str):
    pass


class CustomBytes(bytes):
    pass


class CustomTime(datetime):
    pass


@pytest.mark.parametrize("ft", ["tinyint", "smallint", "integer", "bigint"])
def test_integer_types(ft):
    assert conv_int(ft, 42) == 42


def test_custom_integer():
    assert conv_int("integer", CustomInt(42)) == 42


@pytest.mark.parametrize(
    "ft,v",
    [
        ("tinyint", MIN_TINYINT - 1),
        ("tinyint", MAX_TINYINT + 1),
        ("smallint", MIN_SMALLINT - 1),
        ("smallint", MAX_SMALLINT + 1),
        ("integer", MIN_INTEGER - 1),
        ("integer", MAX_INTEGER + 1),
    ],
)
def test_integer_out_of_range(ft, v):
    with pytest.raises(IntegerOutOfRangeError):
        conv_int(ft, v)


def test_integer_out_of_range_is_convert_error():
    with pytest.raises(ConvertError) as exc_info:
        conv_int("tinyint", 256)
    assert str(exc_info.value) == "unsupported tinyint conversion: int 256"


def test_integer_as_string():
    assert conv_int("integer", "42") == 42


def test_integer_string_out_of_range():
    with pytest.raises(IntegerOutOfRangeError):
        conv_int("tinyint", "300")


def test_integer_invalid_string():
    with pytest.raises(ConvertError):
        conv_int("integer", "4 2")


def test_integer_from_float():
    assert conv_int("bigint", 42.0) == 42


@pytest.mark.parametrize("v", [42.5, math.nan, math.inf])
def test_integer_from_inexact_float(v):
    with pytest.raises(ConvertError):
        conv_int("bigint", v)


def test_integer_bool_passes():
    assert conv_int("tinyint", True) is True


def test_integer_high_bit():
    with pytest.raises(Uint64OutOfRangeError):
        conv_int("bigint", 1 << 63)


def test_integer_none():
    assert conv_int("integer", None) is None


def test_integer_unsupported_type():
    with pytest.raises(ConvertError):
        conv_int("integer", [1])


def test_float_types():
    assert convert_float("real", 42.42, MAX_REAL) == 42.42
    assert convert_float("double", 42.42, MAX_DOUBLE) == 42.42


def test_custom_float():
    assert convert_float("real", CustomFloat(42.42), MAX_REAL) == 42.42


def test_float_out_of_range():
    too_big = math.nextafter(MAX_REAL, MAX_DOUBLE)
    with pytest.raises(FloatOutOfRangeError):
        convert_float("real", too_big, MAX_REAL)
    with pytest.raises(FloatOutOfRangeError):
        convert_float("real", -too_big, MAX_REAL)


def test_float_as_string():
    assert convert_float("double", "42.42", MAX_DOUBLE) == 42.42


def test_float_invalid_string():
    with pytest.raises(ConvertError):
        convert_float("double", "abc", MAX_DOUBLE)


def test_float_rejects_int():
    with pytest.raises(ConvertError):
        convert_float("double", 42, MAX_DOUBLE)


def test_bool_conversions():
    assert convert_bool("boolean", True) is True
    assert convert_bool("boolean", 0) is False
    assert convert_bool("boolean", 2.5) is True
    assert convert_bool("boolean", "true") is True
    assert convert_bool("boolean", "F") is False
    assert convert_bool("boolean", b"1") is True
    assert convert_bool("boolean", None) is None


def test_bool_invalid_string():
    with pytest.raises(ConvertError):
        convert_bool("boolean", "yes")


def test_time():
    now = datetime.now()
    assert convert_time("timestamp", now) == now


def test_custom_time():
    now = datetime.now()
    custom = CustomTime(now.year, now.month, now.day, now.hour, now.minute, now.second, now.microsecond)
    assert convert_time("timestamp", custom) == now


def test_time_rejects_date():
    with pytest.raises(ConvertError):
        convert_time("timestamp", date(2020, 1, 1))


def test_string():
    assert convert_bytes("string", "Hello World") == "Hello World"


def test_custom_string():
    result = convert_bytes("string", CustomString("Hello World"))
    assert result == "Hello World"
    assert type(result) is str


@pytest.mark.parametrize("ft", ["string", "binary"])
def test_bytes(ft):
    value = b"Hello World"
    assert convert_bytes(ft, value) == value
    custom = convert_bytes(ft, CustomBytes(value))
    assert custom == value
    assert type(custom) is bytes
    assert convert_bytes(ft, bytearray(value)) == value


def test_bytes_unsupported():
    with pytest.raises(ConvertError):
        convert_bytes("binary", 42)


def test_decimal():
    value = Fraction(3, 7)
    assert convert_decimal("decimal", value) is value
    assert convert_decimal("decimal", None) is None
    with pytest.raises(ConvertError):
        convert_decimal("decimal", 1.5)


def test_exp10_and_digits10():
    assert exp10(3) == 1000
    assert digits10(9) == 1
    assert digits10(10) == 2
    assert digits10(0) == 1
    assert digits10(10**40) == 41
    with pytest.raises(ValueError):
        exp10(-1)


def rat_to_dec(x):
    return convert_rat_to_decimal(x, DEC128_DIGITS, DEC128_MIN_EXP, DEC128_MAX_EXP)


def test_rat_to_decimal_integer():
    assert rat_to_dec(Fraction(123)) == (123, 0, 0)


def test_rat_to_decimal_fraction():
    assert rat_to_dec(Fraction(1, 10)) == (1, -1, 0)


def test_rat_to_decimal_zero():
    assert rat_to_dec(Fraction(0)) == (0, 0, 0)


def test_rat_to_decimal_rounding():
    m, exp, df = rat_to_dec(Fraction(1, 3))
    assert (m, exp) == (int("3" * 34), -34)
    assert df == DecimalFlag.NOT_EXACT
    m, exp, df = rat_to_dec(Fraction(2, 3))
    assert (m, exp) == (int("6" * 33 + "7"), -34)
    assert DecimalFlag.NOT_EXACT in df


def test_rat_to_decimal_carry():
    assert convert_rat_to_decimal(Fraction(999), 2, DEC128_MIN_EXP, DEC128_MAX_EXP) == (
        1,
        3,
        DecimalFlag.NOT_EXACT,
    )


def test_rat_to_decimal_overflow():
    _, _, df = rat_to_dec(Fraction(10**6200))
    assert DecimalFlag.OVERFLOW in df


@pytest.mark.parametrize("x", [Fraction(1234567, 1000), Fraction(-5, 8), Fraction(10**20), Fraction(7, 10**30)])
def test_decimal_round_trip(x):
    m, exp, df = rat_to_dec(x)
    assert df == 0
    assert convert_decimal_to_rat(m, exp) == x


def test_decimal_to_rat_none():
    assert convert_decimal_to_rat(None, 3) is None


def test_fixed_to_rat():
    assert convert_fixed_to_rat(12345, 2) == Fraction(12345, 100)
    assert convert_fixed_to_rat(None, 2) is None
    with pytest.raises(ValueError):
        convert_fixed_to_rat(1, -1)


def test_rat_to_fixed():
    assert convert_rat_to_fixed(Fraction(12345, 100), 5, 2) == (12345, 0)
    assert convert_rat_to_fixed(Fraction(-5, 2), 5, 1) == (-25, 0)
    assert convert_rat_to_fixed(Fraction(1, 3), 5, 2) == (33, DecimalFlag.NOT_EXACT)
    assert convert_rat_to_fixed(Fraction(2, 3), 5, 2) == (67, DecimalFlag.NOT_EXACT)


def test_rat_to_fixed_overflow():
    _, df = convert_rat_to_fixed(Fraction(12345, 100), 4, 2)
    assert DecimalFlag.OVERFLOW in df
    with pytest.raises(ValueError):
        convert_rat_to_fixed(Fraction(1), 4, -1)


def test_fixed_round_trip():
    x = Fraction(-987654321, 1000)
    m, df = convert_rat_to_fixed(x, 18, 3)
    assert df == 0
    assert convert_fixed_to_rat(m, 3) == x


def test_secondtime():
    assert convert_secondtime_to_time(1) == datetime(1, 1, 1, tzinfo=timezone.utc)
    t = datetime(2020, 5, 17, 13, 45, 7)
    back = convert_secondtime_to_time(convert_time_to_secondtime(t))
    assert (back.hour, back.minute, back.second) == (13, 45, 7)