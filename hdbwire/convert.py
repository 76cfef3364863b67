"""Conversion of Python values into the representations used for hdb fields."""

from __future__ import annotations

import math
import re
import sys
from datetime import datetime, time, timedelta, timezone
from enum import IntFlag
from fractions import Fraction
from typing import Any

# Integer field limits.
MIN_TINYINT = 0
MAX_TINYINT = (1 << 8) - 1
MIN_SMALLINT = -(1 << 15)
MAX_SMALLINT = (1 << 15) - 1
MIN_INTEGER = -(1 << 31)
MAX_INTEGER = (1 << 31) - 1
MIN_BIGINT = -(1 << 63)
MAX_BIGINT = (1 << 63) - 1

# Float field limits.
MAX_REAL = 3.4028234663852886e38
MAX_DOUBLE = sys.float_info.max

# Decimal128 limits.
DEC128_DIGITS = 34
DEC128_MIN_EXP = -6176
DEC128_MAX_EXP = 6111

# Maximal fixed decimal precision.
MAX_FIXED_PRECISION = 38

_UINT64_HIGH_BIT = 1 << 63
_INT_RE = re.compile(r"[+-]?[0-9]+")
_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_LG10 = math.log2(10)


class ConvertError(Exception):
    """A Python value cannot be converted into the requested hdb field type."""

    def __init__(self, ft: Any, v: Any, err: BaseException | None = None) -> None:
        super().__init__(ft, v, err)
        self.ft = ft
        self.v = v
        self.err = err

    def __str__(self) -> str:
        return f"unsupported {self.ft} conversion: {type(self.v).__name__} {self.v}"


class Uint64OutOfRangeError(ConvertError):
    """An unsigned value with the high bit of a 64 bit word set is not supported."""


class IntegerOutOfRangeError(ConvertError):
    """An integer exceeds the range of the hdb integer field."""


class FloatOutOfRangeError(ConvertError):
    """A float exceeds the range of the hdb float field."""


class DecimalOutOfRangeError(ConvertError):
    """A rational number exceeds the range of the hdb decimal field."""


class DecimalFlag(IntFlag):
    """Flags reporting the accuracy of a decimal conversion."""

    NOT_EXACT = 1
    OVERFLOW = 2
    UNDERFLOW = 4


def _as_text(v: Any) -> str | None:
    if isinstance(v, str):
        return str(v)
    if isinstance(v, (bytes, bytearray, memoryview)):
        return bytes(v).decode("utf-8", "surrogateescape")
    return None


def convert_bool(ft: Any, v: Any) -> bool | None:
    """Convert v into a boolean."""
    if v is None:
        return None
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return v != 0
    s = _as_text(v)
    if s is None:
        raise ConvertError(ft, v)
    if s in _TRUE_STRINGS:
        return True
    if s in _FALSE_STRINGS:
        return False
    raise ConvertError(ft, v, ValueError(f"invalid boolean syntax: {s!r}"))


def _check_int64(ft: Any, v: Any, i: int) -> None:
    if not MIN_BIGINT <= i <= MAX_BIGINT:
        raise ConvertError(ft, v, ValueError(f"value {i} out of 64 bit range"))


def _check_range(ft: Any, v: Any, i: int, min_value: int, max_value: int) -> None:
    if not min_value <= i <= max_value:
        raise IntegerOutOfRangeError(ft, v)


def convert_integer(ft: Any, v: Any, min_value: int, max_value: int) -> Any:
    """Convert v into an integer within [min_value, max_value]; booleans pass unchanged."""
    if v is None:
        return None
    if isinstance(v, bool):
        return v
    if isinstance(v, int):
        if v >= _UINT64_HIGH_BIT:
            raise Uint64OutOfRangeError(ft, v)
        _check_range(ft, v, v, min_value, max_value)
        return v
    if isinstance(v, float):
        if not math.isfinite(v) or not v.is_integer():
            raise ConvertError(ft, v)
        i = int(v)
        _check_int64(ft, v, i)
        _check_range(ft, v, i, min_value, max_value)
        return i
    s = _as_text(v)
    if s is None:
        raise ConvertError(ft, v)
    if not _INT_RE.fullmatch(s):
        raise ConvertError(ft, v, ValueError(f"invalid integer syntax: {s!r}"))
    i = int(s)
    _check_int64(ft, v, i)
    _check_range(ft, v, i, min_value, max_value)
    return i


def convert_float(ft: Any, v: Any, max_value: float) -> float | None:
    """Convert v into a float whose absolute value does not exceed max_value."""
    if v is None:
        return None
    if isinstance(v, float):
        if abs(v) > max_value:
            raise FloatOutOfRangeError(ft, v)
        return v
    s = _as_text(v)
    if s is None:
        raise ConvertError(ft, v)
    if s != s.strip() or "_" in s:
        raise ConvertError(ft, v, ValueError(f"invalid float syntax: {s!r}"))
    try:
        f = float(s)
    except ValueError as exc:
        raise ConvertError(ft, v, exc) from exc
    if math.isinf(f) and "inf" not in s.lower():
        raise ConvertError(ft, v, ValueError(f"value out of range: {s!r}"))
    if abs(f) > max_value:
        raise FloatOutOfRangeError(ft, v)
    return f


def convert_time(ft: Any, v: Any) -> datetime | None:
    """Accept datetime values (including subclasses) unchanged."""
    if v is None:
        return None
    if isinstance(v, datetime):
        return v
    raise ConvertError(ft, v)


def convert_decimal(ft: Any, v: Any) -> Fraction | None:
    """Accept Fraction values unchanged; range checks happen on encoding."""
    if v is None:
        return None
    if isinstance(v, Fraction):
        return v
    raise ConvertError(ft, v)


def convert_bytes(ft: Any, v: Any) -> str | bytes | None:
    """Convert v into a string or a byte string."""
    if v is None:
        return None
    if type(v) in (str, bytes):
        return v
    if isinstance(v, str):
        return str(v)
    if isinstance(v, (bytes, bytearray, memoryview)):
        return bytes(v)
    raise ConvertError(ft, v)


def exp10(n: int) -> int:
    """Return 10 to the power of n (n >= 0)."""
    if n < 0:
        raise ValueError(f"invalid exponent {n}")
    return 10**n


def digits10(p: int) -> int:
    """Return the number of decimal digits of abs(p); 1 for zero."""
    p = abs(p)
    i = max(1, int(p.bit_length() / _LG10))
    while p >= exp10(i):
        i += 1
    return i


def convert_decimal_to_rat(m: int | None, exp: int) -> Fraction | None:
    """Return the rational number m * 10**exp."""
    if m is None:
        return None
    if exp < 0:
        return Fraction(m, exp10(-exp))
    return Fraction(m * exp10(exp))


def _div_round(a: int, b: int) -> tuple[int, bool]:
    """Divide non-negative a by positive b rounding half up; report inexactness."""
    q, rest = divmod(a, b)
    if rest == 0:
        return q, False
    if 2 * rest >= b:
        q += 1
    return q, True


def convert_rat_to_decimal(
    x: Fraction, digits: int, min_exp: int, max_exp: int
) -> tuple[int, int, DecimalFlag]:
    """Convert x into (mantissa, exponent, flags) with at most digits mantissa digits."""
    x = Fraction(x)
    if x == 0:
        return 0, 0, DecimalFlag(0)

    neg = x < 0
    a, b = abs(x.numerator), x.denominator

    exp = shift = 0
    if b == 1:
        exp = digits10(a) - 1
    else:
        shift = digits10(a) - digits10(b)
        if shift < 0:
            a *= exp10(-shift)
        elif shift > 0:
            b *= exp10(shift)
        exp = shift - 1 if a < b else shift

    df = DecimalFlag(0)
    if exp < min_exp:
        df |= DecimalFlag.UNDERFLOW
        exp = exp - digits + 1
    else:
        exp = max(exp - digits + 1, min_exp)

    if exp > max_exp:
        df |= DecimalFlag.OVERFLOW

    shift = exp - shift
    if shift < 0:
        a *= exp10(-shift)
    elif shift > 0:
        b *= exp10(shift)

    q, rest = divmod(a, b)
    m = q
    if rest:
        df |= DecimalFlag.NOT_EXACT
        if 2 * rest >= b:
            m += 1
            if m == exp10(digits):
                step = min(digits, max_exp - exp)
                if step < 1:
                    df |= DecimalFlag.OVERFLOW
                    step = 1
                m = exp10(digits - step)
                exp += step

    while exp < max_exp:
        q, r = divmod(m, 10)
        if r:
            break
        m = q
        exp += 1

    return (-m if neg else m), exp, df


def convert_fixed_to_rat(m: int | None, scale: int) -> Fraction | None:
    """Return the rational number m / 10**scale."""
    if m is None:
        return None
    if scale < 0:
        raise ValueError(f"fixed: invalid scale: {scale}")
    return Fraction(m, exp10(scale))


def convert_rat_to_fixed(r: Fraction, prec: int, scale: int) -> tuple[int, DecimalFlag]:
    """Convert r into a fixed decimal mantissa with scale digits after the point."""
    if scale < 0:
        raise ValueError(f"fixed: invalid scale: {scale}")
    r = Fraction(r)
    c = Fraction(r.numerator * exp10(scale), r.denominator)
    q, inexact = _div_round(abs(c.numerator), c.denominator)
    m = -q if c.numerator < 0 else q

    df = DecimalFlag(0)
    if inexact:
        df |= DecimalFlag.NOT_EXACT
    limit = exp10(prec)
    if m <= -limit or m >= limit:
        df |= DecimalFlag.OVERFLOW
    return m, df


_SECONDTIME_BASE = datetime(1, 1, 1, tzinfo=timezone.utc)


def convert_secondtime_to_time(secondtime: int) -> datetime:
    """Return the time of day encoded by a secondtime value, on 0001-01-01 UTC."""
    return _SECONDTIME_BASE + timedelta(seconds=secondtime - 1)


def convert_time_to_secondtime(t: datetime | time) -> int:
    """Return the secondtime value of the time of day of t."""
    return (t.hour * 60 + t.minute) * 60 + t.second + 1