"""Precision model for exact rational geometry.

Every value handled by ratgeom is a :class:`fractions.Fraction`.  A
precision setting is the pair ``(oom, rm)``: ``oom`` is the order of
magnitude of the smallest increment kept when a value is rounded
(``-3`` keeps thousandths) and ``rm`` is a :class:`RoundingMode`.

All equality, zero and sign tests in the kernel go through
:func:`round_to`, so the same two objects may compare equal at a
coarse ``oom`` and different at a fine one.

Square roots are rounded exactly with integer arithmetic.
Transcendental values (pi, sine, cosine, arc cosine) come from
``mpmath`` evaluated with a few guard digits beyond the requested
precision and are then rounded like any other value.
"""

from __future__ import annotations

import decimal
import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from fractions import Fraction
from numbers import Rational
from typing import Dict, Tuple

import mpmath as mpm

from ratgeom.errors import PrecisionError

log = logging.getLogger(__name__)

_TEN = Fraction(10)


class RoundingMode(str, Enum):
    """Rounding policies, named as in :mod:`decimal`."""

    HALF_UP = decimal.ROUND_HALF_UP
    HALF_DOWN = decimal.ROUND_HALF_DOWN
    HALF_EVEN = decimal.ROUND_HALF_EVEN
    UP = decimal.ROUND_UP
    DOWN = decimal.ROUND_DOWN
    CEILING = decimal.ROUND_CEILING
    FLOOR = decimal.ROUND_FLOOR
    UNNECESSARY = "ROUND_UNNECESSARY"

    @classmethod
    def parse(cls, value) -> "RoundingMode":
        """Accept a member, its name (``"HALF_UP"``) or its decimal value."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
            for member in cls:
                if member.value == key:
                    return member
        raise ValueError(f"unknown rounding mode: {value!r}")


HALF_UP = RoundingMode.HALF_UP


def to_rational(x) -> Fraction:
    """Convert a numeric value to an exact :class:`Fraction`.

    Floats are converted through their shortest ``repr`` so that
    ``0.6`` becomes ``3/5`` rather than the nearest binary fraction.
    ``mpmath.mpf`` values are converted exactly.
    """

    if isinstance(x, Fraction):
        return x
    if isinstance(x, bool):
        raise TypeError("booleans are not coordinates")
    if isinstance(x, int):
        return Fraction(x)
    if isinstance(x, float):
        if not math.isfinite(x):
            raise PrecisionError(f"non-finite value {x!r} has no rational form")
        return Fraction(repr(x))
    if isinstance(x, (str, decimal.Decimal, Rational)):
        return Fraction(x)
    if isinstance(x, mpm.mpf):
        if not mpm.isfinite(x):
            raise PrecisionError(f"non-finite value {x!r} has no rational form")
        man, exp = x.man_exp
        return Fraction(int(man)) * Fraction(2) ** int(exp)
    raise TypeError(f"cannot use {type(x).__name__} as a rational value")


def check_oom(oom) -> int:
    """Validate an order of magnitude and return it."""

    if isinstance(oom, bool) or not isinstance(oom, int):
        raise PrecisionError(f"oom must be an integer, got {oom!r}")
    from ratgeom.config import get_settings  # config imports this module
    floor = get_settings().min_oom
    if oom < floor:
        raise PrecisionError(
            f"oom {oom} is finer than the supported limit {floor}",
            {"oom": oom, "min_oom": floor})
    return oom


def _round_ratio(n: int, d: int, rm: RoundingMode) -> int:
    """Round ``n / d`` (``d > 0``) to an integer under ``rm``."""

    q, r = divmod(n, d)
    if r == 0:
        return q
    if rm is RoundingMode.FLOOR:
        return q
    if rm is RoundingMode.CEILING:
        return q + 1
    if rm is RoundingMode.DOWN:
        return q if n > 0 else q + 1
    if rm is RoundingMode.UP:
        return q + 1 if n > 0 else q
    if rm is RoundingMode.UNNECESSARY:
        raise PrecisionError(
            f"rounding {Fraction(n, d)} is necessary but forbidden")
    twice = 2 * r
    if twice < d:
        return q
    if twice > d:
        return q + 1
    # exact tie between q and q + 1
    if rm is RoundingMode.HALF_UP:
        return q + 1 if n > 0 else q
    if rm is RoundingMode.HALF_DOWN:
        return q if n > 0 else q + 1
    if rm is RoundingMode.HALF_EVEN:
        return q if q % 2 == 0 else q + 1
    raise PrecisionError(f"unsupported rounding mode {rm!r}")


def round_to(x, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
    """Round ``x`` to a multiple of ``10**oom`` using ``rm``."""

    check_oom(oom)
    x = to_rational(x)
    scale = _TEN ** -oom
    scaled = x * scale
    return Fraction(_round_ratio(scaled.numerator, scaled.denominator,
                                 RoundingMode.parse(rm))) / scale


def is_zero(x, oom: int, rm: RoundingMode = HALF_UP) -> bool:
    """``True`` if ``x`` rounds to zero at ``(oom, rm)``."""

    return round_to(x, oom, rm) == 0


def sign(x, oom: int, rm: RoundingMode = HALF_UP) -> int:
    """Sign of ``x`` after rounding: -1, 0 or 1."""

    v = round_to(x, oom, rm)
    return (v > 0) - (v < 0)


def compare(a, b, oom: int, rm: RoundingMode = HALF_UP) -> int:
    """Compare ``a`` and ``b`` at precision; returns -1, 0 or 1."""

    return sign(to_rational(a) - to_rational(b), oom, rm)


def sqrt_exact(x) -> Fraction | None:
    """Return the exact square root of ``x`` if it is rational."""

    x = to_rational(x)
    if x < 0:
        return None
    rn = math.isqrt(x.numerator)
    rd = math.isqrt(x.denominator)
    if rn * rn == x.numerator and rd * rd == x.denominator:
        return Fraction(rn, rd)
    return None


def sqrt(x, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
    """Square root of ``x`` correctly rounded to ``(oom, rm)``."""

    check_oom(oom)
    x = to_rational(x)
    rm = RoundingMode.parse(rm)
    if x < 0:
        raise PrecisionError(f"square root of negative value {x}")
    scale = _TEN ** -oom
    y = x * scale * scale
    n, d = y.numerator, y.denominator
    s = math.isqrt(n // d)
    if s * s * d == n:
        return Fraction(s) / scale
    # sqrt(y) lies strictly between s and s + 1
    if rm in (RoundingMode.FLOOR, RoundingMode.DOWN):
        r = s
    elif rm in (RoundingMode.CEILING, RoundingMode.UP):
        r = s + 1
    elif rm is RoundingMode.UNNECESSARY:
        raise PrecisionError(f"square root of {x} is not exact at oom {oom}")
    else:
        lhs = 4 * n
        rhs = (2 * s + 1) ** 2 * d
        if lhs < rhs:
            r = s
        elif lhs > rhs:
            r = s + 1
        elif rm is RoundingMode.HALF_DOWN:
            r = s
        elif rm is RoundingMode.HALF_EVEN:
            r = s if s % 2 == 0 else s + 1
        else:
            r = s + 1
    return Fraction(r) / scale


def _digits(oom: int, guard: int) -> int:
    return max(-oom, 0) + guard + 2


def _mpf(x: Fraction):
    return mpm.mpf(x.numerator) / x.denominator


def cos_sin(theta, oom: int, rm: RoundingMode = HALF_UP,
            guard: int = 4) -> Tuple[Fraction, Fraction]:
    """Return ``(cos(theta), sin(theta))`` rounded to ``(oom, rm)``."""

    check_oom(oom)
    theta = to_rational(theta)
    with mpm.workdps(_digits(oom, guard) + len(str(abs(int(theta))))):
        t = _mpf(theta)
        c = to_rational(mpm.cos(t))
        s = to_rational(mpm.sin(t))
    return round_to(c, oom, rm), round_to(s, oom, rm)


def acos(x, oom: int, rm: RoundingMode = HALF_UP, guard: int = 4) -> Fraction:
    """Arc cosine of ``x`` (clamped to ``[-1, 1]``) rounded to ``(oom, rm)``."""

    check_oom(oom)
    x = min(max(to_rational(x), Fraction(-1)), Fraction(1))
    with mpm.workdps(_digits(oom, guard)):
        value = to_rational(mpm.acos(_mpf(x)))
    return round_to(value, oom, rm)


def format_rational(x) -> str:
    """Plain decimal text for ``x``; ``n/d`` when it does not terminate."""

    x = to_rational(x)
    d = x.denominator
    twos = fives = 0
    while d % 2 == 0:
        d //= 2
        twos += 1
    while d % 5 == 0:
        d //= 5
        fives += 1
    if d != 1:
        return f"{x.numerator}/{x.denominator}"
    places = max(twos, fives)
    if places == 0:
        return str(x.numerator)
    digits = abs(x.numerator) * 10 ** places // x.denominator
    whole, frac = divmod(digits, 10 ** places)
    text = f"{whole}.{frac:0{places}d}".rstrip("0")
    return "-" + text if x < 0 else text


class PiProvider:
    """Memoised source of pi at a caller chosen precision.

    The kernel never embeds a value of pi; operations that need it
    (rotation, angle normalisation) take a provider and ask it for pi
    at the precision they are working to.
    """

    def __init__(self, guard_digits: int | None = None):
        if guard_digits is None:
            from ratgeom.config import get_settings
            guard_digits = get_settings().pi_guard_digits
        self.guard_digits = guard_digits
        self._cache: Dict[Tuple[int, RoundingMode], Fraction] = {}

    def get_pi(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        """Pi rounded to ``(oom, rm)``."""

        check_oom(oom)
        rm = RoundingMode.parse(rm)
        key = (oom, rm)
        value = self._cache.get(key)
        if value is None:
            log.debug("computing pi at oom=%d rm=%s", oom, rm.name)
            with mpm.workdps(_digits(oom, self.guard_digits)):
                exact = to_rational(+mpm.pi)
            value = round_to(exact, oom, rm)
            self._cache[key] = value
        return value

    def get_two_pi(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        """Twice the value returned by :meth:`get_pi`."""

        return 2 * self.get_pi(oom, rm)

    def __repr__(self):
        return f"PiProvider(guard_digits={self.guard_digits}, cached={len(self._cache)})"


@dataclass(frozen=True)
class NumericContext:
    """A precision setting bundled with a pi provider.

    Passed explicitly wherever a transcendental constant is needed; it
    can stand in for a :class:`PiProvider`.
    """

    oom: int = -3
    rm: RoundingMode = HALF_UP
    pi_provider: PiProvider = field(default_factory=PiProvider, compare=False)

    def __post_init__(self):
        check_oom(self.oom)
        object.__setattr__(self, "rm", RoundingMode.parse(self.rm))

    @classmethod
    def default(cls) -> "NumericContext":
        """Context built from the configured defaults."""

        from ratgeom.config import get_settings
        settings = get_settings()
        return cls(settings.oom, settings.rm)

    def finer(self, digits: int = 2) -> "NumericContext":
        """Same context ``digits`` orders of magnitude finer."""

        return replace(self, oom=self.oom - digits)

    def round(self, x) -> Fraction:
        return round_to(x, self.oom, self.rm)

    def is_zero(self, x) -> bool:
        return is_zero(x, self.oom, self.rm)

    def sqrt(self, x) -> Fraction:
        return sqrt(x, self.oom, self.rm)

    def pi(self) -> Fraction:
        return self.pi_provider.get_pi(self.oom, self.rm)

    def get_pi(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return self.pi_provider.get_pi(oom, rm)

    def get_two_pi(self, oom: int, rm: RoundingMode = HALF_UP) -> Fraction:
        return self.pi_provider.get_two_pi(oom, rm)


__all__ = [
    "HALF_UP",
    "NumericContext",
    "PiProvider",
    "RoundingMode",
    "acos",
    "check_oom",
    "compare",
    "cos_sin",
    "format_rational",
    "is_zero",
    "round_to",
    "sign",
    "sqrt",
    "sqrt_exact",
    "to_rational",
]
