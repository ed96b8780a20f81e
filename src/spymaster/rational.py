"""Exact rational helpers.

Every belief, coin bias and probability mass in spymaster is a
:class:`fractions.Fraction`.  Fractions are always held in lowest terms with a
positive denominator, are totally ordered and hash by value, so ``2/4`` and
``1/2`` are interchangeable everywhere (including as dictionary keys).

Floats are refused at the boundary: a single inexact value would make the
equaliser's equality tests meaningless.
"""

from __future__ import annotations

import re
from fractions import Fraction
from typing import Union

ZERO = Fraction(0)
ONE = Fraction(1)

RationalLike = Union[Fraction, int, str]

_RATIONAL_RE = re.compile(r"^([+-]?\d+)(?:/([+-]?\d+))?$")


class InvalidProbabilityError(ValueError):
    """Raised when a value that must lie in [0, 1] does not."""


def parse_rational(text: str) -> Fraction:
    """Parse ``"INT"`` or ``"INT/INT"`` into a reduced fraction.

    Raises:
        ValueError: if *text* is not an integer or an integer ratio, or the
            denominator is zero.

    Examples:
        >>> parse_rational("2/4")
        Fraction(1, 2)
        >>> parse_rational("-3/-6")
        Fraction(1, 2)
    """
    match = _RATIONAL_RE.match(text.strip())
    if match is None:
        raise ValueError(f"not an integer or integer ratio: {text!r}")

    numerator = int(match.group(1))
    denominator = int(match.group(2)) if match.group(2) is not None else 1
    if denominator == 0:
        raise ValueError(f"zero denominator: {text!r}")
    return Fraction(numerator, denominator)


def as_rational(value: RationalLike) -> Fraction:
    """Convert *value* to a Fraction without ever going through a float."""
    if isinstance(value, bool):
        raise TypeError("bool is not a rational value")
    if isinstance(value, Fraction):
        return value
    if isinstance(value, int):
        return Fraction(value)
    if isinstance(value, str):
        return parse_rational(value)
    raise TypeError(f"expected Fraction, int or str, got {type(value).__name__}")


def is_probability(value: Fraction) -> bool:
    return ZERO <= value <= ONE


def require_probability(value: RationalLike, name: str = "value") -> Fraction:
    """Return *value* as a Fraction, raising if it is not in [0, 1]."""
    rational = as_rational(value)
    if not is_probability(rational):
        raise InvalidProbabilityError(f"{name} must be between 0 and 1 (got {rational})")
    return rational


def complement(value: Fraction) -> Fraction:
    """Return ``1 - value``."""
    return ONE - value


def compare(left: Fraction, right: Fraction) -> int:
    """Three-way comparison: -1, 0 or 1."""
    return (left > right) - (left < right)
