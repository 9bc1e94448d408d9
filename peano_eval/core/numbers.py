# peano_eval/core/numbers.py
"""
Named Peano constants and the native -> term builder.

Kept apart from the term classes so the rule table, the reifier and the
tests can import the constants without circular imports.
"""

from __future__ import annotations

from .term import Nat, Succ, ZERO

ONE = Succ(ZERO)
TWO = Succ(ONE)
THREE = Succ(TWO)
FOUR = Succ(THREE)
FIVE = Succ(FOUR)
SIX = Succ(FIVE)
SEVEN = Succ(SIX)
EIGHT = Succ(SEVEN)
NINE = Succ(EIGHT)
TEN = Succ(NINE)

NAMED = (ZERO, ONE, TWO, THREE, FOUR, FIVE, SIX, SEVEN, EIGHT, NINE, TEN)


def num(n: int) -> Nat:
    """Build Peano number n as a pure successor chain."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"num expects an int, got {type(n).__name__}")
    if n < 0:
        raise ValueError("num only supports n>=0")
    if n < len(NAMED):
        return NAMED[n]
    m = TEN
    for _ in range(n - 10):
        m = Succ(m)
    return m
