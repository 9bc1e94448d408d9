"""
Operation surface.

One function per operation, each resolving through a process-wide default
engine. Swap the engine (limits, memoization, tracing) with
set_default_engine(); a fresh default reads its settings from the PEANO_*
environment variables.
"""

from __future__ import annotations

from typing import Any, Optional

from .config import EngineConfig
from .core.term import Bool, Nat
from .engine.machine import Engine
from .reduction.rules import (
    AND_ALSO,
    EQUALS,
    FACT,
    FIB,
    IF,
    LESS_THAN,
    MINUS,
    MOD,
    NOT,
    OR_ELSE,
    PLUS,
    PRED,
    TIMES,
)

_DEFAULT_ENGINE: Optional[Engine] = None


def default_engine() -> Engine:
    """Return the shared engine, creating it from the environment on first use."""
    global _DEFAULT_ENGINE
    if _DEFAULT_ENGINE is None:
        _DEFAULT_ENGINE = Engine(EngineConfig.from_env())
    return _DEFAULT_ENGINE


def set_default_engine(engine: Optional[Engine]) -> None:
    """Install engine as the shared one; None resets to a fresh default."""
    global _DEFAULT_ENGINE
    _DEFAULT_ENGINE = engine


def resolve(op: str, *operands: Any) -> Any:
    return default_engine().resolve(op, *operands)


# ----- conditional selector -----

def if_(cond: Bool, then: Any, otherwise: Any) -> Any:
    """``then`` when cond is TRUE, ``otherwise`` when FALSE."""
    return resolve(IF, cond, then, otherwise)


# ----- comparator -----

def equals(a: Nat, b: Nat) -> Bool:
    return resolve(EQUALS, a, b)


def less_than(a: Nat, b: Nat) -> Bool:
    """Strict a < b. Compose with not_/or_else/equals for the other orders."""
    return resolve(LESS_THAN, a, b)


# ----- boolean algebra -----

def not_(a: Bool) -> Bool:
    return resolve(NOT, a)


def and_also(a: Bool, b: Bool) -> Bool:
    return resolve(AND_ALSO, a, b)


def or_else(a: Bool, b: Bool) -> Bool:
    return resolve(OR_ELSE, a, b)


# ----- arithmetic -----

def plus(a: Nat, b: Nat) -> Nat:
    return resolve(PLUS, a, b)


def pred(a: Nat) -> Nat:
    """Saturating decrement: pred(ZERO) is ZERO."""
    return resolve(PRED, a)


def minus(a: Nat, b: Nat) -> Nat:
    """Saturating subtraction, floors at ZERO."""
    return resolve(MINUS, a, b)


def times(a: Nat, b: Nat) -> Nat:
    return resolve(TIMES, a, b)


def mod(a: Nat, b: Nat) -> Nat:
    """
    Remainder by repeated subtraction.

    A ZERO divisor raises ZeroDivisorError by default. With the guard
    switched off (EngineConfig.guard_zero_divisor=False) the rule recurses
    on an unchanged operand and the query ends in DerivationDepthExceeded.
    """
    return resolve(MOD, a, b)


def fact(a: Nat) -> Nat:
    """Factorial. The result grows very fast; budget depth accordingly."""
    return resolve(FACT, a)


def fib(a: Nat) -> Nat:
    """Fibonacci with fib(ZERO) = ZERO and fib(ONE) = fib(TWO) = ONE."""
    return resolve(FIB, a)
