# peano_eval/__init__.py
"""
peano_eval public API surface.

Naturals and booleans are nested terms; arithmetic and logic are computed
by ordered structural rules only. Native values appear at one place, the
reifier.

    - Terms: Term, Nat, Zero, Succ, Bool, TrueTerm, FalseTerm,
             ZERO, TRUE, FALSE, succ, ONE..TEN, num
    - Operations: if_, equals, less_than, not_, and_also, or_else,
                  plus, pred, minus, times, mod, fact, fib, resolve
    - Reifier: reify (alias eval_term)
    - Engine: Engine, EngineConfig, default_engine, set_default_engine
    - Errors: EvaluationError and subclasses
"""

from __future__ import annotations

from .core.term import (
    Term,
    Nat,
    Zero,
    Succ,
    Bool,
    TrueTerm,
    FalseTerm,
    ZERO,
    TRUE,
    FALSE,
    succ,
    is_nat,
    is_bool,
)
from .core.numbers import (
    ONE,
    TWO,
    THREE,
    FOUR,
    FIVE,
    SIX,
    SEVEN,
    EIGHT,
    NINE,
    TEN,
    num,
)
from .config import EngineConfig
from .engine.machine import Engine
from .errors import (
    EvaluationError,
    ConfigError,
    UnknownOperationError,
    ArityError,
    IllTypedQueryError,
    ZeroDivisorError,
    ResourceExhausted,
    DerivationDepthExceeded,
    StepBudgetExceeded,
)
from .ops import (
    default_engine,
    set_default_engine,
    resolve,
    if_,
    equals,
    less_than,
    not_,
    and_also,
    or_else,
    plus,
    pred,
    minus,
    times,
    mod,
    fact,
    fib,
)
from .reduction.rules import OPERATIONS
from .reify import reify, eval_term

__version__ = "0.1.0"

__all__ = [
    # terms
    "Term",
    "Nat",
    "Zero",
    "Succ",
    "Bool",
    "TrueTerm",
    "FalseTerm",
    "ZERO",
    "TRUE",
    "FALSE",
    "succ",
    "is_nat",
    "is_bool",
    "ONE",
    "TWO",
    "THREE",
    "FOUR",
    "FIVE",
    "SIX",
    "SEVEN",
    "EIGHT",
    "NINE",
    "TEN",
    "num",

    # engine
    "Engine",
    "EngineConfig",
    "OPERATIONS",
    "default_engine",
    "set_default_engine",

    # operations
    "resolve",
    "if_",
    "equals",
    "less_than",
    "not_",
    "and_also",
    "or_else",
    "plus",
    "pred",
    "minus",
    "times",
    "mod",
    "fact",
    "fib",

    # reifier
    "reify",
    "eval_term",

    # errors
    "EvaluationError",
    "ConfigError",
    "UnknownOperationError",
    "ArityError",
    "IllTypedQueryError",
    "ZeroDivisorError",
    "ResourceExhausted",
    "DerivationDepthExceeded",
    "StepBudgetExceeded",
]
