"""
FizzBuzz, played entirely by rule resolution.

Only the final numeral crosses into native values, and only when the
classifier decided on the number itself:

    mod3   = Mod(n, THREE)          mod5 = Mod(n, FIVE)
    fizz   = Equals(mod3, ZERO)     buzz = Equals(mod5, ZERO)
    both   = AndAlso(fizz, buzz)
    r1     = If(fizz, "Fizz", n)
    r2     = If(buzz, "Buzz", r1)
    result = If(both, "FizzBuzz", r2)
"""

from __future__ import annotations

from typing import List, Optional

from .core.numbers import FIVE, THREE
from .core.term import ZERO, Nat, Term
from .engine.machine import Engine
from .ops import default_engine
from .reduction.rules import AND_ALSO, EQUALS, IF, MOD
from .reify import reify

FIZZ = "Fizz"
BUZZ = "Buzz"
FIZZBUZZ = "FizzBuzz"


def classify(n: Nat, engine: Optional[Engine] = None):
    """The selected label, or n itself when neither 3 nor 5 divides it."""
    eng = engine if engine is not None else default_engine()
    should_fizz = eng.resolve(EQUALS, eng.resolve(MOD, n, THREE), ZERO)
    should_buzz = eng.resolve(EQUALS, eng.resolve(MOD, n, FIVE), ZERO)
    should_fizzbuzz = eng.resolve(AND_ALSO, should_fizz, should_buzz)
    did_fizz = eng.resolve(IF, should_fizz, FIZZ, n)
    did_buzz = eng.resolve(IF, should_buzz, BUZZ, did_fizz)
    return eng.resolve(IF, should_fizzbuzz, FIZZBUZZ, did_buzz)


def show(choice) -> str:
    if isinstance(choice, Term):
        return str(reify(choice))
    return choice


def fizzbuzz(n: Nat, engine: Optional[Engine] = None) -> str:
    return show(classify(n, engine))


def fizzbuzz_all(terms, engine: Optional[Engine] = None) -> List[str]:
    return [fizzbuzz(t, engine) for t in terms]
