# peano_eval/reify.py
"""
Reifier: the one crossing from terms to native Python values.

    naturals -> int   (number of Succ layers)
    booleans -> bool
"""

from __future__ import annotations

from typing import Union

from .core.term import FalseTerm, Nat, Succ, Term, TrueTerm, Zero


def reify(term: Term) -> Union[int, bool]:
    """
    Interpret a fully resolved term as a native value.

    Raises:
        TypeError: term is not a natural or boolean term.
    """
    if isinstance(term, TrueTerm):
        return True
    if isinstance(term, FalseTerm):
        return False
    if not isinstance(term, Nat):
        raise TypeError(f"reify expects a natural or boolean term, got {type(term).__name__}")
    count = 0
    cur = term
    while isinstance(cur, Succ):
        count += 1
        cur = cur.inner
    if not isinstance(cur, Zero):
        raise TypeError(f"reify expects a natural or boolean term, got {type(cur).__name__}")
    return count


# The operation surface calls this ``eval``; the builtin keeps its name.
eval_term = reify
