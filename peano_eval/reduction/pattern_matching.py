# peano_eval/reduction/pattern_matching.py
"""
Operand patterns for rule clauses.

A pattern describes the shape a single operand must have for a clause to
fire. Patterns only ever look at the outermost one or two layers of a term,
so matching is shallow and never recurses into deep naturals.

    ZeroP            matches Zero
    SuccP(p)         matches Succ(x) when p matches x
    NatP(name)       matches any natural, binds it
    TrueP / FalseP   match the boolean constants
    BoolP(name)      matches any boolean, binds it
    AnyP(name)       matches anything (terms or opaque labels), binds it
    AsP(name, p)     matches what p matches and binds the whole operand
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from ..core.term import Bool, FalseTerm, Nat, Succ, TrueTerm, Zero


@dataclass(frozen=True)
class ZeroP:
    pass


@dataclass(frozen=True)
class SuccP:
    inner: "Pattern"


@dataclass(frozen=True)
class NatP:
    name: Optional[str] = None


@dataclass(frozen=True)
class TrueP:
    pass


@dataclass(frozen=True)
class FalseP:
    pass


@dataclass(frozen=True)
class BoolP:
    name: Optional[str] = None


@dataclass(frozen=True)
class AnyP:
    name: Optional[str] = None


@dataclass(frozen=True)
class AsP:
    name: str
    pattern: "Pattern"


Pattern = Union[ZeroP, SuccP, NatP, TrueP, FalseP, BoolP, AnyP, AsP]


# Sentinel for no match (not a valid binding dict, so unambiguous)
class _NoMatch:
    """Sentinel indicating pattern did not match."""
    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_MATCH"


NO_MATCH = _NoMatch()


def _bind(env: dict, name: Optional[str], value: Any) -> bool:
    if name is None:
        return True
    if name in env:
        # Same variable bound twice - must be the same value
        return env[name] == value
    env[name] = value
    return True


def match_into(pattern: Pattern, value: Any, env: dict) -> bool:
    """Match one operand against one pattern, filling env with bindings."""
    if isinstance(pattern, ZeroP):
        return isinstance(value, Zero)
    if isinstance(pattern, SuccP):
        return isinstance(value, Succ) and match_into(pattern.inner, value.inner, env)
    if isinstance(pattern, NatP):
        return isinstance(value, Nat) and _bind(env, pattern.name, value)
    if isinstance(pattern, TrueP):
        return isinstance(value, TrueTerm)
    if isinstance(pattern, FalseP):
        return isinstance(value, FalseTerm)
    if isinstance(pattern, BoolP):
        return isinstance(value, Bool) and _bind(env, pattern.name, value)
    if isinstance(pattern, AnyP):
        return _bind(env, pattern.name, value)
    if isinstance(pattern, AsP):
        return match_into(pattern.pattern, value, env) and _bind(env, pattern.name, value)
    raise TypeError(f"Invalid pattern type: {type(pattern).__name__}")


def match(patterns: tuple, operands: tuple) -> Union[dict, _NoMatch]:
    """
    Match a clause's operand patterns against a query's operands.

    Returns:
        Dict of bindings {"name": value} if every operand matches,
        NO_MATCH otherwise.
    """
    if len(patterns) != len(operands):
        return NO_MATCH
    env: dict = {}
    for p, v in zip(patterns, operands):
        if not match_into(p, v, env):
            return NO_MATCH
    return env


def pattern_names(pattern: Pattern) -> set:
    """Variable names a pattern binds."""
    if isinstance(pattern, SuccP):
        return pattern_names(pattern.inner)
    if isinstance(pattern, AsP):
        return {pattern.name} | pattern_names(pattern.pattern)
    name = getattr(pattern, "name", None)
    return {name} if name else set()


__all__ = [
    "ZeroP",
    "SuccP",
    "NatP",
    "TrueP",
    "FalseP",
    "BoolP",
    "AnyP",
    "AsP",
    "Pattern",
    "NO_MATCH",
    "match",
    "match_into",
    "pattern_names",
]
