# peano_eval/reduction/rules.py
"""
The rule table: every operation as an ordered list of clauses.

A clause is (id, operation, operand patterns, body). For a query the
engine tries the operation's clauses in table order and fires the first
whose patterns match, so base cases are listed before the recursive case
that would otherwise also cover them.

Bodies are templates, not Python callables:

    Ref(name)          a variable bound by the patterns
    Lit(term)          a constant term
    Wrap(t)            Succ(<t>)
    Call(op, args)     a nested query, resolved by the engine

Nothing in here computes. The table is data; engine.machine walks it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from ..core.numbers import ONE, TWO
from ..core.term import FALSE, TRUE, ZERO
from .pattern_matching import (
    AnyP,
    AsP,
    BoolP,
    FalseP,
    NatP,
    Pattern,
    SuccP,
    TrueP,
    ZeroP,
    pattern_names,
)

# ---------- operation names ----------

IF = "If"
EQUALS = "Equals"
LESS_THAN = "LessThan"
NOT = "Not"
AND_ALSO = "AndAlso"
OR_ELSE = "OrElse"
PLUS = "Plus"
PRED = "Pred"
MINUS = "Minus"
TIMES = "Times"
FACT = "Fact"
MOD = "Mod"
FIB = "Fib"


# ---------- body templates ----------


@dataclass(frozen=True)
class Ref:
    name: str


@dataclass(frozen=True)
class Lit:
    value: Any


@dataclass(frozen=True)
class Wrap:
    inner: "Template"


@dataclass(frozen=True)
class Call:
    op: str
    args: Tuple["Template", ...]


Template = Union[Ref, Lit, Wrap, Call]


@dataclass(frozen=True)
class Rule:
    id: str
    op: str
    patterns: Tuple[Pattern, ...]
    body: Template

    @property
    def arity(self) -> int:
        return len(self.patterns)


# ---------- terse constructors for the table below ----------

Z = ZeroP()
T = TrueP()
F = FalseP()


def S(p: Pattern) -> SuccP:
    return SuccP(p)


def n(name: Optional[str] = None) -> NatP:
    return NatP(name)


def v(name: str) -> Ref:
    return Ref(name)


def succ_of(t: Template) -> Wrap:
    return Wrap(t)


def call(op: str, *args: Template) -> Call:
    return Call(op, tuple(args))


# ---------------------------------------------------------------------------
# The table
# ---------------------------------------------------------------------------

RULES: List[Rule] = [
    # ----- conditional selector -----
    Rule("if.true", IF, (T, AnyP("then"), AnyP("else")), v("then")),
    Rule("if.false", IF, (F, AnyP("then"), AnyP("else")), v("else")),

    # ----- comparator -----
    Rule("equals.zero_zero", EQUALS, (Z, Z), Lit(TRUE)),
    Rule("equals.zero_succ", EQUALS, (Z, S(n())), Lit(FALSE)),
    Rule("equals.succ_zero", EQUALS, (S(n()), Z), Lit(FALSE)),
    Rule("equals.succ_succ", EQUALS, (S(n("a")), S(n("b"))),
         call(EQUALS, v("a"), v("b"))),

    Rule("less_than.zero_zero", LESS_THAN, (Z, Z), Lit(FALSE)),
    Rule("less_than.zero_succ", LESS_THAN, (Z, S(n())), Lit(TRUE)),
    Rule("less_than.succ_zero", LESS_THAN, (S(n()), Z), Lit(FALSE)),
    Rule("less_than.succ_succ", LESS_THAN, (S(n("a")), S(n("b"))),
         call(LESS_THAN, v("a"), v("b"))),

    # ----- boolean algebra -----
    Rule("not.true", NOT, (T,), Lit(FALSE)),
    Rule("not.false", NOT, (F,), Lit(TRUE)),

    # the right operand is resolved and typed, never inspected
    Rule("and_also.false", AND_ALSO, (F, BoolP()), Lit(FALSE)),
    Rule("and_also.true_false", AND_ALSO, (T, F), Lit(FALSE)),
    Rule("and_also.true_true", AND_ALSO, (T, T), Lit(TRUE)),

    Rule("or_else.true", OR_ELSE, (T, BoolP()), Lit(TRUE)),
    Rule("or_else.false_false", OR_ELSE, (F, F), Lit(FALSE)),
    Rule("or_else.false_true", OR_ELSE, (F, T), Lit(TRUE)),

    # ----- arithmetic -----
    # 0 + b -> b ; succ(a) + b -> succ(a + b)
    Rule("plus.zero", PLUS, (Z, n("b")), v("b")),
    Rule("plus.succ", PLUS, (S(n("a")), n("b")),
         succ_of(call(PLUS, v("a"), v("b")))),

    # saturating decrement
    Rule("pred.zero", PRED, (Z,), Lit(ZERO)),
    Rule("pred.succ", PRED, (S(n("a")),), v("a")),

    # a - 0 -> a ; a - succ(b) -> pred(a - b)
    Rule("minus.zero", MINUS, (n("a"), Z), v("a")),
    Rule("minus.succ", MINUS, (n("a"), S(n("b"))),
         call(PRED, call(MINUS, v("a"), v("b")))),

    # 0 * b -> 0 ; succ(a) * b -> (a * b) + b
    Rule("times.zero", TIMES, (Z, n("b")), Lit(ZERO)),
    Rule("times.succ", TIMES, (S(n("a")), n("b")),
         call(PLUS, call(TIMES, v("a"), v("b")), v("b"))),

    # 0! -> 1 ; succ(a)! -> a! * succ(a)
    Rule("fact.zero", FACT, (Z,), Lit(ONE)),
    Rule("fact.succ", FACT, (AsP("self", S(n("a"))),),
         call(TIMES, call(FACT, v("a")), v("self"))),

    # repeated subtraction; a Zero divisor never reaches mod.zero
    Rule("mod.zero", MOD, (Z, n("b")), Lit(ZERO)),
    Rule("mod.succ", MOD, (AsP("self", S(n())), n("b")),
         call(IF,
              call(LESS_THAN, v("self"), v("b")),
              v("self"),
              call(MOD, call(MINUS, v("self"), v("b")), v("b")))),

    # fib(0) = 0, fib(1) = 1, fib(n) = fib(n - 1) + fib(n - 2)
    Rule("fib.zero", FIB, (Z,), Lit(ZERO)),
    Rule("fib.succ", FIB, (AsP("self", S(n("t"))),),
         call(IF,
              call(EQUALS, v("t"), Lit(ZERO)),
              Lit(ONE),
              call(PLUS,
                   call(FIB, call(PRED, v("self"))),
                   call(FIB, call(MINUS, v("self"), Lit(TWO)))))),
]


# ---------------------------------------------------------------------------
# Index + table validation
# ---------------------------------------------------------------------------


def _template_refs(t: Template) -> set:
    if isinstance(t, Ref):
        return {t.name}
    if isinstance(t, Wrap):
        return _template_refs(t.inner)
    if isinstance(t, Call):
        out: set = set()
        for a in t.args:
            out |= _template_refs(a)
        return out
    return set()


def _template_calls(t: Template) -> List[Call]:
    if isinstance(t, Wrap):
        return _template_calls(t.inner)
    if isinstance(t, Call):
        out = [t]
        for a in t.args:
            out.extend(_template_calls(a))
        return out
    return []


def build_index(rules: List[Rule]) -> Dict[str, Tuple[Rule, ...]]:
    """
    Group clauses by operation, preserving table order.

    Raises:
        ValueError: duplicate rule ids, mixed arities within one operation,
            a body referring to an unbound name, or a call to an operation
            that has no clauses or is called with the wrong arity.
    """
    index: Dict[str, List[Rule]] = {}
    seen_ids = set()
    for rule in rules:
        if rule.id in seen_ids:
            raise ValueError(f"Duplicate rule id: {rule.id}")
        seen_ids.add(rule.id)
        group = index.setdefault(rule.op, [])
        if group and group[0].arity != rule.arity:
            raise ValueError(
                f"Rule {rule.id} has arity {rule.arity}, "
                f"{rule.op} clauses have arity {group[0].arity}"
            )
        bound: set = set()
        for p in rule.patterns:
            bound |= pattern_names(p)
        unbound = _template_refs(rule.body) - bound
        if unbound:
            raise ValueError(f"Rule {rule.id} refers to unbound {sorted(unbound)}")
        group.append(rule)

    for rule in rules:
        for c in _template_calls(rule.body):
            if c.op not in index:
                raise ValueError(f"Rule {rule.id} calls unknown operation {c.op}")
            if len(c.args) != index[c.op][0].arity:
                raise ValueError(
                    f"Rule {rule.id} calls {c.op} with {len(c.args)} operand(s)"
                )

    return {op: tuple(group) for op, group in index.items()}


RULE_INDEX = build_index(RULES)

OPERATIONS = tuple(RULE_INDEX)


def arity_of(op: str) -> int:
    return RULE_INDEX[op][0].arity
