# peano_eval/engine/machine.py
"""
Rule-resolution engine (work-stack machine).

A query (operation, operands) is resolved by firing the first matching
clause of the operation and evaluating that clause's body template. Nested
calls in the body become further queries. None of this uses the Python
call stack: pending work is an explicit list of instructions and finished
sub-results sit on a value stack, so the only limit on a derivation is the
one configured here.

Instructions:
    EVAL   (template, env)   push the value of a template
    APPLY  (op, nargs)       pop nargs operands, fire the matching clause
    WRAP                     pop x, push Succ(x)
    LEAVE  (memo key)        a clause body finished; close its depth frame

Derivation depth is the number of clause applications whose body is still
being evaluated (open LEAVE frames). Exceeding EngineConfig.max_depth raises
DerivationDepthExceeded; exceeding max_steps raises StepBudgetExceeded.
Either way the whole query fails and nothing partial escapes.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Tuple

from ..config import EngineConfig
from ..core.term import Succ, Term, Zero
from ..errors import (
    ArityError,
    DerivationDepthExceeded,
    IllTypedQueryError,
    ResourceExhausted,
    StepBudgetExceeded,
    UnknownOperationError,
    ZeroDivisorError,
)
from ..reduction.pattern_matching import NO_MATCH, match
from ..reduction.rules import MOD, RULE_INDEX, Call, Lit, Ref, Rule, Wrap
from ..trace import MEMO_HIT, QUERY_RESOLVED, RULE_APPLIED, TraceRecorder

logger = logging.getLogger(__name__)


class Instr(Enum):
    EVAL = auto()
    APPLY = auto()
    WRAP = auto()
    LEAVE = auto()


class Engine:
    """Resolves operation queries against a rule index."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rules: Optional[Dict[str, Tuple[Rule, ...]]] = None,
    ) -> None:
        self.config = config if config is not None else EngineConfig()
        self._rules = RULE_INDEX if rules is None else rules
        self._memo: Dict[Tuple[Any, ...], Any] = {}
        self.last_trace: List[Dict[str, Any]] = []
        self.last_steps = 0
        self.last_max_depth = 0

    # ----------------------------------------------------------------------
    # Public API
    # ----------------------------------------------------------------------

    @property
    def operations(self) -> Tuple[str, ...]:
        return tuple(self._rules)

    def clear_memo(self) -> None:
        self._memo.clear()

    def resolve(self, op: str, *operands: Any) -> Any:
        """
        Resolve op(*operands) to a result term.

        Raises:
            UnknownOperationError: op has no clauses.
            ArityError: wrong number of operands.
            IllTypedQueryError: no clause matches some (sub-)query.
            ZeroDivisorError: Mod with a Zero divisor while guarded.
            DerivationDepthExceeded / StepBudgetExceeded: limits hit.
        """
        self._check_query(op, operands)
        logger.debug("resolve %s/%d", op, len(operands))

        recorder = TraceRecorder() if self.config.trace else None
        try:
            result, steps, peak = self._run(op, operands, recorder)
        except ResourceExhausted as exc:
            logger.warning("evaluation of %s aborted: %s", op, exc)
            raise
        finally:
            self.last_trace = recorder.events if recorder is not None else []

        if recorder is not None:
            recorder.record(QUERY_RESOLVED, op, op=op, steps=steps, max_depth=peak)
            self.last_trace = recorder.events
        logger.debug("resolved %s in %d step(s), peak depth %d", op, steps, peak)
        return result

    # ----------------------------------------------------------------------
    # Dispatch
    # ----------------------------------------------------------------------

    def _check_query(self, op: str, operands: Tuple[Any, ...]) -> None:
        if op not in self._rules:
            raise UnknownOperationError(op)
        expected = self._rules[op][0].arity
        if len(operands) != expected:
            raise ArityError(op, expected, len(operands))

    def _select(self, op: str, operands: Tuple[Any, ...]) -> Tuple[Rule, Dict[str, Any]]:
        """First clause (table order) whose patterns match."""
        if op == MOD and self.config.guard_zero_divisor and isinstance(operands[1], Zero):
            raise ZeroDivisorError(op)
        for rule in self._rules[op]:
            bindings = match(rule.patterns, operands)
            if bindings is not NO_MATCH:
                return rule, bindings
        raise IllTypedQueryError(op, operands)

    def _memo_key(self, op: str, operands: Tuple[Any, ...]) -> Optional[Tuple[Any, ...]]:
        if not self.config.memoize:
            return None
        # opaque If branches are keyed by type too, so 1, 1.0 and True stay apart
        key = (op,) + tuple(x if isinstance(x, Term) else (type(x), x) for x in operands)
        try:
            hash(key)
        except TypeError:
            # unhashable branches are not cached
            return None
        return key

    # ----------------------------------------------------------------------
    # The loop
    # ----------------------------------------------------------------------

    def _run(
        self,
        op: str,
        operands: Tuple[Any, ...],
        recorder: Optional[TraceRecorder],
    ) -> Tuple[Any, int, int]:
        max_depth = self.config.max_depth
        max_steps = self.config.max_steps

        values: List[Any] = list(operands)
        work: List[Tuple[Any, ...]] = [(Instr.APPLY, op, len(operands))]
        depth = 0
        peak = 0
        steps = 0

        try:
            while work:
                instr = work.pop()
                kind = instr[0]

                if kind is Instr.EVAL:
                    template, env = instr[1], instr[2]
                    if isinstance(template, Ref):
                        values.append(env[template.name])
                    elif isinstance(template, Lit):
                        values.append(template.value)
                    elif isinstance(template, Wrap):
                        work.append((Instr.WRAP,))
                        work.append((Instr.EVAL, template.inner, env))
                    elif isinstance(template, Call):
                        work.append((Instr.APPLY, template.op, len(template.args)))
                        # first operand is evaluated first
                        for arg in reversed(template.args):
                            work.append((Instr.EVAL, arg, env))
                    else:
                        raise TypeError(f"Invalid template type: {type(template).__name__}")

                elif kind is Instr.APPLY:
                    call_op, nargs = instr[1], instr[2]
                    args = tuple(values[len(values) - nargs:])
                    del values[len(values) - nargs:]

                    key = self._memo_key(call_op, args)
                    if key is not None and key in self._memo:
                        values.append(self._memo[key])
                        if recorder is not None:
                            recorder.record(MEMO_HIT, call_op, op=call_op, depth=depth)
                        continue

                    rule, bindings = self._select(call_op, args)

                    steps += 1
                    if max_steps is not None and steps > max_steps:
                        raise StepBudgetExceeded(op, max_steps, steps)
                    depth += 1
                    if depth > max_depth:
                        raise DerivationDepthExceeded(op, max_depth, depth)
                    if depth > peak:
                        peak = depth

                    if recorder is not None:
                        recorder.record(RULE_APPLIED, rule.id, op=call_op, depth=depth)

                    work.append((Instr.LEAVE, key))
                    work.append((Instr.EVAL, rule.body, bindings))

                elif kind is Instr.WRAP:
                    values.append(Succ(values.pop()))

                elif kind is Instr.LEAVE:
                    depth -= 1
                    key = instr[1]
                    if key is not None:
                        self._memo[key] = values[-1]
        finally:
            # counters describe the latest query, failed ones included
            self.last_steps = steps
            self.last_max_depth = peak

        if len(values) != 1:
            raise RuntimeError(f"Engine finished with {len(values)} values on the stack")
        return values[0], steps, peak
