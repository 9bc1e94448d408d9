"""
Evaluation errors.

Every failure an evaluation can end in derives from EvaluationError. The
engine never retries and never hands back a partial result: a query either
resolves to a term or raises one of these.
"""

from __future__ import annotations


class EvaluationError(Exception):
    """Base class for all evaluator failures."""


class ConfigError(EvaluationError, ValueError):
    """An engine setting (argument or environment variable) is invalid."""


class UnknownOperationError(EvaluationError, LookupError):
    def __init__(self, op: str) -> None:
        super().__init__(f"No rules registered for operation: {op!r}")
        self.op = op


class ArityError(EvaluationError, TypeError):
    def __init__(self, op: str, expected: int, got: int) -> None:
        super().__init__(f"{op} takes {expected} operand(s), got {got}")
        self.op = op
        self.expected = expected
        self.got = got


class IllTypedQueryError(EvaluationError, TypeError):
    """No clause of the operation matches the operand shapes."""

    def __init__(self, op: str, operands: tuple) -> None:
        kinds = ", ".join(type(x).__name__ for x in operands)
        super().__init__(f"No rule of {op} matches operands ({kinds})")
        self.op = op
        self.operands = operands


class ZeroDivisorError(EvaluationError, ZeroDivisionError):
    """Mod was queried with a Zero divisor while the guard is enabled."""

    def __init__(self, op: str) -> None:
        super().__init__(f"{op} with a Zero divisor never reaches a base case")
        self.op = op


class ResourceExhausted(EvaluationError):
    """The derivation did not terminate within the configured bounds."""

    def __init__(self, message: str, op: str, limit: int, reached: int) -> None:
        super().__init__(message)
        self.op = op
        self.limit = limit
        self.reached = reached


class DerivationDepthExceeded(ResourceExhausted):
    def __init__(self, op: str, limit: int, reached: int) -> None:
        super().__init__(
            f"Derivation depth limit exceeded ({limit}) while resolving {op}. "
            f"Depth reached: {reached}.",
            op,
            limit,
            reached,
        )


class StepBudgetExceeded(ResourceExhausted):
    def __init__(self, op: str, limit: int, reached: int) -> None:
        super().__init__(
            f"Rule application budget exceeded ({limit} steps) while "
            f"resolving {op}. Total steps: {reached}.",
            op,
            limit,
            reached,
        )
