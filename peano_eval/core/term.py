"""
PEANO TERM CORE
===============
Two closed families, nothing else.

    naturals:  Zero | Succ(inner)
    booleans:  TrueTerm | FalseTerm

Every term is an immutable container of child terms (``structure``).
Equality, hashing, repr and depth walk the structure with an explicit
stack, so a natural nested thousands of layers deep never touches the
host recursion limit.
"""

from __future__ import annotations


class Term:
    """A term is pure structure: a closed variant plus its child terms."""

    __slots__ = ("structure", "_hash")

    def __init__(self, *structure: "Term") -> None:
        object.__setattr__(self, "structure", tuple(structure))
        # children already carry their hash, so this stays O(1) per node
        object.__setattr__(
            self,
            "_hash",
            hash((type(self).__name__,) + tuple(c._hash for c in structure)),
        )

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} terms are immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} terms are immutable")

    # rebuilt through the constructor, never by slot assignment
    def __reduce__(self):
        return (type(self), self.structure)

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    # ---------- structural identity ----------

    def structurally_equal(self, other: object) -> bool:
        if not isinstance(other, Term):
            return False
        stack = [(self, other)]
        while stack:
            a, b = stack.pop()
            if a is b:
                continue
            if type(a) is not type(b) or a._hash != b._hash:
                return False
            if len(a.structure) != len(b.structure):
                return False
            stack.extend(zip(a.structure, b.structure))
        return True

    def __eq__(self, other: object) -> bool:
        return self.structurally_equal(other)

    def __ne__(self, other: object) -> bool:
        return not self.structurally_equal(other)

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        return type(self).__name__ + "()"

    # ---------- structural analysis tools ----------

    def depth(self) -> int:
        best = 0
        stack = [(self, 0)]
        while stack:
            node, d = stack.pop()
            if d > best:
                best = d
            for child in node.structure:
                stack.append((child, d + 1))
        return best

    def count_nodes(self) -> int:
        total = 0
        stack = [self]
        while stack:
            node = stack.pop()
            total += 1
            stack.extend(node.structure)
        return total


# ---------------------------------------------------------------------------
# Naturals
# ---------------------------------------------------------------------------


class Nat(Term):
    """The naturals: ``Zero`` or ``Succ(Nat)``."""

    __slots__ = ()


class Zero(Nat):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__()

    def __repr__(self) -> str:
        return "ZERO"


class Succ(Nat):
    """Peano successor. ``Succ(n)`` stands for ``n + 1``."""

    __slots__ = ()

    def __init__(self, inner: Nat) -> None:
        if not isinstance(inner, Nat):
            raise TypeError(
                f"Succ expects a natural term, got {type(inner).__name__}"
            )
        super().__init__(inner)

    @property
    def inner(self) -> Nat:
        return self.structure[0]

    def __repr__(self) -> str:
        layers = 0
        cur: Nat = self
        while isinstance(cur, Succ):
            layers += 1
            cur = cur.inner
        if layers <= 8:
            return "Succ(" * layers + "ZERO" + ")" * layers
        return f"Succ^{layers}(ZERO)"


# ---------------------------------------------------------------------------
# Booleans
# ---------------------------------------------------------------------------


class Bool(Term):
    """The booleans: ``TrueTerm`` or ``FalseTerm``."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__()


class TrueTerm(Bool):
    __slots__ = ()

    def __repr__(self) -> str:
        return "TRUE"


class FalseTerm(Bool):
    __slots__ = ()

    def __repr__(self) -> str:
        return "FALSE"


# ---------- constructor and primitives ----------


def succ(t: Nat) -> Succ:
    """Successor of a natural term."""
    return Succ(t)


def is_nat(x: object) -> bool:
    return isinstance(x, Nat)


def is_bool(x: object) -> bool:
    return isinstance(x, Bool)


ZERO = Zero()
TRUE = TrueTerm()
FALSE = FalseTerm()
