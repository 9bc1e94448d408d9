from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Tuple

from jsonschema import Draft7Validator

TRACE_EVENT_V1 = 1
TRACE_EVENT_KEY_ORDER: Tuple[str, ...] = ("v", "type", "i", "t", "meta")

RULE_APPLIED = "rule.applied"
MEMO_HIT = "memo.hit"
QUERY_RESOLVED = "query.resolved"
TRACE_EVENT_TYPES = frozenset([RULE_APPLIED, MEMO_HIT, QUERY_RESOLVED])

TRACE_SCHEMA_V1: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "peano_eval derivation trace v1",
    "type": "array",
    "items": {
        "type": "object",
        "additionalProperties": False,
        "required": ["v", "type", "i", "t", "meta"],
        "properties": {
            "v": {"const": TRACE_EVENT_V1},
            "type": {"enum": sorted(TRACE_EVENT_TYPES)},
            "i": {"type": "integer", "minimum": 0},
            "t": {"type": "string", "minLength": 1},
            "meta": {
                "type": "object",
                "required": ["op"],
                "properties": {
                    "op": {"type": "string", "minLength": 1},
                    "depth": {"type": "integer", "minimum": 0},
                    "steps": {"type": "integer", "minimum": 0},
                    "max_depth": {"type": "integer", "minimum": 0},
                },
            },
        },
    },
}

_VALIDATOR = Draft7Validator(TRACE_SCHEMA_V1)


def _deep_sort_json(x: Any) -> Any:
    """
    Deterministically normalize nested JSON-ish structures:
    - dict: keys sorted lexicographically; values deep-sorted
    - list: values deep-sorted (order preserved)
    - primitives: unchanged
    """
    if isinstance(x, dict):
        out: Dict[str, Any] = {}
        for k in sorted(x.keys()):
            out[str(k)] = _deep_sort_json(x[k])
        return out
    if isinstance(x, list):
        return [_deep_sort_json(v) for v in x]
    return x


def canon_event(ev: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Canonicalize a single trace event to a deterministic dict.

    Required:
    - v: const 1
    - type: one of TRACE_EVENT_TYPES
    - i: integer >= 0
    - t: rule id (rule.applied) or operation name
    - meta: mapping with at least "op"

    Unknown keys are dropped; top-level key order is fixed.
    """
    if not isinstance(ev, Mapping):
        raise TypeError(f"event must be a mapping, got {type(ev)}")

    v = ev.get("v", TRACE_EVENT_V1)
    if v != TRACE_EVENT_V1:
        raise ValueError(f"event.v must be {TRACE_EVENT_V1}, got {v!r}")

    typ = ev.get("type")
    if typ not in TRACE_EVENT_TYPES:
        raise ValueError(f"event.type must be one of {sorted(TRACE_EVENT_TYPES)}, got {typ!r}")

    i = ev.get("i")
    if isinstance(i, bool) or not isinstance(i, int) or i < 0:
        raise ValueError("event.i must be an integer >= 0")

    t = ev.get("t")
    if not isinstance(t, str) or not t.strip():
        raise ValueError("event.t must be a non-empty string")

    meta = ev.get("meta")
    if not isinstance(meta, Mapping) or "op" not in meta:
        raise ValueError("event.meta must be a mapping with an 'op' key")

    return {
        "v": v,
        "type": typ,
        "i": i,
        "t": t,
        "meta": _deep_sort_json(dict(meta)),
    }


def canon_events(events: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Canonicalize a sequence of events and enforce contiguous index ordering by `i`.
    We do NOT renumber; we assert correctness to catch drift early.
    """
    out: List[Dict[str, Any]] = [canon_event(ev) for ev in events]
    if out:
        expected = list(range(len(out)))
        got = [e["i"] for e in out]
        if got != expected:
            raise ValueError(
                f"event.i must be contiguous 0..n-1 in-order; got {got}, expected {expected}"
            )
    return out


def trace_errors(events: List[Dict[str, Any]]) -> List[str]:
    """Schema violations of an event list, as readable messages (empty if valid)."""
    return [
        f"{'/'.join(str(p) for p in err.absolute_path) or '<root>'}: {err.message}"
        for err in sorted(_VALIDATOR.iter_errors(events), key=lambda e: [str(p) for p in e.absolute_path])
    ]


def validate_trace(events: List[Dict[str, Any]]) -> None:
    """
    Raise jsonschema.ValidationError if events do not satisfy TRACE_SCHEMA_V1.
    """
    _VALIDATOR.validate(events)


class TraceRecorder:
    """Collects canonical events for one query; indices are assigned here."""

    def __init__(self) -> None:
        self._events: List[Dict[str, Any]] = []

    def record(self, typ: str, tag: str, **meta: Any) -> None:
        self._events.append(
            canon_event({"v": TRACE_EVENT_V1, "type": typ, "i": len(self._events), "t": tag, "meta": meta})
        )

    @property
    def events(self) -> List[Dict[str, Any]]:
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)
