"""
Engine configuration.

Defaults live in module constants; EngineConfig.from_env() lets a process
override them with PEANO_* environment variables, the same way feature
flags are switched on elsewhere (e.g. PEANO_TRACE=1).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .errors import ConfigError

# =============================================================================
# Resource limits
# =============================================================================

DEFAULT_MAX_DEPTH = 10_000   # nested pending rule applications per query
DEFAULT_MAX_STEPS = None     # total rule applications per query (None = unbounded)

ENV_MAX_DEPTH = "PEANO_MAX_DEPTH"
ENV_MAX_STEPS = "PEANO_MAX_STEPS"
ENV_GUARD_ZERO_DIVISOR = "PEANO_GUARD_ZERO_DIVISOR"
ENV_MEMOIZE = "PEANO_MEMOIZE"
ENV_TRACE = "PEANO_TRACE"

_TRUTHY = frozenset(["1", "true", "yes", "on"])
_FALSY = frozenset(["0", "false", "no", "off", ""])


@dataclass(frozen=True)
class EngineConfig:
    """
    Settings for one Engine.

    Attributes:
        max_depth: Deepest allowed nesting of pending rule applications.
        max_steps: Cap on rule applications for a single query, or None.
        guard_zero_divisor: Reject Mod(_, Zero) up front instead of letting
            the raw rule recurse until max_depth.
        memoize: Cache (operation, operands) -> result across queries.
        trace: Record a canonical event per rule application.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    max_steps: Optional[int] = DEFAULT_MAX_STEPS
    guard_zero_divisor: bool = True
    memoize: bool = False
    trace: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ConfigError(f"max_depth must be an int, got {self.max_depth!r}")
        if self.max_depth < 1:
            raise ConfigError(f"max_depth must be >= 1, got {self.max_depth}")
        if self.max_steps is not None:
            if isinstance(self.max_steps, bool) or not isinstance(self.max_steps, int):
                raise ConfigError(f"max_steps must be an int or None, got {self.max_steps!r}")
            if self.max_steps < 1:
                raise ConfigError(f"max_steps must be >= 1, got {self.max_steps}")

    def with_overrides(self, **changes) -> "EngineConfig":
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """Build a config from PEANO_* variables; unset variables keep defaults."""
        env = os.environ if environ is None else environ
        return cls(
            max_depth=_env_int(env, ENV_MAX_DEPTH, DEFAULT_MAX_DEPTH),
            max_steps=_env_int(env, ENV_MAX_STEPS, DEFAULT_MAX_STEPS),
            guard_zero_divisor=_env_flag(env, ENV_GUARD_ZERO_DIVISOR, True),
            memoize=_env_flag(env, ENV_MEMOIZE, False),
            trace=_env_flag(env, ENV_TRACE, False),
        )


def _env_int(env: Mapping[str, str], key: str, default: Optional[int]) -> Optional[int]:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    if raw.strip().lower() == "none":
        return None
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None


def _env_flag(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in _TRUTHY:
        return True
    if val in _FALSY:
        return False
    raise ConfigError(f"{key} must be a boolean flag (1/0, true/false), got {raw!r}")
