"""
Tunable limits for puzzle generation and the ILP cross-check.

Every default can be overridden through the environment:

    DOMINO_GENERATION_TIMEOUT   seconds per generation attempt before restarting
    DOMINO_MAX_RESTARTS         restart cap (unset = retry forever)
    DOMINO_ILP_TIME_LIMIT       CP-SAT time limit in seconds
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Type, TypeVar

DEFAULT_GENERATION_TIMEOUT = 19.0
DEFAULT_RANDOM_ATTEMPTS = 10
DEFAULT_ILP_TIME_LIMIT = 30.0

_T = TypeVar("_T", int, float)


def _env_number(name: str, cast: Type[_T]) -> Optional[_T]:
    """Read a positive number from the environment, or None if unset/invalid."""
    raw = os.getenv(name)
    if raw is None:
        return None
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        return None
    if value > 0:
        return value
    return None


@dataclass
class GenerationConfig:
    """Limits for the generation retry loop."""
    timeout: float = DEFAULT_GENERATION_TIMEOUT
    max_restarts: Optional[int] = None
    random_attempts: int = DEFAULT_RANDOM_ATTEMPTS

    @classmethod
    def from_env(cls) -> "GenerationConfig":
        config = cls()
        timeout = _env_number("DOMINO_GENERATION_TIMEOUT", float)
        if timeout is not None:
            config.timeout = timeout
        max_restarts = _env_number("DOMINO_MAX_RESTARTS", int)
        if max_restarts is not None:
            config.max_restarts = max_restarts
        return config


def ilp_time_limit() -> float:
    """CP-SAT time limit, honouring DOMINO_ILP_TIME_LIMIT."""
    value = _env_number("DOMINO_ILP_TIME_LIMIT", float)
    return value if value is not None else DEFAULT_ILP_TIME_LIMIT
