"""Configuration helpers for solver components."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Optional

DEFAULT_EPSILON = 1e-5


@dataclass
class SolverConfig:
    """Process-wide solver defaults; per-call overrides go through ``SolveOptions``."""

    epsilon: float = DEFAULT_EPSILON
    large_search_space: int = 4096


_SOLVER_CONFIG = SolverConfig()


def get_solver_config() -> SolverConfig:
    return copy.deepcopy(_SOLVER_CONFIG)


def set_solver_config(config: SolverConfig) -> None:
    global _SOLVER_CONFIG
    _SOLVER_CONFIG = copy.deepcopy(config)


def resolve_epsilon(epsilon: Optional[float]) -> float:
    if epsilon is None:
        return _SOLVER_CONFIG.epsilon
    return float(epsilon)
