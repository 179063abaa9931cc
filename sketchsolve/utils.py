"""Utility helpers shared by the CLI and examples."""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Tuple

import numpy as np

from .model import EntityId

logger = logging.getLogger(__name__)


def normalize_point_coords(
    coords: Mapping[EntityId, Tuple[float, float]],
    scale: float = 100.0,
) -> Dict[EntityId, Tuple[float, float]]:
    """Map a coordinate mapping into ``[0, scale]`` on each axis independently.

    An axis with zero span collapses to ``0``.
    """

    if not coords:
        return {}

    ids = list(coords)
    arr = np.array([coords[pid] for pid in ids], dtype=float)
    low = arr.min(axis=0)
    span = arr.max(axis=0) - low
    safe_span = np.where(span == 0.0, 1.0, span)
    normalized = np.where(span == 0.0, 0.0, (arr - low) / safe_span) * scale

    logger.debug("Normalized coordinates for %d points with scale=%s", len(ids), scale)
    return {pid: (float(x), float(y)) for pid, (x, y) in zip(ids, normalized)}
