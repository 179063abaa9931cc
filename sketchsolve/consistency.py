from collections import defaultdict
from dataclasses import dataclass, field
from math import prod
from typing import Dict, List, Tuple

from .config import get_solver_config
from .constraints import RIGHT_ANGLE, AngleConstraint
from .geometry import _DENOM_EPS
from .model import EntityId
from .sketch import Sketch


@dataclass
class ConsistencyWarning:
    kind: str
    message: str
    entity_ids: Tuple[EntityId, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return self.message


def _shared_points(sketch: Sketch) -> List[ConsistencyWarning]:
    users: Dict[EntityId, List[EntityId]] = defaultdict(list)
    for c in sketch.constraints():
        for pid in dict.fromkeys(c.point_ids(sketch)):
            users[pid].append(c.id)
    warnings: List[ConsistencyWarning] = []
    for pid, cids in users.items():
        if len(cids) < 2:
            continue
        listed = ', '.join(str(cid) for cid in cids)
        warnings.append(
            ConsistencyWarning(
                'shared_point',
                f'point {pid} is moved by constraints {listed}; result depends on constraint order',
                (pid, *cids),
            )
        )
    return warnings


def _rotation_only(sketch: Sketch) -> List[ConsistencyWarning]:
    warnings: List[ConsistencyWarning] = []
    for c in sketch.constraints():
        if isinstance(c, AngleConstraint) and c.degrees != RIGHT_ANGLE:
            warnings.append(
                ConsistencyWarning(
                    'rotation_only',
                    f'angle {c.id} targets {c.degrees:g} degrees; only arm rotations are available',
                    (c.id,),
                )
            )
    return warnings


def _degenerate(sketch: Sketch) -> List[ConsistencyWarning]:
    warnings: List[ConsistencyWarning] = []
    for line in sketch.lines():
        if sketch.position(line.start_id).distance_to(sketch.position(line.end_id)) <= _DENOM_EPS:
            warnings.append(
                ConsistencyWarning('degenerate', f'line {line.id} has zero length', (line.id,))
            )
    for c in sketch.constraints():
        if not isinstance(c, AngleConstraint):
            continue
        corner = sketch.position(c.corner_id)
        for arm in (c.arm1_id, c.arm2_id):
            if corner.distance_to(sketch.position(arm)) <= _DENOM_EPS:
                warnings.append(
                    ConsistencyWarning(
                        'degenerate',
                        f'angle {c.id}: arm point {arm} coincides with corner {c.corner_id}',
                        (c.id, arm),
                    )
                )
    return warnings


def _search_space(sketch: Sketch) -> List[ConsistencyWarning]:
    constraints = sketch.constraints()
    total = prod(c.branch_count() for c in constraints)
    limit = get_solver_config().large_search_space
    if total <= limit:
        return []
    return [
        ConsistencyWarning(
            'search_space',
            f'{len(constraints)} constraints span {total} branch combinations (limit {limit})',
            tuple(c.id for c in constraints),
        )
    ]


def check_consistency(sketch: Sketch) -> List[ConsistencyWarning]:
    """Report authoring hazards that make solving slow, order-dependent or doomed."""

    warnings: List[ConsistencyWarning] = []
    warnings.extend(_degenerate(sketch))
    warnings.extend(_shared_points(sketch))
    warnings.extend(_rotation_only(sketch))
    warnings.extend(_search_space(sketch))
    return warnings
