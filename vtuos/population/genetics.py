"""
VT-UOS Population Console - Genetics
Coefficient of inbreeding (COI) for prospective offspring

Wright's path coefficient method:

    COI = Σ (0.5)^(n1 + n2 + 1) × (1 + F_A)

- n1, n2: generations from each parent to a common ancestor A
- F_A: the common ancestor's own COI (approximated to 3 generations)

A COI above 0.0625 (first-cousin level) is treated as high risk.
"""

from collections import deque
from typing import Dict, Protocol

from vtuos.models.resident import Resident
from vtuos.utils.errors import NotFoundError
from vtuos.utils.logging import get_logger

logger = get_logger(__name__)

ANCESTOR_GENERATIONS = 5
ANCESTOR_COI_GENERATIONS = 3


class LineageSource(Protocol):
    def get_by_id(self, resident_id: str) -> Resident: ...


def ancestor_map(source: LineageSource, resident_id: str, max_generations: int) -> Dict[str, int]:
    """
    Map of ancestor id -> closest generation distance (the resident is 0).

    Ancestors missing from the record store end that branch of the walk.
    """
    ancestors: Dict[str, int] = {}
    queue = deque([(resident_id, 0)])

    while queue:
        current_id, generation = queue.popleft()
        if generation > max_generations or current_id in ancestors:
            continue

        try:
            resident = source.get_by_id(current_id)
        except NotFoundError:
            continue

        ancestors[current_id] = generation
        for parent_id in (resident.biological_parent_1_id, resident.biological_parent_2_id):
            if parent_id:
                queue.append((parent_id, generation + 1))

    return ancestors


def _simple_coi(source: LineageSource, parent1_id: str, parent2_id: str, max_depth: int) -> float:
    if max_depth <= 0:
        return 0.0

    ancestors1 = ancestor_map(source, parent1_id, max_depth)
    ancestors2 = ancestor_map(source, parent2_id, max_depth)
    return sum(
        0.5 ** (gen1 + ancestors2[ancestor_id] + 1)
        for ancestor_id, gen1 in ancestors1.items()
        if ancestor_id in ancestors2
    )


def calculate_coi(source: LineageSource, parent1_id: str, parent2_id: str) -> float:
    """COI of a child of the two given parents."""
    ancestors1 = ancestor_map(source, parent1_id, ANCESTOR_GENERATIONS)
    ancestors2 = ancestor_map(source, parent2_id, ANCESTOR_GENERATIONS)

    common = {aid: (gen1, ancestors2[aid]) for aid, gen1 in ancestors1.items() if aid in ancestors2}
    if not common:
        return 0.0

    coi = 0.0
    for ancestor_id, (gen1, gen2) in common.items():
        ancestor_coi = 0.0
        ancestor = source.get_by_id(ancestor_id)
        if ancestor.biological_parent_1_id and ancestor.biological_parent_2_id:
            ancestor_coi = _simple_coi(
                source,
                ancestor.biological_parent_1_id,
                ancestor.biological_parent_2_id,
                ANCESTOR_COI_GENERATIONS,
            )
        coi += 0.5 ** (gen1 + gen2 + 1) * (1 + ancestor_coi)

    logger.debug(f"COI for {parent1_id} x {parent2_id}: {coi:.4f} ({len(common)} common ancestors)")
    return coi
