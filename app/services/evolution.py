from app.config import EVOLUTION_MAX_DEPTH
from app.models import EvolutionNode


def extract_evolution_chain(
    root: EvolutionNode,
    max_depth: int = EVOLUTION_MAX_DEPTH,
    current_depth: int = 0,
) -> list[str]:
    """
    Flattens an evolution chain into species names, pre-order and left to right.

    A node at current_depth >= max_depth contributes nothing, its own name included,
    so max_depth=3 keeps the root and two levels of evolutions. A node without a
    species name adds nothing itself but its children are still visited.
    """
    evolutions: list[str] = []

    if current_depth >= max_depth:
        return evolutions

    if root.species is not None and root.species.name is not None:
        evolutions.append(root.species.name)

    for child in root.evolves_to:
        evolutions.extend(extract_evolution_chain(child, max_depth, current_depth + 1))

    return evolutions
