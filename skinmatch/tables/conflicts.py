"""
Ingredient interaction graph and the fixed substitution maps.

CONFLICT_MATRIX is declared one-sided where convenient; ``neighbours``
answers for the undirected graph, so a conflict listed under either tag
counts both ways.
"""

CONFLICT_MATRIX: dict[str, frozenset[str]] = {
    "retinoid": frozenset({"vitamin_c", "benzoyl_peroxide", "salicylic_acid", "aha"}),
    "vitamin_c": frozenset({"niacinamide_high_concentration"}),
    "salicylic_acid": frozenset({"benzoyl_peroxide"}),
    "niacinamide": frozenset({"vitamin_c_high_concentration"}),
}


def _symmetric(matrix: dict[str, frozenset[str]]) -> dict[str, frozenset[str]]:
    graph: dict[str, set[str]] = {}
    for tag, others in matrix.items():
        for other in others:
            graph.setdefault(tag, set()).add(other)
            graph.setdefault(other, set()).add(tag)
    return {tag: frozenset(others) for tag, others in graph.items()}


_GRAPH = _symmetric(CONFLICT_MATRIX)


def neighbours(tag: str) -> frozenset[str]:
    """Tags that conflict with ``tag`` in either direction."""
    return _GRAPH.get(tag, frozenset())


# Used when a candidate conflicts with something already accepted
CONFLICT_ALTERNATIVES: dict[str, str] = {
    "retinol": "azelaic_acid",
    "vitamin_c": "niacinamide",
    "salicylic_acid": "niacinamide",
    "benzoyl_peroxide": "salicylic_acid",
    "glycolic_acid": "niacinamide",
    "salicylic_acid_cleanser": "gentle_cleanser",
}

# Cheaper same-category stand-ins when an entry is over budget
BUDGET_ALTERNATIVES: dict[str, str] = {
    "retinol": "niacinamide",
    "vitamin_c": "niacinamide",
    "azelaic_acid": "niacinamide",
    "salicylic_acid": "niacinamide",
    "glycolic_acid": "niacinamide",
    "peptides": "centella_asiatica",
    "ceramide_cream": "centella_asiatica",
    "rich_moisturizer": "lightweight_moisturizer",
    "mineral_sunscreen": "chemical_sunscreen",
}
