"""Graph validation for relationship graphs."""

from collections import Counter

import networkx as nx

from kinship.models import Role


def validate_graph(G: nx.DiGraph) -> list[str]:
    """
    Validate a parent -> child graph for:
    - Cycles in parent-child relationships
    - Fathers who are not male and mothers who are not female
    - Persons with more than one father or more than one mother

    Nodes are expected to carry a `person` attribute and edges a `role`.
    Returns a list of warning messages; an empty list means the graph is consistent.
    """
    warnings: list[str] = []

    def label(node) -> str:
        person = G.nodes[node].get("person")
        return str(person) if person is not None else f"node {node}"

    # Check for cycles
    try:
        cycle = nx.find_cycle(G, orientation="original")
        cycle_nodes = [label(edge[0]) for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass  # No cycle found, which is good

    # Check that each parent's sex matches the role recorded on the edge
    for parent, child, role in G.edges(data="role"):
        person = G.nodes[parent].get("person")
        if person is None or role is None:
            warnings.append(f"Incomplete: edge {label(parent)} -> {label(child)} has no role or person")
            continue
        if Role.for_sex(person.sex) != role:
            warnings.append(
                f"Impossible: {label(parent)} is recorded as {Role(role).value} of "
                f"{label(child)} but has sex {person.sex.value}"
            )

    # Check that no one has two parents in the same role
    for node in G:
        roles = Counter(role for _, _, role in G.in_edges(node, data="role") if role is not None)
        for role, count in roles.items():
            if count > 1:
                warnings.append(f"Impossible: {label(node)} has {count} {Role(role).value}s")

    return warnings
