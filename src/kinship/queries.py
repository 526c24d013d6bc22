"""Lineage and neighbourhood queries over a relationship graph."""

import networkx as nx

from kinship.graph import RelationshipGraph
from kinship.models import Person, Sex


def _require(graph: RelationshipGraph, person: Person) -> None:
    if person not in graph:
        raise ValueError(f"Person {person!r} not found in graph")


def get_lineage(graph: RelationshipGraph, person: Person, sex: Sex | str = Sex.MALE) -> list[Person]:
    """
    Follow the chain of parents of one sex upward from `person`.

    With sex="M" this is the paternal line (father, father's father, ...),
    with sex="F" the maternal line. The chain stops at the first missing
    parent, or at a person already in the chain when the graph has a cycle.

    Args:
        graph: The relationship graph
        person: The person to start from (not included in the result)
        sex: Sex of the parents to follow

    Returns:
        The direct line of ancestors, nearest first.
    """
    _require(graph, person)
    parent_of = graph.get_father if Sex(sex) is Sex.MALE else graph.get_mother

    lineage: list[Person] = []
    current = parent_of(person)
    while current is not None and current != person and current not in lineage:
        lineage.append(current)
        current = parent_of(current)
    return lineage


def get_relatives_within(graph: RelationshipGraph, person: Person, radius: int | None = None) -> list[Person]:
    """
    Collect every person within `radius` parent/child steps of `person`.

    Edges are followed in both directions, so radius 1 gives parents and
    children, radius 2 adds grandparents, grandchildren, siblings and
    co-parents.

    Args:
        graph: The relationship graph
        person: The person to center the search on
        radius: Maximum distance (defaults to graph.config.default_radius)

    Returns:
        Persons nearest first, excluding `person` itself.
    """
    _require(graph, person)
    if radius is None:
        radius = graph.config.default_radius
    if radius < 0:
        raise ValueError(f"radius must be non-negative, got {radius}")

    # Undirected so parents, children and co-parents are all reachable
    undirected = graph.digraph.to_undirected()
    distances = nx.single_source_shortest_path_length(undirected, person.id, cutoff=radius)
    ordered = sorted(distances.items(), key=lambda item: item[1])
    return [graph.get_person(node) for node, _ in ordered if node != person.id]


def get_generations(graph: RelationshipGraph, person: Person) -> dict[int, list[Person]]:
    """
    Group the descendants of `person` by generation (1 = children).

    A descendant reachable along paths of different length is placed in the
    nearest generation.
    """
    _require(graph, person)
    generations: dict[int, list[Person]] = {}
    for depth, layer in enumerate(nx.bfs_layers(graph.digraph, [person.id])):
        if depth == 0:
            continue
        generations[depth] = [graph.get_person(node) for node in layer]
    return generations
