"""Pytest fixtures for relationship graph tests."""

from types import SimpleNamespace

import pytest

from kinship import GraphConfig, RelationshipGraph, Sex


@pytest.fixture
def config():
    """Default graph configuration."""
    return GraphConfig()


@pytest.fixture
def graph(config):
    """Empty RelationshipGraph."""
    return RelationshipGraph(config)


@pytest.fixture
def family(graph):
    """
    Three generations:

        Grandfather1 + Grandmother1
          ├── Father ── Child, Extra
          └── Mother2 ── Cousin
    """
    f = SimpleNamespace(
        grandfather=graph.create(Sex.MALE, "Grandfather1"),
        grandmother=graph.create(Sex.FEMALE, "Grandmother1"),
        father=graph.create(Sex.MALE, "Father"),
        aunt=graph.create(Sex.FEMALE, "Mother2"),
        child=graph.create(Sex.FEMALE, "Child"),
        extra=graph.create(Sex.FEMALE, "Extra"),
        cousin=graph.create(Sex.FEMALE, "Cousin"),
    )
    graph.set_father(f.father, f.grandfather)
    graph.set_mother(f.father, f.grandmother)
    graph.set_father(f.aunt, f.grandfather)
    graph.set_mother(f.aunt, f.grandmother)
    graph.set_father(f.child, f.father)
    graph.set_mother(f.cousin, f.aunt)
    graph.set_father(f.extra, f.father)
    return f


def assert_consistent(graph):
    """Check that every child list agrees with the father/mother links."""
    persons = list(graph)
    for p in persons:
        children = graph.get_children(p)
        assert len(children) == len(set(children))
        for q in persons:
            is_parent = graph.get_father(p) == q or graph.get_mother(p) == q
            assert (p in graph.get_children(q)) == is_parent
    assert graph.validate() == []
