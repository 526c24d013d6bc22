"""Genealogical relationship graph: persons, parentage and kinship queries."""
from kinship.config import GraphConfig
from kinship.graph import RelationshipGraph
from kinship.models import Person, Relationship, Role, Sex
from kinship.queries import get_generations, get_lineage, get_relatives_within
from kinship.validation import validate_graph

__all__ = [
    "GraphConfig",
    "RelationshipGraph",
    "Person",
    "Relationship",
    "Role",
    "Sex",
    "get_generations",
    "get_lineage",
    "get_relatives_within",
    "validate_graph",
]
