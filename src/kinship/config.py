"""Relationship graph configuration."""

from dataclasses import dataclass


@dataclass
class GraphConfig:
    """Behaviour switches for a RelationshipGraph."""

    # When False, linking a person under one of their own descendants fails.
    allow_cycles: bool = True
    # Radius used by get_relatives_within when none is given.
    default_radius: int = 2
