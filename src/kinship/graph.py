"""In-memory relationship graph of persons linked by parent -> child edges."""

import itertools
import logging
from collections.abc import Iterator

import networkx as nx

from kinship.config import GraphConfig
from kinship.models import Person, Relationship, Role, Sex
from kinship.validation import validate_graph

logger = logging.getLogger(__name__)


class RelationshipGraph:
    """
    Arena holding every person and the parent -> child edges between them.

    Persons are nodes of a directed graph keyed by id. Each edge goes from
    parent to child and carries the parent's role, so a child has at most one
    incoming FATHER edge and one incoming MOTHER edge. A node's successors are
    its children in insertion order.

    Relationship operations never raise: they return False and leave the graph
    untouched when the request is invalid.

    Usage:
        graph = RelationshipGraph()
        dad = graph.create(Sex.MALE, "Dad")
        kid = graph.create(Sex.FEMALE, "Kid")
        graph.set_father(kid, dad)
        graph.get_ancestors(kid)  # [dad]
    """

    def __init__(self, config: GraphConfig | None = None):
        self.config = config or GraphConfig()
        self._graph = nx.DiGraph()
        self._ids = itertools.count(1)

    # ─────────────────────────────────────────
    # Arena
    # ─────────────────────────────────────────

    def __contains__(self, person) -> bool:
        if not isinstance(person, Person):
            return False
        data = self._graph.nodes.get(person.id)
        return data is not None and data["person"] is person

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __iter__(self) -> Iterator[Person]:
        for _, person in self._graph.nodes(data="person"):
            yield person

    @property
    def digraph(self) -> nx.DiGraph:
        """Read-only view of the underlying parent -> child graph."""
        return nx.freeze(self._graph.copy(as_view=True))

    def create(self, sex: Sex | str, name: str = "") -> Person:
        """Add a new person to the graph and return its handle."""
        try:
            sex = Sex(sex)
        except ValueError:
            raise ValueError(f"Invalid sex: {sex!r} (expected 'M' or 'F')") from None

        person = Person(id=next(self._ids), sex=sex, name=name)
        self._graph.add_node(person.id, person=person)
        logger.debug("Created %s (id=%d, sex=%s)", person, person.id, sex.value)
        return person

    def destroy(self, person: Person) -> bool:
        """
        Remove a person and sever every link to it.

        Each child of the person loses both of its parent links, and the
        person is removed from its own parents' children. Returns False if
        the person is not in this graph.
        """
        if person not in self:
            logger.debug("Cannot destroy %s: not in graph", person)
            return False

        for child_id in list(self._graph.successors(person.id)):
            self._graph.remove_edges_from(list(self._graph.in_edges(child_id)))

        for role in Role:
            parent_id = self._parent_id(person.id, role)
            if parent_id is not None:
                self.remove_child(self._person(parent_id), person)

        self._graph.remove_node(person.id)
        logger.debug("Destroyed %s (id=%d)", person, person.id)
        return True

    def get_person(self, person_id: int) -> Person:
        """Look up a live person by id. Raises KeyError if there is none."""
        return self._graph.nodes[person_id]["person"]

    def relationships(self) -> list[Relationship]:
        """All parent -> child edges, grouped by parent in creation order."""
        return [
            Relationship(parent_id=u, child_id=v, role=role)
            for u, v, role in self._graph.edges(data="role")
        ]

    def validate(self) -> list[str]:
        """Consistency warnings for this graph; see validate_graph."""
        return validate_graph(self._graph)

    # ─────────────────────────────────────────
    # Accessors
    # ─────────────────────────────────────────

    def get_father(self, person: Person) -> Person | None:
        return self._parent(person, Role.FATHER)

    def get_mother(self, person: Person) -> Person | None:
        return self._parent(person, Role.MOTHER)

    def get_children(self, person: Person) -> tuple[Person, ...]:
        if person not in self:
            return ()
        return tuple(self._person(child_id) for child_id in self._graph.successors(person.id))

    def get_num_children(self, person: Person) -> int:
        if person not in self:
            return 0
        return self._graph.out_degree(person.id)

    def get_name(self, person: Person) -> str | None:
        return person.name if person in self else None

    def get_sex(self, person: Person) -> Sex | None:
        return person.sex if person in self else None

    def has_child(self, parent: Person, candidate: Person) -> bool:
        return (
            parent in self
            and candidate in self
            and self._graph.has_edge(parent.id, candidate.id)
        )

    # ─────────────────────────────────────────
    # Mutators
    # ─────────────────────────────────────────

    def set_father(self, person: Person, candidate: Person) -> bool:
        """Make `candidate` the father of `person`. Fails unless candidate is male."""
        return self._set_parent(person, candidate, Role.FATHER)

    def set_mother(self, person: Person, candidate: Person) -> bool:
        """Make `candidate` the mother of `person`. Fails unless candidate is female."""
        return self._set_parent(person, candidate, Role.MOTHER)

    def add_child(self, parent: Person, child: Person) -> bool:
        """
        Append `child` to the children of `parent`.

        The child's existing parent of the same sex as `parent`, if any, loses
        the child first. Fails if the child is already one of the parent's
        children.
        """
        if parent not in self or child not in self:
            logger.debug("Cannot add child %s to %s: not in graph", child, parent)
            return False

        if self._graph.has_edge(parent.id, child.id):
            logger.debug("Cannot add child %s to %s: already a child", child, parent)
            return False

        if not self._may_link(parent, child):
            return False

        role = Role.for_sex(parent.sex)
        current_id = self._parent_id(child.id, role)
        if current_id is not None:
            self.remove_child(self._person(current_id), child)

        self._graph.add_edge(parent.id, child.id, role=role)
        logger.debug("Linked %s as %s of %s", parent, role.value, child)
        return True

    def remove_child(self, parent: Person, child: Person) -> bool:
        """Unlink `child` from `parent`. Fails if it is not one of their children."""
        if not self.has_child(parent, child):
            logger.debug("Cannot remove child %s from %s: not found", child, parent)
            return False

        self._graph.remove_edge(parent.id, child.id)
        logger.debug("Unlinked %s from %s", child, parent)
        return True

    def remove_all_children(self, parent: Person) -> None:
        if parent not in self:
            return
        edges = list(self._graph.out_edges(parent.id))
        self._graph.remove_edges_from(edges)
        logger.debug("Unlinked %d children from %s", len(edges), parent)

    # ─────────────────────────────────────────
    # Traversals
    # ─────────────────────────────────────────
    #
    # Each traversal appends to `results` (a new list when omitted), skips
    # persons already present in it, and returns it.

    def get_ancestors(self, person: Person, results: list[Person] | None = None) -> list[Person]:
        """Depth-first ancestors, the father's side explored before the mother."""
        if results is None:
            results = []
        if person in self:
            self._collect_ancestors(person.id, results, set(results))
        return results

    def get_descendants(self, person: Person, results: list[Person] | None = None) -> list[Person]:
        """Depth-first descendants, children visited in insertion order."""
        if results is None:
            results = []
        if person in self:
            self._collect_descendants(person.id, results, set(results))
        return results

    def get_siblings(self, person: Person, results: list[Person] | None = None) -> list[Person]:
        """Children of the father, then of the mother, excluding `person`."""
        if results is None:
            results = []
        if person not in self:
            return results

        seen = set(results)
        for role in Role:
            parent_id = self._parent_id(person.id, role)
            if parent_id is None:
                continue
            for sibling_id in self._graph.successors(parent_id):
                sibling = self._person(sibling_id)
                if sibling != person and sibling not in seen:
                    results.append(sibling)
                    seen.add(sibling)
        return results

    def get_cousins(self, person: Person, results: list[Person] | None = None) -> list[Person]:
        """Children of the siblings of the father, then of the mother."""
        if results is None:
            results = []
        if person not in self:
            return results

        seen = set(results)
        for role in Role:
            parent_id = self._parent_id(person.id, role)
            if parent_id is None:
                continue
            for aunt_or_uncle in self.get_siblings(self._person(parent_id)):
                for cousin_id in self._graph.successors(aunt_or_uncle.id):
                    cousin = self._person(cousin_id)
                    if cousin != person and cousin not in seen:
                        results.append(cousin)
                        seen.add(cousin)
        return results

    # ─────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────

    def _person(self, person_id: int) -> Person:
        return self._graph.nodes[person_id]["person"]

    def _parent_id(self, person_id: int, role: Role) -> int | None:
        for parent_id, _, edge_role in self._graph.in_edges(person_id, data="role"):
            if edge_role == role:
                return parent_id
        return None

    def _parent(self, person: Person, role: Role) -> Person | None:
        if person not in self:
            return None
        parent_id = self._parent_id(person.id, role)
        return None if parent_id is None else self._person(parent_id)

    def _set_parent(self, person: Person, candidate: Person, role: Role) -> bool:
        if person not in self or candidate not in self:
            logger.debug("Cannot set %s of %s to %s: not in graph", role.value, person, candidate)
            return False

        if Role.for_sex(candidate.sex) != role:
            logger.debug(
                "Cannot set %s of %s to %s: sex is %s",
                role.value, person, candidate, candidate.sex.value,
            )
            return False

        current_id = self._parent_id(person.id, role)
        if current_id == candidate.id:
            return True

        # Checked before detaching so a rejected link leaves the old parent in place
        if not self._may_link(candidate, person):
            return False

        if current_id is not None:
            self.remove_child(self._person(current_id), person)
        return self.add_child(candidate, person)

    def _may_link(self, parent: Person, child: Person) -> bool:
        if self.config.allow_cycles:
            return True
        if parent.id == child.id or nx.has_path(self._graph, child.id, parent.id):
            logger.debug("Cannot link %s as parent of %s: would create a cycle", parent, child)
            return False
        return True

    def _collect_ancestors(self, person_id: int, results: list[Person], seen: set[Person]) -> None:
        # Explicit stack; the mother is pushed first so the father's side is finished before her
        stack = self._parent_ids(person_id)
        while stack:
            parent_id = stack.pop()
            parent = self._person(parent_id)
            if parent not in seen:
                results.append(parent)
                seen.add(parent)
                stack.extend(self._parent_ids(parent_id))

    def _collect_descendants(self, person_id: int, results: list[Person], seen: set[Person]) -> None:
        stack = list(reversed(list(self._graph.successors(person_id))))
        while stack:
            child_id = stack.pop()
            child = self._person(child_id)
            if child not in seen:
                results.append(child)
                seen.add(child)
                stack.extend(reversed(list(self._graph.successors(child_id))))

    def _parent_ids(self, person_id: int) -> list[int]:
        """Mother then father, in stack order."""
        return [
            parent_id
            for parent_id in (
                self._parent_id(person_id, Role.MOTHER),
                self._parent_id(person_id, Role.FATHER),
            )
            if parent_id is not None
        ]
