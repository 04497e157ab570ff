"""Graph index: id lookup and parent/child structure built with NetworkX."""

from dataclasses import dataclass, field
import logging

import networkx as nx

from errors import DanglingReferenceError, DuplicateIdError
from models import Person

logger = logging.getLogger(__name__)

MAX_PARENTS = 2


@dataclass
class GraphIndex:
    """
    Read-only lookup structures over a person list.

    `lineage` is a directed graph with one node per person and a PARENT_OF
    edge from every resolvable parent to the child. Spousal links are kept
    per person (resolved, in declaration order) rather than as graph edges.
    """

    people: dict[str, Person]
    lineage: nx.DiGraph
    spouses: dict[str, tuple[str, ...]]
    warnings: list[str] = field(default_factory=list)

    def __contains__(self, person_id: str) -> bool:
        return person_id in self.people

    def __len__(self) -> int:
        return len(self.people)

    def get(self, person_id: str) -> Person | None:
        return self.people.get(person_id)

    def children_of(self, person_id: str) -> set[str]:
        if person_id not in self.lineage:
            return set()
        return set(self.lineage.successors(person_id))

    def parents_of(self, person_id: str) -> list[str]:
        """Resolved parents, in the order the child's record lists them."""
        person = self.people.get(person_id)
        if person is None:
            return []
        return [pid for pid in person.parent_ids if self.lineage.has_edge(pid, person_id)]

    def spouses_of(self, person_id: str) -> tuple[str, ...]:
        return self.spouses.get(person_id, ())

    def primary_spouse(self, person_id: str) -> str | None:
        spouses = self.spouses_of(person_id)
        return spouses[0] if spouses else None

    def has_parents(self, person_id: str) -> bool:
        return person_id in self.lineage and self.lineage.in_degree(person_id) > 0

    def sort_key(self, person_id: str) -> tuple:
        person = self.people[person_id]
        return (person.order, person.name, person.id)

    def sorted_children(self, ids) -> list[str]:
        """Order sibling ids by sibling-order hint, then name."""
        return sorted(ids, key=self.sort_key)

    def search(self, query: str) -> list[str]:
        """Ids of people whose name contains `query` (case-insensitive), in input order."""
        q = query.strip().lower()
        if not q:
            return []
        return [p.id for p in self.people.values() if q in p.name.lower()]

    def person_details(self, person_id: str) -> dict:
        """Names of a person's relatives, for a details panel."""
        person = self.people.get(person_id)
        if person is None:
            return {}

        def names(ids) -> list[str]:
            return [self.people[i].name for i in ids]

        if person.birth_year is not None and person.death_year is not None:
            years = f"{person.birth_year} – {person.death_year}"
        elif person.birth_year is not None:
            years = str(person.birth_year)
        elif person.death_year is not None:
            years = f" – {person.death_year}"
        else:
            years = "—"

        return {
            "id": person.id,
            "name": person.name,
            "years": years,
            "notes": person.notes or "",
            "photo": person.photo,
            "parents": names(self.parents_of(person_id)),
            "spouses": names(self.spouses_of(person_id)),
            "children": names(self.sorted_children(self.children_of(person_id))),
        }


def build_index(people: list[Person]) -> GraphIndex:
    """
    Build the graph index from a flat person list.

    Raises:
        DuplicateIdError: if two records share an id.

    Parent and spouse references to unknown ids are dropped and reported
    through the log and `GraphIndex.warnings`.
    """
    by_id: dict[str, Person] = {}
    for person in people:
        if person.id in by_id:
            raise DuplicateIdError(person.id)
        by_id[person.id] = person

    G = nx.DiGraph()
    warnings: list[str] = []

    # Add nodes (persons)
    for person in by_id.values():
        G.add_node(person.id, person=person)

    # Add edges (parent -> child)
    for child in by_id.values():
        resolved = 0
        for pid in child.parent_ids:
            if pid not in by_id:
                message = str(DanglingReferenceError(child.id, pid, "parent"))
                logger.warning(message)
                warnings.append(message)
                continue
            if resolved == MAX_PARENTS:
                message = f"{child.id!r} has more than {MAX_PARENTS} parents; ignoring {pid!r}"
                logger.warning(message)
                warnings.append(message)
                continue
            G.add_edge(pid, child.id, relationship_type="PARENT_OF")
            resolved += 1

    spouses: dict[str, tuple[str, ...]] = {}
    for person in by_id.values():
        resolved_spouses = []
        for sid in person.spouse_ids:
            if sid not in by_id:
                message = str(DanglingReferenceError(person.id, sid, "spouse"))
                logger.warning(message)
                warnings.append(message)
                continue
            resolved_spouses.append(sid)
        spouses[person.id] = tuple(resolved_spouses)

    # A partnership listed on one side only is still a partnership of both;
    # reverse links go after the person's own list.
    for person in by_id.values():
        for sid in spouses[person.id]:
            if person.id not in spouses[sid]:
                spouses[sid] = spouses[sid] + (person.id,)

    logger.debug(
        "Indexed %d people and %d parent-child links", G.number_of_nodes(), G.number_of_edges()
    )
    return GraphIndex(people=by_id, lineage=G, spouses=spouses, warnings=warnings)
