"""Conversion of the family graph into a forest of person/union trees."""

import logging

from errors import CyclicAncestryError
from graph import GraphIndex
from models import (
    PERSON,
    UNION,
    HierarchyNode,
    NodeRef,
    PersonNode,
    Union,
    UnionNode,
    union_key,
)
from unions import primary_union
from view_state import ViewState

logger = logging.getLogger(__name__)


def select_roots(index: GraphIndex, unions: dict[str, Union]) -> list[NodeRef]:
    """
    Choose the forest roots, in input order.

    - every union whose partners both have no parents (top-level couples)
    - every person with no parents and no resolvable spouse
    - any other parentless person that no root above reaches, so that no
      one is left out of the drawing

    A person with parents is never a root.
    """
    roots: list[NodeRef] = []
    seen_unions: set[str] = set()

    for person in index.people.values():
        if index.has_parents(person.id):
            continue
        spouses = index.spouses_of(person.id)
        if not spouses:
            roots.append(NodeRef(PERSON, person.id))
            continue
        for spouse_id in spouses:
            if index.has_parents(spouse_id):
                continue
            key = union_key(person.id, spouse_id)
            if key not in seen_unions and key in unions:
                seen_unions.add(key)
                roots.append(NodeRef(UNION, key))

    reached = _reachable_people(index, unions, roots)
    for person in index.people.values():
        if person.id not in reached and not index.has_parents(person.id):
            logger.debug("Adding unreached person %s as a root", person.id)
            roots.append(NodeRef(PERSON, person.id))
            reached |= _reachable_people(index, unions, [NodeRef(PERSON, person.id)])

    return roots


def child_refs(index: GraphIndex, unions: dict[str, Union], ref: NodeRef) -> list[NodeRef]:
    """
    Children of a hierarchy entry.

    A union's children are its shared children. A person whose primary
    partnership has shared children descends through that union first,
    followed by any children not shared with the primary partner; otherwise
    a person's children are their own children. Siblings are ordered by
    order hint, then name.
    """
    if ref.kind == UNION:
        return [NodeRef(PERSON, cid) for cid in unions[ref.id].children_ids]

    children = index.children_of(ref.id)
    union = primary_union(index, unions, ref.id)
    if union is not None and union.children_ids:
        rest = index.sorted_children(children - set(union.children_ids))
        return [NodeRef(UNION, union.id)] + [NodeRef(PERSON, cid) for cid in rest]
    return [NodeRef(PERSON, cid) for cid in index.sorted_children(children)]


def _reachable_people(index: GraphIndex, unions: dict[str, Union], roots: list[NodeRef]) -> set[str]:
    """Ids of every person drawn somewhere below `roots`, union partners included."""
    reached: set[str] = set()
    seen: set[NodeRef] = set()
    stack = list(roots)
    while stack:
        ref = stack.pop()
        if ref in seen:
            continue
        seen.add(ref)
        if ref.kind == UNION:
            reached.update(unions[ref.id].partner_ids)
        else:
            reached.add(ref.id)
        stack.extend(child_refs(index, unions, ref))
    return reached


class HierarchyBuilder:
    """
    Builds the forest for one layout pass.

    Every pass builds the full hierarchy; children of collapsed nodes go to
    `cached_children` instead of `active_children`, so the layout skips them
    while focus can still walk through them. The ordered child references of
    each entity are computed once and kept in the view state.
    """

    def __init__(self, index: GraphIndex, unions: dict[str, Union], view: ViewState,
                 strict: bool = False):
        self.index = index
        self.unions = unions
        self.view = view
        self.strict = strict
        self.roots = select_roots(index, unions)
        self.warnings: list[str] = []
        self._reported_cycles: set[tuple[str, str]] = set()

    def build_forest(self) -> list[HierarchyNode]:
        forest = [self.build(ref) for ref in self.roots]
        logger.debug("Built %d trees", len(forest))
        return forest

    def build(self, ref: NodeRef) -> HierarchyNode:
        return self._build(ref, None, 0, 0, ())

    def _make_node(self, ref: NodeRef, parent, depth: int, band: int) -> HierarchyNode:
        if ref.kind == UNION:
            union = self.unions[ref.id]
            partners = tuple(self.index.people[pid] for pid in union.partner_ids)
            return UnionNode(id=ref.id, parent=parent, depth=depth, band=band,
                             union=union, partners=partners)
        if ref.kind == PERSON:
            return PersonNode(id=ref.id, parent=parent, depth=depth, band=band,
                              person=self.index.people[ref.id])
        raise ValueError(f"Unknown node kind: {ref.kind!r}")

    def _build(self, ref: NodeRef, parent, depth: int, band: int, path: tuple[str, ...]):
        node = self._make_node(ref, parent, depth, band)
        state = self.view.state_for(ref.id, band)
        if state.children is None:
            state.children = child_refs(self.index, self.unions, ref)

        path = path + (ref.id,)
        children = []
        for child in state.children:
            if child.id in path:
                self._report_cycle(path, child.id)
                continue
            # A union sits on its partner's band; a person is one generation below
            child_band = band if child.kind == UNION else band + 1
            children.append(self._build(child, node, depth + 1, child_band, path))

        if state.expanded:
            node.active_children = children
        else:
            node.cached_children = children
        return node

    def _report_cycle(self, path: tuple[str, ...], repeated: str):
        if self.strict:
            raise CyclicAncestryError(list(path) + [repeated])
        key = (path[-1], repeated)
        if key in self._reported_cycles:
            return
        self._reported_cycles.add(key)
        message = str(CyclicAncestryError(list(path) + [repeated])) + "; subtree skipped"
        logger.warning(message)
        self.warnings.append(message)
