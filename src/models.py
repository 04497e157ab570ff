"""Data classes for family tree entities and layout output."""

from dataclasses import dataclass, field


PERSON = "person"
UNION = "union"


@dataclass(frozen=True)
class Person:
    id: str
    name: str
    birth_year: int | None = None
    death_year: int | None = None
    subtitle: str | None = None
    location: str | None = None
    photo: str | None = None
    notes: str | None = None
    parent_ids: tuple[str, ...] = ()
    spouse_ids: tuple[str, ...] = ()
    order: int = 0  # sibling-order hint

    @property
    def status(self) -> str:
        if self.death_year is not None:
            return "deceased"
        if self.birth_year is not None:
            return "living"
        return "unknown"

    @property
    def years(self) -> str:
        born = str(self.birth_year) if self.birth_year is not None else "—"
        if self.death_year is not None:
            return f"{born}–{self.death_year}"
        return born


def union_key(a: str, b: str) -> str:
    """Canonical id of the partnership between `a` and `b`, independent of argument order."""
    first, second = sorted((a, b))
    return f"{first}+{second}"


@dataclass(frozen=True)
class Union:
    id: str
    partner_ids: tuple[str, str]
    children_ids: tuple[str, ...] = ()


# ============================================================================
# Hierarchy nodes
# ============================================================================


@dataclass(frozen=True)
class NodeRef:
    """Identity of a hierarchy entry: which kind of entity and its id."""

    kind: str
    id: str


@dataclass(eq=False)
class HierarchyNode:
    """
    One occurrence of a person or union inside a forest tree.

    The same entity may occur several times across the forest; occurrences
    are reconciled by id during layout. `active_children` holds the
    children materialized for layout (expanded node), `cached_children`
    holds them while the node is collapsed. At most one of the two is
    non-empty.
    """

    id: str
    parent: "HierarchyNode | None" = None
    depth: int = 0
    band: int = 0
    active_children: list["HierarchyNode"] = field(default_factory=list)
    cached_children: list["HierarchyNode"] = field(default_factory=list)

    kind = ""

    @property
    def ref(self) -> NodeRef:
        return NodeRef(self.kind, self.id)

    @property
    def has_descendants(self) -> bool:
        return bool(self.active_children or self.cached_children)

    @property
    def collapsed(self) -> bool:
        return bool(self.cached_children) and not self.active_children

    def ancestors(self):
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def walk(self, include_cached: bool = False):
        """Breadth-first traversal, optionally descending into collapsed children."""
        queue = [self]
        while queue:
            node = queue.pop(0)
            yield node
            queue.extend(node.active_children)
            if include_cached:
                queue.extend(node.cached_children)

    def height(self) -> int:
        """Longest path (in edges) to a materialized leaf."""
        if not self.active_children:
            return 0
        return 1 + max(child.height() for child in self.active_children)


@dataclass(eq=False)
class PersonNode(HierarchyNode):
    person: Person | None = None

    kind = PERSON


@dataclass(eq=False)
class UnionNode(HierarchyNode):
    union: Union | None = None
    partners: tuple[Person, Person] | None = None

    kind = UNION


# ============================================================================
# Layout output
# ============================================================================


@dataclass
class LaidOutNode:
    id: str
    kind: str
    x: float
    y: float
    depth: int
    generation: int
    collapsed: bool
    has_children: bool
    forest: int
    person: Person | None = None
    partners: tuple[Person, Person] | None = None


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    span: float  # vertical distance of the kept instance


@dataclass
class LayoutResult:
    nodes: dict[str, LaidOutNode] = field(default_factory=dict)
    edges: list[Edge] = field(default_factory=list)
    forest_count: int = 0

    def edge_keys(self) -> set[tuple[str, str]]:
        return {(e.source, e.target) for e in self.edges}

    def bounds(self) -> tuple[float, float, float, float] | None:
        """(min_x, min_y, max_x, max_y) over all node centers, or None when empty."""
        if not self.nodes:
            return None
        xs = [n.x for n in self.nodes.values()]
        ys = [n.y for n in self.nodes.values()]
        return min(xs), min(ys), max(xs), max(ys)
