"""Expand/collapse, focus and pan/zoom state that survives re-layout."""

from dataclasses import dataclass, field
import logging

from config import LayoutConfig
from errors import UnknownNodeError
from models import HierarchyNode, LaidOutNode, NodeRef

logger = logging.getLogger(__name__)


@dataclass
class NodeState:
    expanded: bool
    # Child references, computed once per session so re-expansion needs no recomputation
    children: list[NodeRef] | None = None


@dataclass
class ViewTransform:
    x: float = 0.0
    y: float = 0.0
    k: float = 1.0

    def apply(self, x: float, y: float) -> tuple[float, float]:
        """Screen position of a layout coordinate."""
        return x * self.k + self.x, y * self.k + self.y


@dataclass
class ViewState:
    """
    Per-session view state keyed by entity id.

    Every occurrence of a person or union shares one expand/collapse flag,
    so a toggle coming back from the renderer (which only knows ids)
    affects the entity wherever it is drawn.
    """

    config: LayoutConfig = field(default_factory=LayoutConfig)
    nodes: dict[str, NodeState] = field(default_factory=dict)
    focused_id: str | None = None
    transform: ViewTransform = field(default_factory=ViewTransform)

    def __post_init__(self):
        self.transform = self._reset_transform()

    def _reset_transform(self) -> ViewTransform:
        tx, ty = self.config.reset_translate
        return ViewTransform(tx, ty, self.config.reset_scale)

    def state_for(self, node_id: str, band: int) -> NodeState:
        """State of a node, creating it with the initial policy on first encounter."""
        state = self.nodes.get(node_id)
        if state is None:
            state = NodeState(expanded=band < self.config.expanded_bands)
            self.nodes[node_id] = state
        return state

    def _require(self, node_id: str) -> NodeState:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def is_expanded(self, node_id: str) -> bool:
        return self._require(node_id).expanded

    def toggle(self, node_id: str) -> bool:
        """Flip a node between expanded and collapsed. Returns the new expanded flag."""
        state = self._require(node_id)
        state.expanded = not state.expanded
        logger.debug("%s %s", "Expanded" if state.expanded else "Collapsed", node_id)
        return state.expanded

    def expand(self, node_id: str):
        self._require(node_id).expanded = True

    def collapse(self, node_id: str):
        self._require(node_id).expanded = False

    def expand_all(self):
        for state in self.nodes.values():
            state.expanded = True

    def collapse_all(self, keep_expanded=()):
        """Collapse every node except the given ids (typically the forest roots)."""
        keep = set(keep_expanded)
        for node_id, state in self.nodes.items():
            state.expanded = node_id in keep

    # ------------------------------------------------------------------------
    # Focus and framing
    # ------------------------------------------------------------------------

    def reveal(self, node_id: str, forest: list[HierarchyNode]) -> HierarchyNode:
        """
        Expand the ancestor chain of the first occurrence of `node_id`.

        The forest must be the full hierarchy from the last build, collapsed
        subtrees included; `parent` links are followed up to the root.
        """
        for root in forest:
            for node in root.walk(include_cached=True):
                if node.id == node_id:
                    for ancestor in node.ancestors():
                        self._require(ancestor.id).expanded = True
                    return node
        raise UnknownNodeError(node_id)

    def focus(self, node_id: str, forest: list[HierarchyNode]) -> HierarchyNode:
        """Make `node_id` the focused node, expanding whatever hides it. Expand/collapse
        state of the node itself is left alone."""
        node = self.reveal(node_id, forest)
        self.focused_id = node_id
        return node

    def frame(self, node: LaidOutNode, viewport: tuple[float, float]) -> ViewTransform:
        """Pan so that `node` sits in the middle of the viewport, keeping the current scale."""
        width, height = viewport
        k = self.transform.k
        self.transform = ViewTransform(width / 2 - node.x * k, height / 2 - node.y * k, k)
        return self.transform

    def zoom(self, k: float) -> ViewTransform:
        k = min(max(k, self.config.min_zoom), self.config.max_zoom)
        self.transform = ViewTransform(self.transform.x, self.transform.y, k)
        return self.transform

    def pan(self, dx: float, dy: float) -> ViewTransform:
        self.transform = ViewTransform(self.transform.x + dx, self.transform.y + dy, self.transform.k)
        return self.transform

    def reset_view(self) -> ViewTransform:
        self.transform = self._reset_transform()
        self.focused_id = None
        return self.transform
