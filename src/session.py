"""
One viewing session over a loaded dataset.

All work happens synchronously on the triggering event (load, toggle,
focus, resize): the hierarchy is rebuilt and laid out from scratch each
time. Layout output is keyed by id; node objects are new on every pass.
"""

import logging

from config import LayoutConfig
from errors import UnknownNodeError
from generations import assign_generations
from graph import GraphIndex, build_index
from hierarchy import HierarchyBuilder
from layout import layout_forest
from models import HierarchyNode, LayoutResult, Person, Union
from render import build_render_contract
from unions import synthesize_unions, unions_of
from validation import validate_index
from view_state import ViewState, ViewTransform

logger = logging.getLogger(__name__)


class FamilyTreeSession:
    def __init__(self, config: LayoutConfig | None = None, strict: bool = False):
        self.config = config or LayoutConfig()
        self.strict = strict
        self.index: GraphIndex | None = None
        self.unions: dict[str, Union] = {}
        self.generations: dict[str, int] = {}
        self.view = ViewState(self.config)
        self.builder: HierarchyBuilder | None = None
        self.forest: list[HierarchyNode] = []
        self.result = LayoutResult()
        self.warnings: list[str] = []

    def load(self, people: list[Person]) -> LayoutResult:
        """
        Replace the dataset and lay it out.

        View state from a previous dataset is discarded.

        Raises:
            DuplicateIdError: if two people share an id
        """
        self.index = build_index(people)
        self.unions = synthesize_unions(self.index)
        self.generations = assign_generations(self.index, self.config.anchor_id)
        self.view = ViewState(self.config)
        self.builder = HierarchyBuilder(self.index, self.unions, self.view, strict=self.strict)

        self.warnings = list(self.index.warnings)
        for w in validate_index(self.index):
            logger.warning(w)
            self.warnings.append(w)

        logger.info(
            "Loaded %d people, %d unions, %d trees",
            len(self.index), len(self.unions), len(self.builder.roots),
        )
        return self.layout()

    def _require_loaded(self):
        if self.builder is None:
            raise RuntimeError("No dataset loaded")

    def layout(self) -> LayoutResult:
        """Rebuild the hierarchy from the current view state and lay it out."""
        self._require_loaded()
        self.forest = self.builder.build_forest()
        self.result = layout_forest(self.forest, self.generations, self.config)
        for w in self.builder.warnings:
            if w not in self.warnings:
                self.warnings.append(w)
        return self.result

    def _require_node(self, node_id: str):
        self._require_loaded()
        if node_id not in self.view.nodes:
            raise UnknownNodeError(node_id)

    def _drawn_as(self, person_id: str) -> str | None:
        """Id of the node a person is drawn in: their own, or the first union box holding them."""
        if person_id in self.view.nodes:
            return person_id
        for union in unions_of(self.unions, person_id):
            if union.id in self.view.nodes:
                return union.id
        return None

    def toggle(self, node_id: str) -> LayoutResult:
        self._require_node(node_id)
        self.view.toggle(node_id)
        return self.layout()

    def expand_all(self) -> LayoutResult:
        self._require_loaded()
        self.view.expand_all()
        return self.layout()

    def collapse_all(self) -> LayoutResult:
        self._require_loaded()
        self.view.collapse_all(keep_expanded=[ref.id for ref in self.builder.roots])
        return self.layout()

    def focus(self, node_id: str, viewport: tuple[float, float]) -> ViewTransform:
        """
        Focus a node: reveal it if hidden, then center it in the viewport.

        A person drawn only as a partner inside a union box is focused
        through that union.
        """
        self._require_loaded()
        target = self._drawn_as(node_id)
        if target is None:
            raise UnknownNodeError(node_id)
        self.view.focus(target, self.forest)
        self.layout()
        return self.view.frame(self.result.nodes[target], viewport)

    def search_and_focus(self, query: str, viewport: tuple[float, float]) -> str | None:
        """Focus the first person whose name matches `query`.

        Returns the id of the focused node, which is a union id for a person
        drawn only inside a union box, or None if nobody matches.
        """
        self._require_loaded()
        for person_id in self.index.search(query):
            target = self._drawn_as(person_id)
            if target is not None:
                self.focus(target, viewport)
                return target
        return None

    def activate(self, node_id: str, count: int, viewport: tuple[float, float]):
        """Renderer gesture: a double activation toggles, a single one focuses."""
        if count >= 2:
            return self.toggle(node_id)
        return self.focus(node_id, viewport)

    def frame_initial(self, viewport: tuple[float, float]) -> ViewTransform:
        """Initial view: a lone node is centered, anything else gets the reset view."""
        self._require_loaded()
        if len(self.result.nodes) == 1:
            (node,) = self.result.nodes.values()
            return self.view.frame(node, viewport)
        return self.view.reset_view()

    def reset_view(self) -> ViewTransform:
        return self.view.reset_view()

    def details(self, person_id: str) -> dict:
        self._require_loaded()
        if person_id not in self.index:
            raise UnknownNodeError(person_id)
        return self.index.person_details(person_id)

    def render(self) -> dict:
        return build_render_contract(self.result, self.view)
