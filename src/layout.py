"""Forest layout: tidy tree per root, generation rows, and reconciliation of repeated nodes."""

import logging

from config import LayoutConfig
from generations import generation_of
from models import (
    Edge,
    HierarchyNode,
    LaidOutNode,
    LayoutResult,
    PersonNode,
    UnionNode,
)
from tidy import tidy_tree

logger = logging.getLogger(__name__)


def node_generation(node: HierarchyNode, generations: dict[str, int]) -> int:
    if isinstance(node, UnionNode):
        return generation_of(generations, node.union)
    if isinstance(node, PersonNode):
        return generation_of(generations, node.id)
    raise TypeError(f"Unsupported hierarchy node: {type(node).__name__}")


def _laid_out(node: HierarchyNode, x: float, y: float, generation: int, forest: int) -> LaidOutNode:
    common = dict(
        id=node.id,
        kind=node.kind,
        x=x,
        y=y,
        depth=node.depth,
        generation=generation,
        collapsed=node.collapsed,
        has_children=node.has_descendants,
        forest=forest,
    )
    if isinstance(node, UnionNode):
        return LaidOutNode(partners=node.partners, **common)
    if isinstance(node, PersonNode):
        return LaidOutNode(person=node.person, **common)
    raise TypeError(f"Unsupported hierarchy node: {type(node).__name__}")


def layout_forest(
    forest: list[HierarchyNode], generations: dict[str, int], config: LayoutConfig
) -> LayoutResult:
    """
    Position every materialized node of the forest and reconcile duplicates.

    1. Each tree gets an independent tidy-tree layout (x only is kept).
    2. y comes from the node's generation, plus a vertical offset per tree;
       trees are stacked top to bottom.
    3. Each tree is shifted so its leftmost node sits at the left margin.
    4. An entity drawn more than once keeps its topmost occurrence; on a
       tie the first one in forest order wins.
    5. Edges are keyed by (source id, target id); the shortest occurrence
       is kept and edges to dropped entities are discarded.

    Returns:
        LayoutResult with exactly one node per entity id.
    """
    row = config.row_height
    y_offset = config.top_margin

    nodes: dict[str, LaidOutNode] = {}
    # (source, target) -> span, in first-encountered order
    spans: dict[tuple[str, str], float] = {}
    occurrences = 0

    for forest_index, root in enumerate(forest):
        placed = tidy_tree(root, config.column_width, row)
        min_x = min(x for _, x, _ in placed)

        positions: dict[int, tuple[float, float]] = {}
        for node, x, _ in placed:
            generation = node_generation(node, generations)
            x = x - min_x + config.left_margin
            y = generation * row + y_offset
            positions[id(node)] = (x, y)
            occurrences += 1

            laid = _laid_out(node, x, y, generation, forest_index)
            current = nodes.get(node.id)
            if current is None or laid.y < current.y:
                nodes[node.id] = laid

        for node, _, _ in placed:
            _, parent_y = positions[id(node)]
            for child in node.active_children:
                _, child_y = positions[id(child)]
                key = (node.id, child.id)
                span = abs(child_y - parent_y)
                if key not in spans or span < spans[key]:
                    spans[key] = span

        y_offset += (root.height() + 1) * row + config.forest_gap

    edges = [
        Edge(source, target, span)
        for (source, target), span in spans.items()
        if source in nodes and target in nodes
    ]

    logger.debug(
        "Laid out %d trees: %d node occurrences reconciled to %d nodes, %d edges",
        len(forest), occurrences, len(nodes), len(edges),
    )
    return LayoutResult(nodes=nodes, edges=edges, forest_count=len(forest))
