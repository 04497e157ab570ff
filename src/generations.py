"""Generation numbering relative to an anchor person."""

from collections import deque
import logging

from errors import MissingAnchorError
from graph import GraphIndex
from models import Union

logger = logging.getLogger(__name__)


def assign_generations(index: GraphIndex, anchor_id: str | None) -> dict[str, int]:
    """
    Compute each reachable person's generation offset from the anchor.

    Two breadth-first passes start at the anchor (generation 0): one up
    through parents (each parent is one less than the child), one down
    through children (each child is one more than the parent). A person
    already numbered is never revisited, so the passes terminate on any
    input.

    Args:
        index: The graph index
        anchor_id: Id of the person numbered 0

    Returns:
        Mapping of person id to generation. Empty if the anchor is not in
        the dataset; people unreachable from the anchor are absent.
    """
    if anchor_id is None or anchor_id not in index:
        logger.warning(str(MissingAnchorError(anchor_id)))
        return {}

    gen: dict[str, int] = {anchor_id: 0}

    # Ancestors (negative direction)
    queue = deque([anchor_id])
    while queue:
        pid = queue.popleft()
        for parent in index.parents_of(pid):
            if parent not in gen:
                gen[parent] = gen[pid] - 1
                queue.append(parent)

    # Descendants (positive direction)
    queue = deque([anchor_id])
    while queue:
        pid = queue.popleft()
        for child in index.sorted_children(index.children_of(pid)):
            if child not in gen:
                gen[child] = gen[pid] + 1
                queue.append(child)

    logger.debug("Assigned generations to %d of %d people", len(gen), len(index))
    return gen


def generation_of(generations: dict[str, int], entity) -> int:
    """
    Generation used for vertical placement.

    People missing from the mapping sit on generation 0. A union sits on
    the row of its more senior partner.
    """
    if isinstance(entity, Union):
        return min(generations.get(pid, 0) for pid in entity.partner_ids)
    return generations.get(entity, 0)
