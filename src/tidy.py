"""
Tidy tree layout (Reingold-Tilford, in the linear-time form of Buchheim, Junger and Leipert).

Parents are centered over their children, subtrees are packed as close as
the separation allows, and identical subtrees are drawn identically.
Separation between adjacent nodes is 1 unit for siblings and 2 for
cousins; units are scaled by the fixed node size.
"""

from models import HierarchyNode


class _TidyNode:
    __slots__ = ("node", "parent", "children", "number", "prelim", "mod", "change", "shift",
                 "thread", "ancestor", "x")

    def __init__(self, node, parent, number):
        self.node = node
        self.parent = parent
        self.children: list[_TidyNode] = []
        self.number = number  # index among siblings
        self.prelim = 0.0
        self.mod = 0.0
        self.change = 0.0
        self.shift = 0.0
        self.thread = None
        self.ancestor = self
        self.x = 0.0


def _separation(a: _TidyNode, b: _TidyNode) -> float:
    return 1.0 if a.parent is b.parent else 2.0


def _next_left(v: _TidyNode):
    return v.children[0] if v.children else v.thread


def _next_right(v: _TidyNode):
    return v.children[-1] if v.children else v.thread


def _move_subtree(wl: _TidyNode, wr: _TidyNode, shift: float):
    change = shift / (wr.number - wl.number)
    wr.change -= change
    wr.shift += shift
    wl.change += change
    wr.prelim += shift
    wr.mod += shift


def _execute_shifts(v: _TidyNode):
    shift = change = 0.0
    for w in reversed(v.children):
        w.prelim += shift
        w.mod += shift
        change += w.change
        shift += w.shift + change


def _next_ancestor(vil: _TidyNode, v: _TidyNode, default_ancestor: _TidyNode) -> _TidyNode:
    return vil.ancestor if vil.ancestor.parent is v.parent else default_ancestor


def _apportion(v: _TidyNode, w: _TidyNode | None, default_ancestor: _TidyNode) -> _TidyNode:
    if w is None:
        return default_ancestor

    vir = vor = v
    vil = w
    vol = v.parent.children[0]
    sir, sor, sil, sol = vir.mod, vor.mod, vil.mod, vol.mod

    vil = _next_right(vil)
    vir = _next_left(vir)
    while vil is not None and vir is not None:
        vol = _next_left(vol)
        vor = _next_right(vor)
        vor.ancestor = v
        shift = vil.prelim + sil - vir.prelim - sir + _separation(vil, vir)
        if shift > 0:
            _move_subtree(_next_ancestor(vil, v, default_ancestor), v, shift)
            sir += shift
            sor += shift
        sil += vil.mod
        sir += vir.mod
        sol += vol.mod
        sor += vor.mod
        vil = _next_right(vil)
        vir = _next_left(vir)

    if vil is not None and _next_right(vor) is None:
        vor.thread = vil
        vor.mod += sil - sor
    if vir is not None and _next_left(vol) is None:
        vol.thread = vir
        vol.mod += sir - sol
        default_ancestor = v
    return default_ancestor


def _wrap(root: HierarchyNode) -> tuple[_TidyNode, list[_TidyNode]]:
    """Mirror the materialized part of the tree; returns the wrapped root and a
    post-order list (children left to right, then the parent)."""
    wrapped_root = _TidyNode(root, None, 0)
    order = []
    stack = [wrapped_root]
    while stack:
        t = stack.pop()
        order.append(t)
        t.children = [_TidyNode(c, t, i) for i, c in enumerate(t.node.active_children)]
        stack.extend(t.children)
    order.reverse()
    return wrapped_root, order


def tidy_tree(root: HierarchyNode, dx: float, dy: float) -> list[tuple[HierarchyNode, float, float]]:
    """
    Lay out the materialized part of a tree.

    Args:
        root: Root of the tree; only `active_children` are followed
        dx: Horizontal distance of one separation unit
        dy: Vertical distance between depth levels

    Returns:
        (node, x, y) for every materialized node, breadth-first. The root
        is at x = 0; coordinates to its left are negative.
    """
    wrapped_root, postorder = _wrap(root)

    # First walk, post-order
    ancestors: dict[int, _TidyNode] = {}
    for v in postorder:
        siblings = v.parent.children if v.parent is not None else [v]
        w = siblings[v.number - 1] if v.number > 0 else None
        if v.children:
            _execute_shifts(v)
            midpoint = (v.children[0].prelim + v.children[-1].prelim) / 2
            if w is not None:
                v.prelim = w.prelim + _separation(v, w)
                v.mod = v.prelim - midpoint
            else:
                v.prelim = midpoint
        elif w is not None:
            v.prelim = w.prelim + _separation(v, w)

        if v.parent is not None:
            key = id(v.parent)
            ancestors[key] = _apportion(v, w, ancestors.get(key, siblings[0]))

    # Second walk, breadth-first (parents before children)
    wrapped_root.x = 0.0
    wrapped_root.mod -= wrapped_root.prelim
    result = []
    queue = [wrapped_root]
    while queue:
        v = queue.pop(0)
        if v.parent is not None:
            v.x = v.prelim + v.parent.mod
            v.mod += v.parent.mod
        result.append((v.node, v.x * dx, v.node.depth * dy))
        queue.extend(v.children)
    return result
