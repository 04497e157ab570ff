"""Debug visualization of a computed layout."""

from pathlib import Path

import pydot

from models import PERSON, UNION, LayoutResult, Person

POINTS_PER_INCH = 72

STATUS_COLORS = {
    "living": "#c3e6cb",
    "deceased": "lightgray",
    "unknown": "white",
}


def _label(person: Person) -> str:
    parts = [person.name, person.years]
    if person.subtitle:
        parts.append(person.subtitle)
    return "\\n".join(p.replace('"', '\\"') for p in parts)


def _escape_record(text: str) -> str:
    for ch in "{}|<>":
        text = text.replace(ch, "\\" + ch)
    return text


def build_dot(result: LayoutResult, node_width: float = 180, node_height: float = 64) -> pydot.Dot:
    """
    Build a Graphviz graph with every node pinned at its computed position.

    Args:
        result: Output of the layout
        node_width: Node box width in pixels (taken as points)
        node_height: Node box height in pixels (taken as points)

    Returns:
        pydot graph meant to be rendered with `neato`, which honors pinned
        positions
    """
    P = pydot.Dot(graph_type="digraph")
    P.set("splines", "true")
    P.set("outputorder", "edgesfirst")

    width = f"{node_width / POINTS_PER_INCH:.3f}"
    height = f"{node_height / POINTS_PER_INCH:.3f}"

    for node in result.nodes.values():
        # Graphviz y axis points up
        pos = f"{node.x / POINTS_PER_INCH:.3f},{-node.y / POINTS_PER_INCH:.3f}!"
        style = "rounded,filled,bold" if node.collapsed else "rounded,filled"

        if node.kind == UNION:
            # Twinned boxes joined in one record
            a, b = node.partners
            label = "{" + _escape_record(_label(a)) + "|" + _escape_record(_label(b)) + "}"
            P.add_node(
                pydot.Node(
                    f'"{node.id}"',
                    shape="record",
                    label=f'"{label}"',
                    pos=f'"{pos}"',
                    width=f"{2 * node_width / POINTS_PER_INCH:.3f}",
                    height=height,
                    style=style,
                    fillcolor="lightyellow",
                    fontsize="10",
                )
            )
        elif node.kind == PERSON:
            P.add_node(
                pydot.Node(
                    f'"{node.id}"',
                    shape="box",
                    label=f'"{_label(node.person)}"',
                    pos=f'"{pos}"',
                    width=width,
                    height=height,
                    fixedsize="true",
                    style=style,
                    fillcolor=STATUS_COLORS[node.person.status],
                    fontsize="10",
                )
            )

    for edge in result.edges:
        P.add_edge(pydot.Edge(f'"{edge.source}"', f'"{edge.target}"', color="darkgray"))

    return P


def plot_layout(result: LayoutResult, output_path: Path | None = None, **sizes):
    """
    Draw the layout with Graphviz.

    Args:
        result: Output of the layout
        output_path: Path to save the image (PNG, SVG, PDF or DOT). If None,
            displays interactively.
    """
    P = build_dot(result, **sizes)

    if output_path:
        ext = output_path.suffix.lower().lstrip(".")
        if ext == "dot":
            P.write(str(output_path), format="raw")
        else:
            if ext not in ("png", "svg", "pdf"):
                ext = "png"
            P.write(str(output_path), prog="neato", format=ext)
        print(f"Layout saved to {output_path}")
    else:
        # Save to temporary file and display
        import tempfile

        import matplotlib.image as mpimg
        import matplotlib.pyplot as plt

        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            P.write(f.name, prog="neato", format="png")
            img = mpimg.imread(f.name)
            plt.figure(figsize=(20, 16))
            plt.imshow(img)
            plt.axis("off")
            plt.tight_layout()
            plt.show()
