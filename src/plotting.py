"""Preview output for a computed layout: matplotlib images and Graphviz DOT."""

from pathlib import Path

import pydot

from labels import format_date_label
from models import LayoutConfig, Person, TreeLayout

# Points per layout unit when pinning DOT positions
DOT_SCALE = 0.5


def _fill_color(person: Person) -> str:
    if person.gender == "male":
        return "lightblue"
    if person.gender == "female":
        return "lightpink"
    return "lightgray"


def _label(person: Person) -> str:
    dates = format_date_label(person.birth_year, person.death_year)
    name = person.name or person.id
    return f"{name}\n{dates}" if dates else name


def plot_layout(layout: TreeLayout, config: LayoutConfig, output_path: Path | None = None):
    """
    Draw a computed layout as boxes and orthogonal connectors.

    Args:
        layout: Result of compute_layout
        config: The config the layout was computed with (for box sizes)
        output_path: Image path (.png, .svg or .pdf). If None, displays interactively.
    """
    import matplotlib.pyplot as plt
    from matplotlib.patches import FancyBboxPatch

    inches_per_unit = 1 / 100
    width = max(layout.width, config.node_width) * inches_per_unit
    height = max(layout.height, config.node_height) * inches_per_unit
    fig, ax = plt.subplots(figsize=(max(width, 4), max(height, 3)))

    for edge in layout.edges:
        xs = [p.x for p in edge.points]
        ys = [p.y for p in edge.points]
        ax.plot(xs, ys, color="darkgray", linewidth=1, zorder=1)

    for node in layout.nodes:
        ax.add_patch(
            FancyBboxPatch(
                (node.x, node.y),
                config.node_width,
                config.node_height,
                boxstyle="round,pad=0,rounding_size=8",
                facecolor=_fill_color(node.person),
                edgecolor="gray",
                zorder=2,
            )
        )
        ax.text(
            node.x + config.node_width / 2,
            node.y + config.node_height / 2,
            _label(node.person),
            ha="center",
            va="center",
            fontsize=7,
            zorder=3,
        )

    ax.set_xlim(-10, layout.width + 10)
    ax.set_ylim(layout.height + 10, -10)  # y grows downward
    ax.set_aspect("equal")
    ax.axis("off")
    fig.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
        plt.close(fig)
        print(f"Preview saved to {output_path}")
    else:
        plt.show()


def layout_to_dot(layout: TreeLayout, config: LayoutConfig) -> pydot.Dot:
    """
    Build a Graphviz graph with every node pinned where the layout put it.

    Render with `neato -n`. Coordinates are the box centres in points with y
    flipped, since Graphviz y grows upward.
    """
    P = pydot.Dot(graph_type="digraph")
    P.set("splines", "ortho")
    P.set("outputorder", "edgesfirst")

    for node in layout.nodes:
        cx = (node.x + config.node_width / 2) * DOT_SCALE
        cy = (layout.height - node.y - config.node_height / 2) * DOT_SCALE
        P.add_node(
            pydot.Node(
                node.id,
                label=_label(node.person),
                shape="box",
                style="rounded,filled",
                fillcolor=_fill_color(node.person),
                fontsize="10",
                width=f"{config.node_width * DOT_SCALE / 72:.3f}",
                height=f"{config.node_height * DOT_SCALE / 72:.3f}",
                fixedsize="true",
                pos=f"{cx:.1f},{cy:.1f}!",
            )
        )

    for edge in layout.edges:
        attrs = {"color": "darkgray"}
        if edge.type == "spouse":
            attrs["dir"] = "none"
        P.add_edge(pydot.Edge(edge.from_id, edge.to_id, **attrs))

    return P


def write_dot(layout: TreeLayout, config: LayoutConfig, output_path: Path):
    P = layout_to_dot(layout, config)
    output_path.write_text(P.to_string(), encoding="utf-8")
    print(f"DOT saved to {output_path}")
