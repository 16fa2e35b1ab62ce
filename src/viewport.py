"""Hit-testing and visibility checks for a rendered layout."""

from typing import Callable, Iterable, NamedTuple, TypeVar

from models import LayoutNode

T = TypeVar("T")


class PanZoom(NamedTuple):
    translate_x: float = 0.0
    translate_y: float = 0.0
    scale: float = 1.0


class NodeBox(NamedTuple):
    x: float
    y: float
    width: float
    height: float


class Viewport(NamedTuple):
    x: float
    y: float
    width: float
    height: float
    scale: float = 1.0


def find_tapped_node(
    screen_x: float,
    screen_y: float,
    nodes: Iterable[LayoutNode],
    node_width: float,
    node_height: float,
    padding: float,
    transform: PanZoom = PanZoom(),
) -> LayoutNode | None:
    """
    Return the node under a screen point, or None.

    The point is mapped back into layout space with
    (screen - translate) / scale - padding; box edges count as hits.
    """
    tree_x = (screen_x - transform.translate_x) / transform.scale - padding
    tree_y = (screen_y - transform.translate_y) / transform.scale - padding

    for node in nodes:
        if (
            node.x <= tree_x <= node.x + node_width
            and node.y <= tree_y <= node.y + node_height
        ):
            return node
    return None


def is_node_visible(box: NodeBox, viewport: Viewport, margin: float = 100) -> bool:
    """Whether a box overlaps the viewport grown by `margin` on every side."""
    view_left = viewport.x - margin
    view_right = viewport.x + viewport.width / viewport.scale + margin
    view_top = viewport.y - margin
    view_bottom = viewport.y + viewport.height / viewport.scale + margin

    return (
        box.x + box.width > view_left
        and box.x < view_right
        and box.y + box.height > view_top
        and box.y < view_bottom
    )


def cull_nodes(
    items: Iterable[T],
    viewport: Viewport,
    box: Callable[[T], NodeBox],
    margin: float = 100,
) -> list[T]:
    """Keep only the items whose box is visible, in their original order."""
    return [item for item in items if is_node_visible(box(item), viewport, margin)]
