"""Top-level layout entry point."""

import logging
from typing import Mapping

from graph import assign_generations, build_graph, group_by_generation
from models import DEFAULT_LAYOUT_CONFIG, LayoutConfig, Person, Relationship, TreeLayout
from positioner import calculate_positions

log = logging.getLogger(__name__)


def resolve_config(config: LayoutConfig | Mapping[str, float] | None) -> LayoutConfig:
    """Merge a partial override mapping onto the defaults."""
    if isinstance(config, LayoutConfig):
        return config
    return DEFAULT_LAYOUT_CONFIG.with_overrides(config)


def compute_layout(
    people: list[Person],
    relationships: list[Relationship],
    root_id: str | None = None,
    config: LayoutConfig | Mapping[str, float] | None = None,
) -> TreeLayout:
    """
    Compute node positions and edge polylines for a family graph.

    Every call rebuilds the graph from scratch; nothing is cached and the
    inputs are not modified.

    Args:
        people: Persons to place. Ids must be unique.
        relationships: Typed links between persons. Links to unknown ids
            are ignored.
        root_id: Person placed at generation 0. Defaults to the first
            person without parents.
        config: A LayoutConfig, or a mapping overriding some of its fields.

    Returns:
        A TreeLayout whose bounding box starts at (0, 0).
    """
    cfg = resolve_config(config)

    if not people:
        return TreeLayout(nodes=[], edges=[], width=0, height=0)

    graph = build_graph(people, relationships)
    assign_generations(graph, root_id)
    generations = group_by_generation(graph)
    log.debug("Laying out %d people over %d generation(s)", len(graph), len(generations))

    nodes, edges = calculate_positions(graph, generations, cfg)

    width = 0
    height = 0
    for node in nodes:
        width = max(width, node.x + cfg.node_width)
        height = max(height, node.y + cfg.node_height)

    log.debug("Layout is %s x %s with %d edge(s)", width, height, len(edges))
    return TreeLayout(nodes=nodes, edges=edges, width=width, height=height)
