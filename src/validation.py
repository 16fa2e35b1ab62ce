"""Non-fatal checks on family graph data and layout settings."""

import networkx as nx

from graph import to_networkx
from models import GraphNode, LayoutConfig

# A parent younger than this at a child's birth is reported
MIN_PARENT_AGE = 12


def _label(node: GraphNode) -> str:
    return node.person.name or node.id


def validate_graph(graph: dict[str, GraphNode]) -> list[str]:
    """
    Validate a family graph whose generations have been assigned, checking for:
    - Cycles in parent-child relationships
    - Spouses placed in different generations
    - Impossible ages (child born before parent, very young parents)
    - Death before birth

    Returns a list of warning messages.
    """
    warnings: list[str] = []
    G = to_networkx(graph)

    # Cycle detection only looks at parent edges
    parent_graph = nx.DiGraph(
        [(u, v) for u, v, d in G.edges(data=True) if d.get("relationship_type") == "parent"]
    )
    try:
        cycle = nx.find_cycle(parent_graph, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    reported_pairs: set[tuple[str, str]] = set()
    for u, v, d in G.edges(data=True):
        if d.get("relationship_type") != "spouse":
            continue
        pair = (min(u, v), max(u, v))
        if pair in reported_pairs:
            continue
        reported_pairs.add(pair)
        if graph[u].generation != graph[v].generation:
            warnings.append(
                f"Spouses {_label(graph[u])} and {_label(graph[v])} are in different "
                f"generations ({graph[u].generation} and {graph[v].generation})"
            )

    for parent_id, child_id, d in G.edges(data=True):
        if d.get("relationship_type") != "parent":
            continue

        parent = graph[parent_id]
        child = graph[child_id]
        parent_birth = parent.person.birth_year
        child_birth = child.person.birth_year
        if parent_birth is None or child_birth is None:
            continue

        if child_birth < parent_birth:
            warnings.append(f"Impossible: {_label(child)} born before parent {_label(parent)}")
        elif child_birth - parent_birth < MIN_PARENT_AGE:
            warnings.append(
                f"Suspicious: {_label(parent)} was less than {MIN_PARENT_AGE} years old "
                f"when {_label(child)} was born"
            )

    for node in graph.values():
        birth = node.person.birth_year
        death = node.person.death_year
        if birth is not None and death is not None and death < birth:
            warnings.append(f"Impossible: {_label(node)} died before being born")

    return warnings


def validate_config(config: LayoutConfig) -> list[str]:
    """Report settings that will make boxes overlap or collapse. The layout still runs."""
    warnings: list[str] = []
    for name in ("node_width", "node_height"):
        value = getattr(config, name)
        if value <= 0:
            warnings.append(f"{name} should be positive, got {value}")
    for name in ("horizontal_spacing", "vertical_spacing"):
        value = getattr(config, name)
        if value < 0:
            warnings.append(f"{name} is negative ({value}); nodes may overlap")
    return warnings
