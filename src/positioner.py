"""Coordinate assignment and edge routing for a generation-grouped graph."""

from dataclasses import dataclass, field

from family_units import FamilyUnit, build_family_units, build_multi_marriage_group
from models import GraphNode, LayoutConfig, LayoutEdge, LayoutNode, Point

# Shifts at or below this many layout units are not applied
_MIN_SHIFT = 1


@dataclass
class _Slot:
    x: float
    y: float


@dataclass
class _Marriage:
    central_id: str
    spouse_id: str
    children: list[str]
    # couple's box centre as placed in the first pass
    center: float = 0.0


@dataclass
class _PlacedUnit:
    unit: FamilyUnit
    marriages: list[_Marriage] = field(default_factory=list)


def _marriages_in_unit(unit: FamilyUnit, graph: dict[str, GraphNode]) -> list[_Marriage]:
    """
    Per-spouse child groups for a unit built around a multiply-married person.

    Only spouses placed in the unit count. Fewer than two such spouses means
    the unit is centred as a whole and an empty list is returned. Spouses
    split across separate units (people ordered spouse, person, spouse) get
    no per-marriage split either: each unit centres its own children.
    """
    central = next((m for m in unit.members if len(m.spouses) >= 2), None)
    if central is None:
        return []

    group = build_multi_marriage_group(central, graph)
    if group is None:
        return []

    in_unit = set(unit.member_ids)
    marriages = [
        _Marriage(central.id, g.spouse.id, g.children)
        for g in group.spouse_groups
        if g.spouse.id in in_unit
    ]
    return marriages if len(marriages) >= 2 else []


def _span_center(xs: list[float]) -> float:
    return (min(xs) + max(xs)) / 2


def _shift(positions: dict[str, _Slot], ids: list[str], dx: float) -> None:
    if abs(dx) <= _MIN_SHIFT:
        return
    for node_id in ids:
        positions[node_id].x += dx


def _place_generations(
    graph: dict[str, GraphNode],
    generations: dict[int, list[GraphNode]],
    config: LayoutConfig,
    positions: dict[str, _Slot],
) -> list[_PlacedUnit]:
    """First pass: lay each generation out left to right, top generation first."""
    cell_width = config.cell_width
    placed_units: list[_PlacedUnit] = []

    for gen in sorted(generations):
        y = gen * config.cell_height
        cursor = 0

        for unit in build_family_units(generations[gen], graph):
            child_xs = [positions[c].x for c in unit.children if c in positions]
            if child_xs:
                # Sit above children that are already down
                start_x = _span_center(child_xs) - len(unit.members) * cell_width / 2
            else:
                start_x = cursor
            start_x = max(start_x, cursor)

            for i, member in enumerate(unit.members):
                x = start_x + i * cell_width
                positions[member.id] = _Slot(x, y)
                cursor = x + cell_width

            marriages = _marriages_in_unit(unit, graph)
            for marriage in marriages:
                pair_xs = [positions[marriage.central_id].x, positions[marriage.spouse_id].x]
                marriage.center = _span_center(pair_xs) + config.node_width / 2
            placed_units.append(_PlacedUnit(unit, marriages))

    return placed_units


def _center_children(
    placed_units: list[_PlacedUnit],
    config: LayoutConfig,
    positions: dict[str, _Slot],
) -> None:
    """Second pass: move each unit's placed children under their parents, once."""
    half_width = config.node_width / 2

    for placed in placed_units:
        unit = placed.unit
        if not unit.children:
            continue

        if placed.marriages:
            for marriage in placed.marriages:
                kids = [c for c in marriage.children if c in positions]
                if not kids:
                    continue
                kids_center = _span_center([positions[c].x for c in kids]) + half_width
                _shift(positions, kids, marriage.center - kids_center)
            continue

        kids = [c for c in unit.children if c in positions]
        if not kids:
            continue
        parents_center = _span_center([positions[m.id].x for m in unit.members])
        kids_center = _span_center([positions[c].x for c in kids])
        _shift(positions, kids, parents_center - kids_center)


def _normalize(positions: dict[str, _Slot]) -> None:
    if not positions:
        return
    min_x = min(p.x for p in positions.values())
    min_y = min(p.y for p in positions.values())
    for p in positions.values():
        p.x -= min_x
        p.y -= min_y


def build_edges(
    graph: dict[str, GraphNode],
    positions: dict[str, Point],
    config: LayoutConfig,
) -> list[LayoutEdge]:
    """
    Route one polyline per parent->child link and per spouse pair.

    Parent edges drop from the parent's bottom centre to the midway line, run
    across, then drop to the child's top centre. Spouse edges join the facing
    sides of the two boxes at half height.
    """
    node_width = config.node_width
    node_height = config.node_height
    edges: list[LayoutEdge] = []
    seen: set[tuple[str, str, str]] = set()

    for node_id, node in graph.items():
        src = positions.get(node_id)
        if src is None:
            continue

        for child_id in node.children:
            key = ("parent", node_id, child_id)
            if key in seen:
                continue
            seen.add(key)
            dst = positions.get(child_id)
            if dst is None:
                continue

            from_x = src.x + node_width / 2
            from_y = src.y + node_height
            to_x = dst.x + node_width / 2
            to_y = dst.y
            mid_y = (from_y + to_y) / 2
            edges.append(
                LayoutEdge(
                    from_id=node_id,
                    to_id=child_id,
                    type="parent",
                    points=(
                        Point(from_x, from_y),
                        Point(from_x, mid_y),
                        Point(to_x, mid_y),
                        Point(to_x, to_y),
                    ),
                )
            )

        for spouse_id in node.spouses:
            a, b = sorted((node_id, spouse_id))
            key = ("spouse", a, b)
            if key in seen:
                continue
            seen.add(key)
            dst = positions.get(spouse_id)
            if dst is None:
                continue

            from_x = src.x + node_width if src.x < dst.x else src.x
            to_x = dst.x + node_width if dst.x < src.x else dst.x
            y = src.y + node_height / 2
            edges.append(
                LayoutEdge(
                    from_id=node_id,
                    to_id=spouse_id,
                    type="spouse",
                    points=(Point(from_x, y), Point(to_x, y)),
                )
            )

    return edges


def calculate_positions(
    graph: dict[str, GraphNode],
    generations: dict[int, list[GraphNode]],
    config: LayoutConfig,
) -> tuple[list[LayoutNode], list[LayoutEdge]]:
    """
    Place every node and route every edge.

    Generations are laid out top to bottom, then each family unit's children
    are re-centred under it (per marriage for multiply-married people), then
    the whole drawing is moved so its top-left corner is (0, 0).
    """
    positions: dict[str, _Slot] = {}

    placed_units = _place_generations(graph, generations, config, positions)
    _center_children(placed_units, config, positions)
    _normalize(positions)

    final = {node_id: Point(p.x, p.y) for node_id, p in positions.items()}

    nodes = [
        LayoutNode(
            id=node_id,
            person=graph[node_id].person,
            x=pos.x,
            y=pos.y,
            generation=graph[node_id].generation,
        )
        for node_id, pos in final.items()
    ]
    edges = build_edges(graph, final, config)
    return nodes, edges
