"""Spouse clustering within a generation, and per-marriage child partitioning."""

from dataclasses import dataclass, field

from models import GraphNode


@dataclass
class FamilyUnit:
    """One person, or a person plus the spouses that share their generation."""

    members: list[GraphNode]
    children: list[str] = field(default_factory=list)

    @property
    def member_ids(self) -> list[str]:
        return [m.id for m in self.members]


@dataclass
class SpouseGroup:
    spouse: GraphNode
    children: list[str] = field(default_factory=list)


@dataclass
class MultiMarriageGroup:
    central: GraphNode
    spouse_groups: list[SpouseGroup] = field(default_factory=list)


def build_family_units(
    generation_nodes: list[GraphNode], graph: dict[str, GraphNode]
) -> list[FamilyUnit]:
    """
    Split one generation into ordered family units.

    Each unit starts with the next unplaced node and absorbs its unplaced
    spouses from the same generation. A spouse the walk put in another
    generation stays out of the unit.
    """
    units: list[FamilyUnit] = []
    placed: set[str] = set()

    for node in generation_nodes:
        if node.id in placed:
            continue

        members = [node]
        placed.add(node.id)

        for spouse_id in node.spouses:
            if spouse_id in placed:
                continue
            spouse = graph.get(spouse_id)
            if spouse is not None and spouse.generation == node.generation:
                members.append(spouse)
                placed.add(spouse_id)

        # Union of every member's children, first-seen order
        children: dict[str, None] = {}
        for member in members:
            children.update(dict.fromkeys(member.children))

        units.append(FamilyUnit(members=members, children=list(children)))

    return units


def build_multi_marriage_group(
    node: GraphNode, graph: dict[str, GraphNode]
) -> MultiMarriageGroup | None:
    """
    Partition the children of a person with two or more spouses by marriage.

    Each spouse group gets the children shared with the central person, then
    the spouse's own children not already claimed by an earlier group. The
    central person's remaining children all go to the first group.
    Returns None for zero or one spouse.
    """
    if len(node.spouses) <= 1:
        return None

    groups: list[SpouseGroup] = []
    claimed: set[str] = set()

    for spouse_id in node.spouses:
        spouse = graph.get(spouse_id)
        if spouse is None:
            continue

        shared = [c for c in node.children if c in spouse.children]
        spouse_only = [
            c for c in spouse.children if c not in node.children and c not in claimed
        ]
        children = shared + spouse_only
        claimed.update(children)
        groups.append(SpouseGroup(spouse=spouse, children=children))

    solo = [c for c in node.children if c not in claimed]
    if solo and groups:
        groups[0].children.extend(solo)

    return MultiMarriageGroup(central=node, spouse_groups=groups)
