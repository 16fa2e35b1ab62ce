from __future__ import annotations

import math

import pytest

from layout import compute_layout
from models import LayoutConfig, Person, Relationship


def _people(*ids: str) -> list[Person]:
    return [Person(id=i, name=i.title()) for i in ids]


def _rel(a: str, b: str, kind: str) -> Relationship:
    return Relationship(from_id=a, to_id=b, type=kind)


def test_empty_input() -> None:
    result = compute_layout([], [])
    assert result.nodes == []
    assert result.edges == []
    assert result.width == 0
    assert result.height == 0


def test_single_person_at_origin() -> None:
    result = compute_layout([Person(id="1", name="Alice")], [])

    assert len(result.nodes) == 1
    node = result.nodes[0]
    assert (node.x, node.y) == (0, 0)
    assert node.person.name == "Alice"
    assert (result.width, result.height) == (120, 160)


def test_spouses_side_by_side() -> None:
    result = compute_layout(_people("1", "2"), [_rel("1", "2", "spouse")])
    a, b = result.nodes

    assert a.y == b.y
    assert a.x != b.x
    assert b.x - a.x == 160


def test_parent_above_child() -> None:
    result = compute_layout(_people("1", "2"), [_rel("1", "2", "parent")])
    nodes = result.node_by_id()
    assert nodes["1"].y < nodes["2"].y


def test_nuclear_family_children_centred_under_parents() -> None:
    people = _people("dad", "mom", "child1", "child2")
    relationships = [
        _rel("dad", "mom", "spouse"),
        _rel("dad", "child1", "parent"),
        _rel("mom", "child1", "parent"),
        _rel("dad", "child2", "parent"),
        _rel("mom", "child2", "parent"),
    ]
    nodes = compute_layout(people, relationships).node_by_id()

    assert nodes["dad"].y == nodes["mom"].y
    assert nodes["child1"].y == nodes["child2"].y
    assert nodes["dad"].y < nodes["child1"].y

    parents_mid = (nodes["dad"].x + nodes["mom"].x) / 2
    kids_mid = (nodes["child1"].x + nodes["child2"].x) / 2
    assert parents_mid == kids_mid


def test_single_child_centred_under_couple() -> None:
    people = _people("a", "b", "c")
    relationships = [_rel("a", "b", "spouse"), _rel("a", "c", "parent"), _rel("b", "c", "parent")]
    nodes = compute_layout(people, relationships).node_by_id()

    # Couple at x=0 and x=160; the child moves to their midpoint
    assert nodes["a"].x == 0
    assert nodes["b"].x == 160
    assert nodes["c"].x == 80


def test_three_generations_top_to_bottom() -> None:
    people = _people("gp", "p", "c")
    relationships = [_rel("gp", "p", "parent"), _rel("p", "c", "parent")]
    nodes = compute_layout(people, relationships, "gp").node_by_id()

    assert nodes["gp"].y < nodes["p"].y < nodes["c"].y


def test_interior_root_still_normalises_to_origin() -> None:
    people = _people("grandpa", "dad", "me", "child")
    relationships = [
        _rel("grandpa", "dad", "parent"),
        _rel("dad", "me", "parent"),
        _rel("me", "child", "parent"),
    ]
    result = compute_layout(people, relationships, "me")
    nodes = result.node_by_id()

    assert nodes["grandpa"].y == 0
    assert nodes["me"].generation == 0
    assert nodes["grandpa"].generation == -2
    assert min(n.x for n in result.nodes) == 0
    assert result.height == 3 * 240 + 160


def test_custom_config_sets_vertical_gap() -> None:
    result = compute_layout(
        _people("1", "2"),
        [_rel("1", "2", "parent")],
        config={"node_width": 200, "node_height": 200, "vertical_spacing": 100},
    )
    nodes = result.node_by_id()
    assert nodes["2"].y - nodes["1"].y == 300


def test_camel_case_config_keys() -> None:
    result = compute_layout(
        _people("1", "2"), [_rel("1", "2", "parent")], config={"nodeHeight": 50, "verticalSpacing": 10}
    )
    nodes = result.node_by_id()
    assert nodes["2"].y - nodes["1"].y == 60


def test_config_object_is_used_as_is() -> None:
    cfg = LayoutConfig(node_width=10, node_height=10, horizontal_spacing=5, vertical_spacing=5)
    result = compute_layout(_people("1", "2"), [_rel("1", "2", "spouse")], config=cfg)
    xs = sorted(n.x for n in result.nodes)
    assert xs == [0, 15]
    assert result.width == 25


def test_unknown_config_key_is_rejected() -> None:
    with pytest.raises(ValueError):
        compute_layout(_people("1"), [], config={"node_depth": 3})


def test_negative_spacing_is_applied_without_error() -> None:
    result = compute_layout(
        _people("1", "2"), [_rel("1", "2", "spouse")], config={"horizontal_spacing": -200}
    )
    assert len(result.nodes) == 2
    assert all(math.isfinite(n.x) for n in result.nodes)


def test_parent_edge_geometry() -> None:
    result = compute_layout(_people("1", "2"), [_rel("1", "2", "parent")])
    parent_edges = [e for e in result.edges if e.type == "parent"]

    assert len(parent_edges) == 1
    edge = parent_edges[0]
    assert (edge.from_id, edge.to_id) == ("1", "2")
    # bottom-centre of parent, down to the mid line, across, down to top-centre of child
    assert [tuple(p) for p in edge.points] == [(60, 160), (60, 200), (60, 200), (60, 240)]


def test_parent_edge_bends_towards_offset_child() -> None:
    people = _people("a", "b", "c")
    relationships = [_rel("a", "b", "spouse"), _rel("b", "c", "parent")]
    result = compute_layout(people, relationships)
    edge = next(e for e in result.edges if e.type == "parent")
    nodes = result.node_by_id()

    start, bend1, bend2, end = edge.points
    assert start.x == nodes["b"].x + 60
    assert bend1.x == start.x
    assert bend1.y == bend2.y == (160 + 240) / 2
    assert end.x == nodes["c"].x + 60
    assert end.y == nodes["c"].y


def test_spouse_edge_joins_facing_sides() -> None:
    result = compute_layout(_people("1", "2"), [_rel("1", "2", "spouse")])
    spouse_edges = [e for e in result.edges if e.type == "spouse"]

    assert len(spouse_edges) == 1
    assert [tuple(p) for p in spouse_edges[0].points] == [(120, 80), (160, 80)]


def test_duplicate_records_give_one_edge_each() -> None:
    relationships = [
        _rel("1", "2", "spouse"),
        _rel("2", "1", "spouse"),
        _rel("1", "2", "spouse"),
        _rel("1", "3", "parent"),
        _rel("1", "3", "adopted"),
        _rel("3", "1", "step_child"),
    ]
    result = compute_layout(_people("1", "2", "3"), relationships)

    assert len([e for e in result.edges if e.type == "spouse"]) == 1
    assert len([e for e in result.edges if e.type == "parent"]) == 1


def test_three_spouses_share_a_row() -> None:
    people = _people("p", "s1", "s2", "s3")
    relationships = [_rel("p", s, "spouse") for s in ("s1", "s2", "s3")]
    result = compute_layout(people, relationships)

    assert len(result.nodes) == 4
    assert len({n.y for n in result.nodes}) == 1
    assert len({n.x for n in result.nodes}) == 4


def test_multi_marriage_children_centred_per_couple() -> None:
    people = _people("p", "s1", "s2", "c1", "c2")
    relationships = [
        _rel("p", "s1", "spouse"),
        _rel("p", "s2", "spouse"),
        _rel("p", "c1", "parent"),
        _rel("s1", "c1", "parent"),
        _rel("p", "c2", "parent"),
        _rel("s2", "c2", "parent"),
    ]
    result = compute_layout(people, relationships, "p")
    nodes = result.node_by_id()

    assert len(result.nodes) == 5
    assert nodes["p"].y < nodes["c1"].y

    def centre(node_id: str) -> float:
        return nodes[node_id].x + 60

    assert centre("c1") == (centre("p") + centre("s1")) / 2
    assert centre("c2") == (centre("p") + centre("s2")) / 2


def test_multi_marriage_children_follow_first_pass_couple_centre() -> None:
    people = _people("g1", "g2", "p", "q", "s1", "s2", "c1", "c2")
    relationships = [
        _rel("g1", "g2", "spouse"),
        _rel("g1", "p", "parent"),
        _rel("g2", "p", "parent"),
        _rel("g1", "q", "parent"),
        _rel("g2", "q", "parent"),
        _rel("p", "s1", "spouse"),
        _rel("p", "s2", "spouse"),
        _rel("p", "c1", "parent"),
        _rel("s1", "c1", "parent"),
        _rel("p", "c2", "parent"),
        _rel("s2", "c2", "parent"),
    ]
    nodes = compute_layout(people, relationships, "g1").node_by_id()

    # p moves left under its parents before the marriages are corrected;
    # the couples keep the centres they had when first placed
    assert nodes["s1"].x - nodes["p"].x == 320
    assert nodes["c1"].x - nodes["s1"].x == -80
    assert nodes["c2"].x - nodes["s2"].x == -160


@pytest.mark.parametrize(
    "node_width, horizontal_spacing, child_x",
    [
        (1, 0, 0),
        (2, 0, 0),
        (2, 0.5, 1.25),
    ],
)
def test_small_centring_shifts_are_skipped(
    node_width: float, horizontal_spacing: float, child_x: float
) -> None:
    people = _people("a", "b", "c")
    relationships = [_rel("a", "b", "spouse"), _rel("a", "c", "parent"), _rel("b", "c", "parent")]
    cfg = LayoutConfig(node_width=node_width, horizontal_spacing=horizontal_spacing)
    nodes = compute_layout(people, relationships, config=cfg).node_by_id()

    # the child starts at x=0 and would move by half a cell
    assert nodes["a"].x == 0
    assert nodes["c"].x == child_x


def test_spouse_edge_between_generations() -> None:
    people = _people("r", "x", "y", "z")
    relationships = [
        _rel("r", "x", "parent"),
        _rel("r", "y", "parent"),
        _rel("y", "z", "spouse"),
        _rel("x", "z", "parent"),
    ]
    result = compute_layout(people, relationships, "r")
    nodes = result.node_by_id()
    edge = next(e for e in result.edges if e.type == "spouse")

    assert (edge.from_id, edge.to_id) == ("y", "z")
    assert nodes["y"].y == 240
    assert nodes["z"].y == 480
    # both points sit at the source's mid-height
    assert [tuple(p) for p in edge.points] == [(160, 320), (120, 320)]


def test_disconnected_groups_have_finite_positions() -> None:
    people = _people("a1", "a2", "b1", "b2", "loner")
    relationships = [_rel("a1", "a2", "parent"), _rel("b1", "b2", "parent")]
    result = compute_layout(people, relationships)

    assert len(result.nodes) == 5
    for node in result.nodes:
        assert math.isfinite(node.x)
        assert math.isfinite(node.y)
    boxes = {(n.x, n.y) for n in result.nodes}
    assert len(boxes) == 5


def test_relationships_to_missing_people_are_ignored() -> None:
    result = compute_layout(_people("1"), [_rel("1", "ghost", "parent")])
    assert len(result.nodes) == 1
    assert result.edges == []


def test_long_ancestor_chain() -> None:
    ids = [str(i) for i in range(50)]
    relationships = [_rel(ids[i - 1], ids[i], "parent") for i in range(1, 50)]
    result = compute_layout(_people(*ids), relationships, "0")

    assert len(result.nodes) == 50
    assert len(result.edges) >= 49
    nodes = result.node_by_id()
    for i in range(1, 50):
        assert nodes[ids[i - 1]].y < nodes[ids[i]].y


def test_parent_always_above_child_in_wider_tree() -> None:
    people = _people("gp", "gm", "dad", "mom", "aunt", "me", "sis", "kid")
    relationships = [
        _rel("gp", "gm", "spouse"),
        _rel("gp", "dad", "parent"),
        _rel("gm", "dad", "parent"),
        _rel("gp", "aunt", "parent"),
        _rel("dad", "mom", "spouse"),
        _rel("dad", "me", "parent"),
        _rel("mom", "me", "parent"),
        _rel("mom", "sis", "parent"),
        _rel("me", "kid", "parent"),
    ]
    result = compute_layout(people, relationships, "me")
    nodes = result.node_by_id()

    for edge in result.edges:
        if edge.type == "parent":
            assert nodes[edge.from_id].y < nodes[edge.to_id].y
        else:
            assert nodes[edge.from_id].y == nodes[edge.to_id].y


def test_inputs_are_not_modified_and_calls_are_independent() -> None:
    people = _people("a", "b")
    relationships = [_rel("a", "b", "parent")]
    first = compute_layout(people, relationships)
    second = compute_layout(people, relationships)

    assert first == second
    assert people == _people("a", "b")


def test_to_dict_shape() -> None:
    result = compute_layout(
        [Person(id="1", name="A", birth_year=1950, attributes={"nickname": "Al"}), Person(id="2")],
        [_rel("1", "2", "parent")],
    )
    data = result.to_dict()

    assert set(data) == {"nodes", "edges", "width", "height"}
    first = next(n for n in data["nodes"] if n["id"] == "1")
    assert first["person"] == {"id": "1", "name": "A", "birthYear": 1950, "nickname": "Al"}
    edge = data["edges"][0]
    assert edge["fromId"] == "1" and edge["toId"] == "2" and edge["type"] == "parent"
    assert edge["points"][0] == {"x": 60.0, "y": 160.0}
