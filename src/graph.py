"""Adjacency graph construction and generation assignment."""

from collections import deque
import logging

import networkx as nx

from models import GraphNode, Person, Relationship, RelationshipType

log = logging.getLogger(__name__)

# Types whose "from" side is the parent of the "to" side
_PARENT_LIKE = {
    RelationshipType.PARENT,
    RelationshipType.STEP_PARENT,
    RelationshipType.ADOPTED,
    RelationshipType.GUARDIAN,
    RelationshipType.UNKNOWN,
}


def _add_unique(ids: list[str], item: str) -> None:
    if item not in ids:
        ids.append(item)


def _link_parent(parent: GraphNode, child: GraphNode) -> None:
    _add_unique(parent.children, child.id)
    _add_unique(child.parents, parent.id)


def build_graph(people: list[Person], relationships: list[Relationship]) -> dict[str, GraphNode]:
    """
    Build the person id -> GraphNode map used by the layout engine.

    Relationships that mention an id missing from `people` are dropped.
    Repeated or mirrored records never produce duplicate adjacency entries.
    """
    graph: dict[str, GraphNode] = {}
    for person in people:
        graph[person.id] = GraphNode(person=person)

    for rel in relationships:
        from_node = graph.get(rel.from_id)
        to_node = graph.get(rel.to_id)
        if from_node is None or to_node is None:
            continue

        kind = rel.kind
        if kind in _PARENT_LIKE:
            _link_parent(from_node, to_node)
        elif kind is RelationshipType.SPOUSE:
            _add_unique(from_node.spouses, to_node.id)
            _add_unique(to_node.spouses, from_node.id)
        elif kind is RelationshipType.STEP_CHILD:
            # "from" is the step-child of "to"
            _link_parent(to_node, from_node)
        # Siblings are implied by shared parents

    return graph


def _find_root(graph: dict[str, GraphNode], root_id: str | None) -> str:
    if root_id and root_id in graph:
        return root_id
    for node_id, node in graph.items():
        if not node.parents:
            return node_id
    return next(iter(graph))


def _bfs(graph: dict[str, GraphNode], start: str, visited: set[str]) -> None:
    """
    Breadth-first generation walk from `start` (generation 0).

    The first generation that reaches a node wins; later paths are not
    reconciled.
    """
    visited.add(start)
    queue = deque([(start, 0)])

    while queue:
        node_id, generation = queue.popleft()
        node = graph[node_id]
        node.generation = generation

        # Children below, parents above, spouses alongside
        for step, neighbours in (
            (1, node.children),
            (-1, node.parents),
            (0, node.spouses),
        ):
            for other in neighbours:
                if other in visited:
                    continue
                visited.add(other)
                queue.append((other, generation + step))


def assign_generations(graph: dict[str, GraphNode], root_id: str | None = None) -> None:
    """
    Assign `generation` on every node in place.

    The root (given, else the first person without parents, else the first
    person) is generation 0. Each disconnected component is walked from its
    first unvisited member, also anchored at 0.
    """
    if not graph:
        return

    start = _find_root(graph, root_id)
    log.debug("Assigning generations from root %s", start)

    visited: set[str] = set()
    _bfs(graph, start, visited)

    components = 1
    for node_id in graph:
        if node_id not in visited:
            _bfs(graph, node_id, visited)
            components += 1

    log.debug("Walked %d connected component(s)", components)


def group_by_generation(graph: dict[str, GraphNode]) -> dict[int, list[GraphNode]]:
    """Group nodes by generation, keeping graph order within each generation."""
    generations: dict[int, list[GraphNode]] = {}
    for node in graph.values():
        generations.setdefault(node.generation, []).append(node)
    return generations


def to_networkx(graph: dict[str, GraphNode]) -> nx.DiGraph:
    """
    Build a NetworkX view of the adjacency map.

    Parent links become parent -> child edges with relationship_type="parent";
    spouse links become one edge per direction with relationship_type="spouse".
    """
    G = nx.DiGraph()
    for node_id, node in graph.items():
        G.add_node(node_id, person=node.person, generation=node.generation)

    for node_id, node in graph.items():
        for child_id in node.children:
            G.add_edge(node_id, child_id, relationship_type="parent")
        for spouse_id in node.spouses:
            G.add_edge(node_id, spouse_id, relationship_type="spouse")

    return G
