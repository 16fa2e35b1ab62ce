"""Data classes for people, relationships and computed layouts."""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Mapping, NamedTuple


@dataclass
class Person:
    id: str
    name: str = ""
    gender: str | None = None  # "male" | "female" | "other"
    photo: str | None = None
    birth_year: int | None = None
    death_year: int | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.gender is not None:
            out["gender"] = self.gender
        if self.photo is not None:
            out["photo"] = self.photo
        if self.birth_year is not None:
            out["birthYear"] = self.birth_year
        if self.death_year is not None:
            out["deathYear"] = self.death_year
        out.update(self.attributes)
        return out


class RelationshipType(str, Enum):
    PARENT = "parent"
    SPOUSE = "spouse"
    SIBLING = "sibling"
    STEP_PARENT = "step_parent"
    STEP_CHILD = "step_child"
    STEP_SIBLING = "step_sibling"
    ADOPTED = "adopted"
    GUARDIAN = "guardian"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: str) -> "RelationshipType":
        """Map a raw type tag to a member; anything unrecognised is UNKNOWN."""
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class Relationship:
    from_id: str
    to_id: str
    type: str  # raw tag, see RelationshipType
    marriage_year: int | None = None
    divorce_year: int | None = None

    @property
    def kind(self) -> RelationshipType:
        return RelationshipType.parse(self.type)


@dataclass
class GraphNode:
    """Adjacency record for one person. Rebuilt on every layout call."""

    person: Person
    parents: list[str] = field(default_factory=list)
    children: list[str] = field(default_factory=list)
    spouses: list[str] = field(default_factory=list)
    generation: int = 0

    @property
    def id(self) -> str:
        return self.person.id


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class LayoutNode:
    id: str
    person: Person
    x: float
    y: float
    generation: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "person": self.person.to_dict(),
            "x": self.x,
            "y": self.y,
            "generation": self.generation,
        }


@dataclass(frozen=True)
class LayoutEdge:
    from_id: str
    to_id: str
    type: str  # "parent" | "spouse"
    points: tuple[Point, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "fromId": self.from_id,
            "toId": self.to_id,
            "type": self.type,
            "points": [{"x": p.x, "y": p.y} for p in self.points],
        }


@dataclass(frozen=True)
class TreeLayout:
    nodes: list[LayoutNode]
    edges: list[LayoutEdge]
    width: float
    height: float

    def node_by_id(self) -> dict[str, LayoutNode]:
        return {n.id: n for n in self.nodes}

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "width": self.width,
            "height": self.height,
        }


# camelCase names used by JSON callers
_CONFIG_ALIASES = {
    "nodeWidth": "node_width",
    "nodeHeight": "node_height",
    "horizontalSpacing": "horizontal_spacing",
    "verticalSpacing": "vertical_spacing",
}


@dataclass(frozen=True)
class LayoutConfig:
    node_width: float = 120
    node_height: float = 160
    horizontal_spacing: float = 40
    vertical_spacing: float = 80

    @property
    def cell_width(self) -> float:
        return self.node_width + self.horizontal_spacing

    @property
    def cell_height(self) -> float:
        return self.node_height + self.vertical_spacing

    def with_overrides(self, overrides: Mapping[str, float] | None) -> "LayoutConfig":
        """
        Return a copy with the given fields replaced.

        Values are applied as given (negative spacing included). Unknown keys
        raise ValueError.
        """
        if not overrides:
            return self

        known = {f.name for f in fields(self)}
        changes: dict[str, float] = {}
        for key, value in overrides.items():
            name = _CONFIG_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown layout option: {key}")
            changes[name] = value
        return replace(self, **changes)


DEFAULT_LAYOUT_CONFIG = LayoutConfig()
