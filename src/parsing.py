"""Loading people and relationships from GEDCOM and JSON files."""

import json
from pathlib import Path
import re
from typing import Any

from ged4py import GedcomReader

from models import Person, Relationship

GENDER_MAP = {"M": "male", "F": "female"}

# Qualifiers that may precede a GEDCOM date, optionally followed by a colon
_QUALIFIER_RE = re.compile(
    r"^(ABT\.?|ABOUT|BEF\.?|BEFORE|AFT\.?|AFTER|EST\.?|CAL\.?|FROM|TO|BET\.?|AND|CIRCA|CA\.?|AROUND):?\s*",
    flags=re.IGNORECASE,
)
_YEAR_RE = re.compile(r"(?<!\d)(\d{4})(?!\d)")

_PERSON_KEYS = {
    "id": "id",
    "name": "name",
    "gender": "gender",
    "photo": "photo",
    "birthYear": "birth_year",
    "deathYear": "death_year",
}


def parse_year(date_str: str | None) -> int | None:
    """
    Pull the year out of a free-form date string.

    Handles forms like "25 NOV 1954", "ABT 1905", "(01-27-1920)",
    "(About:1746-00-00)" and "(1789?)". Returns None when no 4-digit year
    is present.
    """
    if not date_str:
        return None

    s = date_str.strip().strip("()").rstrip("?")
    s = _QUALIFIER_RE.sub("", s).strip()

    match = _YEAR_RE.search(s)
    if not match:
        return None
    return int(match.group(1))


def extract_xref(xref_id: str) -> str:
    """'@I123@' -> 'I123'."""
    return xref_id.strip("@")


# ============================================================================
# GEDCOM
# ============================================================================


def parse_gedcom(filepath: Path) -> GedcomReader:
    """Parse a GEDCOM file and return the reader object."""
    return GedcomReader(str(filepath))


def extract_name(indi) -> str:
    """Full display name of an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return "Unknown"

    name_value = name_rec.value
    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_value, tuple):
        parts = [p for p in name_value if p]
        return " ".join(parts) if parts else "Unknown"

    # Fallback: string format "Given /Surname/"
    return " ".join(str(name_value).replace("/", " ").split()) or "Unknown"


def extract_event_year(indi, tag: str) -> int | None:
    """Year of an event tag (BIRT, DEAT, ...), if it has a usable DATE."""
    event = indi.sub_tag(tag)
    if event is None:
        return None

    date_rec = event.sub_tag("DATE")
    if date_rec is None or not date_rec.value:
        return None
    # ged4py may return DateValue objects
    return parse_year(str(date_rec.value))


def extract_gender(indi) -> str:
    sex_rec = indi.sub_tag("SEX")
    sex = sex_rec.value if sex_rec else None
    return GENDER_MAP.get(sex, "other")


def normalize_data(reader: GedcomReader) -> tuple[list[Person], list[Relationship]]:
    """
    Extract people and relationships from parsed GEDCOM data.
    Ignores non-standard Ancestry-specific tags (starting with _).
    """
    people: list[Person] = []
    relationships: list[Relationship] = []

    for rec in reader.records0("INDI"):
        if rec.xref_id is None:
            continue

        people.append(
            Person(
                id=extract_xref(rec.xref_id),
                name=extract_name(rec),
                gender=extract_gender(rec),
                birth_year=extract_event_year(rec, "BIRT"),
                death_year=extract_event_year(rec, "DEAT"),
            )
        )

    for rec in reader.records0("FAM"):
        if rec.xref_id is None:
            continue

        partners = []
        for tag in ("HUSB", "WIFE"):
            ptr = rec.sub_tag(tag)
            if ptr is not None and ptr.xref_id:
                partners.append(extract_xref(ptr.xref_id))

        marriage_year = extract_event_year(rec, "MARR")
        divorce_year = extract_event_year(rec, "DIV")

        if len(partners) == 2:
            relationships.append(
                Relationship(
                    from_id=partners[0],
                    to_id=partners[1],
                    type="spouse",
                    marriage_year=marriage_year,
                    divorce_year=divorce_year,
                )
            )

        for child in rec.sub_tags("CHIL"):
            if not child.xref_id:
                continue
            child_id = extract_xref(child.xref_id)
            for parent_id in partners:
                relationships.append(Relationship(from_id=parent_id, to_id=child_id, type="parent"))

    return people, relationships


# ============================================================================
# JSON
# ============================================================================


def person_from_dict(data: dict[str, Any]) -> Person:
    if "id" not in data:
        raise ValueError(f"Person entry without an id: {data!r}")

    known: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in data.items():
        if key in _PERSON_KEYS:
            known[_PERSON_KEYS[key]] = value
        else:
            extra[key] = value

    known["id"] = str(known["id"])
    return Person(**known, attributes=extra)


def relationship_from_dict(data: dict[str, Any]) -> Relationship:
    missing = [k for k in ("from", "to", "type") if k not in data]
    if missing:
        raise ValueError(f"Relationship entry missing {', '.join(missing)}: {data!r}")

    return Relationship(
        from_id=str(data["from"]),
        to_id=str(data["to"]),
        type=str(data["type"]),
        marriage_year=data.get("marriageYear"),
        divorce_year=data.get("divorceYear"),
    )


def load_document(data: dict[str, Any]) -> tuple[list[Person], list[Relationship]]:
    """Convert a {"people": [...], "relationships": [...]} document."""
    people_data = data.get("people")
    if not isinstance(people_data, list):
        raise ValueError("Document must contain a 'people' list")

    rel_data = data.get("relationships", [])
    if not isinstance(rel_data, list):
        raise ValueError("'relationships' must be a list")

    people = [person_from_dict(p) for p in people_data]
    relationships = [relationship_from_dict(r) for r in rel_data]
    return people, relationships


def load_json(filepath: Path) -> tuple[list[Person], list[Relationship]]:
    data = json.loads(filepath.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{filepath}: expected a JSON object at top level")
    return load_document(data)


def load_input(filepath: Path) -> tuple[list[Person], list[Relationship]]:
    """Load a .ged/.gedcom file with ged4py, anything else as JSON."""
    if filepath.suffix.lower() in (".ged", ".gedcom"):
        return normalize_data(parse_gedcom(filepath))
    return load_json(filepath)
