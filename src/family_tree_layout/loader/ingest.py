# src/family_tree_layout/loader/ingest.py

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional

from family_tree_layout.core.exceptions import IngestionError
from family_tree_layout.entities.models import Gender, Person, Relationship, RelationshipType
from family_tree_layout.logging import get_logger

log = get_logger(__name__)


# ----------------------------------------------------------------------
# Field helpers
# ----------------------------------------------------------------------

def _where(kind: str, index: Optional[int]) -> str:
    return f"{kind} #{index}" if index is not None else kind


def _record_id(record: Mapping[str, Any], kind: str, index: Optional[int]) -> str:
    # The tree backend serializes its documents with "_id"
    raw = record.get("id", record.get("_id"))
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise IngestionError(f"{_where(kind, index)}: missing 'id'")
    if isinstance(raw, bool) or not isinstance(raw, (str, int)):
        raise IngestionError(f"{_where(kind, index)}: 'id' must be a string")
    return str(raw).strip()


def _required_str(record: Mapping[str, Any], key: str, where: str) -> str:
    value = record.get(key)
    if not isinstance(value, str) or not value.strip():
        raise IngestionError(f"{where}: '{key}' must be a non-empty string")
    return value.strip()


def _optional_str(record: Mapping[str, Any], key: str, where: str) -> Optional[str]:
    value = record.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise IngestionError(f"{where}: '{key}' must be a string")
    return value.strip() or None


def _reference(record: Mapping[str, Any], key: str, where: str) -> str:
    value = record.get(key)
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise IngestionError(f"{where}: '{key}' must reference a member id")
    value = str(value).strip()
    if not value:
        raise IngestionError(f"{where}: '{key}' must reference a member id")
    return value


def normalize_iso_date(value: Any, *, field_name: str = "date", where: str = "record") -> Optional[str]:
    """
    Normalize a birth/death date to ``YYYY-MM-DD``.

    Accepts ``date``/``datetime`` objects, ISO date strings and ISO timestamps
    (``1950-03-15T00:00:00.000Z``, as emitted by the backend). Empty values
    mean "unknown".
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        raise IngestionError(f"{where}: '{field_name}' must be an ISO date string")

    text = value.strip()
    if not text:
        return None

    head = text.split("T", 1)[0]
    try:
        return date.fromisoformat(head).isoformat()
    except ValueError as exc:
        raise IngestionError(f"{where}: '{field_name}' is not an ISO date: {value!r}") from exc


def _gender(record: Mapping[str, Any], where: str) -> Gender:
    raw = record.get("gender")
    if raw is None or raw == "":
        return Gender.OTHER
    if isinstance(raw, Gender):
        return raw
    if not isinstance(raw, str):
        raise IngestionError(f"{where}: 'gender' must be a string")
    try:
        return Gender(raw.strip().lower())
    except ValueError as exc:
        raise IngestionError(f"{where}: unknown gender {raw!r}") from exc


def _relationship_type(record: Mapping[str, Any], where: str) -> RelationshipType:
    raw = record.get("relationship_type")
    if isinstance(raw, RelationshipType):
        return raw
    if not isinstance(raw, str):
        raise IngestionError(f"{where}: 'relationship_type' is required")
    try:
        return RelationshipType(raw.strip().lower())
    except ValueError as exc:
        raise IngestionError(f"{where}: unknown relationship_type {raw!r}") from exc


# ----------------------------------------------------------------------
# Record parsers
# ----------------------------------------------------------------------

def parse_member(record: Mapping[str, Any], index: Optional[int] = None) -> Person:
    """Validate one raw member mapping into a ``Person``."""
    if isinstance(record, Person):
        return record
    if not isinstance(record, Mapping):
        raise IngestionError(f"{_where('member', index)}: expected a mapping, got {type(record).__name__}")

    member_id = _record_id(record, "member", index)
    where = f"member {member_id!r}"

    is_root = record.get("is_root", False)
    if is_root is None:
        is_root = False
    if not isinstance(is_root, bool):
        raise IngestionError(f"{where}: 'is_root' must be a boolean")

    return Person(
        id=member_id,
        first_name=_required_str(record, "first_name", where),
        last_name=_required_str(record, "last_name", where),
        middle_name=_optional_str(record, "middle_name", where),
        gender=_gender(record, where),
        birth_date=normalize_iso_date(record.get("birth_date"), field_name="birth_date", where=where),
        death_date=normalize_iso_date(record.get("death_date"), field_name="death_date", where=where),
        profile_image=_optional_str(record, "profile_image", where),
        is_root=is_root,
    )


def parse_relationship(record: Mapping[str, Any], index: Optional[int] = None) -> Relationship:
    """Validate one raw relationship mapping into a ``Relationship``."""
    if isinstance(record, Relationship):
        return record
    if not isinstance(record, Mapping):
        raise IngestionError(
            f"{_where('relationship', index)}: expected a mapping, got {type(record).__name__}"
        )

    rel_id = _record_id(record, "relationship", index)
    where = f"relationship {rel_id!r}"

    person1 = _reference(record, "person1_id", where)
    person2 = _reference(record, "person2_id", where)
    if person1 == person2:
        raise IngestionError(f"{where}: person cannot be related to themselves ({person1!r})")

    return Relationship(
        id=rel_id,
        person1_id=person1,
        person2_id=person2,
        relationship_type=_relationship_type(record, where),
    )


def load_members(records: Iterable[Mapping[str, Any]]) -> List[Person]:
    """Validate a member list; ids must be unique."""
    members: List[Person] = []
    seen: set[str] = set()

    for index, record in enumerate(records or []):
        person = parse_member(record, index)
        if person.id in seen:
            raise IngestionError(f"member #{index}: duplicate id {person.id!r}")
        seen.add(person.id)
        members.append(person)

    log.debug("Ingested %d members", len(members))
    return members


def load_relationships(records: Iterable[Mapping[str, Any]]) -> List[Relationship]:
    """Validate a relationship list, preserving input order."""
    relationships = [parse_relationship(rec, i) for i, rec in enumerate(records or [])]
    log.debug("Ingested %d relationships", len(relationships))
    return relationships
