# tests/test_ingest.py

from __future__ import annotations

import pytest

from family_tree_layout.core.exceptions import IngestionError
from family_tree_layout.entities import Gender, RelationshipType
from family_tree_layout.loader import (
    load_members,
    load_relationships,
    load_snapshot,
    normalize_iso_date,
    parse_member,
    parse_relationship,
)
from family_tree_layout.utils import mock_file_path


def test_parse_member_full_record():
    person = parse_member(
        {
            "id": "m1",
            "first_name": "John",
            "middle_name": "Paul",
            "last_name": "Smith",
            "gender": "Male",
            "birth_date": "1950-03-15",
            "death_date": "2020-01-01T00:00:00.000Z",
            "profile_image": "https://example.com/p.png",
            "is_root": True,
        }
    )

    assert person.id == "m1"
    assert person.gender is Gender.MALE
    assert person.birth_date == "1950-03-15"
    assert person.death_date == "2020-01-01"
    assert person.is_root is True
    assert person.display_name == "John Paul Smith"


def test_parse_member_accepts_backend_underscore_id_and_defaults():
    person = parse_member({"_id": "abc", "first_name": "Ann", "last_name": "Lee"})

    assert person.id == "abc"
    assert person.gender is Gender.OTHER
    assert person.birth_date is None
    assert person.is_root is False


def test_empty_birth_date_is_absent():
    person = parse_member({"id": "x", "first_name": "A", "last_name": "B", "birth_date": ""})
    assert person.birth_date is None


@pytest.mark.parametrize(
    "record, fragment",
    [
        ({"first_name": "A", "last_name": "B"}, "missing 'id'"),
        ({"id": "x", "last_name": "B"}, "first_name"),
        ({"id": "x", "first_name": "A", "last_name": "B", "gender": "robot"}, "gender"),
        ({"id": "x", "first_name": "A", "last_name": "B", "birth_date": "15/03/1950"}, "ISO date"),
        ({"id": "x", "first_name": "A", "last_name": "B", "is_root": "yes"}, "is_root"),
    ],
)
def test_parse_member_rejects_malformed_records(record, fragment):
    with pytest.raises(IngestionError) as excinfo:
        parse_member(record, 3)
    assert fragment in str(excinfo.value)


def test_parse_member_rejects_non_mapping():
    with pytest.raises(IngestionError):
        parse_member(["not", "a", "record"])


def test_load_members_rejects_duplicate_ids():
    records = [
        {"id": "1", "first_name": "A", "last_name": "B"},
        {"id": "1", "first_name": "C", "last_name": "D"},
    ]
    with pytest.raises(IngestionError, match="duplicate id"):
        load_members(records)


def test_parse_relationship():
    rel = parse_relationship(
        {"id": "r1", "person1_id": "1", "person2_id": "2", "relationship_type": "parent_child"}
    )

    assert rel.relationship_type is RelationshipType.PARENT_CHILD
    assert rel.is_parent_child
    assert not rel.is_spouse


@pytest.mark.parametrize(
    "record",
    [
        {"id": "r1", "person1_id": "1", "person2_id": "2", "relationship_type": "sibling"},
        {"id": "r1", "person1_id": "1", "person2_id": "2"},
        {"id": "r1", "person1_id": "1", "relationship_type": "spouse"},
        {"id": "r1", "person1_id": "1", "person2_id": "1", "relationship_type": "spouse"},
    ],
)
def test_parse_relationship_rejects_malformed_records(record):
    with pytest.raises(IngestionError):
        parse_relationship(record)


def test_load_relationships_preserves_order():
    rels = load_relationships(
        [
            {"id": "b", "person1_id": "1", "person2_id": "2", "relationship_type": "spouse"},
            {"id": "a", "person1_id": "1", "person2_id": "3", "relationship_type": "parent_child"},
        ]
    )
    assert [r.id for r in rels] == ["b", "a"]


def test_normalize_iso_date_variants():
    assert normalize_iso_date(None) is None
    assert normalize_iso_date("  ") is None
    assert normalize_iso_date("1998-02-03") == "1998-02-03"
    assert normalize_iso_date("1998-02-03T10:00:00Z") == "1998-02-03"
    with pytest.raises(IngestionError):
        normalize_iso_date(1998)


def test_load_json_snapshot():
    snap = load_snapshot(mock_file_path("smith_family.json"))

    assert len(snap.members) == 6
    assert len(snap.relationships) == 8
    assert snap.meta == {"tree": "Smith family"}
    assert [m.id for m in snap.members if m.is_root] == ["1"]


def test_load_yaml_snapshot():
    snap = load_snapshot(mock_file_path("broken_family.yml"))

    assert [m.id for m in snap.members] == ["a1", "b1", "c1", "z1"]
    assert all(r.is_spouse for r in snap.relationships)


def test_load_snapshot_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_snapshot(tmp_path / "nope.json")


def test_load_snapshot_invalid_json(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(IngestionError, match="cannot parse"):
        load_snapshot(bad)
