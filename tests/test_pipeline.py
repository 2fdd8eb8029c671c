import json

import pytest

from family_tree_layout.core import pipeline as pipeline_module
from family_tree_layout.core.context import LayoutContext
from family_tree_layout.core.exceptions import CycleDetectedError, PipelineError
from family_tree_layout.core.pipeline import (
    STATUS_ERROR,
    STATUS_OK,
    STATUS_WARNING,
    Pipeline,
    run_pipeline,
)
from family_tree_layout.entities import Person, Relationship, RelationshipType
from family_tree_layout.exporter import (
    build_render_dict,
    export_render_json,
    serialize_render_to_json_string,
)
from family_tree_layout.hierarchy import NO_ROOT
from family_tree_layout.layout import BoundingBox, LayoutConfig
from family_tree_layout.loader import load_snapshot
from family_tree_layout.logging import get_logger
from family_tree_layout.utils import mock_file_path


def run_mock(name, viewport_width=1200):
    snap = load_snapshot(mock_file_path(name))
    return run_pipeline(
        snap.members,
        snap.relationships,
        layout_config=LayoutConfig(),
        viewport_width=viewport_width,
    )


def test_smith_family_renders_cleanly():
    render = run_mock("smith_family.json")

    assert render.status == STATUS_OK
    assert render.violations == []
    assert [n.id for n in render.nodes] == ["1", "3", "5", "6"]
    assert render.bounds == BoundingBox(370, 100, 460, 440)
    assert render.canvas == (1400, 1000)
    assert render.generations == 3
    assert len(render.connectors.parent_child) == 3
    assert len(render.connectors.spouse) == 2


def test_broken_family_renders_with_violations():
    render = run_mock("broken_family.yml")

    assert render.status == STATUS_WARNING
    assert render.violations == [
        "Phase 1 violation: Alan has multiple spouses",
        "Member Beth Reed is not connected to root",
        "Member Zoe Park is not connected to root",
    ]
    # the tree still lays out so the user sees what exists
    assert [n.id for n in render.nodes] == ["a1"]
    assert render.nodes[0].spouse.id == "c1"


def test_missing_root_is_an_error_status():
    members = [Person(id="a", first_name="Ann", last_name="Lee")]
    render = run_pipeline(members, [])

    assert render.status == STATUS_ERROR
    assert render.build.error == NO_ROOT
    assert render.layout is None
    assert render.nodes == []
    assert render.canvas == (0, 0)


def test_context_collects_stats_and_errors():
    snap = load_snapshot(mock_file_path("smith_family.json"))
    ctx = LayoutContext(
        config=None,
        logger=get_logger("pipeline"),
        members=snap.members,
        relationships=snap.relationships,
        layout_config=LayoutConfig(),
        viewport_width=1200,
    )
    Pipeline(ctx).run()

    assert ctx.stats == {"members": 6, "relationships": 8, "nodes": 4, "violations": 0}
    assert ctx.errors == []

    empty = LayoutContext(config=None, logger=get_logger("pipeline"))
    Pipeline(empty).run()
    assert empty.errors == ["No members found"]


def test_unexpected_errors_are_wrapped(monkeypatch):
    def broken_layout(*args, **kwargs):
        raise ValueError("boom")

    monkeypatch.setattr(pipeline_module, "calculate_layout", broken_layout)
    snap = load_snapshot(mock_file_path("smith_family.json"))

    with pytest.raises(PipelineError, match="boom"):
        run_pipeline(snap.members, snap.relationships)


def test_domain_errors_propagate_unwrapped(monkeypatch):
    def cyclic_layout(*args, **kwargs):
        raise CycleDetectedError("loop")

    monkeypatch.setattr(pipeline_module, "calculate_layout", cyclic_layout)
    snap = load_snapshot(mock_file_path("smith_family.json"))

    with pytest.raises(CycleDetectedError):
        run_pipeline(snap.members, snap.relationships)


# ---------------------------------------------------------------------------
# JSON export
# ---------------------------------------------------------------------------


def test_render_dict_shape():
    data = build_render_dict(run_mock("smith_family.json"))

    assert data["status"] == "ok"
    assert data["error"] is None
    assert data["root_id"] == "1"
    assert data["canvas"] == {"width": 1400, "height": 1000}
    assert data["bounds"] == {"x": 370, "y": 100, "width": 460, "height": 440}
    assert data["layout_config"]["node_width"] == 140

    root = data["nodes"][0]
    assert root["id"] == "1"
    assert (root["x"], root["y"]) == (530, 100)
    assert root["person"]["gender"] == "male"
    assert root["spouse"]["first_name"] == "Mary"
    assert root["spouse_box"] == {"x": 690, "y": 100, "width": 140, "height": 80}
    assert root["children_ids"] == ["3"]


def test_json_string_is_valid_and_deterministic():
    render = run_mock("smith_family.json")

    compact = serialize_render_to_json_string(render, indent=None)
    assert "\n" not in compact
    assert compact == serialize_render_to_json_string(render, indent=None)

    parsed = json.loads(compact)
    first_link = parsed["connectors"]["parent_child"][0]
    assert first_link["parent_id"] == "1"
    assert first_link["points"][0] == [600, 180]


def test_error_render_serializes():
    members = [Person(id="a", first_name="Ann", last_name="Lee")]
    data = json.loads(serialize_render_to_json_string(run_pipeline(members, [])))

    assert data["status"] == "error"
    assert data["error"] == NO_ROOT
    assert data["nodes"] == []
    assert data["bounds"] is None
    assert data["layout_config"] is None


def test_export_writes_file(tmp_path):
    render = run_mock("broken_family.yml")
    out = tmp_path / "nested" / "tree.json"

    export_render_json(render, out)

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["status"] == "warning"
    assert len(data["violations"]) == 3


def test_deep_lineage_runs_end_to_end():
    depth = 2000
    members = [
        Person(id=f"p{i}", first_name=f"P{i}", last_name="Line", is_root=(i == 0))
        for i in range(depth)
    ]
    rels = [
        Relationship(
            id=f"r{i}",
            person1_id=f"p{i}",
            person2_id=f"p{i + 1}",
            relationship_type=RelationshipType.PARENT_CHILD,
        )
        for i in range(depth - 1)
    ]

    render = run_pipeline(members, rels, layout_config=LayoutConfig(), viewport_width=1200)

    assert render.status == STATUS_OK
    assert len(render.nodes) == depth
    assert render.generations == depth
    assert render.canvas == (1400, 100 + (depth - 1) * 180 + 80 + 200)
