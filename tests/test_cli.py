import json

from typer.testing import CliRunner

from family_tree_layout.cli.app import app
from family_tree_layout.utils import mock_file_path

runner = CliRunner()

SMITH = str(mock_file_path("smith_family.json"))
BROKEN = str(mock_file_path("broken_family.yml"))


def write_snapshot(tmp_path, data, name="tree.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_layout_prints_json():
    result = runner.invoke(app, ["layout", SMITH, "--viewport-width", "1200"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["status"] == "ok"
    assert [n["id"] for n in data["nodes"]] == ["1", "3", "5", "6"]
    assert data["nodes"][0]["x"] == 530


def test_layout_pretty_to_file(tmp_path):
    out = tmp_path / "layout.json"
    result = runner.invoke(app, ["layout", BROKEN, "--out", str(out), "--pretty"])

    assert result.exit_code == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith("{\n")
    assert json.loads(text)["status"] == "warning"


def test_layout_without_root_exits_nonzero(tmp_path):
    path = write_snapshot(
        tmp_path,
        {"members": [{"id": "a", "first_name": "Ann", "last_name": "Lee"}], "relationships": []},
    )
    result = runner.invoke(app, ["layout", path])

    assert result.exit_code == 1
    assert json.loads(result.stdout)["status"] == "error"


def test_layout_rejects_invalid_snapshot(tmp_path):
    path = write_snapshot(
        tmp_path,
        {
            "members": [{"id": "a", "first_name": "Ann", "last_name": "Lee", "gender": "robot"}],
            "relationships": [],
        },
    )
    result = runner.invoke(app, ["layout", path])

    assert result.exit_code == 2


def test_layout_missing_file_is_usage_error(tmp_path):
    result = runner.invoke(app, ["layout", str(tmp_path / "nope.json")])
    assert result.exit_code == 2


def test_validate_clean_tree():
    result = runner.invoke(app, ["validate", SMITH])

    assert result.exit_code == 0
    assert "Tree structure is valid" in result.stdout
    assert "4 nodes" in result.stdout


def test_validate_reports_violations():
    result = runner.invoke(app, ["validate", BROKEN])

    assert result.exit_code == 0
    assert "Phase 1 Constraint Violations" in result.stdout
    assert "Alan has multiple spouses" in result.stdout
    assert "Zoe Park" in result.stdout


def test_validate_strict_fails_on_violations():
    result = runner.invoke(app, ["validate", BROKEN, "--strict"])
    assert result.exit_code == 1


def test_validate_without_root(tmp_path):
    path = write_snapshot(
        tmp_path,
        {"members": [{"id": "a", "first_name": "Ann", "last_name": "Lee"}], "relationships": []},
    )
    result = runner.invoke(app, ["validate", path])

    assert result.exit_code == 1
    assert "Cannot build tree" in result.stdout


def test_stats_table():
    result = runner.invoke(app, ["stats", SMITH])

    assert result.exit_code == 0
    assert "Family Tree Statistics" in result.stdout
    assert "Generations" in result.stdout
    assert "Not linked to root" in result.stdout
