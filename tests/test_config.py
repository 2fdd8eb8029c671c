import pytest

from family_tree_layout import config as config_module
from family_tree_layout.config import CONFIG_ENV_VAR, get_config, load_config, reset_config_cache
from family_tree_layout.layout import LayoutConfig, default_viewport_width
from family_tree_layout.viewport import ViewportLimits


@pytest.fixture
def fresh_config():
    reset_config_cache()
    yield
    reset_config_cache()


def write_config(tmp_path, text):
    path = tmp_path / "ftl.yml"
    path.write_text(text, encoding="utf-8")
    return path


def test_repo_config_defaults(fresh_config):
    cfg = get_config()

    assert cfg.layout["node_width"] == 140
    assert cfg.viewport["pan_buttons"] == [1, 2]
    assert cfg.debug is False


def test_load_explicit_path(tmp_path):
    path = write_config(tmp_path, "debug: true\nlayout:\n  node_width: 200\n")
    cfg = load_config(path)

    assert cfg.debug is True
    assert cfg.layout == {"node_width": 200}
    assert cfg.viewport == {}


def test_missing_explicit_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yml")


def test_missing_env_path_raises(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.yml"))
    with pytest.raises(FileNotFoundError):
        load_config()


def test_missing_default_file_gives_empty_config(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(config_module, "CONFIG_PATH", tmp_path / "absent.yml")

    cfg = load_config()
    assert cfg.layout == {} and cfg.logging == {}


def test_empty_file_is_empty_config(tmp_path):
    assert load_config(write_config(tmp_path, "")).paths == {}


def test_env_override_feeds_layout_and_viewport(tmp_path, monkeypatch, fresh_config):
    path = write_config(
        tmp_path,
        "layout:\n  node_width: 100\n  viewport_width: 900\nviewport:\n  max_scale: 2.0\n",
    )
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert LayoutConfig.from_config().node_width == 100
    assert default_viewport_width() == 900
    assert ViewportLimits.from_config().max_scale == 2.0


def test_get_config_is_cached(fresh_config):
    assert get_config() is get_config()
