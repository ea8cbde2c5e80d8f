from pathlib import Path

import pytest
import yaml

import config


@pytest.fixture
def user_cfg(tmp_path, monkeypatch):
    path = tmp_path / "todoist_tree.yaml"
    monkeypatch.setattr(config, "USER_CONFIG_PATH", path)
    for name in ("TODOIST_API_TOKEN", "TODOIST_TREE_CACHE_DIR", "TODOIST_TREE_CACHE_TTL"):
        monkeypatch.delenv(name, raising=False)
    return path


def test_token_roundtrip_and_removal(user_cfg):
    assert config.get_user_token() == ""

    config.set_user_token("  secret ")
    assert config.get_user_token() == "secret"
    assert yaml.safe_load(user_cfg.read_text())["token"] == "secret"

    config.set_user_token("")
    assert config.get_user_token() == ""
    assert not user_cfg.exists()


def test_env_token_wins(user_cfg, monkeypatch):
    config.set_user_token("file-token")
    monkeypatch.setenv("TODOIST_API_TOKEN", "env-token")

    assert config.get_user_token() == "env-token"


def test_defaults_without_file(user_cfg):
    assert config.get_default_sort() == "priority"
    assert config.get_theme() == config.DEFAULT_THEME
    assert config.get_cache_max_age() == config.DEFAULT_CACHE_MAX_AGE
    assert config.get_cache_dir() == Path.home() / ".cache" / "todoist-tree"
    assert config.get_user_lang() == ""


def test_values_from_file(user_cfg):
    user_cfg.write_text(
        yaml.safe_dump({"default_sort": "Date", "theme": "dark-contrast", "cache_max_age": 60, "lang": "ru"}),
        encoding="utf-8",
    )

    assert config.get_default_sort() == "date"
    assert config.get_theme() == "dark-contrast"
    assert config.get_cache_max_age() == 60
    assert config.get_user_lang() == "ru"


def test_env_overrides_for_cache(user_cfg, monkeypatch, tmp_path):
    monkeypatch.setenv("TODOIST_TREE_CACHE_DIR", str(tmp_path / "c"))
    monkeypatch.setenv("TODOIST_TREE_CACHE_TTL", "-5")

    assert config.get_cache_dir() == tmp_path / "c"
    assert config.get_cache_max_age() == 0

    monkeypatch.setenv("TODOIST_TREE_CACHE_TTL", "soon")
    assert config.get_cache_max_age() == config.DEFAULT_CACHE_MAX_AGE


def test_unreadable_config_is_ignored(user_cfg):
    user_cfg.write_text("token: [unclosed", encoding="utf-8")
    assert config.get_user_token() == ""

    user_cfg.write_text("- a list", encoding="utf-8")
    assert config.get_theme() == config.DEFAULT_THEME
