"""Tests for layered configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from filterkit.core.codec import CodecOptions
from filterkit.core.config import ConfigManager, deep_merge, get_config_home, merge_arrays
from filterkit.core.exceptions import ConfigError


def _write_overlay(home: Path, name: str, data) -> None:
    config_dir = home / "config"
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / name).write_text(yaml.safe_dump(data), encoding="utf-8")


class TestDefaults:
    def test_bundled_defaults(self):
        cfg = ConfigManager().load_config(validate=True)
        assert cfg["codec"]["indent"] == 4
        assert cfg["codec"]["mergeKeys"] == ["BaseType", "Class", "Prophecy"]
        assert cfg["codec"]["headerDelimiter"] == " - "
        assert cfg["store"]["extension"] == ".filter"
        assert cfg["settings"]["fileName"] == "Settings.json"
        assert cfg["logging"]["level"] == "WARNING"

    def test_config_home_follows_environment(self, isolated_config_env):
        assert get_config_home() == isolated_config_env
        assert ConfigManager().config_home == isolated_config_env

    def test_get_dot_path(self):
        mgr = ConfigManager()
        assert mgr.get("codec.indent") == 4
        assert mgr.get("codec.missing", "fallback") == "fallback"
        assert mgr.get("nope.at.all") is None

    def test_defaults_map_onto_codec_options(self):
        options = CodecOptions.from_config(ConfigManager().load_config())
        assert options == CodecOptions()


class TestUserOverlay:
    def test_overlay_overrides_defaults(self, isolated_config_env):
        _write_overlay(isolated_config_env, "codec.yml", {"codec": {"indent": 2}})
        cfg = ConfigManager().load_config()
        assert cfg["codec"]["indent"] == 2
        assert cfg["codec"]["mergeKeys"] == ["BaseType", "Class", "Prophecy"]

    def test_overlay_can_append_to_lists(self, isolated_config_env):
        _write_overlay(isolated_config_env, "codec.yaml", {"codec": {"mergeKeys": ["+", "HasExplicitMod"]}})
        cfg = ConfigManager().load_config()
        assert cfg["codec"]["mergeKeys"][-1] == "HasExplicitMod"
        assert len(cfg["codec"]["mergeKeys"]) == 4

    def test_explicit_config_home(self, tmp_path):
        home = tmp_path / "elsewhere"
        _write_overlay(home, "logging.yaml", {"logging": {"level": "DEBUG"}})
        assert ConfigManager(home).get("logging.level") == "DEBUG"

    def test_schema_violation(self, isolated_config_env):
        _write_overlay(isolated_config_env, "codec.yaml", {"codec": {"indent": 0, "tabs": True}})
        with pytest.raises(ConfigError) as excinfo:
            ConfigManager().load_config(validate=True)
        assert len(excinfo.value.context["errors"]) == 2

    def test_validation_can_be_skipped(self, isolated_config_env):
        _write_overlay(isolated_config_env, "codec.yaml", {"codec": {"indent": 0}})
        assert ConfigManager().load_config(validate=False)["codec"]["indent"] == 0

    def test_invalid_yaml(self, isolated_config_env):
        config_dir = isolated_config_env / "config"
        config_dir.mkdir(parents=True)
        (config_dir / "broken.yaml").write_text("codec: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            ConfigManager().load_config()

    def test_overlay_must_be_mapping(self, isolated_config_env):
        _write_overlay(isolated_config_env, "list.yaml", ["not", "a", "mapping"])
        with pytest.raises(ConfigError, match="mapping"):
            ConfigManager().load_config()


class TestEnvironmentOverrides:
    def test_scalar_override_is_coerced(self, monkeypatch):
        monkeypatch.setenv("FILTERKIT_codec__indent", "2")
        assert ConfigManager().load_config()["codec"]["indent"] == 2

    def test_key_lookup_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("FILTERKIT_CODEC__MERGEKEYS", '["BaseType"]')
        cfg = ConfigManager().load_config()
        assert cfg["codec"]["mergeKeys"] == ["BaseType"]
        assert "mergekeys" not in cfg["codec"]

    def test_append_marker(self, monkeypatch):
        monkeypatch.setenv("FILTERKIT_codec__mergeKeys__APPEND", "HasExplicitMod")
        cfg = ConfigManager().load_config()
        assert cfg["codec"]["mergeKeys"] == ["BaseType", "Class", "Prophecy", "HasExplicitMod"]

    def test_env_beats_overlay(self, isolated_config_env, monkeypatch):
        _write_overlay(isolated_config_env, "codec.yaml", {"codec": {"indent": 2}})
        monkeypatch.setenv("FILTERKIT_codec__indent", "8")
        assert ConfigManager().get("codec.indent") == 8

    def test_malformed_key_fails_validation(self, monkeypatch):
        monkeypatch.setenv("FILTERKIT_codec____indent", "2")
        mgr = ConfigManager()
        assert mgr.load_config(validate=False)["codec"]["indent"] == 4
        with pytest.raises(ConfigError, match="Malformed"):
            mgr.load_config(validate=True)

    def test_reload_picks_up_changes(self, monkeypatch):
        mgr = ConfigManager()
        assert mgr.get("codec.indent") == 4
        monkeypatch.setenv("FILTERKIT_codec__indent", "3")
        assert mgr.get("codec.indent") == 4
        assert mgr.reload()["codec"]["indent"] == 3


class TestMergeHelpers:
    def test_deep_merge_does_not_mutate(self):
        base = {"a": {"b": 1}}
        merged = deep_merge(base, {"a": {"c": 2}})
        assert merged == {"a": {"b": 1, "c": 2}}
        assert base == {"a": {"b": 1}}

    def test_merge_arrays(self):
        assert merge_arrays([1, 2], [3]) == [3]
        assert merge_arrays([1, 2], ["+", 3]) == [1, 2, 3]
        assert merge_arrays([1, 2], ["=", 3]) == [3]
        assert merge_arrays([1, 2], []) == [1, 2]

    def test_nested_lists_append_without_mutating_base(self):
        base = {"codec": {"mergeKeys": ["BaseType"]}}
        merged = deep_merge(base, {"codec": {"mergeKeys": ["+", "Class"]}})
        assert merged["codec"]["mergeKeys"] == ["BaseType", "Class"]
        assert base["codec"]["mergeKeys"] == ["BaseType"]

    def test_new_key_is_taken_as_is(self):
        assert deep_merge({}, {"store": {"extension": ".txt"}}) == {"store": {"extension": ".txt"}}
