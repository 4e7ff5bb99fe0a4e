"""
Tests for Config — Layered settings for resolution, dialects and output

These tests validate:
- Section validation
- Config hierarchy (env > project > user > defaults)
- get/set through dotted keys
"""

import logging

import pytest
import yaml

from procindex.config import (
    Config,
    ConfigManager,
    DialectsConfig,
    DisplayConfig,
    LoggingConfig,
    PipelineConfig,
    ResolverConfig,
)


def write_yaml(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data))


class TestSections:
    """Section defaults and validation."""

    def test_defaults_valid(self):
        assert Config().validate() is None

    def test_resolver_defaults(self):
        config = ResolverConfig()
        assert config.base_package == "java.lang"
        assert config.builtin_types == ["Object", "String", "Float", "Integer", "Boolean"]
        assert config.create_resolver().qualify_builtin("String") == "java.lang.String"

    def test_builtin_must_be_simple_name(self):
        assert "simple name" in ResolverConfig(builtin_types=["java.lang.String"]).validate()

    def test_empty_separator(self):
        assert ResolverConfig(package_separator="").validate() is not None

    def test_unknown_dialect(self):
        assert "groovy" in DialectsConfig(enabled=["java", "groovy"]).validate()

    def test_workers_positive(self):
        assert PipelineConfig(workers=0).validate() is not None

    def test_display_format(self):
        assert DisplayConfig(format="xml").validate() is not None
        assert DisplayConfig(symbols="emoji").validate() is not None

    def test_log_level(self):
        assert LoggingConfig(level="debug").validate() is None
        assert LoggingConfig(level="chatty").validate() is not None

    def test_dict_round_trip(self):
        config = Config()
        config.resolver.base_package = "lang"
        config.dialects.enabled = ["mvel"]
        assert Config.from_dict(config.to_dict()) == config


class TestConfigManager:
    """Hierarchy and persistence."""

    @pytest.fixture
    def manager(self, tmp_path):
        return ConfigManager(tmp_path / "project", user_dir=tmp_path / "user")

    def test_defaults_without_files(self, manager):
        assert manager.load() == Config()

    def test_user_config(self, manager):
        write_yaml(manager.user_config_path, {"resolver": {"base_package": "user.lang"}})
        assert manager.load().resolver.base_package == "user.lang"

    def test_project_overrides_user(self, manager):
        write_yaml(manager.user_config_path, {"resolver": {"base_package": "user.lang"},
                                              "pipeline": {"workers": 2}})
        write_yaml(manager.project_config_path, {"resolver": {"base_package": "project.lang"}})
        config = manager.load()
        assert config.resolver.base_package == "project.lang"
        assert config.pipeline.workers == 2

    def test_env_overrides_project(self, manager, monkeypatch):
        write_yaml(manager.project_config_path, {"pipeline": {"workers": 2}})
        monkeypatch.setenv("PROCINDEX_WORKERS", "8")
        monkeypatch.setenv("PROCINDEX_DIALECTS", "java, mvel")
        monkeypatch.setenv("PROCINDEX_LOG_LEVEL", "debug")
        config = manager.load()
        assert config.pipeline.workers == 8
        assert config.dialects.enabled == ["java", "mvel"]
        assert config.logging.level == "DEBUG"

    def test_invalid_env_ignored(self, manager, monkeypatch, caplog):
        monkeypatch.setenv("PROCINDEX_WORKERS", "many")
        with caplog.at_level(logging.WARNING, logger="procindex.config"):
            config = manager.load()
        assert config.pipeline.workers == 4
        assert "PROCINDEX_WORKERS" in caplog.text

    def test_malformed_yaml_ignored(self, manager, caplog):
        manager.project_config_path.parent.mkdir(parents=True)
        manager.project_config_path.write_text("resolver: [unclosed")
        with caplog.at_level(logging.WARNING, logger="procindex.config"):
            config = manager.load()
        assert config == Config()
        assert "malformed" in caplog.text

    def test_set_project(self, manager):
        assert manager.set("resolver.base_package", "kotlin") is None
        saved = yaml.safe_load(manager.project_config_path.read_text())
        assert saved["resolver"]["base_package"] == "kotlin"
        assert manager.get("resolver.base_package") == "kotlin"

    def test_set_user(self, manager):
        assert manager.set("pipeline.workers", "2", scope="user") is None
        assert manager.user_config_path.exists()
        assert not manager.project_config_path.exists()

    def test_set_list_and_bool(self, manager):
        manager.set("dialects.enabled", "java,mvel")
        manager.set("pipeline.publish_to_metadata", "no")
        assert manager.get("dialects.enabled") == "java, mvel"
        assert manager.get("pipeline.publish_to_metadata") == "false"

    def test_set_unknown_key(self, manager):
        assert "Unknown setting" in manager.set("resolver.colour", "red")

    def test_set_unparsable_value(self, manager):
        assert "Invalid value" in manager.set("pipeline.workers", "lots")

    def test_set_invalid_value_not_saved(self, manager):
        assert manager.set("display.format", "xml") is not None
        assert not manager.project_config_path.exists()

    def test_get_unknown_key(self, manager):
        assert manager.get("nope.nothing") is None

    def test_display_lists_sections(self, manager):
        text = manager.display()
        assert "Resolver:" in text
        assert "base_package: java.lang" in text
        assert str(manager.project_config_path) in text
