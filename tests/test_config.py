"""
Tests for formatting configuration.
"""

import dataclasses
import json

import pytest

from cobol_formatter.config import (
    SETTING_ALIASES,
    Config,
    create_default_config,
    merge_configs,
)


class TestConfig:
    """Tests for Config dataclass."""

    def test_create_default_config(self):
        """Create config with default values."""
        config = create_default_config()
        assert config.indent_spaces == 3
        assert config.blank_line_after_exit is False
        assert config.evaluate_indent_aware is False
        assert config.align_descriptive_clauses is False
        assert config.encoding == "latin-1"

    def test_config_is_frozen(self):
        config = Config()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.indent_spaces = 4

    def test_config_to_dict(self):
        data = Config(indent_spaces=4).to_dict()
        assert data["indent_spaces"] == 4
        assert data["align_descriptive_clauses"] is False

    def test_config_from_dict(self):
        config = Config.from_dict({"indent_spaces": 2, "blank_line_after_exit": True})
        assert config.indent_spaces == 2
        assert config.blank_line_after_exit is True

    def test_config_from_dict_ignores_unknown(self):
        """Unknown keys are ignored."""
        config = Config.from_dict({"indent_spaces": 2, "unknownKey": "value"})
        assert config.indent_spaces == 2

    def test_config_from_editor_settings(self):
        """Editor setting names map onto config fields."""
        config = Config.from_dict({
            "indentationSpaces": 4,
            "addEmptyLineAfterExit": True,
            "evaluateIndentWhen": True,
            "alignPicClauses": True,
        })
        assert config.indent_spaces == 4
        assert config.blank_line_after_exit is True
        assert config.evaluate_indent_aware is True
        assert config.align_descriptive_clauses is True

    def test_aliases_target_real_fields(self):
        field_names = {f.name for f in dataclasses.fields(Config)}
        assert set(SETTING_ALIASES.values()) <= field_names

    def test_save_and_load(self, tmp_path):
        """Config survives a save/load cycle."""
        path = tmp_path / "config.json"
        original = Config(indent_spaces=2, align_descriptive_clauses=True)
        original.save_to_file(path)
        assert Config.load_from_file(path) == original

    def test_load_editor_settings_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"alignPicClauses": True}))
        assert Config.load_from_file(path).align_descriptive_clauses is True


class TestValidation:
    """Tests for configuration validation."""

    def test_default_is_valid(self):
        assert Config().is_valid()
        assert Config().validate() == []

    @pytest.mark.parametrize("indent", [0, -2, 1.5, "3", False])
    def test_invalid_indent(self, indent):
        errors = Config(indent_spaces=indent).validate()
        assert len(errors) == 1
        assert "indent_spaces" in errors[0]

    def test_invalid_log_level(self):
        errors = Config(log_level="LOUD").validate()
        assert errors == ["Invalid log level: LOUD"]

    def test_verbose_and_quiet(self):
        assert not Config(verbose=True, quiet=True).is_valid()


class TestMergeConfigs:
    """Tests for combining file and command-line settings."""

    def test_override_wins(self):
        base = Config(indent_spaces=2)
        override = Config(indent_spaces=4)
        assert merge_configs(base, override).indent_spaces == 4

    def test_defaults_do_not_override(self):
        base = Config(indent_spaces=2, align_descriptive_clauses=True)
        merged = merge_configs(base, Config(check=True))
        assert merged.indent_spaces == 2
        assert merged.align_descriptive_clauses is True
        assert merged.check is True
