"""
Tests for interpreter configuration loading.
"""

import textwrap

import pytest
from sprig import InterpreterConfig, load_config, compile_and_run
from sprig.config import config_from_mapping


class TestInterpreterConfig:
    """Test config defaults and validation."""

    def test_defaults(self):
        config = InterpreterConfig()
        assert config.max_depth == 150
        assert config.max_nesting == 64
        assert config.strict_operands is False

    @pytest.mark.parametrize("kwargs", [
        {"max_depth": 0},
        {"max_nesting": -1},
        {"max_depth": "deep"},
        {"max_depth": True},
        {"strict_operands": "yes"},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            InterpreterConfig(**kwargs)

    def test_override_skips_none(self):
        config = InterpreterConfig(max_depth=50)
        updated = config.override(max_depth=None, strict_operands=True)
        assert updated.max_depth == 50
        assert updated.strict_operands is True
        assert config.strict_operands is False

    def test_from_mapping_rejects_unknown_keys(self):
        with pytest.raises(ValueError, match="unknown configuration keys: colour"):
            config_from_mapping({"colour": "red"})

    def test_from_mapping_rejects_non_mapping(self):
        with pytest.raises(ValueError):
            config_from_mapping(["max_depth"])


class TestLoadConfig:
    """Test YAML config files."""

    def test_load(self, tmp_path):
        path = tmp_path / "sprig.yaml"
        path.write_text(textwrap.dedent("""
            max_depth: 40
            strict_operands: true
        """))
        config = load_config(path)
        assert config.max_depth == 40
        assert config.max_nesting == 64
        assert config.strict_operands is True

    def test_load_accepts_str_path(self, tmp_path):
        path = tmp_path / "sprig.yaml"
        path.write_text("max_nesting: 8\n")
        assert load_config(str(path)).max_nesting == 8

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == InterpreterConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_non_mapping_document(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            load_config(path)

    def test_loaded_config_drives_run(self, tmp_path):
        path = tmp_path / "strict.yaml"
        path.write_text("strict_operands: true\n")
        result = compile_and_run("null + 1", config=load_config(path))
        assert not result.success
        assert result.diagnostic.code == "E308"
