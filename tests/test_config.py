"""Tests for configuration loading."""

import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from assembler.errors import ConfigError
from config import AssemblyConfig, load_config
from schema.model import Feature


def _write(tmpdir: str, text: str) -> Path:
    path = Path(tmpdir) / "assembly.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:
    """Tests for load_config."""

    def test_full_config(self):
        """Test loading every supported key."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, """
lib_dirs: [lib, /abs/lib]
test_files:
  - tests/a.yang
features: ["a:x"]
recursive: true
use_all_files: true
strict_extensions: true
require_tested_match: true
""")

            config = load_config(path)

            assert config.lib_dirs == [str(Path(tmpdir) / "lib"), "/abs/lib"]
            assert config.test_files == [str(Path(tmpdir) / "tests" / "a.yang")]
            assert config.features == ["a:x"]
            assert config.recursive and config.use_all_files
            assert config.strict_extensions and config.require_tested_match
            assert Feature("a", "x") in config.feature_set()

    def test_empty_file_gives_defaults(self):
        """Test that an empty file yields the default configuration."""
        with tempfile.TemporaryDirectory() as tmpdir:
            assert load_config(_write(tmpdir, "")) == AssemblyConfig()

    def test_single_string_becomes_list(self):
        """Test that a scalar is accepted for list keys."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config = load_config(_write(tmpdir, "features: a:x\n"))

            assert config.features == ["a:x"]

    @pytest.mark.parametrize("text", [
        "- just\n- a list\n",
        "unknown_key: 1\n",
        "recursive: yes please\n",
        "lib_dirs: [1, 2]\n",
        "features: [no-colon]\n",
        "lib_dirs: [unclosed\n",
    ])
    def test_invalid_config(self, text):
        """Test that invalid content raises ConfigError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigError):
                load_config(_write(tmpdir, text))

    def test_missing_file(self):
        """Test that a missing file raises ConfigError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigError):
                load_config(Path(tmpdir) / "absent.yaml")


class TestMerge:
    """Tests for overlaying command-line values."""

    def test_lists_extend_and_flags_or(self):
        """Test that lists are extended and flags are OR-ed."""
        base = AssemblyConfig(lib_dirs=["lib"], recursive=True)

        merged = base.merged(lib_dirs=["more"], test_files=["a.yang"], recursive=False, use_all_files=True)

        assert merged.lib_dirs == ["lib", "more"]
        assert merged.test_files == ["a.yang"]
        assert merged.recursive is True
        assert merged.use_all_files is True
        assert base.lib_dirs == ["lib"]

    def test_unknown_flag(self):
        """Test that unknown flags are rejected."""
        with pytest.raises(TypeError):
            AssemblyConfig().merged(verbose=True)

    def test_feature_set_invalid(self):
        """Test that a bad feature identifier given on the command line becomes a ConfigError."""
        with pytest.raises(ConfigError):
            AssemblyConfig().merged(features=["bad"])


class TestAssemblyConfig:
    """Tests for validation of AssemblyConfig values."""

    def test_direct_construction_validates(self):
        """Test that wrong types and bad features are rejected on construction."""
        with pytest.raises(ValidationError):
            AssemblyConfig(features=["bad"])
        with pytest.raises(ValidationError):
            AssemblyConfig(recursive="yes")
        with pytest.raises(ValidationError):
            AssemblyConfig(lib_dirs=[1])

    def test_unknown_field_rejected(self):
        """Test that unknown fields are rejected."""
        with pytest.raises(ValidationError):
            AssemblyConfig(verbose=True)

    def test_frozen(self):
        """Test that a configuration cannot be modified after creation."""
        config = AssemblyConfig()
        with pytest.raises(ValidationError):
            config.recursive = True

    def test_null_list_is_empty(self):
        """Test that a null list value from YAML becomes an empty list."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config = load_config(_write(tmpdir, "lib_dirs:\nrecursive: false\n"))

            assert config.lib_dirs == []
