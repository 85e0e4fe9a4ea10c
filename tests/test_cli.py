"""Tests for the command-line entry point."""

import json
import tempfile
from pathlib import Path

import pytest

import assembler.builder
from cli import main, parse_args
from conftest import EngineFactory, write_module


@pytest.fixture
def fake_engines(monkeypatch):
    """Route the default engine to recording engines."""
    factory = EngineFactory()
    monkeypatch.setattr(assembler.builder, "default_engine_factory", factory)
    return factory


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Test default option values."""
        parsed = parse_args([])

        assert parsed.files == []
        assert parsed.path == []
        assert parsed.format == "ascii"
        assert not parsed.recursive
        assert not parsed.parse_all

    def test_repeatable_paths_and_features(self):
        """Test repeatable library paths and multiple features."""
        parsed = parse_args(["a.yang", "-p", "x", "-p", "y", "-F", "a:f1", "b:f2", "-r", "-a", "-vv"])

        assert parsed.files == ["a.yang"]
        assert parsed.path == ["x", "y"]
        assert parsed.features == ["a:f1", "b:f2"]
        assert parsed.recursive and parsed.parse_all
        assert parsed.verbose == 2


class TestMain:
    """Tests for main()."""

    def test_ascii_report(self, fake_engines, capsys):
        """Test the default report for tested files."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            a = write_module(root, "a.yang", "a", imports=("b",))
            write_module(root, "b.yang", "b")

            code = main([str(a)])

            out = capsys.readouterr().out
            assert code == 0
            assert "a [tested]" in out
            assert "└── b" in out

    def test_json_to_file(self, fake_engines, capsys):
        """Test JSON output written to a file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            a = write_module(root, "a.yang", "a")
            out_file = root / "report.json"

            code = main([str(a), "-f", "json", "-o", str(out_file)])

            assert code == 0
            data = json.loads(out_file.read_text(encoding="utf-8"))
            assert data["tested"] == ["a"]
            assert "Output written to" in capsys.readouterr().err

    def test_mermaid(self, fake_engines, capsys):
        """Test Mermaid output."""
        with tempfile.TemporaryDirectory() as tmpdir:
            a = write_module(Path(tmpdir), "a.yang", "a")

            assert main([str(a), "-f", "mermaid", "--orientation", "TD"]) == 0
            assert capsys.readouterr().out.startswith("flowchart TD")

    def test_features_and_parse_all_reach_engine(self, fake_engines):
        """Test that feature and parse-all options are applied."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            a = write_module(root, "a.yang", "a")
            write_module(root, "b.yang", "b")

            assert main([str(a), "-F", "a:x", "-a"]) == 0

            engine = fake_engines.last
            assert engine.calls[0][0] == "features"
            assert ("source", "b") in engine.calls

    def test_config_file(self, fake_engines, capsys):
        """Test that a YAML config supplies the sources."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_module(root / "models", "a.yang", "a")
            config = root / "assembly.yaml"
            config.write_text("test_files: [models/a.yang]\n", encoding="utf-8")

            assert main(["-c", str(config)]) == 0
            assert "a [tested]" in capsys.readouterr().out

    def test_nothing_to_do(self, fake_engines, capsys):
        """Test that running without sources is an error."""
        assert main([]) == 1
        assert "Error" in capsys.readouterr().err

    def test_engine_error(self, monkeypatch, capsys):
        """Test that assembly errors produce exit code 1."""
        monkeypatch.setattr(assembler.builder, "default_engine_factory", EngineFactory(errors=["broken"]))
        with tempfile.TemporaryDirectory() as tmpdir:
            a = write_module(Path(tmpdir), "a.yang", "a")

            assert main([str(a)]) == 1
            assert "broken" in capsys.readouterr().err

    def test_strict_extensions(self, fake_engines, capsys):
        """Test that --strict-extensions rejects non-YANG files."""
        with tempfile.TemporaryDirectory() as tmpdir:
            notes = Path(tmpdir) / "notes.txt"
            notes.write_text("x", encoding="utf-8")

            assert main([str(notes), "--strict-extensions"]) == 1
            assert "not a schema source file" in capsys.readouterr().err

    def test_bad_feature(self, fake_engines, capsys):
        """Test that a malformed feature identifier is reported."""
        with tempfile.TemporaryDirectory() as tmpdir:
            a = write_module(Path(tmpdir), "a.yang", "a")

            assert main([str(a), "-F", "nocolon"]) == 1
            assert "nocolon" in capsys.readouterr().err
