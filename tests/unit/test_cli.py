"""Tests for the command-line interface."""

import json
import logging
from pathlib import Path

import pytest
from conftest import FakeEngine
from typer.testing import CliRunner

import clipbridge.native.library as library_module
from clipbridge import __version__
from clipbridge.cli import app

runner = CliRunner()

SQUARE = [0, 0, 10, 0, 10, 10, 0, 10]
LINE = [-5, 5, 15, 5]


@pytest.fixture(autouse=True)
def restore_root_handlers():
    """Commands attach handlers to the root logger; drop them afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def engine(monkeypatch) -> FakeEngine:
    """Install a fake engine as the process-wide engine."""
    fake = FakeEngine()
    monkeypatch.setattr(library_module, "_engine", fake)
    return fake


def write_document(path: Path, *paths: list[float]) -> Path:
    path.write_text(json.dumps({"paths": list(paths)}))
    return path


def read_document(path: Path) -> list[list[float]]:
    return json.loads(path.read_text())["paths"]


class TestGlobalOptions:
    """Tests for options shared by every command."""

    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_verbose_and_quiet_conflict(self, engine):
        result = runner.invoke(app, ["-v", "-q", "version"])
        assert result.exit_code == 1

    def test_version_command(self, engine):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "Clipper2 1.5.4-fake" in result.output

    def test_library_not_found(self, monkeypatch, tmp_path):
        monkeypatch.setattr(library_module, "_engine", None)
        monkeypatch.delenv(library_module.ENV_LIBRARY, raising=False)
        monkeypatch.setattr(library_module.ctypes.util, "find_library", lambda name: None)

        result = runner.invoke(app, ["version"])

        assert result.exit_code == 1
        assert "Could not load the Clipper2 library" in result.output


class TestBooleanCommand:
    """Tests for the boolean command."""

    def test_intersection_writes_output(self, engine, tmp_path):
        subject = write_document(tmp_path / "subject.json", SQUARE)
        clip = write_document(tmp_path / "clip.json", [5, 5, 15, 5, 15, 15])
        output = tmp_path / "result.json"

        result = runner.invoke(
            app,
            ["boolean", "intersection", str(subject), "--clip", str(clip), "-o", str(output)],
        )

        assert result.exit_code == 0, result.output
        name, args = engine.calls[-1]
        assert name == "boolean_op"
        assert args["clip_type"] == 1
        assert args["fill_rule"] == 0
        assert read_document(output) == [SQUARE]
        assert not (tmp_path / "result-open.json").exists()
        assert engine.live == 0

    def test_open_results_written_beside_output(self, engine, tmp_path):
        subject = write_document(tmp_path / "subject.json", SQUARE)
        opened = write_document(tmp_path / "lines.json", LINE)
        output = tmp_path / "result.json"

        result = runner.invoke(
            app,
            [
                "-q",
                "boolean",
                "union",
                str(subject),
                "--open",
                str(opened),
                "--fill-rule",
                "non-zero",
                "-o",
                str(output),
            ],
        )

        assert result.exit_code == 0, result.output
        assert engine.calls[-1][1]["fill_rule"] == 1
        assert read_document(tmp_path / "result-open.json") == [LINE]

    def test_options_forwarded(self, engine, tmp_path):
        subject = write_document(tmp_path / "subject.json", SQUARE)

        result = runner.invoke(
            app,
            [
                "-q",
                "boolean",
                "xor",
                str(subject),
                "--precision",
                "4",
                "--drop-collinear",
                "--reverse",
            ],
        )

        assert result.exit_code == 0, result.output
        args = engine.calls[-1][1]
        assert args["precision"] == 4
        assert args["preserve_collinear"] is False
        assert args["reverse_solution"] is True

    def test_invalid_operation(self, engine, tmp_path):
        subject = write_document(tmp_path / "subject.json", SQUARE)
        result = runner.invoke(app, ["boolean", "merge", str(subject)])
        assert result.exit_code == 1
        assert "Invalid operation" in result.output
        assert engine.calls == []

    def test_no_clip_rejected(self, engine, tmp_path):
        subject = write_document(tmp_path / "subject.json", SQUARE)
        result = runner.invoke(app, ["boolean", "no_clip", str(subject)])
        assert result.exit_code == 1
        assert "Invalid operation" in result.output
        assert "no_clip" not in result.output.split("Valid values:")[-1]
        assert engine.calls == []

    def test_engine_failure_status(self, monkeypatch, tmp_path):
        monkeypatch.setattr(library_module, "_engine", FakeEngine(status=-1))
        subject = write_document(tmp_path / "subject.json", SQUARE)

        result = runner.invoke(app, ["-q", "boolean", "union", str(subject)])

        assert result.exit_code == 1
        assert "failed" in result.output

    def test_missing_input(self, engine, tmp_path):
        result = runner.invoke(app, ["boolean", "union", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert engine.calls == []


class TestInflateCommand:
    """Tests for the inflate command."""

    def test_inflate(self, engine, tmp_path):
        source = write_document(tmp_path / "shape.json", SQUARE)

        result = runner.invoke(
            app,
            ["inflate", str(source), "--delta", "-1.5", "--join", "round", "--end", "joined"],
        )

        assert result.exit_code == 0, result.output
        name, args = engine.calls[-1]
        assert name == "inflate_paths"
        assert args["delta"] == -1.5
        assert args["join_type"] == 2
        assert args["end_type"] == 1

    def test_invalid_join(self, engine, tmp_path):
        source = write_document(tmp_path / "shape.json", SQUARE)
        result = runner.invoke(app, ["inflate", str(source), "-d", "1", "--join", "pointy"])
        assert result.exit_code == 1
        assert "Invalid join style" in result.output

    def test_invalid_miter_limit(self, engine, tmp_path):
        source = write_document(tmp_path / "shape.json", SQUARE)
        result = runner.invoke(
            app, ["-q", "inflate", str(source), "-d", "1", "--miter-limit", "0"]
        )
        assert result.exit_code == 1


class TestRectClipCommand:
    """Tests for the rect-clip command."""

    def test_rect_clip(self, engine, tmp_path):
        source = write_document(tmp_path / "shape.json", SQUARE)
        output = tmp_path / "clipped.json"

        result = runner.invoke(
            app, ["rect-clip", str(source), "--rect", "2,2,8,8", "-o", str(output)]
        )

        assert result.exit_code == 0, result.output
        name, args = engine.calls[-1]
        assert name == "rect_clip"
        assert args["rect"] == (2, 2, 8, 8)
        assert output.exists()

    def test_rect_clip_lines(self, engine, tmp_path):
        source = write_document(tmp_path / "lines.json", LINE)
        result = runner.invoke(app, ["-q", "rect-clip", str(source), "-r", "0,0,10,10", "--lines"])
        assert result.exit_code == 0, result.output
        assert engine.calls[-1][0] == "rect_clip_lines"

    def test_invalid_rect(self, engine, tmp_path):
        source = write_document(tmp_path / "shape.json", SQUARE)
        result = runner.invoke(app, ["rect-clip", str(source), "--rect", "1,2,3"])
        assert result.exit_code == 1
        assert "Invalid rectangle" in result.output
