"""Unit tests for the command line interface."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from typer.testing import CliRunner

from iconspec import __version__
from iconspec.cli.app import app
from iconspec.config import LoggingConfig
from iconspec.core.expander import expand
from iconspec.samples import get_sample, list_samples
from iconspec.utils import reset_logging

runner = CliRunner()


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()


def write_sample(directory: Path, name: str) -> Path:
    path = directory / f"{name}.json"
    path.write_text(json.dumps(get_sample(name)), encoding="utf-8")
    return path


def write_expanded(directory: Path, spec: dict) -> Path:
    path = directory / f"{spec['name']}.expanded.json"
    path.write_text(json.dumps(spec), encoding="utf-8")
    return path


@pytest.fixture
def search_spec():
    return expand(get_sample("search")).expanded.to_dict()


class TestGlobalOptions:
    """Tests for options handled by the main callback."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_verbose_and_quiet_conflict(self):
        result = runner.invoke(app, ["-v", "-q", "presets"])
        assert result.exit_code == 1

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "build.log"
        draft = write_sample(tmp_path, "search")
        result = runner.invoke(
            app, ["--log-file", str(log_file), "-q", "build", str(draft), "-j", "1"]
        )
        assert result.exit_code == 0
        assert "Icon built" in log_file.read_text(encoding="utf-8")


class TestPresetsCommand:
    """Tests for `iconspec presets`."""

    def test_lists_presets(self):
        result = runner.invoke(app, ["presets"])
        assert result.exit_code == 0
        for key in ("outline_rounded", "outline_sharp", "solid", "duotone"):
            assert key in result.stdout


class TestSamplesCommand:
    """Tests for `iconspec samples`."""

    def test_lists_names(self):
        result = runner.invoke(app, ["samples"])
        assert result.exit_code == 0
        assert result.stdout.split() == list_samples()

    def test_prints_named_sample(self):
        result = runner.invoke(app, ["samples", "--name", "search"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == get_sample("search")

    def test_unknown_sample(self):
        result = runner.invoke(app, ["samples", "-n", "rocket"])
        assert result.exit_code == 1

    def test_writes_files(self, tmp_path):
        result = runner.invoke(app, ["-q", "samples", "-o", str(tmp_path)])
        assert result.exit_code == 0
        assert sorted(path.stem for path in tmp_path.glob("*.json")) == sorted(list_samples())


class TestExpandCommand:
    """Tests for `iconspec expand`."""

    def test_writes_expanded_next_to_draft(self, tmp_path):
        draft = write_sample(tmp_path, "search")
        result = runner.invoke(app, ["expand", str(draft)])
        assert result.exit_code == 0
        written = json.loads((tmp_path / "search.expanded.json").read_text(encoding="utf-8"))
        assert written["docType"] == "iconExpanded"
        assert written["geometry"]["lines"][0]["x2"] == 17

    def test_no_snap(self, tmp_path):
        draft = write_sample(tmp_path, "search")
        output = tmp_path / "out.json"
        result = runner.invoke(app, ["-q", "expand", str(draft), "-o", str(output), "--no-snap"])
        assert result.exit_code == 0
        written = json.loads(output.read_text(encoding="utf-8"))
        assert written["geometry"]["lines"][0]["x2"] == 16.65

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["expand", str(tmp_path / "missing.json")])
        assert result.exit_code == 1

    def test_malformed_draft(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"name": "bad"}), encoding="utf-8")
        result = runner.invoke(app, ["expand", str(path)])
        assert result.exit_code == 1
        assert not (tmp_path / "bad.expanded.json").exists()


class TestValidateCommand:
    """Tests for `iconspec validate`."""

    def test_valid_spec(self, tmp_path, search_spec):
        result = runner.invoke(app, ["validate", str(write_expanded(tmp_path, search_spec))])
        assert result.exit_code == 0

    def test_json_output(self, tmp_path, search_spec):
        path = write_expanded(tmp_path, search_spec)
        result = runner.invoke(app, ["validate", str(path), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["valid"] is True
        assert data["metrics"]["estimatedStrokeBounds"]["maxX"] == 22

    def test_invalid_spec_exits_1(self, tmp_path, search_spec):
        search_spec["style"]["fill"] = "red"
        path = write_expanded(tmp_path, search_spec)
        result = runner.invoke(app, ["validate", str(path), "--json"])
        assert result.exit_code == 1
        codes = [issue["code"] for issue in json.loads(result.stdout)["issues"]]
        assert codes == ["ICON_STYLE_002"]

    def test_draft_expanded_first(self, tmp_path):
        result = runner.invoke(app, ["-q", "validate", str(write_sample(tmp_path, "search"))])
        assert result.exit_code == 0


class TestCompileCommand:
    """Tests for `iconspec compile`."""

    def test_writes_svg_next_to_spec(self, tmp_path, search_spec):
        path = write_expanded(tmp_path, search_spec)
        result = runner.invoke(app, ["compile", str(path)])
        assert result.exit_code == 0
        svg = (tmp_path / "search.svg").read_text(encoding="utf-8")
        assert svg.startswith("<svg ")
        assert svg.endswith("</svg>\n")

    def test_output_dir_color_minified(self, tmp_path, search_spec):
        path = write_expanded(tmp_path, search_spec)
        out = tmp_path / "out"
        result = runner.invoke(
            app, ["-q", "compile", str(path), "-o", str(out), "-c", "#111827", "-m"]
        )
        assert result.exit_code == 0
        svg = (out / "search.svg").read_text(encoding="utf-8")
        assert svg.count("\n") == 1
        assert 'stroke="#111827"' in svg

    def test_blocked_compile(self, tmp_path, search_spec):
        search_spec["geometry"]["circles"] = [{"cx": 100, "cy": 100, "r": 50}]
        path = write_expanded(tmp_path, search_spec)
        result = runner.invoke(app, ["compile", str(path)])
        assert result.exit_code == 1
        assert not (tmp_path / "search.svg").exists()


class TestBuildCommand:
    """Tests for `iconspec build`."""

    def test_builds_valid_draft(self, tmp_path):
        draft = write_sample(tmp_path, "search")
        out = tmp_path / "build"
        result = runner.invoke(
            app, ["build", str(draft), "-o", str(out), "-j", "1", "--write-expanded"]
        )
        assert result.exit_code == 0
        assert (out / "search.svg").exists()
        assert (out / "search.expanded.json").exists()

    def test_rejected_draft_fails_batch(self, tmp_path):
        drafts = [str(write_sample(tmp_path, name)) for name in ("search", "home")]
        out = tmp_path / "build"
        result = runner.invoke(app, ["-q", "build", *drafts, "-o", str(out), "-j", "1"])
        assert result.exit_code == 1
        assert (out / "search.svg").exists()
        assert not (out / "home.svg").exists()

    def test_missing_draft(self, tmp_path):
        result = runner.invoke(app, ["build", str(tmp_path / "missing.json")])
        assert result.exit_code == 1


class TestLoggingOptions:
    """Tests for --log-level handling through LoggingConfig."""

    def test_unknown_level_rejected(self):
        result = runner.invoke(app, ["--log-level", "LOUD", "presets"])
        assert result.exit_code == 1

    def test_lowercase_level_accepted(self):
        result = runner.invoke(app, ["--log-level", "debug", "presets"])
        assert result.exit_code == 0

    def test_config_normalizes_level(self):
        assert LoggingConfig(log_level="info").log_level == "INFO"
        with pytest.raises(ValidationError):
            LoggingConfig(file_log_level="LOUD")
