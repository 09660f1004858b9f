"""Smoke tests for CLI commands.

Tests that CLI commands parse correctly and don't crash. Uses Click's
CliRunner, with a temporary config file so the user's own config is
never read.
"""

import json

import pytest
from click.testing import CliRunner

from retint.cli.main import cli


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_file(temp_dir):
    path = temp_dir / "config.json"
    path.write_text(json.dumps({"inline_chunk_size": 50}))
    return path


@pytest.fixture
def invoke(runner, config_file):
    """Invoke the CLI with the temporary config."""

    def _invoke(*args):
        return runner.invoke(cli, ["--config", str(config_file), *args])

    return _invoke


@pytest.mark.integration
class TestCLIHelp:
    """Test that all commands have working help text."""

    def test_main_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "re-theme web page colors" in result.output
        for command in ("transform", "css", "base-css", "themes", "matrix"):
            assert command in result.output

    def test_version_flag(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    @pytest.mark.parametrize("command", ["transform", "css", "base-css", "themes", "matrix"])
    def test_command_help(self, runner, command):
        result = runner.invoke(cli, [command, "--help"])
        assert result.exit_code == 0


@pytest.mark.integration
class TestTransformCommand:
    """Test single-color transforms."""

    def test_background_on_dark(self, invoke):
        result = invoke("transform", "#ffffff", "--role", "background", "--theme", "dark")

        assert result.exit_code == 0
        output = result.output.strip()
        assert output.startswith("#")
        assert len(output) == 7
        assert output != "#ffffff"

    def test_hsl_output(self, invoke):
        result = invoke("transform", "black", "-r", "text", "--hsl")

        assert result.exit_code == 0
        assert "source: hsl(0, 0%, 0%)" in result.output
        assert "result: hsl(" in result.output

    def test_mode_override(self, invoke):
        result = invoke("transform", "#000000", "-r", "text", "-t", "dark", "--mode", "light")
        assert result.exit_code == 0

    def test_invalid_color(self, invoke):
        result = invoke("transform", "not-a-color")
        assert result.exit_code != 0
        assert "is not a CSS color" in result.output

    def test_invalid_role(self, invoke):
        result = invoke("transform", "#fff", "--role", "shadow")
        assert result.exit_code != 0

    def test_unknown_theme(self, invoke):
        result = invoke("transform", "#fff", "--theme", "sepia")

        assert result.exit_code == 1
        assert "ERROR: Unknown theme 'sepia'" in result.output
        assert "Available themes:" in result.output


@pytest.mark.integration
class TestCssCommands:
    """Test stylesheet rewriting and the base stylesheet."""

    def test_rewrite_file(self, invoke, temp_dir):
        sheet = temp_dir / "site.css"
        sheet.write_text("body { background-color: white; margin: 0 }\na { padding: 1px }")

        result = invoke("css", str(sheet))

        assert result.exit_code == 0
        assert "/* site.css */" in result.output
        assert "body { background-color:" in result.output
        assert "padding" not in result.output

    def test_write_output_file(self, invoke, temp_dir):
        sheet = temp_dir / "site.css"
        sheet.write_text("p { color: black }")
        out = temp_dir / "overrides.css"

        result = invoke("css", str(sheet), "-t", "night-warm", "-o", str(out))

        assert result.exit_code == 0
        assert "Wrote 1 override block(s)" in result.output
        assert out.read_text().startswith("/* site.css */\np { color:")

    def test_missing_file_is_reported(self, invoke, temp_dir):
        sheet = temp_dir / "site.css"
        sheet.write_text("p { color: black }")

        result = invoke("css", str(sheet), str(temp_dir / "missing.css"))

        assert result.exit_code == 1
        assert "p { color:" in result.output
        assert "Failed 1 of 2 operations" in result.output

    def test_requires_files(self, invoke):
        result = invoke("css")
        assert result.exit_code != 0

    def test_base_css(self, invoke):
        result = invoke("base-css", "--theme", "high-contrast")

        assert result.exit_code == 0
        assert "--retint-bg: #000000;" in result.output
        assert "animation-duration" not in result.output

    def test_base_css_reduced_motion(self, invoke):
        result = invoke("base-css", "--reduced-motion")
        assert result.exit_code == 0
        assert "animation-duration: 0ms !important" in result.output


@pytest.mark.integration
class TestThemeCommands:
    """Test catalog inspection."""

    def test_themes(self, invoke):
        result = invoke("themes")

        assert result.exit_code == 0
        assert "night-warm" in result.output
        assert "Palette:" not in result.output

    def test_themes_verbose(self, invoke):
        result = invoke("themes", "-l")

        assert result.exit_code == 0
        assert "Palette: bg #181a1b" in result.output
        assert "Minimum contrast: 7" in result.output
        assert "Reduced motion" in result.output

    def test_matrix(self, invoke):
        result = invoke("matrix", "--theme", "dark", "--color-blindness", "protanopia")

        assert result.exit_code == 0
        assert result.output.startswith("Matrix: ")
        assert "│" in result.output

    def test_matrix_light_disposition(self, invoke):
        result = invoke("matrix", "--light")
        assert result.exit_code == 0


@pytest.mark.integration
class TestConfigOption:
    """Test loading the engine config file."""

    def test_missing_config_uses_defaults(self, runner, temp_dir):
        result = runner.invoke(cli, ["--config", str(temp_dir / "none.json"), "themes"])
        assert result.exit_code == 0

    def test_invalid_json(self, runner, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("{not json}")

        result = runner.invoke(cli, ["--config", str(path), "themes"])

        assert result.exit_code == 1
        assert "ERROR: Configuration file has invalid syntax" in result.output

    def test_invalid_value(self, runner, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"inline_chunk_size": 0}))

        result = runner.invoke(cli, ["--config", str(path), "themes"])

        assert result.exit_code == 1
        assert "Invalid configuration value for 'inline_chunk_size'" in result.output

    def test_log_file(self, runner, temp_dir, config_file):
        log_file = temp_dir / "logs" / "retint.log"

        result = runner.invoke(
            cli, ["-v", "--log-file", str(log_file), "--config", str(config_file), "themes"]
        )

        assert result.exit_code == 0
        assert log_file.exists()
