"""Tests for the command-line interface."""

from PIL import Image
from typer.testing import CliRunner

from glyphsdf import __version__
from glyphsdf.cli.app import app

runner = CliRunner()


class TestRenderCommand:
    """Tests for `glyphsdf render`."""

    def test_render_quiet(self, ttf_path, tmp_path):
        output = tmp_path / "out.png"
        result = runner.invoke(app, ["render", str(ttf_path), "AO", "-o", str(output), "-j", "1", "-q"])

        assert result.exit_code == 0, result.output
        with Image.open(output) as image:
            # 1.4 em at 64 px plus an 8 px margin on each side.
            assert image.size == (106, 80)

    def test_render_default_output_path(self, ttf_path):
        result = runner.invoke(app, ["render", str(ttf_path), "A", "-j", "1"])
        assert result.exit_code == 0, result.output
        assert ttf_path.with_name("test-render.png").exists()
        assert "Complete" in result.output

    def test_version(self):
        result = runner.invoke(app, ["render", "--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_font(self, tmp_path):
        result = runner.invoke(app, ["render", str(tmp_path / "missing.ttf"), "A"])
        assert result.exit_code == 1
        assert "Input file not found" in result.output

    def test_font_path_is_directory(self, tmp_path):
        result = runner.invoke(app, ["render", str(tmp_path), "A"])
        assert result.exit_code == 1
        assert "not a file" in result.output

    def test_invalid_mode(self, ttf_path):
        result = runner.invoke(app, ["render", str(ttf_path), "A", "--mode", "blurry"])
        assert result.exit_code == 1
        assert "Invalid mode" in result.output

    def test_invalid_color(self, ttf_path):
        result = runner.invoke(app, ["render", str(ttf_path), "A", "--fg", "red"])
        assert result.exit_code == 1
        assert "Invalid options" in result.output

    def test_verbose_and_quiet_conflict(self, ttf_path):
        result = runner.invoke(app, ["render", str(ttf_path), "A", "-v", "-q"])
        assert result.exit_code == 1
        assert "--verbose and --quiet" in result.output

    def test_unreadable_font(self, tmp_path):
        bogus = tmp_path / "bogus.ttf"
        bogus.write_bytes(b"not a font")
        result = runner.invoke(app, ["render", str(bogus), "A", "-q"])
        assert result.exit_code == 1
        assert "Could not load font" in result.output


class TestInspectCommand:
    """Tests for `glyphsdf inspect`."""

    def test_inspect_lists_glyphs(self, ttf_path):
        result = runner.invoke(app, ["inspect", str(ttf_path), "AOZ"])

        assert result.exit_code == 0, result.output
        assert "square" in result.output
        assert "ring" in result.output
        assert "missing" in result.output
        assert "4 lines" in result.output
        assert "8 quadratics" in result.output

    def test_inspect_missing_font(self, tmp_path):
        result = runner.invoke(app, ["inspect", str(tmp_path / "nope.otf"), "A"])
        assert result.exit_code == 1
