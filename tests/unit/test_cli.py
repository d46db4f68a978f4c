"""Tests for the command line interface."""

from typer.testing import CliRunner

from msdfkit import __version__
from msdfkit.cli import app
from msdfkit.io import FieldWriter

runner = CliRunner()


class TestRenderCommand:
    """Tests for the render command."""

    def test_version(self):
        """Test --version prints the version and exits cleanly."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_input(self, tmp_path):
        """Test a missing font exits with an error."""
        result = runner.invoke(app, [str(tmp_path / "missing.ttf")])
        assert result.exit_code == 1
        assert "Input file not found" in result.output

    def test_invalid_channels(self, test_font):
        """Test unsupported channel layouts are rejected."""
        result = runner.invoke(app, [str(test_font), "--channels", "2", "--quiet"])
        assert result.exit_code == 1

    def test_not_a_font(self, tmp_path):
        """Test a file that is not a font exits with an error."""
        path = tmp_path / "notes.ttf"
        path.write_text("hello")
        result = runner.invoke(app, [str(path), "--quiet"])
        assert result.exit_code == 1

    def test_render_selected_chars(self, test_font, tmp_path):
        """Test rendering writes one archive per glyph."""
        output_dir = tmp_path / "fields"
        result = runner.invoke(
            app,
            [str(test_font), "--chars", "IO", "--size", "16", "--output-dir", str(output_dir)],
        )
        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in output_dir.iterdir()) == [
            "MsdfTest-I-msdf.npz",
            "MsdfTest-O-msdf.npz",
        ]
        field = FieldWriter.load(output_dir / "MsdfTest-O-msdf.npz")
        assert field.data.shape == (16, 16, 3)

    def test_render_quiet_four_channels(self, test_font, tmp_path):
        """Test quiet mode with a four-channel layout."""
        result = runner.invoke(
            app,
            [
                str(test_font),
                "-c",
                "D",
                "-s",
                "12",
                "--channels",
                "4",
                "-o",
                str(tmp_path),
                "-q",
                "--log-file",
                str(tmp_path / "run.log"),
            ],
        )
        assert result.exit_code == 0, result.output
        field = FieldWriter.load(tmp_path / "MsdfTest-D-msdf.npz")
        assert field.channels == 4
        assert (tmp_path / "run.log").exists()
