import logging

from typer.testing import CliRunner

from gortail.cli import app
from gortail.codec import encode_hex

SEPARATOR = "==================="

HIDDEN_REQUEST = "1 T42\nHDR GET /other/path"
HIDDEN_RESPONSE = "2 T42\nBODY"
SHOWN_REQUEST = "1 T1\nGET /api/foo HTTP/1.1"


def to_input(*frames: str) -> str:
    return "".join(encode_hex(frame) + "\n" for frame in frames)


class TestCLIBasicFunctionality:
    def test_help_command_works(self):
        runner = CliRunner()
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "--prefix" in result.stdout
        assert "--strict-hex" in result.stdout

    def test_echoes_all_lines(self):
        stdin = to_input(HIDDEN_REQUEST, HIDDEN_RESPONSE, SHOWN_REQUEST)
        runner = CliRunner()
        result = runner.invoke(app, [], input=stdin)

        assert result.exit_code == 0
        for line in stdin.splitlines():
            assert line in result.stdout

    def test_hidden_frames_not_shown(self):
        runner = CliRunner()
        result = runner.invoke(app, [], input=to_input(HIDDEN_REQUEST, HIDDEN_RESPONSE, SHOWN_REQUEST))

        assert result.exit_code == 0
        assert SEPARATOR in result.output
        assert "GET /api/foo HTTP/1.1" in result.output
        assert "/other/path" not in result.output
        assert "BODY" not in result.output

    def test_prefix_option(self):
        runner = CliRunner()
        result = runner.invoke(app, ["--prefix", "/other"], input=to_input(HIDDEN_REQUEST, SHOWN_REQUEST))

        assert result.exit_code == 0
        assert "HDR GET /other/path" in result.output
        assert "GET /api/foo" not in result.output

    def test_empty_input_exits_cleanly(self):
        runner = CliRunner()
        result = runner.invoke(app, [], input="")

        assert result.exit_code == 0
        assert result.output == ""

    def test_strict_hex_does_not_abort(self):
        runner = CliRunner()
        result = runner.invoke(app, ["--strict-hex"], input="zz\n" + to_input("3 E\nstill here"))

        assert result.exit_code == 0
        assert "zz" in result.stdout
        assert "still here" in result.output

    def test_summary_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="gortail.cli")
        runner = CliRunner()
        result = runner.invoke(app, ["--summary"], input=to_input(HIDDEN_REQUEST, SHOWN_REQUEST))

        assert result.exit_code == 0
        assert "Processed 2 lines: 1 shown, 1 hidden" in caplog.text
        assert '"pending_tags": 1' in caplog.text
        assert '"suppressed-request": 1' in caplog.text
