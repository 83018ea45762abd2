"""Tests for the click command-line interface."""

import functools
import json

from caesar import __version__
from caesar.cli import cli
from caesar.core.cipher import encipher
from caesar.core.engine import CaesarEngine


def invoke(runner, *args):
    return runner.invoke(cli, list(args), obj={})


class TestEncipherDecipher:
    def test_encipher_text(self, runner):
        result = invoke(runner, "-q", "encipher", "11", "attack at Dawn!")
        assert result.exit_code == 0, result.output
        assert "leelnv le Olhy!" in result.output

    def test_long_key(self, runner):
        result = invoke(runner, "-q", "encipher", "271", "attack at Dawn!")
        assert result.exit_code == 0
        assert "leelnv le Olhy!" in result.output

    def test_markup_is_not_interpreted(self, runner):
        result = invoke(runner, "-q", "encipher", "0", "[bold]x[/bold]")
        assert result.exit_code == 0
        assert "[bold]x[/bold]" in result.output

    def test_decipher_file_to_file(self, runner, tmp_path):
        source = tmp_path / "cipher.txt"
        target = tmp_path / "plain.txt"
        source.write_text("leelnv le Olhy!", encoding="utf-8")

        result = invoke(
            runner, "-q", "-f", str(target), "decipher", "11", "-i", str(source)
        )
        assert result.exit_code == 0, result.output
        assert target.read_text(encoding="utf-8") == "attack at Dawn!"
        assert "Output saved to" in result.output

    def test_banner_shown_by_default(self, runner):
        result = invoke(runner, "encipher", "1", "a")
        assert result.exit_code == 0
        assert "Version: " + __version__ in result.output


class TestCrack:
    def test_crack_text(self, runner):
        result = invoke(runner, "-q", "crack", "leelnv le Olhy!")
        assert result.exit_code == 0, result.output
        assert "attack at Dawn!" in result.output
        assert "Estimated Key" in result.output
        assert "LOW" in result.output

    def test_crack_json(self, runner, passage):
        result = invoke(runner, "-o", "json", "crack", encipher(passage, 19))
        assert result.exit_code == 0, result.output
        report = json.loads(result.stdout)
        assert report["report_metadata"]["operation"] == "crack"
        assert report["metadata"]["key"] == 19
        assert report["output"] == passage
        assert report["summary"]["error"] is None

    def test_crack_json_to_file(self, runner, tmp_path):
        target = tmp_path / "report.json"
        result = invoke(
            runner, "-o", "json", "-f", str(target), "crack", "leelnv le Olhy!"
        )
        assert result.exit_code == 0, result.output
        report = json.loads(target.read_text(encoding="utf-8"))
        assert report["metadata"]["key"] == 11
        assert report["findings"][0]["severity"] == "LOW"

    def test_internal_error_exits_with_status_1(self, runner, monkeypatch, broken_reference):
        monkeypatch.setattr(
            "caesar.cli.CaesarEngine",
            functools.partial(CaesarEngine, reference=broken_reference),
        )
        result = invoke(runner, "-q", "crack", "leelnv le Olhy!")
        assert result.exit_code == 1
        assert "Internal Error" in result.output
        assert "report this error" in result.output

    def test_show_scores_from_config(self, runner, tmp_path):
        config = tmp_path / "caesar.toml"
        config.write_text("[caesar]\nshow_scores = true\n", encoding="utf-8")
        result = invoke(runner, "-q", "-c", str(config), "crack", "leelnv le Olhy!")
        assert result.exit_code == 0, result.output
        assert "Chi-Squared by Shift" in result.output


class TestBruteForce:
    def test_table(self, runner):
        result = invoke(runner, "-q", "brute-force", "leelnv le Olhy!")
        assert result.exit_code == 0, result.output
        assert "Brute Force" in result.output
        assert "attack at Dawn!" in result.output

    def test_output_file_has_every_key(self, runner, tmp_path):
        target = tmp_path / "all.txt"
        result = invoke(runner, "-q", "-f", str(target), "brute-force", "leelnv le Olhy!")
        assert result.exit_code == 0, result.output
        lines = target.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 26
        assert lines[11] == "attack at Dawn!"


class TestFrequency:
    def test_table(self, runner):
        result = invoke(runner, "-q", "frequency", "Hello, World!")
        assert result.exit_code == 0, result.output
        assert "Letter Frequencies" in result.output
        assert "Index of Coincidence" in result.output

    def test_internal_error_exits_with_status_1(self, runner, monkeypatch, broken_reference):
        monkeypatch.setattr(
            "caesar.cli.CaesarEngine",
            functools.partial(CaesarEngine, reference=broken_reference),
        )
        result = invoke(runner, "-q", "frequency", "hello")
        assert result.exit_code == 1
        assert "Internal Error" in result.output


class TestUsageErrors:
    def test_missing_text(self, runner):
        result = invoke(runner, "-q", "crack")
        assert result.exit_code == 2
        assert "exactly one of TEXT or --input-file" in result.output

    def test_text_and_file(self, runner, tmp_path):
        source = tmp_path / "in.txt"
        source.write_text("abc", encoding="utf-8")
        result = invoke(runner, "-q", "crack", "abc", "-i", str(source))
        assert result.exit_code == 2

    def test_missing_input_file(self, runner, tmp_path):
        result = invoke(runner, "-q", "crack", "-i", str(tmp_path / "nope.txt"))
        assert result.exit_code == 2

    def test_key_must_be_integer(self, runner):
        result = invoke(runner, "-q", "encipher", "eleven", "abc")
        assert result.exit_code == 2

    def test_missing_config_file(self, runner, tmp_path):
        result = invoke(runner, "-c", str(tmp_path / "missing.toml"), "crack", "abc")
        assert result.exit_code == 2

    def test_version(self, runner):
        result = invoke(runner, "--version")
        assert result.exit_code == 0
        assert __version__ in result.output


class TestConfiguration:
    def _write_config(self, tmp_path, body):
        path = tmp_path / "caesar.toml"
        path.write_text(body, encoding="utf-8")
        return str(path)

    def test_invalid_output_format(self, runner, tmp_path):
        config = self._write_config(tmp_path, '[global]\noutput_format = "xml"\n')
        result = invoke(runner, "-c", config, "encipher", "1", "a")
        assert result.exit_code == 2
        assert "Invalid output_format 'xml'" in result.output

    def test_output_format_from_config(self, runner, tmp_path):
        config = self._write_config(tmp_path, '[global]\noutput_format = "json"\n')
        result = invoke(runner, "-c", config, "encipher", "11", "attack at Dawn!")
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["output"] == "leelnv le Olhy!"

    def test_log_file_from_config(self, runner, tmp_path):
        log_file = tmp_path / "logs" / "caesar.log"
        config = self._write_config(
            tmp_path,
            f'[global]\nlog_level = "INFO"\nlog_file = "{log_file.as_posix()}"\n',
        )
        result = invoke(runner, "-q", "-c", config, "encipher", "11", "abc")
        assert result.exit_code == 0, result.output

        text = log_file.read_text(encoding="utf-8")
        assert "| INFO     | caesar.engine | Completed: encipher" in text
        assert "Started: encipher" not in text

    def test_verbose_enables_debug(self, runner, tmp_path):
        log_file = tmp_path / "caesar.log"
        config = self._write_config(
            tmp_path, f'[global]\nlog_file = "{log_file.as_posix()}"\n'
        )
        result = invoke(runner, "-q", "-v", "-c", config, "encipher", "271", "abc")
        assert result.exit_code == 0, result.output

        text = log_file.read_text(encoding="utf-8")
        assert "| DEBUG    | caesar.engine | Started: encipher" in text
        assert "Key 11 reduced to 11" in text
