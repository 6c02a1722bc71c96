"""Tests for the CLI module: arg parsing, exit codes, output, end-to-end."""

from __future__ import annotations

import json
from pathlib import Path

from mypython.cli import CliOptions, build_parser, main, scan_file

# ---------------------------------------------------------------------------
# Arg parsing via build_parser
# ---------------------------------------------------------------------------


class TestArgParsing:
    def test_input_only(self) -> None:
        ns = build_parser().parse_args(["prog.my"])
        assert ns.input == "prog.my"
        assert ns.output is None
        assert ns.format is None
        assert ns.whitespace is None
        assert ns.debug is False

    def test_missing_input_is_none(self) -> None:
        ns = build_parser().parse_args([])
        assert ns.input is None

    def test_flags(self) -> None:
        ns = build_parser().parse_args(
            ["prog.my", "-o", "out.txt", "--format", "json", "--no-whitespace", "--debug"]
        )
        assert ns.output == "out.txt"
        assert ns.format == "json"
        assert ns.whitespace is False
        assert ns.debug is True


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------


class TestExitCodes:
    def test_success(self, tmp_path: Path) -> None:
        src = tmp_path / "ok.my"
        src.write_text("x = 1\n")
        assert main([str(src)]) == 0

    def test_missing_filename(self, capsys) -> None:
        assert main([]) == -1
        err = capsys.readouterr().err
        assert "Filename is required" in err

    def test_unreadable_file(self, tmp_path: Path, capsys) -> None:
        missing = tmp_path / "nope.my"
        assert main([str(missing)]) == -1
        captured = capsys.readouterr()
        assert f"An error occurred while opening {missing}" in captured.err
        assert captured.out == ""

    def test_non_utf8_bytes_are_scanned(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "latin.my"
        src.write_bytes(b"# caf\xe9\nx = 1\n")
        assert main([str(src)]) == 0
        captured = capsys.readouterr()
        assert 'TOKEN["symbol", "x"]' in captured.out.splitlines()
        assert "error occurred while opening" not in captured.err

    def test_unterminated_literal_returns_1(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "bad.my"
        src.write_text('x = "oops\n')
        assert main([str(src)]) == 1
        captured = capsys.readouterr()
        assert "EOL encountered before closing literal quotes" in captured.err
        assert f"{src}:1:5" in captured.err
        # No tokens are printed, not even EOF
        assert captured.out == ""

    def test_bad_config_returns_2(self, tmp_path: Path, capsys) -> None:
        (tmp_path / "mypython.toml").write_text('[output]\nformat = "xml"\n')
        src = tmp_path / "a.my"
        src.write_text("a")
        assert main([str(src)]) == 2
        assert "invalid output format" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class TestOutput:
    def test_stdout(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "a.my"
        src.write_text("x = 1")
        main([str(src)])
        assert capsys.readouterr().out.splitlines() == [
            'TOKEN["symbol", "x"]',
            'TOKEN["whitespace", " "]',
            'TOKEN["punctuation", "="]',
            'TOKEN["whitespace", " "]',
            'TOKEN["integer", 1]',
            'TOKEN["EOF"]',
        ]

    def test_output_file(self, tmp_path: Path) -> None:
        src = tmp_path / "a.my"
        src.write_text("a\n  b\n")
        out = tmp_path / "tokens.txt"
        assert main([str(src), "-o", str(out)]) == 0
        assert 'TOKEN["INDENT": 2]' in out.read_text()

    def test_json(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "a.my"
        src.write_text("a")
        main([str(src), "--format", "json"])
        data = json.loads(capsys.readouterr().out)
        assert [d["type"] for d in data] == ["symbol", "eof"]

    def test_no_whitespace(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "a.my"
        src.write_text("a b")
        main([str(src), "--no-whitespace"])
        assert "whitespace" not in capsys.readouterr().out

    def test_carriage_returns_preserved(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "crlf.my"
        src.write_bytes(b"a\r\nb")
        main([str(src)])
        assert capsys.readouterr().out.splitlines()[1] == 'TOKEN["whitespace", " "]'

    def test_high_byte_is_invalid_with_byte_value(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "byte.my"
        src.write_bytes(b"a\xe9")
        assert main([str(src)]) == 0
        assert capsys.readouterr().out.splitlines() == [
            'TOKEN["symbol", "a"]',
            'TOKEN["INVALID"233',
            'TOKEN["EOF"]',
        ]

    def test_debug_dump_on_stderr(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "a.my"
        src.write_text("ab")
        main([str(src), "--debug"])
        err = capsys.readouterr().err
        assert "1:1-1:3" in err
        assert "SYMBOL" in err
        assert "'ab'" in err


# ---------------------------------------------------------------------------
# scan_file smoke test
# ---------------------------------------------------------------------------


class TestScanFile:
    def test_basic(self, tmp_path: Path) -> None:
        src = tmp_path / "simple.my"
        src.write_text("# hi\nx\n")
        opts = CliOptions(
            input_file=src,
            output_file=None,
            format="text",
            whitespace=True,
            debug=False,
        )
        assert scan_file(opts).splitlines() == [
            'TOKEN["EOL"]',
            'TOKEN["symbol", "x"]',
            'TOKEN["EOL"]',
            'TOKEN["EOF"]',
        ]
