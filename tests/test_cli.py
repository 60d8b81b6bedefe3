"""Tests for the CLI module: arg parsing, exit codes, end-to-end runs."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from fxextract.cli import build_parser, main, process, resolve_options

# ---------------------------------------------------------------------------
# Arg parsing via build_parser
# ---------------------------------------------------------------------------


class TestArgParsing:
    def test_no_arguments(self) -> None:
        ns = build_parser().parse_args([])
        assert ns.input is None
        assert ns.output is None
        assert ns.line_markers is None

    def test_input_and_output(self) -> None:
        ns = build_parser().parse_args(["in.cpp", "out.cpp"])
        assert ns.input == "in.cpp"
        assert ns.output == "out.cpp"

    def test_name_flag(self) -> None:
        ns = build_parser().parse_args(["-n", "fmt*", "in.cpp"])
        assert ns.name == "fmt*"
        ns = build_parser().parse_args(["--name", "f", "in.cpp"])
        assert ns.name == "f"

    def test_marker_flags(self) -> None:
        ns = build_parser().parse_args(["--line-markers", "--source-path", "s.cpp"])
        assert ns.line_markers is True
        assert ns.source_path == "s.cpp"

    def test_mode_flags(self) -> None:
        ns = build_parser().parse_args(["--test", "--debug"])
        assert ns.test
        assert ns.debug


# ---------------------------------------------------------------------------
# End-to-end
# ---------------------------------------------------------------------------


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "in.cpp"
    path.write_text('auto s = f"{a}";\n')
    return path


class TestEndToEnd:
    def test_file_to_file(self, source_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "out.cpp"
        assert main([str(source_file), str(out)]) == 0
        assert out.read_text() == 'auto s = std::format("{}", a);\n'

    def test_file_to_stdout(self, source_file: Path, capsys) -> None:
        assert main([str(source_file)]) == 0
        assert capsys.readouterr().out == 'auto s = std::format("{}", a);\n'

    def test_stdin_to_stdout(self, tmp_path: Path, monkeypatch, capsys) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("sys.stdin", io.StringIO('x"{a}"'))
        assert main([]) == 0
        assert capsys.readouterr().out == '"{}", a'

    def test_custom_name(self, source_file: Path, capsys) -> None:
        assert main([str(source_file), "-n", "fmt*"]) == 0
        assert capsys.readouterr().out == 'auto s = fmt1("{}", a);\n'

    def test_line_markers(self, source_file: Path, capsys) -> None:
        assert main([str(source_file), "--line-markers", "--source-path", "s.cpp"]) == 0
        out = capsys.readouterr().out
        assert '#line 1 "s.cpp"\n' in out
        assert out.startswith("auto s = std::format(\n")

    def test_crlf_preserved(self, tmp_path: Path) -> None:
        src = tmp_path / "crlf.cpp"
        src.write_bytes(b'f"{a}"\r\nx\r\n')
        out = tmp_path / "out.cpp"
        assert main([str(src), str(out)]) == 0
        assert out.read_bytes() == b'std::format("{}", a)\r\nx\r\n'

    def test_undecodable_bytes_preserved(self, tmp_path: Path) -> None:
        src = tmp_path / "latin1.cpp"
        src.write_bytes(b'// caf\xe9\nint a;\nauto s = f"{a}"; // \xff\n')
        out = tmp_path / "out.cpp"
        assert main([str(src), str(out)]) == 0
        assert out.read_bytes() == b'// caf\xe9\nint a;\nauto s = std::format("{}", a); // \xff\n'

    def test_process_returns_literals(self, source_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "out.cpp"
        opts = resolve_options(build_parser().parse_args([str(source_file), str(out)]))
        literals = process(opts)
        assert len(literals) == 1
        assert out.is_file()


# ---------------------------------------------------------------------------
# Exit codes and diagnostics
# ---------------------------------------------------------------------------


class TestExitCodes:
    def test_parse_error_exits_1(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "bad.cpp"
        src.write_text('int x;\nf"{(]}"\n')
        assert main([str(src)]) == 1
        captured = capsys.readouterr()
        assert captured.out == "int x;\n"
        assert "Line 2:" in captured.err

    def test_early_end_exits_1(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "bad.cpp"
        src.write_text('"open')
        assert main([str(src)]) == 1
        assert "input ends inside a string literal" in capsys.readouterr().err

    def test_debug_shows_context(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "bad.cpp"
        src.write_text('f"{(]}"\n')
        assert main([str(src), "--debug"]) == 1
        err = capsys.readouterr().err
        assert f"--> {src}:1:6" in err
        assert "^" in err

    def test_deep_nesting_exits_1(self, tmp_path: Path, capsys) -> None:
        source = "a"
        for _ in range(1000):
            source = 'f"{' + source + '}"'
        src = tmp_path / "deep.cpp"
        src.write_text(source)
        assert main([str(src)]) == 1
        err = capsys.readouterr().err
        assert "error: nesting too deep" in err
        assert "Traceback" not in err

    def test_missing_input_exits_1(self, tmp_path: Path, capsys) -> None:
        assert main([str(tmp_path / "missing.cpp")]) == 1
        assert "error:" in capsys.readouterr().err

    def test_invalid_config_exits_2(self, source_file: Path, tmp_path: Path, capsys) -> None:
        cfg = tmp_path / "broken.toml"
        cfg.write_text("[rewrite\n")
        assert main([str(source_file), "--config", str(cfg)]) == 2
        assert "invalid config" in capsys.readouterr().err

    def test_debug_dump(self, source_file: Path, capsys) -> None:
        assert main([str(source_file), "--debug"]) == 0
        err = capsys.readouterr().err
        assert "Literal F at 1:10" in err
        assert "Argument('a')" in err


class TestSelfTestFlag:
    def test_self_test_passes(self, capsys) -> None:
        assert main(["--test"]) == 0
        err = capsys.readouterr().err
        assert err.startswith("Performing self test")
        assert err.rstrip().endswith("failed.")
        assert "ERROR in test" not in err
