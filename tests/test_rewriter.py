"""Test the top-level loop: pass-through, directives, streaming, records."""

from __future__ import annotations

import io

import pytest

import fxextract
from fxextract.errors import EarlyEndError
from fxextract.model import LiteralKind, Position
from fxextract.rewriter import Rewriter

from .conftest import assert_passthrough


class TestPassthrough:
    @pytest.mark.parametrize(
        "source",
        [
            "",
            "x = y",
            "x = y\n",
            "int main() {\n  return 0;\n}\n",
            "a\r\nb\r\n",
            "x \\\ny\n",
            "x \\",
        ],
    )
    def test_unchanged(self, rx, source):
        assert_passthrough(rx, source)

    def test_surrounding_code_kept(self, rx):
        source = 'auto s = f"{a}";\nint n = 0;\n'
        assert rx(source) == 'auto s = std::format("{}", a);\nint n = 0;\n'

    def test_crlf_after_literal(self, rx):
        assert rx('f"{a}"\r\n') == 'std::format("{}", a)\r\n'

    def test_package_level_rewrite(self):
        assert fxextract.rewrite('x"{a}"') == '"{}", a'


class TestDirectives:
    @pytest.mark.parametrize(
        "source",
        [
            "#x = y\n",
            '#x = y"\n',
            '#include "f{x}"\n',
            "#error don't do this\n",
            '#x = y\\ \n" c"\n',
            "#include <x> // don't\n",
            '#x /* a\n b */ "\n',
        ],
    )
    def test_copied_verbatim(self, rx, source):
        assert_passthrough(rx, source)

    def test_define(self, rx):
        source = '#define FSTRING f"Number: {3}"\n'
        assert rx(source) == '#define FSTRING std::format("Number: {}", 3)\n'

    def test_define_with_continuation(self, rx):
        assert rx('#define TWO \\\n  x"{a}{b}"\n') == '#define TWO \\\n  "{}{}", a, b\n'

    def test_blanks_around_hash(self, rx):
        assert rx('  #  define A x"{a}"\n') == '  #  define A "{}", a\n'

    def test_pragma(self, rx):
        source = '#pragma message(f"{a}")\n'
        assert rx(source) == '#pragma message(std::format("{}", a))\n'

    def test_hash_not_at_line_start(self, rx):
        assert rx('a # b f"{x}"') == 'a # b std::format("{}", x)'

    def test_directive_ends_at_line_end(self, rx):
        assert rx('#x "\nf"{a}"') == '#x "\nstd::format("{}", a)'

    def test_unscanned_directive_ends_in_continuation(self, rx):
        with pytest.raises(EarlyEndError):
            rx("#x = y \\")

    def test_scanned_directive_ends_in_continuation(self, rx):
        with pytest.raises(EarlyEndError):
            rx("#define X \\\n")

    def test_directive_literal_recorded(self, scan):
        _, literals = scan('#define A f"{a}"\nf"{b}"\n')
        assert [lit.in_directive for lit in literals] == [True, False]


class TestStreaming:
    def test_lines_written_before_error(self):
        sink = io.StringIO()
        with pytest.raises(EarlyEndError):
            Rewriter(io.StringIO('a\nf"{b}"\n"x'), sink).run()
        assert sink.getvalue() == 'a\nstd::format("{}", b)\n'

    def test_one_write_per_line(self):
        writes: list[str] = []

        class Sink:
            def write(self, text: str) -> None:
                if text:
                    writes.append(text)

        Rewriter(io.StringIO("a\nb\nc"), Sink()).run()
        assert writes == ["a\n", "b\n", "c"]


class TestLiteralRecords:
    def test_positions(self, scan):
        _, literals = scan('x = f"{a}";\n  x"{b}"\n')
        assert [lit.start for lit in literals] == [Position(1, 5), Position(2, 3)]
        assert literals[0].end == Position(1, 11)

    def test_kinds(self, scan):
        _, literals = scan('f"{a}" x"{b}" "{c}"')
        assert [lit.prefix.kind for lit in literals] == [LiteralKind.F, LiteralKind.X]

    def test_literals_property(self):
        rw = Rewriter(io.StringIO('f"{a}"'), io.StringIO())
        rw.run()
        assert len(rw.literals) == 1
        assert rw.literals[0].text == '"{}"'
