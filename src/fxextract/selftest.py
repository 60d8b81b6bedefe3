"""Built-in self test (``fxextract --test``)."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO

from fxextract.errors import ExtractError
from fxextract.options import RewriteOptions
from fxextract.rewriter import rewrite


@dataclass(frozen=True, slots=True)
class Case:
    """One input; *expected* None means the output must equal the input."""

    source: str
    expected: str | None = None
    ok: bool = True


CORPUS: tuple[Case, ...] = (
    # Pass-through, directives, and comments
    Case(""),
    Case("x = y"),
    Case("x = y\n"),
    Case("#x = y\n"),
    Case('#x = y"\n'),  # unscanned directive may hold a stray quote
    Case('#x = y\\ \n" c"\\n'),  # ... also on a continuation line
    Case('#x = y\\ \nfoo \\\n" c"\\n'),
    Case("#error don't do this\n"),
    Case("xx // foo"),
    Case('xx // foo \\ \nc "'),  # continued // comment
    Case('xx /* " */ yy'),
    Case('xx /* ss\n " */ yy'),
    Case("int n = 1'000'000;"),
    Case("char c = '\"'; char d = '\\'';"),
    Case("xx /* ss", ok=False),
    Case('xx /* ss\n "/ yy *', ok=False),
    Case("#x = y \\", ok=False),
    Case("xx //  \\", ok=False),
    # Plain literals
    Case('""'),
    Case('"foo.bar"'),
    Case('"foo\\"bar"'),
    Case('"foo\\\\bar"'),
    Case('"foo\\\n\\"bar"'),
    Case('u8"a{b}" L"c" U\'d\''),
    Case('foo "', ok=False),
    Case('foo\n"', ok=False),
    Case('"foo\\ \nbar', ok=False),
    Case('"foo\\', ok=False),
    # Raw literals
    Case('R"()"'),
    Case('R"xy()xy"'),
    Case('R"xy(foo.bar)xy"'),
    Case('R"xy(foo".bar)xy"'),
    Case('R"xy(foo\\"bar)xy"'),
    Case('R"xy(foo\\\\bar)xy"'),
    Case('R"xy(foo)"bar)yx"fum)xy"'),
    Case('R"xy(foo\n"bar)xy"'),
    Case('R"xy(foo\n)xy"'),
    Case('R"abc', ok=False),
    Case('R"abc\nd)', ok=False),
    Case('foo R"xy(', ok=False),
    Case('foo\nR"(xy)z"', ok=False),
    Case('foo R"(xy)z")', ok=False),
    Case('foo R"w(xy)z")"', ok=False),
    Case('R"(foo \nbar', ok=False),
    Case('R"xy(foo \nbar', ok=False),
    Case('R"xy(foo \nbar)yx"', ok=False),
    # Field extraction
    Case('f"The number is: {3 * 5}"', 'std::format("The number is: {}", 3 * 5)'),
    Case('x"The numbers are: {a} and {b}"', '"The numbers are: {} and {}", a, b'),
    Case('x"The numbers are: {a:x} and {b:5}"', '"The numbers are: {:x} and {:5}", a, b'),
    Case('f"The number is: {a:{b}}"', 'std::format("The number is: {:{}}", a, b)'),
    Case('f"The number is: {a:x{b}d}"', 'std::format("The number is: {:x{}d}", a, b)'),
    Case('f"The number is: {a ? b : c :4d}"', 'std::format("The number is: {:4d}", a ? b : c )'),
    Case(
        'f"The number is: {a ? b ? c : d : c :4d}"',
        'std::format("The number is: {:4d}", a ? b ? c : d : c )',
    ),
    Case(
        'f"The number is: {a ? b : c ? d : e :4d}"',
        'std::format("The number is: {:4d}", a ? b : c ? d : e )',
    ),
    Case('f"The number is: {MyType{}}"', 'std::format("The number is: {}", MyType{})'),
    Case('f"Just braces {{a}} {a}"', 'std::format("Just braces {a} {}", a)'),
    Case('f"Use colon colon {std::rand()}"', 'std::format("Use colon colon {}", std::rand())'),
    Case(
        'f"Use colon colon {std::rand():fmt}"',
        'std::format("Use colon colon {:fmt}", std::rand())',
    ),
    Case('f"Extra {value=}"', 'std::format("Extra value={}", value)'),
    Case('fL"{a}" u8x"{b}"', 'std::format(L"{}", a) u8"{}", b'),
    # Comments inside fields
    Case(
        'f"The number is: {3 /* comment */ * 5}"',
        'std::format("The number is: {}", 3 /* comment */ * 5)',
    ),
    Case(
        'f"The number is: {3 /* : ignored */ * 5:fmt}"',
        'std::format("The number is: {:fmt}", 3 /* : ignored */ * 5)',
    ),
    Case(
        'f"The number is: {3 /* } ignored */ * 5:f{m}t}"',
        'std::format("The number is: {:f{}t}", 3 /* } ignored */ * 5, m)',
    ),
    Case(
        'f"The number is: {3 /* comment \\\ncontinues */ * 5}"',
        'std::format("The number is: {}", 3 /* comment \\\ncontinues */ * 5)',
    ),
    # Raw extraction literals
    Case('xR"(The numbers are: {a} and {b})"', 'R"(The numbers are: {} and {})", a, b'),
    Case('xR"xy(The numbers are: {a} and {b})xy"', 'R"xy(The numbers are: {} and {})xy", a, b'),
    Case(
        'fR"(The number is: {3 /* comment\ncontinues */ * 5})"',
        'std::format(R"(The number is: {})", 3 /* comment\ncontinues */ * 5)',
    ),
    Case(
        'fR"xy(The number is: {3 /* comment\nxy) )" yx)" continues */ * 5})xy"',
        'std::format(R"xy(The number is: {})xy", 3 /* comment\nxy) )" yx)" continues */ * 5)',
    ),
    # Malformed extraction literals
    Case('f"Just braces {{} {a}"', ok=False),
    Case('f"The number is: {a:x{b:x}d}"', ok=False),
    Case('f"The number is: {3\n* 5}"', ok=False),
    Case('f"The number is: {3 * 5"', ok=False),
    Case('fR"xy(The number is: {3 * 5)xy"', ok=False),
    Case('f"The number is: {3 * 5: a"', ok=False),
    Case('fR"xy(The number is: {3 * 5: a)xy"', ok=False),
    Case('f"The number is: {3 * 5:{3"', ok=False),
    Case('fR"xy(The number is: {3 * 5:{3)xy"', ok=False),
    Case('f"The number is: {3 * 5 /*comment "', ok=False),
    Case('fR"x(The number is: {3 * 5 /*comment )x"', ok=False),
    Case('f"The number is: {3 * 5 /*comment\\', ok=False),
    Case('f"{(a]}"', ok=False),
    Case('f"{}"', ok=False),
    # Literals inside fields
    Case(
        'f"The number is: {std::strlen("He{ } j")}"',
        'std::format("The number is: {}", std::strlen("He{ } j"))',
    ),
    Case(
        'f"The number is: {std::strlen(R"(Hej)")}"',
        'std::format("The number is: {}", std::strlen(R"(Hej)"))',
    ),
    Case(
        'f"The number is: {std::strlen(R"xy(Hej\n{{}})xy")}"',
        'std::format("The number is: {}", std::strlen(R"xy(Hej\n{{}})xy"))',
    ),
    Case("f\"{c == '}' ? 1 : 2}\"", "std::format(\"{}\", c == '}' ? 1 : 2)"),
    # Extraction literals inside fields
    Case(
        'f"The number is: {f"Five: {5}"} end"',
        'std::format("The number is: {} end", std::format("Five: {}", 5))',
    ),
    Case(
        'f"The number is: {f"Fi\\\nve: {5}"}"',
        'std::format("The number is: {}", std::format("Fi\\\nve: {}", 5))',
    ),
    Case(
        'f"The number is: {fR"xy(Five: {5})xy"}"',
        'std::format("The number is: {}", std::format(R"xy(Five: {})xy", 5))',
    ),
    Case(
        'f"The number is: {fR"xy(Fi\nve: {5})xy"}"',
        'std::format("The number is: {}", std::format(R"xy(Fi\nve: {})xy", 5))',
    ),
    # Directives holding code
    Case('#define FSTRING f"Number: {3}"\n', '#define FSTRING std::format("Number: {}", 3)\n'),
    Case(
        '#define TWO \\\n  x"{a}{b}"\n',
        '#define TWO \\\n  "{}{}", a, b\n',
    ),
)


def run_case(case: Case, options: RewriteOptions | None = None) -> str | None:
    """Run one case; return a description of the failure, or None."""
    try:
        output = rewrite(case.source, options)
    except ExtractError as exc:
        if case.ok:
            return f"unexpected error {exc} for input:\n{case.source}"
        return None

    if not case.ok:
        return f"input should have failed:\n{case.source}\nbut produced:\n{output}"
    expected = case.source if case.expected is None else case.expected
    if output != expected:
        return f"erroneous output:\n{output}\nwhen expected output is:\n{expected}"
    return None


def run_selftest(*, file: TextIO = sys.stderr) -> int:
    """Run the whole corpus, report failures to *file*, return their count."""
    failed = 0
    for index, case in enumerate(CORPUS):
        problem = run_case(case)
        if problem is not None:
            failed += 1
            file.write(f"ERROR in test #{index}: {problem}\n")
    file.write(f"{failed} tests of {len(CORPUS)} failed.\n")
    return failed
