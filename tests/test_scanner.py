"""Unit tests for extracting documented declarations from Jule source.

The scanner is exercised with small inline sources covering every
declaration kind, comment attachment, directive lines, variable merging,
``impl`` blocks and the unterminated-declaration error.
"""

from __future__ import annotations

import textwrap

import pytest

from juledoc.models import DocKind, Text
from juledoc.scanner import ScanError, ScanResult, scan_source, split_code_line


def _scan(source: str) -> ScanResult:
    return scan_source(textwrap.dedent(source).lstrip("\n"))


def test_function_signature_stops_before_body() -> None:
    """The function body is dropped and the comment becomes context."""
    result = _scan(
        """
        // Returns the sum of a and b.
        fn Add(a: int, b: int): int {
        	ret a + b
        }
        """
    )
    (record,) = result.records
    assert record.code == "fn Add(a: int, b: int): int", f"got {record.code!r}"
    assert record.kind is DocKind.FUNC, f"expected FUNC, got {record.kind}"
    assert record.context == (Text("Returns the sum of a and b."),), (
        f"unexpected context {record.context!r}"
    )


def test_private_declarations_are_skipped() -> None:
    """Lower-case names are not part of the public API."""
    result = _scan(
        """
        fn add(a: int, b: int): int {
        	ret a + b
        }

        struct point {}
        """
    )
    assert result.records == [], f"expected no records, got {result.records!r}"


@pytest.mark.parametrize(
    ("source", "kind"),
    [
        ("struct Point {\n\tX: int\n}\n", DocKind.STRUCT),
        ("trait Shape {\n\tfn Area(self): int\n}\n", DocKind.TRAIT),
        ("enum Color {\n\tRed,\n\tBlue,\n}\n", DocKind.ENUM),
        ("enum Color: u8 {\n\tRed,\n}\n", DocKind.ENUM),
        ("enum Kind: type {\n\tint,\n\tstr,\n}\n", DocKind.TYPE_ENUM),
        ("type Bytes = []byte\n", DocKind.TYPE_ALIAS),
        ("type Id: u64\n", DocKind.STRICT_TYPE_ALIAS),
        ("let Answer = 42\n", DocKind.VAR),
        ("const Max: int = 10\n", DocKind.VAR),
        ("static mut Count = 0\n", DocKind.VAR),
        ("unsafe fn Raw(): *int {\n\tret nil\n}\n", DocKind.FUNC),
    ],
)
def test_declaration_kinds(source: str, kind: DocKind) -> None:
    """Each top-level keyword maps to its declaration kind."""
    (record,) = scan_source(source).records
    assert record.kind is kind, f"expected {kind} for {source!r}, got {record.kind}"


def test_whole_declaration_kept_for_non_functions() -> None:
    """Struct signatures keep their fields."""
    (record,) = scan_source("struct Point {\n\tX: int // x axis\n\tY: int\n}\n").records
    assert record.code == "struct Point {\n\tX: int\n\tY: int\n}", (
        f"expected fields without trailing comment, got {record.code!r}"
    )


def test_blank_line_detaches_comment() -> None:
    """A comment separated by a blank line documents nothing."""
    (record,) = scan_source("// Orphan.\n\nfn Run() {}\n").records
    assert record.context == (), f"expected no context, got {record.context!r}"


def test_directives_are_kept_in_signature() -> None:
    """Directive lines between comment and declaration stay in the code."""
    (record,) = scan_source("// Exported.\n#export\nfn Run() {}\n").records
    assert record.code == "#export\nfn Run()", f"got {record.code!r}"
    assert record.context == (Text("Exported."),), f"got {record.context!r}"


def test_block_comments_are_skipped() -> None:
    """Declarations inside ``/* */`` are ignored."""
    result = scan_source("/*\nfn Hidden() {}\n*/\nfn Shown() {}\n")
    names = [record.name for record in result.records]
    assert names == ["Shown"], f"expected only Shown, got {names!r}"


def test_adjacent_variables_merge() -> None:
    """Uncommented variables directly below another merge into it."""
    result = _scan(
        """
        // Limits.
        const MinSize = 1
        const MaxSize = 8

        const Other = 3
        """
    )
    codes = [record.code for record in result.records]
    assert codes == ["const MinSize = 1\nconst MaxSize = 8", "const Other = 3"], (
        f"unexpected variable records {codes!r}"
    )
    merged = result.records[0]
    assert merged.name == "MinSize", f"expected the first name, got {merged.name!r}"
    assert merged.context == (Text("Limits."),), (
        f"expected the first variable's comment, got {merged.context!r}"
    )


def test_commented_variable_does_not_merge() -> None:
    """A variable with its own comment keeps its own record."""
    result = scan_source("const A = 1\n// Second.\nconst B = 2\n")
    names = [record.name for record in result.records]
    assert names == ["A", "B"], f"expected separate records, got {names!r}"


def test_impl_blocks_collect_public_methods() -> None:
    """Methods of an impl block are recorded with owner and trait."""
    result = _scan(
        """
        impl Shape for Point {
        	// Returns zero.
        	fn Area(self): int {
        		ret 0
        	}

        	fn hidden(self) {}

        	static fn New(): Point {
        		ret Point{}
        	}
        }
        """
    )
    (impl,) = result.impls
    assert (impl.owner, impl.trait) == ("Point", "Shape"), f"got {impl!r}"
    names = [method.name for method in impl.methods]
    assert names == ["Area", "New"], f"expected public methods only, got {names!r}"
    area, new = impl.methods
    assert area.code == "fn Area(self): int", f"got {area.code!r}"
    assert area.context == (Text("Returns zero."),), f"got {area.context!r}"
    assert new.is_static, "expected New to be static"
    assert result.records == [], "impl methods must not be top-level records"


def test_inherent_impl_has_no_trait() -> None:
    """``impl Owner`` blocks carry no trait label."""
    (impl,) = scan_source("impl Point {\n\tfn Len(self): int { ret 0 }\n}\n").impls
    assert impl.trait is None, f"expected no trait, got {impl.trait!r}"
    assert impl.owner == "Point", f"expected owner Point, got {impl.owner!r}"


def test_unterminated_declaration_raises() -> None:
    """An unclosed body reports the origin and line number."""
    with pytest.raises(ScanError, match=r"lib\.jule:2: unterminated declaration"):
        scan_source("// Broken.\nfn Broken() {\n\tret\n", origin="lib.jule")


def test_split_code_line_ignores_literals() -> None:
    """Comment markers and brackets inside strings are not code."""
    code, depth, in_raw_string = split_code_line('let S = "a // (b" // note')
    assert code == 'let S = "a // (b"', f"unexpected code {code!r}"
    assert depth == 0, f"brackets in strings must not count, got {depth}"
    assert not in_raw_string, "a closed string must not carry over"


def test_split_code_line_counts_open_brackets() -> None:
    """Unbalanced brackets outside literals are reported."""
    _, depth, _ = split_code_line("fn F(x: []int) {")
    assert depth == 1, f"expected one open bracket, got {depth}"


def test_split_code_line_carries_raw_string_state() -> None:
    """A raw string left open continues on the next line."""
    code, depth, in_raw_string = split_code_line("let Usage = `run {")
    assert (depth, in_raw_string) == (0, True), "expected an open raw string"
    assert code == "let Usage = `run {", f"unexpected code {code!r}"

    code, depth, in_raw_string = split_code_line(
        "  // kept } `) // note", in_raw_string=True
    )
    assert code == "  // kept } `)", f"unexpected code {code!r}"
    assert (depth, in_raw_string) == (-1, False), (
        f"expected the raw string to close before the bracket, got {depth}"
    )


def test_multiline_raw_string_stays_in_one_declaration() -> None:
    """Braces and comment markers inside a raw string do not split declarations."""
    result = scan_source(
        "// Usage text.\n"
        "let Usage = `juledoc PATH\n"
        "  opens { here // not a comment\n"
        "`\n"
        "\n"
        "fn Run() {}\n",
        origin="usage.jule",
    )
    names = [record.name for record in result.records]
    assert names == ["Usage", "Run"], f"unexpected records {names!r}"
    usage = result.records[0]
    assert usage.code == (
        "let Usage = `juledoc PATH\n  opens { here // not a comment\n`"
    ), f"expected the whole raw string in the signature, got {usage.code!r}"
    assert usage.context == (Text("Usage text."),), f"got {usage.context!r}"


def test_unterminated_raw_string_raises() -> None:
    """A raw string never closed is reported like an open body."""
    with pytest.raises(ScanError, match=r"usage\.jule:1: unterminated declaration"):
        scan_source("let Usage = `open\nforever\n", origin="usage.jule")
