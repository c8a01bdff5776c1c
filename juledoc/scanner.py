r"""Extract documented public declarations from Jule source text.

The scanner is shallow: it tracks bracket depth outside string
literals and comments to find where each top-level declaration ends, reads
the ``//`` comment block directly above it, and reformats the declaration
into a signature with comments removed. ``impl`` blocks are scanned the same
way for their public methods.

Example
-------
>>> from juledoc.scanner import scan_source
>>> result = scan_source("// Adds numbers.\nfn Add(a: int, b: int): int {\n\treturn a + b\n}\n")
>>> result.records[0].code
'fn Add(a: int, b: int): int'
"""

from __future__ import annotations

import dataclasses as dc
import re
import textwrap

from juledoc._constants import COMMENT_MARKER
from juledoc.comments import build_context
from juledoc.models import DocKind, DocumentationRecord

_FN_DECL = re.compile(r"^(?:(?:static|unsafe|async|cpp)\s+)*fn\s+(?P<name>\w+)")
_STRUCT_DECL = re.compile(r"^struct\s+(?P<name>\w+)")
_TRAIT_DECL = re.compile(r"^trait\s+(?P<name>\w+)")
_ENUM_DECL = re.compile(r"^enum\s+(?P<name>\w+)\s*(?::\s*(?P<base>\w+))?")
_TYPE_DECL = re.compile(r"^type\s+(?P<name>\w+)(?:\[[^\]]*\])?\s*(?P<op>[:=])")
_VAR_DECL = re.compile(r"^(?:let|const|static)\s+(?:mut\s+)?(?P<name>\w+)")
_IMPL_DECL = re.compile(
    r"^impl\s+(?P<first>[\w:]+)(?:\[[^\]]*\])?(?:\s+for\s+(?P<owner>\w+))?"
)

_OPENERS = "([{"
_CLOSERS = ")]}"
_QUOTES = "\"'`"
_RAW_QUOTE = "`"


class ScanError(ValueError):
    """Raised when a source file cannot be split into declarations."""


@dc.dataclass(slots=True)
class ImplBlock:
    """Public methods declared in one ``impl`` block.

    Attributes
    ----------
    owner : str
        Name of the type receiving the methods, generics stripped.
    trait : str or None
        Implemented trait for ``impl Trait for Owner`` blocks.
    methods : list[DocumentationRecord]
        Public methods in declaration order.
    """

    owner: str
    trait: str | None
    methods: list[DocumentationRecord] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class ScanResult:
    """Declarations and impl blocks found in one source file."""

    records: list[DocumentationRecord] = dc.field(default_factory=list)
    impls: list[ImplBlock] = dc.field(default_factory=list)


def scan_source(text: str, *, origin: str = "<source>") -> ScanResult:
    """Collect documentation records and impl blocks from Jule source.

    Parameters
    ----------
    text : str
        Full source file contents.
    origin : str, optional
        Label used in error messages, usually the file path.

    Returns
    -------
    ScanResult
        Public top-level declarations in source order, plus every ``impl``
        block with its public methods.

    Raises
    ------
    ScanError
        If a declaration's brackets or raw string are still open at the end
        of the file.
    """
    result = ScanResult()
    _Scanner(text.splitlines(), origin=origin, result=result).scan(top_level=True)
    return result


def split_code_line(
    line: str, *, in_raw_string: bool = False
) -> tuple[str, int, bool]:
    """Return ``line`` without its trailing comment and its bracket balance.

    Brackets and ``//`` inside string, rune and raw string literals are
    ignored. Only raw strings may span lines.

    Parameters
    ----------
    line : str
        One source line.
    in_raw_string : bool, optional
        The line starts inside a raw string opened on an earlier line.

    Returns
    -------
    tuple[str, int, bool]
        The code, its bracket balance, and whether a raw string is still
        open at the end of the line.
    """
    depth = 0
    quote: str | None = _RAW_QUOTE if in_raw_string else None
    index = 0
    while index < len(line):
        char = line[index]
        if quote:
            if char == "\\" and quote != _RAW_QUOTE:
                index += 2
                continue
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif line.startswith(COMMENT_MARKER, index):
            return line[:index].rstrip(), depth, False
        elif char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
        index += 1
    if quote == _RAW_QUOTE:
        return line, depth, True
    return line.rstrip(), depth, False


def _cut_body(code: str) -> str:
    """Return a function declaration up to, excluding, its body brace."""
    depth = 0
    for index, char in enumerate(code):
        if char in "([":
            depth += 1
        elif char in ")]":
            depth -= 1
        elif char == "{" and depth == 0:
            return code[:index].rstrip()
    return code.rstrip()


class _Scanner:
    """Cursor over the lines of one block of source."""

    def __init__(
        self,
        lines: list[str],
        *,
        origin: str,
        result: ScanResult,
        offset: int = 0,
    ) -> None:
        self.lines = lines
        self.origin = origin
        self.result = result
        self.offset = offset
        self.comments: list[str] = []
        self.directives: list[str] = []

    def scan(self, *, top_level: bool) -> list[DocumentationRecord]:
        """Walk the block, returning functions found in it.

        Top-level scans also record every declaration kind and impl block
        on :attr:`result`.
        """
        functions: list[DocumentationRecord] = []
        last_var_end: int | None = None
        index = 0
        while index < len(self.lines):
            stripped = self.lines[index].strip()
            if stripped.startswith(COMMENT_MARKER):
                self.comments.append(stripped)
                index += 1
                continue
            if not stripped:
                self._reset()
                index += 1
                continue
            if stripped.startswith("/*"):
                index = self._skip_block_comment(index)
                continue
            if stripped.startswith("#"):
                self.directives.append(stripped)
                index += 1
                continue

            end = self._declaration_end(index)
            block = self.lines[index : end + 1]
            head, _, _ = split_code_line(stripped)
            if top_level:
                documented = self._handle_top_level(head, block, index, last_var_end)
                last_var_end = end if documented is DocKind.VAR else None
            elif (match := _FN_DECL.match(head)) and _is_public(match["name"]):
                functions.append(self._function_record(match["name"], block))
            self._reset()
            index = end + 1
        return functions

    def _reset(self) -> None:
        self.comments.clear()
        self.directives.clear()

    def _skip_block_comment(self, index: int) -> int:
        self._reset()
        while index < len(self.lines):
            if "*/" in self.lines[index]:
                return index + 1
            index += 1
        return index

    def _declaration_end(self, start: int) -> int:
        """Return the index of the line closing the declaration at ``start``."""
        depth = 0
        in_raw_string = False
        for index in range(start, len(self.lines)):
            _, delta, in_raw_string = split_code_line(
                self.lines[index], in_raw_string=in_raw_string
            )
            depth += delta
            if depth <= 0 and not in_raw_string:
                return index
        line_number = self.offset + start + 1
        msg = f"{self.origin}:{line_number}: unterminated declaration"
        raise ScanError(msg)

    def _handle_top_level(
        self,
        head: str,
        block: list[str],
        index: int,
        last_var_end: int | None,
    ) -> DocKind | None:
        """Record the declaration in ``block``; return its kind when documented."""
        if match := _IMPL_DECL.match(head):
            self._scan_impl(match, block, index)
            return None
        if match := _FN_DECL.match(head):
            kind, name = DocKind.FUNC, match["name"]
        elif match := _STRUCT_DECL.match(head):
            kind, name = DocKind.STRUCT, match["name"]
        elif match := _TRAIT_DECL.match(head):
            kind, name = DocKind.TRAIT, match["name"]
        elif match := _ENUM_DECL.match(head):
            is_type_enum = match["base"] == "type"
            kind = DocKind.TYPE_ENUM if is_type_enum else DocKind.ENUM
            name = match["name"]
        elif match := _TYPE_DECL.match(head):
            is_strict = match["op"] == ":"
            kind = DocKind.STRICT_TYPE_ALIAS if is_strict else DocKind.TYPE_ALIAS
            name = match["name"]
        elif match := _VAR_DECL.match(head):
            kind, name = DocKind.VAR, match["name"]
        else:
            return None
        if not _is_public(name):
            return None

        if kind is DocKind.FUNC:
            record = self._function_record(name, block)
        else:
            record = self._record(name, kind, self._format(block))

        previous = self.result.records[-1] if self.result.records else None
        if (
            kind is DocKind.VAR
            and previous is not None
            and previous.kind is DocKind.VAR
            and last_var_end == index - 1
            and not self.comments
        ):
            merged = f"{previous.code}\n{record.code}"
            self.result.records[-1] = dc.replace(previous, code=merged)
        else:
            self.result.records.append(record)
        return kind

    def _scan_impl(self, match: re.Match[str], block: list[str], index: int) -> None:
        owner = match["owner"] or match["first"]
        trait = match["first"] if match["owner"] else None
        body = block[1:-1] if len(block) > 1 else []
        nested = _Scanner(
            body, origin=self.origin, result=self.result, offset=self.offset + index + 1
        )
        methods = nested.scan(top_level=False)
        self.result.impls.append(ImplBlock(owner=owner, trait=trait, methods=methods))

    def _function_record(self, name: str, block: list[str]) -> DocumentationRecord:
        return self._record(name, DocKind.FUNC, _cut_body(self._format(block)))

    def _record(self, name: str, kind: DocKind, code: str) -> DocumentationRecord:
        if self.directives:
            code = "\n".join([*self.directives, code])
        context = tuple(build_context("\n".join(self.comments)))
        return DocumentationRecord(code=code, name=name, kind=kind, context=context)

    @staticmethod
    def _format(block: list[str]) -> str:
        """Return ``block`` dedented with comment lines and trailing comments removed."""
        kept: list[str] = []
        in_raw_string = False
        for line in block:
            if not in_raw_string and line.strip().startswith(COMMENT_MARKER):
                continue
            code, _, in_raw_string = split_code_line(
                line, in_raw_string=in_raw_string
            )
            kept.append(code)
        return textwrap.dedent("\n".join(kept)).strip("\n")


def _is_public(name: str) -> bool:
    return name[:1].isupper()


__all__ = ["ImplBlock", "ScanError", "ScanResult", "scan_source", "split_code_line"]
