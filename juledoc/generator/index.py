"""Build the navigation index that heads every generated page.

Every rendered heading gets one index line linking to its anchor. Anchors
follow the usual Markdown renderer convention (lower-case, whitespace and
underscores to hyphens) and repeated anchors receive ``-1``, ``-2``… suffixes in the order
the headings are emitted.
"""

from __future__ import annotations

import re
import typing as typ

from juledoc._constants import DEFAULT_INDEX_INDENT, INDEX_HEADING
from juledoc.generator.escape import escape_markdown
from juledoc.models import DocKind, DocumentationRecord

NBSP = "&nbsp;"
LINE_BREAK = "<br>"

_FN_KEYWORD = re.compile(r"\bfn\s+")
_TYPE_KEYWORD = re.compile(r"^\s*type\s+")
_NEWLINES_AND_TABS = re.compile(r"[\n\t]+")
_WHITESPACE = re.compile(r"\s+")


def heading_anchor(name: str) -> str:
    """Return the auto-generated anchor for a heading reading ``name``.

    Examples
    --------
    >>> heading_anchor("Type Aliases")
    'type-aliases'
    """
    return _WHITESPACE.sub("-", name.strip().lower()).replace("_", "-")


def index_label(record: DocumentationRecord) -> str:
    """Derive the unescaped index label for ``record`` from its signature."""
    code = record.code
    if not code:
        return record.name

    match record.kind:
        case DocKind.VAR:
            label = code.split("=", 1)[0]
        case DocKind.FUNC:
            keyword = _FN_KEYWORD.search(code)
            label = code[keyword.end() :] if keyword else code
        case DocKind.STRUCT:
            start = max(code.find("struct"), 0)
            end = code.find("{", start)
            label = code[start:end] if end != -1 else code[start:]
        case DocKind.TRAIT:
            label = f"trait {record.name}"
        case DocKind.ENUM:
            label = f"enum {record.name}"
        case DocKind.TYPE_ENUM:
            label = f"enum {record.name}: type"
        case DocKind.TYPE_ALIAS:
            label = _TYPE_KEYWORD.sub("", code, count=1)
        case DocKind.STRICT_TYPE_ALIAS:
            label = code.split(":", 1)[0]
        case _:
            typ.assert_never(record.kind)
    return label.strip()


class IndexBuilder:
    """Accumulate index entries and hand out collision-free anchors."""

    def __init__(
        self,
        *,
        indent_width: int = DEFAULT_INDEX_INDENT,
        reserved: tuple[str, ...] = (INDEX_HEADING,),
    ) -> None:
        """Initialize an empty index.

        Parameters
        ----------
        indent_width : int, optional
            Number of non-breaking spaces per nesting level.
        reserved : tuple[str, ...], optional
            Heading names already present on the page before any record, so
            records sharing their anchor receive a suffix. Defaults to the
            page's own ``Index`` heading.
        """
        self.indent_width = indent_width
        self._entries: list[str] = []
        self._occurrences: dict[str, int] = {}
        for name in reserved:
            self.anchor_for(name)

    def __len__(self) -> int:
        return len(self._entries)

    def anchor_for(self, name: str) -> str:
        """Return the anchor of the next heading reading ``name``."""
        anchor = heading_anchor(name)
        seen = self._occurrences.get(anchor, 0)
        self._occurrences[anchor] = seen + 1
        if seen:
            return f"{anchor}-{seen}"
        return anchor

    def push(self, record: DocumentationRecord, level: int = 0) -> str:
        """Append the index line for ``record`` and return its anchor.

        Parameters
        ----------
        record : DocumentationRecord
            Declaration (or synthetic group header) about to be rendered.
        level : int, optional
            Nesting depth; each level indents the entry by
            ``indent_width`` non-breaking spaces.

        Returns
        -------
        str
            The anchor the entry links to.
        """
        label = _NEWLINES_AND_TABS.sub(" ", escape_markdown(index_label(record)))
        anchor = self.anchor_for(record.name)
        padding = NBSP * (self.indent_width * level)
        self._entries.append(f"{padding}[{label}](#{anchor}){LINE_BREAK}")
        return anchor

    def render(self) -> str:
        """Return the index entries, one per line."""
        return "\n".join(self._entries)


__all__ = ["IndexBuilder", "heading_anchor", "index_label"]
