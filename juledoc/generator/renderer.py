"""Render a declaration's context nodes as a Markdown body.

Prose nodes become escaped paragraphs and bullets. A node indented deeper
than the surrounding prose opens a fenced code block that stays open until a
node falls back below the opening indentation; code inside the block is
written verbatim so prose escaping never corrupts it.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from juledoc._constants import CODE_FENCE
from juledoc.generator.escape import escape_markdown
from juledoc.models import ListItem, Separator, Text

if typ.TYPE_CHECKING:
    from juledoc.models import ContextNode, DocumentationRecord

PARAGRAPH_BREAK = "<br>\n"
LIST_PREFIX = "- "
CODE_INDENT = "\t"


@dc.dataclass(slots=True)
class _RenderState:
    """Mutable state threaded through one body rendering."""

    last_indent: int = 0
    last_was_list_item: bool = False
    last_was_separator: bool = False
    group_indent: int = 0
    first: bool = True

    @property
    def in_group(self) -> bool:
        return self.group_indent > 0


class ContextRenderer:
    """Turn :class:`~juledoc.models.ContextNode` sequences into Markdown."""

    def render(self, record: DocumentationRecord) -> str:
        """Return the Markdown body for ``record``'s parsed comment.

        Parameters
        ----------
        record : DocumentationRecord
            Declaration whose ``context`` nodes are rendered in order.

        Returns
        -------
        str
            Markdown fragment without surrounding blank lines; empty when the
            declaration carries no comment.
        """
        return self.render_nodes(record.context)

    def render_nodes(self, nodes: typ.Iterable[ContextNode]) -> str:
        """Render ``nodes`` in sequence and close any open code block."""
        state = _RenderState()
        parts: list[str] = []
        for node in nodes:
            match node:
                case Separator():
                    self._separator(state, parts)
                case Text(content=content, indent=indent):
                    self._line(state, parts, content, indent, is_list_item=False)
                case ListItem(content=content, indent=indent):
                    self._line(state, parts, content, indent, is_list_item=True)
                case _:
                    typ.assert_never(node)
        if state.in_group:
            parts.append(f"\n{CODE_FENCE}")
        return "".join(parts)

    @staticmethod
    def _separator(state: _RenderState, parts: list[str]) -> None:
        if state.in_group:
            parts.append("\n")
        else:
            parts.append("\n\n")
            state.last_indent = 0
        state.last_was_separator = True
        state.last_was_list_item = False
        state.first = False

    def _line(
        self,
        state: _RenderState,
        parts: list[str],
        content: str,
        indent: int,
        *,
        is_list_item: bool,
    ) -> None:
        prefix = LIST_PREFIX if is_list_item else ""
        if not state.in_group:
            gap = self._break_before(state, indent, is_list_item=is_list_item)
            if indent > 0:
                # A fence must start on its own line.
                parts.append("\n" if gap == " " else gap)
                parts.append(f"{CODE_FENCE}\n{prefix}{content}")
                state.group_indent = indent
            else:
                parts.append(gap)
                parts.append(f"{prefix}{escape_markdown(content)}")
        elif indent < state.group_indent:
            if not state.last_was_separator:
                parts.append("\n")
            parts.append(f"{CODE_FENCE}\n")
            state.group_indent = 0
            parts.append(f"{prefix}{escape_markdown(content)}")
        else:
            depth = indent - state.group_indent
            parts.append(f"\n{CODE_INDENT * depth}{prefix}{content}")

        state.last_indent = indent
        state.last_was_list_item = is_list_item
        state.last_was_separator = False
        state.first = False

    @staticmethod
    def _break_before(state: _RenderState, indent: int, *, is_list_item: bool) -> str:
        """Return the separator written before a node outside a code block."""
        if state.first or state.last_was_separator:
            return ""
        if is_list_item:
            return "\n" if state.last_was_list_item else "\n\n"
        if state.last_was_list_item:
            return "\n\n"
        if indent != state.last_indent:
            return PARAGRAPH_BREAK
        return " "


__all__ = ["ContextRenderer"]
