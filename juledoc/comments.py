r"""Parse declaration comment blocks into ordered context nodes.

Each ``//`` line is normalized into its content and an indentation level,
then contiguous lines are grouped into paragraphs, bullets and separators.
Indentation counts only non-space whitespace (tabs), which is how comment
authors mark code samples.

Example
-------
>>> from juledoc.comments import build_context
>>> nodes = build_context("// Adds two numbers\n// together.\n//\n// - fast")
>>> nodes[0]
Text(content='Adds two numbers together.', indent=0)
>>> [type(node).__name__ for node in nodes]
['Text', 'Separator', 'ListItem']
"""

from __future__ import annotations

import dataclasses as dc

from juledoc._constants import COMMENT_MARKER
from juledoc.models import ContextNode, ListItem, Separator, Text

LIST_MARKER = "-"


@dc.dataclass(frozen=True, slots=True)
class _CommentLine:
    """A normalized comment line."""

    content: str
    indent: int

    @property
    def is_blank(self) -> bool:
        return not self.content.strip()

    @property
    def is_bullet(self) -> bool:
        return self.content.lstrip(" ").startswith(LIST_MARKER)


def normalize_comment_line(line: str, *, trim: bool = False) -> tuple[str, int]:
    """Strip the comment marker from ``line`` and measure its indentation.

    Parameters
    ----------
    line : str
        Raw source line including the ``//`` marker. Whitespace before the
        marker is ignored.
    trim : bool, optional
        Strip plain spaces from both ends of the returned content.

    Returns
    -------
    tuple[str, int]
        The content and the number of leading non-space whitespace
        characters consumed after the marker. An empty line yields
        ``("", 0)``.
    """
    text = line.lstrip()
    if text.startswith(COMMENT_MARKER):
        text = text[len(COMMENT_MARKER) :]
    if text.startswith(" "):
        text = text[1:]
    indent = 0
    while indent < len(text) and text[indent] != " " and text[indent].isspace():
        indent += 1
    content = text[indent:]
    if trim:
        content = content.strip(" ")
    return content, indent


def build_context(comment_text: str) -> list[ContextNode]:
    """Split a raw comment block into Separator, Text and ListItem nodes.

    Parameters
    ----------
    comment_text : str
        The declaration's comment lines, markers included, joined by
        newlines.

    Returns
    -------
    list[ContextNode]
        Nodes in source line order. Runs of blank lines collapse into a
        single :class:`Separator`; leading and trailing blank lines are
        dropped, so a blank comment yields an empty list.
    """
    lines = [
        _CommentLine(*normalize_comment_line(raw))
        for raw in comment_text.splitlines()
    ]
    start, end = _trim_blank_edges(lines)
    nodes: list[ContextNode] = []
    index = start
    while index < end:
        line = lines[index]
        if line.is_blank:
            while index < end and lines[index].is_blank:
                index += 1
            nodes.append(Separator())
        elif line.is_bullet:
            item, index = _consume_list_item(lines, index, end)
            nodes.append(item)
        else:
            text, index = _consume_text_run(lines, index, end)
            nodes.append(text)
    return nodes


def _trim_blank_edges(lines: list[_CommentLine]) -> tuple[int, int]:
    """Return the bounds of ``lines`` without leading and trailing blanks."""
    start = 0
    end = len(lines)
    while start < end and lines[start].is_blank:
        start += 1
    while end > start and lines[end - 1].is_blank:
        end -= 1
    return start, end


def _consume_list_item(
    lines: list[_CommentLine], index: int, end: int
) -> tuple[ListItem, int]:
    """Build a bullet, following trailing-comma continuations."""
    line = lines[index]
    text = line.content.lstrip(" ")[len(LIST_MARKER) :].strip(" ")
    index += 1
    while index < end and text.rstrip().endswith(","):
        following = lines[index]
        if following.is_blank or following.is_bullet:
            break
        text = f"{text} {following.content.strip()}"
        index += 1
    return ListItem(content=text, indent=line.indent), index


def _consume_text_run(
    lines: list[_CommentLine], index: int, end: int
) -> tuple[Text, int]:
    """Build a paragraph node; indented lines are never merged."""
    line = lines[index]
    index += 1
    if line.indent > 0:
        return Text(content=line.content, indent=line.indent), index

    parts = [line.content.strip(" ")]
    while index < end:
        following = lines[index]
        if following.indent != 0 or following.is_blank or following.is_bullet:
            break
        parts.append(following.content.strip(" "))
        index += 1
    return Text(content=" ".join(parts), indent=0), index


__all__ = ["LIST_MARKER", "build_context", "normalize_comment_line"]
