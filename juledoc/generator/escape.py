r"""Escape arbitrary text so it renders literally inside Markdown prose.

The substitution runs in a single pass over the input, so entities inserted
for ``&`` or quotes are never escaped a second time.

Examples
--------
>>> from juledoc.generator.escape import escape_markdown
>>> escape_markdown("a_b <c>")
'a\\_b &lt;c&gt;'
"""

from __future__ import annotations

HTML_ENTITIES: dict[str, str] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&#34;",
    "'": "&#39;",
}
BACKSLASH_ESCAPED = "`[]{}_-*+\\~@#.()!|"

_ESCAPE_TABLE = str.maketrans(
    {
        **HTML_ENTITIES,
        **{char: f"\\{char}" for char in BACKSLASH_ESCAPED},
    }
)


def escape_markdown(text: str) -> str:
    """Return ``text`` with Markdown and HTML metacharacters escaped.

    Parameters
    ----------
    text : str
        Prose or index label text. Signatures and code blocks must not be
        passed through this function.

    Returns
    -------
    str
        Text that renders verbatim when embedded in a Markdown paragraph.
    """
    return text.translate(_ESCAPE_TABLE)


__all__ = ["BACKSLASH_ESCAPED", "HTML_ENTITIES", "escape_markdown"]
