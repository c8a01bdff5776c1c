"""Dataclasses describing documented declarations and their parsed comments.

Records are produced by :mod:`juledoc.scanner`, enriched with aggregate
metadata by :mod:`juledoc.aggregates`, and consumed by the Markdown renderers
in this package.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ


class DocKind(enum.Enum):
    """Kind of a documented declaration."""

    VAR = "var"
    FUNC = "func"
    STRUCT = "struct"
    TRAIT = "trait"
    ENUM = "enum"
    TYPE_ENUM = "type_enum"
    TYPE_ALIAS = "type_alias"
    STRICT_TYPE_ALIAS = "strict_type_alias"

    @property
    def is_aggregate(self) -> bool:
        """Return whether declarations of this kind may own traits and methods."""
        return self in {DocKind.STRUCT, DocKind.STRICT_TYPE_ALIAS}


@dc.dataclass(frozen=True, slots=True)
class Separator:
    """Paragraph break between comment blocks."""

    indent: int = 0


@dc.dataclass(frozen=True, slots=True)
class Text:
    """A prose line or a merged run of prose lines."""

    content: str
    indent: int = 0


@dc.dataclass(frozen=True, slots=True)
class ListItem:
    """Text of one bullet, possibly merged from comma-continued lines."""

    content: str
    indent: int = 0


ContextNode: typ.TypeAlias = Separator | Text | ListItem


@dc.dataclass(slots=True)
class AggregateMeta:
    """Traits and methods collected for a struct-like declaration.

    Attributes
    ----------
    traits : list[str]
        Implemented trait labels in first-seen order, without duplicates.
    methods : list[DocumentationRecord]
        Public methods declared in ``impl`` blocks for the owner.
    """

    traits: list[str] = dc.field(default_factory=list)
    methods: list[DocumentationRecord] = dc.field(default_factory=list)

    def add_trait(self, label: str) -> None:
        """Record ``label`` unless it is already present."""
        if label not in self.traits:
            self.traits.append(label)


@dc.dataclass(slots=True)
class DocumentationRecord:
    """One public declaration with its signature and parsed comment.

    Attributes
    ----------
    code : str
        Formatted declaration signature; empty for synthetic group headers.
    name : str
        Declared identifier, starting with an upper-case letter.
    kind : DocKind
        Declaration kind, selecting the index label and section group.
    context : tuple[ContextNode, ...]
        Comment nodes in source line order.
    meta : AggregateMeta or None
        Traits and methods, attached by the dispatch pass for aggregates.
    """

    code: str
    name: str
    kind: DocKind
    context: tuple[ContextNode, ...] = ()
    meta: AggregateMeta | None = None

    @property
    def is_static(self) -> bool:
        """Return whether the declaration line carries the ``static`` marker."""
        for line in self.code.splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            return stripped.startswith("static ")
        return False


class AggregateLike(typ.Protocol):
    """Shared view of struct-like records that may own :class:`AggregateMeta`."""

    name: str
    code: str
    meta: AggregateMeta | None


__all__ = [
    "AggregateLike",
    "AggregateMeta",
    "ContextNode",
    "DocKind",
    "DocumentationRecord",
    "ListItem",
    "Separator",
    "Text",
]
