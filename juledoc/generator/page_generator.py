"""High-level orchestration for Markdown documentation generation.

This module turns documentation records into a single Markdown page and
coordinates the full pipeline behind the CLI: reading sources, scanning
declarations, dispatching aggregate metadata, and rendering. Source and scan
failures are raised by :meth:`DocumentationGenerator.collect` before any
rendering starts.

Example
-------
>>> from pathlib import Path
>>> from juledoc.config import DocConfig
>>> from juledoc.generator import DocumentationGenerator
>>> generator = DocumentationGenerator(DocConfig())
>>> generator.run(Path("std/strings"))  # doctest: +SKIP
b'## Index\\n\\n[Functions](#functions)<br>...'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from juledoc._constants import CODE_FENCE, INDEX_HEADING, PAGE_TEMPLATE
from juledoc.aggregates import AggregateRegistry
from juledoc.config import DocConfig
from juledoc.generator.escape import escape_markdown
from juledoc.generator.index import IndexBuilder
from juledoc.generator.renderer import ContextRenderer
from juledoc.models import DocKind, DocumentationRecord
from juledoc.scanner import scan_source
from juledoc.sources import load_sources

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from juledoc.models import AggregateLike

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
TRAITS_LABEL = "Implemented Traits"


@dc.dataclass(frozen=True, slots=True)
class SectionGroup:
    """A titled group of declaration kinds, rendered in a fixed order.

    Attributes
    ----------
    title : str
        Heading of the group section.
    primary : DocKind
        Kind given to the group's synthetic header record.
    extra : frozenset[DocKind]
        Further kinds rendered in the same group.
    """

    title: str
    primary: DocKind
    extra: frozenset[DocKind] = frozenset()

    @property
    def kinds(self) -> frozenset[DocKind]:
        """Return every kind rendered in this group."""
        return self.extra | {self.primary}


SECTION_GROUPS: tuple[SectionGroup, ...] = (
    SectionGroup("Variables", DocKind.VAR),
    SectionGroup("Type Aliases", DocKind.TYPE_ALIAS),
    SectionGroup("Functions", DocKind.FUNC),
    SectionGroup("Traits", DocKind.TRAIT),
    SectionGroup("Structs", DocKind.STRUCT, frozenset({DocKind.STRICT_TYPE_ALIAS})),
    SectionGroup("Enums", DocKind.ENUM, frozenset({DocKind.TYPE_ENUM})),
)


class SectionRenderer:
    """Render grouped declarations and collect their index entries.

    One instance renders one page: the index builder's anchor counters span
    every heading the instance emits.
    """

    def __init__(self, config: DocConfig | None = None) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        config : DocConfig, optional
            Supplies the signature fence language and index indentation;
            defaults to :class:`DocConfig` defaults.
        """
        self.config = config or DocConfig()
        self.index = IndexBuilder(indent_width=self.config.index_indent)
        self.context_renderer = ContextRenderer()

    def render(self, records: cabc.Sequence[DocumentationRecord]) -> str:
        """Return the page body for ``records``; the index fills as a side effect."""
        sections: list[str] = []
        for group in SECTION_GROUPS:
            members = [record for record in records if record.kind in group.kinds]
            if not members:
                continue
            header = DocumentationRecord(code="", name=group.title, kind=group.primary)
            self.index.push(header, 0)
            sections.append(f"## {escape_markdown(group.title)}")
            sections.extend(self._render_member(record, 1) for record in members)
        return "\n\n".join(sections)

    def _render_member(self, record: DocumentationRecord, level: int) -> str:
        self.index.push(record, level)
        heading = "#" * (2 if level <= 1 else 3)
        parts = [
            f"{heading} {escape_markdown(record.name)}",
            f"{CODE_FENCE}{self.config.code_language}\n{record.code}\n{CODE_FENCE}",
        ]
        body = self.context_renderer.render(record)
        if body:
            parts.append(body)
        if record.kind.is_aggregate:
            parts.extend(self._render_aggregate(record, level))
        return "\n\n".join(parts)

    def _render_aggregate(self, aggregate: AggregateLike, level: int) -> list[str]:
        meta = aggregate.meta
        if meta is None:
            return []
        parts: list[str] = []
        if meta.traits:
            bullets = "\n".join(f"- {escape_markdown(trait)}" for trait in meta.traits)
            parts.append(f"**{TRAITS_LABEL}**\n\n{bullets}")
        static = [method for method in meta.methods if method.is_static]
        instance = [method for method in meta.methods if not method.is_static]
        parts.extend(
            self._render_member(method, level + 1) for method in (*static, *instance)
        )
        return parts


def render_document(
    records: cabc.Sequence[DocumentationRecord],
    *,
    config: DocConfig | None = None,
    templates_dir: Path | None = None,
) -> bytes:
    """Render ``records`` into one Markdown page.

    Parameters
    ----------
    records : Sequence[DocumentationRecord]
        Declarations in caller order, with aggregate metadata already
        dispatched.
    config : DocConfig, optional
        Rendering settings; defaults to :class:`DocConfig` defaults.
    templates_dir : Path, optional
        Directory containing ``page.md.jinja``; defaults to the package
        templates.

    Returns
    -------
    bytes
        UTF-8 Markdown: an ``## Index`` section (omitted when nothing was
        rendered) followed by the rendered sections, stripped of
        surrounding whitespace. Empty input yields ``b""``.
    """
    renderer = SectionRenderer(config)
    body = renderer.render(records)
    env = Environment(
        loader=FileSystemLoader(str(templates_dir or DEFAULT_TEMPLATES_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    page = env.get_template(PAGE_TEMPLATE).render(
        index=renderer.index.render(),
        index_heading=INDEX_HEADING,
        body=body,
    )
    return page.strip().encode("utf-8")


class DocumentationGenerator:
    """Read a file or package directory and emit its Markdown documentation."""

    def __init__(
        self, config: DocConfig | None = None, *, templates_dir: Path | None = None
    ) -> None:
        """Initialize the generator.

        Parameters
        ----------
        config : DocConfig, optional
            Discovery and rendering settings; defaults to
            :class:`DocConfig` defaults.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        """
        self.config = config or DocConfig()
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR

    def collect(self, path: Path) -> list[DocumentationRecord]:
        """Scan every selected source under ``path`` and dispatch metadata.

        Raises
        ------
        SourceDiscoveryError
            If the sources cannot be listed or read.
        ScanError
            If a source file cannot be split into declarations.
        """
        sources = load_sources(
            path,
            target=self.config.target,
            extension=self.config.source_extension,
            include_tests=self.config.include_tests,
        )
        records: list[DocumentationRecord] = []
        registry = AggregateRegistry()
        for source in sources:
            result = scan_source(source.text, origin=str(source.path))
            records.extend(result.records)
            registry.register_all(result.impls)
        registry.dispatch(records)
        return records

    def run(self, path: Path) -> bytes:
        """Return the rendered Markdown page for ``path``."""
        records = self.collect(path)
        return render_document(
            records, config=self.config, templates_dir=self.templates_dir
        )


__all__ = [
    "SECTION_GROUPS",
    "DocumentationGenerator",
    "SectionGroup",
    "SectionRenderer",
    "render_document",
]
