"""Typed dataclasses describing juledoc configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from juledoc._constants import (
    DEFAULT_CODE_LANGUAGE,
    DEFAULT_INDEX_INDENT,
    DEFAULT_OUTPUT_FILE,
    SOURCE_EXTENSION,
)
from juledoc.sources import BuildTarget, host_target


class DocConfigError(ValueError):
    """Raised when the configuration file holds invalid values."""


@dc.dataclass(slots=True)
class DocConfig:
    """Settings shared by the CLI, source discovery and the renderers.

    Attributes
    ----------
    output_file : Path
        File written when the CLI is asked to write to a file.
    code_language : str
        Info string placed on fenced signature blocks.
    index_indent : int
        Non-breaking spaces per index nesting level.
    source_extension : str
        Extension of source files collected from package directories.
    include_tests : bool
        Document ``*_test`` files as well.
    target : BuildTarget
        Platform used to filter annotated filenames.
    """

    output_file: Path = DEFAULT_OUTPUT_FILE
    code_language: str = DEFAULT_CODE_LANGUAGE
    index_indent: int = DEFAULT_INDEX_INDENT
    source_extension: str = SOURCE_EXTENSION
    include_tests: bool = False
    target: BuildTarget = dc.field(default_factory=host_target)


__all__ = ["DocConfig", "DocConfigError"]
