"""Cyclopts CLI entrypoint for generating Markdown documentation from Jule sources.

The ``juledoc`` console script documents one source file or one package
directory. By default the Markdown page is written to standard output;
``--file`` writes it to the configured output file (``docs.md`` unless
``juledoc.yaml`` says otherwise) instead.

Examples
--------
Print the documentation of a package:

>>> from juledoc.cli import main
>>> main()  # doctest: +SKIP

Write the documentation of a single file to ``docs.md``:

>>> from juledoc.cli import app
>>> app(["src/strings.jule", "--file"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from ruamel.yaml import YAMLError

from ._constants import DEFAULT_CONFIG_FILE
from .config import DocConfigError, load_doc_config
from .generator import DocumentationGenerator
from .scanner import ScanError
from .sources import SourceDiscoveryError

app = App(
    name="juledoc",
    help="Generate Markdown documentation for Jule source files.",
    config=cyclopts.config.Env("JULEDOC_", command=False),  # type: ignore[unknown-argument]
)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _resolve_config_path(config: Path | None) -> Path | None:
    """Return the explicit config path, or the default file when present."""
    if config is not None:
        return config
    if DEFAULT_CONFIG_FILE.exists():
        return DEFAULT_CONFIG_FILE
    return None


def _fail(message: str) -> typ.NoReturn:
    print(f"error: {message}", file=sys.stderr)
    raise SystemExit(1)


@app.default
def generate(
    path: typ.Annotated[
        Path, Parameter(help="Source file or package directory to document")
    ],
    *,
    file: typ.Annotated[
        bool,
        Parameter(
            name=["--file", "-f"],
            help="Write to the configured output file instead of stdout",
        ),
    ] = False,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to juledoc config", env_var="JULEDOC_CONFIG"),
    ] = None,
) -> None:
    """Generate the Markdown documentation page for ``path``.

    Parameters
    ----------
    path : Path
        A ``.jule`` source file or a package directory.
    file : bool, optional
        Write the page to ``DocConfig.output_file`` and report the written
        path; when ``False`` (default) the page is printed to stdout.
    config : Path or None, optional
        YAML configuration file; ``juledoc.yaml`` in the working directory
        is used when present and no path is given.

    Raises
    ------
    SystemExit
        With status 1 after printing a labeled ``error:`` line when the
        configuration, sources or declarations cannot be read.
    """
    try:
        doc_config = load_doc_config(_resolve_config_path(config))
    except (DocConfigError, FileNotFoundError, TypeError, YAMLError) as exc:
        _fail(f"invalid configuration: {exc}")
    try:
        page = DocumentationGenerator(doc_config).run(path)
    except (SourceDiscoveryError, ScanError) as exc:
        _fail(str(exc))

    if not page:
        print(f"nothing to document in {_format_path(path)}", file=sys.stderr)
        return

    if file:
        output_path = doc_config.output_file
        try:
            output_path.write_bytes(page + b"\n")
        except OSError as exc:
            _fail(f"{output_path}: {exc.strerror or exc}")
        print(f"wrote {_format_path(output_path)}")
    else:
        sys.stdout.write(page.decode("utf-8") + "\n")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``juledoc`` console command.

    Returns
    -------
    None
        This function executes for its side effects of parsing CLI arguments
        and writing documentation.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
