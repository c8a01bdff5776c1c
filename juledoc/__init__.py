"""Generate Markdown API documentation from Jule source comments.

This package exposes the ``juledoc`` CLI, which scans a Jule source file or
package directory for public declarations and renders their signatures and
doc comments as a single Markdown page with a navigation index.

Exports
-------
- ``app``: Cyclopts application entry.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from juledoc import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
