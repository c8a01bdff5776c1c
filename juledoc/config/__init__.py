"""Load and validate juledoc configuration YAML.

This subpackage parses the optional ``juledoc.yaml`` file and produces a
:class:`DocConfig` consumed by source discovery, the renderers and the CLI.
Every key is optional; omitted values fall back to built-in defaults and the
host build target.

Examples
--------
>>> from pathlib import Path
>>> from juledoc.config import load_doc_config
>>> config = load_doc_config(Path("juledoc.yaml"))  # doctest: +SKIP
>>> config.output_file  # doctest: +SKIP
PosixPath('docs.md')
"""

from .loader import load_doc_config
from .models import DocConfig, DocConfigError

__all__ = ["DocConfig", "DocConfigError", "load_doc_config"]
