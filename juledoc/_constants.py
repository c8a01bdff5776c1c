"""Common literal values used across juledoc.

These constants keep markers, defaults, and filenames centralized so the
scanner, renderers, configuration loader, and tests can import the same
values without drifting. Intended for internal use within the juledoc package.

Examples
--------
>>> from juledoc import _constants
>>> _constants.SOURCE_EXTENSION
'.jule'
>>> "##" + " " + _constants.INDEX_HEADING
'## Index'
"""

from pathlib import Path

COMMENT_MARKER = "//"
SOURCE_EXTENSION = ".jule"
EXCLUDE_MARKER = "#build ignore"
CODE_FENCE = "```"
DEFAULT_CODE_LANGUAGE = "jule"
DEFAULT_OUTPUT_FILE = Path("docs.md")
DEFAULT_CONFIG_FILE = Path("juledoc.yaml")
DEFAULT_INDEX_INDENT = 4
INDEX_HEADING = "Index"
PAGE_TEMPLATE = "page.md.jinja"
