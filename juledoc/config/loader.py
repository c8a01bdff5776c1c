"""Load juledoc configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from juledoc.sources import KNOWN_ARCH, KNOWN_OS, BuildTarget, host_target

from .models import DocConfig, DocConfigError


def load_doc_config(path: Path | None = None) -> DocConfig:
    """Load the YAML configuration describing output and build settings.

    Parameters
    ----------
    path : Path, optional
        Filesystem path to the YAML configuration (for example,
        ``juledoc.yaml``). ``None`` returns the built-in defaults.

    Returns
    -------
    DocConfig
        Parsed configuration with defaults applied for omitted keys.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    DocConfigError
        If a value has the wrong type or names an unknown build target.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from juledoc.config import load_doc_config
    >>> load_doc_config().code_language
    'jule'
    """
    if path is None:
        return DocConfig()
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    defaults: dict[str, typ.Any] = dict(loaded.get("defaults", {}) or {})
    base = DocConfig()

    return DocConfig(
        output_file=Path(_expect(defaults, "output_file", str, str(base.output_file))),
        code_language=_expect(defaults, "code_language", str, base.code_language),
        index_indent=_expect_indent(defaults, base.index_indent),
        source_extension=_normalize_extension(
            _expect(defaults, "source_extension", str, base.source_extension)
        ),
        include_tests=_expect(defaults, "include_tests", bool, base.include_tests),
        target=_build_target(defaults.get("target")),
    )


def _expect(
    payload: typ.Mapping[str, typ.Any], key: str, kind: type, default: typ.Any
) -> typ.Any:
    """Return ``payload[key]`` checked against ``kind``, or ``default``."""
    value = payload.get(key, default)
    if not isinstance(value, kind):
        msg = f"'{key}' must be a {kind.__name__}, got {type(value).__name__}."
        raise DocConfigError(msg)
    return value


def _expect_indent(payload: typ.Mapping[str, typ.Any], default: int) -> int:
    value = payload.get("index_indent", default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        msg = "'index_indent' must be a non-negative integer."
        raise DocConfigError(msg)
    return value


def _normalize_extension(extension: str) -> str:
    """Return ``extension`` with a single leading dot."""
    return f".{extension.lstrip('.')}"


def _build_target(payload: object | None) -> BuildTarget:
    """Build the documentation target from an optional ``target`` mapping."""
    host = host_target()
    match payload:
        case None:
            return host
        case dict():
            os_name = str(payload.get("os", host.os)).lower()
            arch = str(payload.get("arch", host.arch)).lower()
        case _:
            msg = "'target' must be a mapping with 'os' and 'arch' keys."
            raise DocConfigError(msg)
    if os_name not in KNOWN_OS - {"unix"}:
        msg = f"Unknown target os '{os_name}'."
        raise DocConfigError(msg)
    if arch not in KNOWN_ARCH:
        msg = f"Unknown target arch '{arch}'."
        raise DocConfigError(msg)
    return BuildTarget(os=os_name, arch=arch)


__all__ = ["load_doc_config"]
