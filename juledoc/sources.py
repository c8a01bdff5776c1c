"""Enumerate the Jule source files that make up a documented package.

A path may name a single file, which is always used, or a package directory,
whose files are filtered the way the Jule build does: platform and
architecture filename annotations (``io_linux.jule``, ``sys_windows_amd64.jule``)
must match the build target, ``_test`` files are skipped, and files carrying
an explicit ``#build ignore`` directive are left out.

Example
-------
>>> from juledoc.sources import BuildTarget, matches_target
>>> matches_target("fs_unix.jule", BuildTarget(os="linux", arch="amd64"))
True
>>> matches_target("fs_windows.jule", BuildTarget(os="linux", arch="amd64"))
False
"""

from __future__ import annotations

import dataclasses as dc
import platform
import sys
import typing as typ

from juledoc._constants import COMMENT_MARKER, EXCLUDE_MARKER, SOURCE_EXTENSION

if typ.TYPE_CHECKING:
    from pathlib import Path

KNOWN_OS: frozenset[str] = frozenset({"windows", "linux", "darwin", "unix"})
KNOWN_ARCH: frozenset[str] = frozenset({"amd64", "arm64", "i386"})
UNIX_FAMILY: frozenset[str] = frozenset({"linux", "darwin"})
TEST_SUFFIX = "_test"

_PLATFORM_OS = {"win32": "windows", "cygwin": "windows", "darwin": "darwin"}
_MACHINE_ARCH = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "i386",
    "i686": "i386",
    "x86": "i386",
}


class SourceDiscoveryError(RuntimeError):
    """Raised when the requested sources cannot be listed or read."""


@dc.dataclass(frozen=True, slots=True)
class BuildTarget:
    """Operating system and architecture the documentation is built for."""

    os: str
    arch: str


@dc.dataclass(frozen=True, slots=True)
class SourceFile:
    """A source file selected for documentation, with its decoded text."""

    path: Path
    text: str


def host_target() -> BuildTarget:
    """Return the build target of the running interpreter's host."""
    os_name = _PLATFORM_OS.get(sys.platform, "linux")
    arch = _MACHINE_ARCH.get(platform.machine().lower(), "amd64")
    return BuildTarget(os=os_name, arch=arch)


def _os_matches(annotation: str, target: BuildTarget) -> bool:
    if annotation == "unix":
        return target.os in UNIX_FAMILY
    return annotation == target.os


def matches_target(
    filename: str, target: BuildTarget, *, include_tests: bool = False
) -> bool:
    """Return whether ``filename``'s annotations select it for ``target``.

    Parameters
    ----------
    filename : str
        Base name of the source file, extension included.
    target : BuildTarget
        Operating system and architecture being documented.
    include_tests : bool, optional
        Keep ``*_test`` files instead of skipping them.

    Returns
    -------
    bool
        ``False`` when a test suffix, OS annotation or architecture
        annotation rules the file out.
    """
    stem = filename.rsplit(".", 1)[0]
    if stem.endswith(TEST_SUFFIX):
        if not include_tests:
            return False
        stem = stem[: -len(TEST_SUFFIX)]

    parts = stem.split("_")[1:]
    if parts and parts[-1] in KNOWN_ARCH:
        if parts.pop() != target.arch:
            return False
    if parts and parts[-1] in KNOWN_OS:
        return _os_matches(parts[-1], target)
    return True


def has_exclude_marker(text: str) -> bool:
    """Return whether ``text`` opts out of the default build.

    The marker is honoured only in the file header: before the first line
    that is neither blank, a comment, nor a directive.
    """
    for line in text.splitlines():
        stripped = line.strip()
        if stripped == EXCLUDE_MARKER:
            return True
        if stripped and not stripped.startswith(("#", COMMENT_MARKER)):
            return False
    return False


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        msg = f"{path}: source is not valid UTF-8"
        raise SourceDiscoveryError(msg) from exc
    except OSError as exc:
        msg = f"{path}: {exc.strerror or exc}"
        raise SourceDiscoveryError(msg) from exc


def load_sources(
    path: Path,
    *,
    target: BuildTarget | None = None,
    extension: str = SOURCE_EXTENSION,
    include_tests: bool = False,
) -> list[SourceFile]:
    """Read the source files selected for documentation under ``path``.

    Parameters
    ----------
    path : Path
        A source file, used as-is, or a package directory whose immediate
        children are filtered by extension, filename annotations and the
        exclude marker.
    target : BuildTarget, optional
        Build target for annotation matching; defaults to the host.
    extension : str, optional
        Source file extension, ``.jule`` by default.
    include_tests : bool, optional
        Keep ``*_test`` files.

    Returns
    -------
    list[SourceFile]
        Selected files in name order.

    Raises
    ------
    SourceDiscoveryError
        If ``path`` does not exist, cannot be listed, or a selected file
        cannot be read as UTF-8 text.
    """
    if not path.exists():
        msg = f"{path}: no such file or directory"
        raise SourceDiscoveryError(msg)
    if path.is_file():
        return [SourceFile(path=path, text=_read_source(path))]

    build_target = target or host_target()
    try:
        candidates = sorted(child for child in path.iterdir() if child.is_file())
    except OSError as exc:
        msg = f"{path}: {exc.strerror or exc}"
        raise SourceDiscoveryError(msg) from exc

    sources: list[SourceFile] = []
    for candidate in candidates:
        if candidate.suffix != extension:
            continue
        if not matches_target(
            candidate.name, build_target, include_tests=include_tests
        ):
            continue
        text = _read_source(candidate)
        if has_exclude_marker(text):
            continue
        sources.append(SourceFile(path=candidate, text=text))
    return sources


__all__ = [
    "BuildTarget",
    "SourceDiscoveryError",
    "SourceFile",
    "has_exclude_marker",
    "host_target",
    "load_sources",
    "matches_target",
]
