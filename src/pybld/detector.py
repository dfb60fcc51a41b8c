"""Locate the build system that governs a directory tree."""

import enum
import os
from pathlib import Path
from typing import Optional, Tuple, TypeAlias


DEFAULT_BUILD_SUBDIR = "build"


class BuildSystem(enum.Enum):
    MAKE = "make"
    NINJA = "ninja"
    CARGO = "cargo"
    CMAKE = "cmake"


MARKER_FILES: dict[str, BuildSystem] = {
    "makefile": BuildSystem.MAKE,
    "Makefile": BuildSystem.MAKE,
    "GNUmakefile": BuildSystem.MAKE,
    "build.ninja": BuildSystem.NINJA,
    "Cargo.toml": BuildSystem.CARGO,
    "CMakeLists.txt": BuildSystem.CMAKE,
}


PathLike: TypeAlias = Path | str
SearchResult: TypeAlias = Optional[Tuple[BuildSystem, Path]]


def build_system_for_filename(name: str) -> Optional[BuildSystem]:
    return MARKER_FILES.get(name)


def detect(directory: PathLike) -> Optional[BuildSystem]:
    """Return the build system whose marker file is in ``directory``.

    Entries are checked in the order the OS lists them, so a directory with
    markers for several build systems resolves to whichever comes first.
    Raises ``OSError`` when the directory cannot be listed.
    """
    with os.scandir(directory) as entries:
        for entry in entries:
            build_system = build_system_for_filename(entry.name)
            if build_system is not None:
                return build_system
    return None


def _start_dir(start: Optional[PathLike]) -> Path:
    if start is None:
        return Path.cwd()
    return Path(os.path.abspath(start))


def find_in_directory(start: Optional[PathLike] = None) -> SearchResult:
    """Check only the starting directory; no build/ or ancestor search."""
    current = _start_dir(start)
    build_system = detect(current)
    if build_system is None:
        return None
    return build_system, current


def find_build_directory(start: Optional[PathLike] = None) -> SearchResult:
    """Find the nearest directory holding a marker file.

    Looks at ``start`` (the cwd by default), then its ``build``
    subdirectory, then each ancestor up to the filesystem root.
    """
    current = _start_dir(start)
    build_system = detect(current)
    if build_system is not None:
        return build_system, current

    build_dir = current / DEFAULT_BUILD_SUBDIR
    if build_dir.is_dir():
        build_system = detect(build_dir)
        if build_system is not None:
            return build_system, build_dir

    for parent in current.parents:
        build_system = detect(parent)
        if build_system is not None:
            return build_system, parent
    return None
