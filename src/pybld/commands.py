"""Command lines for each supported build tool."""

from pathlib import Path
from typing import NamedTuple, Optional

from pybld.detector import BuildSystem, PathLike


CURRENT_DIR = "."


class BuildInvocation(NamedTuple):
    program: str
    args: tuple[str, ...]

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]


def _jobs_flag(threads: Optional[int]) -> list[str]:
    if threads is None:
        return []
    return ["-j", str(threads)]


def _directory_flag(directory: Optional[PathLike]) -> list[str]:
    if directory is None:
        return []
    return ["-C", str(directory)]


def make_command(
    threads: Optional[int] = None, directory: Optional[PathLike] = None
) -> BuildInvocation:
    args = [*_jobs_flag(threads), *_directory_flag(directory)]
    return BuildInvocation("make", tuple(args))


def ninja_command(
    threads: Optional[int] = None, directory: Optional[PathLike] = None
) -> BuildInvocation:
    args = [*_jobs_flag(threads), *_directory_flag(directory)]
    return BuildInvocation("ninja", tuple(args))


def cmake_command(
    threads: Optional[int] = None, directory: Optional[PathLike] = None
) -> BuildInvocation:
    # -C always comes first and falls back to the current directory.
    target = directory if directory is not None else Path(CURRENT_DIR)
    args = [*_directory_flag(target), *_jobs_flag(threads)]
    return BuildInvocation("cmake", tuple(args))


def cargo_command() -> BuildInvocation:
    # cargo locates its manifest and job count on its own.
    return BuildInvocation("cargo", ("build",))


def build_command(
    build_system: BuildSystem,
    threads: Optional[int] = None,
    directory: Optional[PathLike] = None,
) -> BuildInvocation:
    """Translate a detected build system into the command that builds it.

    ``threads`` is passed through unchecked; the CLI validates it. The
    directory is expressed with ``-C`` so the command can run from any cwd.
    """
    if build_system is BuildSystem.MAKE:
        return make_command(threads, directory)
    if build_system is BuildSystem.NINJA:
        return ninja_command(threads, directory)
    if build_system is BuildSystem.CMAKE:
        return cmake_command(threads, directory)
    return cargo_command()
