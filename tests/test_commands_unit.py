from pathlib import Path

import pytest

from pybld.commands import BuildInvocation, build_command
from pybld.detector import BuildSystem


def test_cargo_command_is_plain_build():
    invocation = build_command(BuildSystem.CARGO)

    assert invocation.program == "cargo"
    assert invocation.args == ("build",)


def test_cargo_command_ignores_threads_and_directory():
    invocation = build_command(BuildSystem.CARGO, 8, Path("/proj"))

    assert invocation.argv == ["cargo", "build"]


def test_make_command_with_threads_and_directory():
    invocation = build_command(BuildSystem.MAKE, 4, Path("/proj"))

    assert invocation.program == "make"
    assert list(invocation.args) == ["-j", "4", "-C", "/proj"]


@pytest.mark.parametrize(
    ("threads", "directory", "expected"),
    [
        (None, None, []),
        (2, None, ["-j", "2"]),
        (None, "/src/out", ["-C", "/src/out"]),
        (16, "/src/out", ["-j", "16", "-C", "/src/out"]),
    ],
)
def test_ninja_command_flags(threads, directory, expected):
    invocation = build_command(BuildSystem.NINJA, threads, directory)

    assert invocation.program == "ninja"
    assert list(invocation.args) == expected


def test_make_command_without_options():
    assert build_command(BuildSystem.MAKE).argv == ["make"]


def test_cmake_command_defaults_to_current_directory():
    invocation = build_command(BuildSystem.CMAKE)

    assert invocation.program == "cmake"
    assert list(invocation.args) == ["-C", "."]


def test_cmake_command_puts_directory_before_threads():
    invocation = build_command(BuildSystem.CMAKE, 3, Path("/proj/build"))

    assert invocation.argv == ["cmake", "-C", "/proj/build", "-j", "3"]


def test_cmake_command_threads_without_directory():
    invocation = build_command(BuildSystem.CMAKE, 6)

    assert invocation.argv == ["cmake", "-C", ".", "-j", "6"]


@pytest.mark.parametrize("build_system", list(BuildSystem))
def test_build_command_is_pure(build_system):
    first = build_command(build_system, 5, Path("/work"))
    second = build_command(build_system, 5, Path("/work"))

    assert first == second
    assert first.argv == second.argv
    assert isinstance(first, BuildInvocation)
