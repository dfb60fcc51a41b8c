#!/usr/bin/env python3
"""Build whatever project the current directory belongs to."""

import importlib.metadata
import os
import shlex
import subprocess
import sys
from typing import Optional, Sequence, TypeAlias, TypedDict, TypeVar

from pybld.commands import build_command
from pybld.detector import SearchResult, find_build_directory, find_in_directory


PROGRAM_NAME = "pybld"
DEFAULT_VERSION = "0.1.0"
SEARCH_FULL = "full"
SEARCH_CWD = "cwd"
SEARCH_MODES = (SEARCH_FULL, SEARCH_CWD)
THREADS_ENV_VAR = "PYBLD_THREADS"
SEARCH_ENV_VAR = "PYBLD_SEARCH"
EXIT_USAGE = 2
EXIT_CANNOT_EXECUTE = 127
NO_BUILD_SYSTEM_MESSAGE = "No build system found"


class DispatchConfig(TypedDict):
    threads: int
    search: str
    dry_run: bool


T = TypeVar("T")
ValidationResult: TypeAlias = tuple[int, Optional[T]]


def info(message: str) -> None:
    """Print a standard informational message."""
    print(f"[{PROGRAM_NAME}] {message}")


def error(message: str) -> None:
    """Print a standardized error message to stderr."""
    print(f"error: {message}", file=sys.stderr)


def _exit_code(returncode: int) -> int:
    if returncode < 0:
        return 128 + abs(returncode)
    return returncode


def run_cmd(cmd: Sequence[str]) -> int:
    """Run a subprocess command with inherited stdio and return the exit code."""
    print("+", shlex.join(cmd), flush=True)
    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as exc:
        code = _exit_code(exc.returncode)
        if exc.returncode < 0:
            error(f"command terminated by signal {-exc.returncode}")
        else:
            error(f"command failed with exit code {code}")
        return code
    except OSError as exc:
        error(f"failed to run {cmd[0]}: {exc}")
        return EXIT_CANNOT_EXECUTE
    return 0


def default_threads() -> int:
    return os.cpu_count() or 1


def _default_config() -> DispatchConfig:
    return {
        "threads": default_threads(),
        "search": SEARCH_FULL,
        "dry_run": False,
    }


def _validate_threads(value: Optional[str], source: str) -> ValidationResult[int]:
    if value is None:
        return 0, None
    try:
        threads = int(value.strip())
    except ValueError:
        error(f"{source} must be a positive integer; got '{value}'")
        return 1, None
    if threads < 1:
        error(f"{source} must be a positive integer; got '{value}'")
        return 1, None
    return 0, threads


def _validate_search_mode(value: Optional[str], source: str) -> ValidationResult[str]:
    if value is None:
        return 0, None
    mode = value.strip().lower()
    if mode not in SEARCH_MODES:
        error(f"{source} must be one of {', '.join(SEARCH_MODES)}; got '{value}'")
        return 1, None
    return 0, mode


def _apply_env_overrides(config: DispatchConfig) -> int:
    threads_override = os.environ.get(THREADS_ENV_VAR)
    if threads_override:
        code, threads = _validate_threads(threads_override, THREADS_ENV_VAR)
        if code != 0 or threads is None:
            return 1
        config["threads"] = threads
    search_override = os.environ.get(SEARCH_ENV_VAR)
    if search_override:
        code, mode = _validate_search_mode(search_override, SEARCH_ENV_VAR)
        if code != 0 or mode is None:
            return 1
        config["search"] = mode
    return 0


def find_project(config: DispatchConfig) -> SearchResult:
    """Run detection using the configured search mode."""
    if config["search"] == SEARCH_CWD:
        return find_in_directory()
    return find_build_directory()


def dispatch(config: DispatchConfig) -> int:
    """Detect the build system, then run (or print) its build command."""
    try:
        found = find_project(config)
    except OSError as exc:
        location = exc.filename or "the current directory"
        error(f"failed to read {location}: {exc.strerror or exc}")
        return 1
    if found is None:
        print(NO_BUILD_SYSTEM_MESSAGE)
        return 0

    build_system, directory = found
    info(f"found {build_system.value} project in {directory}")
    invocation = build_command(build_system, config["threads"], directory)
    if config["dry_run"]:
        print(shlex.join(invocation.argv))
        return 0
    return run_cmd(invocation.argv)


def usage() -> None:
    print(f"usage: {PROGRAM_NAME} [options]")
    print("")
    print("Detect the project's build system (make, ninja, cargo, cmake) and build it.")
    print("")
    print("options:")
    print("  -t, --threads <n>  number of parallel jobs (default: logical CPU count)")
    print("  --no-search        only look in the current directory")
    print("  -n, --dry-run      print the build command instead of running it")
    print("  -v, --version      show the version and exit")
    print("  -h, --help         show this help text")
    print("")
    print("environment:")
    print(f"  {THREADS_ENV_VAR}      default thread count")
    print(f"  {SEARCH_ENV_VAR}       '{SEARCH_FULL}' (cwd, build/, parents) or '{SEARCH_CWD}'")
    print("")
    print("examples:")
    print(f"  {PROGRAM_NAME}")
    print(f"  {PROGRAM_NAME} -t 4")
    print(f"  {PROGRAM_NAME} --threads=16 --dry-run")


def _version() -> str:
    try:
        return importlib.metadata.version(PROGRAM_NAME)
    except importlib.metadata.PackageNotFoundError:
        return DEFAULT_VERSION


def main() -> int:
    args = sys.argv[1:]
    if any(arg in {"-h", "--help"} for arg in args):
        usage()
        return 0
    if any(arg in {"-v", "--version"} for arg in args):
        print(f"{PROGRAM_NAME} {_version()}")
        return 0

    config = _default_config()
    if _apply_env_overrides(config) != 0:
        return EXIT_USAGE

    index = 0
    while index < len(args):
        arg = args[index]
        if arg in {"-t", "--threads"}:
            if index + 1 >= len(args):
                error("usage: --threads <n>")
                return EXIT_USAGE
            code, threads = _validate_threads(args[index + 1], "--threads")
            if code != 0 or threads is None:
                return EXIT_USAGE
            config["threads"] = threads
            index += 2
            continue
        if arg.startswith("--threads="):
            code, threads = _validate_threads(arg.split("=", 1)[1], "--threads")
            if code != 0 or threads is None:
                return EXIT_USAGE
            config["threads"] = threads
            index += 1
            continue
        if arg == "--no-search":
            config["search"] = SEARCH_CWD
            index += 1
            continue
        if arg in {"-n", "--dry-run"}:
            config["dry_run"] = True
            index += 1
            continue
        error(f"unknown option '{arg}'")
        usage()
        return EXIT_USAGE

    return dispatch(config)


if __name__ == "__main__":
    raise SystemExit(main())
