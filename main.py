#!/usr/bin/env python3
"""Run pybld straight from a source checkout."""

import sys
from pathlib import Path

SRC = Path(__file__).resolve().parent / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from pybld.cli import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main())
