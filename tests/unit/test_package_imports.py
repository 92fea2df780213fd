#!/usr/bin/env python3
"""
Import every cashbook module in a fresh interpreter.

Run out of process so nothing imported by conftest or earlier tests can
hide an error raised while a module body executes.
"""

import os
import pkgutil
import subprocess
import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parents[2] / "src"


def _module_names() -> list[str]:
    return ["cashbook"] + [
        info.name for info in pkgutil.walk_packages([str(SRC_DIR / "cashbook")], prefix="cashbook.")
    ]


@pytest.mark.unit
@pytest.mark.parametrize("module", _module_names())
def test_module_imports_cleanly(module):
    env = {**os.environ, "PYTHONPATH": str(SRC_DIR)}

    completed = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        capture_output=True,
        text=True,
        env=env,
        timeout=60,
    )

    assert completed.returncode == 0, completed.stderr
