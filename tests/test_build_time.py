"""
Integration test against a real Dart SDK.

Runs the CLI with the default formatter, which shells out to `dart format`,
and checks the result still has the expected declarations.  Skipped when no
`dart` executable is on PATH.
"""

import shutil
import subprocess
from pathlib import Path

import pytest

from dartgen.__main__ import main

TESTS_DIR = Path(__file__).resolve().parent
MAIN_ZIG = TESTS_DIR / "sources" / "main.zig"

DART = shutil.which("dart")

pytestmark = pytest.mark.skipif(DART is None, reason="dart SDK not installed")


def test_dart_format_accepts_generated_module(tmp_path, capsys):
    out = tmp_path / "bindings.dart"
    assert main([str(MAIN_ZIG), "-q", "--dart", DART, "-o", str(out)]) == 0

    code = out.read_text()
    assert "class ActiveAppState {" in code
    assert '"rr_get_data_path"' in code

    # Already formatted: a second pass must not change anything.
    check = subprocess.run(
        [DART, "format", "--output=none", "--set-exit-if-changed", str(out)],
        capture_output=True,
        text=True,
    )
    assert check.returncode == 0, f"dart format changed output:\n{check.stdout}\n{check.stderr}"
