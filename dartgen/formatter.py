"""
formatter.py — Post-process generated Dart with an external formatter.

Formatting is optional.  The generator's output is valid Dart before
formatting, so a formatter failure is reported separately (FormatterError,
exit code 3) from generation failures.
"""

import subprocess
import tempfile
from pathlib import Path

from .errors import FormatterError


class Formatter:
    """Pass-through formatter; the interface every formatter implements."""

    name = "none"

    def format(self, text: str) -> str:
        return text


class DartFormatter(Formatter):
    """Runs `dart format` on a temporary copy of the text."""

    name = "dart format"

    def __init__(self, executable: str = "dart", timeout: float | None = 60):
        self.executable = executable
        self.timeout = timeout

    def format(self, text: str) -> str:
        with tempfile.TemporaryDirectory(prefix="dartgen-") as tmp_dir:
            path = Path(tmp_dir) / "bindings.dart"
            path.write_text(text, encoding="utf-8")

            try:
                result = subprocess.run(
                    [self.executable, "format", str(path)],
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                )
            except FileNotFoundError:
                raise FormatterError(f"'{self.executable}' not found on PATH") from None
            except subprocess.TimeoutExpired:
                raise FormatterError(
                    f"{self.name} timed out after {self.timeout}s"
                ) from None

            if result.returncode != 0:
                raise FormatterError(
                    f"{self.name} failed (exit {result.returncode}):\n"
                    f"{result.stderr.strip() or result.stdout.strip()}"
                )

            return path.read_text(encoding="utf-8")
