"""
errors.py — Failure taxonomy for zig-dartgen.

Every error carries the process exit code the CLI should return for it, so
`__main__` can map failures to codes without a lookup table.
"""

from typing import Optional


class BindgenError(Exception):
    """Base class for all generation failures."""

    exit_code = 1


class SourceReadError(BindgenError):
    """The Zig source file could not be read."""

    exit_code = 1

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read {path}: {reason}")


class UnsupportedTypeError(BindgenError):
    """A type token outside the supported grammar was found."""

    exit_code = 2

    def __init__(self, token: str, function: Optional[str] = None):
        self.token = token
        self.function = function
        where = f" in '{function}'" if function else ""
        super().__init__(f"Unexpected type '{token}'{where}")


class FormatterError(BindgenError):
    """`dart format` failed; the unformatted text was still valid."""

    exit_code = 3


class BootstrapError(BindgenError):
    """The bootstrap entry point is missing or has the wrong shape."""

    exit_code = 4


class OutputWriteError(BindgenError):
    """An output file (bindings or JSON dump) could not be written."""

    exit_code = 5

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot write {path}: {reason}")
