"""
ir.py — Intermediate Representation for zig-dartgen

The IR sits between scanning and code generation.  It is deliberately tiny:
one record per exported Zig function, holding only what the Dart side needs
(the symbol name, argument types in order, and the return type), plus the
configuration that controls naming and the generated state-holder class.

Type tokens are kept as the raw Zig spelling; classification happens in
type_mapper.py so that scanning stays purely syntactic.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


# ---------------------------------------------------------------------------
# Function representation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FunctionSignature:
    """An exported Zig function, e.g. `export fn rr_start(...) *anyopaque`."""

    name: str  # e.g. "rr_start", also the dynamic-library symbol
    args: Tuple[str, ...]  # e.g. ("[*c]const u8", "c_int"); names dropped
    return_type: str  # e.g. "*anyopaque"

    @property
    def arity(self) -> int:
        return len(self.args)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


DEFAULT_PREFIX = "rr"
DEFAULT_CLASS_NAME = "ActiveAppState"


@dataclass
class BindgenConfig:
    """Configuration for one generation run."""

    prefix: str = DEFAULT_PREFIX  # namespace prefix, without the underscore
    class_name: str = DEFAULT_CLASS_NAME  # generated state-holder class
    bootstrap: Optional[str] = None  # defaults to "<prefix>_start"
    source_name: str = "main.zig"

    @property
    def bootstrap_name(self) -> str:
        return self.bootstrap or f"{self.prefix}_start"
