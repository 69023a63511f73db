"""
type_mapper.py — Map Zig FFI type tokens to Dart FFI types

Every type that crosses the boundary has two Dart spellings:
  - the *native* type used in the `NativeFunction` signature (`Int`, `Uint8`,
    `Void`, ...), which fixes the machine-level calling convention
  - the *Dart* type used in the callable signature (`int`, `void`, ...)

Pointers keep the same spelling on both sides.

The token grammar is closed.  A token that is not in the table below makes the
whole run fail; there is no fallback type.  Zig's optional marker `?` is
stripped first, so `?*anyopaque` and `*anyopaque` map identically: nullability
is not represented in the bindings.

Fixed-width integers are limited to 8, 16, 32 and 64 bits, the widths dart:ffi
has native types for; `u7` or `u128` is rejected like any other unknown token.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .errors import UnsupportedTypeError
from .ir import BindgenConfig, FunctionSignature
from .naming import field_name, native_alias_name, type_alias_name


@dataclass(frozen=True)
class DartTypeMapping:
    """How a single Zig type maps to Dart."""

    native_type: str  # e.g. "Uint8"
    dart_type: str  # e.g. "int"


# ---------------------------------------------------------------------------
# The mapping table
# ---------------------------------------------------------------------------

_UTF8 = DartTypeMapping("Pointer<Utf8>", "Pointer<Utf8>")

TYPE_MAP: Dict[str, DartTypeMapping] = {
    # --- C strings (unknown length and sentinel-terminated) ---
    "[*c]const u8": _UTF8,
    "[*:0]const u8": _UTF8,
    # --- opaque handles ---
    "*anyopaque": DartTypeMapping("Pointer<Void>", "Pointer<Void>"),
    # --- void (only meaningful as a return type) ---
    "void": DartTypeMapping("Void", "void"),
    # --- C ABI integers ---
    "c_int": DartTypeMapping("Int", "int"),
}

# Fixed-width integers; only the widths dart:ffi has native types for.
_INT_RE = re.compile(r"^(?P<sign>[ui])(?P<bits>8|16|32|64)$")


def strip_optional(token: str) -> str:
    """Remove every Zig optional marker, e.g. "?*anyopaque" -> "*anyopaque"."""
    return token.replace("?", "")


def map_type(token: str, function: Optional[str] = None) -> DartTypeMapping:
    """
    Look up the Dart mapping for a Zig type token.

    Raises UnsupportedTypeError (naming `function` when given) if the token
    is outside the supported grammar.
    """
    bare = strip_optional(token).strip()

    mapping = TYPE_MAP.get(bare)
    if mapping is not None:
        return mapping

    match = _INT_RE.match(bare)
    if match:
        bits = match.group("bits")
        if match.group("sign") == "i":
            return DartTypeMapping(f"Int{bits}", "int")
        return DartTypeMapping(f"Uint{bits}", "int")

    raise UnsupportedTypeError(token, function)


def native_type(token: str) -> str:
    """e.g. "u8" -> "Uint8", "c_int" -> "Int" """
    return map_type(token).native_type


def dart_type(token: str) -> str:
    """e.g. "u8" -> "int", "void" -> "void" """
    return map_type(token).dart_type


# ---------------------------------------------------------------------------
# Function mapping
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MappedFunction:
    """A fully mapped function ready for code generation."""

    signature: FunctionSignature
    type_name: str  # e.g. "RRStart"
    native_type_name: str  # e.g. "RRStartNative"
    field_name: str  # e.g. "rrStart"
    return_type: DartTypeMapping
    params: Tuple[DartTypeMapping, ...]

    @property
    def name(self) -> str:
        return self.signature.name

    def native_function_type(self) -> str:
        """e.g. "Pointer<Void> Function(Pointer<Utf8>, Int)" """
        args = ", ".join(p.native_type for p in self.params)
        return f"{self.return_type.native_type} Function({args})"

    def dart_function_type(self) -> str:
        """e.g. "Pointer<Void> Function(Pointer<Utf8>, int)" """
        args = ", ".join(p.dart_type for p in self.params)
        return f"{self.return_type.dart_type} Function({args})"


def map_function(sig: FunctionSignature, config: BindgenConfig) -> MappedFunction:
    """
    Map an extracted signature to its Dart equivalent.

    Raises UnsupportedTypeError if the return type or any argument type can't
    be mapped; the error names the function.
    """
    return_type = map_type(sig.return_type, sig.name)
    params = tuple(map_type(arg, sig.name) for arg in sig.args)

    return MappedFunction(
        signature=sig,
        type_name=type_alias_name(sig.name, config.prefix),
        native_type_name=native_alias_name(sig.name, config.prefix),
        field_name=field_name(sig.name),
        return_type=return_type,
        params=params,
    )


def map_functions(
    signatures: List[FunctionSignature], config: BindgenConfig
) -> List[MappedFunction]:
    """Map every signature, in order.  The first failure aborts the run."""
    return [map_function(sig, config) for sig in signatures]
