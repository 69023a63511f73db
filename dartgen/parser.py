"""
parser.py — Extract exported function signatures from Zig source.

This is a top-level scan, not a Zig parser.  It recognises exactly one shape,
the header of an exported function carrying the namespace prefix:

    export fn rr_start(path: [*c]const u8, len: c_int) *anyopaque {

Anything else in the file is ignored, including headers that almost match
(wrong prefix, commented out, a parameter that is not `name: Type`).  Types
are captured as raw text; type_mapper.py decides whether they are supported,
so an unknown type in a well-formed header still fails the run later.

The scanner produces a list of `FunctionSignature` records in source order.
It can also dump them as JSON for debugging.
"""

import json
import re
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

from .errors import OutputWriteError, SourceReadError
from .ir import DEFAULT_PREFIX, FunctionSignature


# ---------------------------------------------------------------------------
# Declaration grammar
# ---------------------------------------------------------------------------

# The parameter list may span lines but holds no parentheses (no fn-typed
# parameters); the return type must sit on the header line.
_HEADER_TEMPLATE = (
    r"^[ \t]*(?:pub[ \t]+)?export[ \t]+fn[ \t]+"
    r"(?P<name>{prefix}_\w+)[ \t]*"
    r"\((?P<args>[^()]*)\)[ \t]*"
    r"(?P<return_type>[^\s{{}};][^{{}};\n]*?)[ \t]*\{{"
)

# Zig has only line comments.  Stripping one inside a string literal is
# harmless: header lines never hold strings.
_LINE_COMMENT_RE = re.compile(r"//[^\n]*")

_PARAM_RE = re.compile(
    r"^(?:comptime\s+|noalias\s+)?(?P<name>[A-Za-z_]\w*)\s*:\s*(?P<type>\S.*?)$",
    re.DOTALL,
)


def _header_re(prefix: str) -> "re.Pattern[str]":
    return re.compile(
        _HEADER_TEMPLATE.format(prefix=re.escape(prefix)), re.MULTILINE
    )


def parse_params(args_text: str) -> Optional[List[str]]:
    """
    Split a raw parameter list into its type tokens, in order.

    Returns None if any parameter is not a `name: Type` pair.  An empty list
    (or only whitespace) yields no parameters; a trailing comma is allowed.
    `//` comments between parameters are ignored.
    """
    args_text = _LINE_COMMENT_RE.sub("", args_text)
    pieces = [p.strip() for p in args_text.split(",")]
    if pieces and pieces[-1] == "":
        pieces.pop()

    types: List[str] = []
    for piece in pieces:
        match = _PARAM_RE.match(piece)
        if match is None:
            return None
        types.append(" ".join(match.group("type").split()))
    return types


def extract_functions(text: str, prefix: str = DEFAULT_PREFIX) -> List[FunctionSignature]:
    """
    Scan Zig source text and return every exported, prefixed function.

    Parameters
    ----------
    text   : the Zig source
    prefix : namespace prefix without the trailing underscore, e.g. "rr"

    Returns
    -------
    Signatures in the order they appear in the source.
    """
    functions: List[FunctionSignature] = []
    text = _LINE_COMMENT_RE.sub("", text)

    for match in _header_re(prefix).finditer(text):
        args = parse_params(match.group("args"))
        if args is None:
            continue

        functions.append(
            FunctionSignature(
                name=match.group("name"),
                args=tuple(args),
                return_type=match.group("return_type").strip(),
            )
        )

    return functions


def read_source(source_path: str | Path) -> str:
    """Read a Zig source file, raising SourceReadError on any failure."""
    source_path = Path(source_path)
    try:
        return source_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SourceReadError(source_path, "no such file") from None
    except IsADirectoryError:
        raise SourceReadError(source_path, "is a directory") from None
    except UnicodeDecodeError as exc:
        raise SourceReadError(source_path, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise SourceReadError(source_path, exc.strerror or str(exc)) from exc


def parse_source(
    source_path: str | Path, prefix: str = DEFAULT_PREFIX
) -> List[FunctionSignature]:
    """Read a Zig source file and extract its exported functions."""
    return extract_functions(read_source(source_path), prefix)


# ---------------------------------------------------------------------------
# JSON serialisation (intermediate file for debugging)
# ---------------------------------------------------------------------------


def signatures_to_json(functions: List[FunctionSignature], pretty: bool = True) -> str:
    """Serialize extracted signatures to JSON."""
    return json.dumps([asdict(f) for f in functions], indent=2 if pretty else None)


def dump_signatures_json(functions: List[FunctionSignature], out_path: str | Path) -> Path:
    """Write the signatures JSON to a file and return the path."""
    out_path = Path(out_path)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(signatures_to_json(functions))
    except OSError as exc:
        raise OutputWriteError(out_path, exc.strerror or str(exc)) from exc
    return out_path
