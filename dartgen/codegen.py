"""
codegen.py — Generate the Dart binding module.

The output has a fixed layout:

    imports
    typedef <Name>Native = ...;      one pair per function,
    typedef <Name> = ...;            in source order
    class ActiveAppState {
      lib / dataPath fields
      one `late final` field per function
      ctx handle
      constructor: lookupFunction for every symbol, then the bootstrap call
    }

All functions are mapped before any text is produced, so an unsupported type
never yields partial output.
"""

import os
import tempfile
from pathlib import Path
from typing import List, Optional

from .errors import BootstrapError, OutputWriteError
from .ir import BindgenConfig
from .parser import extract_functions
from .type_mapper import MappedFunction, map_functions


class CodeGen:
    """Line buffer with indentation support"""

    def __init__(self, indent_str: str = "  "):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str = indent_str

    def line(self, text: str = ""):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append("")

    def lines(self, *texts: str):
        for text in texts:
            self.line(text)

    def indent(self):
        self._indent += 1

    def dedent(self):
        if self._indent > 0:
            self._indent -= 1

    def block(self, header: str, footer: str = "}"):
        """Context manager for brace-delimited blocks"""
        return _BlockContext(self, header, footer)

    def output(self) -> str:
        """Get generated code as string, newline-terminated"""
        return "\n".join(self._lines) + "\n"


class _BlockContext:
    def __init__(self, gen: CodeGen, header: str, footer: str):
        self._gen = gen
        self._header = header
        self._footer = footer

    def __enter__(self):
        self._gen.line(self._header)
        self._gen.indent()
        return self

    def __exit__(self, *args):
        self._gen.dedent()
        self._gen.line(self._footer)


DART_IMPORTS = (
    "import 'dart:developer';",
    "import 'dart:ffi';",
    "",
    "import 'package:ffi/ffi.dart';",
)

_STRING_TYPE = "Pointer<Utf8>"
_HANDLE_TYPE = "Pointer<Void>"


class CodeGenerator:
    """
    Emits the Dart module for a list of mapped functions.

    The bootstrap function (config.bootstrap_name) is called from the
    constructor with the native data path and its length; its result is kept
    in `ctx`.  A null handle is logged, not thrown.
    """

    def __init__(self, functions: List[MappedFunction], config: BindgenConfig):
        self.functions = functions
        self.config = config

    def bootstrap(self) -> MappedFunction:
        """Find the bootstrap function and check it has the expected shape."""
        name = self.config.bootstrap_name
        func = next((f for f in self.functions if f.name == name), None)
        if func is None:
            raise BootstrapError(
                f"bootstrap function '{name}' not found in {self.config.source_name}"
            )

        arg_types = [p.dart_type for p in func.params]
        if arg_types != [_STRING_TYPE, "int"] or func.return_type.dart_type != _HANDLE_TYPE:
            raise BootstrapError(
                f"bootstrap function '{name}' must take (string, length) and "
                f"return *anyopaque, got {func.dart_function_type()}"
            )
        return func

    def generate_dart(self) -> str:
        bootstrap = self.bootstrap()
        gen = CodeGen()

        gen.lines(*DART_IMPORTS)
        gen.line()

        for func in self.functions:
            gen.line(f"typedef {func.native_type_name} = {func.native_function_type()};")
            gen.line(f"typedef {func.type_name} = {func.dart_function_type()};")

        gen.line()
        with gen.block(f"class {self.config.class_name} {{"):
            gen.line("final DynamicLibrary lib;")
            gen.line("final String dataPath;")
            gen.line()

            for func in self.functions:
                gen.line(f"late final {func.type_name} {func.field_name};")

            gen.line()
            gen.line(f"late final {_HANDLE_TYPE} ctx;")
            gen.line()

            ctor = f"{self.config.class_name}({{required this.lib, required this.dataPath}}) {{"
            with gen.block(ctor):
                for func in self.functions:
                    gen.line(
                        f"{func.field_name} = lib.lookupFunction"
                        f'<{func.native_type_name}, {func.type_name}>("{func.name}");'
                    )

                gen.line()
                gen.line("final path = dataPath.toNativeUtf8();")
                gen.line(f"ctx = {bootstrap.field_name}(path, path.length);")
                with gen.block("if (ctx.address == 0) {"):
                    gen.line("log('we have a problem');")

        return gen.output()


def generate_bindings(source_text: str, config: Optional[BindgenConfig] = None) -> str:
    """Run extraction, mapping and emission on Zig source text."""
    config = config or BindgenConfig()
    signatures = extract_functions(source_text, config.prefix)
    mapped = map_functions(signatures, config)
    return CodeGenerator(mapped, config).generate_dart()


def write_output(code: str, out_path: str | Path) -> Path:
    """
    Write generated code to `out_path` and return the path.

    The text goes to a temporary file in the same directory first, so a
    failed write never leaves a truncated file behind.  OS failures are
    raised as OutputWriteError.
    """
    out_path = Path(out_path)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{out_path.name}.", suffix=".tmp", dir=out_path.parent
        )
    except OSError as exc:
        raise OutputWriteError(out_path, exc.strerror or str(exc)) from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(code)
        os.replace(tmp_name, out_path)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise OutputWriteError(out_path, exc.strerror or str(exc)) from exc
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return out_path
