"""
ir_printer.py — Pretty-print IR for debugging

This utility provides human-readable output of the extracted signatures and
how each one maps to Dart.  Backs the --emit-ir flag.
"""

from typing import List

from .ir import BindgenConfig, FunctionSignature
from .type_mapper import MappedFunction


class IRPrinter:
    """
    Pretty-prints IR to text format.

    Output format:
      Functions:
        Function(name="rr_start", args=["[*c]const u8", "c_int"], ret="*anyopaque")

      Dart Mappings:
        RRStartNative = Pointer<Void> Function(Pointer<Utf8>, Int)
        RRStart = Pointer<Void> Function(Pointer<Utf8>, int)  [rrStart]
    """

    def __init__(
        self,
        config: BindgenConfig,
        functions: List[FunctionSignature],
        mapped: List[MappedFunction] | None = None,
    ):
        self.config = config
        self.functions = functions
        self.mapped = mapped or []

    def print_all(self) -> str:
        """Print entire IR to string."""
        lines: List[str] = []

        lines.append("=" * 70)
        lines.append(f"IR for {self.config.source_name}")
        lines.append("=" * 70)
        lines.append("")

        lines.append("Functions:")
        lines.append("-" * 70)
        if self.functions:
            for func in self.functions:
                lines.append(self._format_function(func))
        else:
            lines.append("  (none)")
        lines.append("")

        lines.append("Dart Mappings:")
        lines.append("-" * 70)
        if self.mapped:
            for func in self.mapped:
                lines.extend(self._format_mapping(func))
        else:
            lines.append("  (none)")
        lines.append("")

        lines.append(f"Bootstrap: {self.config.bootstrap_name}")
        lines.append("")

        return "\n".join(lines)

    def _format_function(self, func: FunctionSignature) -> str:
        """Format a single signature for display."""
        args_str = ", ".join(f'"{a}"' for a in func.args)
        return f'  Function(name="{func.name}", args=[{args_str}], ret="{func.return_type}")'

    def _format_mapping(self, func: MappedFunction) -> List[str]:
        return [
            f"  {func.native_type_name} = {func.native_function_type()}",
            f"  {func.type_name} = {func.dart_function_type()}  [{func.field_name}]",
        ]


def print_ir(
    config: BindgenConfig,
    functions: List[FunctionSignature],
    mapped: List[MappedFunction] | None = None,
) -> str:
    """Convenience function to print the IR of one run."""
    printer = IRPrinter(config, functions, mapped)
    return printer.print_all()
