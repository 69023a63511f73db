"""zig-dartgen: generate Dart FFI bindings from exported Zig functions."""

__version__ = "0.1.0"
