"""Tests for the exported-function scanner."""

import json

import pytest

from dartgen.errors import SourceReadError
from dartgen.ir import FunctionSignature
from dartgen.parser import (
    dump_signatures_json,
    extract_functions,
    parse_params,
    parse_source,
    signatures_to_json,
)


def test_start_declaration():
    src = "export fn rr_start(path: [*c]const u8, len: c_int) *anyopaque { return undefined; }"
    assert extract_functions(src) == [
        FunctionSignature("rr_start", ("[*c]const u8", "c_int"), "*anyopaque")
    ]


def test_declarations_keep_source_order():
    src = "\n".join(
        [
            "export fn rr_a() void {}",
            "export fn rr_zzz() void {}",
            "export fn rr_m() void {}",
        ]
    )
    assert [f.name for f in extract_functions(src)] == ["rr_a", "rr_zzz", "rr_m"]


def test_zero_parameters():
    (func,) = extract_functions("export fn rr_version() u16 {\n    return 1;\n}\n")
    assert func.args == ()
    assert func.arity == 0
    assert func.return_type == "u16"


def test_skips_wrong_prefix_and_non_exported():
    src = """
export fn other_start(path: [*c]const u8, len: c_int) *anyopaque {}
fn rr_private(x: u8) u8 {}
pub fn rr_public(x: u8) u8 {}
export fn rrnounderscore() void {}
export fn rr_kept() void {}
"""
    assert [f.name for f in extract_functions(src)] == ["rr_kept"]


@pytest.mark.parametrize(
    "header",
    [
        "export fn rr_bad(a u8) void {}",
        "export fn rr_bad(a: u8,, b: u8) void {}",
        "export fn rr_bad(: u8) void {}",
        "export fn rr_bad(a: u8 void {}",
        "export fn rr_bad(a: u8) {}",
        "export fn rr_bad(cb: *const fn (u8) void) void {}",
    ],
)
def test_malformed_headers_are_skipped(header):
    assert extract_functions(header + "\nexport fn rr_ok() void {}\n") == [
        FunctionSignature("rr_ok", (), "void")
    ]


def test_commented_out_declaration_is_skipped():
    src = "// export fn rr_old() void {}\nexport fn rr_new() void {}\n"
    assert [f.name for f in extract_functions(src)] == ["rr_new"]


def test_pub_export_and_multiline_params():
    src = """
pub export fn rr_tick(
    ctx: *anyopaque,
    dt_ms: u32,
) void {
}
"""
    assert extract_functions(src) == [
        FunctionSignature("rr_tick", ("*anyopaque", "u32"), "void")
    ]


def test_comment_after_comma_keeps_function():
    src = """
export fn rr_tick(
    ctx: *anyopaque, // state handle
    dt_ms: u32,
) void {
}
"""
    assert extract_functions(src) == [
        FunctionSignature("rr_tick", ("*anyopaque", "u32"), "void")
    ]


def test_comment_after_last_param_is_not_part_of_type():
    src = """
export fn rr_start(
    path: [*c]const u8,
    len: c_int // byte length (without sentinel)
) *anyopaque {
}
"""
    assert extract_functions(src) == [
        FunctionSignature("rr_start", ("[*c]const u8", "c_int"), "*anyopaque")
    ]


def test_parse_params_ignores_comments():
    assert parse_params("\n  a: u8, // first\n  // spare\n  b: c_int // last\n") == ["u8", "c_int"]


def test_types_are_captured_without_validation():
    (func,) = extract_functions("export fn rr_scale(ctx: ?*anyopaque, by: f32) f64 {}")
    assert func.args == ("?*anyopaque", "f32")
    assert func.return_type == "f64"


def test_custom_prefix():
    src = "export fn rr_a() void {}\nexport fn app_b() void {}\n"
    assert [f.name for f in extract_functions(src, prefix="app")] == ["app_b"]


def test_parse_params():
    assert parse_params("") == []
    assert parse_params("  \n ") == []
    assert parse_params("a: u8, b: [*:0]const u8,") == ["u8", "[*:0]const u8"]
    assert parse_params("comptime T: u8") == ["u8"]
    assert parse_params("a: [*c]const   u8") == ["[*c]const u8"]
    assert parse_params("a u8") is None


def test_parse_source_reads_file(tmp_path):
    path = tmp_path / "main.zig"
    path.write_text("export fn rr_start(path: [*c]const u8, len: c_int) *anyopaque {}\n")
    assert [f.name for f in parse_source(path)] == ["rr_start"]


def test_parse_source_missing_file(tmp_path):
    with pytest.raises(SourceReadError) as excinfo:
        parse_source(tmp_path / "missing.zig")
    assert excinfo.value.exit_code == 1
    assert "missing.zig" in str(excinfo.value)


def test_parse_source_directory(tmp_path):
    with pytest.raises(SourceReadError):
        parse_source(tmp_path)


def test_parse_source_not_utf8(tmp_path):
    path = tmp_path / "main.zig"
    path.write_bytes(b"\xff\xfe\x00export fn")
    with pytest.raises(SourceReadError):
        parse_source(path)


def test_signatures_json(tmp_path):
    funcs = [FunctionSignature("rr_start", ("[*c]const u8", "c_int"), "*anyopaque")]
    expected = [
        {"name": "rr_start", "args": ["[*c]const u8", "c_int"], "return_type": "*anyopaque"}
    ]
    assert json.loads(signatures_to_json(funcs)) == expected

    out = dump_signatures_json(funcs, tmp_path / "debug" / "signatures.json")
    assert json.loads(out.read_text()) == expected
