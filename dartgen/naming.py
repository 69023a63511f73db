"""
naming.py — Identifier transforms for generated Dart code.

The generated identifiers follow ActiveSupport's `camelize`, which is what
the Dart side of the project was written against:

    to_upper_camel("RR_get_data_path")  -> "RRGetDataPath"
    to_lower_camel("rr_get_data_path")  -> "rrGetDataPath"

Each `_word` segment is capitalized with `str.capitalize()`, so the rest of
the segment is lower-cased ("rr_getURL" -> "RrGeturl").  Identifier collisions
in the output follow directly from these rules; change them with care.
"""

import re

_LEADING_LOWER_RE = re.compile(r"^[a-z\d]*")
_SEGMENT_RE = re.compile(r"_([a-z\d]*)", re.IGNORECASE)


def _capitalize_segments(name: str) -> str:
    return _SEGMENT_RE.sub(lambda m: m.group(1).capitalize(), name)


def to_upper_camel(name: str) -> str:
    """e.g. "RR_start" -> "RRStart", "get_data" -> "GetData" """
    head = _LEADING_LOWER_RE.sub(lambda m: m.group(0).capitalize(), name, count=1)
    return _capitalize_segments(head)


def to_lower_camel(name: str) -> str:
    """e.g. "rr_start" -> "rrStart", "RR_start" -> "rRStart" """
    head = name[:1].lower() + name[1:]
    return _capitalize_segments(head)


def type_alias_name(function_name: str, prefix: str) -> str:
    """
    Dart typedef name for a function: the namespace prefix is upper-cased,
    then the whole name is upper-camel-cased.

    e.g. ("rr_start", "rr") -> "RRStart"
    """
    if function_name.startswith(prefix):
        function_name = prefix.upper() + function_name[len(prefix) :]
    return to_upper_camel(function_name)


def native_alias_name(function_name: str, prefix: str) -> str:
    """e.g. ("rr_start", "rr") -> "RRStartNative" """
    return type_alias_name(function_name, prefix) + "Native"


def field_name(function_name: str) -> str:
    """e.g. "rr_start" -> "rrStart" (prefix kept)"""
    return to_lower_camel(function_name)
