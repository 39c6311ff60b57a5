"""Test helper utilities."""

from .console import assert_console_contains, capture_console_output
from .dumps import shadow_dump
from .factories import (
    LINE_WIDTH,
    PackageBuilder,
    assign,
    block,
    file_node,
    func_decl,
    ident,
    inc,
    lit,
    short_decl,
)
from .temp_files import temp_dump_file

__all__ = [
    "LINE_WIDTH",
    "PackageBuilder",
    "assert_console_contains",
    "assign",
    "block",
    "capture_console_output",
    "file_node",
    "func_decl",
    "ident",
    "inc",
    "lit",
    "shadow_dump",
    "short_decl",
    "temp_dump_file",
]
