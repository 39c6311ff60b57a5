"""Ready-made resolved package dumps.

shadow_dump() describes this file (tabs are one byte):

     1  package b
     2
     3  func F() {
     4  	x := 0
     5  	{
     6  		x := 1
     7  		x = 2
     8  	}
     9  	_ = x
    10  }

The file is registered first, so its base is 1 and position == offset + 1.
"""

from typing import Any

LINE_STARTS = [0, 10, 11, 22, 30, 33, 42, 50, 53, 60]
SIZE = 62


def ident(name: str, pos: int, **resolution: Any) -> dict[str, Any]:
    return {"node": "Ident", "name": name, "name_pos": pos, **resolution}


def lit(value: str, pos: int) -> dict[str, Any]:
    return {"node": "BasicLit", "value": value, "value_pos": pos}


def assign(lhs: list[dict[str, Any]], tok_pos: int, tok: str, rhs: list[dict[str, Any]]) -> dict[str, Any]:
    return {"node": "AssignStmt", "lhs": lhs, "tok_pos": tok_pos, "tok": tok, "rhs": rhs}


def shadow_dump(*, inner_written: bool = True, package: str = "example.com/b") -> dict[str, Any]:
    """Build the dump above; without the inner write (line 7) nothing is reported."""
    inner_stmts = [assign([ident("x", 36, **{"def": 1})], 38, ":=", [lit("1", 41)])]
    if inner_written:
        inner_stmts.append(assign([ident("x", 45, use=1)], 47, "=", [lit("2", 49)]))

    body = {
        "node": "BlockStmt",
        "lbrace": 21,
        "stmts": [
            assign([ident("x", 24, **{"def": 0})], 26, ":=", [lit("0", 29)]),
            {"node": "BlockStmt", "lbrace": 32, "stmts": inner_stmts, "rbrace": 52},
            assign([ident("_", 55)], 57, "=", [ident("x", 59, use=0)]),
        ],
        "rbrace": 61,
    }
    syntax = {
        "node": "File",
        "package_pos": 1,
        "name": ident("b", 9),
        "decls": [{"node": "FuncDecl", "func_pos": 12, "name": ident("F", 17, **{"def": 2}), "body": body}],
    }
    return {
        "package": package,
        "files": [{"name": "b.go", "size": SIZE, "line_starts": LINE_STARTS, "syntax": syntax}],
        "types": [{"kind": "basic", "name": "int"}, {"kind": "signature"}],
        "scopes": [
            {"parent": None, "comment": "package"},
            {"parent": 0, "pos": 12, "end": 62, "comment": "function"},
            {"parent": 1, "pos": 32, "end": 53, "comment": "block"},
        ],
        "symbols": [
            {"name": "x", "kind": "var", "type": 0, "pos": 24, "scope": 1, "scope_pos": 30},
            {"name": "x", "kind": "var", "type": 0, "pos": 36, "scope": 2, "scope_pos": 42},
            {"name": "F", "kind": "func", "type": 1, "pos": 17, "scope": 0, "scope_pos": 0},
        ],
    }
