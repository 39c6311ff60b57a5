"""Syntax tree nodes for a block-scoped language with short variable declarations.

The tree is produced by an external front-end; shadowcheck only reads it.
Nodes store the token positions they own and compute their overall span
(pos, end) from their children, so a statement's span always covers every
identifier inside it.

Nodes compare and hash by identity: two structurally equal identifiers at the
same position are still distinct occurrences, and the resolution maps in
TypesInfo are keyed by the node object itself.
"""

from dataclasses import dataclass

from shadowcheck.positions import NO_POS

DEFINE = ":="
ASSIGN = "="


class Node:
    """Base class of all syntax nodes."""

    @property
    def pos(self) -> int:
        raise NotImplementedError

    @property
    def end(self) -> int:
        raise NotImplementedError


class Expr(Node):
    """Base class of expressions (including type expressions)."""


class Stmt(Node):
    """Base class of statements."""


class Spec(Node):
    """Base class of specs inside a general declaration."""


class Decl(Node):
    """Base class of top-level declarations."""


# Expressions


@dataclass(frozen=True, eq=False)
class Ident(Expr):
    name: str
    name_pos: int

    @property
    def pos(self) -> int:
        return self.name_pos

    @property
    def end(self) -> int:
        return self.name_pos + len(self.name)


@dataclass(frozen=True, eq=False)
class BasicLit(Expr):
    value: str
    value_pos: int

    @property
    def pos(self) -> int:
        return self.value_pos

    @property
    def end(self) -> int:
        return self.value_pos + len(self.value)


@dataclass(frozen=True, eq=False)
class BadExpr(Expr):
    """Placeholder for an expression the front-end could not build."""

    from_pos: int
    to_pos: int

    @property
    def pos(self) -> int:
        return self.from_pos

    @property
    def end(self) -> int:
        return self.to_pos


@dataclass(frozen=True, eq=False)
class ParenExpr(Expr):
    lparen: int
    x: Expr
    rparen: int

    @property
    def pos(self) -> int:
        return self.lparen

    @property
    def end(self) -> int:
        return self.rparen + 1


@dataclass(frozen=True, eq=False)
class SelectorExpr(Expr):
    x: Expr
    sel: Ident

    @property
    def pos(self) -> int:
        return self.x.pos

    @property
    def end(self) -> int:
        return self.sel.end


@dataclass(frozen=True, eq=False)
class IndexExpr(Expr):
    x: Expr
    index: Expr
    rbrack: int

    @property
    def pos(self) -> int:
        return self.x.pos

    @property
    def end(self) -> int:
        return self.rbrack + 1


@dataclass(frozen=True, eq=False)
class StarExpr(Expr):
    star: int
    x: Expr

    @property
    def pos(self) -> int:
        return self.star

    @property
    def end(self) -> int:
        return self.x.end


@dataclass(frozen=True, eq=False)
class UnaryExpr(Expr):
    op_pos: int
    op: str
    x: Expr

    @property
    def pos(self) -> int:
        return self.op_pos

    @property
    def end(self) -> int:
        return self.x.end


@dataclass(frozen=True, eq=False)
class BinaryExpr(Expr):
    x: Expr
    op: str
    y: Expr

    @property
    def pos(self) -> int:
        return self.x.pos

    @property
    def end(self) -> int:
        return self.y.end


@dataclass(frozen=True, eq=False)
class CallExpr(Expr):
    fun: Expr
    args: tuple[Expr, ...]
    rparen: int

    @property
    def pos(self) -> int:
        return self.fun.pos

    @property
    def end(self) -> int:
        return self.rparen + 1


@dataclass(frozen=True, eq=False)
class TypeAssertExpr(Expr):
    """A type-narrowing expression x.(T); type is None for x.(type) in a type switch."""

    x: Expr
    type: Expr | None
    rparen: int

    @property
    def pos(self) -> int:
        return self.x.pos

    @property
    def end(self) -> int:
        return self.rparen + 1


@dataclass(frozen=True, eq=False)
class Field(Node):
    names: tuple[Ident, ...]
    type: Expr

    @property
    def pos(self) -> int:
        return self.names[0].pos if self.names else self.type.pos

    @property
    def end(self) -> int:
        return self.type.end


@dataclass(frozen=True, eq=False)
class FuncLit(Expr):
    func_pos: int
    params: tuple[Field, ...]
    results: tuple[Field, ...]
    body: "BlockStmt"

    @property
    def pos(self) -> int:
        return self.func_pos

    @property
    def end(self) -> int:
        return self.body.end


# Statements


@dataclass(frozen=True, eq=False)
class BadStmt(Stmt):
    from_pos: int
    to_pos: int

    @property
    def pos(self) -> int:
        return self.from_pos

    @property
    def end(self) -> int:
        return self.to_pos


@dataclass(frozen=True, eq=False)
class AssignStmt(Stmt):
    """Assignment or short variable declaration; tok is ":=", "=", "+=", etc."""

    lhs: tuple[Expr, ...]
    tok_pos: int
    tok: str
    rhs: tuple[Expr, ...]

    @property
    def pos(self) -> int:
        return self.lhs[0].pos

    @property
    def end(self) -> int:
        return self.rhs[-1].end

    @property
    def is_short_decl(self) -> bool:
        return self.tok == DEFINE


@dataclass(frozen=True, eq=False)
class IncDecStmt(Stmt):
    x: Expr
    tok_pos: int
    tok: str  # "++" or "--"

    @property
    def pos(self) -> int:
        return self.x.pos

    @property
    def end(self) -> int:
        return self.tok_pos + 2


@dataclass(frozen=True, eq=False)
class ExprStmt(Stmt):
    x: Expr

    @property
    def pos(self) -> int:
        return self.x.pos

    @property
    def end(self) -> int:
        return self.x.end


@dataclass(frozen=True, eq=False)
class BlockStmt(Stmt):
    lbrace: int
    stmts: tuple[Stmt, ...]
    rbrace: int

    @property
    def pos(self) -> int:
        return self.lbrace

    @property
    def end(self) -> int:
        return self.rbrace + 1


@dataclass(frozen=True, eq=False)
class IfStmt(Stmt):
    if_pos: int
    init: Stmt | None
    cond: Expr
    body: BlockStmt
    else_: Stmt | None = None

    @property
    def pos(self) -> int:
        return self.if_pos

    @property
    def end(self) -> int:
        return self.else_.end if self.else_ is not None else self.body.end


@dataclass(frozen=True, eq=False)
class ForStmt(Stmt):
    """A counted loop: for init; cond; post { body }."""

    for_pos: int
    init: Stmt | None
    cond: Expr | None
    post: Stmt | None
    body: BlockStmt

    @property
    def pos(self) -> int:
        return self.for_pos

    @property
    def end(self) -> int:
        return self.body.end


@dataclass(frozen=True, eq=False)
class RangeStmt(Stmt):
    """An iteration construct: for key, value := range x { body }."""

    for_pos: int
    key: Expr | None
    value: Expr | None
    tok_pos: int
    tok: str  # ":=", "=" or "" when there are no binders
    x: Expr
    body: BlockStmt

    @property
    def pos(self) -> int:
        return self.for_pos

    @property
    def end(self) -> int:
        return self.body.end


@dataclass(frozen=True, eq=False)
class CaseClause(Stmt):
    case_pos: int
    exprs: tuple[Expr, ...]
    colon: int
    body: tuple[Stmt, ...]

    @property
    def pos(self) -> int:
        return self.case_pos

    @property
    def end(self) -> int:
        return self.body[-1].end if self.body else self.colon + 1


@dataclass(frozen=True, eq=False)
class SwitchStmt(Stmt):
    switch_pos: int
    init: Stmt | None
    tag: Expr | None
    body: BlockStmt

    @property
    def pos(self) -> int:
        return self.switch_pos

    @property
    def end(self) -> int:
        return self.body.end


@dataclass(frozen=True, eq=False)
class TypeSwitchStmt(Stmt):
    """switch init; assign { body } where assign is x := y.(type) or y.(type)."""

    switch_pos: int
    init: Stmt | None
    assign: Stmt
    body: BlockStmt

    @property
    def pos(self) -> int:
        return self.switch_pos

    @property
    def end(self) -> int:
        return self.body.end


@dataclass(frozen=True, eq=False)
class ReturnStmt(Stmt):
    return_pos: int
    results: tuple[Expr, ...] = ()

    @property
    def pos(self) -> int:
        return self.return_pos

    @property
    def end(self) -> int:
        return self.results[-1].end if self.results else self.return_pos + len("return")


@dataclass(frozen=True, eq=False)
class DeferStmt(Stmt):
    defer_pos: int
    call: CallExpr

    @property
    def pos(self) -> int:
        return self.defer_pos

    @property
    def end(self) -> int:
        return self.call.end


@dataclass(frozen=True, eq=False)
class GoStmt(Stmt):
    go_pos: int
    call: CallExpr

    @property
    def pos(self) -> int:
        return self.go_pos

    @property
    def end(self) -> int:
        return self.call.end


@dataclass(frozen=True, eq=False)
class DeclStmt(Stmt):
    decl: "GenDecl"

    @property
    def pos(self) -> int:
        return self.decl.pos

    @property
    def end(self) -> int:
        return self.decl.end


# Specs and declarations


@dataclass(frozen=True, eq=False)
class ValueSpec(Spec):
    """One line of a var/const group: names [type] [= values]."""

    names: tuple[Ident, ...]
    type: Expr | None = None
    values: tuple[Expr, ...] = ()

    @property
    def pos(self) -> int:
        return self.names[0].pos

    @property
    def end(self) -> int:
        if self.values:
            return self.values[-1].end
        if self.type is not None:
            return self.type.end
        return self.names[-1].end


@dataclass(frozen=True, eq=False)
class TypeSpec(Spec):
    name: Ident
    type: Expr

    @property
    def pos(self) -> int:
        return self.name.pos

    @property
    def end(self) -> int:
        return self.type.end


@dataclass(frozen=True, eq=False)
class ImportSpec(Spec):
    path: BasicLit
    name: Ident | None = None

    @property
    def pos(self) -> int:
        return self.name.pos if self.name is not None else self.path.pos

    @property
    def end(self) -> int:
        return self.path.end


@dataclass(frozen=True, eq=False)
class GenDecl(Decl):
    """A general declaration: var, const, type or import, optionally parenthesized."""

    tok_pos: int
    tok: str
    specs: tuple[Spec, ...]
    rparen: int = NO_POS

    @property
    def pos(self) -> int:
        return self.tok_pos

    @property
    def end(self) -> int:
        if self.rparen != NO_POS:
            return self.rparen + 1
        return self.specs[-1].end if self.specs else self.tok_pos + len(self.tok)


@dataclass(frozen=True, eq=False)
class FuncDecl(Decl):
    func_pos: int
    name: Ident
    params: tuple[Field, ...] = ()
    results: tuple[Field, ...] = ()
    body: BlockStmt | None = None
    recv: tuple[Field, ...] = ()

    @property
    def pos(self) -> int:
        return self.func_pos

    @property
    def end(self) -> int:
        if self.body is not None:
            return self.body.end
        return self.results[-1].end if self.results else self.name.end


@dataclass(frozen=True, eq=False)
class File(Node):
    package_pos: int
    name: Ident
    decls: tuple[Decl, ...] = ()

    @property
    def pos(self) -> int:
        return self.package_pos

    @property
    def end(self) -> int:
        return self.decls[-1].end if self.decls else self.name.end
