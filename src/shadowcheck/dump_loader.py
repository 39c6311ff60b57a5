"""Loader for resolved package dumps.

A dump is a JSON document written by a language front-end after parsing and
name/type resolution. It carries everything the checker consumes:

    {
      "package": "example.com/b",
      "files":   [{"name": "b.go", "size": 400, "line_starts": [0, 13, ...],
                   "syntax": {"node": "File", ...}}],
      "types":   [{"kind": "basic", "name": "int"},
                  {"kind": "named", "name": "T", "pkg": "p", "underlying": 0}, ...],
      "scopes":  [{"parent": null, "pos": 0, "end": 0, "comment": "package"}, ...],
      "symbols": [{"name": "x", "kind": "var", "type": 0, "pos": 30, "scope": 1,
                   "scope_pos": 35}, ...]
    }

Types and scopes are referenced by index. A scope's parent must appear
earlier in the list; null means the universe scope. Syntax nodes are objects
whose "node" key names a class in shadowcheck.syntax.nodes and whose other keys
are that class's fields. An Ident may carry "def": <symbol index> or
"use": <symbol index or predeclared name>. Positions are global: file N starts
at base 1 + sum(size + 1 for each earlier file).
"""

import dataclasses
import functools
import json
import logging
import types
import typing
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from shadowcheck.errors import DumpFormatError
from shadowcheck.models import Package
from shadowcheck.positions import NO_POS, FileSet
from shadowcheck.symbols import UNIVERSE, Scope, Symbol, SymbolKind, TypesInfo
from shadowcheck.syntax import nodes
from shadowcheck.syntax.nodes import File, Ident, Node
from shadowcheck.typesys import (
    BASIC_ALIASES,
    BASIC_NAMES,
    Array,
    Basic,
    Chan,
    Interface,
    Map,
    Named,
    Pointer,
    Signature,
    Slice,
    Struct,
    StructField,
    Tuple,
    Type,
)

logger = logging.getLogger(__name__)

NODE_CLASSES: Mapping[str, type[Node]] = {
    name: cls
    for name, cls in vars(nodes).items()
    if isinstance(cls, type) and issubclass(cls, Node) and hasattr(cls, "__dataclass_fields__")
}

_RESOLUTION_KEYS = ("def", "use")
_CHAN_DIRECTIONS = ("both", "send", "recv")


def _require(mapping: Mapping[str, Any], key: str, kind: type, where: str) -> Any:
    if key not in mapping:
        msg = f"{where}: missing {key!r}"
        raise DumpFormatError(msg)
    value = mapping[key]
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        msg = f"{where}: {key!r} must be {kind.__name__}, got {type(value).__name__}"
        raise DumpFormatError(msg)
    return value


def _optional(mapping: Mapping[str, Any], key: str, kind: type, where: str, default: Any) -> Any:
    if mapping.get(key) is None:
        return default
    return _require(mapping, key, kind, where)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _objects(mapping: Mapping[str, Any], key: str, where: str) -> list[dict[str, Any]]:
    """Return the list under key, checking that every entry is an object."""
    entries = _optional(mapping, key, list, where, [])
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            msg = f"{where}: {key}[{index}] must be an object, got {type(entry).__name__}"
            raise DumpFormatError(msg)
    return entries


@functools.cache
def _field_hints(cls: type[Node]) -> dict[str, Any]:
    hints = typing.get_type_hints(cls)
    return {f.name: hints[f.name] for f in dataclasses.fields(cls)}


def _matches(value: Any, hint: Any) -> bool:
    """Check a decoded field value against its dataclass annotation."""
    if hint is int:
        return _is_int(value)
    if hint is types.NoneType:
        return value is None
    if isinstance(hint, types.UnionType):
        return any(_matches(value, arg) for arg in typing.get_args(hint))
    if typing.get_origin(hint) is tuple:
        item = typing.get_args(hint)[0]
        return isinstance(value, tuple) and all(_matches(v, item) for v in value)
    return isinstance(value, hint)


class _DumpDecoder:
    """Decodes one dump document; single use."""

    def __init__(self, document: Any) -> None:
        if not isinstance(document, dict):
            msg = "dump must be a JSON object"
            raise DumpFormatError(msg)
        self._document: dict[str, Any] = document
        self._raw_types: list[Any] = _optional(document, "types", list, "dump", [])
        self._types: dict[int, Type] = {}
        self._in_progress: set[int] = set()
        self._scopes: list[Scope] = []
        self._symbols: list[Symbol] = []
        self._defs: dict[Ident, Symbol | None] = {}
        self._uses: dict[Ident, Symbol] = {}

    def decode(self) -> Package:
        path = _require(self._document, "package", str, "dump")
        self._decode_types()
        self._decode_scopes()
        self._decode_symbols()

        fset = FileSet()
        files: list[File] = []
        for index, raw_file in enumerate(_require(self._document, "files", list, "dump")):
            where = f"files[{index}]"
            if not isinstance(raw_file, dict):
                msg = f"{where}: must be an object"
                raise DumpFormatError(msg)
            name = _require(raw_file, "name", str, where)
            size = _require(raw_file, "size", int, where)
            line_starts = _require(raw_file, "line_starts", list, where)
            if not all(_is_int(offset) for offset in line_starts):
                msg = f"{where}: 'line_starts' must hold integer offsets"
                raise DumpFormatError(msg)
            try:
                fset.add_file(name, size, line_starts)
            except ValueError as e:
                raise DumpFormatError(f"{where}: {e}") from e

            syntax = self._decode_value(_require(raw_file, "syntax", dict, where))
            if not isinstance(syntax, File):
                msg = f"{where}: syntax root must be a File node, got {type(syntax).__name__}"
                raise DumpFormatError(msg)
            files.append(syntax)

        logger.debug(
            "Loaded %s: %d file(s), %d scope(s), %d symbol(s), %d def(s), %d use(s)",
            path,
            len(files),
            len(self._scopes),
            len(self._symbols),
            len(self._defs),
            len(self._uses),
        )
        return Package(
            path=path,
            fset=fset,
            files=tuple(files),
            info=TypesInfo(defs=self._defs, uses=self._uses),
        )

    # Types

    def _decode_types(self) -> None:
        # Named types first so that recursive definitions can refer to them.
        for index, raw in enumerate(self._raw_types):
            if isinstance(raw, dict) and raw.get("kind") == "named":
                where = f"types[{index}]"
                self._types[index] = Named(
                    name=_require(raw, "name", str, where), pkg=_optional(raw, "pkg", str, where, "")
                )
        for index in range(len(self._raw_types)):
            self._type(index)
        for index, raw in enumerate(self._raw_types):
            named = self._types[index]
            if isinstance(named, Named) and raw.get("underlying") is not None:
                named.underlying = self._type_ref(raw["underlying"], f"types[{index}]")

    def _type_ref(self, ref: Any, where: str) -> Type:
        if not _is_int(ref) or not 0 <= ref < len(self._raw_types):
            msg = f"{where}: invalid type reference {ref!r}"
            raise DumpFormatError(msg)
        return self._type(ref)

    def _type_refs(self, raw: Mapping[str, Any], key: str, where: str) -> tuple[Type, ...]:
        return tuple(self._type_ref(ref, where) for ref in _optional(raw, key, list, where, []))

    def _type(self, index: int) -> Type:  # noqa: C901, PLR0911
        if index in self._types:
            return self._types[index]
        where = f"types[{index}]"
        if index in self._in_progress:
            msg = f"{where}: cyclic type not broken by a named type"
            raise DumpFormatError(msg)
        raw = self._raw_types[index]
        if not isinstance(raw, dict):
            msg = f"{where}: must be an object"
            raise DumpFormatError(msg)

        self._in_progress.add(index)
        kind = raw.get("kind")
        match kind:
            case "basic":
                name = _require(raw, "name", str, where)
                if name not in BASIC_NAMES and name not in BASIC_ALIASES:
                    msg = f"{where}: unknown basic type {name!r}"
                    raise DumpFormatError(msg)
                result: Type = Basic(name)
            case "pointer":
                result = Pointer(self._type_ref(raw.get("elem"), where))
            case "slice":
                result = Slice(self._type_ref(raw.get("elem"), where))
            case "array":
                result = Array(_require(raw, "length", int, where), self._type_ref(raw.get("elem"), where))
            case "map":
                result = Map(self._type_ref(raw.get("key"), where), self._type_ref(raw.get("elem"), where))
            case "chan":
                direction = _optional(raw, "direction", str, where, "both")
                if direction not in _CHAN_DIRECTIONS:
                    msg = f"{where}: unknown channel direction {direction!r}"
                    raise DumpFormatError(msg)
                result = Chan(self._type_ref(raw.get("elem"), where), direction)
            case "tuple":
                result = Tuple(self._type_refs(raw, "types", where))
            case "signature":
                result = Signature(
                    params=self._type_refs(raw, "params", where),
                    results=self._type_refs(raw, "results", where),
                    variadic=bool(raw.get("variadic", False)),
                )
            case "struct":
                result = Struct(
                    tuple(
                        StructField(
                            name=_require(f, "name", str, where),
                            type=self._type_ref(f.get("type"), where),
                            tag=_optional(f, "tag", str, where, ""),
                            embedded=bool(f.get("embedded", False)),
                        )
                        for f in _objects(raw, "fields", where)
                    )
                )
            case "interface":
                methods: list[tuple[str, Signature]] = []
                for method in _objects(raw, "methods", where):
                    signature = self._type_ref(method.get("type"), where)
                    if not isinstance(signature, Signature):
                        msg = f"{where}: method {method.get('name')!r} must have a signature type"
                        raise DumpFormatError(msg)
                    methods.append((_require(method, "name", str, where), signature))
                result = Interface(tuple(methods))
            case _:
                msg = f"{where}: unknown type kind {kind!r}"
                raise DumpFormatError(msg)
        self._in_progress.discard(index)
        self._types[index] = result
        return result

    # Scopes and symbols

    def _decode_scopes(self) -> None:
        for index, raw in enumerate(_optional(self._document, "scopes", list, "dump", [])):
            where = f"scopes[{index}]"
            if not isinstance(raw, dict):
                msg = f"{where}: must be an object"
                raise DumpFormatError(msg)
            parent_ref = raw.get("parent")
            if parent_ref is None:
                parent = UNIVERSE
            elif _is_int(parent_ref) and 0 <= parent_ref < index:
                parent = self._scopes[parent_ref]
            else:
                msg = f"{where}: parent must be null or the index of an earlier scope, got {parent_ref!r}"
                raise DumpFormatError(msg)
            self._scopes.append(
                Scope(
                    parent=parent,
                    pos=_optional(raw, "pos", int, where, NO_POS),
                    end=_optional(raw, "end", int, where, NO_POS),
                    comment=_optional(raw, "comment", str, where, ""),
                )
            )

    def _decode_symbols(self) -> None:
        for index, raw in enumerate(_optional(self._document, "symbols", list, "dump", [])):
            where = f"symbols[{index}]"
            if not isinstance(raw, dict):
                msg = f"{where}: must be an object"
                raise DumpFormatError(msg)
            try:
                kind = SymbolKind(raw.get("kind", "var"))
            except ValueError as e:
                raise DumpFormatError(f"{where}: {e}") from e
            type_ref = raw.get("type")
            symbol = Symbol(
                name=_require(raw, "name", str, where),
                kind=kind,
                type=None if type_ref is None else self._type_ref(type_ref, where),
                pos=_require(raw, "pos", int, where),
                scope_pos=_optional(raw, "scope_pos", int, where, None),
            )
            scope_ref = _require(raw, "scope", int, where)
            if not 0 <= scope_ref < len(self._scopes):
                msg = f"{where}: invalid scope reference {scope_ref}"
                raise DumpFormatError(msg)
            if self._scopes[scope_ref].insert(symbol) is not None:
                msg = f"{where}: {symbol.name!r} is already declared in scopes[{scope_ref}]"
                raise DumpFormatError(msg)
            self._symbols.append(symbol)

    def _symbol_ref(self, ref: Any, where: str) -> Symbol:
        if isinstance(ref, str):
            symbol = UNIVERSE.lookup(ref)
            if symbol is None:
                msg = f"{where}: {ref!r} is not a predeclared identifier"
                raise DumpFormatError(msg)
            return symbol
        if _is_int(ref) and 0 <= ref < len(self._symbols):
            return self._symbols[ref]
        msg = f"{where}: invalid symbol reference {ref!r}"
        raise DumpFormatError(msg)

    # Syntax

    def _decode_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self._decode_node(value)
        if isinstance(value, list):
            return tuple(self._decode_value(item) for item in value)
        return value

    def _decode_node(self, raw: dict[str, Any]) -> Node:
        kind = raw.get("node")
        cls = NODE_CLASSES.get(kind) if isinstance(kind, str) else None
        if cls is None:
            msg = f"unknown syntax node {kind!r}"
            raise DumpFormatError(msg)

        fields = {key: self._decode_value(value) for key, value in raw.items() if key != "node"}
        resolution = {key: fields.pop(key) for key in _RESOLUTION_KEYS if key in fields}
        hints = _field_hints(cls)
        for key, value in fields.items():
            if key in hints and not _matches(value, hints[key]):
                msg = f"{kind} node: {key!r} cannot be {type(value).__name__}"
                raise DumpFormatError(msg)
        try:
            node = cls(**fields)
        except TypeError as e:
            raise DumpFormatError(f"{kind} node: {e}") from e

        if resolution:
            if not isinstance(node, Ident):
                msg = f"{kind} node: only Ident nodes carry def/use"
                raise DumpFormatError(msg)
            where = f"Ident {node.name!r} at {node.pos}"
            if "def" in resolution:
                ref = resolution["def"]
                self._defs[node] = None if ref is None else self._symbol_ref(ref, where)
            if "use" in resolution:
                self._uses[node] = self._symbol_ref(resolution["use"], where)
        return node


def decode_package_dump(document: Any) -> Package:
    """Build a Package from an already-parsed dump document.

    Raises:
        DumpFormatError: If the document does not follow the dump format
    """
    return _DumpDecoder(document).decode()


def load_package_dump(dump_path: Path) -> Package:
    """Read and decode a dump file.

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the file is not valid JSON
        DumpFormatError: If the document does not follow the dump format
    """
    document = json.loads(dump_path.read_text(encoding="utf-8"))
    return decode_package_dump(document)
