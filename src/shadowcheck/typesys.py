"""Type representations and exact type identity.

Only as much of a type system as the shadow check needs: enough structure to
decide whether two declarations have *identical* types. Named types are
identical only to themselves, everything else is compared structurally.
"""

from dataclasses import dataclass, field

BASIC_ALIASES = {"byte": "uint8", "rune": "int32"}

BASIC_NAMES = (
    "bool",
    "int",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "uintptr",
    "float32",
    "float64",
    "complex64",
    "complex128",
    "string",
    "unsafe.Pointer",
    "untyped bool",
    "untyped int",
    "untyped rune",
    "untyped float",
    "untyped complex",
    "untyped string",
    "untyped nil",
)


class Type:
    """Base class of all types."""


@dataclass(frozen=True)
class Basic(Type):
    name: str

    @property
    def canonical_name(self) -> str:
        return BASIC_ALIASES.get(self.name, self.name)


@dataclass(eq=False)
class Named(Type):
    """A defined type. Identity, not structure, decides equality."""

    name: str
    pkg: str = ""
    underlying: Type | None = field(default=None, repr=False)


@dataclass(frozen=True)
class Pointer(Type):
    elem: Type


@dataclass(frozen=True)
class Slice(Type):
    elem: Type


@dataclass(frozen=True)
class Array(Type):
    length: int
    elem: Type


@dataclass(frozen=True)
class Map(Type):
    key: Type
    elem: Type


@dataclass(frozen=True)
class Chan(Type):
    elem: Type
    direction: str = "both"  # "both", "send" or "recv"


@dataclass(frozen=True)
class Tuple(Type):
    types: tuple[Type, ...] = ()


@dataclass(frozen=True)
class Signature(Type):
    params: tuple[Type, ...] = ()
    results: tuple[Type, ...] = ()
    variadic: bool = False


@dataclass(frozen=True)
class StructField:
    name: str
    type: Type
    tag: str = ""
    embedded: bool = False


@dataclass(frozen=True)
class Struct(Type):
    fields: tuple[StructField, ...] = ()


@dataclass(frozen=True)
class Interface(Type):
    methods: tuple[tuple[str, Signature], ...] = ()


def _all_identical(xs: tuple[Type, ...], ys: tuple[Type, ...]) -> bool:
    return len(xs) == len(ys) and all(identical(x, y) for x, y in zip(xs, ys, strict=True))


def identical(x: Type | None, y: Type | None) -> bool:  # noqa: C901, PLR0911
    """Report whether x and y are identical types.

    Examples:
        >>> identical(Basic("byte"), Basic("uint8"))
        True
        >>> identical(Named("T"), Named("T"))
        False
    """
    if x is y:
        return True
    if x is None or y is None:
        return False

    match x, y:
        case Basic(), Basic():
            return x.canonical_name == y.canonical_name
        case Named(), Named():
            return False
        case (Pointer(), Pointer()) | (Slice(), Slice()):
            return identical(x.elem, y.elem)
        case Array(), Array():
            return x.length == y.length and identical(x.elem, y.elem)
        case Map(), Map():
            return identical(x.key, y.key) and identical(x.elem, y.elem)
        case Chan(), Chan():
            return x.direction == y.direction and identical(x.elem, y.elem)
        case Tuple(), Tuple():
            return _all_identical(x.types, y.types)
        case Signature(), Signature():
            return (
                x.variadic == y.variadic
                and _all_identical(x.params, y.params)
                and _all_identical(x.results, y.results)
            )
        case Struct(), Struct():
            return len(x.fields) == len(y.fields) and all(
                a.name == b.name and a.tag == b.tag and a.embedded == b.embedded and identical(a.type, b.type)
                for a, b in zip(x.fields, y.fields, strict=True)
            )
        case Interface(), Interface():
            x_methods = dict(x.methods)
            y_methods = dict(y.methods)
            return x_methods.keys() == y_methods.keys() and all(
                identical(x_methods[name], y_methods[name]) for name in x_methods
            )
        case _:
            return False


def type_string(t: Type | None) -> str:  # noqa: PLR0911
    """Render a type for log messages."""
    match t:
        case None:
            return "<nil>"
        case Basic(name=name):
            return name
        case Named(name=name, pkg=pkg):
            return f"{pkg}.{name}" if pkg else name
        case Pointer(elem=elem):
            return f"*{type_string(elem)}"
        case Slice(elem=elem):
            return f"[]{type_string(elem)}"
        case Array(length=length, elem=elem):
            return f"[{length}]{type_string(elem)}"
        case Map(key=key, elem=elem):
            return f"map[{type_string(key)}]{type_string(elem)}"
        case Chan(elem=elem, direction=direction):
            prefix = {"send": "chan<- ", "recv": "<-chan "}.get(direction, "chan ")
            return f"{prefix}{type_string(elem)}"
        case Tuple(types=types):
            return "(" + ", ".join(type_string(e) for e in types) + ")"
        case Signature(params=params, results=results):
            rendered = "func(" + ", ".join(type_string(p) for p in params) + ")"
            if results:
                rendered += " (" + ", ".join(type_string(r) for r in results) + ")"
            return rendered
        case Struct():
            return "struct{...}"
        case Interface(methods=methods):
            return "interface{}" if not methods else "interface{...}"
        case _:
            return type(t).__name__
