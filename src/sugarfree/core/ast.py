"""Core language AST.

The desugared form consumed by the type checker and code generator. Only
single-parameter lambdas, no if/else (match on booleans), no blocks (nested
lets), lists as Cons/Nil variants, no pipes or composition, no or-patterns
and no list patterns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from sugarfree.utils.location import Location


# Core binary operators and their printed symbols. Pipe, composition and
# cons are surface-only and never appear in a BinOp.
BINARY_OP_SYMBOLS: dict[str, str] = {
    "Add": "+",
    "Subtract": "-",
    "Multiply": "*",
    "Divide": "/",
    "Modulo": "%",
    "Equal": "==",
    "NotEqual": "!=",
    "LessThan": "<",
    "LessEqual": "<=",
    "GreaterThan": ">",
    "GreaterEqual": ">=",
    "LogicalAnd": "&&",
    "LogicalOr": "||",
    "Concat": "&",
    "RefAssign": ":=",
}

UNARY_OP_SYMBOLS: dict[str, str] = {
    "Negate": "-",
    "LogicalNot": "!",
    "Deref": "!",
}


def _format_literal(value: int | float | str | bool | None) -> str:
    match value:
        case None:
            return "()"
        case bool():
            return "true" if value else "false"
        case str():
            return f'"{value}"'
        case _:
            return str(value)


# =============================================================================
# Core Types
# =============================================================================


class Type:
    """Base class for core type expressions."""

    pass


@dataclass(frozen=True)
class TypeVar(Type):
    name: str
    location: Location

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TypeConst(Type):
    name: str
    location: Location

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TypeApp(Type):
    constructor: Type
    args: list[Type]
    location: Location

    def __str__(self) -> str:
        return f"{self.constructor}<{', '.join(str(a) for a in self.args)}>"


@dataclass(frozen=True)
class FunctionType(Type):
    params: list[Type]
    return_: Type
    location: Location

    def __str__(self) -> str:
        return f"({', '.join(str(p) for p in self.params)}) -> {self.return_}"


@dataclass(frozen=True)
class RecordTypeField:
    name: str
    type_expr: Type
    location: Location

    def __str__(self) -> str:
        return f"{self.name}: {self.type_expr}"


@dataclass(frozen=True)
class RecordType(Type):
    fields: list[RecordTypeField]
    location: Location

    def __str__(self) -> str:
        return "{ " + ", ".join(str(f) for f in self.fields) + " }"


@dataclass(frozen=True)
class VariantConstructor:
    name: str
    args: list[Type]
    location: Location

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}({', '.join(str(a) for a in self.args)})"


@dataclass(frozen=True)
class VariantType(Type):
    constructors: list[VariantConstructor]
    location: Location

    def __str__(self) -> str:
        return " | ".join(str(c) for c in self.constructors)


@dataclass(frozen=True)
class UnionType(Type):
    types: list[Type]
    location: Location

    def __str__(self) -> str:
        return " | ".join(str(t) for t in self.types)


@dataclass(frozen=True)
class TupleType(Type):
    elements: list[Type]
    location: Location

    def __str__(self) -> str:
        return f"({', '.join(str(e) for e in self.elements)})"


class TypeDefinition:
    """Base class for type declaration bodies."""

    pass


@dataclass(frozen=True)
class AliasType(TypeDefinition):
    type_expr: Type
    location: Location


@dataclass(frozen=True)
class RecordTypeDef(TypeDefinition):
    fields: list[RecordTypeField]
    location: Location


@dataclass(frozen=True)
class VariantTypeDef(TypeDefinition):
    constructors: list[VariantConstructor]
    location: Location


# =============================================================================
# Core Patterns
# =============================================================================


class Pattern:
    """Base class for core patterns. No or-patterns, no list patterns."""

    pass


@dataclass(frozen=True)
class WildcardPattern(Pattern):
    location: Location

    def __str__(self) -> str:
        return "_"


@dataclass(frozen=True)
class VarPattern(Pattern):
    name: str
    location: Location

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class LiteralPattern(Pattern):
    """Literal pattern; `None` is the unit literal."""

    literal: int | float | str | bool | None
    location: Location

    def __str__(self) -> str:
        return _format_literal(self.literal)


@dataclass(frozen=True)
class VariantPattern(Pattern):
    """Variant deconstruction, including Cons and Nil."""

    constructor: str
    args: list[Pattern]
    location: Location

    def __str__(self) -> str:
        if not self.args:
            return self.constructor
        return f"{self.constructor}({', '.join(str(a) for a in self.args)})"


@dataclass(frozen=True)
class RecordPatternField:
    name: str
    pattern: Pattern
    location: Location

    def __str__(self) -> str:
        return f"{self.name}: {self.pattern}"


@dataclass(frozen=True)
class RecordPattern(Pattern):
    fields: list[RecordPatternField]
    location: Location

    def __str__(self) -> str:
        return "{ " + ", ".join(str(f) for f in self.fields) + " }"


@dataclass(frozen=True)
class TuplePattern(Pattern):
    elements: list[Pattern]
    location: Location

    def __str__(self) -> str:
        return f"({', '.join(str(e) for e in self.elements)})"


PatternRepr = Union[
    WildcardPattern, VarPattern, LiteralPattern, VariantPattern, RecordPattern, TuplePattern
]


# =============================================================================
# Core Expressions
# =============================================================================


class Expr:
    """Base class for core expressions."""

    pass


@dataclass(frozen=True)
class IntLit(Expr):
    value: int
    location: Location

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class FloatLit(Expr):
    value: float
    location: Location

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class StringLit(Expr):
    value: str
    location: Location

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class BoolLit(Expr):
    value: bool
    location: Location

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class UnitLit(Expr):
    location: Location

    def __str__(self) -> str:
        return "()"


@dataclass(frozen=True)
class Var(Expr):
    """Variable reference by name."""

    name: str
    location: Location

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Let(Expr):
    """Single let binding: let pattern = value in body."""

    pattern: Pattern
    value: Expr
    body: Expr
    location: Location
    mutable: bool = False
    recursive: bool = False

    def __str__(self) -> str:
        flags = ("mut " if self.mutable else "") + ("rec " if self.recursive else "")
        return f"let {flags}{self.pattern} = {self.value} in {self.body}"


@dataclass(frozen=True)
class LetRecBinding:
    """One binding of a recursive group."""

    pattern: Pattern
    value: Expr
    location: Location
    mutable: bool = False

    def __str__(self) -> str:
        return f"{self.pattern} = {self.value}"


@dataclass(frozen=True)
class LetRec(Expr):
    """Recursive let group: let rec b1 and ... and bn in body."""

    bindings: list[LetRecBinding]
    body: Expr
    location: Location

    def __str__(self) -> str:
        bindings = " and ".join(str(b) for b in self.bindings)
        return f"let rec {bindings} in {self.body}"


@dataclass(frozen=True)
class Lambda(Expr):
    """Single-parameter lambda: λparam. body"""

    param: Pattern
    body: Expr
    location: Location

    def __str__(self) -> str:
        return f"λ{self.param}. {self.body}"


@dataclass(frozen=True)
class App(Expr):
    """Function application: func(args...)."""

    func: Expr
    args: list[Expr]
    location: Location

    def __str__(self) -> str:
        func = f"({self.func})" if isinstance(self.func, Lambda) else str(self.func)
        return f"{func}({', '.join(str(a) for a in self.args)})"


@dataclass(frozen=True)
class MatchCase:
    pattern: Pattern
    body: Expr
    location: Location
    guard: Optional[Expr] = None

    def __str__(self) -> str:
        if self.guard is not None:
            return f"{self.pattern} when {self.guard} => {self.body}"
        return f"{self.pattern} => {self.body}"


@dataclass(frozen=True)
class Match(Expr):
    """Pattern match, the only conditional in the core language."""

    scrutinee: Expr
    cases: list[MatchCase]
    location: Location

    def __str__(self) -> str:
        cases = " | ".join(str(c) for c in self.cases)
        return f"match {self.scrutinee} {{ {cases} }}"


@dataclass(frozen=True)
class RecordField:
    name: str
    value: Expr
    location: Location

    def __str__(self) -> str:
        return f"{self.name}: {self.value}"


@dataclass(frozen=True)
class RecordSpread:
    expr: Expr
    location: Location

    def __str__(self) -> str:
        return f"...{self.expr}"


RecordEntry = Union[RecordField, RecordSpread]


@dataclass(frozen=True)
class Record(Expr):
    fields: list[RecordEntry]
    location: Location

    def __str__(self) -> str:
        return "{ " + ", ".join(str(f) for f in self.fields) + " }"


@dataclass(frozen=True)
class RecordAccess(Expr):
    record: Expr
    field: str
    location: Location

    def __str__(self) -> str:
        return f"{self.record}.{self.field}"


@dataclass(frozen=True)
class RecordUpdate(Expr):
    """Functional update: copy of `record` with `updates` applied in order."""

    record: Expr
    updates: list[RecordEntry]
    location: Location

    def __str__(self) -> str:
        return "{ " + f"{self.record} | " + ", ".join(str(u) for u in self.updates) + " }"


@dataclass(frozen=True)
class Variant(Expr):
    """Variant construction, including Cons and Nil."""

    constructor: str
    args: list[Expr]
    location: Location

    def __str__(self) -> str:
        if not self.args:
            return self.constructor
        return f"{self.constructor}({', '.join(str(a) for a in self.args)})"


@dataclass(frozen=True)
class BinOp(Expr):
    op: str
    left: Expr
    right: Expr
    location: Location

    def __str__(self) -> str:
        return f"({self.left} {BINARY_OP_SYMBOLS.get(self.op, self.op)} {self.right})"


@dataclass(frozen=True)
class UnaryOp(Expr):
    op: str
    operand: Expr
    location: Location

    def __str__(self) -> str:
        return f"{UNARY_OP_SYMBOLS.get(self.op, self.op)}{self.operand}"


@dataclass(frozen=True)
class TypeAnnotation(Expr):
    expr: Expr
    type_expr: Type
    location: Location

    def __str__(self) -> str:
        return f"({self.expr} : {self.type_expr})"


@dataclass(frozen=True)
class Unsafe(Expr):
    expr: Expr
    location: Location

    def __str__(self) -> str:
        return f"unsafe {{ {self.expr} }}"


@dataclass(frozen=True)
class Tuple(Expr):
    elements: list[Expr]
    location: Location

    def __str__(self) -> str:
        return f"({', '.join(str(e) for e in self.elements)})"


ExprRepr = Union[
    IntLit,
    FloatLit,
    StringLit,
    BoolLit,
    UnitLit,
    Var,
    Let,
    LetRec,
    Lambda,
    App,
    Match,
    Record,
    RecordAccess,
    RecordUpdate,
    Variant,
    BinOp,
    UnaryOp,
    TypeAnnotation,
    Unsafe,
    Tuple,
]


# =============================================================================
# Core Declarations
# =============================================================================


class Declaration:
    """Base class for core declarations."""

    pass


@dataclass(frozen=True)
class LetDecl(Declaration):
    pattern: Pattern
    value: Expr
    location: Location
    mutable: bool = False
    recursive: bool = False
    exported: bool = False

    def __str__(self) -> str:
        prefix = "export " if self.exported else ""
        flags = ("mut " if self.mutable else "") + ("rec " if self.recursive else "")
        return f"{prefix}let {flags}{self.pattern} = {self.value}"


@dataclass(frozen=True)
class LetRecGroup(Declaration):
    bindings: list[LetRecBinding]
    location: Location
    exported: bool = False

    def __str__(self) -> str:
        prefix = "export " if self.exported else ""
        return f"{prefix}let rec " + " and ".join(str(b) for b in self.bindings)


@dataclass(frozen=True)
class TypeDecl(Declaration):
    name: str
    params: list[str]
    definition: TypeDefinition
    location: Location
    exported: bool = False


@dataclass(frozen=True)
class ExternalDecl(Declaration):
    name: str
    type_expr: Type
    js_name: str
    location: Location
    from_: Optional[str] = None
    exported: bool = False


@dataclass(frozen=True)
class ExternalTypeDecl(Declaration):
    name: str
    type_expr: Type
    location: Location
    exported: bool = False


@dataclass(frozen=True)
class ImportItem:
    name: str
    alias: Optional[str] = None
    is_type: bool = False


@dataclass(frozen=True)
class ImportDecl(Declaration):
    items: list[ImportItem]
    from_: str
    location: Location


@dataclass(frozen=True)
class ReExportDecl(Declaration):
    items: Optional[list[ImportItem]]
    from_: str
    location: Location


DeclarationRepr = Union[
    LetDecl, LetRecGroup, TypeDecl, ExternalDecl, ExternalTypeDecl, ImportDecl, ReExportDecl
]


@dataclass(frozen=True)
class Module:
    """Desugared module: imports and declarations in source order."""

    imports: list[ImportDecl]
    declarations: list[Declaration]
    location: Location
