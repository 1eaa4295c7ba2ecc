"""Surface language AST.

Produced by the parser. Contains syntactic sugar (blocks, if/else, pipes,
composition, list literals with spreads, multi-parameter lambdas, while
loops, or-patterns and list patterns) that the desugarer removes.
Every node carries the `Location` it was parsed from.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from sugarfree.utils.location import Location


# =============================================================================
# Surface Types
# =============================================================================


class SurfaceType:
    """Base class for surface type expressions."""

    pass


@dataclass(frozen=True)
class SurfaceTypeVar(SurfaceType):
    """Type variable: 'a."""

    name: str
    location: Location

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class SurfaceTypeConst(SurfaceType):
    """Type constant: Int, String."""

    name: str
    location: Location

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class SurfaceTypeApp(SurfaceType):
    """Type application: List<Int>."""

    constructor: SurfaceType
    args: list[SurfaceType]
    location: Location

    def __str__(self) -> str:
        return f"{self.constructor}<{', '.join(str(a) for a in self.args)}>"


@dataclass(frozen=True)
class SurfaceFunctionType(SurfaceType):
    """Function type: (A, B) -> C."""

    params: list[SurfaceType]
    return_: SurfaceType
    location: Location

    def __str__(self) -> str:
        return f"({', '.join(str(p) for p in self.params)}) -> {self.return_}"


@dataclass(frozen=True)
class SurfaceRecordTypeField:
    """Field of a record type: name: T."""

    name: str
    type_expr: SurfaceType
    location: Location


@dataclass(frozen=True)
class SurfaceRecordType(SurfaceType):
    """Record type: { x: Int, y: Int }."""

    fields: list[SurfaceRecordTypeField]
    location: Location


@dataclass(frozen=True)
class SurfaceVariantConstructor:
    """Constructor of a variant type: Some(T)."""

    name: str
    args: list[SurfaceType]
    location: Location


@dataclass(frozen=True)
class SurfaceVariantType(SurfaceType):
    """Inline variant type: Some(T) | None."""

    constructors: list[SurfaceVariantConstructor]
    location: Location


@dataclass(frozen=True)
class SurfaceUnionType(SurfaceType):
    """Union type: A | B."""

    types: list[SurfaceType]
    location: Location


@dataclass(frozen=True)
class SurfaceTupleType(SurfaceType):
    """Tuple type: (A, B)."""

    elements: list[SurfaceType]
    location: Location


SurfaceTypeRepr = Union[
    SurfaceTypeVar,
    SurfaceTypeConst,
    SurfaceTypeApp,
    SurfaceFunctionType,
    SurfaceRecordType,
    SurfaceVariantType,
    SurfaceUnionType,
    SurfaceTupleType,
]


# Type definitions (right-hand side of `type Name<params> = ...`)


class SurfaceTypeDefinition:
    """Base class for type declaration bodies."""

    pass


@dataclass(frozen=True)
class SurfaceAliasType(SurfaceTypeDefinition):
    type_expr: SurfaceType
    location: Location


@dataclass(frozen=True)
class SurfaceRecordTypeDef(SurfaceTypeDefinition):
    fields: list[SurfaceRecordTypeField]
    location: Location


@dataclass(frozen=True)
class SurfaceVariantTypeDef(SurfaceTypeDefinition):
    constructors: list[SurfaceVariantConstructor]
    location: Location


# =============================================================================
# Surface Patterns
# =============================================================================


class SurfacePattern:
    """Base class for surface patterns."""

    pass


@dataclass(frozen=True)
class SurfaceVarPattern(SurfacePattern):
    """Variable pattern: x."""

    name: str
    location: Location

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class SurfaceWildcardPattern(SurfacePattern):
    """Wildcard pattern: _."""

    location: Location

    def __str__(self) -> str:
        return "_"


@dataclass(frozen=True)
class SurfaceLiteralPattern(SurfacePattern):
    """Literal pattern: 42, "a", true, () (None for unit)."""

    literal: int | float | str | bool | None
    location: Location


@dataclass(frozen=True)
class SurfaceConstructorPattern(SurfacePattern):
    """Constructor pattern: Some(x)."""

    constructor: str
    args: list[SurfacePattern]
    location: Location


@dataclass(frozen=True)
class SurfaceRecordPatternField:
    """Field of a record pattern: name: pattern."""

    name: str
    pattern: SurfacePattern
    location: Location


@dataclass(frozen=True)
class SurfaceRecordPattern(SurfacePattern):
    """Record pattern: { x, y: 0 }."""

    fields: list[SurfaceRecordPatternField]
    location: Location


@dataclass(frozen=True)
class SurfaceListPattern(SurfacePattern):
    """List pattern: [a, b, ...rest]."""

    elements: list[SurfacePattern]
    location: Location
    rest: Optional[SurfacePattern] = None


@dataclass(frozen=True)
class SurfaceOrPattern(SurfacePattern):
    """Or-pattern: p1 | p2 | ... | pk."""

    patterns: list[SurfacePattern]
    location: Location


@dataclass(frozen=True)
class SurfaceTuplePattern(SurfacePattern):
    """Tuple pattern: (a, b)."""

    elements: list[SurfacePattern]
    location: Location


@dataclass(frozen=True)
class SurfaceTypeAnnotatedPattern(SurfacePattern):
    """Pattern with a type annotation: (x: Int)."""

    pattern: SurfacePattern
    type_expr: SurfaceType
    location: Location


SurfacePatternRepr = Union[
    SurfaceVarPattern,
    SurfaceWildcardPattern,
    SurfaceLiteralPattern,
    SurfaceConstructorPattern,
    SurfaceRecordPattern,
    SurfaceListPattern,
    SurfaceOrPattern,
    SurfaceTuplePattern,
    SurfaceTypeAnnotatedPattern,
]


# =============================================================================
# Surface Expressions
# =============================================================================


class SurfaceExpr:
    """Base class for surface expressions."""

    pass


@dataclass(frozen=True)
class SurfaceIntLit(SurfaceExpr):
    value: int
    location: Location


@dataclass(frozen=True)
class SurfaceFloatLit(SurfaceExpr):
    value: float
    location: Location


@dataclass(frozen=True)
class SurfaceStringLit(SurfaceExpr):
    value: str
    location: Location


@dataclass(frozen=True)
class SurfaceBoolLit(SurfaceExpr):
    value: bool
    location: Location


@dataclass(frozen=True)
class SurfaceUnitLit(SurfaceExpr):
    location: Location


@dataclass(frozen=True)
class SurfaceVar(SurfaceExpr):
    """Variable reference by name: x."""

    name: str
    location: Location

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class SurfaceLet(SurfaceExpr):
    """Let binding: let [mut] [rec] pattern = value; body.

    Inside a block only pattern, value and the flags are used; the
    following statements of the block become the body.
    """

    pattern: SurfacePattern
    value: SurfaceExpr
    body: SurfaceExpr
    location: Location
    mutable: bool = False
    recursive: bool = False


@dataclass(frozen=True)
class SurfaceLetRecBinding:
    """One binding of a `let rec ... and ...` group."""

    pattern: SurfacePattern
    value: SurfaceExpr
    location: Location
    mutable: bool = False


@dataclass(frozen=True)
class SurfaceLetRec(SurfaceExpr):
    """Mutually recursive let: let rec f = ... and g = ...; body."""

    bindings: list[SurfaceLetRecBinding]
    body: SurfaceExpr
    location: Location


@dataclass(frozen=True)
class SurfaceLambda(SurfaceExpr):
    """Lambda with one or more parameters: (p1, ..., pn) => body."""

    params: list[SurfacePattern]
    body: SurfaceExpr
    location: Location


@dataclass(frozen=True)
class SurfaceApp(SurfaceExpr):
    """Function application: f(a, b)."""

    func: SurfaceExpr
    args: list[SurfaceExpr]
    location: Location


@dataclass(frozen=True)
class SurfaceIf(SurfaceExpr):
    """Conditional: if c then t else e. A missing else branch is unit."""

    condition: SurfaceExpr
    then: SurfaceExpr
    location: Location
    else_: Optional[SurfaceExpr] = None


@dataclass(frozen=True)
class SurfaceMatchCase:
    """Match case: | pattern [when guard] => body."""

    pattern: SurfacePattern
    body: SurfaceExpr
    location: Location
    guard: Optional[SurfaceExpr] = None


@dataclass(frozen=True)
class SurfaceMatch(SurfaceExpr):
    """Pattern match: match scrutinee { cases }."""

    scrutinee: SurfaceExpr
    cases: list[SurfaceMatchCase]
    location: Location


@dataclass(frozen=True)
class SurfaceRecordField:
    """Named record field: name: value."""

    name: str
    value: SurfaceExpr
    location: Location


@dataclass(frozen=True)
class SurfaceRecordSpread:
    """Record spread: ...expr."""

    expr: SurfaceExpr
    location: Location


SurfaceRecordEntry = Union[SurfaceRecordField, SurfaceRecordSpread]


@dataclass(frozen=True)
class SurfaceRecord(SurfaceExpr):
    """Record literal: { x: 1, ...rest }."""

    fields: list[SurfaceRecordEntry]
    location: Location


@dataclass(frozen=True)
class SurfaceRecordAccess(SurfaceExpr):
    """Field access: record.field."""

    record: SurfaceExpr
    field: str
    location: Location


@dataclass(frozen=True)
class SurfaceRecordUpdate(SurfaceExpr):
    """Record update: { record | f1: v1, f2: v2 }."""

    record: SurfaceExpr
    updates: list[SurfaceRecordEntry]
    location: Location


@dataclass(frozen=True)
class SurfaceListElement:
    """Ordinary list literal element."""

    expr: SurfaceExpr


@dataclass(frozen=True)
class SurfaceListSpread:
    """Spread list literal element: ...expr."""

    expr: SurfaceExpr


SurfaceListItem = Union[SurfaceListElement, SurfaceListSpread]


@dataclass(frozen=True)
class SurfaceList(SurfaceExpr):
    """List literal: [a, ...xs, b]."""

    elements: list[SurfaceListItem]
    location: Location


@dataclass(frozen=True)
class SurfaceListCons(SurfaceExpr):
    """Cons expression: head :: tail."""

    head: SurfaceExpr
    tail: SurfaceExpr
    location: Location


@dataclass(frozen=True)
class SurfaceBinOp(SurfaceExpr):
    """Binary operator: left op right.

    `op` is an operator name such as "Add", "LessThan", "ForwardCompose",
    "BackwardCompose" or "Cons".
    """

    op: str
    left: SurfaceExpr
    right: SurfaceExpr
    location: Location


@dataclass(frozen=True)
class SurfaceUnaryOp(SurfaceExpr):
    """Unary operator: -x, !x, !ref."""

    op: str
    operand: SurfaceExpr
    location: Location


@dataclass(frozen=True)
class SurfacePipe(SurfaceExpr):
    """Pipe: data |> func."""

    data: SurfaceExpr
    func: SurfaceExpr
    location: Location


@dataclass(frozen=True)
class SurfaceBlock(SurfaceExpr):
    """Block: { let x = 1; let y = 2; x + y }."""

    exprs: list[SurfaceExpr]
    location: Location


@dataclass(frozen=True)
class SurfaceWhile(SurfaceExpr):
    """While loop: while (condition) { body }."""

    condition: SurfaceExpr
    body: SurfaceExpr
    location: Location


@dataclass(frozen=True)
class SurfaceTypeAnnotation(SurfaceExpr):
    """Type annotation: (expr: T)."""

    expr: SurfaceExpr
    type_expr: SurfaceType
    location: Location


@dataclass(frozen=True)
class SurfaceUnsafe(SurfaceExpr):
    """Unsafe block: unsafe { expr }."""

    expr: SurfaceExpr
    location: Location


@dataclass(frozen=True)
class SurfaceTuple(SurfaceExpr):
    """Tuple expression: (a, b)."""

    elements: list[SurfaceExpr]
    location: Location


SurfaceExprRepr = Union[
    SurfaceIntLit,
    SurfaceFloatLit,
    SurfaceStringLit,
    SurfaceBoolLit,
    SurfaceUnitLit,
    SurfaceVar,
    SurfaceLet,
    SurfaceLetRec,
    SurfaceLambda,
    SurfaceApp,
    SurfaceIf,
    SurfaceMatch,
    SurfaceRecord,
    SurfaceRecordAccess,
    SurfaceRecordUpdate,
    SurfaceList,
    SurfaceListCons,
    SurfaceBinOp,
    SurfaceUnaryOp,
    SurfacePipe,
    SurfaceBlock,
    SurfaceWhile,
    SurfaceTypeAnnotation,
    SurfaceUnsafe,
    SurfaceTuple,
]


# =============================================================================
# Surface Declarations
# =============================================================================


class SurfaceDeclaration:
    """Base class for surface declarations."""

    pass


@dataclass(frozen=True)
class SurfaceLetDecl(SurfaceDeclaration):
    """Module-level let: [export] let [mut] [rec] pattern = value."""

    pattern: SurfacePattern
    value: SurfaceExpr
    location: Location
    mutable: bool = False
    recursive: bool = False
    exported: bool = False


@dataclass(frozen=True)
class SurfaceLetRecGroup(SurfaceDeclaration):
    """Module-level let rec group: let rec f = ... and g = ..."""

    bindings: list[SurfaceLetRecBinding]
    location: Location
    exported: bool = False


@dataclass(frozen=True)
class SurfaceTypeDecl(SurfaceDeclaration):
    """Type declaration: type Name<params> = definition."""

    name: str
    params: list[str]
    definition: SurfaceTypeDefinition
    location: Location
    exported: bool = False


@dataclass(frozen=True)
class SurfaceExternalDecl(SurfaceDeclaration):
    """External value: external name: T = "js.name" [from "module"]."""

    name: str
    type_expr: SurfaceType
    js_name: str
    location: Location
    from_: Optional[str] = None
    exported: bool = False


@dataclass(frozen=True)
class SurfaceExternalTypeDecl(SurfaceDeclaration):
    """External type: external type Name = T."""

    name: str
    type_expr: SurfaceType
    location: Location
    exported: bool = False


@dataclass(frozen=True)
class SurfaceExternalValue:
    """Value item inside an external block."""

    name: str
    type_expr: SurfaceType
    js_name: str
    location: Location


@dataclass(frozen=True)
class SurfaceExternalType:
    """Type item inside an external block."""

    name: str
    type_expr: SurfaceType
    location: Location


@dataclass(frozen=True)
class SurfaceExternalBlock(SurfaceDeclaration):
    """External block: external { items } [from "module"]."""

    items: list[Union[SurfaceExternalValue, SurfaceExternalType]]
    location: Location
    from_: Optional[str] = None
    exported: bool = False


@dataclass(frozen=True)
class SurfaceImportItem:
    """Imported name: [type] name [as alias]."""

    name: str
    alias: Optional[str] = None
    is_type: bool = False


@dataclass(frozen=True)
class SurfaceImportDecl(SurfaceDeclaration):
    """Import: import { items } from "module"."""

    items: list[SurfaceImportItem]
    from_: str
    location: Location


@dataclass(frozen=True)
class SurfaceReExportDecl(SurfaceDeclaration):
    """Re-export: export { items } from "module", or export * (items is None)."""

    items: Optional[list[SurfaceImportItem]]
    from_: str
    location: Location


SurfaceDeclarationRepr = Union[
    SurfaceLetDecl,
    SurfaceLetRecGroup,
    SurfaceTypeDecl,
    SurfaceExternalDecl,
    SurfaceExternalTypeDecl,
    SurfaceExternalBlock,
    SurfaceImportDecl,
    SurfaceReExportDecl,
]


@dataclass(frozen=True)
class SurfaceModule:
    """Parsed module: imports followed by declarations, in source order."""

    imports: list[SurfaceImportDecl]
    declarations: list[SurfaceDeclaration]
    location: Location
