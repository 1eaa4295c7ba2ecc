"""Structural copy of surface type expressions into core types.

Types carry no sugar; this only changes node classes so that core trees
never reference surface nodes.
"""

from __future__ import annotations

from sugarfree.core import ast as core
from sugarfree.core.errors import InvariantViolation
from sugarfree.surface.ast import (
    SurfaceAliasType,
    SurfaceFunctionType,
    SurfaceRecordType,
    SurfaceRecordTypeDef,
    SurfaceRecordTypeField,
    SurfaceTupleType,
    SurfaceType,
    SurfaceTypeApp,
    SurfaceTypeConst,
    SurfaceTypeDefinition,
    SurfaceTypeVar,
    SurfaceUnionType,
    SurfaceVariantConstructor,
    SurfaceVariantType,
    SurfaceVariantTypeDef,
)
from sugarfree.utils.location import UNKNOWN_LOCATION


def desugar_type_expr(type_expr: SurfaceType) -> core.Type:
    match type_expr:
        case SurfaceTypeVar(name, loc):
            return core.TypeVar(name, loc)

        case SurfaceTypeConst(name, loc):
            return core.TypeConst(name, loc)

        case SurfaceTypeApp(constructor, args, loc):
            return core.TypeApp(
                desugar_type_expr(constructor),
                [desugar_type_expr(arg) for arg in args],
                loc,
            )

        case SurfaceFunctionType(params, return_, loc):
            return core.FunctionType(
                [desugar_type_expr(param) for param in params],
                desugar_type_expr(return_),
                loc,
            )

        case SurfaceRecordType(fields, loc):
            return core.RecordType([desugar_record_type_field(f) for f in fields], loc)

        case SurfaceVariantType(constructors, loc):
            return core.VariantType(
                [desugar_variant_constructor(c) for c in constructors], loc
            )

        case SurfaceUnionType(types, loc):
            return core.UnionType([desugar_type_expr(t) for t in types], loc)

        case SurfaceTupleType(elements, loc):
            return core.TupleType([desugar_type_expr(e) for e in elements], loc)

        case _:
            raise InvariantViolation(
                f"Unknown type expression kind: {type(type_expr).__name__}",
                getattr(type_expr, "location", UNKNOWN_LOCATION),
            )


def desugar_record_type_field(field: SurfaceRecordTypeField) -> core.RecordTypeField:
    return core.RecordTypeField(field.name, desugar_type_expr(field.type_expr), field.location)


def desugar_variant_constructor(ctor: SurfaceVariantConstructor) -> core.VariantConstructor:
    return core.VariantConstructor(
        ctor.name, [desugar_type_expr(arg) for arg in ctor.args], ctor.location
    )


def desugar_type_definition(definition: SurfaceTypeDefinition) -> core.TypeDefinition:
    """Copy the body of a type declaration."""
    match definition:
        case SurfaceAliasType(type_expr, loc):
            return core.AliasType(desugar_type_expr(type_expr), loc)

        case SurfaceRecordTypeDef(fields, loc):
            return core.RecordTypeDef([desugar_record_type_field(f) for f in fields], loc)

        case SurfaceVariantTypeDef(constructors, loc):
            return core.VariantTypeDef(
                [desugar_variant_constructor(c) for c in constructors], loc
            )

        case _:
            raise InvariantViolation(
                f"Unknown type definition kind: {type(definition).__name__}",
                getattr(definition, "location", UNKNOWN_LOCATION),
            )
