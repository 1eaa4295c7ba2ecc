"""Declaration and module desugaring.

Only declaration bodies change shape. Imports, exports and declaration
order pass through; external blocks are the one declaration that expands
into several.
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from sugarfree.config import DesugarSettings
from sugarfree.core import ast as core
from sugarfree.core.errors import DesugarError, InvariantViolation
from sugarfree.desugar.expressions import Desugarer
from sugarfree.desugar.fresh import FreshNameGenerator
from sugarfree.desugar.types import desugar_type_definition, desugar_type_expr
from sugarfree.surface.ast import (
    SurfaceDeclaration,
    SurfaceExternalBlock,
    SurfaceExternalDecl,
    SurfaceExternalType,
    SurfaceExternalTypeDecl,
    SurfaceExternalValue,
    SurfaceImportDecl,
    SurfaceImportItem,
    SurfaceLetDecl,
    SurfaceLetRecGroup,
    SurfaceModule,
    SurfaceReExportDecl,
    SurfaceTypeDecl,
)
from sugarfree.utils.location import UNKNOWN_LOCATION


def _import_items(items: list[SurfaceImportItem]) -> list[core.ImportItem]:
    return [core.ImportItem(item.name, item.alias, item.is_type) for item in items]


def desugar_declaration(
    decl: SurfaceDeclaration, desugarer: Desugarer
) -> list[core.Declaration]:
    """Desugar one declaration.

    Returns a list because an external block expands into one declaration
    per item; every other declaration yields exactly one.
    """
    match decl:
        case SurfaceLetDecl(pattern, value, loc, mutable, recursive, exported):
            return [
                core.LetDecl(
                    desugarer.desugar_pattern(pattern),
                    desugarer.desugar(value),
                    loc,
                    mutable=mutable,
                    recursive=recursive,
                    exported=exported,
                )
            ]

        case SurfaceLetRecGroup(bindings, loc, exported):
            return [
                core.LetRecGroup(
                    [desugarer.desugar_let_rec_binding(b) for b in bindings],
                    loc,
                    exported=exported,
                )
            ]

        case SurfaceTypeDecl(name, params, definition, loc, exported):
            return [
                core.TypeDecl(
                    name, list(params), desugar_type_definition(definition), loc, exported=exported
                )
            ]

        case SurfaceExternalDecl(name, type_expr, js_name, loc, from_, exported):
            return [
                core.ExternalDecl(
                    name, desugar_type_expr(type_expr), js_name, loc, from_=from_, exported=exported
                )
            ]

        case SurfaceExternalTypeDecl(name, type_expr, loc, exported):
            return [
                core.ExternalTypeDecl(name, desugar_type_expr(type_expr), loc, exported=exported)
            ]

        case SurfaceExternalBlock(items, _, from_, exported):
            return [_expand_external_item(item, from_, exported) for item in items]

        case SurfaceImportDecl(items, from_, loc):
            return [core.ImportDecl(_import_items(items), from_, loc)]

        case SurfaceReExportDecl(items, from_, loc):
            return [
                core.ReExportDecl(
                    _import_items(items) if items is not None else None, from_, loc
                )
            ]

        case _:
            raise InvariantViolation(
                f"Unknown declaration kind: {type(decl).__name__}",
                getattr(decl, "location", UNKNOWN_LOCATION),
                "This may indicate a parser bug",
            )


def _expand_external_item(
    item: SurfaceExternalValue | SurfaceExternalType, from_: str | None, exported: bool
) -> core.Declaration:
    match item:
        case SurfaceExternalValue(name, type_expr, js_name, loc):
            return core.ExternalDecl(
                name, desugar_type_expr(type_expr), js_name, loc, from_=from_, exported=exported
            )
        case SurfaceExternalType(name, type_expr, loc):
            return core.ExternalTypeDecl(name, desugar_type_expr(type_expr), loc, exported=exported)
        case _:
            raise InvariantViolation(
                f"Unknown external block item: {type(item).__name__}",
                getattr(item, "location", UNKNOWN_LOCATION),
            )


def desugar_module(
    module: SurfaceModule,
    gen: FreshNameGenerator | None = None,
    settings: DesugarSettings | None = None,
) -> core.Module:
    """Desugar every declaration of a module with one shared generator.

    Any `DesugarError` aborts the whole module; no partial result is
    returned.
    """
    desugarer = Desugarer(gen, settings)
    logger.debug(
        "desugar.module.start file={} imports={} declarations={}",
        module.location.file,
        len(module.imports),
        len(module.declarations),
    )

    imports: list[core.ImportDecl] = []
    declarations: list[core.Declaration] = []
    try:
        for decl in [*module.imports, *module.declarations]:
            for desugared in desugar_declaration(decl, desugarer):
                if isinstance(desugared, core.ImportDecl):
                    imports.append(desugared)
                else:
                    declarations.append(desugared)
    except DesugarError as exc:
        logger.debug("desugar.module.failed file={} error={}", module.location.file, exc.message)
        raise

    logger.debug(
        "desugar.module.done file={} declarations={} fresh_names={}",
        module.location.file,
        len(declarations),
        desugarer.gen.counter,
    )
    return core.Module(imports, declarations, module.location)


def desugar_modules(
    modules: Iterable[SurfaceModule], settings: DesugarSettings | None = None
) -> list[core.Module]:
    """Desugar modules in the given order, each with its own generator."""
    settings = settings if settings is not None else DesugarSettings()
    return [desugar_module(module, settings=settings) for module in modules]
