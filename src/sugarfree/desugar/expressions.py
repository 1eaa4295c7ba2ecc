"""Expression dispatcher: surface expressions to core expressions."""

from __future__ import annotations

from sugarfree.config import DesugarSettings
from sugarfree.core import ast as core
from sugarfree.core.errors import EmptyBlock, InvariantViolation, NonLetInBlock
from sugarfree.desugar import rules
from sugarfree.desugar.fresh import FreshNameGenerator
from sugarfree.desugar.patterns import desugar_pattern, pattern_alternatives
from sugarfree.desugar.types import desugar_type_expr
from sugarfree.surface.ast import (
    SurfaceApp,
    SurfaceBinOp,
    SurfaceBlock,
    SurfaceBoolLit,
    SurfaceExpr,
    SurfaceFloatLit,
    SurfaceIf,
    SurfaceIntLit,
    SurfaceLambda,
    SurfaceLet,
    SurfaceLetRec,
    SurfaceLetRecBinding,
    SurfaceList,
    SurfaceListCons,
    SurfaceListSpread,
    SurfaceMatch,
    SurfaceMatchCase,
    SurfacePattern,
    SurfacePipe,
    SurfaceRecord,
    SurfaceRecordAccess,
    SurfaceRecordEntry,
    SurfaceRecordField,
    SurfaceRecordSpread,
    SurfaceRecordUpdate,
    SurfaceStringLit,
    SurfaceTuple,
    SurfaceTypeAnnotation,
    SurfaceUnaryOp,
    SurfaceUnitLit,
    SurfaceUnsafe,
    SurfaceVar,
    SurfaceWhile,
)
from sugarfree.utils.location import UNKNOWN_LOCATION, Location


class Desugarer:
    """Rewrites surface expressions into the core language.

    Children are desugared first and the parent is then assembled by the
    matching rule in `sugarfree.desugar.rules`. All generated binder
    names come from the one `FreshNameGenerator` owned by this instance.

    Transformations performed:
    - blocks -> nested lets
    - if/else -> match on booleans
    - pipes -> application, composition -> lambdas
    - list literals and `::` -> Cons/Nil variants (with concat for spreads)
    - multi-parameter lambdas -> curried single-parameter lambdas
    - while loops -> recursive functions
    - or-patterns -> multiple match cases, list patterns -> Cons/Nil patterns
    """

    def __init__(
        self,
        gen: FreshNameGenerator | None = None,
        settings: DesugarSettings | None = None,
    ) -> None:
        self.settings = settings if settings is not None else DesugarSettings()
        self.gen = (
            gen
            if gen is not None
            else FreshNameGenerator(self.settings.fresh_sigil, self.settings.default_prefix)
        )

    def desugar(self, expr: SurfaceExpr) -> core.Expr:
        """Desugar one surface expression.

        Raises:
            DesugarError: the surface tree is structurally invalid.
        """
        match expr:
            case SurfaceIntLit(value, loc):
                return core.IntLit(value, loc)

            case SurfaceFloatLit(value, loc):
                return core.FloatLit(value, loc)

            case SurfaceStringLit(value, loc):
                return core.StringLit(value, loc)

            case SurfaceBoolLit(value, loc):
                return core.BoolLit(value, loc)

            case SurfaceUnitLit(loc):
                return core.UnitLit(loc)

            case SurfaceVar(name, loc):
                return core.Var(name, loc)

            case SurfaceLet(pattern, value, body, loc, mutable, recursive):
                return core.Let(
                    self.desugar_pattern(pattern),
                    self.desugar(value),
                    self.desugar(body),
                    loc,
                    mutable=mutable,
                    recursive=recursive,
                )

            case SurfaceLetRec(bindings, body, loc):
                return core.LetRec(
                    [self.desugar_let_rec_binding(b) for b in bindings],
                    self.desugar(body),
                    loc,
                )

            case SurfaceLambda(params, body, loc):
                return self._desugar_lambda(params, body, loc)

            case SurfaceApp(func, args, loc):
                return core.App(self.desugar(func), [self.desugar(arg) for arg in args], loc)

            case SurfaceIf(condition, then, loc, else_):
                core_condition = self.desugar(condition)
                core_then = self.desugar(then)
                core_else = self.desugar(else_) if else_ is not None else core.UnitLit(loc)
                return rules.if_to_match(core_condition, core_then, core_else, loc)

            case SurfaceMatch(scrutinee, cases, loc):
                return core.Match(
                    self.desugar(scrutinee),
                    [c for case in cases for c in self._desugar_match_case(case)],
                    loc,
                )

            case SurfaceRecord(fields, loc):
                return core.Record(self._desugar_record_entries(fields), loc)

            case SurfaceRecordAccess(record, field, loc):
                return core.RecordAccess(self.desugar(record), field, loc)

            case SurfaceRecordUpdate(record, updates, loc):
                return core.RecordUpdate(
                    self.desugar(record), self._desugar_record_entries(updates), loc
                )

            case SurfaceList(elements, loc):
                items = [
                    rules.ListItem(self.desugar(e.expr), isinstance(e, SurfaceListSpread))
                    for e in elements
                ]
                return rules.build_list(
                    items,
                    loc,
                    cons=self.settings.cons_constructor,
                    nil=self.settings.nil_constructor,
                    concat=self.settings.concat_function,
                )

            case SurfaceListCons(head, tail, loc):
                return core.Variant(
                    self.settings.cons_constructor,
                    [self.desugar(head), self.desugar(tail)],
                    loc,
                )

            case SurfaceBinOp(op, left, right, loc):
                return self._desugar_bin_op(op, left, right, loc)

            case SurfaceUnaryOp(op, operand, loc):
                if op not in core.UNARY_OP_SYMBOLS:
                    raise InvariantViolation(f"Unknown unary operator: {op}", loc)
                return core.UnaryOp(op, self.desugar(operand), loc)

            case SurfacePipe(data, func, loc):
                return rules.pipe_to_app(self.desugar(data), self.desugar(func), loc)

            case SurfaceBlock(exprs, loc):
                return self._desugar_block(exprs, loc)

            case SurfaceWhile(condition, body, loc):
                loop_name = self.gen.fresh("loop")
                return rules.while_loop(
                    self.desugar(condition), self.desugar(body), loop_name, loc
                )

            case SurfaceTypeAnnotation(inner, type_expr, loc):
                return core.TypeAnnotation(
                    self.desugar(inner), desugar_type_expr(type_expr), loc
                )

            case SurfaceUnsafe(inner, loc):
                return core.Unsafe(self.desugar(inner), loc)

            case SurfaceTuple(elements, loc):
                return core.Tuple([self.desugar(e) for e in elements], loc)

            case _:
                raise InvariantViolation(
                    f"Unknown expression kind: {type(expr).__name__}",
                    getattr(expr, "location", UNKNOWN_LOCATION),
                )

    def desugar_pattern(self, pattern: SurfacePattern) -> core.Pattern:
        return desugar_pattern(
            pattern,
            cons=self.settings.cons_constructor,
            nil=self.settings.nil_constructor,
        )

    def desugar_let_rec_binding(self, binding: SurfaceLetRecBinding) -> core.LetRecBinding:
        return core.LetRecBinding(
            self.desugar_pattern(binding.pattern),
            self.desugar(binding.value),
            binding.location,
            mutable=binding.mutable,
        )

    def _desugar_block(self, exprs: list[SurfaceExpr], loc: Location) -> core.Expr:
        """{ let x = 1; let y = 2; x + y }  =>  let x = 1 in let y = 2 in x + y

        Each let takes the location of its own binding, not the block's.
        """
        if not exprs:
            raise EmptyBlock(loc)

        *statements, last = exprs
        bindings: list[SurfaceLet] = []
        for statement in statements:
            if not isinstance(statement, SurfaceLet):
                raise NonLetInBlock(getattr(statement, "location", loc))
            bindings.append(statement)

        result = self.desugar(last)
        for binding in reversed(bindings):
            result = core.Let(
                self.desugar_pattern(binding.pattern),
                self.desugar(binding.value),
                result,
                binding.location,
                mutable=binding.mutable,
                recursive=binding.recursive,
            )
        return result

    def _desugar_lambda(
        self, params: list[SurfacePattern], body: SurfaceExpr, loc: Location
    ) -> core.Lambda:
        core_params = [self.desugar_pattern(p) for p in params]
        return rules.curry(core_params, self.desugar(body), loc)

    def _desugar_match_case(self, case: SurfaceMatchCase) -> list[core.MatchCase]:
        """Expand or-patterns into one case per alternative, sharing body and guard."""
        body = self.desugar(case.body)
        guard = self.desugar(case.guard) if case.guard is not None else None
        return [
            core.MatchCase(self.desugar_pattern(alternative), body, case.location, guard)
            for alternative in pattern_alternatives(case.pattern)
        ]

    def _desugar_record_entries(self, entries: list[SurfaceRecordEntry]) -> list[core.RecordEntry]:
        result: list[core.RecordEntry] = []
        for entry in entries:
            match entry:
                case SurfaceRecordField(name, value, loc):
                    result.append(core.RecordField(name, self.desugar(value), loc))
                case SurfaceRecordSpread(inner, loc):
                    result.append(core.RecordSpread(self.desugar(inner), loc))
                case _:
                    raise InvariantViolation(
                        f"Unknown record field kind: {type(entry).__name__}",
                        getattr(entry, "location", UNKNOWN_LOCATION),
                    )
        return result

    def _desugar_bin_op(
        self, op: str, left: SurfaceExpr, right: SurfaceExpr, loc: Location
    ) -> core.Expr:
        if op in rules.COMPOSE_OPS:
            param = self.gen.fresh("composed")
            return rules.compose(op, self.desugar(left), self.desugar(right), param, loc)

        if op == "Cons":
            return core.Variant(
                self.settings.cons_constructor,
                [self.desugar(left), self.desugar(right)],
                loc,
            )

        if op not in core.BINARY_OP_SYMBOLS:
            raise InvariantViolation(f"Unknown binary operator: {op}", loc)
        return core.BinOp(op, self.desugar(left), self.desugar(right), loc)


# =============================================================================
# Convenience Functions
# =============================================================================


def desugar(expr: SurfaceExpr, gen: FreshNameGenerator | None = None) -> core.Expr:
    """Desugar a surface expression with a new (or the given) generator."""
    return Desugarer(gen).desugar(expr)
