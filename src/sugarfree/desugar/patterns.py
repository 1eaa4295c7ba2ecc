"""Pattern desugaring.

Or-patterns are expanded into alternatives at the match-case level before
any pattern reaches `desugar_pattern`; list patterns are rewritten into
Cons/Nil variant patterns.
"""

from __future__ import annotations

import itertools

from sugarfree.core import ast as core
from sugarfree.core.errors import InvariantViolation
from sugarfree.surface.ast import (
    SurfaceConstructorPattern,
    SurfaceListPattern,
    SurfaceLiteralPattern,
    SurfaceOrPattern,
    SurfacePattern,
    SurfaceRecordPattern,
    SurfaceRecordPatternField,
    SurfaceTuplePattern,
    SurfaceTypeAnnotatedPattern,
    SurfaceVarPattern,
    SurfaceWildcardPattern,
)
from sugarfree.utils.location import UNKNOWN_LOCATION, Location


def pattern_alternatives(pattern: SurfacePattern) -> list[SurfacePattern]:
    """Expand every or-pattern inside `pattern` into or-free alternatives.

    Alternatives come out in source order: `p1 | p2 | p3` gives
    `[p1, p2, p3]`, and or-patterns nested in sub-patterns are distributed
    left to right, e.g. `Some(1 | 2)` gives `[Some(1), Some(2)]`.
    """
    match pattern:
        case SurfaceOrPattern(patterns=alternatives):
            return [alt for p in alternatives for alt in pattern_alternatives(p)]

        case SurfaceConstructorPattern(constructor, args, loc):
            return [
                SurfaceConstructorPattern(constructor, list(combo), loc)
                for combo in _combinations(args)
            ]

        case SurfaceTuplePattern(elements, loc):
            return [SurfaceTuplePattern(list(combo), loc) for combo in _combinations(elements)]

        case SurfaceRecordPattern(fields, loc):
            field_alts = [
                [SurfaceRecordPatternField(f.name, p, f.location) for p in pattern_alternatives(f.pattern)]
                for f in fields
            ]
            return [SurfaceRecordPattern(list(combo), loc) for combo in itertools.product(*field_alts)]

        case SurfaceListPattern(elements=elements, location=loc, rest=rest):
            rest_alts: list[SurfacePattern | None] = (
                list(pattern_alternatives(rest)) if rest is not None else [None]
            )
            return [
                SurfaceListPattern(list(combo), loc, rest_alt)
                for combo in _combinations(elements)
                for rest_alt in rest_alts
            ]

        case SurfaceTypeAnnotatedPattern(inner, type_expr, loc):
            return [
                SurfaceTypeAnnotatedPattern(alt, type_expr, loc)
                for alt in pattern_alternatives(inner)
            ]

        case _:
            return [pattern]


def _combinations(patterns: list[SurfacePattern]) -> list[tuple[SurfacePattern, ...]]:
    return list(itertools.product(*(pattern_alternatives(p) for p in patterns)))


def desugar_pattern(
    pattern: SurfacePattern,
    *,
    cons: str = "Cons",
    nil: str = "Nil",
) -> core.Pattern:
    """Desugar an or-free surface pattern to a core pattern.

    Raises:
        InvariantViolation: an or-pattern was not expanded beforehand, or
            the pattern kind is unknown.
    """
    match pattern:
        case SurfaceVarPattern(name, loc):
            return core.VarPattern(name, loc)

        case SurfaceWildcardPattern(loc):
            return core.WildcardPattern(loc)

        case SurfaceLiteralPattern(literal, loc):
            return core.LiteralPattern(literal, loc)

        case SurfaceConstructorPattern(constructor, args, loc):
            return core.VariantPattern(
                constructor,
                [desugar_pattern(arg, cons=cons, nil=nil) for arg in args],
                loc,
            )

        case SurfaceRecordPattern(fields, loc):
            return core.RecordPattern(
                [
                    core.RecordPatternField(
                        field.name,
                        desugar_pattern(field.pattern, cons=cons, nil=nil),
                        field.location,
                    )
                    for field in fields
                ],
                loc,
            )

        case SurfaceTuplePattern(elements, loc):
            return core.TuplePattern(
                [desugar_pattern(e, cons=cons, nil=nil) for e in elements], loc
            )

        case SurfaceTypeAnnotatedPattern(inner, _, _):
            # The annotation is only consumed by the type checker's surface pass.
            return desugar_pattern(inner, cons=cons, nil=nil)

        case SurfaceListPattern(elements=elements, location=loc, rest=rest):
            return desugar_list_pattern(elements, rest, loc, cons=cons, nil=nil)

        case SurfaceOrPattern(location=loc):
            raise InvariantViolation(
                "Or-pattern reached pattern desugaring",
                loc,
                "Or-patterns must be expanded into separate match cases first",
            )

        case _:
            raise InvariantViolation(
                f"Unknown pattern kind: {type(pattern).__name__}",
                getattr(pattern, "location", UNKNOWN_LOCATION),
                "This may indicate a parser bug",
            )


def desugar_list_pattern(
    elements: list[SurfacePattern],
    rest: SurfacePattern | None,
    loc: Location,
    *,
    cons: str = "Cons",
    nil: str = "Nil",
) -> core.Pattern:
    """Rewrite `[p1, ..., pn, ...r]` as `Cons(p1, ... Cons(pn, r))`.

    Without a rest pattern the tail is `Nil`; `[...r]` is just `r`.
    """
    if rest is not None:
        tail = desugar_pattern(rest, cons=cons, nil=nil)
    else:
        tail = core.VariantPattern(nil, [], loc)

    for element in reversed(elements):
        tail = core.VariantPattern(
            cons, [desugar_pattern(element, cons=cons, nil=nil), tail], loc
        )
    return tail
