"""Tests for pattern desugaring and or-pattern expansion."""

import pytest

from sugarfree.core import ast as core
from sugarfree.core.errors import InvariantViolation
from sugarfree.desugar.patterns import desugar_pattern, pattern_alternatives
from sugarfree.surface.ast import (
    SurfaceBinOp,
    SurfaceConstructorPattern,
    SurfaceIntLit,
    SurfaceListPattern,
    SurfaceLiteralPattern,
    SurfaceMatch,
    SurfaceMatchCase,
    SurfaceOrPattern,
    SurfaceRecordPattern,
    SurfaceRecordPatternField,
    SurfaceStringLit,
    SurfaceTuplePattern,
    SurfaceTypeAnnotatedPattern,
    SurfaceTypeConst,
    SurfaceVar,
    SurfaceVarPattern,
    SurfaceWildcardPattern,
)


def lit(value, loc):
    return SurfaceLiteralPattern(value, loc)


def pvar(name, loc):
    return SurfaceVarPattern(name, loc)


class TestListPatterns:
    """Tests for [p1, ..., ...rest] patterns."""

    def test_empty(self, loc):
        assert desugar_pattern(SurfaceListPattern([], loc)) == core.VariantPattern("Nil", [], loc)

    def test_fixed_length(self, loc):
        """[x, y] => Cons(x, Cons(y, Nil))"""
        result = desugar_pattern(SurfaceListPattern([pvar("x", loc), pvar("y", loc)], loc))
        assert str(result) == "Cons(x, Cons(y, Nil))"

    def test_with_rest(self, loc):
        """[x, ...rest] => Cons(x, rest)"""
        result = desugar_pattern(SurfaceListPattern([pvar("x", loc)], loc, pvar("rest", loc)))
        assert result == core.VariantPattern("Cons", [core.VarPattern("x", loc), core.VarPattern("rest", loc)], loc)

    def test_rest_only(self, loc):
        """[...r] => r"""
        assert desugar_pattern(SurfaceListPattern([], loc, pvar("r", loc))) == core.VarPattern("r", loc)

    def test_nested_in_constructor(self, loc):
        pattern = SurfaceConstructorPattern("Some", [SurfaceListPattern([SurfaceWildcardPattern(loc)], loc)], loc)
        assert str(desugar_pattern(pattern)) == "Some(Cons(_, Nil))"

    def test_configured_constructors(self, loc):
        result = desugar_pattern(SurfaceListPattern([pvar("x", loc)], loc), cons="Link", nil="End")
        assert str(result) == "Link(x, End)"


class TestOtherPatterns:
    def test_type_annotation_is_stripped(self, loc):
        """(x: Int) => x"""
        pattern = SurfaceTypeAnnotatedPattern(pvar("x", loc), SurfaceTypeConst("Int", loc), loc)
        assert desugar_pattern(pattern) == core.VarPattern("x", loc)

    def test_record_pattern(self, loc):
        pattern = SurfaceRecordPattern([SurfaceRecordPatternField("name", pvar("n", loc), loc)], loc)
        assert str(desugar_pattern(pattern)) == "{ name: n }"

    def test_tuple_pattern(self, loc):
        pattern = SurfaceTuplePattern([pvar("a", loc), lit(1, loc)], loc)
        assert desugar_pattern(pattern) == core.TuplePattern([core.VarPattern("a", loc), core.LiteralPattern(1, loc)], loc)

    def test_or_pattern_rejected(self, loc):
        """Or-patterns must be expanded before pattern desugaring."""
        with pytest.raises(InvariantViolation) as exc_info:
            desugar_pattern(SurfaceOrPattern([lit(1, loc), lit(2, loc)], loc))
        assert exc_info.value.message == "Or-pattern reached pattern desugaring"

    def test_nested_or_pattern_rejected(self, loc):
        pattern = SurfaceConstructorPattern("Some", [SurfaceOrPattern([lit(1, loc), lit(2, loc)], loc)], loc)
        with pytest.raises(InvariantViolation):
            desugar_pattern(pattern)


class TestPatternAlternatives:
    """Tests for or-pattern distribution."""

    def test_plain_pattern(self, loc):
        pattern = pvar("x", loc)
        assert pattern_alternatives(pattern) == [pattern]

    def test_flat_or(self, loc):
        alts = pattern_alternatives(SurfaceOrPattern([lit(1, loc), lit(2, loc), lit(3, loc)], loc))
        assert alts == [lit(1, loc), lit(2, loc), lit(3, loc)]

    def test_nested_or_flattens(self, loc):
        inner = SurfaceOrPattern([lit(2, loc), lit(3, loc)], loc)
        alts = pattern_alternatives(SurfaceOrPattern([lit(1, loc), inner], loc))
        assert alts == [lit(1, loc), lit(2, loc), lit(3, loc)]

    def test_distributes_through_constructor(self, loc):
        """Some(1 | 2) => Some(1), Some(2)"""
        pattern = SurfaceConstructorPattern("Some", [SurfaceOrPattern([lit(1, loc), lit(2, loc)], loc)], loc)
        alts = pattern_alternatives(pattern)
        assert [str(desugar_pattern(a)) for a in alts] == ["Some(1)", "Some(2)"]

    def test_tuple_product_order(self, loc):
        """Alternatives are enumerated left to right."""
        pattern = SurfaceTuplePattern(
            [SurfaceOrPattern([lit(1, loc), lit(2, loc)], loc), SurfaceOrPattern([lit("a", loc), lit("b", loc)], loc)],
            loc,
        )
        rendered = [str(desugar_pattern(a)) for a in pattern_alternatives(pattern)]
        assert rendered == ['(1, "a")', '(1, "b")', '(2, "a")', '(2, "b")']

    def test_list_rest(self, loc):
        pattern = SurfaceListPattern([pvar("x", loc)], loc, SurfaceOrPattern([pvar("r", loc), SurfaceWildcardPattern(loc)], loc))
        rendered = [str(desugar_pattern(a)) for a in pattern_alternatives(pattern)]
        assert rendered == ["Cons(x, r)", "Cons(x, _)"]


class TestMatchDesugaring:
    """Tests for or-pattern expansion in match expressions."""

    def test_or_pattern_expands_to_cases(self, desugarer, loc):
        """1 | 2 | 3 => "small" becomes three cases sharing one body."""
        case = SurfaceMatchCase(
            SurfaceOrPattern([lit(1, loc), lit(2, loc), lit(3, loc)], loc), SurfaceStringLit("small", loc), loc
        )
        other = SurfaceMatchCase(SurfaceWildcardPattern(loc), SurfaceStringLit("large", loc), loc)
        result = desugarer.desugar(SurfaceMatch(SurfaceVar("n", loc), [case, other], loc))

        assert [str(c.pattern) for c in result.cases] == ["1", "2", "3", "_"]
        assert result.cases[0].body is result.cases[1].body
        assert result.cases[1].body is result.cases[2].body
        assert str(result) == 'match n { 1 => "small" | 2 => "small" | 3 => "small" | _ => "large" }'

    def test_guard_is_shared(self, desugarer, loc):
        guard = SurfaceBinOp("GreaterThan", SurfaceVar("x", loc), SurfaceIntLit(0, loc), loc)
        case = SurfaceMatchCase(
            SurfaceConstructorPattern(
                "Pair", [SurfaceOrPattern([pvar("x", loc), pvar("x", loc)], loc), SurfaceWildcardPattern(loc)], loc
            ),
            SurfaceVar("x", loc),
            loc,
            guard,
        )
        result = desugarer.desugar(SurfaceMatch(SurfaceVar("p", loc), [case], loc))

        assert len(result.cases) == 2
        assert all(str(c.guard) == "(x > 0)" for c in result.cases)
        assert result.cases[0].guard is result.cases[1].guard

    def test_cases_keep_order_and_location(self, desugarer, loc):
        case = SurfaceMatchCase(SurfaceOrPattern([lit(True, loc), lit(False, loc)], loc), SurfaceIntLit(0, loc), loc)
        result = desugarer.desugar(SurfaceMatch(SurfaceVar("b", loc), [case], loc))
        assert [c.pattern for c in result.cases] == [core.LiteralPattern(True, loc), core.LiteralPattern(False, loc)]
        assert all(c.location == loc for c in result.cases)
