"""Rewrite rules for individual sugar forms.

Each rule assembles a core node from children that the dispatcher has
already desugared, so rules never recurse themselves.
"""

from __future__ import annotations

from dataclasses import dataclass

from sugarfree.core import ast as core
from sugarfree.core.errors import InvariantViolation
from sugarfree.utils.location import Location


COMPOSE_OPS = frozenset({"ForwardCompose", "BackwardCompose"})


def if_to_match(
    condition: core.Expr, then: core.Expr, else_: core.Expr, loc: Location
) -> core.Match:
    """if c then t else e  =>  match c { true => t | false => e }"""
    return core.Match(
        condition,
        [
            core.MatchCase(core.LiteralPattern(True, loc), then, loc),
            core.MatchCase(core.LiteralPattern(False, loc), else_, loc),
        ],
        loc,
    )


def pipe_to_app(data: core.Expr, func: core.Expr, loc: Location) -> core.App:
    """data |> func  =>  func(data)

    Multi-argument targets rely on currying: `xs |> map(f)` is `map(f)(xs)`.
    """
    return core.App(func, [data], loc)


def compose(
    op: str, left: core.Expr, right: core.Expr, param: str, loc: Location
) -> core.Lambda:
    """Desugar function composition around the fresh parameter `param`.

    Forward:  f >> g  =>  λx. g(f(x))
    Backward: f << g  =>  λx. f(g(x))
    """
    arg = core.Var(param, loc)
    match op:
        case "ForwardCompose":
            body = core.App(right, [core.App(left, [arg], loc)], loc)
        case "BackwardCompose":
            body = core.App(left, [core.App(right, [arg], loc)], loc)
        case _:
            raise InvariantViolation(f"Unknown composition operator: {op}", loc)
    return core.Lambda(core.VarPattern(param, loc), body, loc)


def curry(params: list[core.Pattern], body: core.Expr, loc: Location) -> core.Lambda:
    """(p1, ..., pn) => body  =>  λp1. λp2. ... λpn. body"""
    if not params:
        raise InvariantViolation(
            "Lambda with zero parameters",
            loc,
            "Lambdas must have at least one parameter",
        )
    result = core.Lambda(params[-1], body, loc)
    for param in reversed(params[:-1]):
        result = core.Lambda(param, result, loc)
    return result


# =============================================================================
# Lists
# =============================================================================


@dataclass(frozen=True)
class ListItem:
    """A desugared list literal element, tagged with whether it was a spread."""

    expr: core.Expr
    spread: bool = False


def cons_chain(
    elements: list[core.Expr],
    loc: Location,
    tail: core.Expr | None = None,
    *,
    cons: str = "Cons",
    nil: str = "Nil",
) -> core.Expr:
    """Right-fold `elements` into Cons cells ending in `tail` (default Nil)."""
    result = tail if tail is not None else core.Variant(nil, [], loc)
    for element in reversed(elements):
        result = core.Variant(cons, [element, result], loc)
    return result


def list_segments(
    items: list[ListItem],
    loc: Location,
    *,
    cons: str = "Cons",
    nil: str = "Nil",
) -> list[core.Expr]:
    """Split items into maximal ordinary runs (as Cons chains) and spreads."""
    segments: list[core.Expr] = []
    run: list[core.Expr] = []
    for item in items:
        if not item.spread:
            run.append(item.expr)
            continue
        if run:
            segments.append(cons_chain(run, loc, cons=cons, nil=nil))
            run = []
        segments.append(item.expr)
    if run:
        segments.append(cons_chain(run, loc, cons=cons, nil=nil))
    return segments


def build_list(
    items: list[ListItem],
    loc: Location,
    *,
    cons: str = "Cons",
    nil: str = "Nil",
    concat: str = "concat",
) -> core.Expr:
    """Build a list literal from desugared items.

    []               => Nil
    [a, b]           => Cons(a, Cons(b, Nil))
    [a, ...xs]       => Cons(a, xs)
    [...xs]          => xs
    [...xs, a]       => concat(xs, Cons(a, Nil))
    [...xs, ...ys]   => concat(xs, ys)
    """
    if not any(item.spread for item in items):
        return cons_chain([item.expr for item in items], loc, cons=cons, nil=nil)

    *leading, last = items
    if last.spread and not any(item.spread for item in leading):
        # A single trailing spread becomes the tail of the chain; no concat.
        return cons_chain([item.expr for item in leading], loc, last.expr, cons=cons, nil=nil)

    segments = list_segments(items, loc, cons=cons, nil=nil)
    result = segments[-1]
    for segment in reversed(segments[:-1]):
        result = core.App(core.Var(concat, loc), [segment, result], loc)
    return result


# =============================================================================
# Loops
# =============================================================================


def while_loop(
    condition: core.Expr, body: core.Expr, loop_name: str, loc: Location
) -> core.LetRec:
    """while (c) { b }  =>  let rec loop = λ_. match c { true => let _ = b in loop(()) | false => () } in loop(())"""
    call = core.App(core.Var(loop_name, loc), [core.UnitLit(loc)], loc)
    step = core.Let(core.WildcardPattern(loc), body, call, loc)
    loop_body = if_to_match(condition, step, core.UnitLit(loc), loc)
    binding = core.LetRecBinding(
        core.VarPattern(loop_name, loc),
        core.Lambda(core.WildcardPattern(loc), loop_body, loc),
        loc,
    )
    return core.LetRec([binding], call, loc)
