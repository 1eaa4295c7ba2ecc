"""Core language: the reduced tree consumed by the type checker."""

from sugarfree.core.ast import Declaration, Expr, Module, Pattern, Type
from sugarfree.core.errors import (
    DesugarError,
    EmptyBlock,
    InvariantViolation,
    NonLetInBlock,
)

__all__ = [
    # AST
    "Expr",
    "Pattern",
    "Type",
    "Declaration",
    "Module",
    # Errors
    "DesugarError",
    "EmptyBlock",
    "NonLetInBlock",
    "InvariantViolation",
]
