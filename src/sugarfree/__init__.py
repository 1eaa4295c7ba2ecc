"""Desugaring pass from surface syntax to the core language."""

from sugarfree.config import DesugarSettings, load_settings
from sugarfree.core.errors import DesugarError, EmptyBlock, InvariantViolation, NonLetInBlock
from sugarfree.desugar import (
    Desugarer,
    FreshNameGenerator,
    desugar,
    desugar_module,
    desugar_modules,
)
from sugarfree.utils.location import Location

__all__ = [
    "DesugarSettings",
    "Desugarer",
    "DesugarError",
    "EmptyBlock",
    "FreshNameGenerator",
    "InvariantViolation",
    "Location",
    "NonLetInBlock",
    "desugar",
    "desugar_module",
    "desugar_modules",
    "load_settings",
]

__version__ = "0.1.0"
