"""Desugaring pass: surface trees to core trees."""

from sugarfree.desugar.expressions import Desugarer, desugar
from sugarfree.desugar.fresh import FreshNameGenerator
from sugarfree.desugar.module import desugar_declaration, desugar_module, desugar_modules
from sugarfree.desugar.patterns import desugar_pattern, pattern_alternatives

__all__ = [
    "Desugarer",
    "FreshNameGenerator",
    "desugar",
    "desugar_declaration",
    "desugar_module",
    "desugar_modules",
    "desugar_pattern",
    "pattern_alternatives",
]
