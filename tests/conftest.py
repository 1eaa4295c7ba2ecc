"""Test configuration and shared fixtures."""

import pytest

from sugarfree.config import DesugarSettings
from sugarfree.desugar.expressions import Desugarer
from sugarfree.desugar.fresh import FreshNameGenerator
from sugarfree.utils.location import Location

_SETTINGS_ENV = (
    "SUGARFREE_FRESH_SIGIL",
    "SUGARFREE_DEFAULT_PREFIX",
    "SUGARFREE_CONCAT_FUNCTION",
    "SUGARFREE_CONS_CONSTRUCTOR",
    "SUGARFREE_NIL_CONSTRUCTOR",
    "SUGARFREE_LOG_FILTER",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def loc() -> Location:
    return Location("test.sf", 1, 1)


@pytest.fixture
def gen() -> FreshNameGenerator:
    return FreshNameGenerator()


@pytest.fixture
def desugarer(gen: FreshNameGenerator) -> Desugarer:
    return Desugarer(gen, DesugarSettings(_env_file=None))
