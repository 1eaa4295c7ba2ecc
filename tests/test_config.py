"""Tests for desugarer settings."""

import pytest
from pydantic import ValidationError

from sugarfree.config import DesugarSettings, load_settings
from sugarfree.desugar.expressions import Desugarer
from sugarfree.surface.ast import SurfaceBinOp, SurfaceVar


class TestDesugarSettings:
    def test_defaults(self):
        settings = DesugarSettings(_env_file=None)
        assert settings.fresh_sigil == "$"
        assert settings.default_prefix == "tmp"
        assert settings.concat_function == "concat"
        assert settings.cons_constructor == "Cons"
        assert settings.nil_constructor == "Nil"

    def test_environment_override(self, monkeypatch):
        """SUGARFREE_* variables override defaults."""
        monkeypatch.setenv("SUGARFREE_CONCAT_FUNCTION", "append")
        assert load_settings().concat_function == "append"

    def test_keyword_override(self):
        assert load_settings(nil_constructor="Empty").nil_constructor == "Empty"

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            DesugarSettings(_env_file=None, fresh_sigil="")

    def test_desugarer_uses_sigil(self, loc):
        """Fresh names are built from the configured sigil."""
        desugarer = Desugarer(settings=DesugarSettings(_env_file=None, fresh_sigil="%"))
        result = desugarer.desugar(SurfaceBinOp("ForwardCompose", SurfaceVar("f", loc), SurfaceVar("g", loc), loc))
        assert result.param.name == "%composed0"
