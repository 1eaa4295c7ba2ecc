"""Tests for declaration and module desugaring."""

import pytest

from sugarfree.core import ast as core
from sugarfree.core.errors import EmptyBlock
from sugarfree.desugar.expressions import Desugarer
from sugarfree.desugar.module import desugar_declaration, desugar_module, desugar_modules
from sugarfree.surface.ast import (
    SurfaceBinOp,
    SurfaceBlock,
    SurfaceExternalBlock,
    SurfaceExternalDecl,
    SurfaceExternalType,
    SurfaceExternalValue,
    SurfaceFunctionType,
    SurfaceImportDecl,
    SurfaceImportItem,
    SurfaceIntLit,
    SurfaceLetDecl,
    SurfaceLetRecBinding,
    SurfaceLetRecGroup,
    SurfaceList,
    SurfaceListElement,
    SurfaceModule,
    SurfaceReExportDecl,
    SurfaceTypeConst,
    SurfaceTypeDecl,
    SurfaceTypeVar,
    SurfaceVar,
    SurfaceVariantConstructor,
    SurfaceVariantTypeDef,
    SurfaceVarPattern,
)


def compose_decl(name, loc, exported=False):
    value = SurfaceBinOp("ForwardCompose", SurfaceVar("f", loc), SurfaceVar("g", loc), loc)
    return SurfaceLetDecl(SurfaceVarPattern(name, loc), value, loc, exported=exported)


class TestDeclarations:
    """Tests for single declarations."""

    def test_let_decl(self, desugarer, loc):
        decl = SurfaceLetDecl(
            SurfaceVarPattern("xs", loc), SurfaceList([SurfaceListElement(SurfaceIntLit(1, loc))], loc), loc,
            mutable=True, exported=True,
        )
        [result] = desugar_declaration(decl, desugarer)

        assert result == core.LetDecl(
            core.VarPattern("xs", loc),
            core.Variant("Cons", [core.IntLit(1, loc), core.Variant("Nil", [], loc)], loc),
            loc,
            mutable=True,
            exported=True,
        )

    def test_let_rec_group(self, desugarer, loc):
        group = SurfaceLetRecGroup(
            [SurfaceLetRecBinding(SurfaceVarPattern("loop", loc), SurfaceVar("loop", loc), loc)], loc, exported=True
        )
        [result] = desugar_declaration(group, desugarer)
        assert isinstance(result, core.LetRecGroup)
        assert result.exported is True
        assert result.bindings[0].pattern == core.VarPattern("loop", loc)

    def test_type_decl(self, desugarer, loc):
        """Variant type definitions are copied constructor by constructor."""
        decl = SurfaceTypeDecl(
            "Option",
            ["T"],
            SurfaceVariantTypeDef(
                [SurfaceVariantConstructor("Some", [SurfaceTypeVar("T", loc)], loc), SurfaceVariantConstructor("None", [], loc)],
                loc,
            ),
            loc,
            exported=True,
        )
        [result] = desugar_declaration(decl, desugarer)

        assert result == core.TypeDecl(
            "Option",
            ["T"],
            core.VariantTypeDef(
                [core.VariantConstructor("Some", [core.TypeVar("T", loc)], loc), core.VariantConstructor("None", [], loc)],
                loc,
            ),
            loc,
            exported=True,
        )

    def test_external_decl(self, desugarer, loc):
        decl = SurfaceExternalDecl(
            "log",
            SurfaceFunctionType([SurfaceTypeConst("String", loc)], SurfaceTypeConst("Unit", loc), loc),
            "console.log",
            loc,
        )
        [result] = desugar_declaration(decl, desugarer)
        assert result.js_name == "console.log"
        assert str(result.type_expr) == "(String) -> Unit"

    def test_external_block_expands(self, desugarer, loc):
        """Each block item becomes its own declaration inheriting from_ and exported."""
        block = SurfaceExternalBlock(
            [
                SurfaceExternalValue("readFile", SurfaceTypeConst("Reader", loc), "readFileSync", loc),
                SurfaceExternalType("Buffer", SurfaceTypeConst("Bytes", loc), loc),
            ],
            loc,
            from_="node:fs",
            exported=True,
        )
        results = desugar_declaration(block, desugarer)

        assert results == [
            core.ExternalDecl(
                "readFile", core.TypeConst("Reader", loc), "readFileSync", loc, from_="node:fs", exported=True
            ),
            core.ExternalTypeDecl("Buffer", core.TypeConst("Bytes", loc), loc, exported=True),
        ]

    def test_re_export_all(self, desugarer, loc):
        [result] = desugar_declaration(SurfaceReExportDecl(None, "./util", loc), desugarer)
        assert result == core.ReExportDecl(None, "./util", loc)

    def test_re_export_items(self, desugarer, loc):
        decl = SurfaceReExportDecl([SurfaceImportItem("map", "fmap")], "./list", loc)
        [result] = desugar_declaration(decl, desugarer)
        assert result.items == [core.ImportItem("map", "fmap", False)]


class TestModule:
    """Tests for whole-module desugaring."""

    def test_imports_and_exports_preserved(self, loc):
        module = SurfaceModule(
            [SurfaceImportDecl([SurfaceImportItem("Option", is_type=True), SurfaceImportItem("map")], "./std", loc)],
            [compose_decl("first", loc, exported=True), compose_decl("second", loc)],
            loc,
        )
        result = desugar_module(module)

        assert result.imports == [
            core.ImportDecl([core.ImportItem("Option", None, True), core.ImportItem("map", None, False)], "./std", loc)
        ]
        assert [d.pattern.name for d in result.declarations] == ["first", "second"]
        assert [d.exported for d in result.declarations] == [True, False]
        assert result.location == loc

    def test_generator_shared_across_declarations(self, loc):
        """Fresh names never repeat within one module."""
        module = SurfaceModule([], [compose_decl("first", loc), compose_decl("second", loc)], loc)
        result = desugar_module(module)
        assert [d.value.param.name for d in result.declarations] == ["$composed0", "$composed1"]

    def test_external_block_flattened_in_place(self, loc):
        block = SurfaceExternalBlock(
            [
                SurfaceExternalValue("a", SurfaceTypeConst("Int", loc), "a", loc),
                SurfaceExternalValue("b", SurfaceTypeConst("Int", loc), "b", loc),
            ],
            loc,
        )
        module = SurfaceModule([], [compose_decl("before", loc), block, compose_decl("after", loc)], loc)
        result = desugar_module(module)

        kinds = [type(d).__name__ for d in result.declarations]
        assert kinds == ["LetDecl", "ExternalDecl", "ExternalDecl", "LetDecl"]

    def test_import_among_declarations_goes_to_imports(self, loc):
        module = SurfaceModule(
            [], [SurfaceImportDecl([SurfaceImportItem("x")], "./x", loc), compose_decl("f", loc)], loc
        )
        result = desugar_module(module)
        assert len(result.imports) == 1
        assert len(result.declarations) == 1

    def test_error_aborts_module(self, loc):
        module = SurfaceModule(
            [], [SurfaceLetDecl(SurfaceVarPattern("x", loc), SurfaceBlock([], loc), loc)], loc
        )
        with pytest.raises(EmptyBlock):
            desugar_module(module)

    def test_explicit_generator(self, loc):
        desugarer = Desugarer()
        module = SurfaceModule([], [compose_decl("f", loc)], loc)
        result = desugar_module(module, gen=desugarer.gen)
        assert result.declarations[0].value.param.name == "$composed0"
        assert desugarer.gen.counter == 1


class TestManyModules:
    def test_each_module_gets_its_own_generator(self, loc):
        modules = [
            SurfaceModule([], [compose_decl("f", loc)], loc),
            SurfaceModule([], [compose_decl("g", loc)], loc),
        ]
        results = desugar_modules(modules)
        assert [m.declarations[0].value.param.name for m in results] == ["$composed0", "$composed0"]

    def test_empty(self):
        assert desugar_modules([]) == []
