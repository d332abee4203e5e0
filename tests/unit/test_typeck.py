#!/usr/bin/env python3
"""
Tests for type inference and written-type lowering
"""

import pytest

from ferrolint.lint import paths
from ferrolint.shared.nodes import Let, MethodCall, PathExpr
from ferrolint.shared.types import AdtType, RefType, TupleType, I32, STR, UNKNOWN
from ferrolint.typeck import TypeInferencePass, lower_type
from tests.test_utils import find_nodes


def _infer(parser, source):
    crate = parser.parse(source)
    return crate, TypeInferencePass().run(crate)


def _method_type(parser, source, method_name):
    """Rendered type of the last call to `method_name`, or None when unknown"""
    crate, results = _infer(parser, source)
    calls = [c for c in find_nodes(crate, MethodCall) if c.method_name == method_name]
    assert calls, f"no call to {method_name}"
    ty = results.expr_ty_opt(calls[-1])
    return None if ty is None else str(ty)


def _path_types(parser, source, name):
    crate, results = _infer(parser, source)
    found = [p for p in find_nodes(crate, PathExpr) if p.qpath.path.render() == name]
    return [str(results.expr_ty(p)) for p in found]


class TestMethodCalls:
    @pytest.mark.parametrize("source,method,expected", [
        ("fn f(r: Result<i32, String>) { r.ok(); }", "ok", "Option<i32>"),
        ("fn f(r: Result<i32, String>) { r.err(); }", "err", "Option<String>"),
        ('fn f() { "7".parse::<u8>(); }', "parse", "Result<u8, _>"),
        ('fn f() { "7".parse(); }', "parse", "Result<_, _>"),
        ("fn f(s: String) { s.trim().parse::<i64>().ok(); }", "ok", "Option<i64>"),
        ("fn f(v: Vec<i32>) { v.first(); }", "first", "Option<&i32>"),
        ("fn f(v: &Vec<i32>) { v.pop(); }", "pop", "Option<i32>"),
        ("fn f(m: HashMap<String, u8>) { m.get(k); }", "get", "Option<&u8>"),
        ("fn f(o: Option<&String>) { o.cloned(); }", "cloned", "Option<String>"),
        ("fn f(o: Option<i32>) { o.ok_or(\"none\"); }", "ok_or", "Result<i32, &str>"),
        ("fn f(r: &Result<i32, i32>) { r.ok(); }", "ok", "Option<i32>"),
        ("fn f(w: Wrapper) { w.clone(); }", "clone", "Wrapper"),
    ])
    def test_builtin_method(self, parser, source, method, expected):
        assert _method_type(parser, source, method) == expected

    @pytest.mark.parametrize("source,method", [
        ("fn f() { mystery().ok(); }", "ok"),
        ("fn f(w: Wrapper) { w.ok(); }", "ok"),
        ("fn f(r: Result<i32, i32>) { r.frobnicate(); }", "frobnicate"),
    ])
    def test_unknown_method_has_no_type(self, parser, source, method):
        assert _method_type(parser, source, method) is None


class TestBindings:
    def test_literal_types(self, parser):
        source = 'fn f() { let a = 1; let b = "s"; let c = \'c\'; let d = true; a; b; c; d; }'
        crate, results = _infer(parser, source)
        rendered = [str(results.expr_ty(p)) for p in find_nodes(crate, PathExpr)]
        assert rendered == ["i32", "&str", "char", "bool"]

    def test_annotation_wins_over_initializer(self, parser):
        assert _path_types(parser, "fn f() { let x: u8 = 1; x; }", "x") == ["u8"]

    def test_constructors(self, parser):
        source = "fn f() { let a = Some(1); let b = Ok(\"x\"); let c = Err(2); let d = None; a; b; c; d; }"
        assert _path_types(parser, source, "a") == ["Option<i32>"]
        assert _path_types(parser, source, "b") == ["Result<&str, _>"]
        assert _path_types(parser, source, "c") == ["Result<_, i32>"]
        assert _path_types(parser, source, "d") == ["Option<_>"]

    def test_qualified_constructor(self, parser):
        assert _path_types(parser, "fn f() { let a = Option::Some(1); a; }", "a") == ["Option<i32>"]

    def test_if_let_binds_payload(self, parser):
        source = "fn f(r: Result<(u8, String), i32>) { if let Ok((a, b)) = r { a; b; } else { } }"
        assert _path_types(parser, source, "a") == ["u8"]
        assert _path_types(parser, source, "b") == ["String"]

    def test_err_payload(self, parser):
        source = "fn f(r: Result<u8, String>) { match r { Ok(v) => v, Err(e) => e.len() }; }"
        assert _path_types(parser, source, "e") == ["String"]

    def test_for_over_reference(self, parser):
        source = "fn f(items: &Vec<String>) { for s in items { s; } }"
        assert _path_types(parser, source, "s") == ["&String"]

    def test_for_over_array(self, parser):
        source = "fn f() { for n in [1, 2, 3] { n; } }"
        assert _path_types(parser, source, "n") == ["i32"]

    def test_try_operator_unwraps(self, parser):
        source = "fn f(s: &str) -> Result<u8, String> { let n = s.parse::<u8>()?; n; Ok(n) }"
        assert _path_types(parser, source, "n") == ["u8", "u8"]

    def test_tuple_field(self, parser):
        source = "fn f(p: (i32, String)) { let b = p.1; b; }"
        assert _path_types(parser, source, "b") == ["String"]

    def test_deref(self, parser):
        assert _path_types(parser, "fn f(r: &i64) { let v = *r; v; }", "v") == ["i64"]

    def test_block_value(self, parser):
        source = "fn f(r: Result<i32, i32>) { let v = match r { Ok(x) => x, _ => 0 }; v; }"
        assert _path_types(parser, source, "v") == ["i32"]


class TestScopes:
    def test_shadowing(self, parser):
        source = 'fn f() { let x = 1; x; let x = "s"; x; }'
        assert _path_types(parser, source, "x") == ["i32", "&str"]

    def test_inner_block_does_not_leak(self, parser):
        source = 'fn f() { let x = 1; { let x = "s"; x; } x; }'
        assert _path_types(parser, source, "x") == ["&str", "i32"]

    def test_params_are_local_to_their_fn(self, parser):
        source = "fn a(x: u8) { x; }\nfn b() { x; }"
        assert _path_types(parser, source, "x") == ["u8", "_"]

    def test_call_before_definition(self, parser):
        source = "fn main() { let v = later(); v; }\nfn later() -> Option<bool> { None }"
        assert _path_types(parser, source, "v") == ["Option<bool>"]

    def test_every_expression_recorded(self, parser):
        crate, results = _infer(parser, "fn f() { let a = (1, 2); }")
        [let] = [s for s in crate.fn_items()[0].body.stmts if isinstance(s, Let)]
        assert results.expr_ty(let.init) == TupleType((I32, I32))
        # block, tuple, two literals
        assert len(results) == 4


class TestLowerType:
    def _lower(self, parser, written):
        crate = parser.parse(f"fn f(x: {written}) {{}}")
        return lower_type(crate.fn_items()[0].params[0].ty)

    @pytest.mark.parametrize("written", [
        "Result<i32, String>",
        "std::result::Result<i32, String>",
        "core::result::Result<i32, String>",
    ])
    def test_result_spellings(self, parser, written):
        ty = self._lower(parser, written)
        assert ty.path == paths.RESULT
        assert ty.args == (I32, AdtType(paths.STRING))

    @pytest.mark.parametrize("written,err_path", [
        ("io::Result<u8>", paths.IO_ERROR),
        ("std::io::Result<u8>", paths.IO_ERROR),
        ("fmt::Result", paths.FMT_ERROR),
    ])
    def test_result_aliases(self, parser, written, err_path):
        ty = self._lower(parser, written)
        assert ty.path == paths.RESULT
        assert ty.arg(1) == AdtType(err_path)

    def test_fmt_result_is_unit(self, parser):
        assert str(self._lower(parser, "fmt::Result")) == "Result<(), Error>"

    def test_references_and_slices(self, parser):
        assert self._lower(parser, "&str") == RefType(STR)
        assert str(self._lower(parser, "&mut [u8]")) == "&mut [u8]"

    def test_user_type(self, parser):
        ty = self._lower(parser, "Wrapper<i32>")
        assert ty.path == ("crate", "Wrapper")
        assert ty.path != paths.RESULT

    def test_user_type_named_like_a_module_path(self, parser):
        assert self._lower(parser, "my::Result<i32>").path == ("crate", "my", "Result")

    def test_inferred(self, parser):
        assert self._lower(parser, "_") == UNKNOWN

    def test_missing(self):
        assert lower_type(None) == UNKNOWN
