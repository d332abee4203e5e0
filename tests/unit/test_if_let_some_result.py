#!/usr/bin/env python3
"""
Tests for IF_LET_SOME_RESULT

`if let Some(p) = e.ok()` with `e: Result<_, _>` should be reported with the
suggestion `if let Ok(p) = e`; every near miss should stay silent.
"""

import pytest

from ferrolint.shared.errors import Applicability
from tests.test_utils import apply_suggestion, lint_names, span_text


MESSAGE = "Matching on `Some` with `ok()` is redundant"


def _only(result):
    assert len(result.diagnostics) == 1, result.format_all(color=False)
    return result.diagnostics[0]


class TestRedundantOkDetected:
    """The idiom is reported with a machine-applicable rewrite"""

    def test_parse_ok_in_if_let(self, driver):
        """Test the canonical str::parse case"""
        source = """fn main() {
    let input = "42";
    if let Some(value) = input.parse::<i32>().ok() {
        println!("{}", value);
    }
}
"""
        diag = _only(driver.check(source))
        assert diag.message == MESSAGE
        assert diag.lint_name == "clippy::if_let_some_result"
        assert diag.level == "warning"
        assert span_text(source, diag) == "if let Some(value) = input.parse::<i32>().ok()"
        assert diag.suggestion.replacement == "if let Ok(value) = input.parse::<i32>()"
        assert diag.suggestion.label == (
            "Consider matching on `Ok(value)` and removing the call to `ok` instead"
        )
        assert diag.suggestion.applicability == Applicability.MACHINE_APPLICABLE

    def test_parse_without_turbofish(self, driver):
        """Test that the error and value types need not be known, only the Result"""
        source = """fn main() {
    let input = "42";
    if let Some(value) = input.parse().ok() {
    }
}
"""
        diag = _only(driver.check(source))
        assert diag.suggestion.replacement == "if let Ok(value) = input.parse()"

    def test_annotated_parameter(self, driver):
        """Test a receiver typed by a fn parameter annotation"""
        source = """fn handle(r: Result<i32, String>) {
    if let Some(x) = r.ok() {
        println!("{}", x);
    }
}
"""
        diag = _only(driver.check(source))
        assert span_text(source, diag) == "if let Some(x) = r.ok()"
        assert diag.suggestion.replacement == "if let Ok(x) = r"

    def test_annotated_let(self, driver):
        source = """fn main() {
    let r: std::result::Result<u8, String> = Ok(1);
    if let Some(x) = r.ok() {}
}
"""
        assert _only(driver.check(source)).suggestion.replacement == "if let Ok(x) = r"

    def test_call_to_fn_returning_result(self, driver):
        """Test a receiver typed by the signature of a later fn"""
        source = """fn main() {
    if let Some(n) = parse_num("7").ok() {
    }
}

fn parse_num(s: &str) -> Result<i32, String> {
    Ok(7)
}
"""
        diag = _only(driver.check(source))
        assert diag.suggestion.replacement == 'if let Ok(n) = parse_num("7")'

    def test_io_result_alias(self, driver):
        source = """fn read() -> io::Result<String> {
    read()
}

fn main() {
    if let Some(text) = read().ok() {}
}
"""
        assert _only(driver.check(source)).suggestion.replacement == "if let Ok(text) = read()"

    def test_long_method_chain(self, driver):
        """Test that the whole chain before `ok()` is kept"""
        source = """fn main(s: String) {
    if let Some(n) = s.trim().parse::<u8>().ok() {}
}
"""
        diag = _only(driver.check(source))
        assert diag.suggestion.replacement == "if let Ok(n) = s.trim().parse::<u8>()"

    def test_multi_line_chain(self, driver):
        """Test that the line break and indentation before `.ok()` are trimmed"""
        source = (
            "fn main(s: String) {\n"
            "    if let Some(n) = s\n"
            "        .trim()\n"
            "        .parse::<i64>()\n"
            "        .ok()\n"
            "    {\n"
            "    }\n"
            "}\n"
        )
        diag = _only(driver.check(source))
        assert diag.suggestion.replacement == (
            "if let Ok(n) = s\n"
            "        .trim()\n"
            "        .parse::<i64>()"
        )
        assert span_text(source, diag).endswith(".ok()")

    def test_whitespace_around_dot(self, driver):
        source = """fn main(r: Result<i32, i32>) {
    if let Some(x) = r . ok() {}
}
"""
        assert _only(driver.check(source)).suggestion.replacement == "if let Ok(x) = r"

    def test_parenthesized_receiver(self, driver):
        """Test that parentheses around the receiver are kept"""
        source = """fn main(r: Result<i32, i32>) {
    if let Some(x) = (r).ok() {}
}
"""
        assert _only(driver.check(source)).suggestion.replacement == "if let Ok(x) = (r)"

    def test_parenthesized_scrutinee(self, driver):
        """Test that parentheses around the whole `e.ok()` are covered and kept balanced"""
        source = """fn main(r: Result<i32, String>) {
    if let Some(x) = (r.ok()) {}
}
"""
        diag = _only(driver.check(source))
        assert span_text(source, diag) == "if let Some(x) = (r.ok())"
        assert diag.suggestion.replacement == "if let Ok(x) = (r)"
        assert diag.suggestion.applicability == Applicability.MACHINE_APPLICABLE

    def test_nested_parentheses(self, driver):
        source = """fn main(r: Result<i32, String>) {
    if let Some(x) = ((r).ok()) {}
}
"""
        diag = _only(driver.check(source))
        assert span_text(source, diag) == "if let Some(x) = ((r).ok())"
        assert diag.suggestion.replacement == "if let Ok(x) = ((r))"

    def test_empty_turbofish_on_ok(self, driver):
        source = """fn main(r: Result<i32, i32>) {
    if let Some(x) = r.ok::<>() {}
}
"""
        diag = _only(driver.check(source))
        assert span_text(source, diag) == "if let Some(x) = r.ok::<>()"
        assert diag.suggestion.replacement == "if let Ok(x) = r"

    def test_inner_pattern_is_verbatim(self, driver):
        """Test that the sub-pattern is copied character for character"""
        source = """fn main(r: Result<i32, i32>) {
    if let Some(mut  value) = r.ok() {}
}
"""
        diag = _only(driver.check(source))
        assert diag.suggestion.replacement == "if let Ok(mut  value) = r"
        assert "`Ok(mut  value)`" in diag.suggestion.label

    def test_tuple_inner_pattern(self, driver):
        source = """fn main(pair: Result<(i32, i32), String>) {
    if let Some((a, b)) = pair.ok() {}
}
"""
        assert _only(driver.check(source)).suggestion.replacement == "if let Ok((a, b)) = pair"

    def test_wildcard_inner_pattern(self, driver):
        source = """fn main(r: Result<i32, i32>) {
    if let Some(_) = r.ok() {}
}
"""
        assert _only(driver.check(source)).suggestion.replacement == "if let Ok(_) = r"

    def test_with_else_branch(self, driver):
        """Test that the reported span stops at `ok()` even with an else branch"""
        source = """fn main(r: Result<i32, i32>) {
    let n = if let Some(x) = r.ok() { x } else { 0 };
}
"""
        diag = _only(driver.check(source))
        assert span_text(source, diag) == "if let Some(x) = r.ok()"

    def test_else_if_let(self, driver):
        """Test that a nested `else if let` is checked on its own"""
        source = """fn main(r: Result<i32, i32>, flag: bool) {
    if flag {
    } else if let Some(x) = r.ok() {
    }
}
"""
        diag = _only(driver.check(source))
        assert span_text(source, diag) == "if let Some(x) = r.ok()"

    def test_inside_for_loop(self, driver):
        """Test the clippy documentation example"""
        source = """fn collect(iter: Vec<String>, out: Vec<i32>) {
    for i in &iter {
        if let Some(value) = i.parse().ok() {
            out.push(value);
        }
    }
}
"""
        diag = _only(driver.check(source))
        assert diag.suggestion.replacement == "if let Ok(value) = i.parse()"

    def test_inside_match_arm(self, driver):
        source = """fn main(r: Result<i32, i32>, k: i32) {
    match k {
        0 => {
            if let Some(x) = r.ok() {}
        }
        _ => {}
    }
}
"""
        _only(driver.check(source))

    def test_each_occurrence_reported(self, driver):
        source = """fn main(a: Result<i32, i32>, b: Result<bool, i32>) {
    if let Some(x) = a.ok() {}
    if let Some(y) = b.ok() {}
}
"""
        result = driver.check(source)
        assert lint_names(result.diagnostics) == ["clippy::if_let_some_result"] * 2
        assert [d.suggestion.replacement for d in result.diagnostics] == [
            "if let Ok(x) = a",
            "if let Ok(y) = b",
        ]


class TestRedundantOkNotDetected:
    """Near misses must stay silent"""

    @pytest.mark.parametrize("body", [
        # other desugarings of the same shape
        "while let Some(x) = r.ok() { break; }",
        "match r.ok() { Some(x) => {}, None => {} }",
        "for x in r.ok() {}",
        # already rewritten
        "if let Ok(x) = r {}",
        # `ok` is not the outermost call
        "if let Some(x) = r.ok().clone() {}",
        # `ok` with an argument
        "if let Some(x) = r.ok(1) {}",
        # a different method
        "if let Some(x) = r.err() {}",
        # rest pattern, no sub-pattern, two sub-patterns
        "if let Some(..) = r.ok() {}",
        "if let Some() = r.ok() {}",
        "if let Some(x, y) = r.ok() {}",
        # binding the whole Option
        "if let opt = r.ok() {}",
        # qualified variant path is compared as text
        "if let Option::Some(x) = r.ok() {}",
        # receiver is a reference to a Result
        "if let Some(x) = (&r).ok() {}",
        # scrutinee is not a method call
        "if let Some(x) = Some(1) {}",
    ])
    def test_not_reported(self, driver, body):
        source = "fn main(r: Result<i32, i32>) {\n    " + body + "\n}\n"
        result = driver.check(source)
        assert result.diagnostics == [], result.format_all(color=False)

    def test_receiver_of_unknown_type(self, driver):
        """Test that unresolved receivers are treated as not a Result"""
        source = """fn main() {
    if let Some(x) = mystery().ok() {}
}
"""
        assert driver.check(source).diagnostics == []

    def test_user_type_with_ok_method(self, driver):
        source = """fn main(w: Wrapper) {
    if let Some(x) = w.ok() {}
}
"""
        assert driver.check(source).diagnostics == []

    def test_option_receiver(self, driver):
        source = """fn main(v: Vec<i32>) {
    if let Some(x) = v.first().ok() {}
}
"""
        assert driver.check(source).diagnostics == []


class TestExpandedSource:
    """Code produced by a macro expansion is still reported, but never auto-fixed"""

    def test_expansion_needs_review(self, driver):
        source = """fn main(r: Result<i32, i32>) {
    if let Some(x) = r.ok() {}
}
"""
        diag = _only(driver.check(source, expansion="generated"))
        assert diag.span.from_expansion()
        assert diag.suggestion.applicability == Applicability.MAYBE_INCORRECT
        assert not diag.suggestion.applicability.is_machine_applicable()
        assert diag.suggestion.replacement == "if let Ok() = "

    def test_user_code_stays_machine_applicable(self, driver):
        source = """fn main(r: Result<i32, i32>) {
    if let Some(x) = r.ok() {}
}
"""
        driver.check(source, expansion="generated")
        diag = _only(driver.check(source))
        assert diag.suggestion.applicability == Applicability.MACHINE_APPLICABLE


class TestIdempotence:
    """Applying the suggestion removes the diagnostic"""

    @pytest.mark.parametrize("source", [
        """fn main() {
    let input = "42";
    if let Some(value) = input.parse::<i32>().ok() {
        println!("{}", value);
    }
}
""",
        """fn main(s: String) {
    if let Some(n) = s
        .trim()
        .parse::<u8>()
        .ok()
    {
    }
}
""",
        """fn main(r: Result<(i32, i32), i32>) {
    let n = if let Some((a, _)) = (r).ok() { a } else { 0 };
}
""",
        """fn main(r: Result<i32, String>) {
    if let Some(x) = (r.ok()) {}
}
""",
        """fn main(s: String) {
    if let Some(n) = (s.trim()
        .parse::<u8>()
        .ok()) {
    }
}
""",
    ])
    def test_fixed_source_is_clean(self, driver, source):
        diag = _only(driver.check(source))
        fixed = apply_suggestion(source, diag)
        assert "if let Ok(" in fixed
        assert driver.check(fixed).diagnostics == []

    def test_checking_twice_gives_same_result(self, driver):
        source = """fn main(r: Result<i32, i32>) {
    if let Some(x) = r.ok() {}
}
"""
        first = driver.check(source).diagnostics
        second = driver.check(source).diagnostics
        assert [(d.span, d.suggestion) for d in first] == [(d.span, d.suggestion) for d in second]
