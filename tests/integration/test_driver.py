#!/usr/bin/env python3
"""
End-to-end tests: source text in, rendered diagnostics out
"""

import pytest

from ferrolint import LintDriver, ParseError
from ferrolint.shared.errors import Applicability
from tests.test_utils import apply_suggestion, strip_ansi


@pytest.mark.integration
class TestScenarios:
    def test_parse_then_ok(self, driver):
        source = """fn main(input: &str, vec: Vec<i32>) {
    if let Some(value) = input.parse().ok() { vec.push(value) }
}
"""
        [diag] = driver.check(source).diagnostics
        assert diag.suggestion.replacement == "if let Ok(value) = input.parse()"
        assert diag.suggestion.applicability == Applicability.MACHINE_APPLICABLE

    def test_option_returning_get(self, driver):
        source = """fn main(map: HashMap<String, i32>, k: String) {
    if let Some(x) = map.get(&k).ok() {
    }
}
"""
        assert driver.check(source).diagnostics == []

    def test_explicit_match(self, driver):
        source = """fn main(input: &str) {
    match input.parse::<i32>().ok() {
        Some(v) => {}
        None => {}
    }
}
"""
        assert driver.check(source).diagnostics == []

    def test_tuple_payload(self, driver):
        source = """fn pair_result() -> Result<(i32, i32), String> {
    Ok((1, 2))
}

fn main() {
    if let Some((a, b)) = pair_result().ok() {
        println!("{} {}", a, b);
    }
}
"""
        [diag] = driver.check(source).diagnostics
        assert diag.suggestion.replacement == "if let Ok((a, b)) = pair_result()"

    def test_already_idiomatic(self, driver):
        source = """fn main(input: &str) {
    if let Ok(v) = input.parse::<u8>() {
    }
}
"""
        assert driver.check(source).diagnostics == []


@pytest.mark.integration
class TestRenderedOutput:
    SOURCE = """fn main() {
    let input = "42";
    if let Some(value) = input.parse::<i32>().ok() {
        println!("{}", value);
    }
}
"""

    def test_rustc_style_report(self, driver):
        result = driver.check(self.SOURCE, "src/main.rs")
        assert result.format_all(color=False).splitlines() == [
            "warning: Matching on `Some` with `ok()` is redundant",
            " --> src/main.rs:3:5",
            "  |",
            "3 |     if let Some(value) = input.parse::<i32>().ok() {",
            "  |     ^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^",
            "  |",
            "  = help: Consider matching on `Ok(value)` and removing the call to `ok` instead: "
            "`if let Ok(value) = input.parse::<i32>()`",
            "  = note: `#[warn(clippy::if_let_some_result)]` on by default",
            "",
            "warning: 1 warning emitted",
        ]

    def test_colored_report_has_same_text(self, driver):
        result = driver.check(self.SOURCE)
        assert strip_ansi(result.format_all(color=True)) == result.format_all(color=False)

    def test_fix_then_recheck(self, driver):
        result = driver.check(self.SOURCE)
        fixed = apply_suggestion(self.SOURCE, result.diagnostics[0])
        assert "if let Ok(value) = input.parse::<i32>() {" in fixed
        assert driver.check(fixed).diagnostics == []

    def test_fix_parenthesized_scrutinee_then_recheck(self, driver):
        source = self.SOURCE.replace("input.parse::<i32>().ok()", "(input.parse::<i32>().ok())")
        [diag] = driver.check(source).diagnostics
        fixed = apply_suggestion(source, diag)
        assert "if let Ok(value) = (input.parse::<i32>()) {" in fixed
        assert driver.check(fixed).diagnostics == []


@pytest.mark.integration
class TestDriver:
    def test_parse_error_propagates(self, driver):
        with pytest.raises(ParseError) as exc_info:
            driver.check("fn main() { if let Some(x) = }", "broken.rs")
        assert exc_info.value.source_file == "broken.rs"

    def test_result_exposes_intermediate_products(self, driver):
        result = driver.check("fn main(r: Result<i32, i32>) { if let Some(x) = r.ok() {} }")
        assert len(result.crate.fn_items()) == 1
        assert len(result.typeck_results) > 0

    def test_independent_drivers(self):
        source = "fn main(r: Result<i32, i32>) { if let Some(x) = r.ok() {} }"
        quiet = LintDriver({"if_let_some_result": "allow"})
        loud = LintDriver()
        assert quiet.check(source).diagnostics == []
        assert len(loud.check(source).diagnostics) == 1

    def test_clean_source(self, driver):
        result = driver.check("fn main() { let x = 1; }")
        assert result.diagnostics == []
        assert result.format_all(color=False) == ""
        assert not result.has_errors()
