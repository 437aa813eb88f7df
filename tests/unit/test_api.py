"""Tests for the composable API functions in instruction_classification.api."""

import pytest

from instruction_classification.api import (
    classify_source,
    dump_module_report,
    dump_report,
    module_category_counts,
    select_functions,
)
from instruction_classification.classifier import Category, ClassificationResult
from instruction_classification.parser import parse_module
from instruction_classification.report import format_report
from instruction_classification.report_types import ReportConfig, ReportStyle

MODULE_SOURCE = """\
define float @scale(float %x, <4 x float> %v) {
entry:
  %e = extractelement <4 x float> %v, i32 0
  %m = fmul float %x, %e
  %n = fneg float %m
  ret float %n
}

define i64 @mask(i64 %x, { i32, i64 } %agg) {
entry:
  %a = shl i64 %x, 3
  %b = and i64 %a, 255
  %f = extractvalue { i32, i64 } %agg, 1
  %t = trunc i64 %f to i32
  %w = zext i32 %t to i64
  %r = xor i64 %b, %w
  ret i64 %r
}
"""


class TestClassifySource:
    def test_returns_result_per_function_in_order(self):
        results = classify_source(MODULE_SOURCE)
        assert list(results) == ["scale", "mask"]
        assert all(isinstance(r, ClassificationResult) for r in results.values())

    def test_counts_for_function(self):
        scale = classify_source(MODULE_SOURCE)["scale"]
        assert scale.count(Category.VECTOR) == 1
        assert scale.count(Category.BINARY_ARITHMETIC_FLOAT) == 1
        assert scale.count(Category.UNARY_ARITHMETIC) == 1
        assert scale.count(Category.TERMINATOR) == 1
        assert scale.total == 4

    def test_function_name_scoping(self):
        results = classify_source(MODULE_SOURCE, function_name="mask")
        assert list(results) == ["mask"]
        mask = results["mask"]
        assert mask.count(Category.BITWISE_BINARY) == 3
        assert mask.count(Category.AGGREGATE) == 1
        assert mask.count(Category.CONVERSION) == 2

    def test_function_name_not_found_raises(self):
        with pytest.raises(ValueError, match="not found"):
            classify_source(MODULE_SOURCE, function_name="nonexistent")

    def test_empty_module(self):
        assert classify_source("") == {}


class TestSelectFunctions:
    def test_empty_name_keeps_all(self):
        functions = parse_module(MODULE_SOURCE)
        assert select_functions(functions, "") == functions

    def test_error_lists_available_functions(self):
        with pytest.raises(ValueError, match="scale"):
            select_functions(parse_module(MODULE_SOURCE), "missing")


class TestDumpReport:
    def test_header_and_ten_lines_per_function(self):
        text = dump_report(MODULE_SOURCE)
        blocks = text.split("\n\n")
        assert len(blocks) == 2
        assert blocks[0].split("\n")[0] == "Function 'scale':"
        assert blocks[1].split("\n")[0] == "Function 'mask':"
        assert all(len(block.split("\n")) == 11 for block in blocks)

    def test_body_matches_format_report(self):
        text = dump_report(MODULE_SOURCE, function_name="scale")
        result = classify_source(MODULE_SOURCE)["scale"]
        assert text == "Function 'scale':\n" + format_report(result)

    def test_llvm_style(self):
        text = dump_report(
            MODULE_SOURCE,
            function_name="scale",
            config=ReportConfig(style=ReportStyle.LLVM),
        )
        assert "  # vector operations: 1" in text

    def test_config_without_header(self):
        config = ReportConfig(show_function_header=False)
        text = dump_report(MODULE_SOURCE, function_name="mask", config=config)
        assert text.split("\n")[0] == "Terminator: 1"

    def test_deterministic(self):
        assert dump_report(MODULE_SOURCE) == dump_report(MODULE_SOURCE)


class TestModuleCounts:
    def test_sums_over_functions(self):
        totals = module_category_counts(MODULE_SOURCE)
        assert totals[Category.TERMINATOR] == 2
        assert totals[Category.BITWISE_BINARY] == 3
        assert sum(totals.values()) == 11

    def test_module_report_has_ten_lines(self):
        text = dump_module_report(MODULE_SOURCE)
        lines = text.split("\n")
        assert len(lines) == 10
        assert lines[0] == "Terminator: 2"

    def test_scoped_to_function(self):
        totals = module_category_counts(MODULE_SOURCE, function_name="scale")
        assert totals[Category.TERMINATOR] == 1
        assert totals[Category.BITWISE_BINARY] == 0
        assert sum(totals.values()) == 4

    def test_scoped_missing_function_raises(self):
        with pytest.raises(ValueError, match="not found"):
            module_category_counts(MODULE_SOURCE, function_name="nonexistent")

    def test_module_report_llvm_style(self):
        config = ReportConfig(style=ReportStyle.LLVM)
        text = dump_module_report(MODULE_SOURCE, "mask", config=config)
        assert text.split("\n")[4] == "  # bitwise binary operations: 3"
