"""Tests for report emission: format_report, format_counts, write_report."""

import io

from instruction_classification.classifier import Category, classify
from instruction_classification.ir import IRInstruction
from instruction_classification.report import (
    format_counts,
    format_report,
    write_report,
)
from instruction_classification.report_types import ReportStyle

EMPTY_REPORT = """\
Terminator: 0
UnaryArithmetic: 0
BinaryArithmeticInteger: 0
BinaryArithmeticFloat: 0
BitwiseBinary: 0
Vector: 0
Aggregate: 0
MemoryAndAddressing: 0
Conversion: 0
Other: 0"""


def _classify(*mnemonics):
    return classify(IRInstruction(opcode=m, index=i) for i, m in enumerate(mnemonics))


class TestFormatReport:
    def test_empty_input_prints_all_zeroes(self):
        assert format_report(_classify()) == EMPTY_REPORT

    def test_single_return(self):
        lines = format_report(_classify("ret")).split("\n")
        assert lines[0] == "Terminator: 1"
        assert all(line.endswith(": 0") for line in lines[1:])

    def test_mixed_sequence(self):
        report = format_report(_classify("add", "add", "fdiv", "load", "future_op"))
        assert report.split("\n") == [
            "Terminator: 0",
            "UnaryArithmetic: 0",
            "BinaryArithmeticInteger: 2",
            "BinaryArithmeticFloat: 1",
            "BitwiseBinary: 0",
            "Vector: 0",
            "Aggregate: 0",
            "MemoryAndAddressing: 1",
            "Conversion: 0",
            "Other: 1",
        ]

    def test_bitwise_and_vector(self):
        report = format_report(_classify("shl", "and", "extractelement"))
        assert "BitwiseBinary: 2" in report.split("\n")
        assert "Vector: 1" in report.split("\n")

    def test_always_ten_lines(self):
        for mnemonics in [(), ("ret",), ("phi", "phi", "call", "select")]:
            assert len(format_report(_classify(*mnemonics)).split("\n")) == 10

    def test_report_is_deterministic(self):
        mnemonics = ("br", "add", "load", "store", "icmp", "ret")
        assert format_report(_classify(*mnemonics)) == format_report(
            _classify(*mnemonics)
        )


class TestLlvmStyle:
    def test_matches_original_pass_layout(self):
        report = format_report(_classify("ret", "alloca"), ReportStyle.LLVM)
        lines = report.split("\n")
        assert lines[0] == "  # terminator operations: 1"
        assert lines[7] == "  # memory access and addressing operations: 1"
        assert lines[9] == "  # other operations: 0"
        assert len(lines) == 10


class TestFormatCounts:
    def test_missing_categories_print_zero(self):
        report = format_counts({Category.VECTOR: 4})
        assert "Vector: 4" in report
        assert report.count(": 0") == 9


class TestWriteReport:
    def test_writes_to_text_sink(self):
        sink = io.StringIO()
        write_report(_classify("fneg"), sink)
        text = sink.getvalue()
        assert text.endswith("\n")
        assert "UnaryArithmetic: 1" in text
        assert text == format_report(_classify("fneg")) + "\n"
