"""Category count reports: always ten lines, in fixed category order."""

from __future__ import annotations

from typing import TextIO

from .classifier import Category, ClassificationResult
from .report_types import ReportStyle
from . import constants


def format_line(category: Category, count: int, style: ReportStyle) -> str:
    if style == ReportStyle.LLVM:
        return constants.LLVM_LINE_TEMPLATE.format(
            description=category.description, count=count
        )
    return constants.PLAIN_LINE_TEMPLATE.format(label=category.label, count=count)


def format_counts(
    counts: dict[Category, int], style: ReportStyle = ReportStyle.PLAIN
) -> str:
    """Render category counts; categories missing from *counts* print as 0."""
    return "\n".join(
        format_line(category, counts.get(category, 0), style) for category in Category
    )


def format_report(
    result: ClassificationResult, style: ReportStyle = ReportStyle.PLAIN
) -> str:
    """Return the report for *result* as ten newline-separated lines.

    Args:
        result: A populated classification result.
        style: PLAIN gives ``"Terminator: 3"``; LLVM gives the layout of the
            original ``opt -analyze`` pass, ``"  # terminator operations: 3"``.

    Returns:
        The report text, without a trailing newline.
    """
    return format_counts(result.counts(), style)


def write_report(
    result: ClassificationResult,
    sink: TextIO,
    style: ReportStyle = ReportStyle.PLAIN,
) -> None:
    """Write the report for *result* to *sink*, one line per category."""
    sink.write(format_report(result, style) + "\n")
