"""Composable API functions for the instruction classification pipelines.

Each function corresponds to a CLI workflow (per-function reports,
--aggregate, opcode stats) but is callable programmatically without argparse.
"""

from __future__ import annotations

import logging

from .classifier import Category, ClassificationResult, classify
from .ir import IRFunction
from .ir_stats import aggregate_counts, count_opcodes
from .parser import parse_module
from .report import format_counts, format_report
from .report_types import ReportConfig
from . import constants

logger = logging.getLogger(__name__)


def select_functions(functions: list[IRFunction], function_name: str) -> list[IRFunction]:
    """Scope *functions* to *function_name*, or return them all if it is empty.

    Raises:
        ValueError: If no function with the given name is defined.
    """
    if not function_name:
        return functions
    logger.info("Extracting function '%s' from IR", function_name)
    selected = [fn for fn in functions if fn.name == function_name]
    if not selected:
        raise ValueError(
            f"Function '{function_name}' not found. "
            f"Available: {[fn.name for fn in functions]}"
        )
    return selected


def classify_function(function: IRFunction) -> ClassificationResult:
    logger.info(
        "Classifying function '%s' (%d instructions)",
        function.name,
        len(function.instructions),
    )
    return classify(function.instructions)


def classify_source(
    source: str,
    function_name: str = "",
) -> dict[str, ClassificationResult]:
    """Parse LLVM IR text and classify each defined function.

    Args:
        source: The ``.ll`` text.
        function_name: If non-empty, classify only this function.

    Returns:
        Function name → classification result, in definition order.
    """
    functions = select_functions(parse_module(source), function_name)
    return {fn.name: classify_function(fn) for fn in functions}


def dump_report(
    source: str,
    function_name: str = "",
    config: ReportConfig | None = None,
) -> str:
    """Classify *source* and return a report block per function.

    Args:
        source: The ``.ll`` text.
        function_name: If non-empty, scope to this function.
        config: Report options; defaults to ReportConfig().

    Returns:
        For each function, an optional ``Function '<name>':`` header followed
        by its ten category lines; blocks are separated by blank lines.
    """
    config = config or ReportConfig()
    blocks = []
    for name, result in classify_source(source, function_name).items():
        body = format_report(result, config.style)
        if config.show_function_header:
            header = constants.FUNCTION_HEADER_TEMPLATE.format(name=name)
            body = f"{header}\n{body}"
        blocks.append(body)
    return "\n\n".join(blocks)


def module_category_counts(source: str, function_name: str = "") -> dict[Category, int]:
    """Category counts summed over the functions defined in *source*.

    Raises:
        ValueError: If *function_name* is given and not defined.
    """
    return aggregate_counts(classify_source(source, function_name).values())


def dump_module_report(
    source: str,
    function_name: str = "",
    config: ReportConfig | None = None,
) -> str:
    """Ten-line report of the category counts summed over the selected functions."""
    config = config or ReportConfig()
    return format_counts(module_category_counts(source, function_name), config.style)


def ir_stats(source: str, function_name: str = "") -> dict[str, int]:
    """Parse *source* and return opcode frequency counts.

    Args:
        source: The ``.ll`` text.
        function_name: If non-empty, count only this function.

    Returns:
        A dict mapping opcode mnemonics to their occurrence counts.
    """
    functions = select_functions(parse_module(source), function_name)
    return count_opcodes([inst for fn in functions for inst in fn.instructions])
