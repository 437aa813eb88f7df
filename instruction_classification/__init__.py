"""Halstead operator-category classification of LLVM IR instructions."""

from .classifier import (  # noqa: F401
    Category,
    ClassificationResult,
    categorize,
    classify,
)
from .report import format_report, write_report  # noqa: F401
from .api import (  # noqa: F401
    classify_source,
    dump_report,
    module_category_counts,
    ir_stats,
)
