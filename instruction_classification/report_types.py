"""Report configuration types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ReportStyle(Enum):
    """Line layout of a category report."""

    PLAIN = "plain"
    LLVM = "llvm"


@dataclass(frozen=True)
class ReportConfig:
    """Groups report emission options."""

    style: ReportStyle = ReportStyle.PLAIN
    show_function_header: bool = True
