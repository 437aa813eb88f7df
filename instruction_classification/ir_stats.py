"""Pure functions for computing statistics over IR instruction lists."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from .classifier import Category, ClassificationResult
from .ir import IRInstruction


def count_opcodes(instructions: list[IRInstruction]) -> dict[str, int]:
    """Return a frequency map of opcode mnemonics in the given instruction list.

    Args:
        instructions: A list of IR instructions.

    Returns:
        A dict mapping mnemonic strings to their occurrence counts.
        Empty dict for an empty input list.
    """
    return dict(Counter(inst.mnemonic for inst in instructions))


def aggregate_counts(results: Iterable[ClassificationResult]) -> dict[Category, int]:
    """Sum category counts over many classification results.

    The returned dict always holds all ten categories in report order.
    """
    totals: dict[Category, int] = {category: 0 for category in Category}
    for result in results:
        for category, count in result.counts().items():
            totals[category] += count
    return totals
