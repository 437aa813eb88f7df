"""Instruction classification into fixed Halstead operator categories.

The categories follow the instruction groups of the LLVM language reference
(https://llvm.org/docs/LangRef.html#instruction-reference).  Every opcode maps
to exactly one category; anything the table does not know lands in OTHER, so
classification never fails as the host opcode set grows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from .ir import IRInstruction, Opcode, lookup_opcode

logger = logging.getLogger(__name__)


class Category(Enum):
    """The ten operator categories, in report order."""

    TERMINATOR = ("Terminator", "terminator operations")
    UNARY_ARITHMETIC = ("UnaryArithmetic", "unary operations")
    BINARY_ARITHMETIC_INTEGER = ("BinaryArithmeticInteger", "binary operations")
    BINARY_ARITHMETIC_FLOAT = ("BinaryArithmeticFloat", "float binary operations")
    BITWISE_BINARY = ("BitwiseBinary", "bitwise binary operations")
    VECTOR = ("Vector", "vector operations")
    AGGREGATE = ("Aggregate", "aggregate operations")
    MEMORY_AND_ADDRESSING = (
        "MemoryAndAddressing",
        "memory access and addressing operations",
    )
    CONVERSION = ("Conversion", "conversion operations")
    OTHER = ("Other", "other operations")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def description(self) -> str:
        return self.value[1]


OPCODE_FAMILIES: Mapping[Category, frozenset[Opcode]] = MappingProxyType(
    {
        Category.TERMINATOR: frozenset(
            {
                Opcode.RET,
                Opcode.BR,
                Opcode.SWITCH,
                Opcode.INDIRECTBR,
                Opcode.INVOKE,
                Opcode.CALLBR,
                Opcode.RESUME,
                Opcode.CATCHSWITCH,
                Opcode.CATCHRET,
                Opcode.CLEANUPRET,
                Opcode.UNREACHABLE,
            }
        ),
        Category.UNARY_ARITHMETIC: frozenset({Opcode.FNEG}),
        Category.BINARY_ARITHMETIC_INTEGER: frozenset(
            {
                Opcode.ADD,
                Opcode.SUB,
                Opcode.MUL,
                Opcode.UDIV,
                Opcode.SDIV,
                Opcode.UREM,
                Opcode.SREM,
            }
        ),
        Category.BINARY_ARITHMETIC_FLOAT: frozenset(
            {Opcode.FADD, Opcode.FSUB, Opcode.FMUL, Opcode.FREM, Opcode.FDIV}
        ),
        Category.BITWISE_BINARY: frozenset(
            {Opcode.SHL, Opcode.LSHR, Opcode.ASHR, Opcode.AND, Opcode.OR, Opcode.XOR}
        ),
        Category.VECTOR: frozenset(
            {Opcode.EXTRACTELEMENT, Opcode.INSERTELEMENT, Opcode.SHUFFLEVECTOR}
        ),
        Category.AGGREGATE: frozenset({Opcode.EXTRACTVALUE, Opcode.INSERTVALUE}),
        Category.MEMORY_AND_ADDRESSING: frozenset(
            {
                Opcode.ALLOCA,
                Opcode.LOAD,
                Opcode.STORE,
                Opcode.FENCE,
                Opcode.CMPXCHG,
                Opcode.ATOMICRMW,
                Opcode.GETELEMENTPTR,
            }
        ),
        Category.CONVERSION: frozenset(
            {
                Opcode.TRUNC,
                Opcode.ZEXT,
                Opcode.SEXT,
                Opcode.FPTRUNC,
                Opcode.FPEXT,
                Opcode.FPTOUI,
                Opcode.FPTOSI,
                Opcode.UITOFP,
                Opcode.SITOFP,
                Opcode.PTRTOINT,
                Opcode.INTTOPTR,
                Opcode.BITCAST,
                Opcode.ADDRSPACECAST,
            }
        ),
    }
)


def build_lookup(
    families: Mapping[Category, frozenset[Opcode]],
) -> dict[Opcode, Category]:
    """Invert *families* into an opcode → category table.

    Raises:
        ValueError: If an opcode is listed under more than one category, or
            if OTHER is given an explicit family.
    """
    if Category.OTHER in families:
        raise ValueError("OTHER is the fallback category and takes no opcodes")
    lookup: dict[Opcode, Category] = {}
    for category, opcodes in families.items():
        for opcode in opcodes:
            if opcode in lookup:
                raise ValueError(
                    f"Opcode '{opcode.value}' listed under both "
                    f"{lookup[opcode].label} and {category.label}"
                )
            lookup[opcode] = category
    return lookup


OPCODE_CATEGORIES: Mapping[Opcode, Category] = MappingProxyType(
    build_lookup(OPCODE_FAMILIES)
)


def categorize(opcode: Opcode | str) -> Category:
    """Return the category of *opcode*; unknown opcodes are OTHER."""
    if not isinstance(opcode, Opcode):
        opcode = lookup_opcode(opcode)
    return OPCODE_CATEGORIES.get(opcode, Category.OTHER)


@dataclass(frozen=True)
class ClassificationResult:
    """Per-category instructions of one function, in traversal order."""

    operations: Mapping[Category, tuple[IRInstruction, ...]] = field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        # Every category present, in report order, read-only.
        normalised = {
            category: tuple(self.operations.get(category, ()))
            for category in Category
        }
        object.__setattr__(self, "operations", MappingProxyType(normalised))

    def __getitem__(self, category: Category) -> tuple[IRInstruction, ...]:
        return self.operations[category]

    def count(self, category: Category) -> int:
        return len(self.operations[category])

    def counts(self) -> dict[Category, int]:
        """Category → count for all ten categories, in report order."""
        return {category: len(self.operations[category]) for category in Category}

    @property
    def total(self) -> int:
        return sum(len(ops) for ops in self.operations.values())


def classify(instructions: Iterable[IRInstruction]) -> ClassificationResult:
    """Partition *instructions* into categories in a single forward pass."""
    buckets: dict[Category, list[IRInstruction]] = {
        category: [] for category in Category
    }
    for inst in instructions:
        category = categorize(inst.opcode)
        if category is Category.OTHER and not isinstance(inst.opcode, Opcode):
            logger.debug("Unrecognised opcode '%s' classified as Other", inst.opcode)
        buckets[category].append(inst)

    return ClassificationResult(operations=buckets)
