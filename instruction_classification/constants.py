"""Named constants for IR syntax and report layout."""

from __future__ import annotations

ENTRY_BLOCK_LABEL = "entry"

COMMENT_CHAR = ";"
RESULT_ASSIGN = "="
FUNCTION_DEFINE = "define"
FUNCTION_DECLARE = "declare"
FUNCTION_END = "}"

# Prefixes that may precede the `call` mnemonic.
CALL_MARKERS: frozenset[str] = frozenset({"tail", "musttail", "notail"})

# Lines that continue the previous instruction rather than start a new one.
LANDINGPAD_CLAUSES: frozenset[str] = frozenset({"cleanup", "catch", "filter"})
EDGE_CONTINUATIONS: frozenset[str] = frozenset({"to", "unwind"})

PLAIN_LINE_TEMPLATE = "{label}: {count}"
LLVM_LINE_TEMPLATE = "  # {description}: {count}"
FUNCTION_HEADER_TEMPLATE = "Function '{name}':"

STDIN_PATH = "-"

# Non-instruction lines that may appear inside a function body.
BODY_DIRECTIVES: frozenset[str] = frozenset({"uselistorder", "uselistorder_bb"})
DEBUG_RECORD_PREFIX = "#dbg_"
