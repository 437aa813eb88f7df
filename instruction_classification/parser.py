"""Textual LLVM IR reader.

Turns ``.ll`` source into one IRFunction per ``define``, with instructions in
the order they appear.  Only as much syntax is understood as is needed to find
function bodies, block labels and instruction mnemonics; operands are kept as
raw text.
"""

from __future__ import annotations

import logging
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .ir import IRFunction, IRInstruction, SourceLocation, lookup_opcode
from . import constants

logger = logging.getLogger(__name__)

_IDENT = r'(?:"(?:[^"\\]|\\.)*"|[-\w$.]+)'

DEFINE_PATTERN = re.compile(rf"^{constants.FUNCTION_DEFINE}\b.*?@({_IDENT})\s*\(")
LABEL_PATTERN = re.compile(rf"^({_IDENT}):")
RESULT_PATTERN = re.compile(rf"^(%{_IDENT})\s*{constants.RESULT_ASSIGN}\s*(.*)$")


class IRParseError(ValueError):
    """Raised when IR text cannot be split into functions."""


def _strip_comment(line: str) -> str:
    """Drop a trailing ``;`` comment, ignoring semicolons inside quotes."""
    in_quotes = False
    for i, ch in enumerate(line):
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == constants.COMMENT_CHAR and not in_quotes:
            return line[:i]
    return line


def _bracket_delta(text: str) -> int:
    depth = 0
    in_quotes = False
    for ch in text:
        if ch == '"':
            in_quotes = not in_quotes
        elif not in_quotes and ch == "[":
            depth += 1
        elif not in_quotes and ch == "]":
            depth -= 1
    return depth


def _unquote(name: str) -> str:
    if len(name) >= 2 and name[0] == '"' and name[-1] == '"':
        return name[1:-1]
    return name


@dataclass
class _PendingInstruction:
    """An instruction whose text may still continue on following lines."""

    mnemonic: str
    result_reg: str | None
    block: str
    start_line: int
    end_line: int
    parts: list[str] = field(default_factory=list)
    depth: int = 0

    def extend(self, text: str, line_no: int) -> None:
        self.parts.append(text)
        self.end_line = line_no
        self.depth += _bracket_delta(text)


class ModuleReader:
    """Splits LLVM IR text into functions of instructions."""

    def __init__(self):
        self._functions: list[IRFunction] = []
        self._current: IRFunction | None = None
        self._current_line = 0
        self._block = constants.ENTRY_BLOCK_LABEL
        self._pending: _PendingInstruction | None = None

    def read(self, text: str) -> list[IRFunction]:
        self._functions = []
        self._current = None
        self._pending = None

        for line_no, raw in enumerate(text.splitlines(), start=1):
            line = _strip_comment(raw).strip()
            if not line:
                continue
            if self._current is None:
                self._read_toplevel(line, line_no)
            else:
                self._read_body(line, line_no)

        if self._current is not None:
            raise IRParseError(
                f"Function '{self._current.name}' starting at line "
                f"{self._current_line} is never closed"
            )
        logger.info("Read %d function definitions", len(self._functions))
        return self._functions

    # ── top level ────────────────────────────────────────────────

    def _read_toplevel(self, line: str, line_no: int) -> None:
        if line.startswith(constants.FUNCTION_DECLARE):
            logger.debug("Skipping declaration at line %d", line_no)
            return
        match = DEFINE_PATTERN.match(line)
        if match is None:
            return
        name = _unquote(match.group(1))
        logger.debug("Function '%s' begins at line %d", name, line_no)
        self._current = IRFunction(name=name)
        self._current_line = line_no
        self._block = constants.ENTRY_BLOCK_LABEL

    # ── function bodies ──────────────────────────────────────────

    def _read_body(self, line: str, line_no: int) -> None:
        pending = self._pending
        if pending is not None and pending.depth > 0:
            pending.extend(line, line_no)
            return

        first_word = line.split(maxsplit=1)[0]
        if pending is not None and (
            first_word in constants.LANDINGPAD_CLAUSES
            or first_word in constants.EDGE_CONTINUATIONS
        ):
            pending.extend(line, line_no)
            return

        if line == constants.FUNCTION_END:
            self._flush()
            self._functions.append(self._current)
            self._current = None
            return
        if line == "{" or first_word in constants.BODY_DIRECTIVES:
            return
        if line.startswith(constants.DEBUG_RECORD_PREFIX):
            return

        label = LABEL_PATTERN.match(line)
        if label is not None:
            self._flush()
            self._block = _unquote(label.group(1))
            return

        self._flush()
        self._start_instruction(line, line_no)

    def _start_instruction(self, line: str, line_no: int) -> None:
        result_reg = None
        body = line
        match = RESULT_PATTERN.match(line)
        if match is not None:
            result_reg, body = match.group(1), match.group(2)

        words = body.split()
        while len(words) > 1 and words[0] in constants.CALL_MARKERS:
            words = words[1:]
        mnemonic = words[0] if words else body

        self._pending = _PendingInstruction(
            mnemonic=mnemonic,
            result_reg=result_reg,
            block=self._block,
            start_line=line_no,
            end_line=line_no,
        )
        self._pending.extend(line, line_no)

    def _flush(self) -> None:
        pending = self._pending
        if pending is None:
            return
        self._pending = None
        self._emit(pending)

    def _emit(self, pending: _PendingInstruction) -> IRInstruction:
        inst = IRInstruction(
            opcode=lookup_opcode(pending.mnemonic),
            result_reg=pending.result_reg,
            block=pending.block,
            index=len(self._current.instructions),
            text=" ".join(pending.parts),
            source_location=SourceLocation(
                start_line=pending.start_line, end_line=pending.end_line
            ),
        )
        self._current.instructions.append(inst)
        return inst


def parse_module(text: str) -> list[IRFunction]:
    """Parse LLVM IR *text* into its defined functions, in definition order.

    Raises:
        IRParseError: If a function body is never closed.
    """
    return ModuleReader().read(text)


def read_source(path: str | Path) -> str:
    """Return the IR text at *path*; ``-`` reads standard input."""
    if str(path) == constants.STDIN_PATH:
        logger.info("Reading IR from stdin")
        return sys.stdin.read()
    logger.info("Reading IR from %s", path)
    return Path(path).read_text(encoding="utf-8")
