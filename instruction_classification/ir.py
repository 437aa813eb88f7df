"""IR model: LLVM instructions as seen by the classifier."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Opcode(str, Enum):
    """Known LLVM instruction mnemonics.

    The host enumeration keeps growing; anything not listed here is carried
    as its raw mnemonic string instead.
    """

    # Terminators
    RET = "ret"
    BR = "br"
    SWITCH = "switch"
    INDIRECTBR = "indirectbr"
    INVOKE = "invoke"
    RESUME = "resume"
    UNREACHABLE = "unreachable"
    CLEANUPRET = "cleanupret"
    CATCHRET = "catchret"
    CATCHSWITCH = "catchswitch"
    CALLBR = "callbr"
    # Unary
    FNEG = "fneg"
    # Binary
    ADD = "add"
    FADD = "fadd"
    SUB = "sub"
    FSUB = "fsub"
    MUL = "mul"
    FMUL = "fmul"
    UDIV = "udiv"
    SDIV = "sdiv"
    FDIV = "fdiv"
    UREM = "urem"
    SREM = "srem"
    FREM = "frem"
    # Bitwise binary
    SHL = "shl"
    LSHR = "lshr"
    ASHR = "ashr"
    AND = "and"
    OR = "or"
    XOR = "xor"
    # Memory access and addressing
    ALLOCA = "alloca"
    LOAD = "load"
    STORE = "store"
    GETELEMENTPTR = "getelementptr"
    FENCE = "fence"
    CMPXCHG = "cmpxchg"
    ATOMICRMW = "atomicrmw"
    # Casts
    TRUNC = "trunc"
    ZEXT = "zext"
    SEXT = "sext"
    FPTOUI = "fptoui"
    FPTOSI = "fptosi"
    UITOFP = "uitofp"
    SITOFP = "sitofp"
    FPTRUNC = "fptrunc"
    FPEXT = "fpext"
    PTRTOINT = "ptrtoint"
    INTTOPTR = "inttoptr"
    BITCAST = "bitcast"
    ADDRSPACECAST = "addrspacecast"
    # Exception handling pads
    CLEANUPPAD = "cleanuppad"
    CATCHPAD = "catchpad"
    # Vector
    EXTRACTELEMENT = "extractelement"
    INSERTELEMENT = "insertelement"
    SHUFFLEVECTOR = "shufflevector"
    # Aggregate
    EXTRACTVALUE = "extractvalue"
    INSERTVALUE = "insertvalue"
    # Other
    ICMP = "icmp"
    FCMP = "fcmp"
    PHI = "phi"
    CALL = "call"
    SELECT = "select"
    VA_ARG = "va_arg"
    LANDINGPAD = "landingpad"
    FREEZE = "freeze"


_OPCODES_BY_MNEMONIC: dict[str, Opcode] = {op.value: op for op in Opcode}


def lookup_opcode(mnemonic: str) -> Opcode | str:
    """Return the Opcode for *mnemonic*, or the mnemonic itself if unknown."""
    return _OPCODES_BY_MNEMONIC.get(mnemonic, mnemonic)


class SourceLocation(BaseModel):
    """Line span of an instruction in the IR text (1-based, inclusive)."""

    start_line: int
    end_line: int

    def is_unknown(self) -> bool:
        return self.start_line == 0 and self.end_line == 0

    def __str__(self) -> str:
        if self.is_unknown():
            return "<unknown>"
        if self.start_line == self.end_line:
            return f"{self.start_line}"
        return f"{self.start_line}-{self.end_line}"


NO_SOURCE_LOCATION = SourceLocation(start_line=0, end_line=0)


class IRInstruction(BaseModel):
    opcode: Opcode | str = Field(union_mode="left_to_right")
    result_reg: str | None = None
    block: str | None = None  # label of the enclosing basic block
    index: int = 0  # position within the function
    text: str = ""
    source_location: SourceLocation = NO_SOURCE_LOCATION

    @property
    def mnemonic(self) -> str:
        return self.opcode.value if isinstance(self.opcode, Opcode) else self.opcode

    def __str__(self) -> str:
        if self.text:
            base = self.text
        elif self.result_reg:
            base = f"{self.result_reg} = {self.mnemonic}"
        else:
            base = self.mnemonic
        if not self.source_location.is_unknown():
            return f"{base}  # line {self.source_location}"
        return base


class IRFunction(BaseModel):
    """A defined function: its name and instructions in traversal order."""

    name: str
    instructions: list[IRInstruction] = []

    def __str__(self) -> str:
        lines = [f"define @{self.name}"]
        lines.extend(f"  {inst}" for inst in self.instructions)
        return "\n".join(lines)
