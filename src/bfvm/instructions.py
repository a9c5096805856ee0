from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

SYMBOLS = "><+-.,[]"

# machine widths: 64-bit signed tape addresses, 64-bit unsigned pc, 8-bit cells
PTR_MIN = -(1 << 63)
PTR_MAX = (1 << 63) - 1
PC_MAX = (1 << 64) - 1
CELL_MASK = 0xFF


# ---------------- Instruction variants ----------------
@dataclass(frozen=True)
class IncPtr:
    amount: int = 1


@dataclass(frozen=True)
class DecPtr:
    amount: int = 1


@dataclass(frozen=True)
class IncVal:
    amount: int = 1


@dataclass(frozen=True)
class DecVal:
    amount: int = 1


@dataclass(frozen=True)
class PutChar:
    pass


@dataclass(frozen=True)
class GetChar:
    pass


@dataclass(frozen=True)
class LoopStart:
    end: Optional[int] = None  # index of the matching LoopEnd


@dataclass(frozen=True)
class LoopEnd:
    start: Optional[int] = None  # index of the matching LoopStart


Instruction = Union[IncPtr, DecPtr, IncVal, DecVal, PutChar, GetChar, LoopStart, LoopEnd]

# kinds that carry an amount and may be coalesced
AMOUNT_KINDS = (IncPtr, DecPtr, IncVal, DecVal)


def wrap_ptr(n: int) -> int:
    """Wrap n into the signed 64-bit range used for pointer amounts."""
    n &= (1 << 64) - 1
    return n - (1 << 64) if n > PTR_MAX else n


# ---------------- Listing ----------------
def to_symbol(instr: Instruction) -> str:
    if isinstance(instr, IncPtr):
        sym = ">"
    elif isinstance(instr, DecPtr):
        sym = "<"
    elif isinstance(instr, IncVal):
        sym = "+"
    elif isinstance(instr, DecVal):
        sym = "-"
    elif isinstance(instr, PutChar):
        return "."
    elif isinstance(instr, GetChar):
        return ","
    elif isinstance(instr, LoopStart):
        return "["
    elif isinstance(instr, LoopEnd):
        return "]"
    else:
        raise TypeError(f"not an instruction: {instr!r}")
    return sym if instr.amount == 1 else f"{sym}{instr.amount}"


def format_program(instrs: Iterable[Instruction]) -> str:
    """Render instructions as a space separated listing, e.g. ``+4 >2 [ . ]``."""
    out: List[str] = [to_symbol(i) for i in instrs]
    return " ".join(out)
