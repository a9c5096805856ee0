#
# Peephole optimizer for tokenized programs.
#
#   1: cancelling pairs   (>< <> +- -+ with unit amounts are dropped)
#   2: run coalescing     (>>> -> >3, +++ -> +3; I/O and loops are left alone)
#
# Both passes work on unresolved programs: loop targets are assigned
# afterwards by resolve_loops, since removing instructions shifts indices.
#
from __future__ import annotations

import logging
from typing import List

from .instructions import (
    AMOUNT_KINDS,
    CELL_MASK,
    DecPtr,
    DecVal,
    IncPtr,
    IncVal,
    Instruction,
    wrap_ptr,
)

logger = logging.getLogger(__name__)

_OPPOSITES = {
    IncPtr(1): DecPtr(1),
    DecPtr(1): IncPtr(1),
    IncVal(1): DecVal(1),
    DecVal(1): IncVal(1),
}


# ---------------- Cancelling pairs ----------------
def cancel_pairs(instrs: List[Instruction]) -> List[Instruction]:
    """
    Remove adjacent unit moves/adjusts that undo each other.

    Removing a pair can make its neighbours adjacent, so ``+>-<+<`` style
    nests collapse completely. The scan keeps the surviving prefix on a
    stack and checks each new instruction against its top, which reaches
    the same result as rescanning from the start after every removal, for
    pointer and value pairs alike.
    """
    out: List[Instruction] = []
    for instr in instrs:
        if out and _OPPOSITES.get(out[-1]) == instr:
            out.pop()
            continue
        out.append(instr)
    return out


# ---------------- Run coalescing ----------------
def _combine(kind: type, total: int) -> Instruction:
    if kind in (IncVal, DecVal):
        return kind(total & CELL_MASK)
    return kind(wrap_ptr(total))


def coalesce_sequences(instrs: List[Instruction]) -> List[Instruction]:
    """Combine runs of identical amount-bearing instructions into one."""
    out: List[Instruction] = []
    i = 0
    while i < len(instrs):
        cur = instrs[i]
        if not isinstance(cur, AMOUNT_KINDS):
            out.append(cur)
            i += 1
            continue
        j = i + 1
        total = cur.amount
        while j < len(instrs) and instrs[j] == cur:
            total += cur.amount
            j += 1
        out.append(cur if j == i + 1 else _combine(type(cur), total))
        i = j
    return out


def optimize(instrs: List[Instruction]) -> List[Instruction]:
    before = len(instrs)
    out = cancel_pairs(instrs)
    out = coalesce_sequences(out)
    logger.debug("optimize: %d -> %d instructions", before, len(out))
    return out
