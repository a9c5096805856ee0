from __future__ import annotations

from typing import List

from .errors import make_syntax_error
from .instructions import Instruction, LoopEnd, LoopStart


def resolve_loops(instrs: List[Instruction]) -> List[Instruction]:
    """
    Pair every LoopStart with its LoopEnd in place.

    Brackets nest like parentheses: a LoopEnd closes the most recently
    opened LoopStart. Afterwards ``instrs[i] == LoopStart(end=j)`` and
    ``instrs[j] == LoopEnd(start=i)`` for every pair.

    Raises:
        BFSyntaxError: on a LoopEnd with nothing to close, or when
            LoopStarts are left open at the end.
    """
    loop_starts: List[int] = []
    for i, instr in enumerate(instrs):
        if isinstance(instr, LoopStart):
            loop_starts.append(i)
        elif isinstance(instr, LoopEnd):
            if not loop_starts:
                raise make_syntax_error(message='unmatched closing bracket', instrs=instrs, index=i)
            start = loop_starts.pop()
            instrs[start] = LoopStart(end=i)
            instrs[i] = LoopEnd(start=start)

    if loop_starts:
        count = len(loop_starts)
        raise make_syntax_error(
            message=f'unmatched opening bracket(s): {count} left open',
            instrs=instrs,
            index=loop_starts[0],
        )
    return instrs
