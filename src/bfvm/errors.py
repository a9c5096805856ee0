from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .instructions import Instruction, to_symbol


def _build_context(instrs: Sequence[Instruction], index: int, *, context: int = 4) -> str:
    start = max(0, index - context)
    end = min(len(instrs), index + context + 1)

    parts: List[str] = []
    caret = 0
    for i in range(start, end):
        sym = to_symbol(instrs[i])
        if i == index:
            caret = sum(len(p) + 1 for p in parts)
        parts.append(sym)
    return " ".join(parts) + "\n" + " " * caret + "^"


def _hint_for(message: str) -> Optional[str]:
    msg = message.lower()
    if 'unmatched closing' in msg:
        return 'A "]" appears before any "[" it could close.'
    if 'unmatched opening' in msg:
        return 'Check for a missing "]" at the end of a loop.'
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BFSyntaxError(BFError):
    index: int
    context: str = ""


@dataclass
class BFRuntimeError(BFError):
    pc: int


@dataclass
class BFStepLimitError(BFRuntimeError):
    steps: int = 0


@dataclass
class BFFileError(BFError):
    path: str


def make_syntax_error(*, message: str, instrs: Sequence[Instruction], index: int) -> BFSyntaxError:
    ctx = _build_context(instrs, index) if instrs else ""
    hint = _hint_for(message)
    hint_block = f"\nHint: {hint}" if hint else ""
    ctx_block = f"\n{ctx}" if ctx else ""
    return BFSyntaxError(
        message=f"{message} (instruction {index}){ctx_block}{hint_block}",
        index=index,
        context=ctx,
    )
