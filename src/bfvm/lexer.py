from __future__ import annotations

import logging
from typing import List

from .instructions import (
    SYMBOLS,
    DecPtr,
    DecVal,
    GetChar,
    IncPtr,
    IncVal,
    Instruction,
    LoopEnd,
    LoopStart,
    PutChar,
)

logger = logging.getLogger(__name__)

_TOKENS = {
    '>': IncPtr,
    '<': DecPtr,
    '+': IncVal,
    '-': DecVal,
    '.': PutChar,
    ',': GetChar,
    '[': LoopStart,
    ']': LoopEnd,
}


def preprocess(code: str) -> str:
    """Drop every character that is not one of the eight instruction symbols."""
    filtered = ''.join(ch for ch in code if ch in SYMBOLS)
    logger.debug("preprocess: kept %d of %d characters", len(filtered), len(code))
    return filtered


def tokenize(code: str) -> List[Instruction]:
    # loop targets stay unresolved (None) until resolve_loops runs
    tokens: List[Instruction] = []
    for ch in code:
        kind = _TOKENS.get(ch)
        if kind is None:
            raise ValueError(f'Trying to tokenize invalid character: {ch!r}')
        tokens.append(kind())
    return tokens
