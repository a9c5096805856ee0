from __future__ import annotations

import logging
from typing import BinaryIO, Dict, Optional, Sequence

from .errors import BFRuntimeError, BFStepLimitError
from .instructions import (
    CELL_MASK,
    PC_MAX,
    PTR_MAX,
    PTR_MIN,
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


class Tape:
    """Sparse byte tape: unbounded in both directions, zero where never written."""

    def __init__(self) -> None:
        self.cells: Dict[int, int] = {}

    def get(self, pos: int) -> int:
        return self.cells.get(pos, 0)

    def set(self, pos: int, value: int) -> None:
        self.cells[pos] = value & CELL_MASK

    def add(self, pos: int, amount: int) -> None:
        self.cells[pos] = (self.cells.get(pos, 0) + amount) & CELL_MASK

    def snapshot(self) -> Dict[int, int]:
        return dict(self.cells)

    def __len__(self) -> int:
        return len(self.cells)


class Interpreter:
    """
    Executes a resolved program against byte streams.

    State is (pc, pointer, tape). Execution stops normally once pc runs past
    the last instruction. ``LoopStart`` jumps to its ``LoopEnd`` when the
    current cell is zero (pc is then advanced past it); ``LoopEnd`` always
    jumps back to its ``LoopStart``, which re-tests the cell.

    Reading at end of input leaves the current cell unchanged.
    """

    def __init__(
        self,
        program: Sequence[Instruction],
        input: BinaryIO,
        output: BinaryIO,
        *,
        max_steps: Optional[int] = None,
    ) -> None:
        self.program = tuple(program)
        self.input = input
        self.output = output
        self.max_steps = max_steps
        self.tape = Tape()
        self.pointer = 0
        self.pc = 0
        self.steps = 0

    # ===== I/O =====

    def _put(self) -> None:
        data = bytes([self.tape.get(self.pointer)])
        try:
            self.output.write(data)
            flush = getattr(self.output, 'flush', None)
            if flush is not None:
                flush()
        except (OSError, ValueError) as e:
            raise BFRuntimeError(message=f"output failed: {e}", pc=self.pc) from e

    def _get(self) -> None:
        try:
            data = self.input.read(1)
        except (OSError, ValueError) as e:
            raise BFRuntimeError(message=f"input failed: {e}", pc=self.pc) from e
        if data:
            self.tape.set(self.pointer, data[0])

    # ===== Main loop =====

    def step(self) -> None:
        """Execute the instruction at pc."""
        instr = self.program[self.pc]

        if isinstance(instr, IncPtr):
            pos = self.pointer + instr.amount
            if pos > PTR_MAX:
                raise BFRuntimeError(message="pointer overflow", pc=self.pc)
            self.pointer = pos
        elif isinstance(instr, DecPtr):
            pos = self.pointer - instr.amount
            if pos < PTR_MIN:
                raise BFRuntimeError(message="pointer underflow", pc=self.pc)
            self.pointer = pos
        elif isinstance(instr, IncVal):
            self.tape.add(self.pointer, instr.amount)
        elif isinstance(instr, DecVal):
            self.tape.add(self.pointer, -instr.amount)
        elif isinstance(instr, PutChar):
            self._put()
        elif isinstance(instr, GetChar):
            self._get()
        elif isinstance(instr, LoopStart):
            if self.tape.get(self.pointer) == 0:
                self.pc = instr.end
        elif isinstance(instr, LoopEnd):
            self.pc = instr.start
            return
        else:
            raise TypeError(f"not an instruction: {instr!r}")

        if self.pc >= PC_MAX:
            raise BFRuntimeError(message="program counter overflow", pc=self.pc)
        self.pc += 1

    def run(self) -> int:
        """Run until the program halts; returns the number of steps executed."""
        n = len(self.program)
        while self.pc < n:
            if self.max_steps is not None and self.steps >= self.max_steps:
                raise BFStepLimitError(
                    message=f"step limit of {self.max_steps} exceeded",
                    pc=self.pc,
                    steps=self.steps,
                )
            self.step()
            self.steps += 1
        logger.debug("run: halted after %d steps, %d cells touched", self.steps, len(self.tape))
        return self.steps
