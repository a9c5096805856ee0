from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Tuple, Union

from .errors import BFFileError
from .instructions import Instruction, format_program
from .interpreter import Interpreter
from .lexer import preprocess, tokenize
from .loops import resolve_loops
from .optimizer import optimize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunOptions:
    optimize: bool = True
    max_steps: Optional[int] = None


@dataclass(frozen=True)
class Program:
    instructions: Tuple[Instruction, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def listing(self) -> str:
        return format_program(self.instructions)


@dataclass(frozen=True)
class RunResult:
    output: bytes
    steps: int
    pointer: int


def compile_string(source: str, *, options: Optional[RunOptions] = None) -> Program:
    """
    Turn source text into a runnable program.

    Steps: filter to instruction symbols, tokenize, optimize (unless
    disabled), then resolve loop targets on the final sequence. Bracket
    errors surface here, before anything runs.
    """
    opts = options or RunOptions()
    instrs = tokenize(preprocess(source))
    if opts.optimize:
        instrs = optimize(instrs)
    resolve_loops(instrs)
    return Program(tuple(instrs))


def compile_file(path: Union[str, Path], *, options: Optional[RunOptions] = None, encoding: str = "utf-8") -> Program:
    p = Path(path)
    try:
        source = p.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise BFFileError(message=f"cannot open file: {e}", path=str(p)) from e
    logger.debug("compile_file: read %d characters from %s", len(source), p)
    return compile_string(source, options=options)


def run_program(program: Program, stdin: BinaryIO, stdout: BinaryIO, *, options: Optional[RunOptions] = None) -> Interpreter:
    opts = options or RunOptions()
    vm = Interpreter(program.instructions, stdin, stdout, max_steps=opts.max_steps)
    vm.run()
    return vm


def run_string(source: str, input: Union[bytes, BinaryIO] = b"", *, options: Optional[RunOptions] = None) -> RunResult:
    program = compile_string(source, options=options)
    stdin = io.BytesIO(input) if isinstance(input, (bytes, bytearray)) else input
    stdout = io.BytesIO()
    vm = run_program(program, stdin, stdout, options=options)
    return RunResult(output=stdout.getvalue(), steps=vm.steps, pointer=vm.pointer)


def run_file(path: Union[str, Path], stdin: BinaryIO, stdout: BinaryIO, *, options: Optional[RunOptions] = None) -> int:
    program = compile_file(path, options=options)
    return run_program(program, stdin, stdout, options=options).steps
