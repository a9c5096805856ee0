from .api import Program, RunOptions, RunResult, compile_file, compile_string, run_file, run_string
from .errors import BFError, BFFileError, BFRuntimeError, BFStepLimitError, BFSyntaxError
from .interpreter import Interpreter, Tape
from .lexer import preprocess, tokenize
from .loops import resolve_loops
from .optimizer import optimize

__all__ = [
    'Program',
    'RunOptions',
    'RunResult',
    'compile_string',
    'compile_file',
    'run_file',
    'run_string',
    'BFError',
    'BFFileError',
    'BFRuntimeError',
    'BFStepLimitError',
    'BFSyntaxError',
    'Interpreter',
    'Tape',
    'preprocess',
    'tokenize',
    'resolve_loops',
    'optimize',
]
