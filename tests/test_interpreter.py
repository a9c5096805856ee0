#!/usr/bin/env python3
"""
Execution engine tests.
"""

import sys
import os
import io
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfvm.errors import BFRuntimeError, BFStepLimitError
from bfvm.instructions import PTR_MAX, PTR_MIN, DecPtr, DecVal, GetChar, IncPtr, IncVal, PutChar
from bfvm.interpreter import Interpreter, Tape
from bfvm.lexer import tokenize
from bfvm.loops import resolve_loops


class BrokenStream(io.RawIOBase):
    def readable(self):
        return True

    def writable(self):
        return True

    def read(self, size=-1):
        raise OSError("device gone")

    def write(self, data):
        raise OSError("disk full")


def execute(code, data=b"", **kwargs):
    commands = resolve_loops(tokenize(code))
    out = io.BytesIO()
    vm = Interpreter(commands, io.BytesIO(data), out, **kwargs)
    vm.run()
    return vm, out.getvalue()


def test_tape_defaults_to_zero():
    tape = Tape()
    assert tape.get(10**12) == 0
    assert tape.get(-5) == 0
    assert len(tape) == 0


def test_tape_wraps_values():
    tape = Tape()
    tape.add(3, -1)
    assert tape.get(3) == 255
    tape.add(3, 2)
    assert tape.get(3) == 1
    assert tape.snapshot() == {3: 1}


def test_program_run():
    # reads 2 chars, increments them, and prints them at the end
    _, out = execute("++[>[>],+[<]>-]>[.>]", b"31abc")
    assert out == b"42"


def test_cell_wraparound():
    vm, out = execute("-.+.")
    assert out == bytes([255, 0])
    assert vm.tape.get(0) == 0


def test_negative_addresses():
    vm, _ = execute("<<<+++>>>-")
    assert vm.pointer == 0
    assert vm.tape.get(-3) == 3
    assert vm.tape.get(0) == 255


def test_input_eof_leaves_cell_unchanged():
    vm, out = execute("+++++,.", b"")
    assert out == bytes([5])
    assert vm.tape.get(0) == 5


def test_input_reads_one_byte_each():
    _, out = execute(",.,.,.", b"ab")
    assert out == b"abb"


def test_skips_loop_on_zero():
    vm, out = execute("[.+]+.")
    assert out == bytes([1])
    assert vm.steps == 3


def test_pointer_overflow():
    vm = Interpreter([IncPtr(PTR_MAX), IncPtr(1)], io.BytesIO(), io.BytesIO())
    with pytest.raises(BFRuntimeError) as exc:
        vm.run()
    assert str(exc.value) == "pointer overflow"
    assert exc.value.pc == 1


def test_pointer_underflow():
    vm = Interpreter([DecPtr(-PTR_MIN), DecPtr(1)], io.BytesIO(), io.BytesIO())
    with pytest.raises(BFRuntimeError) as exc:
        vm.run()
    assert str(exc.value) == "pointer underflow"


def test_output_failure():
    vm = Interpreter([IncVal(1), PutChar()], io.BytesIO(), BrokenStream())
    with pytest.raises(BFRuntimeError) as exc:
        vm.run()
    assert str(exc.value).startswith("output failed")


def test_input_failure():
    vm = Interpreter([GetChar()], BrokenStream(), io.BytesIO())
    with pytest.raises(BFRuntimeError) as exc:
        vm.run()
    assert str(exc.value).startswith("input failed")


def test_step_limit():
    with pytest.raises(BFStepLimitError) as exc:
        execute("+[]", max_steps=100)
    assert exc.value.steps == 100


def test_amount_bearing_instructions():
    vm = Interpreter([IncVal(200), IncVal(100), IncPtr(5), DecVal(3), DecPtr(2)], io.BytesIO(), io.BytesIO())
    assert vm.run() == 5
    assert vm.tape.get(0) == 44
    assert vm.tape.get(5) == 253
    assert vm.pointer == 3
