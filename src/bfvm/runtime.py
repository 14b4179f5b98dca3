from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from .config import RuntimeOptions
from .errors import ProgramRuntimeError, make_access_violation
from .program import (
    OP_DEC,
    OP_INC,
    OP_INPUT,
    OP_LEFT,
    OP_LOOP_END,
    OP_LOOP_START,
    OP_OUTPUT,
    OP_RIGHT,
    Program,
    is_instruction,
)
from .streams import InputSource, OutputSink, StdinSource, StdoutSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RanInstruction:
    pc: int  # index of the instruction just executed


@dataclass(frozen=True)
class EndOfProgram:
    pass


StepStatus = Union[RanInstruction, EndOfProgram]


class ProgramRuntime:
    """
    Execution state for one run of a Program.

    Holds the program counter, the memory pointer and a fixed tape of
    byte cells. Both counters wrap modulo 2**word_bits; the tape never
    grows. Every memory access is bounds-checked against the tape, so a
    pointer that has walked off either end only faults once a cell is
    actually read or written.

    The Program is passed to each step() call rather than owned, so one
    Program can drive any number of runtimes.
    """

    def __init__(
        self,
        options: Optional[RuntimeOptions] = None,
        *,
        output: Optional[OutputSink] = None,
        input: Optional[InputSource] = None,
    ):
        self.options = options or RuntimeOptions()
        self.output = output if output is not None else StdoutSink()
        self.input = input if input is not None else StdinSource()

        self._word_mask = self.options.word_modulus - 1
        self.memory = np.zeros(self.options.memory_size, dtype=np.uint8)
        self.pc = 0
        self.mem_ptr = 0
        self.fault: Optional[ProgramRuntimeError] = None

    @property
    def faulted(self) -> bool:
        return self.fault is not None

    def finished(self, program: Program) -> bool:
        return self.fault is None and self.pc >= len(program)

    # ===== Memory access =====

    def read_mem(self, loc: int) -> int:
        if 0 <= loc < len(self.memory):
            return int(self.memory[loc])
        raise make_access_violation(write=False, address=loc, memory_size=len(self.memory))

    def write_mem(self, loc: int, value: int) -> None:
        if 0 <= loc < len(self.memory):
            self.memory[loc] = value & 0xFF
            return
        raise make_access_violation(write=True, address=loc, memory_size=len(self.memory))

    def read_mem_at_ptr(self) -> int:
        return self.read_mem(self.mem_ptr)

    def write_mem_at_ptr(self, value: int) -> None:
        self.write_mem(self.mem_ptr, value)

    def _add_at_ptr(self, delta: int) -> int:
        loc = self.mem_ptr
        if not 0 <= loc < len(self.memory):
            raise make_access_violation(write=True, address=loc, memory_size=len(self.memory))
        value = (int(self.memory[loc]) + delta) & 0xFF
        self.memory[loc] = value
        return value

    def inc_mem_at_ptr(self) -> int:
        return self._add_at_ptr(1)

    def dec_mem_at_ptr(self) -> int:
        return self._add_at_ptr(-1)

    # ===== Execution =====

    def step(self, program: Program) -> StepStatus:
        if self.fault is not None:
            raise self.fault

        pc = self.pc
        next_pc = (pc + 1) & self._word_mask

        if pc >= len(program):
            return EndOfProgram()

        op = program.code[pc]
        try:
            if op == OP_RIGHT:
                self.mem_ptr = (self.mem_ptr + 1) & self._word_mask
            elif op == OP_LEFT:
                self.mem_ptr = (self.mem_ptr - 1) & self._word_mask
            elif op == OP_INC:
                self.inc_mem_at_ptr()
            elif op == OP_DEC:
                self.dec_mem_at_ptr()
            elif op == OP_OUTPUT:
                self.output.write_byte(self.read_mem_at_ptr())
            elif op == OP_INPUT:
                self.write_mem_at_ptr(self.input.read_byte())
            elif op == OP_LOOP_START:
                # skip past the matching ']' when the cell is zero
                if self.read_mem_at_ptr() == 0:
                    next_pc = (program.target(pc) + 1) & self._word_mask
            elif op == OP_LOOP_END:
                # jump back past the matching '[' while the cell is non-zero
                if self.read_mem_at_ptr() != 0:
                    next_pc = (program.target(pc) + 1) & self._word_mask
            else:
                assert not is_instruction(op), f"unhandled instruction {chr(op)!r}"
        except ProgramRuntimeError as e:
            e.pc = pc
            self.fault = e
            logger.debug("runtime fault at pc=%d ptr=%d: %s", pc, self.mem_ptr, type(e).__name__)
            raise

        self.pc = next_pc
        return RanInstruction(pc)
