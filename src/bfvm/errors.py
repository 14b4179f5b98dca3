from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


def _build_context(code: bytes, position: int, *, context: int = 12) -> str:
    start = max(0, position - context)
    end = min(len(code), position + context + 1)
    snippet = code[start:end].decode('ascii')
    caret = ' ' * (position - start) + '^'
    return f"  {snippet}\n  {caret}"


def _hint_for(message: str, *, kind: str) -> Optional[str]:
    msg = message.lower()
    if kind == 'program':
        if 'without matching beginning' in msg:
            return 'Remove the extra "]" or add the "[" that should open this loop.'
        if 'without matching end' in msg:
            return 'Every "[" needs a closing "]" later in the program.'
        return None
    if kind == 'runtime':
        if 'access violation' in msg:
            return 'The memory pointer left the tape. Check for unbalanced "<" / ">" moves.'
        if 'input' in msg:
            return 'The program asked for more input than was available.'
        return None
    return None


@dataclass
class BFVMError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ProgramError(BFVMError):
    position: int
    context: str


@dataclass
class LoopEndWithoutBeginning(ProgramError):
    pass


@dataclass
class LoopBeginningWithoutEnd(ProgramError):
    pass


@dataclass
class ProgramRuntimeError(BFVMError):
    pc: Optional[int] = None

    def __str__(self) -> str:
        if self.pc is None:
            return self.message
        head, sep, rest = self.message.partition('\n')
        return f"{head} (pc={self.pc}){sep}{rest}"


@dataclass
class MemoryAccessViolation(ProgramRuntimeError):
    address: int = 0


@dataclass
class ReadAccessViolation(MemoryAccessViolation):
    pass


@dataclass
class WriteAccessViolation(MemoryAccessViolation):
    pass


@dataclass
class InputUnavailable(ProgramRuntimeError):
    pass


def make_program_error(*, unmatched: str, code: bytes, position: int) -> ProgramError:
    if unmatched == ']':
        cls, what = LoopEndWithoutBeginning, 'loop end without matching beginning'
    elif unmatched == '[':
        cls, what = LoopBeginningWithoutEnd, 'loop start without matching end'
    else:
        raise ValueError(f"not a loop instruction: {unmatched!r}")

    ctx = _build_context(code, position)
    hint = _hint_for(what, kind='program')
    hint_block = f"\nHint: {hint}" if hint else ""
    return cls(
        message=f"ProgramError: {what} (instruction {position})\n{ctx}{hint_block}",
        position=position,
        context=ctx,
    )


def make_access_violation(*, write: bool, address: int, memory_size: int) -> MemoryAccessViolation:
    cls = WriteAccessViolation if write else ReadAccessViolation
    what = 'write access violation' if write else 'read access violation'
    hint = _hint_for(what, kind='runtime')
    hint_block = f"\nHint: {hint}" if hint else ""
    return cls(
        message=f"RuntimeError: {what} at address {address} (tape size {memory_size}){hint_block}",
        address=address,
    )


def make_input_error(reason: str) -> InputUnavailable:
    hint = _hint_for('input', kind='runtime')
    hint_block = f"\nHint: {hint}" if hint else ""
    return InputUnavailable(message=f"RuntimeError: failed to read input: {reason}{hint_block}")
