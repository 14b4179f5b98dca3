from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Union

from .errors import ProgramError, make_program_error

logger = logging.getLogger(__name__)

INSTRUCTIONS = b"><+-.,[]"

OP_RIGHT = ord('>')
OP_LEFT = ord('<')
OP_INC = ord('+')
OP_DEC = ord('-')
OP_OUTPUT = ord('.')
OP_INPUT = ord(',')
OP_LOOP_START = ord('[')
OP_LOOP_END = ord(']')

Source = Union[bytes, bytearray, str]


def is_instruction(byte: int) -> bool:
    return byte in INSTRUCTIONS


def filter_source(source: Source) -> bytes:
    """Strip everything that is not one of the eight instructions."""
    if isinstance(source, str):
        source = source.encode('utf-8')
    return bytes(b for b in source if is_instruction(b))


def resolve_loop_links(code: bytes) -> Dict[int, int]:
    """
    Pair every '[' with its matching ']'.

    The returned table maps both directions, so links[links[i]] == i for
    every bracket index. Indices refer to the filtered instruction stream.

    Raises:
        LoopEndWithoutBeginning: a ']' was reached with no open loop.
        LoopBeginningWithoutEnd: a '[' was still open at the end.
    """
    links: Dict[int, int] = {}
    open_loops: List[int] = []

    for pos, op in enumerate(code):
        if op == OP_LOOP_START:
            open_loops.append(pos)
        elif op == OP_LOOP_END:
            if not open_loops:
                raise make_program_error(unmatched=']', code=code, position=pos)
            start = open_loops.pop()
            links[start] = pos
            links[pos] = start

    if open_loops:
        raise make_program_error(unmatched='[', code=code, position=open_loops[-1])

    return links


@dataclass(frozen=True)
class Program:
    code: bytes
    loop_links: Mapping[int, int]

    def __len__(self) -> int:
        return len(self.code)

    def target(self, pos: int) -> int:
        return self.loop_links[pos]

    @classmethod
    def from_source(cls, source: Source) -> "Program":
        return load_program(source)


def load_program(source: Source) -> Program:
    code = filter_source(source)
    try:
        links = resolve_loop_links(code)
    except ProgramError as e:
        logger.debug("rejected program at instruction %d: %s", e.position, type(e).__name__)
        raise

    logger.debug("loaded program: %d instructions, %d loops", len(code), len(links) // 2)
    return Program(code=code, loop_links=MappingProxyType(links))


def load_file(path: Union[str, Path]) -> Program:
    p = Path(path)
    return load_program(p.read_bytes())
