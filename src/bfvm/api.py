from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .config import RuntimeOptions
from .program import Program, Source, load_file, load_program
from .runtime import EndOfProgram, ProgramRuntime
from .streams import BufferSink, BufferSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    output: bytes
    steps: int
    runtime: ProgramRuntime


def execute(program: Program, runtime: ProgramRuntime) -> int:
    """Step runtime through program until it ends; returns instructions executed."""
    logger.debug("running %d instructions on a %d cell tape", len(program), len(runtime.memory))
    steps = 0
    while True:
        status = runtime.step(program)
        if isinstance(status, EndOfProgram):
            break
        steps += 1
    logger.debug("program finished after %d steps", steps)
    return steps


def run_program(
    program: Program,
    *,
    input_data: Union[bytes, str] = b"",
    options: Optional[RuntimeOptions] = None,
) -> RunResult:
    sink = BufferSink()
    runtime = ProgramRuntime(options, output=sink, input=BufferSource(input_data))
    steps = execute(program, runtime)
    return RunResult(output=sink.getvalue(), steps=steps, runtime=runtime)


def run_string(
    source: Source,
    *,
    input_data: Union[bytes, str] = b"",
    options: Optional[RuntimeOptions] = None,
) -> RunResult:
    return run_program(load_program(source), input_data=input_data, options=options)


def run_file(
    path: Union[str, Path],
    *,
    input_data: Union[bytes, str] = b"",
    options: Optional[RuntimeOptions] = None,
) -> RunResult:
    return run_program(load_file(path), input_data=input_data, options=options)
