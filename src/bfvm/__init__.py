__version__ = "0.1.0"

from .config import RuntimeOptions
from .errors import (
    BFVMError,
    InputUnavailable,
    LoopBeginningWithoutEnd,
    LoopEndWithoutBeginning,
    ProgramError,
    ProgramRuntimeError,
    ReadAccessViolation,
    WriteAccessViolation,
)
from .program import Program, load_file, load_program
from .runtime import EndOfProgram, ProgramRuntime, RanInstruction
from .api import RunResult, execute, run_file, run_program, run_string

__all__ = [
    'RuntimeOptions',
    'BFVMError',
    'ProgramError',
    'LoopBeginningWithoutEnd',
    'LoopEndWithoutBeginning',
    'ProgramRuntimeError',
    'ReadAccessViolation',
    'WriteAccessViolation',
    'InputUnavailable',
    'Program',
    'load_program',
    'load_file',
    'ProgramRuntime',
    'RanInstruction',
    'EndOfProgram',
    'RunResult',
    'execute',
    'run_program',
    'run_string',
    'run_file',
]
