from __future__ import annotations

import sys
from typing import BinaryIO, Optional, Protocol, Union

from .errors import make_input_error


class OutputSink(Protocol):
    def write_byte(self, value: int) -> None:
        ...


class InputSource(Protocol):
    def read_byte(self) -> int:
        ...


class StdoutSink:
    """Writes program output byte by byte to the binary side of stdout."""

    def __init__(self, stream: Optional[BinaryIO] = None, autoflush: bool = True):
        self._stream = stream
        self.autoflush = autoflush

    def _target(self) -> BinaryIO:
        if self._stream is not None:
            return self._stream
        # resolved per write so a swapped sys.stdout is honoured
        return sys.stdout.buffer

    def write_byte(self, value: int) -> None:
        out = self._target()
        out.write(bytes((value,)))
        if self.autoflush:
            out.flush()


class StdinSource:
    """Blocking one-byte reads from the binary side of stdin."""

    def __init__(self, stream: Optional[BinaryIO] = None):
        self._stream = stream

    def read_byte(self) -> int:
        src = self._stream if self._stream is not None else sys.stdin.buffer
        try:
            data = src.read(1)
        except OSError as e:
            raise make_input_error(str(e)) from e
        if not data:
            raise make_input_error("end of input")
        return data[0]


class BufferSink:
    def __init__(self):
        self._buf = bytearray()

    def write_byte(self, value: int) -> None:
        self._buf.append(value)

    def getvalue(self) -> bytes:
        return bytes(self._buf)


class BufferSource:
    def __init__(self, data: Union[bytes, str] = b""):
        if isinstance(data, str):
            data = data.encode('utf-8')
        self._data = bytes(data)
        self._pos = 0

    def read_byte(self) -> int:
        if self._pos >= len(self._data):
            raise make_input_error("end of input")
        value = self._data[self._pos]
        self._pos += 1
        return value

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos
