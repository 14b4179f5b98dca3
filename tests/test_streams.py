#!/usr/bin/env python3
"""
I/O collaborator tests.
"""

import io
import os
import sys

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bfvm.errors import InputUnavailable
from bfvm.streams import BufferSink, BufferSource, StdinSource, StdoutSink


class _BrokenStream:
    def read(self, n):
        raise OSError("device not ready")


def test_buffer_sink_collects_bytes():
    sink = BufferSink()
    for value in (72, 105, 0, 255):
        sink.write_byte(value)
    assert sink.getvalue() == b"Hi\x00\xff"


def test_buffer_source_yields_in_order_then_fails():
    source = BufferSource(b"ab")
    assert source.remaining == 2
    assert source.read_byte() == ord('a')
    assert source.read_byte() == ord('b')
    assert source.remaining == 0
    with pytest.raises(InputUnavailable):
        source.read_byte()


def test_buffer_source_encodes_text():
    source = BufferSource("é")
    assert [source.read_byte(), source.read_byte()] == [0xC3, 0xA9]


def test_stdout_sink_writes_raw_bytes():
    stream = io.BytesIO()
    sink = StdoutSink(stream)
    sink.write_byte(0xC3)
    sink.write_byte(0xA9)
    assert stream.getvalue() == "é".encode('utf-8')


class _CountingStream(io.BytesIO):
    def __init__(self):
        super().__init__()
        self.flushes = 0

    def flush(self):
        self.flushes += 1
        super().flush()


def test_stdout_sink_autoflush():
    stream = _CountingStream()
    sink = StdoutSink(stream)
    assert sink.autoflush
    sink.write_byte(ord('a'))
    assert stream.flushes == 1

    quiet = _CountingStream()
    sink = StdoutSink(quiet, autoflush=False)
    sink.write_byte(ord('a'))
    sink.write_byte(ord('b'))
    assert quiet.flushes == 0
    assert quiet.getvalue() == b"ab"


def test_stdout_sink_follows_sys_stdout(capsysbinary):
    sink = StdoutSink()
    sink.write_byte(ord('o'))
    sink.write_byte(ord('k'))
    assert capsysbinary.readouterr().out == b"ok"


def test_stdin_source_reads_one_byte_at_a_time():
    source = StdinSource(io.BytesIO(b"xy"))
    assert source.read_byte() == ord('x')
    assert source.read_byte() == ord('y')
    with pytest.raises(InputUnavailable) as excinfo:
        source.read_byte()
    assert "end of input" in str(excinfo.value)


def test_stdin_source_wraps_os_errors():
    source = StdinSource(_BrokenStream())
    with pytest.raises(InputUnavailable) as excinfo:
        source.read_byte()
    assert isinstance(excinfo.value.__cause__, OSError)
    assert "device not ready" in str(excinfo.value)
