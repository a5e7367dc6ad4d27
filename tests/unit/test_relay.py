"""
Tests for the output relay.
"""

import io
from unittest.mock import MagicMock

import pytest

from src.app.relay import relay_stream


class ChunkedReader:
    """Reader that hands out data in fixed pieces, like a pipe."""

    def __init__(self, data: bytes, piece: int) -> None:
        self._data = data
        self._piece = piece
        self.reads = 0

    def read(self, size: int) -> bytes:
        self.reads += 1
        n = min(size, self._piece)
        chunk, self._data = self._data[:n], self._data[n:]
        return chunk


def test_relay_copies_bytes_in_order():
    """Test a short multi-line payload arrives unchanged."""
    sink = io.BytesIO()

    relayed = relay_stream(io.BytesIO(b"hello\nworld\n"), sink)

    assert sink.getvalue() == b"hello\nworld\n"
    assert relayed == len(b"hello\nworld\n")


@pytest.mark.parametrize("chunk_size", [1, 7, 24, 4096, 64 * 1024])
def test_relay_long_lines_independent_of_chunk_size(chunk_size):
    """Test lines longer than the chunk are neither truncated nor reordered."""
    payload = b"a" * 5000 + b"\n" + b"short\n" + bytes(range(256)) * 8
    sink = io.BytesIO()

    relayed = relay_stream(io.BytesIO(payload), sink, chunk_size)

    assert sink.getvalue() == payload
    assert relayed == len(payload)


def test_relay_empty_source():
    """Test a child that prints nothing relays nothing."""
    sink = io.BytesIO()

    assert relay_stream(io.BytesIO(b""), sink) == 0
    assert sink.getvalue() == b""


def test_relay_falls_back_to_read():
    """Test sources without read1 are drained with read."""
    source = ChunkedReader(b"abcdefghij", piece=3)
    sink = io.BytesIO()

    relay_stream(source, sink, chunk_size=4)

    assert sink.getvalue() == b"abcdefghij"
    assert source.reads == 5  # 3 + 3 + 3 + 1 + EOF


def test_relay_flushes_every_chunk():
    """Test output is flushed as it arrives."""
    sink = MagicMock()

    relay_stream(ChunkedReader(b"abcdef", piece=2), sink, chunk_size=2)

    assert sink.write.call_count == 3
    assert sink.flush.call_count == 3


def test_relay_rejects_non_positive_chunk_size():
    """Test a zero chunk size is refused before reading."""
    with pytest.raises(ValueError):
        relay_stream(io.BytesIO(b"data"), io.BytesIO(), chunk_size=0)


def test_relay_propagates_sink_errors():
    """Test a closed output surfaces to the caller."""
    sink = MagicMock()
    sink.write.side_effect = BrokenPipeError()

    with pytest.raises(BrokenPipeError):
        relay_stream(io.BytesIO(b"data"), sink)
