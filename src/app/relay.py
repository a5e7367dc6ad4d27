"""
Output Relay Module.

Copies a child's standard output into the launcher's own output as it
arrives, without inspecting or reframing it.
"""

from typing import BinaryIO

from src.app.constants import DEFAULT_CHUNK_SIZE


def relay_stream(
    source: BinaryIO, sink: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> int:
    """
    Copies bytes from source to sink until end of file.

    Each chunk is written and flushed before the next read, so output is
    visible while the child is still running. Lines of any length pass
    through unchanged.

    Args:
        source: Readable binary stream, usually the child's stdout pipe.
        sink: Writable binary stream.
        chunk_size: Upper bound on a single read.

    Returns:
        int: Number of bytes relayed.

    Raises:
        ValueError: If chunk_size is not positive.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    # read1 returns whatever is buffered instead of waiting for a full chunk
    read = getattr(source, "read1", source.read)
    flush = getattr(sink, "flush", None)

    total = 0
    while True:
        chunk = read(chunk_size)
        if not chunk:
            break
        sink.write(chunk)
        if flush is not None:
            flush()
        total += len(chunk)
    return total
