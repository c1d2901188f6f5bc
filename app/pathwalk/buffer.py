"""Whole-stream reads into a single growable buffer.

Two strategies, chosen by whether the content length is known up front:

- Known length: one buffer of exactly that size, filled in place.
- Unknown length: start from an initial buffer and grow it 4x whenever it
  fills up, failing once more than MAX_CAPACITY bytes have been read.

Most archive entries (class files, sources) are well under 1 MB, so a 4x
growth factor reaches the final size in very few copies.
"""

import os
from pathlib import Path
from typing import BinaryIO

from pathwalk.core.errors import CapacityExceededError

# Largest positive signed 32-bit count
MAX_CAPACITY = 2**31 - 1

GROWTH_FACTOR = 4

DEFAULT_BUFFER_SIZE = 64 * 1024

EMPTY = b""


def _read_into(stream: BinaryIO, buffer: bytearray, offset: int, size: int) -> int:
    """Read at most ``size`` bytes into ``buffer`` at ``offset``.

    Returns:
        Number of bytes read; 0 signals end of data.
    """
    readinto = getattr(stream, "readinto", None)
    if readinto is not None:
        with memoryview(buffer) as view, view[offset : offset + size] as target:
            bytes_read = readinto(target)
        return bytes_read or 0

    chunk = stream.read(size)
    if not chunk:
        return 0
    buffer[offset : offset + len(chunk)] = chunk
    return len(chunk)


def read_known_length(stream: BinaryIO, length: int) -> bytes:
    """Read ``length`` bytes from a stream into an exactly sized buffer.

    The stream ending early is not an error: the result is truncated to the
    bytes actually read.

    Args:
        stream: Binary stream positioned at the start of the content.
        length: Declared content length in bytes.

    Returns:
        The content, at most ``length`` bytes long.

    Raises:
        ValueError: If ``length`` is negative.
    """
    if length < 0:
        msg = f"Length cannot be negative, got {length}"
        raise ValueError(msg)
    if length == 0:
        return EMPTY

    buffer = bytearray(length)
    offset = 0
    remaining = length
    while remaining != 0:
        bytes_read = _read_into(stream, buffer, offset, remaining)
        if bytes_read == 0:
            break
        offset += bytes_read
        remaining -= bytes_read

    if remaining == 0:
        return bytes(buffer)
    with memoryview(buffer) as view:
        return bytes(view[:offset])


def read_unknown_length(
    stream: BinaryIO,
    initial_buffer_size: int = DEFAULT_BUFFER_SIZE,
    *,
    limit: int = MAX_CAPACITY,
) -> bytes:
    """Read a stream of unknown length to its end.

    The buffer starts at ``initial_buffer_size`` bytes. Once it is full, a
    single byte is read to find out whether the stream has more; only then
    is the buffer grown to four times its length, keeping what was read.
    Growth never goes past ``limit + 1`` bytes, which is enough to detect
    overflow.

    Args:
        stream: Binary stream positioned at the start of the content.
        initial_buffer_size: Size of the first buffer, at least 1.
        limit: Maximum number of bytes that may be read.

    Returns:
        The content. ``EMPTY`` if nothing was read; the whole buffer,
        untrimmed, if the content fills it exactly; otherwise the buffer
        trimmed to the content. Both non-empty results are ``bytes`` copies
        of the buffer, so the exact fit saves the slice but not the copy.

    Raises:
        ValueError: If ``initial_buffer_size`` is less than 1.
        CapacityExceededError: If more than ``limit`` bytes are read.
    """
    if initial_buffer_size < 1:
        msg = f"Initial buffer size must be at least 1, got {initial_buffer_size}"
        raise ValueError(msg)

    buffer = bytearray(initial_buffer_size)
    peek = bytearray(1)
    total_bytes_read = 0
    offset = 0
    remaining_capacity = len(buffer)
    while True:
        if remaining_capacity == 0:
            if _read_into(stream, peek, 0, 1) == 0:
                break
            new_length = min(len(buffer) * GROWTH_FACTOR, limit + 1)
            buffer.extend(bytes(new_length - len(buffer)))
            buffer[offset] = peek[0]
            bytes_read = 1
        else:
            bytes_read = _read_into(stream, buffer, offset, remaining_capacity)
            if bytes_read == 0:
                break

        total_bytes_read += bytes_read
        if total_bytes_read > limit:
            raise CapacityExceededError(limit, total_bytes_read)
        offset += bytes_read
        remaining_capacity = len(buffer) - offset

    if total_bytes_read == 0:
        return EMPTY
    if total_bytes_read == len(buffer):
        # Exact fit: no trimming slice, one copy into immutable bytes
        return bytes(buffer)
    with memoryview(buffer) as view:
        return bytes(view[:total_bytes_read])


def read_all(
    stream: BinaryIO,
    known_length: int | None = None,
    initial_buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> bytes:
    """Read a whole stream, using the known length when there is one.

    Args:
        stream: Binary stream positioned at the start of the content.
        known_length: Declared content length, or None if unknown.
        initial_buffer_size: First buffer size for unknown-length reads.

    Returns:
        The content of the stream.

    Raises:
        CapacityExceededError: If an unknown-length read exceeds MAX_CAPACITY.
    """
    if known_length is not None:
        return read_known_length(stream, known_length)
    return read_unknown_length(stream, initial_buffer_size)


def read_file(path: Path, buffer_size: int = DEFAULT_BUFFER_SIZE) -> bytes:
    """Read a whole file, releasing the handle on every exit path.

    Files reporting a size of zero (e.g. under /proc) are read as streams
    of unknown length.

    Args:
        path: File to read.
        buffer_size: First buffer size for unknown-length reads.

    Returns:
        The file content.

    Raises:
        OSError: If the file cannot be opened or read.
        CapacityExceededError: If the file is larger than MAX_CAPACITY.
    """
    with open(path, "rb") as f:
        size = os.fstat(f.fileno()).st_size
        if size > MAX_CAPACITY:
            raise CapacityExceededError(MAX_CAPACITY, size)
        if size > 0:
            return read_known_length(f, size)
        return read_unknown_length(f, buffer_size)
