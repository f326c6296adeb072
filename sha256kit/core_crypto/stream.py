"""
Streaming SHA-256

Hashes a sequential byte source without materializing the message.
Blocks are read 64 bytes at a time; padding and the length field are
written only once the source reports end of data.

Readers implement ``read_chunk(max_size) -> (bytes_read, data, at_end)``:
- ``BytesChunkReader`` serves an in-memory buffer (optionally in small pieces)
- ``FileChunkReader`` wraps a binary file object or opens a path

A source that cannot be opened or read raises ``InputSourceUnavailable``;
it is never hashed as if it were empty.
"""

import logging
from typing import BinaryIO, List, Optional, Protocol, Tuple

from .constants import H_INITIAL, BLOCK_SIZE, LENGTH_OFFSET, PADDING_MARKER
from .sha256 import State, length_field, process_block, render_digest


logger = logging.getLogger(__name__)


class InputSourceUnavailable(Exception):
    """Raised when a byte source cannot be opened or read."""

    def __init__(self, source: str, reason: Optional[BaseException] = None):
        self.source = source
        self.reason = reason
        message = f"Input source unavailable: {source}"
        if reason is not None:
            message += f" ({reason})"
        super().__init__(message)


class ChunkReader(Protocol):
    """Sequential byte source consumed by ``hash_stream``."""

    def read_chunk(self, max_size: int) -> Tuple[int, bytes, bool]:
        """Return (bytes_read, data, at_end) for up to max_size bytes."""
        ...


class BytesChunkReader:
    """
    Chunk reader over an in-memory buffer.

    ``chunk_size`` caps how many bytes a single call hands out, which lets
    callers reproduce short reads from pipes or sockets.

    Example:
        >>> reader = BytesChunkReader(b"abc")
        >>> reader.read_chunk(64)
        (3, b'abc', True)
    """

    def __init__(self, data: bytes, chunk_size: int = BLOCK_SIZE):
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self._data = bytes(data)
        self._chunk_size = chunk_size
        self._position = 0

    def read_chunk(self, max_size: int) -> Tuple[int, bytes, bool]:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        size = min(max_size, self._chunk_size)
        chunk = self._data[self._position:self._position + size]
        self._position += len(chunk)
        return len(chunk), chunk, self._position >= len(self._data)


class FileChunkReader:
    """
    Chunk reader over a binary file object.

    Use ``FileChunkReader.open(path)`` to open a file by name; the reader then
    owns the handle and closes it on ``close()`` or when leaving a ``with``
    block. Read failures surface as ``InputSourceUnavailable``.
    """

    def __init__(self, stream: BinaryIO, name: Optional[str] = None,
                 owns_stream: bool = False):
        self._stream = stream
        self._name = name if name is not None else getattr(stream, 'name', repr(stream))
        self._owns_stream = owns_stream
        self.bytes_read = 0

    @classmethod
    def open(cls, path: str) -> 'FileChunkReader':
        """
        Open a file for streaming.

        Raises:
            InputSourceUnavailable: If the file is missing or unreadable
        """
        try:
            stream = open(path, 'rb')
        except OSError as exc:
            logger.debug("Failed to open %s: %s", path, exc)
            raise InputSourceUnavailable(str(path), exc) from exc
        logger.debug("Opened %s for streaming", path)
        return cls(stream, name=str(path), owns_stream=True)

    @property
    def name(self) -> str:
        return self._name

    def read_chunk(self, max_size: int) -> Tuple[int, bytes, bool]:
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        data = b''
        try:
            # Raw streams may return short reads before EOF
            while len(data) < max_size:
                piece = self._stream.read(max_size - len(data))
                if piece is None:
                    # Non-blocking stream with no data ready; not end of file
                    raise InputSourceUnavailable(
                        self._name, BlockingIOError("no data available from non-blocking stream")
                    )
                if not piece:
                    break
                data += piece
        except OSError as exc:
            raise InputSourceUnavailable(self._name, exc) from exc

        self.bytes_read += len(data)
        return len(data), data, len(data) < max_size

    def close(self) -> None:
        if self._owns_stream:
            self._stream.close()
            logger.debug("Closed %s after %d bytes", self._name, self.bytes_read)

    def __enter__(self) -> 'FileChunkReader':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _read_block(source: ChunkReader) -> Tuple[bytes, bool]:
    """Collect up to one block from the source, across short reads."""
    block = b''
    at_end = False
    while len(block) < BLOCK_SIZE and not at_end:
        count, data, at_end = source.read_chunk(BLOCK_SIZE - len(block))
        if count <= 0 and not at_end:
            raise InputSourceUnavailable(
                getattr(source, 'name', repr(source)),
                OSError("read returned no data before end of input"),
            )
        block += data[:count]
    return block, at_end


def _final_blocks(tail: bytes, total_bytes: int) -> List[bytes]:
    """
    Build the padded closing block(s) from the last raw bytes of a message.

    ``tail`` holds 0..64 unprocessed bytes. A full tail is emitted unpadded
    and followed by a padding-only block.
    """
    blocks = []
    if len(tail) == BLOCK_SIZE:
        blocks.append(tail)
        tail = b''

    block = bytearray(BLOCK_SIZE)
    block[:len(tail)] = tail
    block[len(tail)] = PADDING_MARKER[0]

    if len(tail) + 1 <= LENGTH_OFFSET:
        block[LENGTH_OFFSET:] = length_field(total_bytes)
        blocks.append(bytes(block))
    else:
        # No room for the length field: spill into one more block
        logger.debug("Padding spills past %d-byte tail", len(tail))
        blocks.append(bytes(block))
        extra = bytearray(BLOCK_SIZE)
        extra[LENGTH_OFFSET:] = length_field(total_bytes)
        blocks.append(bytes(extra))

    return blocks


def hash_stream(source: ChunkReader) -> str:
    """
    Compute the SHA-256 digest of a chunked byte source.

    Full blocks are compressed as they arrive; the message never has to fit
    in memory. Produces the same digest as ``hash_bytes`` on the same content.

    Args:
        source: Any object with ``read_chunk(max_size)``

    Returns:
        64-character lowercase hexadecimal digest

    Raises:
        InputSourceUnavailable: If the source fails while being read
    """
    state: State = H_INITIAL
    total_bytes = 0
    block_count = 0

    while True:
        block, at_end = _read_block(source)
        total_bytes += len(block)
        if at_end:
            logger.debug("End of data after %d bytes (%d-byte tail)", total_bytes, len(block))
            break
        state = process_block(state, block)
        block_count += 1

    for final in _final_blocks(block, total_bytes):
        state = process_block(state, final)
        block_count += 1

    logger.debug("Streamed %d bytes in %d block(s)", total_bytes, block_count)
    return render_digest(state)
