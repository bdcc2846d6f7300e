"""Chunked reads from stage output pipes.

Stage output is only read after the child has exited, so everything it wrote
already sits in the pipe. The parent keeps the write ends open to reuse the
pipes for later invocations, which means a read never sees end-of-file;
instead the read ends are non-blocking and an empty pipe reads as zero bytes.

A read that returns fewer bytes than the chunk size ends the stream. Output
whose length is an exact multiple of the chunk size therefore costs one extra
empty read, and anything written after a short read stays in the pipe.
"""

from __future__ import annotations

import logging
import os

from .errors import FatalPipelineError

LOGGER = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 200


class ChunkedPipeReader:
    """Read stage output from a pipe one fixed-size chunk at a time."""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.chunk_size = chunk_size

    def read_chunk(self, fd: int, *, label: str = "stage") -> bytes:
        """Perform a single read of at most ``chunk_size`` bytes.

        Args:
            fd: Readable pipe endpoint.
            label: Name used in the error message when the read fails.

        Returns:
            bytes: Data read, empty when the pipe holds nothing.

        Raises:
            FatalPipelineError: If the read fails.
        """
        try:
            return os.read(fd, self.chunk_size)
        except BlockingIOError:
            return b""
        except OSError as exc:
            raise FatalPipelineError(f"Failed to read {label} output", exc) from exc

    def drain(self, fd: int, *, label: str = "stage") -> bytes:
        """Accumulate chunks until a read comes back short.

        Args:
            fd: Readable pipe endpoint.
            label: Name used in the error message when a read fails.

        Returns:
            bytes: Everything read before the first short read.
        """
        buffer = bytearray()
        reads = 0
        while True:
            chunk = self.read_chunk(fd, label=label)
            reads += 1
            buffer += chunk
            if len(chunk) < self.chunk_size:
                break
        LOGGER.debug("Read %d bytes of %s output in %d chunk(s)", len(buffer), label, reads)
        return bytes(buffer)

    def read_token(self, fd: int, *, separator: bytes = b" ", label: str = "stage") -> bytes:
        """Return the first read truncated at ``separator``."""
        chunk = self.read_chunk(fd, label=label)
        token, _, _ = chunk.partition(separator)
        return token

    def discard(self, fd: int, *, label: str = "stage") -> int:
        """Throw away whatever is left in the pipe and return the byte count."""
        discarded = 0
        while True:
            chunk = self.read_chunk(fd, label=label)
            if not chunk:
                break
            discarded += len(chunk)
        if discarded:
            LOGGER.debug("Discarded %d leftover byte(s) of %s output", discarded, label)
        return discarded


__all__ = ["ChunkedPipeReader", "DEFAULT_CHUNK_SIZE"]
