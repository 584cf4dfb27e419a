"""Byte streams for reading loose objects.

Two layers sit between an object file and the decoders:

- ``DecompressionSource`` inflates the zlib stream of an opened object file
  and exposes it as an ordinary readable binary stream.
- ``DelimitedReader`` pulls bytes forward from any binary stream and offers
  the two primitives every decoder is built on: read up to a delimiter, and
  read an exact number of bytes.
"""

import io
import zlib
from typing import BinaryIO

from .errors import CorruptObjectError, UnexpectedEndOfStreamError

DEFAULT_CHUNK_SIZE = 8192


class DecompressionSource(io.RawIOBase):
    """
    Readable stream of the inflated bytes of a zlib-compressed file.

    Closing the source also closes the wrapped file.
    """

    def __init__(self, raw: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize decompression source.

        Args:
            raw: Opened binary file holding the compressed object
            chunk_size: Number of compressed bytes read per refill
        """
        super().__init__()
        self._raw = raw
        self._chunk_size = chunk_size
        self._decompressor = zlib.decompressobj()
        self._pending = b''

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        while not self._pending:
            if self._decompressor.eof:
                return 0
            self._pending = self._inflate_next_chunk()

        count = min(len(buffer), len(self._pending))
        buffer[:count] = self._pending[:count]
        self._pending = self._pending[count:]
        return count

    def _inflate_next_chunk(self) -> bytes:
        compressed = self._raw.read(self._chunk_size)
        try:
            if compressed:
                return self._decompressor.decompress(compressed)
            data = self._decompressor.flush()
        except zlib.error as e:
            raise CorruptObjectError(f"Invalid compressed object data: {e}") from e

        if not self._decompressor.eof:
            raise CorruptObjectError("Compressed object data ended prematurely")
        return data

    def close(self) -> None:
        if not self.closed:
            try:
                self._raw.close()
            finally:
                super().close()


class DelimitedReader:
    """
    Forward-only reader offering delimiter-terminated and exact-count reads.

    Bytes are pulled from the underlying stream in chunks and handed out
    from an internal buffer; there is no way to push bytes back. Reads never
    go past what a caller asks for, so a decoder that stops early leaves the
    rest of the stream untouched.
    """

    def __init__(self, stream: BinaryIO, buffer_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize reader.

        Args:
            stream: Binary stream positioned at the first byte to decode
            buffer_size: Number of bytes requested from the stream per refill
        """
        self._stream = stream
        self._buffer_size = buffer_size
        self._buffer = bytearray()
        self._pos = 0
        self._consumed = 0

    @property
    def position(self) -> int:
        """Number of bytes handed out to callers so far."""
        return self._consumed

    def _fill(self) -> bool:
        """Append the next chunk from the stream; False at end of stream."""
        chunk = self._stream.read(self._buffer_size)
        if not chunk:
            return False
        del self._buffer[:self._pos]
        self._pos = 0
        self._buffer += chunk
        return True

    def _take(self, end: int) -> bytes:
        data = bytes(self._buffer[self._pos:end])
        self._pos = end
        self._consumed += len(data)
        return data

    def read_until(self, delimiter: bytes, must_exist: bool) -> bytes:
        """
        Read bytes up to and including the next delimiter.

        Args:
            delimiter: Single delimiter byte
            must_exist: Whether reaching end of stream before the delimiter
                is an error

        Returns:
            bytes: Bytes read, ending with the delimiter; when the stream ends
            first and must_exist is False, whatever was read (possibly empty)

        Raises:
            UnexpectedEndOfStreamError: If the stream ends before the
                delimiter and must_exist is True
        """
        if len(delimiter) != 1:
            raise ValueError("Delimiter must be a single byte")

        collected = b''
        while True:
            index = self._buffer.find(delimiter, self._pos)
            if index != -1:
                return collected + self._take(index + 1)

            collected += self._take(len(self._buffer))
            if not self._fill():
                break

        if must_exist:
            raise UnexpectedEndOfStreamError(
                f"Unexpected end of stream while looking for {delimiter!r}", collected
            )
        return collected

    def read_exact(self, count: int) -> bytes:
        """
        Read exactly count bytes.

        Args:
            count: Number of bytes to read

        Returns:
            bytes: Exactly count bytes

        Raises:
            UnexpectedEndOfStreamError: If the stream ends first
        """
        if count < 0:
            raise ValueError(f"Cannot read a negative number of bytes: {count}")

        while len(self._buffer) - self._pos < count:
            if not self._fill():
                received = self._take(len(self._buffer))
                raise UnexpectedEndOfStreamError(
                    f"Unexpected end of stream: expected {count} bytes, "
                    f"got {len(received)}",
                    received,
                )

        return self._take(self._pos + count)
