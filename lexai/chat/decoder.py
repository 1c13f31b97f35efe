"""Incremental UTF-8 decoding of a streamed response body.

The answer endpoint sends unframed UTF-8 bytes. Network chunk boundaries can
fall inside a multi-byte character, so the trailing partial character of each
chunk is held back and joined with the next one.
"""

import codecs
from collections.abc import AsyncIterable, AsyncIterator


class StreamDecodeError(ValueError):
    """Raised when the byte stream is not valid UTF-8 or the decoder is misused."""


class StreamDecoder:
    """Stateful decoder for one response body.

    A decoder is single use. Once finish() has been called it refuses more input.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="strict")
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def feed(self, chunk: bytes) -> str:
        """Decode one chunk.

        Args:
            chunk: Raw bytes in arrival order.

        Returns:
            All complete characters available so far. May be empty when the
            chunk only contained part of a character.

        Raises:
            StreamDecodeError: On malformed bytes or after finish().
        """
        if self._closed:
            raise StreamDecodeError("Decoder already finished")
        try:
            return self._decoder.decode(chunk)
        except UnicodeDecodeError as e:
            self._closed = True
            raise StreamDecodeError(f"Malformed byte sequence in stream: {e}") from e

    def finish(self) -> str:
        """Signal end of stream and flush.

        Raises:
            StreamDecodeError: If the stream ended inside a character or the
                decoder was already finished.
        """
        if self._closed:
            raise StreamDecodeError("Decoder already finished")
        self._closed = True
        try:
            return self._decoder.decode(b"", final=True)
        except UnicodeDecodeError as e:
            raise StreamDecodeError(f"Stream ended inside a character: {e}") from e


async def decode_stream(chunks: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """Turn an async byte stream into non-empty text fragments.

    Exhaustion of ``chunks`` is the end-of-stream marker.

    Args:
        chunks: Raw response body chunks.

    Yields:
        Decoded text fragments in arrival order.

    Raises:
        StreamDecodeError: If the bytes are not valid UTF-8.
    """
    decoder = StreamDecoder()
    async for chunk in chunks:
        if fragment := decoder.feed(chunk):
            yield fragment
    if tail := decoder.finish():
        yield tail
