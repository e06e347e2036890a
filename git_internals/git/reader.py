from .errors import UnexpectedEndOfStream


class TokenReader:
    """Single-pass reader over a decompressed object stream.

    Tokens are terminated by a NUL byte; no other delimiter is recognised.
    """

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def read_token(self) -> bytes:
        """Consume up to and including the next NUL, returning the bytes before it."""
        end = self._data.find(b"\0", self._pos)
        if end < 0:
            raise UnexpectedEndOfStream("Unexpected end of stream: no NUL terminator")
        token = self._data[self._pos : end]
        self._pos = end + 1
        return token

    def read_fixed(self, size: int) -> bytes:
        if self._pos + size > len(self._data):
            raise UnexpectedEndOfStream(
                f"Unexpected end of stream: wanted {size} bytes, "
                f"{len(self._data) - self._pos} left"
            )
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def read_rest(self) -> bytes:
        rest = self._data[self._pos :]
        self._pos = len(self._data)
        return rest
