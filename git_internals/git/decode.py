import zlib
from logging import getLogger
from typing import Iterable, assert_never

from .commit import parse_commit
from .errors import GitError, MalformedHeader, UnrecognizedObjectType
from .object import Blob, GitObject, ObjectHeader, ObjectKind, Tree
from .reader import TokenReader
from .tree import read_entries

LOG = getLogger(__name__)
KINDS_BY_NAME: dict[str, ObjectKind] = {k.value: k for k in ObjectKind}


def decompress(compressed: Iterable[bytes]) -> bytes:
    """Decompress a stream of bytes

    Note: does not necessarily leave an underlying file object
    at the end of the compressed data at the end; may overshoot
    """
    z = zlib.decompressobj(zlib.MAX_WBITS)
    decompressed: list[bytes] = []
    try:
        for chunk in compressed:
            decompressed.append(z.decompress(chunk))
            if z.eof:
                return b"".join(decompressed)
    except zlib.error as e:
        raise GitError(f"Possible corruption: {e}") from None
    raise GitError("File ended unexpectedly")


def read_header(reader: TokenReader) -> ObjectHeader:
    """Parses the leading "<type> <length>" token of an object.

    >>> read_header(TokenReader(b"blob 12\\0hello world\\n"))
    ObjectHeader(kind=<ObjectKind.BLOB: 'blob'>, declared_length=12)
    """
    token = reader.read_token()
    try:
        text = token.decode("ascii")
    except UnicodeDecodeError:
        raise MalformedHeader(f"Possible corruption: bad header {token!r}") from None
    kind_word, sep, length_word = text.partition(" ")
    if not sep:
        raise MalformedHeader(f"Possible corruption: bad header {text!r}")
    kind = KINDS_BY_NAME.get(kind_word)
    if kind is None:
        raise UnrecognizedObjectType(f"Unrecognized git object type: {kind_word!r}")
    if not length_word.isdecimal():
        raise MalformedHeader(
            f"Possible corruption: bad object length {length_word!r}"
        )
    return ObjectHeader(kind, int(length_word))


def text_lines(payload: bytes) -> list[str]:
    return payload.decode("utf-8", "replace").replace("\0", "\n").split("\n")


def assemble(header: ObjectHeader, hash: str, payload: bytes) -> GitObject:
    if len(payload) != header.declared_length:
        LOG.debug(
            "%s: declared length %d but payload is %d bytes",
            hash,
            header.declared_length,
            len(payload),
        )
    match header.kind:
        case ObjectKind.BLOB:
            # Lossy: NUL bytes become newlines
            return Blob(header, hash, "\n".join(text_lines(payload)))
        case ObjectKind.TREE:
            return Tree(header, hash, read_entries(TokenReader(payload)))
        case ObjectKind.COMMIT:
            return parse_commit(text_lines(payload), header, hash)
        case _:
            assert_never(header.kind)


def read_object(data: bytes, hash: str) -> GitObject:
    """Decodes a decompressed loose object: header, NUL, then payload."""
    reader = TokenReader(data)
    header = read_header(reader)
    LOG.debug(
        "Read %s %s (declared length %d)",
        header.kind.value,
        hash,
        header.declared_length,
    )
    return assemble(header, hash, reader.read_rest())
