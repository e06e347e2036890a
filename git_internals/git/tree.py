from logging import getLogger
from typing import Iterable

from .errors import TruncatedEntry, UnexpectedEndOfStream
from .object import FileEntry
from .reader import TokenReader

LOG = getLogger(__name__)
HASH_SIZE = 20

# Names are stored as raw bytes; surrogateescape keeps non-UTF-8 names
# round-trippable.
NAME_ENCODING = "utf-8"
NAME_ERRORS = "surrogateescape"


def read_entry(reader: TokenReader) -> FileEntry:
    """Reads one "<perm> <name>\\0<20-byte hash>" tree entry."""
    try:
        token = reader.read_token()
    except UnexpectedEndOfStream:
        raise TruncatedEntry("Possible corruption: unterminated tree entry") from None
    permission_bits, sep, name = token.partition(b" ")
    if not sep:
        raise TruncatedEntry(
            f"Possible corruption: tree entry has no name: {token!r}"
        )
    try:
        raw_hash = reader.read_fixed(HASH_SIZE)
    except UnexpectedEndOfStream:
        raise TruncatedEntry(
            f"Possible corruption: tree entry {name!r} is missing its hash"
        ) from None
    return FileEntry(
        permission_bits=permission_bits.decode(NAME_ENCODING, NAME_ERRORS),
        name=name.decode(NAME_ENCODING, NAME_ERRORS),
        entry_hash=raw_hash.hex(),
    )


def read_entries(reader: TokenReader) -> tuple[FileEntry, ...]:
    entries: list[FileEntry] = []
    while not reader.at_end():
        entry = read_entry(reader)
        LOG.debug(
            "Tree entry: %s %s %s",
            entry.permission_bits,
            entry.entry_hash,
            entry.name,
        )
        entries.append(entry)
    return tuple(entries)


def serialize_entries(entries: Iterable[FileEntry]) -> bytes:
    """Inverse of read_entries."""
    chunks: list[bytes] = []
    for entry in entries:
        token = f"{entry.permission_bits} {entry.name}"
        chunks.append(token.encode(NAME_ENCODING, NAME_ERRORS))
        chunks.append(b"\0")
        chunks.append(bytes.fromhex(entry.entry_hash))
    return b"".join(chunks)
