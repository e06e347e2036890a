import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

HASH = re.compile(r"^[0-9a-f]{40}$")
OFFSET = re.compile(r"^([+-])(\d\d):?(\d\d)$")
DIRECTORY_PERMISSION_BITS = "40000"


class ObjectKind(Enum):
    BLOB = "blob"
    COMMIT = "commit"
    TREE = "tree"


def is_hash(value: str) -> bool:
    return HASH.match(value) is not None


def parse_offset(offset: str) -> timezone:
    """Converts a git timezone token (e.g. "+0100" or "-05:30") to a timezone.

    Raises ValueError if the token is not a signed hours/minutes offset.
    """
    m = OFFSET.match(offset)
    if not m:
        raise ValueError(f"Unparseable timezone offset: {offset!r}")
    sign = -1 if m.group(1) == "-" else 1
    delta = timedelta(hours=int(m.group(2)), minutes=int(m.group(3)))
    return timezone(sign * delta)


def to_datetime(timestamp: int, offset: str) -> datetime:
    return datetime.fromtimestamp(timestamp, parse_offset(offset))


@dataclass(frozen=True)
class ObjectHeader:
    kind: ObjectKind
    declared_length: int


@dataclass(frozen=True)
class FileEntry:
    permission_bits: str
    name: str
    entry_hash: str

    @property
    def is_directory(self) -> bool:
        return self.permission_bits == DIRECTORY_PERMISSION_BITS


@dataclass(frozen=True)
class Blob:
    header: ObjectHeader
    hash: str
    content: str


@dataclass(frozen=True)
class Tree:
    header: ObjectHeader
    hash: str
    entries: tuple[FileEntry, ...]


@dataclass(frozen=True)
class CommitMetadata:
    """Fields shared by every commit shape."""

    header: ObjectHeader
    hash: str
    tree: str
    author: str
    original_timestamp: int
    original_timezone: str
    committer: str
    commit_timestamp: int
    commit_timezone: str
    message: str

    @property
    def authored_at(self) -> datetime:
        """The author date, in the author's recorded offset."""
        return to_datetime(self.original_timestamp, self.original_timezone)

    @property
    def committed_at(self) -> datetime:
        """The commit date, in the committer's recorded offset."""
        return to_datetime(self.commit_timestamp, self.commit_timezone)


@dataclass(frozen=True)
class RootCommit(CommitMetadata):
    pass


@dataclass(frozen=True)
class SimpleCommit(CommitMetadata):
    parent: str


@dataclass(frozen=True)
class MergeCommit(CommitMetadata):
    parent: str
    merged_parent: str


Commit = RootCommit | SimpleCommit | MergeCommit
GitObject = Blob | Tree | RootCommit | SimpleCommit | MergeCommit
