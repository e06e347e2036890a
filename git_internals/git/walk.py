from dataclasses import dataclass
from logging import getLogger
from typing import Iterator, Protocol, assert_never

from .errors import ExpectedTreeGotOther, UnexpectedObjectKind
from .object import (
    Blob,
    Commit,
    GitObject,
    MergeCommit,
    RootCommit,
    SimpleCommit,
    Tree,
)

LOG = getLogger(__name__)


class ObjectResolver(Protocol):
    def __getitem__(self, hash: str, /) -> GitObject: ...


@dataclass(frozen=True)
class LogEntry:
    commit: Commit
    merged: bool = False


def resolve_commit(objects: ObjectResolver, hash: str) -> Commit:
    obj = objects[hash]
    match obj:
        case RootCommit() | SimpleCommit() | MergeCommit():
            return obj
        case Blob() | Tree():
            kind = obj.header.kind.value
            raise UnexpectedObjectKind(f"{hash} is a {kind}, expected a commit")
        case _:
            assert_never(obj)


def resolve_tree(objects: ObjectResolver, hash: str) -> Tree:
    obj = objects[hash]
    match obj:
        case Tree():
            return obj
        case Blob() | RootCommit() | SimpleCommit() | MergeCommit():
            kind = obj.header.kind.value
            raise ExpectedTreeGotOther(f"{hash} is a {kind}, expected a tree")
        case _:
            assert_never(obj)


def walk_tree(objects: ObjectResolver, hash: str) -> list[str]:
    """Flattens a tree into file paths, depth-first in entry order.

    Sub-trees are not checked for cycles; a tree that contains itself recurses
    until Python's recursion limit is hit.
    """
    paths: list[str] = []
    for entry in resolve_tree(objects, hash).entries:
        if entry.is_directory:
            paths.extend(
                f"{entry.name}/{path}" for path in walk_tree(objects, entry.entry_hash)
            )
        else:
            paths.append(entry.name)
    return paths


def walk_history(objects: ObjectResolver, start: str) -> Iterator[LogEntry]:
    """Yields the first-parent history of a commit, newest first.

    The second parent of a merge is yielded straight after the merge, marked as
    merged; its own ancestors are not visited.
    """
    hash: str | None = start
    while hash is not None:
        commit = resolve_commit(objects, hash)
        yield LogEntry(commit)
        match commit:
            case RootCommit():
                hash = None
            case SimpleCommit():
                hash = commit.parent
            case MergeCommit():
                LOG.debug("%s merges %s", commit.hash, commit.merged_parent)
                yield LogEntry(
                    resolve_commit(objects, commit.merged_parent), merged=True
                )
                hash = commit.parent
            case _:
                assert_never(commit)
