from .branch import Branch
from .errors import GitError
from .object import (
    Blob,
    Commit,
    FileEntry,
    GitObject,
    MergeCommit,
    ObjectHeader,
    ObjectKind,
    RootCommit,
    SimpleCommit,
    Tree,
)
from .repo import Repository
from .walk import LogEntry, walk_history, walk_tree

__all__ = [
    "Blob",
    "Branch",
    "Commit",
    "FileEntry",
    "GitError",
    "GitObject",
    "LogEntry",
    "MergeCommit",
    "ObjectHeader",
    "ObjectKind",
    "Repository",
    "RootCommit",
    "SimpleCommit",
    "Tree",
    "walk_history",
    "walk_tree",
]
