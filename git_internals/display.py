# coding=utf-8
from argparse import Namespace
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, assert_never

from ansi import color

from .git import (
    Blob,
    GitObject,
    LogEntry,
    MergeCommit,
    RootCommit,
    SimpleCommit,
    Tree,
)
from .git.object import CommitMetadata


class Config(Namespace):
    color: bool
    is_tty: bool
    debug: bool = False
    git_dir: Path | None = None
    command: str | None = None
    arg: str | None = None

    def __init__(self, *, is_tty: bool = False, **kwargs: Any) -> None:
        defaults = {"color": is_tty}
        super().__init__(**(defaults | kwargs), is_tty=is_tty)


def format_datetime(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%d %H:%M:%S %:z")


def colorize(text: str, fg: object, config: Config) -> str:
    if not config.color:
        return text
    return f"{fg}{text}{color.fx.reset}"


def render_commit(commit: CommitMetadata, parents: Iterable[str]) -> str:
    lines = ["*COMMIT*", f"tree: {commit.tree}"]
    if parents := list(parents):
        lines.append(f"parents: {' | '.join(parents)}")
    lines.extend(
        [
            f"author: {commit.author} original timestamp: "
            f"{format_datetime(commit.authored_at)}",
            f"committer: {commit.committer} commit timestamp: "
            f"{format_datetime(commit.committed_at)}",
            "commit message:",
            commit.message,
        ]
    )
    return "\n".join(lines)


def render_object(obj: GitObject) -> str:
    """Human-readable form of any object, as shown by cat-file."""
    match obj:
        case Blob():
            return f"*BLOB*\n{obj.content}"
        case Tree():
            entries = (
                f"{e.permission_bits} {e.entry_hash} {e.name}" for e in obj.entries
            )
            return "\n".join(["*TREE*", *entries])
        case RootCommit():
            return render_commit(obj, [])
        case SimpleCommit():
            return render_commit(obj, [obj.parent])
        case MergeCommit():
            return render_commit(obj, [obj.parent, obj.merged_parent])
        case _:
            assert_never(obj)


def render_log_entry(entry: LogEntry, config: Config) -> str:
    commit = entry.commit
    title = f"Commit: {commit.hash}"
    if entry.merged:
        title += " (merged)"
    return "\n".join(
        [
            colorize(title, color.fg.yellow, config),
            f"{commit.committer} commit timestamp: "
            f"{format_datetime(commit.committed_at)}",
            commit.message.rstrip("\n"),
        ]
    )


def render_branch(name: str, is_head: bool, config: Config) -> str:
    if is_head:
        return "* " + colorize(name, color.fg.boldmagenta, config)
    return "  " + name
