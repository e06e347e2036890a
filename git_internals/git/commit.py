import re
from dataclasses import dataclass, replace
from typing import Sequence

from .errors import (
    MalformedAuthorLine,
    MalformedHash,
    MissingTreeField,
    SecondParentWithoutFirst,
)
from .object import (
    Commit,
    MergeCommit,
    ObjectHeader,
    RootCommit,
    SimpleCommit,
    is_hash,
    to_datetime,
)

SIGNATURE = re.compile(
    r"^(?P<label>\S+) (?:(?P<name>.*?) )?<(?P<email>[^<>]*)> "
    r"(?P<timestamp>\d+) (?P<timezone>\S+)$"
)


def split_label(line: str) -> tuple[str, str]:
    label, _, value = line.partition(" ")
    return label, value


@dataclass(frozen=True)
class Signature:
    identity: str
    timestamp: int
    timezone: str


def parse_signature(line: str, label: str) -> Signature:
    """Parses an author or committer line.

    >>> parse_signature("author A U Thor <a@example.com> 1649019785 +0100", "author")
    Signature(identity='A U Thor a@example.com', timestamp=1649019785, timezone='+0100')
    """
    m = SIGNATURE.match(line)
    if not m or m.group("label") != label:
        raise MalformedAuthorLine(f"Expected {label} line, got: {line!r}")
    try:
        timestamp = int(m.group("timestamp"))
        # Rejects bad offsets and timestamps outside datetime's range
        to_datetime(timestamp, m.group("timezone"))
    except (ValueError, OverflowError, OSError) as e:
        raise MalformedAuthorLine(f"Bad {label} line: {e}") from None
    name = m.group("name")
    email = m.group("email")
    return Signature(
        identity=f"{name} {email}" if name else email,
        timestamp=timestamp,
        timezone=m.group("timezone"),
    )


def checked_hash(value: str, field: str) -> str:
    if not is_hash(value):
        raise MalformedHash(f"Possible corruption: bad {field} hash {value!r}")
    return value


@dataclass(frozen=True)
class CommitBuilder:
    """Accumulates commit fields while walking the header lines in order.

    Every step returns a new builder; `tail` holds the lines not yet consumed.
    """

    tail: tuple[str, ...]
    tree: str | None = None
    parent: str | None = None
    merged_parent: str | None = None
    author: Signature | None = None
    committer: Signature | None = None
    message: str | None = None

    def _next_label(self) -> tuple[str, str] | None:
        return split_label(self.tail[0]) if self.tail else None

    def with_tree(self) -> "CommitBuilder":
        label_value = self._next_label()
        if label_value is None or label_value[0] != "tree":
            found = repr(self.tail[0]) if self.tail else "end of commit"
            raise MissingTreeField(f"Expected tree line, got {found}")
        return replace(
            self, tree=checked_hash(label_value[1], "tree"), tail=self.tail[1:]
        )

    def with_first_parent(self) -> "CommitBuilder":
        label_value = self._next_label()
        if label_value is None or label_value[0] != "parent":
            return self
        return replace(
            self, parent=checked_hash(label_value[1], "parent"), tail=self.tail[1:]
        )

    def with_second_parent(self) -> "CommitBuilder":
        label_value = self._next_label()
        if label_value is None or label_value[0] != "parent":
            return self
        if self.parent is None:
            raise SecondParentWithoutFirst(
                "Parsing second parent without a first parent"
            )
        return replace(
            self,
            merged_parent=checked_hash(label_value[1], "parent"),
            tail=self.tail[1:],
        )

    def with_author(self) -> "CommitBuilder":
        if not self.tail:
            raise MalformedAuthorLine("Expected author line, got end of commit")
        return replace(
            self, author=parse_signature(self.tail[0], "author"), tail=self.tail[1:]
        )

    def with_committer(self) -> "CommitBuilder":
        if not self.tail:
            raise MalformedAuthorLine("Expected committer line, got end of commit")
        return replace(
            self,
            committer=parse_signature(self.tail[0], "committer"),
            tail=self.tail[1:],
        )

    def with_message(self) -> "CommitBuilder":
        lines = self.tail
        if lines and lines[0] == "":
            # The blank line separating headers from the message body
            lines = lines[1:]
        return replace(self, message="\n".join(lines), tail=())

    def build(self, header: ObjectHeader, hash: str) -> Commit:
        assert self.tree is not None, "commit tree not parsed"
        assert self.author is not None, "commit author not parsed"
        assert self.committer is not None, "commit committer not parsed"
        assert self.message is not None, "commit message not parsed"
        # Positional order matches CommitMetadata's fields
        common = (
            header,
            hash,
            self.tree,
            self.author.identity,
            self.author.timestamp,
            self.author.timezone,
            self.committer.identity,
            self.committer.timestamp,
            self.committer.timezone,
            self.message,
        )
        if self.parent is None:
            assert self.merged_parent is None
            return RootCommit(*common)
        if self.merged_parent is None:
            return SimpleCommit(*common, self.parent)
        return MergeCommit(*common, self.parent, self.merged_parent)


def parse_commit(lines: Sequence[str], header: ObjectHeader, hash: str) -> Commit:
    return (
        CommitBuilder(tail=tuple(lines))
        .with_tree()
        .with_first_parent()
        .with_second_parent()
        .with_author()
        .with_committer()
        .with_message()
        .build(header, hash)
    )
