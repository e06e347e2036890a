from __future__ import annotations

from pathlib import Path
from typing import Iterator

from .errors import ReferenceNotFound
from .object import is_hash

HEAD_REF_PREFIX = "ref: refs/heads/"


def read_ref_file(path: Path) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.readline().strip()
    except (FileNotFoundError, IsADirectoryError):
        raise ReferenceNotFound(f"Reference not found: {path}") from None


def head_branch(git_dir: Path) -> str | None:
    """The branch HEAD points at, or None if HEAD is detached."""
    head = read_ref_file(git_dir / "HEAD")
    if head.startswith(HEAD_REF_PREFIX):
        return head.removeprefix(HEAD_REF_PREFIX)
    if is_hash(head):
        return None
    raise ReferenceNotFound(f"Possible corruption: unexpected HEAD: {head!r}")


class Branch:
    def __init__(self, git_dir: Path, ref: Path | str) -> None:
        heads_dir = git_dir / "refs" / "heads"
        self._ref = ref if isinstance(ref, Path) else heads_dir / ref
        self.name = self._ref.relative_to(heads_dir).as_posix()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Branch):
            return other._ref == self._ref
        return False

    def __hash__(self) -> int:
        return hash(self._ref)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"git.Branch({repr(self.name)})"

    def exists(self) -> bool:
        return self._ref.is_file()

    @property
    def hash(self) -> str:
        """The commit this branch points at."""
        hash = read_ref_file(self._ref)
        if not is_hash(hash):
            raise ReferenceNotFound(
                f"Possible corruption: branch {self.name} does not hold a hash"
            )
        return hash


def branches(git_dir: Path) -> Iterator[Branch]:
    heads_dir = git_dir / "refs" / "heads"
    for p in Path.rglob(heads_dir, "*"):
        if p.is_file():
            yield Branch(git_dir, p)
