from logging import getLogger
from pathlib import Path, PurePosixPath

from .branch import Branch, branches, head_branch
from .decode import decompress, read_object
from .errors import MalformedHash, ObjectNotFound, ReferenceNotFound
from .object import GitObject, is_hash

LOG = getLogger(__name__)


class Repository:
    """Read-only view of a repository's loose objects and branch refs.

    Objects are decoded afresh on every lookup.
    """

    def __init__(self, git_dir: Path) -> None:
        self.git_dir = git_dir

    def __repr__(self) -> str:
        return f"git.Repository({repr(str(self.git_dir))})"

    def object_path(self, hash: str) -> Path:
        return self.git_dir / "objects" / hash[:2] / hash[2:]

    def __getitem__(self, hash: str, /) -> GitObject:
        if not is_hash(hash):
            raise MalformedHash(f"Not a valid object hash: {hash!r}")
        filename = self.object_path(hash)
        LOG.debug("Reading %s", filename)
        try:
            with open(filename, "rb") as f:
                data = decompress(f)
        except (FileNotFoundError, IsADirectoryError):
            raise ObjectNotFound(f"Object not found: {hash}") from None
        return read_object(data, hash)

    def branches(self) -> list[Branch]:
        return sorted(branches(self.git_dir), key=lambda b: b.name)

    def head_branch(self) -> str | None:
        return head_branch(self.git_dir)

    def branch(self, name: str) -> Branch:
        path = PurePosixPath(name)
        if path.is_absolute() or ".." in path.parts:
            raise ReferenceNotFound(f"Not a branch name: {name}")
        b = Branch(self.git_dir, name)
        if not b.exists():
            raise ReferenceNotFound(f"Branch not found: {name}")
        return b
