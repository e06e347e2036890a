from pathlib import Path
from typing import Iterable

from .errors import GitError


def path_and_parents(p: Path) -> Iterable[Path]:
    yield p
    while p.parent != p:
        p = p.parent
        yield p


def as_git_dir(p: Path) -> Path:
    """Accepts either a .git directory or a work tree containing one."""
    d = p / ".git"
    return d if d.is_dir() else p


def find_git_dir(start: Path) -> Path:
    for p in path_and_parents(start.absolute()):
        d = p / ".git"
        if d.is_dir():
            return d
    raise GitError("not a git repository (or any of the parent directories): .git")
