import hashlib
import zlib
from pathlib import Path
from subprocess import check_call, check_output
from typing import Iterable, Optional

AUTHOR = "Alice Purcell <Alice.Purcell.39@gmail.com>"
DEFAULT_TIMESTAMP = 1649019785  # 2022-04-03 21:03:05 UTC


def init_git_dir(git_dir: Path, *, head: str = "main") -> Path:
    (git_dir / "objects").mkdir(parents=True)
    (git_dir / "refs" / "heads").mkdir(parents=True)
    (git_dir / "HEAD").write_text(f"ref: refs/heads/{head}\n")
    return git_dir


def loose_object(kind: str, payload: bytes) -> bytes:
    """The decompressed bytes of a loose object."""
    return f"{kind} {len(payload)}".encode("ascii") + b"\0" + payload


def write_object(git_dir: Path, kind: str, payload: bytes) -> str:
    data = loose_object(kind, payload)
    hash = hashlib.sha1(data).hexdigest()
    path = git_dir / "objects" / hash[:2] / hash[2:]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(zlib.compress(data))
    return hash


def write_blob(git_dir: Path, content: str) -> str:
    return write_object(git_dir, "blob", content.encode("utf-8"))


def tree_payload(entries: Iterable[tuple[str, str, str]]) -> bytes:
    """Encodes (permission bits, name, hash) triples as git does."""
    return b"".join(
        f"{perms} {name}".encode("utf-8") + b"\0" + bytes.fromhex(hash)
        for perms, name, hash in entries
    )


def write_tree(git_dir: Path, *entries: tuple[str, str, str]) -> str:
    return write_object(git_dir, "tree", tree_payload(entries))


def commit_payload(
    tree: str,
    *parents: str,
    message: str = "Blank commit\n",
    timestamp: int = DEFAULT_TIMESTAMP,
    timezone: str = "+0100",
) -> bytes:
    lines = [f"tree {tree}"]
    lines.extend(f"parent {parent}" for parent in parents)
    lines.append(f"author {AUTHOR} {timestamp} {timezone}")
    lines.append(f"committer {AUTHOR} {timestamp} {timezone}")
    return ("\n".join(lines) + "\n\n" + message).encode("utf-8")


def write_commit(
    git_dir: Path,
    *parents: str,
    tree: Optional[str] = None,
    message: Optional[str] = None,
    timestamp: int = DEFAULT_TIMESTAMP,
) -> str:
    """Writes a commit object; defaults to the empty tree."""
    if tree is None:
        tree = write_tree(git_dir)
    payload = commit_payload(
        tree,
        *parents,
        message=message if message is not None else "Blank commit\n",
        timestamp=timestamp,
    )
    return write_object(git_dir, "commit", payload)


def write_branch(git_dir: Path, name: str, hash: str) -> None:
    path = git_dir / "refs" / "heads" / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(hash + "\n")


def head_hash() -> str:
    return check_output(["git", "rev-parse", "HEAD"], encoding="ascii").strip()


def git_test_commit(*filenames: str, message: Optional[str] = None) -> str:
    """Creates a test commit with the real git binary, appending to given files."""
    for filename in filenames:
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a") as f:
            f.write("Append a line\n")
        check_call(["git", "add", filename])
    if filenames:
        args = ["-m", message or f"Modified {', '.join(filenames)}"]
    else:
        args = ["--allow-empty", "-m", message or "Blank commit"]
    check_call(["git", "commit", "-q", *args])
    return head_hash()


def git_test_merge(*refs: str) -> str:
    """Create a test merge commit."""
    check_call(["git", "merge", "--no-ff", *refs, "-qm", f"Merge {', '.join(refs)}"])
    return head_hash()
