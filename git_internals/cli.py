import sys
from argparse import SUPPRESS, ArgumentParser
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import Callable, Sequence

from .config import Settings
from .display import (
    Config,
    render_branch,
    render_log_entry,
    render_object,
)
from .git import Repository, walk_history, walk_tree
from .git.errors import GitError
from .git.path import as_git_dir, find_git_dir
from .git.walk import resolve_commit

LOG = getLogger(__name__)


class UnknownCommand(Exception):
    pass


def normalize_hash(value: str) -> str:
    return value.strip().lower()


def list_branches(repo: Repository, _arg: str | None, config: Config) -> list[str]:
    head = repo.head_branch()
    LOG.debug("HEAD is on %s", head if head is not None else "a detached commit")
    return [render_branch(b.name, b.name == head, config) for b in repo.branches()]


def cat_file(repo: Repository, arg: str | None, config: Config) -> list[str]:
    assert arg is not None
    return [render_object(repo[normalize_hash(arg)])]


def log(repo: Repository, arg: str | None, config: Config) -> list[str]:
    assert arg is not None
    start = repo.branch(arg.strip()).hash
    entries = [render_log_entry(e, config) for e in walk_history(repo, start)]
    return ["\n\n".join(entries)] if entries else []


def commit_tree(repo: Repository, arg: str | None, config: Config) -> list[str]:
    assert arg is not None
    commit = resolve_commit(repo, normalize_hash(arg))
    return walk_tree(repo, commit.tree)


@dataclass(frozen=True)
class Command:
    run: Callable[[Repository, str | None, Config], list[str]]
    prompt: str | None = None


COMMANDS: dict[str, Command] = {
    "list-branches": Command(list_branches),
    "cat-file": Command(cat_file, prompt="Enter git object hash:"),
    "log": Command(log, prompt="Enter branch name:"),
    "commit-tree": Command(commit_tree, prompt="Enter commit-hash:"),
}


def parse_args(
    args: Sequence[str] | None, *, is_tty: bool, settings: Settings
) -> Config:
    defaults = Config(
        is_tty=is_tty,
        color=is_tty if settings.color is None else settings.color,
        debug=settings.debug,
        git_dir=settings.git_dir,
    )
    p = ArgumentParser(
        prog="git-internals",
        description="Inspect a git repository by reading its object database",
    )
    p.add_argument(
        "--git-dir",
        type=Path,
        dest="git_dir",
        metavar="DIR",
        default=defaults.git_dir,
        help="The .git directory (or a work tree containing one); "
        "defaults to $GIT_DIR, then the repository containing the current directory",
    )
    p.add_argument(
        "--color",
        action="store_true",
        dest="color",
        default=defaults.color,
        help="Display colorized output; defaults to true if the output is a TTY",
    )
    p.add_argument("--no-color", action="store_false", dest="color", help=SUPPRESS)
    p.add_argument(
        "--debug",
        action="store_true",
        dest="debug",
        default=defaults.debug,
        help="Trace object reads to stderr",
    )
    p.add_argument(
        "command",
        nargs="?",
        choices=sorted(COMMANDS),
        metavar="COMMAND",
        help=f"One of {', '.join(COMMANDS)}; prompted for if omitted",
    )
    p.add_argument(
        "arg",
        nargs="?",
        metavar="ARG",
        help="Branch name or object hash, as the command requires; "
        "prompted for if omitted",
    )
    return p.parse_args(args=args, namespace=defaults)


def prompt(message: str) -> str:
    print(message, file=sys.stderr, flush=True)
    line = sys.stdin.readline()
    if not line:
        raise EOFError(f"No input given for: {message}")
    return line.strip()


def locate_repository(config: Config) -> Repository:
    if config.git_dir is None:
        return Repository(find_git_dir(Path.cwd()))
    if not config.git_dir.is_dir():
        raise GitError(f"Not a directory: {config.git_dir}")
    return Repository(as_git_dir(config.git_dir))


def run(config: Config) -> list[str]:
    """Runs the configured command, prompting for anything missing.

    Returns the complete output; nothing is printed if the command fails.
    """
    repo = locate_repository(config)
    name = config.command if config.command is not None else prompt("Enter command:")
    command = COMMANDS.get(name)
    if command is None:
        raise UnknownCommand(f"Unknown command: {name!r}")
    arg = config.arg
    if arg is None and command.prompt is not None:
        arg = prompt(command.prompt)
    return command.run(repo, arg, config)
