from pathlib import Path

from pytest import fixture

from .utils import init_git_dir


@fixture
def git_dir(tmp_path: Path) -> Path:
    """An empty repository with HEAD on main, written without git."""
    return init_git_dir(tmp_path / ".git")
