from __future__ import annotations

import os
import shutil
from pathlib import Path
from subprocess import check_call, check_output
from textwrap import dedent
from typing import Iterable
from unittest.mock import patch

import hypothesis
import pytest
from packaging import version

hypothesis.settings.register_profile("thorough", max_examples=1_000)


def assert_git_version(minimum_version: str) -> None:
    git_version = version.parse(
        check_output(["git", "--version"], encoding="ascii")
        .removeprefix("git version ")
        .split()[0]
    )
    if git_version < version.parse(minimum_version):
        raise AssertionError(f"Tests require git >= {minimum_version}")


@pytest.fixture(autouse=True)
def clean_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GIT_DIR", "GIT_INTERNALS_DEBUG", "GIT_INTERNALS_COLOR"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_working_dir(
    request: pytest.FixtureRequest, tmp_path_factory: pytest.TempPathFactory
) -> Iterable[Path]:
    tmp_path = tmp_path_factory.mktemp("repo")
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(request.config.invocation_params.dir)


@pytest.fixture
def home_dir(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path_factory: pytest.TempPathFactory,
) -> Iterable[Path]:
    home_dir = Path(tmp_path_factory.mktemp("home"))
    monkeypatch.setenv("HOME", str(home_dir.absolute()))
    with patch.object(Path, "home", new=lambda: home_dir):
        yield home_dir


@pytest.fixture
def repo(home_dir: Path, temp_working_dir: Path) -> Iterable[Path]:
    """A repository created by the real git binary, for cross-checking."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    assert_git_version("2.28")  # Needed for `git init -b`
    global_config = """\
        [init]
          defaultBranch = main
        [commit]
          gpgsign = false
    """
    (home_dir / ".gitconfig").write_text(dedent(global_config))
    check_call(["git", "init", "--quiet", "-b", "main"])
    check_call(["git", "config", "user.email", "unit-test-runner@example.com"])
    check_call(["git", "config", "user.name", "Unit Test Runner"])
    yield temp_working_dir
