"""Shared fixtures for ghpages tests."""

import shutil
import subprocess
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


@pytest.fixture
def git_calls():
    """Patch every run_process import with one AsyncMock returning ""."""
    mock = AsyncMock(return_value="")
    with patch("ghpages.git.repo.run_process", mock), \
            patch("ghpages.git.probe.run_process", mock), \
            patch("ghpages.git.clone.run_process", mock):
        yield mock


def argvs(mock) -> list[list]:
    """Argument lists passed to a patched run_process, in call order."""
    return [c.args[1] for c in mock.call_args_list]


@pytest.fixture
def git_env(tmp_path, monkeypatch):
    """Isolate git from user config and give it a commit identity."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test Author")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "author@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test Author")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "author@example.com")
    return home


def git(*args, cwd: Path) -> str:
    """Run git synchronously for test setup and assertions."""
    result = subprocess.run(
        ["git", *args], cwd=str(cwd), capture_output=True, text=True, check=True,
    )
    return result.stdout


@pytest.fixture
def bare_remote(tmp_path, git_env) -> Path:
    """An empty bare repository to publish into."""
    remote = tmp_path / "remote.git"
    remote.mkdir()
    git("init", "--bare", cwd=remote)
    return remote


@pytest.fixture
def site(tmp_path) -> Path:
    """A directory of files to publish."""
    base = tmp_path / "site"
    (base / "css").mkdir(parents=True)
    (base / "index.html").write_text("<h1>hello</h1>\n")
    (base / "css" / "main.css").write_text("body {}\n")
    (base / ".nojekyll").write_text("")
    return base
