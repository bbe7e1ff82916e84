"""Shared fixtures for commit attribution tests."""

import json
import shutil
import subprocess
import threading
import time
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from commit_scope.errors import FetchError
from commit_scope.git.domain.entities import Commit
from commit_scope.git.domain.value_objects import CommitRange
from commit_scope.git.repositories.interfaces import GitRepository


class FakeGitRepository(GitRepository):
    """In-memory git repository recording file fetches."""

    def __init__(
        self,
        root: Path,
        files_by_hash: Mapping[str, tuple[str, ...]] | None = None,
        delays: Mapping[str, float] | None = None,
        failures: Mapping[str, Exception] | None = None,
    ) -> None:
        self.root = root
        self.files_by_hash = dict(files_by_hash or {})
        self.delays = dict(delays or {})
        self.failures = dict(failures or {})
        self.calls: list[str] = []
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def get_root(self, cwd: Path) -> Path:
        return self.root

    def get_commit_files(self, repo_path: Path, commit_hash: str) -> tuple[str, ...]:
        with self._lock:
            self.calls.append(commit_hash)
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            time.sleep(self.delays.get(commit_hash, 0.0))
            if commit_hash in self.failures:
                raise self.failures[commit_hash]
            if commit_hash not in self.files_by_hash:
                raise FetchError(commit_hash, "unknown revision")
            return self.files_by_hash[commit_hash]
        finally:
            with self._lock:
                self.active -= 1

    def list_commits(self, commit_range: CommitRange) -> tuple[Commit, ...]:
        return tuple(Commit(hash=h, subject=f"commit {h}") for h in self.files_by_hash)


@pytest.fixture
def fake_git_factory() -> Callable[..., FakeGitRepository]:
    return FakeGitRepository


@pytest.fixture
def write_manifest() -> Callable[..., Path]:
    """Write a package.json into a directory, creating it if needed."""

    def _write(directory: Path, name: str, dependencies: dict[str, str] | None = None) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        data: dict[str, object] = {"name": name, "version": "1.0.0"}
        if dependencies is not None:
            data["dependencies"] = dependencies
        manifest = directory / "package.json"
        manifest.write_text(json.dumps(data), encoding="utf-8")
        return manifest

    return _write


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True
    )
    return result.stdout.strip()


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Empty git repository with a configured identity."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")

    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "config", "user.email", "dev@example.com")
    _git(repo, "config", "user.name", "Dev")
    _git(repo, "config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def commit_files() -> Callable[..., str]:
    """Write files into a repository, commit them and return the commit hash."""

    def _commit(repo: Path, subject: str, files: Mapping[str, str]) -> str:
        for relative, content in files.items():
            target = repo / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        _git(repo, "add", "-A")
        _git(repo, "commit", "-q", "-m", subject)
        return _git(repo, "rev-parse", "HEAD")

    return _commit
