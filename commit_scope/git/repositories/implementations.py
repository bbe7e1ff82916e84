"""Concrete implementation of Git repository operations."""

import subprocess
from datetime import datetime
from pathlib import Path

from commit_scope.errors import FetchError, ResolutionError
from commit_scope.git.domain.entities import Commit
from commit_scope.git.domain.value_objects import CommitRange
from commit_scope.git.repositories.interfaces import GitRepository


class GitRepositoryImpl(GitRepository):
    """Concrete implementation of Git repository operations using git commands."""

    def get_root(self, cwd: Path) -> Path:
        """
        Get the root directory of the repository containing a path.

        Args:
            cwd: Any directory inside the working tree

        Returns:
            Absolute path of the repository root

        Raises:
            ResolutionError: If the path is not inside a git repository
        """
        try:
            result = self._run_git(["rev-parse", "--show-toplevel"], cwd)
        except (subprocess.CalledProcessError, OSError) as e:
            raise ResolutionError(
                f"Failed to find repository root from {cwd}: {self._describe(e)}"
            ) from e

        root = result.stdout.strip()
        if not root:
            raise ResolutionError(f"No repository root found from {cwd}")
        return Path(root)

    def get_commit_files(self, repo_path: Path, commit_hash: str) -> tuple[str, ...]:
        """
        List the files changed by a commit.

        Args:
            repo_path: Path to the git repository
            commit_hash: Hash of the commit

        Returns:
            Tuple of file paths relative to the repository root

        Raises:
            FetchError: If the file list cannot be retrieved
        """
        try:
            result = self._run_git(
                ["diff-tree", "--root", "--no-commit-id", "--name-only", "-r", commit_hash],
                repo_path,
            )
        except (subprocess.CalledProcessError, OSError) as e:
            raise FetchError(commit_hash, self._describe(e)) from e

        return tuple(line for line in result.stdout.splitlines() if line)

    def list_commits(self, commit_range: CommitRange) -> tuple[Commit, ...]:
        """
        List commits in a range.

        Args:
            commit_range: Range of commits to retrieve

        Returns:
            Tuple of commits ordered from oldest to newest

        Raises:
            ResolutionError: If the range cannot be listed
        """
        try:
            result = self._run_git(
                ["log", "--reverse", "--format=%H|%an|%aI|%s", commit_range.revision],
                commit_range.repo_path,
            )
        except (subprocess.CalledProcessError, OSError) as e:
            raise ResolutionError(
                f"Failed to list commits {commit_range.revision}: {self._describe(e)}"
            ) from e

        commits: list[Commit] = []
        for line in result.stdout.splitlines():
            if not line:
                continue
            parts = line.split("|", 3)
            if len(parts) == 4:
                commit_hash, author, date_str, subject = parts
                commits.append(
                    Commit(
                        hash=commit_hash,
                        subject=subject,
                        author=author,
                        date=datetime.fromisoformat(date_str),
                    )
                )

        return tuple(commits)

    @staticmethod
    def _run_git(args: list[str], cwd: Path) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
        )

    @staticmethod
    def _describe(error: Exception) -> str:
        if isinstance(error, subprocess.CalledProcessError) and error.stderr:
            return str(error.stderr).strip()
        return str(error)
