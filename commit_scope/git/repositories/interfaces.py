"""Repository interfaces for Git operations."""

from abc import ABC, abstractmethod
from pathlib import Path

from commit_scope.git.domain.entities import Commit
from commit_scope.git.domain.value_objects import CommitRange


class GitRepository(ABC):
    """Interface for Git repository operations."""

    @abstractmethod
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
        ...

    @abstractmethod
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
        ...

    @abstractmethod
    def list_commits(self, commit_range: CommitRange) -> tuple[Commit, ...]:
        """
        List commits in a range.

        Args:
            commit_range: Range of commits to retrieve

        Returns:
            Tuple of commits ordered from oldest to newest
        """
        ...
