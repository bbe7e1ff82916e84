"""Errors raised while attributing commits to packages."""


class CommitScopeError(Exception):
    """Base class for all commit attribution failures."""


class ResolutionError(CommitScopeError):
    """A package manifest, repository root or linked package directory could not be resolved."""


class FetchError(CommitScopeError):
    """The changed-file list of a commit could not be retrieved."""

    def __init__(self, commit_hash: str, message: str) -> None:
        """
        Initialize FetchError.

        Args:
            commit_hash: Hash of the commit whose files could not be fetched
            message: Description of the failure
        """
        super().__init__(f"Failed to fetch files for commit {commit_hash}: {message}")
        self.commit_hash = commit_hash
