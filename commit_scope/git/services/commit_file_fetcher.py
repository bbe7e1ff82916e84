"""Service for annotating commits with the files they changed."""

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from commit_scope.errors import FetchError
from commit_scope.git.domain.entities import AnnotatedCommit, Commit
from commit_scope.git.repositories.interfaces import GitRepository
from commit_scope.git.services.file_change_cache import PROCESS_CACHE, FileChangeCache

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 500


class CommitFileFetcher:
    """Fetches changed-file lists with memoization and bounded concurrency."""

    def __init__(
        self,
        git_repository: GitRepository,
        repo_path: Path,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        cache: FileChangeCache | None = None,
    ) -> None:
        """
        Initialize CommitFileFetcher.

        Args:
            git_repository: Repository implementation for Git operations
            repo_path: Path to the git repository
            max_concurrency: Maximum number of retrievals in flight per batch
            cache: Cache of already fetched commits. Defaults to the process-wide cache
        """
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")

        self._git_repository = git_repository
        self._repo_path = repo_path
        self._max_concurrency = max_concurrency
        self._cache = PROCESS_CACHE if cache is None else cache
        self._in_flight: dict[str, asyncio.Future[tuple[str, ...]]] = {}

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    async def files_for_commit(self, commit_hash: str) -> tuple[str, ...]:
        """
        Get the files changed by a commit, fetching them at most once.

        Concurrent requests for the same hash share a single retrieval.

        Args:
            commit_hash: Raw hash of the commit

        Returns:
            Tuple of file paths relative to the repository root

        Raises:
            FetchError: If the underlying retrieval fails
        """
        cached = self._cache.get(commit_hash)
        if cached is not None:
            logger.debug("Using cached files for commit %s", commit_hash)
            return cached

        pending = self._in_flight.get(commit_hash)
        if pending is None:
            pending = asyncio.ensure_future(self._retrieve(commit_hash))
            self._in_flight[commit_hash] = pending
        try:
            return await pending
        finally:
            self._in_flight.pop(commit_hash, None)

    async def with_files(self, commits: Sequence[Commit]) -> tuple[AnnotatedCommit, ...]:
        """
        Annotate every commit with its changed files.

        Retrievals beyond ``max_concurrency`` wait in submission order. The
        first failure aborts the batch and is propagated unchanged.

        Args:
            commits: Commits to annotate

        Returns:
            Annotated commits in the same order as the input
        """
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def annotate(commit: Commit) -> AnnotatedCommit:
            async with semaphore:
                files = await self.files_for_commit(commit.hash)
            return AnnotatedCommit.from_commit(commit, files)

        return tuple(await asyncio.gather(*(annotate(commit) for commit in commits)))

    async def _retrieve(self, commit_hash: str) -> tuple[str, ...]:
        logger.debug("Fetching files for commit %s", commit_hash)
        try:
            files = await asyncio.to_thread(
                self._git_repository.get_commit_files, self._repo_path, commit_hash
            )
        except FetchError:
            raise
        except Exception as e:
            raise FetchError(commit_hash, str(e)) from e
        return self._cache.insert_if_absent(commit_hash, files)
