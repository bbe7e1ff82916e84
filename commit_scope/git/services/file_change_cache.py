"""Process-wide cache of changed-file lists keyed by commit hash."""

from collections.abc import Sequence


class FileChangeCache:
    """Append-only mapping from raw commit hash to its changed files.

    Entries are never evicted or updated: the cache lives for one run and is
    bounded by the number of distinct commits processed in it.
    """

    def __init__(self) -> None:
        self._files_by_hash: dict[str, tuple[str, ...]] = {}

    def get(self, commit_hash: str) -> tuple[str, ...] | None:
        """Return the cached files of a commit, or None if not fetched yet."""
        return self._files_by_hash.get(commit_hash)

    def insert_if_absent(self, commit_hash: str, files: Sequence[str]) -> tuple[str, ...]:
        """
        Store files for a commit unless an entry already exists.

        Args:
            commit_hash: Raw commit hash, used as-is for the key
            files: Changed files of the commit

        Returns:
            The cached files, which are the previous entry if one existed
        """
        return self._files_by_hash.setdefault(commit_hash, tuple(files))

    def __contains__(self, commit_hash: object) -> bool:
        return commit_hash in self._files_by_hash

    def __len__(self) -> int:
        return len(self._files_by_hash)


PROCESS_CACHE = FileChangeCache()
