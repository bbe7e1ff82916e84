"""Value objects for Git domain."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CommitRange:
    """Range of commits to list.

    ``commit_a`` is exclusive; when it is None the whole history reachable
    from ``commit_b`` is listed.
    """

    repo_path: Path
    commit_a: str | None
    commit_b: str = "HEAD"

    @property
    def revision(self) -> str:
        """Revision expression understood by ``git log``."""
        if self.commit_a is None:
            return self.commit_b
        return f"{self.commit_a}..{self.commit_b}"
