"""Git domain entities."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from commit_scope.packages.domain.value_objects import PackagePath


@dataclass(frozen=True)
class Commit:
    """Commit entity as observed by the release pipeline."""

    hash: str
    subject: str
    author: str = ""
    date: datetime | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class AnnotatedCommit(Commit):
    """Commit entity with the files it changed, relative to the repository root.

    ``matched_package`` and ``matched_file`` are only set on commits returned
    by the commit filter and record why the commit was kept.
    """

    files: tuple[str, ...] = ()
    matched_package: "PackagePath | None" = None
    matched_file: str | None = None

    @classmethod
    def from_commit(cls, commit: Commit, files: Sequence[str]) -> "AnnotatedCommit":
        """Annotate a commit with its changed files."""
        values = {f.name: getattr(commit, f.name) for f in fields(Commit)}
        return cls(**values, files=tuple(files))
