"""Value objects for Packages domain."""

import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePath

MANIFEST_FILENAME = "package.json"


def split_segments(raw_path: str) -> tuple[str, ...]:
    """
    Normalize a relative path and split it into directory segments.

    Both ``/`` and the host separator are accepted, so paths reported by git
    compare equal to paths built on the host.

    Args:
        raw_path: Path relative to the repository root

    Returns:
        Tuple of path segments, empty for the repository root itself
    """
    normalized = os.path.normpath(raw_path.replace("\\", "/")) if raw_path else "."
    return tuple(part for part in PurePath(normalized).parts if part != ".")


@dataclass(frozen=True)
class PackagePath:
    """Root directory of a package, relative to the repository root."""

    segments: tuple[str, ...]

    @classmethod
    def from_string(cls, raw_path: str) -> "PackagePath":
        """Build a package path from a relative path string."""
        return cls(split_segments(raw_path))

    def joinpath(self, name: str) -> "PackagePath":
        """Return the package path of a child directory."""
        return PackagePath(self.segments + split_segments(name))

    def contains(self, file_path: str) -> bool:
        """
        Check whether a changed file lives under this package directory.

        The package segments must be a positional prefix of the file
        segments, so ``packages/foo`` never matches ``packages/foobar/x.js``.

        Args:
            file_path: Changed file path relative to the repository root

        Returns:
            True if the file is the package directory or one of its descendants
        """
        file_segments = split_segments(file_path)
        return file_segments[: len(self.segments)] == self.segments

    def __str__(self) -> str:
        return "/".join(self.segments) or "."


@dataclass(frozen=True)
class PackagePathSet:
    """Ordered, duplicate-free package paths to attribute commits against.

    The first entry is the current package, followed by linked dependencies.
    """

    paths: tuple[PackagePath, ...] = ()

    @classmethod
    def of(cls, *paths: PackagePath) -> "PackagePathSet":
        """Build a set keeping the first occurrence of each path."""
        return cls(tuple(dict.fromkeys(paths)))

    def __iter__(self) -> Iterator[PackagePath]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    def __str__(self) -> str:
        return ", ".join(f'"{path}"' for path in self.paths)


@dataclass(frozen=True)
class PackageManifest:
    """Subset of a package.json descriptor used for commit attribution."""

    path: Path
    name: str
    dependencies: Mapping[str, str] = field(default_factory=dict)

    @property
    def directory(self) -> Path:
        """Directory containing the manifest."""
        return self.path.parent


@dataclass(frozen=True)
class LinkedDependenciesConfig:
    """Opt-in linked dependency analysis settings."""

    dir: str

    @property
    def package_path(self) -> PackagePath:
        """Directory holding sibling packages, relative to the repository root."""
        return PackagePath.from_string(self.dir)
