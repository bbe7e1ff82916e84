"""Repository interfaces for package manifests and package directories."""

from abc import ABC, abstractmethod
from pathlib import Path

from commit_scope.packages.domain.value_objects import PackageManifest


class ManifestRepository(ABC):
    """Interface for locating and reading package manifests."""

    @abstractmethod
    def find_nearest(self, start: Path) -> Path:
        """
        Find the nearest manifest walking upward from a directory.

        Args:
            start: Directory to start the search from

        Returns:
            Path of the manifest file

        Raises:
            ResolutionError: If no manifest exists in the directory or its parents
        """
        ...

    @abstractmethod
    def read(self, manifest_path: Path) -> PackageManifest:
        """
        Read a package manifest.

        Args:
            manifest_path: Path of the manifest file

        Returns:
            Parsed manifest

        Raises:
            ResolutionError: If the manifest is missing or malformed
        """
        ...


class DirectoryLister(ABC):
    """Interface for listing package directories."""

    @abstractmethod
    def list_child_directories(self, directory: Path) -> tuple[str, ...]:
        """
        List the names of the immediate child directories.

        Args:
            directory: Directory to list

        Returns:
            Tuple of child directory names

        Raises:
            ResolutionError: If the directory does not exist or cannot be listed
        """
        ...
