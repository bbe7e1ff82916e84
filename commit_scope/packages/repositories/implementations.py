"""Concrete implementations of package repositories backed by the file system."""

import json
from pathlib import Path

from commit_scope.errors import ResolutionError
from commit_scope.packages.domain.value_objects import MANIFEST_FILENAME, PackageManifest
from commit_scope.packages.repositories.interfaces import DirectoryLister, ManifestRepository


class JsonManifestRepository(ManifestRepository):
    """Reads package.json manifests from disk."""

    def __init__(self, filename: str = MANIFEST_FILENAME) -> None:
        self._filename = filename

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
        start = start.resolve()
        for directory in (start, *start.parents):
            candidate = directory / self._filename
            if candidate.is_file():
                return candidate

        raise ResolutionError(f"No {self._filename} found in {start} or any parent directory")

    def read(self, manifest_path: Path) -> PackageManifest:
        """
        Read a package manifest.

        An absent ``dependencies`` mapping is read as an empty one.

        Args:
            manifest_path: Path of the manifest file

        Returns:
            Parsed manifest

        Raises:
            ResolutionError: If the manifest is missing or malformed
        """
        try:
            with manifest_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ResolutionError(f"Failed to read manifest {manifest_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ResolutionError(f"Invalid JSON in manifest {manifest_path}: {e}") from e

        if not isinstance(data, dict):
            raise ResolutionError(f"Manifest {manifest_path} is not a JSON object")

        name = data.get("name")
        if not isinstance(name, str):
            raise ResolutionError(f"Manifest {manifest_path} has no package name")

        dependencies = data.get("dependencies") or {}
        if not isinstance(dependencies, dict):
            raise ResolutionError(f"Manifest {manifest_path} has invalid dependencies")

        return PackageManifest(
            path=manifest_path,
            name=name,
            dependencies={str(dep): str(version) for dep, version in dependencies.items()},
        )


class FileSystemDirectoryLister(DirectoryLister):
    """Lists package directories on the local file system."""

    def list_child_directories(self, directory: Path) -> tuple[str, ...]:
        """
        List the names of the immediate child directories.

        Args:
            directory: Directory to list

        Returns:
            Tuple of child directory names sorted by name

        Raises:
            ResolutionError: If the directory does not exist or cannot be listed
        """
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            raise ResolutionError(f"Failed to list package directory {directory}: {e}") from e

        return tuple(sorted(entry.name for entry in entries if entry.is_dir()))
