"""Service for locating the current package inside its repository."""

import os
from pathlib import Path

from commit_scope.errors import ResolutionError
from commit_scope.git.repositories.interfaces import GitRepository
from commit_scope.packages.domain.value_objects import PackageManifest, PackagePath
from commit_scope.packages.repositories.interfaces import ManifestRepository


class RepoPathResolver:
    """Resolves the package root path relative to the git repository root."""

    def __init__(
        self,
        git_repository: GitRepository,
        manifest_repository: ManifestRepository,
        cwd: Path | None = None,
    ) -> None:
        """
        Initialize RepoPathResolver.

        Args:
            git_repository: Repository implementation for Git operations
            manifest_repository: Repository for reading package manifests
            cwd: Working location to resolve from. Defaults to the process working directory
        """
        self._git_repository = git_repository
        self._manifest_repository = manifest_repository
        self._cwd = cwd

    @property
    def cwd(self) -> Path:
        return self._cwd if self._cwd is not None else Path.cwd()

    def resolve_repo_root(self) -> Path:
        """Get the absolute repository root."""
        return self._git_repository.get_root(self.cwd).resolve()

    def resolve_manifest_path(self) -> Path:
        """Get the nearest manifest walking upward from the working location."""
        return self._manifest_repository.find_nearest(self.cwd)

    def read_manifest(self) -> PackageManifest:
        """Read the manifest of the current package."""
        return self._manifest_repository.read(self.resolve_manifest_path())

    def resolve_package_path(self) -> PackagePath:
        """
        Get the package root path relative to the repository root.

        Returns:
            PackagePath of the directory holding the nearest manifest

        Raises:
            ResolutionError: If no manifest or repository root is found, or the
                manifest lies outside the repository
        """
        package_dir = self.resolve_manifest_path().parent.resolve()
        repo_root = self.resolve_repo_root()

        relative = os.path.relpath(package_dir, repo_root)
        package_path = PackagePath.from_string(relative)
        if package_path.segments[:1] == ("..",):
            raise ResolutionError(
                f"Package directory {package_dir} is outside repository {repo_root}"
            )
        return package_path
