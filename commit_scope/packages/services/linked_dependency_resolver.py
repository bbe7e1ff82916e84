"""Service for resolving sibling packages the current package depends on."""

import logging

from commit_scope.packages.domain.value_objects import (
    MANIFEST_FILENAME,
    LinkedDependenciesConfig,
    PackagePath,
)
from commit_scope.packages.repositories.interfaces import DirectoryLister, ManifestRepository
from commit_scope.packages.services.repo_path_resolver import RepoPathResolver

logger = logging.getLogger(__name__)


class LinkedDependencyResolver:
    """Maps declared runtime dependencies onto sibling package directories."""

    def __init__(
        self,
        repo_path_resolver: RepoPathResolver,
        manifest_repository: ManifestRepository,
        directory_lister: DirectoryLister,
    ) -> None:
        self._repo_path_resolver = repo_path_resolver
        self._manifest_repository = manifest_repository
        self._directory_lister = directory_lister

    def resolve_linked_paths(
        self,
        config: LinkedDependenciesConfig | None,
        package_path: PackagePath,
    ) -> tuple[PackagePath, ...]:
        """
        Resolve the package paths of linked dependencies.

        Only dependencies whose name exactly matches a directory under
        ``config.dir`` are linked. Without a config nothing is linked.

        Args:
            config: Linked dependency settings, or None when the analysis is disabled
            package_path: Path of the current package relative to the repository root

        Returns:
            Linked package paths in dependency declaration order

        Raises:
            ResolutionError: If the package directory cannot be listed or the
                manifest cannot be read
        """
        if config is None:
            return ()

        repo_root = self._repo_path_resolver.resolve_repo_root()
        packages_dir = config.package_path
        available = set(
            self._directory_lister.list_child_directories(
                repo_root.joinpath(*packages_dir.segments)
            )
        )

        manifest = self._manifest_repository.read(
            repo_root.joinpath(*package_path.segments, MANIFEST_FILENAME)
        )

        linked = tuple(
            packages_dir.joinpath(dependency)
            for dependency in manifest.dependencies
            if dependency in available
        )
        logger.debug("Linked dependencies of %s: %s", manifest.name, [str(p) for p in linked])
        return linked
