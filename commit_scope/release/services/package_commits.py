"""Release hook wrapper restricting the commit list to the current package."""

import inspect
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from commit_scope.git.domain.entities import AnnotatedCommit, Commit
from commit_scope.git.repositories.implementations import GitRepositoryImpl
from commit_scope.git.repositories.interfaces import GitRepository
from commit_scope.git.services.commit_file_fetcher import CommitFileFetcher
from commit_scope.git.services.commit_filter_service import CommitFilterService
from commit_scope.git.services.file_change_cache import FileChangeCache
from commit_scope.packages.domain.value_objects import PackagePathSet
from commit_scope.packages.repositories.implementations import (
    FileSystemDirectoryLister,
    JsonManifestRepository,
)
from commit_scope.packages.repositories.interfaces import DirectoryLister, ManifestRepository
from commit_scope.packages.services.linked_dependency_resolver import LinkedDependencyResolver
from commit_scope.packages.services.repo_path_resolver import RepoPathResolver
from commit_scope.release.domain.value_objects import PluginConfig, ReleaseContext
from commit_scope.release.services.commit_transforms import map_commits

logger = logging.getLogger(__name__)

ReleaseHook = Callable[[Mapping[str, Any], ReleaseContext], Any]


class PackageCommitsService:
    """Service for restricting a commit list to the commits of one package."""

    def __init__(
        self,
        git_repository: GitRepository,
        manifest_repository: ManifestRepository,
        directory_lister: DirectoryLister,
        cache: FileChangeCache | None = None,
    ) -> None:
        """
        Initialize PackageCommitsService.

        Args:
            git_repository: Repository implementation for Git operations
            manifest_repository: Repository for reading package manifests
            directory_lister: Lister for linked package directories
            cache: Changed-file cache. Defaults to the process-wide cache
        """
        self._git_repository = git_repository
        self._manifest_repository = manifest_repository
        self._directory_lister = directory_lister
        self._cache = cache
        self._commit_filter_service = CommitFilterService()

    def repo_path_resolver(self, context: ReleaseContext) -> RepoPathResolver:
        return RepoPathResolver(self._git_repository, self._manifest_repository, cwd=context.cwd)

    def resolve_package_paths(
        self, config: PluginConfig, context: ReleaseContext
    ) -> PackagePathSet:
        """
        Resolve the current package path followed by its linked dependency paths.

        Args:
            config: Parsed plugin options
            context: Release pipeline context

        Returns:
            Package paths to attribute commits against
        """
        resolver = self.repo_path_resolver(context)
        package_path = resolver.resolve_package_path()
        linked_resolver = LinkedDependencyResolver(
            resolver, self._manifest_repository, self._directory_lister
        )
        linked_paths = linked_resolver.resolve_linked_paths(
            config.analyze_linked_dependencies, package_path
        )
        return PackagePathSet.of(package_path, *linked_paths)

    async def only_package_commits(
        self, config: PluginConfig, context: ReleaseContext, commits: Sequence[Commit]
    ) -> tuple[AnnotatedCommit, ...]:
        """
        Keep the commits that touched the current package or its linked dependencies.

        Args:
            config: Parsed plugin options
            context: Release pipeline context
            commits: Commits observed by the release pipeline

        Returns:
            Matching commits, concatenated per package path

        Raises:
            ResolutionError: If the package paths cannot be resolved
            FetchError: If the changed files of any commit cannot be fetched
        """
        package_paths = self.resolve_package_paths(config, context)
        logger.info("Filter commits by package path: %s", package_paths)

        fetcher = CommitFileFetcher(
            self._git_repository,
            self.repo_path_resolver(context).resolve_repo_root(),
            max_concurrency=config.max_concurrency,
            cache=self._cache,
        )
        commits_with_files = await fetcher.with_files(commits)
        return self._commit_filter_service.filter_by_packages(package_paths, commits_with_files)


def with_only_package_commits(
    plugin: ReleaseHook,
    git_repository: GitRepository | None = None,
    manifest_repository: ManifestRepository | None = None,
    directory_lister: DirectoryLister | None = None,
    cache: FileChangeCache | None = None,
) -> Callable[[Mapping[str, Any], ReleaseContext], Any]:
    """
    Wrap a release hook so it only sees the commits of the current package.

    The wrapped hook receives the original plugin options and a copy of the
    context whose commits were filtered. Errors are propagated unchanged.

    Args:
        plugin: Release hook, either a plain function or a coroutine function
        git_repository: Git operations. Defaults to GitRepositoryImpl
        manifest_repository: Manifest access. Defaults to JsonManifestRepository
        directory_lister: Package directory listing. Defaults to FileSystemDirectoryLister
        cache: Changed-file cache. Defaults to the process-wide cache

    Returns:
        Coroutine function with the same signature as the hook
    """
    service = PackageCommitsService(
        git_repository or GitRepositoryImpl(),
        manifest_repository or JsonManifestRepository(),
        directory_lister or FileSystemDirectoryLister(),
        cache=cache,
    )

    async def wrapped(plugin_config: Mapping[str, Any], context: ReleaseContext) -> Any:
        config = PluginConfig.from_mapping(plugin_config, env=context.env)

        async def only_package_commits(commits: Sequence[Commit]) -> Sequence[Commit]:
            return await service.only_package_commits(config, context, commits)

        filtered_context = await map_commits(only_package_commits)(context)

        result = plugin(plugin_config, filtered_context)
        if inspect.isawaitable(result):
            result = await result

        manifest = service.repo_path_resolver(context).read_manifest()
        context.logger.info(
            "Found %s commits for package %s since last release",
            len(filtered_context.commits),
            manifest.name,
        )
        return result

    return wrapped
