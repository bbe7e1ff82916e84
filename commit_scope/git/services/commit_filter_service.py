"""Service for keeping only the commits that touched a package."""

import dataclasses
import logging
from collections.abc import Iterable, Sequence

from commit_scope.git.domain.entities import AnnotatedCommit
from commit_scope.packages.domain.value_objects import PackagePath

logger = logging.getLogger(__name__)


class CommitFilterService:
    """Service for attributing annotated commits to package paths."""

    def matching_file(self, package_path: PackagePath, commit: AnnotatedCommit) -> str | None:
        """
        Find the first file of a commit that lives under a package path.

        Args:
            package_path: Package directory relative to the repository root
            commit: Commit annotated with its changed files

        Returns:
            The first qualifying file, or None if the commit did not touch the package
        """
        return next((file for file in commit.files if package_path.contains(file)), None)

    def filter_by_package(
        self, package_path: PackagePath, commits: Sequence[AnnotatedCommit]
    ) -> list[AnnotatedCommit]:
        """
        Keep the commits that touched one package path, preserving their order.

        Args:
            package_path: Package directory relative to the repository root
            commits: Commits annotated with their changed files

        Returns:
            Matching commits tagged with the package path and the matched file
        """
        matching: list[AnnotatedCommit] = []
        for commit in commits:
            package_file = self.matching_file(package_path, commit)
            if package_file is None:
                continue

            logger.debug(
                'Including commit "%s" because it modified package file "%s".',
                commit.subject,
                package_file,
            )
            matching.append(
                dataclasses.replace(
                    commit, matched_package=package_path, matched_file=package_file
                )
            )
        return matching

    def filter_by_packages(
        self, package_paths: Iterable[PackagePath], commits: Sequence[AnnotatedCommit]
    ) -> tuple[AnnotatedCommit, ...]:
        """
        Keep the commits that touched any of the package paths.

        Results are concatenated in package path order, so a commit touching
        two package paths appears once per package.

        Args:
            package_paths: Package directories relative to the repository root
            commits: Commits annotated with their changed files

        Returns:
            Tuple of matching commits
        """
        return tuple(
            commit
            for package_path in package_paths
            for commit in self.filter_by_package(package_path, commits)
        )
