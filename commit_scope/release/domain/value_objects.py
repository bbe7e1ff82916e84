"""Value objects for Release domain."""

import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from commit_scope.git.domain.entities import Commit
from commit_scope.packages.domain.value_objects import LinkedDependenciesConfig
from commit_scope.release.settings import DEFAULT_MAX_THREADS, max_threads_from_env


@dataclass(frozen=True)
class PluginConfig:
    """Options recognized by the package commit filter."""

    analyze_linked_dependencies: LinkedDependenciesConfig | None = None
    max_concurrency: int = DEFAULT_MAX_THREADS

    @classmethod
    def from_mapping(
        cls, options: Mapping[str, Any], env: Mapping[str, str] | None = None
    ) -> "PluginConfig":
        """
        Parse plugin options passed by the release pipeline.

        Args:
            options: Raw options; ``analyzeLinkedDependencies`` and
                ``analyze_linked_dependencies`` are both accepted
            env: Environment holding SRM_MAX_THREADS. Defaults to os.environ

        Returns:
            Parsed PluginConfig

        Raises:
            ValueError: If linked dependency analysis is enabled without a directory
        """
        linked = options.get("analyzeLinkedDependencies", options.get("analyze_linked_dependencies"))
        linked_config = None
        if linked:
            directory = linked.get("dir") if isinstance(linked, Mapping) else None
            if not isinstance(directory, str) or not directory:
                raise ValueError(
                    "analyzeLinkedDependencies requires a 'dir' relative to the repository root"
                )
            linked_config = LinkedDependenciesConfig(dir=directory)

        return cls(
            analyze_linked_dependencies=linked_config,
            max_concurrency=max_threads_from_env(env),
        )


@dataclass(frozen=True)
class ReleaseContext:
    """Release pipeline context seen by a wrapped hook."""

    commits: Sequence[Commit] = ()
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("commit_scope"))
    cwd: Path = field(default_factory=Path.cwd)
    env: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))
