"""Context transforms for the release pipeline."""

import dataclasses
from collections.abc import Awaitable, Callable, Sequence

from commit_scope.git.domain.entities import Commit
from commit_scope.release.domain.value_objects import ReleaseContext

CommitsTransform = Callable[[Sequence[Commit]], Awaitable[Sequence[Commit]]]


def map_commits(
    transform: CommitsTransform,
) -> Callable[[ReleaseContext], Awaitable[ReleaseContext]]:
    """
    Build a context transform that replaces the commit list.

    Args:
        transform: Coroutine function mapping the current commits to new ones

    Returns:
        Coroutine function returning a copy of the context with transformed commits
    """

    async def apply(context: ReleaseContext) -> ReleaseContext:
        commits = await transform(context.commits)
        return dataclasses.replace(context, commits=tuple(commits))

    return apply
