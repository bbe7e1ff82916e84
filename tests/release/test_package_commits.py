"""Tests for the release hook wrapper."""

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from commit_scope.errors import FetchError, ResolutionError
from commit_scope.git.domain.entities import AnnotatedCommit, Commit
from commit_scope.git.domain.value_objects import CommitRange
from commit_scope.git.repositories.implementations import GitRepositoryImpl
from commit_scope.git.services.file_change_cache import FileChangeCache
from commit_scope.release.domain.value_objects import ReleaseContext
from commit_scope.release.services.commit_transforms import map_commits
from commit_scope.release.services.package_commits import with_only_package_commits

SCENARIO_FILES = {
    "h1": ("packages/core/index.js",),
    "h2": ("packages/other/index.js",),
    "h3": ("packages/core/lib/x.js", "README.md"),
    "h4": ("packages/util/index.js",),
}


class RecordingHook:
    """Release hook remembering the context it was called with."""

    def __init__(self, result: Any = "released") -> None:
        self.result = result
        self.calls: list[tuple[Any, ReleaseContext]] = []

    def __call__(self, plugin_config: Any, context: ReleaseContext) -> Any:
        self.calls.append((plugin_config, context))
        return self.result


@pytest.fixture
def monorepo(tmp_path: Path, write_manifest: Callable[..., Path]) -> Path:
    root = tmp_path / "monorepo"
    write_manifest(root / "packages" / "core", "@acme/core", {"util": "^1.0.0", "left-pad": "^1.3.0"})
    write_manifest(root / "packages" / "other", "@acme/other")
    write_manifest(root / "packages" / "util", "util")
    return root


def scenario_commits(*hashes: str) -> tuple[Commit, ...]:
    return tuple(Commit(hash=h, subject=f"subject {h}") for h in hashes)


class TestMapCommits:
    """Tests for the commit-list transform hook."""

    @pytest.mark.asyncio
    async def test_replaces_commits_only(self, tmp_path: Path) -> None:
        async def keep_last(commits: Sequence[Commit]) -> Sequence[Commit]:
            return commits[-1:]

        context = ReleaseContext(commits=scenario_commits("a", "b"), cwd=tmp_path, env={})
        result = await map_commits(keep_last)(context)

        assert [c.hash for c in result.commits] == ["b"]
        assert result.cwd == tmp_path
        assert [c.hash for c in context.commits] == ["a", "b"]


class TestWithOnlyPackageCommits:
    """Tests for with_only_package_commits."""

    @pytest.mark.asyncio
    async def test_filters_commits_for_package(
        self,
        monorepo: Path,
        fake_git_factory: Callable[..., Any],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.INFO)
        hook = RecordingHook()
        wrapped = with_only_package_commits(
            hook, git_repository=fake_git_factory(monorepo, SCENARIO_FILES), cache=FileChangeCache()
        )
        context = ReleaseContext(
            commits=scenario_commits("h1", "h2", "h3"),
            cwd=monorepo / "packages" / "core",
            env={},
        )

        result = await wrapped({}, context)

        assert result == "released"
        (plugin_config, seen), = hook.calls
        assert plugin_config == {}
        assert [c.hash for c in seen.commits] == ["h1", "h3"]
        assert all(isinstance(c, AnnotatedCommit) for c in seen.commits)
        assert "Found 2 commits for package @acme/core since last release" in caplog.messages

    @pytest.mark.asyncio
    async def test_includes_linked_dependencies(
        self, monorepo: Path, fake_git_factory: Callable[..., Any]
    ) -> None:
        hook = RecordingHook()
        wrapped = with_only_package_commits(
            hook, git_repository=fake_git_factory(monorepo, SCENARIO_FILES), cache=FileChangeCache()
        )
        context = ReleaseContext(
            commits=scenario_commits("h1", "h2", "h3", "h4"),
            cwd=monorepo / "packages" / "core",
            env={},
        )

        await wrapped({"analyzeLinkedDependencies": {"dir": "packages"}}, context)

        (_, seen), = hook.calls
        assert [c.hash for c in seen.commits] == ["h1", "h3", "h4"]
        assert [str(c.matched_package) for c in seen.commits] == [
            "packages/core",
            "packages/core",
            "packages/util",
        ]

    @pytest.mark.asyncio
    async def test_awaits_async_hook(
        self, monorepo: Path, fake_git_factory: Callable[..., Any]
    ) -> None:
        async def hook(plugin_config: Any, context: ReleaseContext) -> list[str]:
            return [c.hash for c in context.commits]

        wrapped = with_only_package_commits(
            hook, git_repository=fake_git_factory(monorepo, SCENARIO_FILES), cache=FileChangeCache()
        )
        context = ReleaseContext(
            commits=scenario_commits("h2", "h3"), cwd=monorepo / "packages" / "other", env={}
        )

        assert await wrapped({}, context) == ["h2"]

    @pytest.mark.asyncio
    async def test_propagates_fetch_errors(
        self, monorepo: Path, fake_git_factory: Callable[..., Any]
    ) -> None:
        hook = RecordingHook()
        wrapped = with_only_package_commits(
            hook, git_repository=fake_git_factory(monorepo, SCENARIO_FILES), cache=FileChangeCache()
        )
        context = ReleaseContext(
            commits=scenario_commits("h1", "unknown"), cwd=monorepo / "packages" / "core", env={}
        )

        with pytest.raises(FetchError):
            await wrapped({}, context)
        assert hook.calls == []

    @pytest.mark.asyncio
    async def test_propagates_missing_linked_directory(
        self, monorepo: Path, fake_git_factory: Callable[..., Any]
    ) -> None:
        hook = RecordingHook()
        wrapped = with_only_package_commits(
            hook, git_repository=fake_git_factory(monorepo, SCENARIO_FILES), cache=FileChangeCache()
        )
        context = ReleaseContext(
            commits=scenario_commits("h1"), cwd=monorepo / "packages" / "core", env={}
        )

        with pytest.raises(ResolutionError):
            await wrapped({"analyzeLinkedDependencies": {"dir": "libs"}}, context)
        assert hook.calls == []

    @pytest.mark.asyncio
    async def test_propagates_hook_errors(
        self, monorepo: Path, fake_git_factory: Callable[..., Any]
    ) -> None:
        def hook(plugin_config: Any, context: ReleaseContext) -> None:
            raise RuntimeError("publish failed")

        wrapped = with_only_package_commits(
            hook, git_repository=fake_git_factory(monorepo, SCENARIO_FILES), cache=FileChangeCache()
        )
        context = ReleaseContext(
            commits=scenario_commits("h1"), cwd=monorepo / "packages" / "core", env={}
        )

        with pytest.raises(RuntimeError, match="publish failed"):
            await wrapped({}, context)

    @pytest.mark.asyncio
    async def test_against_real_repository(
        self,
        git_repo: Path,
        commit_files: Callable[..., str],
        write_manifest: Callable[..., Path],
    ) -> None:
        write_manifest(git_repo / "packages" / "core", "core")
        write_manifest(git_repo / "packages" / "foobar", "foobar")
        setup = commit_files(git_repo, "chore: scaffold", {})
        core_change = commit_files(git_repo, "feat(core): add", {"packages/core/index.js": "1"})
        commit_files(git_repo, "feat(foobar): add", {"packages/foobar/index.js": "1"})
        docs_change = commit_files(git_repo, "docs: readme", {"README.md": "docs"})
        core_fix = commit_files(
            git_repo, "fix(core): patch", {"packages/core/lib/x.js": "2", "README.md": "more"}
        )

        git = GitRepositoryImpl()
        commits = git.list_commits(CommitRange(git_repo, setup))
        hook = RecordingHook()
        wrapped = with_only_package_commits(hook, git_repository=git, cache=FileChangeCache())

        await wrapped(
            {},
            ReleaseContext(commits=commits, cwd=git_repo / "packages" / "core", env={}),
        )

        (_, seen), = hook.calls
        assert [c.hash for c in seen.commits] == [core_change, core_fix]
        assert docs_change not in [c.hash for c in seen.commits]
