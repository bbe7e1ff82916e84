#!/usr/bin/env python3
"""
Script to list the commits relevant to the package in the current directory:
- From reference (optional, defaults to the whole history)
- To reference (optional, defaults to HEAD)
- --linked-dir: Directory of sibling packages whose changes also count (optional)
- --max-concurrency: Maximum concurrent file fetches (optional, defaults to SRM_MAX_THREADS or 500)
"""

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from commit_scope.errors import CommitScopeError
from commit_scope.git.domain.value_objects import CommitRange
from commit_scope.git.repositories.implementations import GitRepositoryImpl
from commit_scope.release.domain.value_objects import ReleaseContext
from commit_scope.release.services.package_commits import with_only_package_commits
from commit_scope.release.settings import MAX_THREADS_ENV_VAR, load_env_file


def print_commits(plugin_config: Mapping[str, Any], context: ReleaseContext) -> int:
    """Release hook printing the commits it receives."""
    for commit in context.commits:
        print(f"{commit.hash[:8]} {commit.subject}")
    return len(context.commits)


def build_plugin_config(linked_dir: str | None) -> dict[str, Any]:
    """Build plugin options from command-line arguments."""
    if linked_dir is None:
        return {}
    return {"analyzeLinkedDependencies": {"dir": linked_dir}}


def main() -> None:
    """Main function to parse arguments and list the package commits."""
    parser = argparse.ArgumentParser(
        description="List the commits that touched the package in the current directory"
    )
    parser.add_argument(
        "from_ref",
        type=str,
        nargs="?",
        default=None,
        help="Exclusive start of the range (optional, defaults to the whole history)",
    )
    parser.add_argument(
        "to_ref",
        type=str,
        nargs="?",
        default="HEAD",
        help="Inclusive end of the range (default: HEAD)",
    )
    parser.add_argument(
        "--cwd",
        type=Path,
        default=Path.cwd(),
        help="Directory inside the package (default: current directory)",
    )
    parser.add_argument(
        "--linked-dir",
        type=str,
        default=None,
        help="Directory of sibling packages, relative to the repository root",
    )
    parser.add_argument(
        "--max-concurrency",
        type=int,
        default=None,
        help=f"Maximum concurrent file fetches (default: {MAX_THREADS_ENV_VAR} or 500)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every commit inclusion decision",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    load_env_file()

    env = dict(os.environ)
    if args.max_concurrency is not None:
        env[MAX_THREADS_ENV_VAR] = str(args.max_concurrency)

    try:
        git_repo = GitRepositoryImpl()
        repo_root = git_repo.get_root(args.cwd)
        commits = git_repo.list_commits(
            CommitRange(repo_path=repo_root, commit_a=args.from_ref, commit_b=args.to_ref)
        )

        context = ReleaseContext(commits=commits, cwd=args.cwd, env=env)
        hook = with_only_package_commits(print_commits, git_repository=git_repo)
        asyncio.run(hook(build_plugin_config(args.linked_dir), context))
        sys.exit(0)

    except ValueError as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        sys.exit(1)
    except CommitScopeError as e:
        print(f"✗ Failed to list package commits: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
