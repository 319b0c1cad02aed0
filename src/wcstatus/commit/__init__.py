"""Commit path expansion for renames and added ancestor directories."""

from wcstatus.commit._paths import (
    CommitPathExpander,
    CommitPaths,
    ResourceLookup,
    build_commit_paths,
    expand_commit_paths,
)

__all__ = [
    "CommitPathExpander",
    "CommitPaths",
    "ResourceLookup",
    "build_commit_paths",
    "expand_commit_paths",
]
