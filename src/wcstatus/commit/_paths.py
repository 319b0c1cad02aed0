"""Commit path expansion.

A commit of selected resources has to name more than the selected paths:
the source of every rename, and every added ancestor directory that is not
yet in the repository.
"""

import os
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol

from wcstatus.enums import Status
from wcstatus.status import TrackedResource


class ResourceLookup(Protocol):
    """Anything that can resolve an absolute path to a tracked resource."""

    def get_resource_from_file(
        self, path: str | os.PathLike[str]
    ) -> TrackedResource | None:
        """Return the tracked resource for a path, or None."""
        ...


def _empty_rename_map() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class CommitPaths:
    """Paths offered for a commit.

    Attributes:
        display_paths: Paths to show for selection (rename targets only,
            added ancestors included), in first-seen order.
        rename_map: Rename target -> rename source.
    """

    display_paths: tuple[str, ...] = ()
    rename_map: Mapping[str, str] = field(default_factory=_empty_rename_map)

    def submission_paths(self) -> list[str]:
        """Paths to submit when every display path is selected."""
        return expand_commit_paths(self.display_paths, self.rename_map)


def build_commit_paths(
    resources: Iterable[TrackedResource],
    lookup: ResourceLookup,
) -> CommitPaths:
    """Build the display paths and rename map for a set of resources.

    For each resource, its parent directories are walked upward through the
    lookup. Ancestors classified as added are included; the walk ends at the
    first ancestor the lookup does not know.

    Args:
        resources: Resources selected for commit.
        lookup: Index used to classify ancestor directories.

    Returns:
        CommitPaths with deduplicated display paths and the rename map.
    """
    resources = list(resources)
    display: dict[str, None] = {
        os.fspath(resource.resource_path): None for resource in resources
    }
    rename_map: dict[str, str] = {}

    for resource in resources:
        path = os.fspath(resource.resource_path)
        if resource.is_rename and resource.rename_source_path is not None:
            rename_map[path] = os.fspath(resource.rename_source_path)

        directory = os.path.dirname(path)
        while directory and directory != path:
            parent = lookup.get_resource_from_file(directory)
            if parent is None:
                break
            if parent.status == Status.ADDED:
                display.setdefault(directory, None)
            path, directory = directory, os.path.dirname(directory)

    return CommitPaths(
        display_paths=tuple(display),
        rename_map=MappingProxyType(rename_map),
    )


def expand_commit_paths(
    selected: Sequence[str],
    rename_map: Mapping[str, str],
) -> list[str]:
    """Append the rename source of every selected rename target.

    Args:
        selected: Display paths the user selected.
        rename_map: Rename target -> rename source.

    Returns:
        Selected paths followed by the rename sources, without duplicates.
    """
    paths: dict[str, None] = dict.fromkeys(selected)
    for path in selected:
        source = rename_map.get(path)
        if source:
            paths.setdefault(source, None)
    return list(paths)


class CommitPathExpander:
    """Expands resources into the full path list for a commit.

    Example:
        >>> expander = CommitPathExpander(manager)
        >>> expander.expand(manager.staged.resources)
        ['/wc/new.txt', '/wc/old.txt']
    """

    __slots__ = ("_lookup",)

    def __init__(self, lookup: ResourceLookup) -> None:
        self._lookup: ResourceLookup = lookup

    def build(self, resources: Iterable[TrackedResource]) -> CommitPaths:
        """Build display paths and the rename map for the resources."""
        return build_commit_paths(resources, self._lookup)

    def expand(self, resources: Iterable[TrackedResource]) -> list[str]:
        """Return every path that has to be submitted for the resources."""
        return self.build(resources).submission_paths()
