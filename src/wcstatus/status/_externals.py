"""Removal of externally mounted subtrees from a status record list."""

from collections.abc import Sequence
from dataclasses import dataclass

from wcstatus.status._models import RawStatusRecord
from wcstatus.status._paths import is_descendant


@dataclass(frozen=True, slots=True)
class ExternalSplit:
    """Status records split into external mounts and native records.

    Attributes:
        external: External mount records treated as foreign.
        repository: Native records with mounts and their descendants removed.
    """

    external: tuple[RawStatusRecord, ...]
    repository: tuple[RawStatusRecord, ...]


def separate_externals(
    records: Sequence[RawStatusRecord],
    *,
    combine_external: bool = False,
    upstream_identity: str | None = None,
) -> ExternalSplit:
    """Separate external mounts and everything below them from the records.

    Mount paths are collected once, then the record list is scanned a single
    time; each record stops testing mounts at its first match.

    Args:
        records: Full record list from the status collaborator.
        combine_external: Treat externals from the project's own upstream as
            native, keeping their descendants.
        upstream_identity: Upstream identity of the project, used only when
            combine_external is set.

    Returns:
        ExternalSplit with the foreign mounts and the remaining records.
    """
    external = [record for record in records if record.is_external]

    if combine_external and upstream_identity is not None and external:
        external = [
            record
            for record in external
            if record.repository_uuid != upstream_identity
        ]

    mount_paths = {record.path for record in external}

    repository: list[RawStatusRecord] = []
    for record in records:
        if record.is_external:
            continue
        if mount_paths and any(
            is_descendant(mount, record.path) for mount in mount_paths
        ):
            continue
        repository.append(record)

    return ExternalSplit(external=tuple(external), repository=tuple(repository))
