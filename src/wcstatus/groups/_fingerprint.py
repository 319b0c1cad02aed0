"""Fingerprints of a classification pass, used to skip index rebuilds."""

import hashlib
from collections.abc import Iterable

from wcstatus.enums import FingerprintStrategy
from wcstatus.status import CategorizedStatus, TrackedResource, normalize_path


def counts_fingerprint(categorized: CategorizedStatus) -> str:
    """Fingerprint built from group sizes and changelist names only.

    Cheap, but blind to a same-count substitution (one path leaving a group
    while another joins it) and to reclassification within a group.
    """
    counts = (
        len(categorized.changes),
        len(categorized.conflicts),
        len(categorized.unversioned),
        len(categorized.changelists),
        len(categorized.remote_changes),
    )
    changelists = ",".join(
        f"{name}:{len(resources)}"
        for name, resources in categorized.changelists.items()
    )
    return f"{'-'.join(str(count) for count in counts)}|{changelists}"


def _flag(value: bool | None) -> str:
    if value is None:
        return "-"
    return "1" if value else "0"


def _resource_line(resource: TrackedResource) -> str:
    # Every field of TrackedResource, so any change forces an index rebuild.
    rename = (
        normalize_path(resource.rename_source_path)
        if resource.rename_source_path is not None
        else ""
    )
    property_changes = ",".join(
        f"{change.name}={change.change}" for change in resource.property_changes
    )
    return "\t".join(
        (
            normalize_path(resource.resource_path),
            resource.status,
            resource.props or "",
            rename,
            resource.changelist or "",
            _flag(resource.remote),
            _flag(resource.locked),
            resource.lock_owner or "",
            _flag(resource.has_lock_token),
            resource.lock_status or "",
            resource.kind or "",
            _flag(resource.local_file_exists),
            _flag(resource.renamed_and_modified),
            property_changes,
        )
    )


def _update_group(
    digest: hashlib.blake2b,
    name: str,
    resources: Iterable[TrackedResource],
) -> None:
    digest.update(f"[{name}]\n".encode())
    for line in sorted(_resource_line(resource) for resource in resources):
        digest.update(line.encode())
        digest.update(b"\n")


def content_fingerprint(categorized: CategorizedStatus) -> str:
    """Fingerprint built from every field of every resource.

    Paths are sorted per group, so record order alone does not change the
    fingerprint, but any substitution or reclassification does.
    """
    digest = hashlib.blake2b(digest_size=16)
    _update_group(digest, "changes", categorized.changes)
    _update_group(digest, "conflicts", categorized.conflicts)
    _update_group(digest, "unversioned", categorized.unversioned)
    for name, resources in categorized.changelists.items():
        _update_group(digest, f"changelist:{name}", resources)
    _update_group(digest, "remote", categorized.remote_changes)
    return digest.hexdigest()


def fingerprint(
    categorized: CategorizedStatus,
    strategy: FingerprintStrategy = FingerprintStrategy.CONTENT,
) -> str:
    """Compute the fingerprint of a pass with the given strategy."""
    if strategy == FingerprintStrategy.COUNTS:
        return counts_fingerprint(categorized)
    return content_fingerprint(categorized)
