"""Resource group model and lifecycle observer."""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from wcstatus.enums import GroupKind
from wcstatus.exceptions import GroupDisposedError
from wcstatus.status import TrackedResource


class ResourceGroup:
    """A named, ordered collection of tracked resources.

    Resources are replaced wholesale on every update. Once disposed, a group
    rejects further writes.

    Attributes:
        id: Stable group identifier (e.g. "changes", "changelist-feature").
        label: Human-readable label.
        kind: Group kind.
        order: Sort key; groups are presented in ascending order.
        hide_when_empty: Presentation hint for empty groups.
    """

    __slots__ = (
        "_disposed",
        "_resources",
        "hide_when_empty",
        "id",
        "kind",
        "label",
        "order",
    )

    def __init__(
        self,
        id: str,  # noqa: A002
        label: str,
        kind: GroupKind,
        *,
        order: int = 0,
        hide_when_empty: bool = True,
    ) -> None:
        self.id: str = id
        self.label: str = label
        self.kind: GroupKind = kind
        self.order: int = order
        self.hide_when_empty: bool = hide_when_empty
        self._resources: tuple[TrackedResource, ...] = ()
        self._disposed: bool = False

    def __repr__(self) -> str:
        return (
            f"ResourceGroup(id={self.id!r}, order={self.order}, "
            f"resources={len(self._resources)}, disposed={self._disposed})"
        )

    def __len__(self) -> int:
        return len(self._resources)

    @property
    def resources(self) -> tuple[TrackedResource, ...]:
        """Current resources of the group."""
        return self._resources

    @resources.setter
    def resources(self, value: Iterable[TrackedResource]) -> None:
        if self._disposed:
            msg = f"Cannot update disposed resource group {self.id!r}"
            raise GroupDisposedError(msg, group_id=self.id)
        self._resources = tuple(value)

    @property
    def disposed(self) -> bool:
        """True once dispose() has been called."""
        return self._disposed

    def dispose(self) -> None:
        """Release the group. Safe to call more than once."""
        self._disposed = True
        self._resources = ()


@runtime_checkable
class GroupObserver(Protocol):
    """Receives group lifecycle events, e.g. to mirror them in a UI."""

    def group_created(self, group: ResourceGroup) -> None:
        """Called after a group is created."""
        ...

    def group_disposed(self, group: ResourceGroup) -> None:
        """Called after a group is disposed."""
        ...
