"""Shared test fixtures for wcstatus tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from wcstatus.config import SourceControlConfiguration
from wcstatus.status import StatusCategorizer, TrackedResource

WORKSPACE_ROOT = Path("/wc")

MakeResource = Callable[..., TrackedResource]


@pytest.fixture
def workspace_root() -> Path:
    """Absolute working-copy root used across tests."""
    return WORKSPACE_ROOT


@pytest.fixture
def config() -> SourceControlConfiguration:
    """Default source control configuration."""
    return SourceControlConfiguration()


@pytest.fixture
def categorizer(workspace_root: Path) -> StatusCategorizer:
    """Categorizer rooted at the test workspace."""
    return StatusCategorizer(workspace_root, username="alice")


@pytest.fixture
def make_resource(workspace_root: Path) -> MakeResource:
    """Return a factory creating TrackedResource values under the root."""

    def _make(
        relative: str,
        status: str = "modified",
        *,
        rename: str | None = None,
        changelist: str | None = None,
        remote: bool = False,
    ) -> TrackedResource:
        return TrackedResource(
            resource_path=workspace_root / relative,
            status=status,
            rename_source_path=workspace_root / rename if rename else None,
            changelist=changelist,
            remote=remote,
        )

    return _make
