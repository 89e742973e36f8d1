"""Shared fixtures: a workspace folder and a fake editor storage root."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from vctx.config.models import RefreshConfig, StorageConfig, VctxConfig

A_JS = """\
import x from 'x';

function main() {
  return x(1, 2);
}
"""

README = "# Repo\n\nHello world.\n"


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """Workspace folder with ``src/a.js`` and ``README.md``."""
    root = tmp_path / "repo"
    (root / "src").mkdir(parents=True)
    (root / "src" / "a.js").write_text(A_JS)
    (root / "README.md").write_text(README)
    return root


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    root = tmp_path / "workspaceStorage"
    root.mkdir()
    return root


@pytest.fixture
def config(storage_root: Path) -> VctxConfig:
    """Config pointing at ``storage_root`` with the focus refresh disabled."""
    return VctxConfig(
        storage=StorageConfig(root=str(storage_root)),
        refresh=RefreshConfig(enabled=False),
    )
