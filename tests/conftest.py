"""Shared pytest fixtures for the apimod test suite.

Provides reusable fixtures for:
- Temporary project roots and their ``ScaffoldConfig``
- Default / force / dry-run ``FsOptions``
- A registry file in the freshly-initialised state
- An already-initialised project
"""

from __future__ import annotations

from pathlib import Path

import pytest

from apimod.config import FsOptions, ScaffoldConfig


# ---------------------------------------------------------------------------
# Paths & configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project root (auto-cleanup)."""
    root = tmp_path / "my-api"
    root.mkdir()
    yield root


@pytest.fixture
def config(project_root: Path) -> ScaffoldConfig:
    """A ``ScaffoldConfig`` pointed at ``project_root``."""
    return ScaffoldConfig(project_root=project_root)


# ---------------------------------------------------------------------------
# Write options
# ---------------------------------------------------------------------------

@pytest.fixture
def opts() -> FsOptions:
    return FsOptions()


@pytest.fixture
def force_opts() -> FsOptions:
    return FsOptions(force=True)


@pytest.fixture
def dry_opts() -> FsOptions:
    return FsOptions(dry_run=True)


# ---------------------------------------------------------------------------
# Pre-built project state
# ---------------------------------------------------------------------------

EMPTY_REGISTRY = "export const apiRoutes = [];\n"


@pytest.fixture
def registry_file(config: ScaffoldConfig) -> Path:
    """An empty route registry, as written by ``init``."""
    path = config.registry_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(EMPTY_REGISTRY, encoding="utf-8")
    return path


@pytest.fixture
def initialized_project(config: ScaffoldConfig, opts: FsOptions) -> ScaffoldConfig:
    """A project on which ``init`` has already run."""
    from apimod.scaffolder import ProjectInitializer

    ProjectInitializer(config).run(opts)
    return config


def _snapshot(root: Path) -> dict[str, bytes | None]:
    return {
        p.relative_to(root).as_posix(): p.read_bytes() if p.is_file() else None
        for p in sorted(root.rglob("*"))
    }


@pytest.fixture
def snapshot():
    """Map every path under a root to its bytes (``None`` for directories)."""
    return _snapshot
