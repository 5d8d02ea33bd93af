"""apimod configuration.

Typed, per-invocation configuration for the scaffolder. Settings use Pydantic
v2 models so they are validated at construction time. Nothing here is ever
persisted by the tool itself: a ``ScaffoldConfig`` describes the layout of the
target project and ``FsOptions`` carries the ``--force`` / ``--dry-run``
flags through every engine call.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FsOptions(BaseModel):
    """Write policy flags shared by every engine operation.

    Immutable for the lifetime of a single command invocation.
    """

    model_config = ConfigDict(frozen=True)

    force: bool = Field(default=False, description="Permit overwriting existing files")
    dry_run: bool = Field(
        default=False,
        description="Run every decision but suppress all persistent mutation",
    )


class ScaffoldConfig(BaseModel):
    """Layout of a generated API project.

    All generated paths are derived from ``project_root`` so the same config
    can be pointed at any directory (the CLI's ``--root`` flag, or a
    ``tmp_path`` in tests).
    """

    project_root: Path = Field(default=Path("."))
    src_dir: str = Field(default="src")
    modules_dir: str = Field(default="modules")
    routes_dir: str = Field(default="routes")
    api_dir: str = Field(default="api")
    shared_dir: str = Field(default="shared")
    log_file: str = Field(default="modules.log")
    state_file: str = Field(default="modules.json")
    registry_name: str = Field(
        default="apiRoutes", pattern=r"^[A-Za-z_$][A-Za-z0-9_$]*$",
        description="Variable name of the tracked route collection",
    )
    port: int = Field(default=3000, ge=1, le=65535, description="Port the generated server listens on")

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def src_path(self) -> Path:
        """Root of the generated TypeScript sources."""
        return self.project_root / self.src_dir

    @property
    def modules_path(self) -> Path:
        """Directory holding one subtree per generated module."""
        return self.src_path / self.modules_dir

    @property
    def routes_path(self) -> Path:
        return self.src_path / self.routes_dir

    @property
    def api_routes_path(self) -> Path:
        """Directory holding the generated route files and the registry."""
        return self.routes_path / self.api_dir

    @property
    def registry_path(self) -> Path:
        """Path to the route registry patched on every module creation."""
        return self.api_routes_path / "index.ts"

    @property
    def shared_path(self) -> Path:
        return self.src_path / self.shared_dir

    @property
    def log_path(self) -> Path:
        """Append-only module event log."""
        return self.project_root / self.log_file

    @property
    def state_path(self) -> Path:
        """Deduplicated module state document."""
        return self.project_root / self.state_file

    def module_dir(self, module_path: str) -> Path:
        """Directory of a module given its slash-separated path."""
        return self.modules_path.joinpath(*module_path.split("/"))

    def route_file_path(self, route_file: str) -> Path:
        """Path of a generated route file given its base name (no extension)."""
        return self.api_routes_path / f"{route_file}.ts"

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            APIMOD_PROJECT_ROOT, APIMOD_SRC_DIR, APIMOD_PORT.

        Keyword arguments that are not ``None`` take precedence over the
        environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("APIMOD_PROJECT_ROOT"):
            kwargs["project_root"] = Path(os.environ["APIMOD_PROJECT_ROOT"])
        if os.environ.get("APIMOD_SRC_DIR"):
            kwargs["src_dir"] = os.environ["APIMOD_SRC_DIR"]
        if os.environ.get("APIMOD_PORT"):
            kwargs["port"] = int(os.environ["APIMOD_PORT"])

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
