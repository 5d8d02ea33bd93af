"""Error taxonomy for the scaffolding engine.

Every error is raised synchronously and aborts the current command. None of
them is retried internally; re-running the command after fixing the
underlying condition is always safe.
"""

from __future__ import annotations

import builtins
from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every error the CLI reports as a failed command."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class TargetExistsError(ScaffoldError, builtins.FileExistsError):
    """Raised when a file already exists and ``force`` is not set."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(f"File already exists: {path}", path)


class MissingRegistryError(ScaffoldError):
    """Raised when the route registry is absent (project never initialised)."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(
            f"Route registry not found: {path}. Did you run init?", path
        )


class InvalidRegistryFormatError(ScaffoldError):
    """Raised when the registry's route collection cannot be located."""

    def __init__(self, path: str | Path, registry_name: str) -> None:
        self.registry_name = registry_name
        super().__init__(
            f"Invalid route registry {path}: "
            f"no 'export const {registry_name} = [...]' declaration found",
            path,
        )


class CorruptStateError(ScaffoldError):
    """Raised when the module state document cannot be parsed or validated."""

    def __init__(self, path: str | Path, reason: str = "") -> None:
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Invalid {Path(path).name}{detail}. Cannot continue.", path)


class InvalidModulePathError(ScaffoldError, ValueError):
    """Raised when a module path cannot be turned into generated names."""

    def __init__(self, module_path: str, reason: str) -> None:
        self.module_path = module_path
        super().__init__(f"Invalid module path '{module_path}': {reason}")


class InvalidTrackSourceError(ScaffoldError, ValueError):
    """Raised when a module event names an unknown creating command."""

    def __init__(self, created_by: str, allowed: tuple[str, ...]) -> None:
        self.created_by = created_by
        super().__init__(
            f"Invalid module source '{created_by}': expected one of {', '.join(allowed)}"
        )
