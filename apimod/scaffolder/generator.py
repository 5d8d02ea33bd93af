"""Main scaffolding orchestrator.

Composes the engine (write guard, registry patcher, module ledger) into the
two user-facing flows:

* ``init``   -- ``ProjectInitializer``: project skeleton, shared helpers, an
  empty route registry and the sample ``test`` module.
* ``create`` -- ``ModuleGenerator``: one CRUD module plus its route file,
  registered and tracked.

Steps run strictly in order and any ``ScaffoldError`` aborts the rest of the
command. Every step is idempotent or refuses to clobber, so re-running after
a failure is safe.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from apimod.config import FsOptions, ScaffoldConfig
from apimod.engine.ledger import CreatedBy, TrackResult, track_module
from apimod.engine.registry import RegisterResult, patch_registry_text, register_route
from apimod.engine.write_guard import (
    FileWriteRequest,
    WriteAction,
    apply_request,
    ensure_directory,
)
from apimod.errors import InvalidRegistryFormatError
from apimod.utils import console

from .naming import ModuleNames, derive_names
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


class FileOutcome(BaseModel):
    """What happened to one generated file."""

    path: Path
    action: WriteAction


class GenerationReport(BaseModel):
    """Result of one ``init`` or ``create`` run."""

    dry_run: bool = False
    files: list[FileOutcome] = Field(default_factory=list)
    modules: list[ModuleNames] = Field(default_factory=list)
    registrations: list[RegisterResult] = Field(default_factory=list)
    tracking: list[TrackResult] = Field(default_factory=list)

    def merge(self, other: "GenerationReport") -> None:
        self.files.extend(other.files)
        self.modules.extend(other.modules)
        self.registrations.extend(other.registrations)
        self.tracking.extend(other.tracking)


# ---------------------------------------------------------------------------
# Module generation
# ---------------------------------------------------------------------------


_MODULE_TEMPLATES = "module"
_ROUTE_TEMPLATE = "module/route.ts.j2"


class ModuleGenerator:
    """Generate, register and track a single CRUD module."""

    def __init__(
        self,
        config: ScaffoldConfig,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    def build_requests(self, names: ModuleNames) -> list[FileWriteRequest]:
        """Render every file of the module without touching the disk.

        Each template under ``module/`` becomes one file in the module
        directory, named after the template minus ``.j2``. The route template
        is the exception: it goes to the API routes directory, last.
        """
        ctx = self._build_context(names)
        module_dir = self.config.module_dir(names.module_path)
        requests = [
            FileWriteRequest(
                path=module_dir / Path(template).name.removesuffix(".j2"),
                content=self.renderer.render(template, ctx),
            )
            for template in self.renderer.list_templates(_MODULE_TEMPLATES)
            if template != _ROUTE_TEMPLATE
        ]
        requests.append(
            FileWriteRequest(
                path=self.config.route_file_path(names.route_file),
                content=self.renderer.render(_ROUTE_TEMPLATE, ctx),
            )
        )
        return requests

    def run(
        self,
        module_path: str,
        options: FsOptions,
        *,
        route: str | None = None,
        created_by: CreatedBy = "create",
        registry_text: str | None = None,
    ) -> GenerationReport:
        """Create the module at *module_path*.

        Args:
            module_path: Slash-separated module path (``admin/user``).
            options: Force / dry-run flags.
            route: Optional route segment overriding the pluralised name.
            created_by: Which command triggered the creation.
            registry_text: Registry content to simulate against instead of
                the file on disk. Only used by a dry-run ``init``, where the
                registry it would have written does not exist yet.
        """
        names = derive_names(module_path, route)
        report = GenerationReport(dry_run=options.dry_run, modules=[names])

        ensure_directory(self.config.module_dir(names.module_path), options)
        for request in self.build_requests(names):
            report.files.append(_apply(request, options, self.config.project_root))

        registration = self._register(names, options, registry_text)
        report.registrations.append(registration)
        console.print(
            f"  [magenta]{registration.value}[/magenta] {names.route_identifier}"
        )

        tracked = track_module(
            self.config.log_path,
            self.config.state_path,
            names.name,
            names.module_path,
            names.route,
            created_by,
            options,
        )
        report.tracking.append(tracked)
        console.print(f"  [blue]{tracked.value}[/blue] {names.module_path} -> {names.route}")
        return report

    # -- Internals ---------------------------------------------------------

    def _build_context(self, names: ModuleNames) -> dict[str, Any]:
        return {
            **names.model_dump(),
            "modules_import": self.config.modules_dir,
            "shared_import": self.config.shared_dir,
        }

    def _register(
        self,
        names: ModuleNames,
        options: FsOptions,
        registry_text: str | None,
    ) -> RegisterResult:
        if registry_text is None:
            return register_route(
                self.config.registry_path,
                names.route_file,
                names.route_identifier,
                options,
                self.config.registry_name,
            )

        try:
            patched = patch_registry_text(
                registry_text,
                names.route_file,
                names.route_identifier,
                self.config.registry_name,
            )
        except ValueError as exc:
            raise InvalidRegistryFormatError(
                self.config.registry_path, self.config.registry_name
            ) from exc
        if patched is None:
            return RegisterResult.ALREADY_REGISTERED
        return RegisterResult.WOULD_REGISTER


# ---------------------------------------------------------------------------
# Project initialisation
# ---------------------------------------------------------------------------


class ProjectInitializer:
    """Generate the project skeleton and its sample ``test`` module."""

    SAMPLE_MODULE = "test"

    def __init__(
        self,
        config: ScaffoldConfig,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.module_gen = ModuleGenerator(config, self.renderer)

    def build_requests(self) -> list[FileWriteRequest]:
        """Render every project-level file without touching the disk."""
        cfg = self.config
        ctx = self._build_context()
        outputs: list[tuple[str, Path]] = [
            ("project/app.ts.j2", cfg.src_path / "app.ts"),
            ("project/server.ts.j2", cfg.src_path / "server.ts"),
            ("project/routes_index.ts.j2", cfg.routes_path / "index.ts"),
            ("project/api_index.ts.j2", cfg.registry_path),
            ("project/response.ts.j2", cfg.shared_path / "response.ts"),
            ("project/errors.ts.j2", cfg.shared_path / "errors.ts"),
        ]
        return [
            FileWriteRequest(path=path, content=self.renderer.render(template, ctx))
            for template, path in outputs
        ]

    def run(self, options: FsOptions) -> GenerationReport:
        """Initialise the project under ``config.project_root``."""
        report = GenerationReport(dry_run=options.dry_run)

        for directory in (
            self.config.api_routes_path,
            self.config.modules_path,
            self.config.shared_path,
        ):
            ensure_directory(directory, options)

        registry_text: str | None = None
        for request in self.build_requests():
            report.files.append(_apply(request, options, self.config.project_root))
            if options.dry_run and request.path == self.config.registry_path:
                registry_text = request.content.lstrip()

        report.merge(
            self.module_gen.run(
                self.SAMPLE_MODULE,
                options,
                created_by="init",
                registry_text=registry_text,
            )
        )
        return report

    def _build_context(self) -> dict[str, Any]:
        return {
            "port": self.config.port,
            "registry_name": self.config.registry_name,
            "api_dir": self.config.api_dir,
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


_ACTION_STYLES: dict[WriteAction, str] = {
    WriteAction.CREATED: "green",
    WriteAction.OVERWRITTEN: "yellow",
    WriteAction.WOULD_CREATE: "dim green",
    WriteAction.WOULD_OVERWRITE: "dim yellow",
}


def _apply(request: FileWriteRequest, options: FsOptions, root: Path) -> FileOutcome:
    """Write one request through the guard and print its outcome."""
    action = apply_request(request, options)
    style = _ACTION_STYLES[action]
    console.print(f"  [{style}]{action.value}[/{style}] {_display_path(request.path, root)}")
    return FileOutcome(path=request.path, action=action)


def _display_path(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)
