"""apimod scaffolder -- renders and places the generated TypeScript sources.

Quick usage::

    from apimod.config import FsOptions, ScaffoldConfig
    from apimod.scaffolder import ModuleGenerator, ProjectInitializer

    config = ScaffoldConfig(project_root=Path("my-api"))
    ProjectInitializer(config).run(FsOptions())
    ModuleGenerator(config).run("admin/user", FsOptions(dry_run=True))
"""

from apimod.scaffolder.generator import GenerationReport, ModuleGenerator, ProjectInitializer
from apimod.scaffolder.naming import ModuleNames, derive_names, pluralize
from apimod.scaffolder.templates import TemplateRenderer

__all__ = [
    "GenerationReport",
    "ModuleGenerator",
    "ModuleNames",
    "ProjectInitializer",
    "TemplateRenderer",
    "derive_names",
    "pluralize",
]
