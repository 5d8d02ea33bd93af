"""apimod command-line interface.

Usage::

    apimod init [--root DIR] [--force] [--dry-run]
    apimod create user [--route people] [--force] [--dry-run]
    apimod create admin/user
    apimod list

``python -m apimod`` is equivalent to the ``apimod`` console script.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.markup import escape

from apimod import __version__
from apimod.config import FsOptions, ScaffoldConfig
from apimod.engine.ledger import load_state
from apimod.errors import ScaffoldError
from apimod.scaffolder import ModuleGenerator, ProjectInitializer
from apimod.utils import (
    console,
    print_error,
    print_step,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apimod",
        description="Strict Modular REST API Generator (Bun + Elysia)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  apimod init\n"
            "  apimod create user\n"
            "  apimod create admin/user --route admin/users --dry-run\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--root",
        default=None,
        help="Project root directory (default: $APIMOD_PROJECT_ROOT or .)",
    )

    writes = argparse.ArgumentParser(add_help=False)
    writes.add_argument("--force", action="store_true", help="Overwrite existing files")
    writes.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview generated files without writing",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser(
        "init",
        parents=[common, writes],
        help="Initialize API project (structure + shared + test module)",
    )
    create = sub.add_parser(
        "create",
        parents=[common, writes],
        help="Create API module with full CRUD starter",
    )
    create.add_argument("module_path", help="Module path (singular, supports nested)")
    create.add_argument("--route", default=None, help="Custom route path (plural)")
    sub.add_parser("list", parents=[common], help="List tracked modules")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``apimod`` / ``python -m apimod``."""
    args = build_parser().parse_args(argv)
    root = Path(args.root) if args.root else None
    config = ScaffoldConfig.from_env(project_root=root)

    try:
        if args.command == "list":
            _list_modules(config)
            return

        options = FsOptions(force=args.force, dry_run=args.dry_run)
        if options.dry_run:
            print_warning("Dry run: nothing will be written")

        if args.command == "init":
            print_step("Initializing project")
            ProjectInitializer(config).run(options)
            print_success("Init completed")
        else:
            print_step(f"Creating module: {args.module_path}")
            ModuleGenerator(config).run(args.module_path, options, route=args.route)
            print_success("Module created")
    except ScaffoldError as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)


def _list_modules(config: ScaffoldConfig) -> None:
    state = load_state(config.state_path)
    rows = [
        {
            "Module": entry.module_path,
            "Name": entry.name,
            "Route": entry.route,
            "Created by": entry.created_by,
        }
        for entry in state.modules
    ]
    print_summary_table(rows, title=f"Modules ({len(rows)})")
    if not rows:
        console.print("[dim]No modules tracked yet. Run 'apimod init'.[/dim]")


if __name__ == "__main__":
    main()
