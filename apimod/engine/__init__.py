"""Idempotent, non-destructive generation engine.

Three independent pieces, composed by :mod:`apimod.scaffolder.generator`:

* :mod:`~apimod.engine.write_guard` -- safe file and directory creation.
* :mod:`~apimod.engine.registry` -- text-level route registry patching.
* :mod:`~apimod.engine.ledger` -- module event log and state document.
"""

from apimod.engine.ledger import LedgerState, ModuleEntry, TrackResult, load_state, track_module
from apimod.engine.registry import RegisterResult, RouteRegistry, patch_registry_text, register_route
from apimod.engine.write_guard import FileWriteRequest, WriteAction, ensure_directory, write_file

__all__ = [
    "FileWriteRequest",
    "LedgerState",
    "ModuleEntry",
    "RegisterResult",
    "RouteRegistry",
    "TrackResult",
    "WriteAction",
    "ensure_directory",
    "load_state",
    "patch_registry_text",
    "register_route",
    "track_module",
    "write_file",
]
