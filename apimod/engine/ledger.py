"""Module ledger: append-only event log plus deduplicated state document.

Two files live at the project root:

* ``modules.log``: one human-readable line per tracking call, never rewritten.
* ``modules.json``: ``{"modules": [...]}``, at most one entry per module path.

The log is a raw event trace, so it grows on every call even when the module
is already present in the state document.

The state document is loaded and validated *before* the log line is
appended: a corrupt ``modules.json`` aborts the call with the log untouched.
Keys this tool does not know about, at the top level or inside an entry,
are kept when the document is rewritten.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from apimod.config import FsOptions
from apimod.errors import CorruptStateError, InvalidTrackSourceError
from apimod.utils import dump_json, load_json

CreatedBy = Literal["init", "create"]


class ModuleEntry(BaseModel):
    """A module registered at least once. Keyed by ``modulePath``."""

    name: str
    module_path: str = Field(alias="modulePath")
    route: str
    created_by: CreatedBy = Field(alias="createdBy")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class LedgerState(BaseModel):
    """The ``modules.json`` document."""

    model_config = ConfigDict(extra="allow")

    modules: list[ModuleEntry] = Field(default_factory=list)

    def find(self, module_path: str) -> ModuleEntry | None:
        for entry in self.modules:
            if entry.module_path == module_path:
                return entry
        return None

    def to_json(self) -> str:
        return dump_json(self.model_dump(by_alias=True))


class TrackResult(str, Enum):
    """Outcome of ``track_module`` for the state document."""

    ADDED = "added"
    ALREADY_TRACKED = "already tracked"


def format_log_line(
    name: str,
    route: str,
    created_by: CreatedBy,
    timestamp: datetime | None = None,
) -> str:
    """Build one ``modules.log`` line (without the trailing newline)."""
    ts = (timestamp or datetime.now(timezone.utc)).isoformat(timespec="milliseconds")
    ts = ts.replace("+00:00", "Z")
    return f"[{ts}] {created_by} -> module: {name} | route: {route}"


def load_state(state_path: str | Path) -> LedgerState:
    """Load ``modules.json``; a missing file yields an empty state.

    Raises:
        CorruptStateError: The file is not valid JSON or not a
            ``{"modules": [...]}`` document.
    """
    path = Path(state_path)
    if not path.exists():
        return LedgerState()
    try:
        return LedgerState.model_validate(load_json(path))
    except json.JSONDecodeError as exc:
        raise CorruptStateError(path, f"invalid JSON at line {exc.lineno}") from exc
    except ValidationError as exc:
        raise CorruptStateError(path, f"{exc.error_count()} validation error(s)") from exc


def track_module(
    log_path: str | Path,
    state_path: str | Path,
    name: str,
    module_path: str,
    route: str,
    created_by: CreatedBy,
    options: FsOptions,
) -> TrackResult:
    """Record a module creation event.

    Appends a log line (unless dry-run) and adds a ``ModuleEntry`` to the
    state document if none exists for *module_path*. An already tracked
    module leaves ``modules.json`` byte for byte as it was. ``force`` has no
    effect.

    Raises:
        InvalidTrackSourceError: *created_by* is not ``init`` or ``create``.
        CorruptStateError: ``modules.json`` exists but is unreadable.
    """
    allowed = get_args(CreatedBy)
    if created_by not in allowed:
        raise InvalidTrackSourceError(created_by, allowed)

    state = load_state(state_path)
    line = format_log_line(name, route, created_by)

    if not options.dry_run:
        log = Path(log_path)
        log.parent.mkdir(parents=True, exist_ok=True)
        with log.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")

    if state.find(module_path) is not None:
        return TrackResult.ALREADY_TRACKED

    state.modules.append(
        ModuleEntry(
            name=name,
            module_path=module_path,
            route=route,
            created_by=created_by,
        )
    )
    if not options.dry_run:
        Path(state_path).write_text(state.to_json(), encoding="utf-8")

    return TrackResult.ADDED
