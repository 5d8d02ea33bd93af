"""Non-destructive file writes.

Decides, per file, whether a write proceeds, is simulated, or fails. The
existence check runs in dry-run mode too, so a preview reports exactly the
failures a real run would hit.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel

from apimod.config import FsOptions
from apimod.errors import TargetExistsError


class WriteAction(str, Enum):
    """What ``write_file`` did (or would have done) with a target."""

    CREATED = "created"
    OVERWRITTEN = "overwritten"
    WOULD_CREATE = "would create"
    WOULD_OVERWRITE = "would overwrite"


class FileWriteRequest(BaseModel):
    """One (path, content) pair produced by the orchestrator."""

    path: Path
    content: str


def ensure_directory(path: str | Path, options: FsOptions) -> None:
    """Create *path* and any missing ancestors.

    An existing directory is never an error, with or without ``force``.
    """
    if options.dry_run:
        return
    Path(path).mkdir(parents=True, exist_ok=True)


def write_file(path: str | Path, content: str, options: FsOptions) -> WriteAction:
    """Write *content* to *path* unless that would clobber an existing file.

    Leading whitespace of *content* is trimmed. Missing parent directories
    are created first; they may remain if the write itself fails.

    Raises:
        TargetExistsError: *path* exists and ``options.force`` is not set.
    """
    target = Path(path)
    exists = target.exists()

    if exists and not options.force:
        raise TargetExistsError(target)

    if options.dry_run:
        return WriteAction.WOULD_OVERWRITE if exists else WriteAction.WOULD_CREATE

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content.lstrip(), encoding="utf-8")
    return WriteAction.OVERWRITTEN if exists else WriteAction.CREATED


def apply_request(request: FileWriteRequest, options: FsOptions) -> WriteAction:
    """Apply a single ``FileWriteRequest``."""
    return write_file(request.path, request.content, options)
