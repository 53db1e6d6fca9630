# src/quotebook/adapters/persistence/file_store.py
"""
File Store - Atomic JSON Persistence

This module provides the low-level JSON file operations shared by every
store: whole-document atomic writes and tolerant reads. A reader never
observes a partially written file because each write goes to a temporary
file that is then renamed over the target.

Files that USE this module:
- quotebook.adapters.persistence.budget_archive (budget list)
- quotebook.adapters.persistence.currency_store (currency settings)
- quotebook.adapters.persistence.cost_store (cost analysis singleton)

Files that this module USES:
- quotebook.domain.errors (StorageReadError, StorageWriteError)
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Optional

from quotebook.domain.errors import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)


def write_json_atomic(path: Path, payload: Any) -> None:
    """
    Save a JSON document using an atomic write.

    Uses temporary file + atomic rename so the previous content stays intact
    if anything fails.

    Args:
        path: Target file
        payload: JSON-serializable document

    Raises:
        StorageWriteError: If the document cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_fd, temp_path = tempfile.mkstemp(
            suffix=".json.tmp",
            dir=str(path.parent),
            text=True
        )
    except OSError as e:
        raise StorageWriteError(f"Failed to prepare {path}: {e}") from e

    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())  # Ensure data is written to disk

        # Atomic rename (replaces target file atomically on Unix/Windows)
        os.replace(temp_path, str(path))
    except Exception as e:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise StorageWriteError(f"Failed to save {path}: {e}") from e


def backup_file(path: Path) -> Optional[Path]:
    """
    Copy a file aside to `<name>.corrupt`.

    Returns:
        The backup path, or None if the copy failed
    """
    backup_path = path.with_suffix(path.suffix + ".corrupt")
    try:
        shutil.copy2(path, backup_path)
    except OSError as e:
        logger.error("Failed to back up corrupt file %s: %s", path, e)
        return None
    return backup_path


def read_json(path: Path) -> Any:
    """
    Load a JSON document.

    A file that exists but cannot be decoded is copied aside to
    `<name>.corrupt` before the error is raised, so the next write does not
    destroy the only copy of the operator's data.

    Args:
        path: File to read

    Returns:
        The decoded document

    Raises:
        StorageReadError: If the file is absent, unreadable or not valid JSON
    """
    if not path.exists():
        raise StorageReadError(f"{path} does not exist")

    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        backup_path = backup_file(path)
        if backup_path:
            logger.warning("File %s is corrupted, backed up to %s: %s", path, backup_path, e)
        raise StorageReadError(f"{path} is not valid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise StorageReadError(f"Failed to read {path}: {e}") from e
