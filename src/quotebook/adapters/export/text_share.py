# src/quotebook/adapters/export/text_share.py
"""
Text File Share Sink - Clipboard Stand-in

Writes the shared text to a uniquely named .txt file in the export
directory. Used as the fallback when no richer share target is available.

Files that USE this module:
- quotebook.app (fallback share sink)
- tests.test_export_service (unit tests)

Files that this module USES:
- quotebook.domain.models (ExportOutcome)
"""
from __future__ import annotations

import asyncio
import logging
import re
import uuid
from pathlib import Path

from quotebook.domain.models import ExportOutcome

logger = logging.getLogger(__name__)


class FileShareSink:
    """Share sink that saves text files."""

    def __init__(self, export_dir: Path):
        self.export_dir = Path(export_dir)

    async def share_text(self, title: str, text: str) -> ExportOutcome:
        return await asyncio.to_thread(self._write, title, text)

    def _write(self, title: str, text: str) -> ExportOutcome:
        stem = re.sub(r"[^\w.-]+", "-", title).strip("-") or "share"
        path = self.export_dir / f"{stem}-{uuid.uuid4().hex[:8]}.txt"
        try:
            self.export_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write share file %s: %s", path, e)
            return ExportOutcome(success=False, error=str(e))
        logger.info("Share text written to %s", path)
        return ExportOutcome(success=True, path=path)
