# src/quotebook/adapters/export/raster.py
"""
Raster Export Sink - PDF and PNG Rendering with Pillow

This module rasterizes rendered views (lists of text lines) into images.
Documents become multi-page, A4-proportioned PDFs; captures become a single
PNG. Each export writes a new, uniquely named file, so concurrent exports
never collide. Rendering runs in a worker thread.

Files that USE this module:
- quotebook.app (default export sink of the workbench)
- tests.test_export_service (writes real files into tmp_path)

Files that this module USES:
- PIL (Image, ImageDraw, ImageFont)
- quotebook.domain.models (RenderedView, ExportOutcome)
"""
from __future__ import annotations

import asyncio
import logging
import uuid
from pathlib import Path
from typing import List

from PIL import Image, ImageDraw, ImageFont

from quotebook.domain.models import ExportOutcome, RenderedView

logger = logging.getLogger(__name__)

# A4 at 100 DPI
PAGE_WIDTH = 827
PAGE_HEIGHT = 1169
MARGIN = 60
FONT_SIZE = 16
LINE_SPACING = 6


class PillowExportSink:
    """Export sink that draws view lines onto white pages."""

    def __init__(self, export_dir: Path, font_size: int = FONT_SIZE):
        """
        Initialize export sink.

        Args:
            export_dir: Directory where exported files are written
            font_size: Text size in pixels
        """
        self.export_dir = Path(export_dir)
        self.font = ImageFont.load_default(size=font_size)
        top, bottom = self.font.getbbox("ÁgjÑ")[1::2]
        self.line_height = int(bottom - top) + LINE_SPACING

    async def export_document(self, view: RenderedView, filename: str) -> ExportOutcome:
        return await asyncio.to_thread(self._write, view, filename, "pdf")

    async def capture_image(self, view: RenderedView, filename: str) -> ExportOutcome:
        return await asyncio.to_thread(self._write, view, filename, "png")

    def _write(self, view: RenderedView, filename: str, extension: str) -> ExportOutcome:
        path = self._unique_path(filename, extension)
        try:
            self.export_dir.mkdir(parents=True, exist_ok=True)
            lines = self._wrap_all(view.lines)
            if extension == "pdf":
                pages = self._paginate(lines)
                pages[0].save(
                    path, "PDF", save_all=True, append_images=pages[1:], resolution=100.0
                )
            else:
                self._draw_page(lines, height=max(PAGE_HEIGHT, self._content_height(lines))).save(path, "PNG")
        except (OSError, ValueError) as e:
            logger.error("Failed to export %s as %s: %s", view.view_id, extension, e)
            return ExportOutcome(success=False, error=str(e))

        logger.info("Exported %s to %s", view.view_id, path)
        return ExportOutcome(success=True, path=path)

    def _unique_path(self, filename: str, extension: str) -> Path:
        return self.export_dir / f"{filename}-{uuid.uuid4().hex[:8]}.{extension}"

    def _content_height(self, lines: List[str]) -> int:
        return 2 * MARGIN + len(lines) * self.line_height

    def _wrap(self, line: str, max_width: int) -> List[str]:
        """Greedy word wrap by rendered pixel width."""
        if not line or self.font.getlength(line) <= max_width:
            return [line]
        indent = line[: len(line) - len(line.lstrip())]
        wrapped: List[str] = []
        current = ""
        for word in line.split():
            candidate = f"{current} {word}" if current else f"{indent}{word}"
            if current and self.font.getlength(candidate) > max_width:
                wrapped.append(current)
                candidate = f"{indent}{word}"
            current = candidate
        wrapped.append(current)
        return wrapped

    def _wrap_all(self, lines) -> List[str]:
        max_width = PAGE_WIDTH - 2 * MARGIN
        return [part for line in lines for part in self._wrap(line, max_width)]

    def _paginate(self, lines: List[str]) -> List[Image.Image]:
        per_page = max(1, (PAGE_HEIGHT - 2 * MARGIN) // self.line_height)
        chunks = [lines[i:i + per_page] for i in range(0, len(lines), per_page)] or [[]]
        return [self._draw_page(chunk) for chunk in chunks]

    def _draw_page(self, lines: List[str], height: int = PAGE_HEIGHT) -> Image.Image:
        page = Image.new("RGB", (PAGE_WIDTH, height), "white")
        draw = ImageDraw.Draw(page)
        y = MARGIN
        for line in lines:
            draw.text((MARGIN, y), line, fill="black", font=self.font)
            y += self.line_height
        return page
