# src/quotebook/adapters/export/__init__.py
"""
Export Adapters - Document Rasterization and Text Sharing

This package contains export sinks that turn rendered views into files and
the text-file share sink.
"""

from quotebook.adapters.export.raster import PillowExportSink
from quotebook.adapters.export.text_share import FileShareSink

__all__ = ["FileShareSink", "PillowExportSink"]
