from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ExportFormat
from .renderers.base import ReportRenderer
from .renderers.excel_renderer import ExcelRenderer
from .renderers.image_renderer import ImageRenderer
from .renderers.pdf_renderer import PdfRenderer


@dataclass
class RendererFactory:
    """Factory Pattern: choose the renderer for an export format."""

    def for_format(self, fmt) -> ReportRenderer:
        fmt = ExportFormat.parse(fmt)
        if fmt == ExportFormat.PDF:
            return PdfRenderer()
        if fmt == ExportFormat.IMAGE:
            return ImageRenderer()
        return ExcelRenderer()
