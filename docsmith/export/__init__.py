"""PDF export: off-screen rasterization, pagination and PDF assembly."""

from docsmith.export.errors import DisplaySurfaceBlocked, RenderError
from docsmith.export.exporter import (
    Disposition,
    ExportedDocument,
    deliver,
    document_filename,
    export_document,
    layout_for,
    open_inline,
    save_pdf,
)
from docsmith.export.pagination import PageLayout, PageSlice, PaginationPlan, plan_pages
from docsmith.export.rasterizer import PlaywrightRasterizer, Rasterizer, RenderedDocument

__all__ = [
    "DisplaySurfaceBlocked",
    "Disposition",
    "ExportedDocument",
    "PageLayout",
    "PageSlice",
    "PaginationPlan",
    "PlaywrightRasterizer",
    "Rasterizer",
    "RenderError",
    "RenderedDocument",
    "deliver",
    "document_filename",
    "export_document",
    "layout_for",
    "open_inline",
    "plan_pages",
    "save_pdf",
]
