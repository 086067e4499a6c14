"""Render a document to PDF bytes and hand them to the caller."""

from __future__ import annotations

import webbrowser
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from docsmith.domain.document import CompanyProfile, Document, DocumentType
from docsmith.export.errors import DisplaySurfaceBlocked
from docsmith.export.pagination import PageLayout, plan_pages
from docsmith.export.pdf_writer import write_pdf
from docsmith.export.rasterizer import PlaywrightRasterizer, Rasterizer
from docsmith.render.formatting import DEFAULT_CURRENCY
from docsmith.render.html_builder import build_document_html
from docsmith.render.templates import template_for
from docsmith.runtime import TMPDIR, get_logger

logger = get_logger(__name__)

Disposition = Literal["download", "inline"]

FOOTER_RESERVE_MM = 18.0
# Types whose terms section must start a fresh page.
FORCED_TERMS_BREAK_TYPES: frozenset[DocumentType] = frozenset({"invoice", "proforma"})


@dataclass(frozen=True)
class ExportedDocument:
    filename: str
    content: bytes
    page_count: int


def document_filename(document: Document) -> str:
    """``{Title_With_Underscores}_{number}.pdf``, e.g. ``Proforma_Invoice_PF-001.pdf``."""
    return f"{document.title.replace(' ', '_')}_{document.number}.pdf"


def layout_for(doc_type: DocumentType) -> PageLayout:
    template = template_for(doc_type)
    return PageLayout(footer_reserve_mm=FOOTER_RESERVE_MM if template.footer_text else 0.0)


async def export_document(
    document: Document,
    *,
    company: CompanyProfile | None = None,
    rasterizer: Rasterizer | None = None,
    currency: str = DEFAULT_CURRENCY,
) -> ExportedDocument:
    """
    Build markup, rasterize it off-screen and paginate it into a PDF.

    Raises:
        RenderError: The render surface produced no page root to measure.
    """
    rasterizer = rasterizer or PlaywrightRasterizer()
    html = build_document_html(document, company, currency=currency)
    rendered = await rasterizer.render(html)

    layout = layout_for(document.type)
    forced_break = rendered.terms_top_px if document.type in FORCED_TERMS_BREAK_TYPES else None
    plan = plan_pages(rendered.image, layout, forced_break_px=forced_break)

    filename = document_filename(document)
    content = write_pdf(
        rendered.image,
        plan,
        layout,
        title=f"{document.title} {document.number}",
        footer_text=template_for(document.type).footer_text,
    )
    skipped = len(plan.slices) - len(plan.pages)
    logger.info("Exported %s (%d pages, %d blank slices skipped)", filename, len(plan.pages), skipped)
    return ExportedDocument(filename=filename, content=content, page_count=len(plan.pages))


def save_pdf(exported: ExportedDocument, directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / exported.filename
    path.write_bytes(exported.content)
    logger.info("Saved %s", path)
    return path


def open_inline(
    exported: ExportedDocument,
    *,
    directory: Path | None = None,
    opener: Callable[[str], bool] = webbrowser.open,
) -> Path:
    """
    Write the PDF to a scratch location and open it in a viewer.

    Raises:
        DisplaySurfaceBlocked: No viewer accepted the file.
    """
    path = save_pdf(exported, directory or TMPDIR)
    if not opener(path.as_uri()):
        raise DisplaySurfaceBlocked(
            f"Could not open a viewer for {exported.filename}. Allow pop-ups or open the file manually: {path}"
        )
    return path


def deliver(
    exported: ExportedDocument,
    disposition: Disposition,
    directory: Path,
    *,
    opener: Callable[[str], bool] = webbrowser.open,
) -> Path:
    """Save for download, or open for inline viewing."""
    if disposition == "inline":
        return open_inline(exported, opener=opener)
    return save_pdf(exported, directory)
