"""Assemble page slices into a PDF with reportlab."""

from __future__ import annotations

import io

from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from docsmith.export.pagination import PageLayout, PaginationPlan

FOOTER_FONT = "Helvetica-Oblique"
FOOTER_FONT_SIZE = 10
FOOTER_SIDE_MARGIN_MM = 20
FOOTER_BASELINE_MM = 10
FOOTER_LINE_HEIGHT_MM = 4
FOOTER_COLOR = (17 / 255, 24 / 255, 39 / 255)


def _draw_footer(pdf: canvas.Canvas, text: str, layout: PageLayout, page_width: float) -> None:
    band_height = (layout.footer_reserve_mm + layout.bottom_margin_mm) * mm
    pdf.setFillColorRGB(1, 1, 1)
    pdf.rect(0, 0, page_width, band_height, stroke=0, fill=1)

    max_width = page_width - 2 * FOOTER_SIDE_MARGIN_MM * mm
    lines = simpleSplit(text, FOOTER_FONT, FOOTER_FONT_SIZE, max_width)
    pdf.setFont(FOOTER_FONT, FOOTER_FONT_SIZE)
    pdf.setFillColorRGB(*FOOTER_COLOR)
    # Last line sits on the baseline; earlier lines stack above it.
    y = FOOTER_BASELINE_MM * mm + (len(lines) - 1) * FOOTER_LINE_HEIGHT_MM * mm
    for line in lines:
        pdf.drawString(FOOTER_SIDE_MARGIN_MM * mm, y, line)
        y -= FOOTER_LINE_HEIGHT_MM * mm


def write_pdf(
    image: Image.Image,
    plan: PaginationPlan,
    layout: PageLayout,
    *,
    title: str = "",
    footer_text: str = "",
) -> bytes:
    """
    Draw each kept slice full-width below the top margin, one per page.

    When the layout reserves a footer band it is painted white over any
    image overflow and `footer_text` is drawn there as vector text.
    """
    page_width, page_height = A4
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    if title:
        pdf.setTitle(title)

    for page in plan.pages:
        crop = image.crop((0, page.top, image.width, page.bottom))
        draw_height = page.height * page_width / image.width
        y = page_height - layout.top_margin_mm * mm - draw_height
        pdf.drawImage(ImageReader(crop), 0, y, width=page_width, height=draw_height)
        if layout.footer_reserve_mm and footer_text:
            _draw_footer(pdf, footer_text, layout, page_width)
        pdf.showPage()

    pdf.save()
    return buffer.getvalue()
