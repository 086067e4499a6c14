"""Split a tall rendered bitmap into page-sized slices.

Slice boundaries are nudged onto near-white pixel rows so a line of text or
a table row is never cut through. Everything here works on Pillow images
and plain numbers; no PDF or browser objects are involved.
"""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0
TOP_MARGIN_MM = 8.0
BOTTOM_MARGIN_MM = 8.0

WHITE_LEVEL = 245
WHITE_ROW_RATIO = 0.9
BLANK_SLICE_RATIO = 0.99
# Seams closer than this to the slice start would yield a sliver page.
MIN_SEAM_OFFSET_PX = 10
# A remaining tail this short is treated as blank and dropped.
MAX_BLANK_TAIL_PX = 2


@dataclass(frozen=True)
class PageLayout:
    """Physical page geometry in millimetres."""

    page_width_mm: float = A4_WIDTH_MM
    page_height_mm: float = A4_HEIGHT_MM
    top_margin_mm: float = TOP_MARGIN_MM
    bottom_margin_mm: float = BOTTOM_MARGIN_MM
    footer_reserve_mm: float = 0.0

    @property
    def content_height_mm(self) -> float:
        return self.page_height_mm - self.top_margin_mm - self.bottom_margin_mm - self.footer_reserve_mm

    def px_per_mm(self, image_width: int) -> float:
        # The bitmap is scaled to the full page width.
        return image_width / self.page_width_mm

    def content_height_px(self, image_width: int) -> int:
        """Bitmap rows that fit between the margins and footer band of one page."""
        px_per_mm = self.px_per_mm(image_width)
        page_height_px = self.page_height_mm * px_per_mm
        top_px = round(self.top_margin_mm * px_per_mm)
        bottom_px = round((self.bottom_margin_mm + self.footer_reserve_mm) * px_per_mm)
        return int(page_height_px - top_px - bottom_px)

    def fits_one_page(self, image_width: int, image_height: int) -> bool:
        return image_height / self.px_per_mm(image_width) <= self.content_height_mm


@dataclass(frozen=True)
class PageSlice:
    top: int
    height: int
    # False for slices dropped as blank.
    kept: bool = True

    @property
    def bottom(self) -> int:
        return self.top + self.height


@dataclass(frozen=True)
class PaginationPlan:
    """Every slice cut from the bitmap, in order, plus the dropped tail."""

    image_height: int
    slices: tuple[PageSlice, ...]

    @property
    def pages(self) -> list[PageSlice]:
        return [page for page in self.slices if page.kept]

    @property
    def covered_height(self) -> int:
        return sum(page.height for page in self.slices)

    @property
    def discarded_tail(self) -> int:
        return self.image_height - self.covered_height


def _is_white(pixel: tuple[int, ...]) -> bool:
    return pixel[0] > WHITE_LEVEL and pixel[1] > WHITE_LEVEL and pixel[2] > WHITE_LEVEL


def _sample_step(length: int) -> int:
    return max(10, length // 100)


def is_white_row(image: Image.Image, y: int) -> bool:
    """True when more than 90% of sampled pixels in row `y` are near-white."""
    pixels = image.load()
    width = image.width
    samples = range(0, width, _sample_step(width))
    white = sum(1 for x in samples if _is_white(pixels[x, y]))
    return white / max(1, len(samples)) > WHITE_ROW_RATIO


def blank_ratio(image: Image.Image, top: int, height: int) -> float:
    """Fraction of a sparse grid of sampled pixels in the band that are near-white."""
    pixels = image.load()
    xs = range(0, image.width, _sample_step(image.width))
    ys = range(top, top + height, _sample_step(height))
    white = 0
    count = 0
    for y in ys:
        for x in xs:
            if _is_white(pixels[x, y]):
                white += 1
            count += 1
    return white / max(1, count)


def find_break(image: Image.Image, start: int, height: int) -> int:
    """
    Find the row at which to end a slice starting at `start`.

    Walks upward from ``start + height`` (the page capacity) and returns the
    nearest white row, so a slice never runs past the page or through a
    line of text. Rows within MIN_SEAM_OFFSET_PX of `start` are not
    considered. When the rest of the image fits, the image height is
    returned; when no seam exists the capacity row is used as is.
    """
    target = start + height
    if target >= image.height:
        return image.height
    for y in range(target, start + MIN_SEAM_OFFSET_PX, -1):
        if is_white_row(image, y):
            return y
    return target


def plan_pages(
    image: Image.Image,
    layout: PageLayout,
    *,
    forced_break_px: int | None = None,
) -> PaginationPlan:
    """
    Decide how to cut `image` into pages.

    Args:
        image: Full-height RGB rendering of the document.
        layout: Page geometry, including any reserved footer band.
        forced_break_px: Row at which a new page must begin (the terms
            section of invoices), or None.

    Returns:
        A plan whose slices cover the image top to bottom except a tail of
        at most MAX_BLANK_TAIL_PX rows.
    """
    image = image.convert("RGB")
    if layout.fits_one_page(image.width, image.height):
        return PaginationPlan(image_height=image.height, slices=(PageSlice(0, image.height),))

    inner_height = layout.content_height_px(image.width)
    slices: list[PageSlice] = []
    rendered_y = 0
    while rendered_y < image.height:
        break_y = find_break(image, rendered_y, inner_height)
        if (
            forced_break_px is not None
            and rendered_y + MIN_SEAM_OFFSET_PX < forced_break_px < break_y - MIN_SEAM_OFFSET_PX
        ):
            break_y = forced_break_px

        slice_height = min(inner_height, image.height - rendered_y, break_y - rendered_y)
        if slice_height <= MAX_BLANK_TAIL_PX:
            break

        kept = blank_ratio(image, rendered_y, slice_height) < BLANK_SLICE_RATIO
        slices.append(PageSlice(rendered_y, slice_height, kept=kept))
        rendered_y += slice_height

    return PaginationPlan(image_height=image.height, slices=tuple(slices))
