"""Tests for cutting a rendered bitmap into PDF pages."""

from __future__ import annotations

from PIL import Image, ImageDraw

from docsmith.export.pagination import (
    MAX_BLANK_TAIL_PX,
    PageLayout,
    blank_ratio,
    find_break,
    is_white_row,
    plan_pages,
)
from docsmith.export.pdf_writer import write_pdf


def _assert_contiguous(plan) -> None:
    top = 0
    for page in plan.slices:
        assert page.top == top
        top = page.bottom
    assert plan.covered_height == plan.image_height - plan.discarded_tail
    assert 0 <= plan.discarded_tail <= MAX_BLANK_TAIL_PX


def test_layout_content_height() -> None:
    assert PageLayout().content_height_px(420) == 562
    assert PageLayout(footer_reserve_mm=18).content_height_px(420) == 526
    assert PageLayout().fits_one_page(420, 562)
    assert not PageLayout().fits_one_page(420, 563)


def test_short_document_is_one_page(make_image) -> None:
    plan = plan_pages(make_image(500), PageLayout())

    assert len(plan.pages) == 1
    assert plan.pages[0].height == 500


def test_tall_document_spans_pages_and_covers_the_bitmap(make_image) -> None:
    image = make_image(1500)

    plan = plan_pages(image, PageLayout())

    assert len(plan.pages) > 1
    _assert_contiguous(plan)
    assert all(page.height <= 562 for page in plan.slices)
    for page in plan.slices[:-1]:
        assert is_white_row(image, page.bottom)


def test_page_heights_track_the_footer_band(make_image) -> None:
    plan = plan_pages(make_image(2000), PageLayout(footer_reserve_mm=18))

    _assert_contiguous(plan)
    assert all(page.height <= 526 for page in plan.slices)


def test_blank_trailing_slice_is_dropped(make_image) -> None:
    plan = plan_pages(make_image(1500, content_height=700), PageLayout())

    assert [page.kept for page in plan.slices] == [True, True, False]
    assert len(plan.pages) == 2
    _assert_contiguous(plan)


def test_forced_break_starts_a_new_page(make_image) -> None:
    plan = plan_pages(make_image(1500), PageLayout(), forced_break_px=300)

    assert plan.slices[0].height == 300
    assert plan.slices[1].top == 300
    assert len(plan.pages) == 4
    _assert_contiguous(plan)


def test_forced_break_too_close_to_slice_start_is_ignored(make_image) -> None:
    plan = plan_pages(make_image(1500), PageLayout(), forced_break_px=5)

    assert plan.slices[0].height == 559


def test_break_snaps_to_nearest_white_row(make_image) -> None:
    image = make_image(1500)

    # Row 562 sits inside a text line; the closest white row above is 559.
    assert find_break(image, 0, 562) == 559
    assert find_break(image, 300, 562) == 862
    assert find_break(image, 1000, 562) == 1500


def _band_image(top: int, bottom: int) -> Image.Image:
    image = Image.new("RGB", (420, 1500), "white")
    ImageDraw.Draw(image).rectangle([0, top, 419, bottom], fill="black")
    return image


def test_break_prefers_seam_above_capacity_over_nearer_one_below() -> None:
    # Row 562 is the capacity; white rows at 544 (18 px up) and 566 (4 px down).
    image = _band_image(545, 565)

    assert find_break(image, 0, 562) == 544


def test_text_band_straddling_capacity_moves_to_next_page() -> None:
    # No white row within 24 px above the capacity, first one below is 570.
    image = _band_image(530, 569)

    plan = plan_pages(image, PageLayout())

    first = plan.slices[0]
    assert first.bottom == 529
    assert is_white_row(image, first.bottom)
    assert plan.slices[1].top == 529
    _assert_contiguous(plan)
    assert all(page.height <= 562 for page in plan.slices)


def test_break_without_white_rows_falls_back_to_target() -> None:
    image = Image.new("RGB", (420, 1200), "black")

    assert find_break(image, 0, 562) == 562


def test_row_and_band_whiteness(make_image) -> None:
    image = make_image(200, content_height=100)

    assert not is_white_row(image, 5)
    assert is_white_row(image, 25)
    assert blank_ratio(image, 100, 100) == 1.0
    assert blank_ratio(image, 0, 40) < 0.99


def test_write_pdf_produces_a_document(make_image) -> None:
    image = make_image(1500)
    layout = PageLayout(footer_reserve_mm=18)
    plan = plan_pages(image, layout)

    content = write_pdf(image, plan, layout, title="Quotation Q-1", footer_text="Thank you for your business!")

    assert content.startswith(b"%PDF")
    assert content.rstrip().endswith(b"%%EOF")
