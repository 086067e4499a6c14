"""Shared pytest fixtures for docsmith tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any

import pytest
from PIL import Image, ImageDraw

from docsmith.export import RenderedDocument
from docsmith.runtime.store import StoreError

# 2 px per mm at A4 width.
PAGE_WIDTH_PX = 420
TEXT_PITCH_PX = 40
TEXT_HEIGHT_PX = 20


def striped_image(height: int, content_height: int | None = None, width: int = PAGE_WIDTH_PX) -> Image.Image:
    """White bitmap with a black 20 px "text line" every 40 px down to `content_height`."""
    image = Image.new("RGB", (width, height), "white")
    draw = ImageDraw.Draw(image)
    end = height if content_height is None else content_height
    for y in range(0, end, TEXT_PITCH_PX):
        draw.rectangle([0, y, width - 1, min(y + TEXT_HEIGHT_PX, end) - 1], fill="black")
    return image


class FakeRasterizer:
    """Returns a prepared bitmap instead of launching a browser."""

    def __init__(
        self,
        image: Image.Image | None = None,
        *,
        terms_top_css: float | None = None,
        error: Exception | None = None,
    ) -> None:
        self.image = image if image is not None else striped_image(400)
        self.terms_top_css = terms_top_css
        self.error = error
        self.calls: list[str] = []

    async def render(self, html: str) -> RenderedDocument:
        self.calls.append(html)
        if self.error is not None:
            raise self.error
        # Page root is 210 CSS px wide, so the bitmap scale is 2.
        return RenderedDocument(image=self.image, css_width=PAGE_WIDTH_PX / 2, terms_top_css=self.terms_top_css)


class FakeStore:
    """In-memory DocumentStore with equality filters."""

    def __init__(self, tables: Mapping[str, list[dict[str, Any]]] | None = None, *, error: StoreError | None = None):
        self.tables = {name: list(rows) for name, rows in (tables or {}).items()}
        self.error = error
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def select(
        self,
        table: str,
        columns: str = "*",
        filters: Mapping[str, Any] | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        self.calls.append((table, columns, dict(filters or {})))
        if self.error is not None:
            raise self.error
        rows = [
            row
            for row in self.tables.get(table, [])
            if all(str(row.get(key)) == str(value) for key, value in (filters or {}).items())
        ]
        return rows[:limit] if limit is not None else rows


@pytest.fixture
def make_image() -> Callable[..., Image.Image]:
    return striped_image


@pytest.fixture
def make_rasterizer() -> Callable[..., FakeRasterizer]:
    return FakeRasterizer


@pytest.fixture
def make_store() -> Callable[..., FakeStore]:
    return FakeStore


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path, monkeypatch) -> Iterator[None]:
    """Keep config and exports inside the test's temporary directory."""
    from docsmith.runtime.paths import reset_paths

    monkeypatch.setenv("DOCSMITH_HOME", str(tmp_path))
    monkeypatch.delenv("DOCSMITH_STORE_URL", raising=False)
    monkeypatch.delenv("DOCSMITH_STORE_KEY", raising=False)
    reset_paths()
    yield
    reset_paths()
