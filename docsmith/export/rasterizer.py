"""Off-screen HTML rendering to a single tall bitmap."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Any, Protocol

from PIL import Image
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from docsmith.export.errors import RenderError
from docsmith.render.html_builder import PAGE_ROOT_CLASS, TERMS_SECTION_CLASS
from docsmith.runtime import get_logger

logger = get_logger(__name__)

# A4 width at 96 dpi.
VIEWPORT_WIDTH_PX = 794
VIEWPORT_HEIGHT_PX = 1123
DEVICE_SCALE_FACTOR = 2
# Fixed wait for embedded assets such as the logo; slow or broken images
# must not stall the export.
ASSET_TIMEOUT_MS = 400

_MEASURE_SCRIPT = """
([rootSelector, termsSelector]) => {
    const root = document.querySelector(rootSelector);
    if (!root) {
        return null;
    }
    const rootRect = root.getBoundingClientRect();
    const terms = document.querySelector(termsSelector);
    return {
        width: rootRect.width,
        termsTop: terms ? terms.getBoundingClientRect().top - rootRect.top : null,
    };
}
"""


@dataclass(frozen=True)
class RenderedDocument:
    """Bitmap of the page root plus the measurements pagination needs."""

    image: Image.Image
    # Width of the page root in CSS pixels.
    css_width: float
    # Offset of the terms section from the top of the page root, CSS pixels.
    terms_top_css: float | None = None

    @property
    def scale(self) -> float:
        return self.image.width / self.css_width

    @property
    def terms_top_px(self) -> int | None:
        if self.terms_top_css is None:
            return None
        return round(self.terms_top_css * self.scale)


class Rasterizer(Protocol):
    async def render(self, html: str) -> RenderedDocument: ...


class PlaywrightRasterizer:
    """Render markup in headless Chromium; one browser per call."""

    def __init__(
        self,
        *,
        width: int = VIEWPORT_WIDTH_PX,
        device_scale_factor: int = DEVICE_SCALE_FACTOR,
        asset_timeout_ms: int = ASSET_TIMEOUT_MS,
    ) -> None:
        self.width = width
        self.device_scale_factor = device_scale_factor
        self.asset_timeout_ms = asset_timeout_ms

    async def render(self, html: str) -> RenderedDocument:
        """
        Raises:
            RenderError: The page root is missing, or Chromium could not be
                launched or driven.
        """
        try:
            png, metrics = await self._capture(html)
        except PlaywrightError as exc:
            raise RenderError(f"Failed to render PDF content: {exc.message}") from exc

        image = Image.open(io.BytesIO(png))
        image.load()
        logger.debug("Rasterized page root to %dx%d px", image.width, image.height)
        return RenderedDocument(
            image=image.convert("RGB"),
            css_width=float(metrics["width"]),
            terms_top_css=metrics["termsTop"],
        )

    async def _capture(self, html: str) -> tuple[bytes, dict[str, Any]]:
        async with async_playwright() as playwright:
            browser = await playwright.chromium.launch()
            try:
                page = await browser.new_page(
                    viewport={"width": self.width, "height": VIEWPORT_HEIGHT_PX},
                    device_scale_factor=self.device_scale_factor,
                )
                await page.set_content(html, wait_until="domcontentloaded")
                await page.wait_for_timeout(self.asset_timeout_ms)

                metrics = await page.evaluate(_MEASURE_SCRIPT, [f".{PAGE_ROOT_CLASS}", f".{TERMS_SECTION_CLASS}"])
                root = await page.query_selector(f".{PAGE_ROOT_CLASS}")
                if metrics is None or root is None or not metrics["width"]:
                    raise RenderError("Failed to render PDF content: page root element not found")

                return await root.screenshot(type="png"), metrics
            finally:
                await browser.close()
