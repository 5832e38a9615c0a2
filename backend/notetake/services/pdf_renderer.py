from playwright.async_api import async_playwright

CHROMIUM_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]
PAGE_MARGIN = {"top": "0.5in", "right": "0.5in", "bottom": "0.5in", "left": "0.5in"}


class PlaywrightPdfRenderer:
    """Renders an HTML document to PDF in a fresh headless Chromium per call."""

    def __init__(self, page_format: str = "Letter"):
        self.page_format = page_format

    async def render(self, html: str) -> bytes:
        async with async_playwright() as p:
            browser = await p.chromium.launch(args=CHROMIUM_ARGS)
            try:
                page = await browser.new_page()
                # remote images must finish loading before printing
                await page.set_content(html, wait_until="networkidle")
                return await page.pdf(
                    format=self.page_format,
                    print_background=True,
                    margin=PAGE_MARGIN,
                )
            finally:
                await browser.close()
