"""Meet&Greet (Mag Burger House): the lunch menu is a PDF linked from the page.

The PDF is downloaded with httpx and its text layer read with pdfplumber.
Dish lines are paired with a price on the same line or on the line right
after; prices outside a plausible range are treated as mis-parses.
"""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING
from urllib.parse import urljoin

import httpx
import pdfplumber
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from lunch_scraper.czech_days import czech_day
from lunch_scraper.extractors.base import Extractor, build_items
from lunch_scraper.models import Extraction, PdfScrapeConfig, RawItem
from lunch_scraper.sections import (
    MIN_LINE_LENGTH,
    find_day_section,
    is_day_heading,
    split_lines,
)
from lunch_scraper.text import (
    PRICE_RE,
    clean_dish_name,
    clean_text,
    is_allergen_line,
    is_boilerplate,
    is_price_line,
    is_section_header,
    parse_price,
    split_same_line_price,
)

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)

PDF_LINK_SELECTOR = 'a[href$=".pdf"], a[href*=".pdf?"], a[href$=".PDF"]'

MIN_PRICE = 10
MAX_PRICE = 1000

_LINK_WAIT_MS = 10_000
_REQUEST_TIMEOUT = 30.0
_USER_AGENT = "Mozilla/5.0 (compatible; PragueLunchMenus/1.0)"


# ---------------------------------------------------------------------------
# Document helpers
# ---------------------------------------------------------------------------


async def download_document(url: str) -> bytes:
    """GET *url* and return the raw body. Raises ``httpx.HTTPError`` on failure."""
    async with httpx.AsyncClient(
        timeout=_REQUEST_TIMEOUT,
        follow_redirects=True,
        headers={"User-Agent": _USER_AGENT},
    ) as client:
        resp = await client.get(url)
        resp.raise_for_status()
        return resp.content


def extract_pdf_text(pdf_bytes: bytes) -> str | None:
    """Concatenated text of all pages, or ``None`` when there is no text layer."""
    try:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            pages_text = [page.extract_text() or "" for page in pdf.pages]
    except Exception as exc:
        logger.debug("pdfplumber extraction failed: %s", exc)
        return None
    full_text = "\n".join(pages_text).strip()
    # Scanned menus have no usable text layer
    if len(full_text) < 20:
        return None
    return full_text


def _is_name_candidate(line: str) -> bool:
    return (
        len(line) > MIN_LINE_LENGTH
        and not is_price_line(line)
        and not is_allergen_line(line)
        and not is_section_header(line)
        and not is_day_heading(line)
        and not is_boilerplate(line)
    )


def parse_document_text(text: str, today_name: str) -> list[RawItem]:
    """Pair dish names with prices in the PDF's text.

    When the document covers the whole week only today's section is used.
    """
    section = find_day_section(text, today_name)
    lines = split_lines(section if section is not None else text)

    items: list[RawItem] = []
    seen: set[tuple[str, str]] = set()
    for idx, line in enumerate(lines):
        if is_day_heading(line) or is_boilerplate(line):
            continue

        same_line = split_same_line_price(line) if is_price_line(line) else None
        if same_line is not None:
            name, price_part = same_line
        elif _is_name_candidate(line) and idx + 1 < len(lines):
            following = lines[idx + 1]
            if not is_price_line(following) or split_same_line_price(following):
                continue
            name, price_part = line, following
        else:
            continue

        m = PRICE_RE.search(price_part)
        price_text = m.group(0) if m else price_part
        price = parse_price(price_text)
        if not MIN_PRICE <= price < MAX_PRICE:
            logger.debug("Rejecting implausible price %d for %r", price, name)
            continue

        raw = RawItem(clean_dish_name(clean_text(name)), price_text)
        if raw.name and raw.key() not in seen:
            seen.add(raw.key())
            items.append(raw)
    return items


# ---------------------------------------------------------------------------
# Extractor
# ---------------------------------------------------------------------------


class MagburgerExtractor(Extractor):
    def target_url(self) -> str:
        config = self.restaurant.scrape_config
        if isinstance(config, PdfScrapeConfig):
            return config.pdf_url
        return self.restaurant.menu_url or self.restaurant.url

    async def extract_items(self, page: Page) -> Extraction:
        try:
            link = await page.wait_for_selector(PDF_LINK_SELECTOR, timeout=_LINK_WAIT_MS)
        except PlaywrightTimeoutError:
            link = None
        href = await link.get_attribute("href") if link is not None else None
        if not href:
            return Extraction.not_yet_posted()

        pdf_url = urljoin(page.url, href)
        logger.info("Downloading menu PDF %s", pdf_url)
        try:
            pdf_bytes = await download_document(pdf_url)
        except httpx.HTTPError as exc:
            logger.warning("Failed to download %s: %s", pdf_url, exc)
            return Extraction.unavailable()

        text = extract_pdf_text(pdf_bytes)
        if text is None:
            logger.warning("No text layer in %s", pdf_url)
            return Extraction.unavailable()

        items = build_items(parse_document_text(text, czech_day(self.today)))
        if not items:
            return Extraction.unavailable()
        return Extraction.found(items)
