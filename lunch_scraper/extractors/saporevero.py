"""Sapore Vero: the daily menu opens in a modal behind a "Denní Menu" button.

The site picks its language from a ``NEXT_LOCALE`` cookie, so the Czech
locale cookie is installed before the first navigation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from lunch_scraper.extractors.base import Extractor, build_items, page_soup
from lunch_scraper.models import Extraction, RawItem

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)

BUTTON_SELECTOR = 'button:has-text("Denní Menu"), a:has-text("Denní Menu")'
ITEM_HEADING_SELECTOR = "h4.font-sans.text-lg.font-bold"
PRICE_SELECTOR = "p.text-sm"
DESCRIPTION_SELECTOR = "p.mt-1"

_BUTTON_WAIT_MS = 10_000
_SETTLE_MS = 2_000


def parse_saporevero(soup: BeautifulSoup) -> list[RawItem]:
    """Read the modal: Italian heading, price, then ``"Czech - English"`` text."""
    items: list[RawItem] = []
    for heading in soup.select(ITEM_HEADING_SELECTOR):
        container = heading.parent.parent if heading.parent is not None else None
        if container is None:
            continue
        price_el = container.select_one(PRICE_SELECTOR)
        description_el = container.select_one(DESCRIPTION_SELECTOR)
        if price_el is None or description_el is None:
            continue
        price_text = price_el.get_text(strip=True)
        description = description_el.get_text(strip=True)
        czech_name = description.split("-")[0].strip()
        if czech_name and price_text:
            items.append(RawItem(czech_name, price_text))
    return items


class SaporeveroExtractor(Extractor):
    cookies = [
        {"name": "NEXT_LOCALE", "value": "cz", "domain": ".saporevero.cz", "path": "/"}
    ]

    def target_url(self) -> str:
        return self.restaurant.menu_url or self.restaurant.url

    async def extract_items(self, page: Page) -> Extraction:
        try:
            await page.wait_for_timeout(_SETTLE_MS)
            try:
                button = await page.wait_for_selector(
                    BUTTON_SELECTOR, timeout=_BUTTON_WAIT_MS
                )
            except PlaywrightTimeoutError:
                button = None
            if button is None:
                logger.info("Denní Menu button not found on Sapore Vero")
                return Extraction.not_yet_posted()

            await button.click()
            await page.wait_for_timeout(_SETTLE_MS)
            items = build_items(parse_saporevero(await page_soup(page)))
        except PlaywrightTimeoutError:
            return Extraction.not_yet_posted()
        except Exception:
            logger.warning("Error processing Sapore Vero menu", exc_info=True)
            return Extraction.unavailable()

        if not items:
            return Extraction.not_yet_posted()
        return Extraction.found(items)
