"""Common contract for per-site menu extractors."""

from __future__ import annotations

import datetime as dt
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from bs4 import BeautifulSoup

from lunch_scraper.errors import NavigationError
from lunch_scraper.models import Extraction, ExtractionStatus, MenuItem, RawItem, Restaurant
from lunch_scraper.text import create_menu_item

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)


class Extractor(ABC):
    """One restaurant website's extraction strategy.

    Subclasses implement :meth:`extract_items` and may override
    :meth:`target_url`.
    ``extract_items`` should return an :class:`Extraction` for every
    expected outcome (items found, menu not posted, page unreadable) and
    only raise for unexpected errors, which :meth:`safe_extract` absorbs.
    """

    # Cookies installed in the browser context before navigation
    cookies: ClassVar[list[dict[str, str]]] = []

    def __init__(self, restaurant: Restaurant, today: dt.date) -> None:
        self.restaurant = restaurant
        self.today = today

    def target_url(self) -> str:
        return self.restaurant.menu_url or self.restaurant.url

    @abstractmethod
    async def extract_items(self, page: Page) -> Extraction:
        """Read the menu from the loaded page."""

    async def safe_extract(self, page: Page) -> Extraction:
        """Run :meth:`extract_items`, degrading unexpected errors to no items.

        :class:`NavigationError` is re-raised so a failed in-page navigation
        fails the whole scrape.
        """
        name = self.restaurant.name
        try:
            extraction = await self.extract_items(page)
        except NavigationError:
            raise
        except Exception:
            logger.warning("Error extracting menu items from %s", name, exc_info=True)
            return Extraction.found([])

        if extraction.status is ExtractionStatus.NOT_YET_POSTED:
            logger.info("%s: menu not posted yet", name)
        elif extraction.status is ExtractionStatus.UNAVAILABLE:
            logger.info("%s: menu temporarily unavailable", name)
        elif extraction.items:
            logger.info("Found %d menu items from %s", len(extraction.items), name)
            for item in extraction.items[:3]:
                logger.debug("  - %s: %d Kč", item.name, item.price)
        else:
            logger.warning("No menu items found for %s", name)
        return extraction


# --- Helpers shared by the extractors ---------------------------------------


async def page_soup(page: Page) -> BeautifulSoup:
    """Parse the rendered page HTML."""
    return BeautifulSoup(await page.content(), "html.parser")


async def body_text(page: Page) -> str:
    """Visible text of the page, with the browser's line breaks."""
    return await page.inner_text("body")


def build_items(raw_items: list[RawItem]) -> list[MenuItem]:
    """Normalize raw triples, dropping any whose name cleans to nothing."""
    items: list[MenuItem] = []
    for raw in raw_items:
        if not raw.name or not raw.name.strip():
            continue
        items.append(create_menu_item(raw.name, raw.price_text, raw.description))
    return items
