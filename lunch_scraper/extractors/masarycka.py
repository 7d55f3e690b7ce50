"""Masaryčka: a ChoiceQR menu with one URL per weekday.

Even the day URL renders every weekday, each introduced by a bare heading
element (``pondělí`` …), so today's dishes are the menu-item nodes between
today's heading and the next one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bs4 import BeautifulSoup, Tag

from lunch_scraper.czech_days import WEEKDAYS, czech_day, czech_day_url
from lunch_scraper.extractors.base import Extractor, build_items, page_soup
from lunch_scraper.models import DynamicScrapeConfig, Extraction, RawItem

if TYPE_CHECKING:
    from playwright.async_api import Page

ITEM_CLASS = "styles_menuItem__rvgPH"
TITLE_SELECTOR = ".styles_menu-item-title__Mnuv_"
PRICE_SELECTOR = ".styles_menu-item-price__G8nZ_"

# Fallback when headings are missing: assume a fixed number of dishes per day
MAX_ITEMS_PER_DAY = 10
_RENDER_WAIT_MS = 3_000


def _day_headings(soup: BeautifulSoup) -> list[Tag]:
    headings: list[Tag] = []
    for el in soup.find_all(True):
        if el.find(True) is not None:
            continue
        if el.get_text(strip=True).lower() in WEEKDAYS:
            headings.append(el)
    return headings


def _item_triple(item: Tag) -> RawItem | None:
    title = item.select_one(TITLE_SELECTOR)
    price = item.select_one(PRICE_SELECTOR)
    if title is None or price is None:
        return None
    name = title.get_text(" ", strip=True)
    price_text = price.get_text(" ", strip=True)
    if not name or not price_text:
        return None
    return RawItem(name, price_text)


def _items_in(element: Tag) -> list[Tag]:
    if ITEM_CLASS in (element.get("class") or []):
        return [element]
    return element.select(f".{ITEM_CLASS}")


def parse_masarycka(soup: BeautifulSoup, today_name: str) -> list[RawItem]:
    """Collect today's dishes, de-duplicated by name and price."""
    today_name = today_name.lower()
    headings = _day_headings(soup)

    today_heading: Tag | None = None
    next_heading: Tag | None = None
    for i, heading in enumerate(headings):
        if heading.get_text(strip=True).lower() == today_name:
            today_heading = heading
            next_heading = headings[i + 1] if i + 1 < len(headings) else None
            break

    raw: list[RawItem] = []
    if today_heading is not None:
        for sibling in today_heading.find_next_siblings():
            if sibling is next_heading:
                break
            if next_heading is not None and any(
                d is next_heading for d in sibling.descendants
            ):
                break
            for node in _items_in(sibling):
                triple = _item_triple(node)
                if triple is not None:
                    raw.append(triple)

    if not raw:
        all_items = soup.select(f".{ITEM_CLASS}")
        day_index = WEEKDAYS.index(today_name) if today_name in WEEKDAYS else 0
        start = day_index * MAX_ITEMS_PER_DAY
        for node in all_items[start : start + MAX_ITEMS_PER_DAY]:
            triple = _item_triple(node)
            if triple is not None:
                raw.append(triple)

    unique: dict[tuple[str, str], RawItem] = {}
    for item in raw:
        unique.setdefault(item.key(), item)
    return list(unique.values())


class MasaryckaExtractor(Extractor):
    def target_url(self) -> str:
        day = czech_day_url(self.today)
        config = self.restaurant.scrape_config
        if isinstance(config, DynamicScrapeConfig):
            return config.day_url_pattern.replace("{day}", day)
        base = self.restaurant.menu_url or self.restaurant.url
        return f"{base}{day}"

    async def extract_items(self, page: Page) -> Extraction:
        await page.wait_for_timeout(_RENDER_WAIT_MS)
        soup = await page_soup(page)
        raw = parse_masarycka(soup, czech_day(self.today))
        return Extraction.found(build_items(raw))
