"""Restaurace Tiskárna: the whole week as flowing text, days headed ``Pondělí 6. 1.``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lunch_scraper.czech_days import czech_day
from lunch_scraper.extractors.base import Extractor, body_text, build_items
from lunch_scraper.models import Extraction
from lunch_scraper.sections import extract_day_items

if TYPE_CHECKING:
    from playwright.async_api import Page


class TiskarnaExtractor(Extractor):
    async def extract_items(self, page: Page) -> Extraction:
        text = await body_text(page)
        # Bare day names also appear in the opening hours; require the date
        raw = extract_day_items(text, czech_day(self.today), require_date=True)
        return Extraction.found(build_items(raw))
