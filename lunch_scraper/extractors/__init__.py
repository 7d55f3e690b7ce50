"""Per-site menu extractors and the table that selects them.

Every supported restaurant id maps to exactly one :class:`Extractor`
subclass. Restaurants without an entry cannot be scraped and are reported
as failures by the orchestrator.
"""

from __future__ import annotations

import datetime as dt

from lunch_scraper.errors import DispatchError
from lunch_scraper.extractors.base import Extractor
from lunch_scraper.extractors.hybernska import HybernskaExtractor
from lunch_scraper.extractors.kantyna import KantynaExtractor
from lunch_scraper.extractors.magburger import MagburgerExtractor
from lunch_scraper.extractors.masarycka import MasaryckaExtractor
from lunch_scraper.extractors.meatbeer import MeatbeerExtractor
from lunch_scraper.extractors.nekazanka import NekazankaExtractor
from lunch_scraper.extractors.saporevero import SaporeveroExtractor
from lunch_scraper.extractors.tiskarna import TiskarnaExtractor
from lunch_scraper.models import Restaurant

EXTRACTORS: dict[str, type[Extractor]] = {
    "hybernska": HybernskaExtractor,
    "masarycka": MasaryckaExtractor,
    "magburger": MagburgerExtractor,
    "tiskarna": TiskarnaExtractor,
    "saporevero": SaporeveroExtractor,
    "meatbeer": MeatbeerExtractor,
    "nekazanka": NekazankaExtractor,
    "kantyna": KantynaExtractor,
}


def get_extractor(restaurant: Restaurant, today: dt.date) -> Extractor:
    """Instantiate the extractor for *restaurant*.

    Raises:
        DispatchError: No extractor is registered for the restaurant's id.
    """
    extractor_cls = EXTRACTORS.get(restaurant.id)
    if extractor_cls is None:
        raise DispatchError(restaurant.id)
    return extractor_cls(restaurant, today)


__all__ = ["EXTRACTORS", "Extractor", "get_extractor"]
