"""The restaurants the pipeline knows about, in display order."""

from __future__ import annotations

from lunch_scraper.models import (
    DynamicScrapeConfig,
    PdfScrapeConfig,
    Restaurant,
    Selectors,
    StaticScrapeConfig,
)

RESTAURANTS: tuple[Restaurant, ...] = (
    Restaurant(
        id="hybernska",
        name="Restaurace Hybernská",
        url="https://www.restauracehybernska.cz/",
        scrape_config=StaticScrapeConfig(
            selectors=Selectors(item_name="h3"),
        ),
    ),
    Restaurant(
        id="masarycka",
        name="Masarycka Restaurace",
        url="https://masaryckarestaurace.choiceqr.com",
        menu_url="https://masaryckarestaurace.choiceqr.com/section:poledni-menu/",
        scrape_config=DynamicScrapeConfig(
            day_url_pattern=(
                "https://masaryckarestaurace.choiceqr.com/section:poledni-menu/{day}"
            ),
        ),
    ),
    Restaurant(
        id="magburger",
        name="Meet&Greet",
        url="https://www.magburgerhouse.cz/",
        menu_url="https://www.magburgerhouse.cz/poledni-menu",
        scrape_config=PdfScrapeConfig(
            pdf_url="https://www.magburgerhouse.cz/poledni-menu",
        ),
    ),
    Restaurant(
        id="tiskarna",
        name="Restaurace Tiskárna",
        url="https://www.restauracetiskarna.cz/",
        menu_url="https://www.restauracetiskarna.cz/jindrisska/obedy/",
    ),
    Restaurant(
        id="saporevero",
        name="Sapore Vero",
        url="https://www.saporevero.cz/",
    ),
    Restaurant(
        id="meatbeer",
        name="Meat Beer",
        url="https://www.meatbeer.cz/",
        menu_url="https://www.meatbeer.cz/menu/",
    ),
    Restaurant(
        id="nekazanka",
        name="Bistro Nekázanka",
        url="https://www.bistronekazanka.cz/",
        menu_url="https://www.prazskejrej.cz/menu-na-web/bistro-nekazanka-11",
    ),
    Restaurant(
        id="kantyna",
        name="Kantýna",
        url="https://www.kantyna.ambi.cz/",
        menu_url="https://www.kantyna.ambi.cz/menu/denni-menu",
    ),
    # No extractor: the daily menu is only published as an image
    Restaurant(
        id="lasadelitas",
        name="Las Adelitas",
        url="https://www.lasadelitas.cz/",
        menu_url="https://www.lasadelitas.cz/denni-menu/",
    ),
)


def get_restaurant_by_id(restaurant_id: str) -> Restaurant | None:
    for restaurant in RESTAURANTS:
        if restaurant.id == restaurant_id:
            return restaurant
    return None
