"""Scrape run orchestration: choose restaurants, scrape each, merge, save.

Restaurants are scraped one after another, each in its own browser
session. A failure for one restaurant is recorded and the run moves on;
only persistence errors escape :func:`save_run`.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from lunch_scraper.config import ScraperSettings
from lunch_scraper.czech_days import czech_day
from lunch_scraper.errors import DispatchError
from lunch_scraper.extractors import get_extractor
from lunch_scraper.merge import merge_menus
from lunch_scraper.models import Restaurant, RestaurantMenu, ScraperResult
from lunch_scraper.session import BrowserSession
from lunch_scraper.storage import JsonMenuStore

logger = logging.getLogger(__name__)

NO_VALID_ITEMS = "No valid menu items found"

SessionFactory = Callable[[ScraperSettings], BrowserSession]


@dataclass
class ScrapeRun:
    """Outcome of one run over the selected restaurants."""

    date: dt.date
    menus: list[RestaurantMenu] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.menus) + len(self.errors)

    @property
    def exit_code(self) -> int:
        """Non-zero only when restaurants were attempted and all of them failed."""
        return 1 if self.attempted and not self.menus else 0


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def _needs_scrape(stored: Optional[RestaurantMenu]) -> bool:
    return stored is None or not stored.is_available or not stored.items


def select_restaurants(
    restaurants: Iterable[Restaurant],
    existing: list[RestaurantMenu],
    restaurant_id: str | None = None,
) -> tuple[list[Restaurant], list[str]]:
    """Pick the restaurants to scrape and the ids skipped as up to date.

    With *restaurant_id* only that restaurant is scraped, whatever is
    stored. Otherwise restaurants whose stored record is available and has
    items are skipped.

    Raises:
        LookupError: *restaurant_id* is not a configured restaurant.
    """
    restaurants = list(restaurants)
    if restaurant_id is not None:
        for restaurant in restaurants:
            if restaurant.id == restaurant_id:
                return [restaurant], []
        available = ", ".join(r.id for r in restaurants)
        raise LookupError(
            f'Restaurant with ID "{restaurant_id}" not found (available: {available})'
        )

    stored = {menu.restaurant_id: menu for menu in existing}
    selected: list[Restaurant] = []
    skipped: list[str] = []
    for restaurant in restaurants:
        if _needs_scrape(stored.get(restaurant.id)):
            selected.append(restaurant)
        else:
            skipped.append(restaurant.id)
    return selected, skipped


# ---------------------------------------------------------------------------
# Scraping
# ---------------------------------------------------------------------------


async def scrape_restaurant(
    restaurant: Restaurant,
    today: dt.date,
    *,
    settings: ScraperSettings | None = None,
    session_factory: SessionFactory = BrowserSession,
) -> ScraperResult:
    """Scrape one restaurant into a dated menu.

    Never raises: dispatch, navigation and session errors all become a
    failed :class:`ScraperResult`. Extraction problems that are not errors
    (menu not posted, unreadable page) give a successful result whose menu
    is unavailable.
    """
    settings = settings or ScraperSettings()
    try:
        extractor = get_extractor(restaurant, today)
    except DispatchError as exc:
        logger.warning("%s (%s)", exc, restaurant.name)
        return ScraperResult.fail(str(exc))

    url = extractor.target_url()
    logger.info("Scraping %s → %s", restaurant.name, url)
    try:
        async with session_factory(settings) as session:
            await session.add_cookies(extractor.cookies)
            await session.navigate(url)
            await session.settle()
            extraction = await extractor.safe_extract(session.page)
    except Exception as exc:
        logger.warning("Error scraping %s", restaurant.name, exc_info=True)
        return ScraperResult.fail(str(exc) or type(exc).__name__)

    menu = RestaurantMenu(
        restaurant_id=restaurant.id,
        restaurant_name=restaurant.name,
        date=today,
        day_of_week=czech_day(today),
        items=extraction.menu_items(),
        source_url=url,
        instagram_url=restaurant.instagram_url,
        scraped_at=dt.datetime.now(dt.timezone.utc),
    )
    if not menu.is_available:
        menu = menu.model_copy(update={"error_message": NO_VALID_ITEMS})
    return ScraperResult.ok(menu)


async def run_scrape(
    restaurants: Iterable[Restaurant],
    today: dt.date,
    existing: list[RestaurantMenu],
    *,
    restaurant_id: str | None = None,
    settings: ScraperSettings | None = None,
    session_factory: SessionFactory = BrowserSession,
) -> ScrapeRun:
    """Scrape every selected restaurant sequentially.

    Raises:
        LookupError: *restaurant_id* is not a configured restaurant.
    """
    selected, skipped = select_restaurants(restaurants, existing, restaurant_id)
    if restaurant_id is not None:
        logger.info("Scraping only: %s", selected[0].name)
    else:
        logger.info(
            "Incremental scrape: %d to scrape, %d up-to-date",
            len(selected),
            len(skipped),
        )

    run = ScrapeRun(date=today, skipped=skipped)
    for restaurant in selected:
        result = await scrape_restaurant(
            restaurant, today, settings=settings, session_factory=session_factory
        )
        if result.success and result.menu is not None:
            run.menus.append(result.menu)
            logger.info(
                "%s: %d items (available=%s)",
                restaurant.name,
                len(result.menu.items),
                result.menu.is_available,
            )
        else:
            run.errors.append(f"{restaurant.name}: {result.error}")
            logger.warning("%s failed: %s", restaurant.name, result.error)
    return run


def save_run(store: JsonMenuStore, run: ScrapeRun) -> list[RestaurantMenu] | None:
    """Merge the run's menus into the stored collection and save it.

    Re-reads the store right before merging so concurrent writes of other
    restaurants are kept. Returns the saved collection, or ``None`` when the
    run produced nothing to save.

    Raises:
        PersistenceError: Loading or saving the collection failed.
    """
    if not run.menus:
        return None
    merged = merge_menus(store.load(run.date), run.menus)
    store.save(run.date, merged)
    logger.info("Saved %d updated menus (merged)", len(run.menus))
    return merged


def log_summary(run: ScrapeRun, incremental: bool = True) -> None:
    """Log summary statistics about the run."""
    logger.info("=" * 50)
    logger.info("SCRAPE SUMMARY (%s)", run.date.isoformat())
    logger.info("-" * 50)
    logger.info("  Success:  %d restaurants", len(run.menus))
    logger.info("  Failed:   %d restaurants", len(run.errors))
    if incremental:
        logger.info("  Skipped (already up-to-date): %d", len(run.skipped))
    for error in run.errors:
        logger.info("    - %s", error)
    logger.info("=" * 50)
