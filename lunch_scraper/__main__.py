"""Entry point for the Prague lunch-menu scraper.

Exit status is 0 when at least one restaurant was scraped (or nothing needed
scraping), 1 when every attempted restaurant failed or the restaurant id is
unknown, and 2 when the results could not be saved.
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from lunch_scraper.config import ScraperSettings
from lunch_scraper.czech_days import prague_today
from lunch_scraper.errors import PersistenceError
from lunch_scraper.pipeline import log_summary, run_scrape, save_run
from lunch_scraper.restaurants import RESTAURANTS
from lunch_scraper.storage import JsonMenuStore

logger = logging.getLogger(__name__)


async def run(restaurant_id: str | None, settings: ScraperSettings) -> int:
    """Execute one scrape run and return the process exit status.

    1. Load today's stored collection.
    2. Select and scrape restaurants.
    3. Merge and save the results.
    4. Log summary statistics.
    """
    store = JsonMenuStore(settings.data_dir)
    today = prague_today(settings.timezone_id)
    logger.info("Date: %s", today.isoformat())

    # --- Step 1: Load existing data -------------------------------------------
    try:
        existing = store.load(today)
    except PersistenceError:
        logger.error("Cannot read stored menus", exc_info=True)
        return 2

    # --- Step 2: Scrape ------------------------------------------------------
    try:
        scrape_run = await run_scrape(
            RESTAURANTS,
            today,
            existing,
            restaurant_id=restaurant_id,
            settings=settings,
        )
    except LookupError as exc:
        logger.error("%s", exc)
        return 1

    # --- Step 3: Save --------------------------------------------------------
    try:
        save_run(store, scrape_run)
    except PersistenceError:
        logger.error("Failed to save menu data", exc_info=True)
        log_summary(scrape_run, incremental=restaurant_id is None)
        return 2

    # --- Summary --------------------------------------------------------------
    log_summary(scrape_run, incremental=restaurant_id is None)
    return scrape_run.exit_code


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Scrape today's lunch menus from Prague restaurant websites."
    )
    parser.add_argument(
        "--restaurant",
        metavar="ID",
        default=None,
        help="Scrape only this restaurant, even if a menu is already stored.",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory holding the dated JSON files (default: public/data/menus).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug output, including the first items found per restaurant.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        datefmt="%H:%M:%S",
    )

    overrides = {}
    if args.data_dir:
        overrides["data_dir"] = args.data_dir
    settings = ScraperSettings(**overrides)

    restaurant_id = args.restaurant.strip() if args.restaurant else None
    return asyncio.run(run(restaurant_id or None, settings))


if __name__ == "__main__":
    sys.exit(main())
