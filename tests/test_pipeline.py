"""Tests for run orchestration: selection, per-restaurant scraping and saving."""

import datetime as dt

import pytest

from lunch_scraper.config import ScraperSettings
from lunch_scraper.errors import NavigationError
from lunch_scraper.extractors.kantyna import ITEM_SELECTOR
from lunch_scraper.models import NOT_YET_POSTED_ITEM, MenuItem, RestaurantMenu
from lunch_scraper.pipeline import (
    NO_VALID_ITEMS,
    ScrapeRun,
    run_scrape,
    save_run,
    scrape_restaurant,
    select_restaurants,
)
from lunch_scraper.restaurants import RESTAURANTS, get_restaurant_by_id
from lunch_scraper.storage import JsonMenuStore

from conftest import MONDAY, FakeElement, FakePage, FakeSession, load_fixture


def _stored(restaurant_id: str, price: int) -> RestaurantMenu:
    return RestaurantMenu(
        restaurant_id=restaurant_id,
        restaurant_name=restaurant_id,
        date=MONDAY,
        day_of_week="pondělí",
        items=[MenuItem(name="Guláš", price=price)] if price else [NOT_YET_POSTED_ITEM],
        source_url=f"https://{restaurant_id}.test/",
        scraped_at=dt.datetime(2025, 1, 6, 9, 0, tzinfo=dt.timezone.utc),
    )


def _factory(session: FakeSession):
    def make(settings: ScraperSettings) -> FakeSession:
        return session

    return make


# --- Selection --------------------------------------------------------------------


def test_incremental_selection_skips_available_menus() -> None:
    existing = [_stored("hybernska", 150), _stored("tiskarna", 0)]
    selected, skipped = select_restaurants(RESTAURANTS, existing)
    assert skipped == ["hybernska"]
    assert "tiskarna" in [r.id for r in selected]
    assert len(selected) == len(RESTAURANTS) - 1


def test_single_restaurant_is_always_selected() -> None:
    selected, skipped = select_restaurants(
        RESTAURANTS, [_stored("hybernska", 150)], restaurant_id="hybernska"
    )
    assert [r.id for r in selected] == ["hybernska"]
    assert skipped == []


def test_unknown_restaurant_id() -> None:
    with pytest.raises(LookupError):
        select_restaurants(RESTAURANTS, [], restaurant_id="nope")


# --- One restaurant -------------------------------------------------------------


async def test_scrape_restaurant_builds_dated_menu(scraper_settings: ScraperSettings) -> None:
    restaurant = get_restaurant_by_id("tiskarna")
    session = FakeSession(FakePage(text=load_fixture("tiskarna.txt")))

    result = await scrape_restaurant(
        restaurant, MONDAY, settings=scraper_settings, session_factory=_factory(session)
    )

    assert result.success
    menu = result.menu
    assert menu.date == MONDAY
    assert menu.day_of_week == "pondělí"
    assert menu.source_url == "https://www.restauracetiskarna.cz/jindrisska/obedy/"
    assert menu.is_available
    assert menu.error_message is None
    assert len(menu.items) == 3
    assert menu.scraped_at is not None
    assert session.urls == [menu.source_url]
    assert session.exited


async def test_not_posted_menu_is_unavailable(scraper_settings: ScraperSettings) -> None:
    """Test that a sentinel outcome is a successful but unavailable menu."""
    restaurant = get_restaurant_by_id("kantyna")
    session = FakeSession(FakePage())

    result = await scrape_restaurant(
        restaurant, MONDAY, settings=scraper_settings, session_factory=_factory(session)
    )

    assert result.success
    assert result.menu.items == [NOT_YET_POSTED_ITEM]
    assert not result.menu.is_available
    assert result.menu.error_message == NO_VALID_ITEMS


async def test_locale_cookie_is_installed(scraper_settings: ScraperSettings) -> None:
    restaurant = get_restaurant_by_id("saporevero")
    session = FakeSession(FakePage())
    await scrape_restaurant(
        restaurant, MONDAY, settings=scraper_settings, session_factory=_factory(session)
    )
    assert session.cookies[0]["name"] == "NEXT_LOCALE"


async def test_unregistered_restaurant_fails_without_browser(
    scraper_settings: ScraperSettings,
) -> None:
    session = FakeSession(FakePage())
    result = await scrape_restaurant(
        get_restaurant_by_id("lasadelitas"),
        MONDAY,
        settings=scraper_settings,
        session_factory=_factory(session),
    )
    assert not result.success
    assert result.error == "No scraper implemented for restaurant lasadelitas"
    assert not session.entered


async def test_navigation_failure_is_a_failed_result(
    scraper_settings: ScraperSettings,
) -> None:
    error = NavigationError("https://www.meatbeer.cz/menu/", 3)
    session = FakeSession(FakePage(), navigation_error=error)
    result = await scrape_restaurant(
        get_restaurant_by_id("meatbeer"),
        MONDAY,
        settings=scraper_settings,
        session_factory=_factory(session),
    )
    assert not result.success
    assert "failed after 3 attempts" in result.error
    assert session.exited


# --- Whole run --------------------------------------------------------------------


async def test_run_continues_after_failures(scraper_settings: ScraperSettings) -> None:
    """Test that one failing restaurant does not stop the others."""
    pages = {
        "kantyna": FakePage(
            html=load_fixture("kantyna.html"), elements={ITEM_SELECTOR: FakeElement()}
        ),
        "lasadelitas": FakePage(),
    }
    restaurants = [get_restaurant_by_id(rid) for rid in ("lasadelitas", "kantyna")]

    def factory(settings: ScraperSettings) -> FakeSession:
        return FakeSession(pages.pop(next(iter(pages))))

    run = await run_scrape(
        restaurants, MONDAY, [], settings=scraper_settings, session_factory=factory
    )

    assert [m.restaurant_id for m in run.menus] == ["kantyna"]
    assert run.errors == ["Las Adelitas: No scraper implemented for restaurant lasadelitas"]
    assert run.exit_code == 0


def test_exit_code() -> None:
    """Test that only an all-failed run with attempts is an error."""
    assert ScrapeRun(date=MONDAY).exit_code == 0
    assert ScrapeRun(date=MONDAY, skipped=["hybernska", "tiskarna"]).exit_code == 0
    assert ScrapeRun(date=MONDAY, errors=["x: boom"]).exit_code == 1
    assert ScrapeRun(date=MONDAY, menus=[_stored("a", 10)], errors=["x: boom"]).exit_code == 0


def test_save_run_merges_with_stored(menu_store: JsonMenuStore) -> None:
    menu_store.save(MONDAY, [_stored("hybernska", 150), _stored("tiskarna", 0)])
    run = ScrapeRun(date=MONDAY, menus=[_stored("tiskarna", 169), _stored("kantyna", 99)])

    saved = save_run(menu_store, run)

    assert [m.restaurant_id for m in saved] == ["hybernska", "tiskarna", "kantyna"]
    assert menu_store.load(MONDAY) == saved
    assert menu_store.load(MONDAY)[1].is_available


def test_save_run_without_menus_writes_nothing(menu_store: JsonMenuStore) -> None:
    assert save_run(menu_store, ScrapeRun(date=MONDAY, errors=["x: boom"])) is None
    assert not menu_store.path_for(MONDAY).exists()
