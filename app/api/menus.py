"""Read endpoint for the dated menu collection."""

import datetime as dt
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.dependencies import get_menu_store
from app.schemas.menus import MenusResponse
from lunch_scraper.czech_days import czech_day, prague_today
from lunch_scraper.errors import PersistenceError
from lunch_scraper.models import RestaurantMenu
from lunch_scraper.restaurants import RESTAURANTS
from lunch_scraper.storage import JsonMenuStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["menus"])

NO_MENU_DATA = "No menu data available"


def placeholder_menus(date: dt.date) -> list[RestaurantMenu]:
    """One empty, unavailable record per configured restaurant."""
    return [
        RestaurantMenu(
            restaurant_id=restaurant.id,
            restaurant_name=restaurant.name,
            date=date,
            day_of_week=czech_day(date),
            items=[],
            source_url=restaurant.url,
            instagram_url=restaurant.instagram_url,
            scraped_at=None,
            error_message=NO_MENU_DATA,
        )
        for restaurant in RESTAURANTS
    ]


def last_updated(menus: list[RestaurantMenu]) -> Optional[dt.datetime]:
    instants = [menu.scraped_at for menu in menus if menu.scraped_at is not None]
    return max(instants) if instants else None


@router.get("/menus", response_model=MenusResponse)
async def get_menus(
    date: Optional[dt.date] = Query(
        default=None, description="Calendar date (YYYY-MM-DD); defaults to today in Prague"
    ),
    store: JsonMenuStore = Depends(get_menu_store),
) -> MenusResponse:
    """
    Return the stored menus for a date.

    Args:
        date: Requested date, today when omitted
        store: Menu store (injected dependency)

    Returns:
        MenusResponse with the collection and its most recent scrape time

    Raises:
        HTTPException: When the stored data cannot be read
    """
    date = date or prague_today()
    try:
        menus = store.load(date)
    except PersistenceError:
        logger.error("Error fetching menus for %s", date, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch menu data")

    if not menus:
        return MenusResponse(date=date, menus=placeholder_menus(date), last_updated=None)
    return MenusResponse(date=date, menus=menus, last_updated=last_updated(menus))
