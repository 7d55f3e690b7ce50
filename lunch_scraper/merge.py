"""Combine freshly scraped menus with the collection already stored for a date."""

from __future__ import annotations

from lunch_scraper.models import RestaurantMenu


def merge_menus(
    existing: list[RestaurantMenu], updates: list[RestaurantMenu]
) -> list[RestaurantMenu]:
    """Merge *updates* into *existing*, keyed by restaurant id.

    Stored records whose restaurant was rescraped are replaced in place,
    untouched records are kept as they are, and restaurants seen for the
    first time are appended in the order of *updates*. Merging the same
    updates twice gives the same result as merging them once.
    """
    updates_by_id: dict[str, RestaurantMenu] = {}
    for menu in updates:
        updates_by_id[menu.restaurant_id] = menu

    merged: list[RestaurantMenu] = []
    placed: set[str] = set()
    for menu in existing:
        if menu.restaurant_id in placed:
            continue
        merged.append(updates_by_id.get(menu.restaurant_id, menu))
        placed.add(menu.restaurant_id)

    for menu in updates:
        if menu.restaurant_id not in placed:
            merged.append(updates_by_id[menu.restaurant_id])
            placed.add(menu.restaurant_id)
    return merged
