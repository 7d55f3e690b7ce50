"""Data model shared by the extractors, the orchestrator and the HTTP layer.

Stored JSON uses camelCase keys (``restaurantId``, ``isAvailable`` …) while
Python code uses snake_case attributes.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    model_validator,
)
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


# --- Restaurant configuration ------------------------------------------------


class Selectors(_CamelModel):
    """CSS selectors for sites that render one DOM node per menu item."""

    menu_container: Optional[str] = None
    menu_item: Optional[str] = None
    item_name: Optional[str] = None
    item_price: Optional[str] = None
    item_description: Optional[str] = None
    day_section: Optional[str] = None


class StaticScrapeConfig(_CamelModel):
    type: Literal["static"] = "static"
    selectors: Selectors = Field(default_factory=Selectors)


class DynamicScrapeConfig(_CamelModel):
    type: Literal["dynamic"] = "dynamic"
    day_url_pattern: str = Field(
        ..., description="URL containing a ``{day}`` placeholder"
    )


class PdfScrapeConfig(_CamelModel):
    type: Literal["pdf"] = "pdf"
    pdf_url: str = Field(..., description="Page that links to the menu document")


ScrapeConfig = Annotated[
    Union[StaticScrapeConfig, DynamicScrapeConfig, PdfScrapeConfig],
    Field(discriminator="type"),
]


class Restaurant(_CamelModel):
    """A configured restaurant. Loaded once at startup, never mutated."""

    id: str
    name: str
    url: str
    menu_url: Optional[str] = None
    instagram_url: Optional[str] = None
    scrape_config: ScrapeConfig = Field(default_factory=StaticScrapeConfig)


# --- Menu records -------------------------------------------------------------


class MenuItem(_CamelModel):
    """A single dish. ``price == 0`` marks an unpriced placeholder."""

    name: str = Field(..., min_length=1)
    price: int = Field(default=0, ge=0)
    description: Optional[str] = None


class RestaurantMenu(_CamelModel):
    """One restaurant's menu for one calendar date."""

    restaurant_id: str
    restaurant_name: str
    date: dt.date
    day_of_week: str
    items: list[MenuItem] = Field(default_factory=list)
    source_url: str
    instagram_url: Optional[str] = None
    scraped_at: Optional[dt.datetime] = None
    error_message: Optional[str] = None

    @computed_field(alias="isAvailable")  # type: ignore[prop-decorator]
    @property
    def is_available(self) -> bool:
        """True only when at least one item carries a real price."""
        return any(item.price > 0 for item in self.items)


class ScraperResult(_CamelModel):
    """Outcome of scraping one restaurant: a menu or an error, never both."""

    success: bool
    menu: Optional[RestaurantMenu] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _menu_iff_success(self) -> ScraperResult:
        if self.success and (self.menu is None or self.error is not None):
            raise ValueError("successful result needs a menu and no error")
        if not self.success and (self.menu is not None or not self.error):
            raise ValueError("failed result needs an error and no menu")
        return self

    @classmethod
    def ok(cls, menu: RestaurantMenu) -> ScraperResult:
        return cls(success=True, menu=menu)

    @classmethod
    def fail(cls, error: str) -> ScraperResult:
        return cls(success=False, error=error or "Unknown error")


# --- Extraction outcome -------------------------------------------------------


NOT_YET_POSTED_ITEM = MenuItem(
    name="Menu not posted yet", price=0, description="Check back later"
)
UNAVAILABLE_ITEM = MenuItem(
    name="Menu temporarily unavailable", price=0, description="Could not process menu"
)


class ExtractionStatus(str, Enum):
    ITEMS = "items"
    NOT_YET_POSTED = "not_yet_posted"
    UNAVAILABLE = "unavailable"


class Extraction:
    """What an extractor found on the page.

    Either a (possibly empty) list of items, or one of the two sentinel
    outcomes. None of them is an error: sentinels become a single
    zero-priced placeholder item so the restaurant shows as unavailable.
    """

    def __init__(
        self, status: ExtractionStatus, items: list[MenuItem] | None = None
    ) -> None:
        self.status = status
        self.items: list[MenuItem] = list(items or [])

    @classmethod
    def found(cls, items: list[MenuItem]) -> Extraction:
        return cls(ExtractionStatus.ITEMS, items)

    @classmethod
    def not_yet_posted(cls) -> Extraction:
        return cls(ExtractionStatus.NOT_YET_POSTED)

    @classmethod
    def unavailable(cls) -> Extraction:
        return cls(ExtractionStatus.UNAVAILABLE)

    def menu_items(self) -> list[MenuItem]:
        if self.status is ExtractionStatus.NOT_YET_POSTED:
            return [NOT_YET_POSTED_ITEM]
        if self.status is ExtractionStatus.UNAVAILABLE:
            return [UNAVAILABLE_ITEM]
        return list(self.items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Extraction):
            return NotImplemented
        return self.status is other.status and self.items == other.items

    def __repr__(self) -> str:
        return f"<Extraction(status={self.status.value}, items={len(self.items)})>"


class RawItem:
    """A (name, description, price text) triple before normalization."""

    def __init__(
        self, name: str, price_text: str, description: str | None = None
    ) -> None:
        self.name = name
        self.price_text = price_text
        self.description = description

    def key(self) -> tuple[str, str]:
        return (self.name, self.price_text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RawItem):
            return NotImplemented
        return (self.name, self.price_text, self.description) == (
            other.name,
            other.price_text,
            other.description,
        )

    def __repr__(self) -> str:
        return f"<RawItem(name='{self.name}', price_text='{self.price_text}')>"
