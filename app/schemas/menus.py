import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lunch_scraper.models import RestaurantMenu


class MenusResponse(BaseModel):
    """Response schema for the dated menu collection."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: dt.date
    menus: list[RestaurantMenu]
    last_updated: Optional[dt.datetime] = Field(
        default=None, description="Most recent scrape instant in the collection"
    )


class TriggerResponse(BaseModel):
    """Response schema for an accepted scrape trigger."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str
    started_at: dt.datetime
