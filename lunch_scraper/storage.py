"""JSON blob store: one file per date, ``<data_dir>/<YYYY-MM-DD>.json``."""

from __future__ import annotations

import datetime as dt
import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from lunch_scraper.errors import PersistenceError
from lunch_scraper.models import RestaurantMenu

logger = logging.getLogger(__name__)

_collection = TypeAdapter(list[RestaurantMenu])


class JsonMenuStore:
    """Load and save the dated menu collection as a JSON array.

    Writes go to a temporary file in the same directory which then replaces
    the target, so readers never see a half-written blob.
    """

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)

    def path_for(self, date: dt.date) -> Path:
        return self.data_dir / f"{date.isoformat()}.json"

    def load(self, date: dt.date) -> list[RestaurantMenu]:
        """The stored collection for *date*, or ``[]`` if nothing is stored.

        Raises:
            PersistenceError: The file exists but cannot be read or parsed.
        """
        path = self.path_for(date)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            logger.info("No menu data found for %s", date)
            return []
        except OSError as exc:
            raise PersistenceError(f"Cannot read {path}: {exc}") from exc

        try:
            return _collection.validate_json(raw)
        except ValidationError as exc:
            raise PersistenceError(f"Corrupt menu data in {path}") from exc

    def save(self, date: dt.date, menus: list[RestaurantMenu]) -> Path:
        """Replace the stored collection for *date*.

        Raises:
            PersistenceError: The file could not be written.
        """
        path = self.path_for(date)
        payload = [menu.model_dump(mode="json", by_alias=True) for menu in menus]
        tmp_name: str | None = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.data_dir,
                prefix=f".{date.isoformat()}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"Cannot write {path}: {exc}") from exc

        logger.info("Saved %d menus → %s", len(menus), path)
        return path
