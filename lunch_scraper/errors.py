"""Exceptions raised by the lunch-menu scraping pipeline."""


class ScraperError(Exception):
    """Base class for pipeline errors."""

    pass


class NavigationError(ScraperError):
    """Raised when a page could not be loaded after all retry attempts."""

    def __init__(self, url: str, attempts: int) -> None:
        self.url = url
        self.attempts = attempts
        super().__init__(f"Navigation to {url} failed after {attempts} attempts")


class DispatchError(ScraperError):
    """Raised when no extractor is registered for a restaurant."""

    def __init__(self, restaurant_id: str) -> None:
        self.restaurant_id = restaurant_id
        super().__init__(f"No scraper implemented for restaurant {restaurant_id}")


class PersistenceError(ScraperError):
    """Raised when a dated menu collection cannot be loaded or saved."""

    pass
