"""Pytest configuration and fixtures."""

import datetime as dt
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from app.api.dependencies import get_menu_store, get_settings, get_workflow_dispatcher
from app.config import Settings
from app.main import app
from app.services.cooldown import CooldownGate
from lunch_scraper.config import ScraperSettings
from lunch_scraper.storage import JsonMenuStore

FIXTURES_DIR = Path(__file__).parent / "fixtures"

MONDAY = dt.date(2025, 1, 6)
TUESDAY = dt.date(2025, 1, 7)


def load_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


# --- Fake Playwright objects --------------------------------------------------


class FakeElement:
    """Stands in for a Playwright ElementHandle."""

    def __init__(self, href: Optional[str] = None) -> None:
        self.href = href
        self.clicked = False

    async def get_attribute(self, name: str) -> Optional[str]:
        return self.href if name == "href" else None

    async def click(self) -> None:
        self.clicked = True


class FakePage:
    """Stands in for a Playwright Page with canned HTML, text and elements.

    ``elements`` maps selectors to the element ``wait_for_selector`` returns;
    any other selector times out.
    """

    def __init__(
        self,
        html: str = "",
        text: str = "",
        url: str = "https://example.test/",
        elements: Optional[dict[str, FakeElement]] = None,
        goto_failures: int = 0,
    ) -> None:
        self.html = html
        self.text = text
        self.url = url
        self.elements = elements or {}
        self.goto_failures = goto_failures
        self.goto_calls: list[tuple[str, str]] = []
        self.waits: list[int] = []
        self.closed = False

    async def content(self) -> str:
        return self.html

    async def inner_text(self, selector: str) -> str:
        return self.text

    async def wait_for_selector(self, selector: str, timeout: int = 0) -> FakeElement:
        element = self.elements.get(selector)
        if element is None:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms waiting for {selector}")
        return element

    async def wait_for_timeout(self, timeout: int) -> None:
        self.waits.append(timeout)

    async def goto(self, url: str, wait_until: str = "load") -> None:
        self.goto_calls.append((url, wait_until))
        if len(self.goto_calls) <= self.goto_failures:
            raise PlaywrightTimeoutError(f"Timeout navigating to {url}")
        self.url = url

    async def close(self) -> None:
        self.closed = True


class FakeSession:
    """Stands in for BrowserSession in orchestrator tests."""

    def __init__(self, page: FakePage, navigation_error: Optional[Exception] = None) -> None:
        self.page = page
        self.navigation_error = navigation_error
        self.cookies: list[dict[str, str]] = []
        self.urls: list[str] = []
        self.entered = False
        self.exited = False

    async def __aenter__(self) -> "FakeSession":
        self.entered = True
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.exited = True

    async def add_cookies(self, cookies: list[dict[str, str]]) -> None:
        self.cookies.extend(cookies)

    async def navigate(self, url: str, attempts: Optional[int] = None) -> None:
        self.urls.append(url)
        if self.navigation_error is not None:
            raise self.navigation_error

    async def settle(self) -> None:
        pass


@pytest.fixture
def scraper_settings() -> ScraperSettings:
    """Settings with no waiting between retries."""
    return ScraperSettings(retry_base_delay=0.0, settle_delay_ms=0)


# --- API fixtures ----------------------------------------------------------------


class FakeClock:
    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeDispatcher:
    def __init__(self) -> None:
        self.calls = 0
        self.error: Optional[Exception] = None

    async def dispatch(self, restaurant_id: str = "") -> None:
        self.calls += 1
        if self.error is not None:
            raise self.error


@pytest.fixture
def menu_store(tmp_path: Path) -> JsonMenuStore:
    return JsonMenuStore(tmp_path / "menus")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def dispatcher() -> FakeDispatcher:
    return FakeDispatcher()


@pytest.fixture
def app_settings() -> Settings:
    return Settings(app_env="production", github_token="", github_owner="", github_repo="")


@pytest.fixture
async def client(
    menu_store: JsonMenuStore,
    clock: FakeClock,
    dispatcher: FakeDispatcher,
    app_settings: Settings,
) -> AsyncGenerator[AsyncClient, None]:
    """Provide test client with a temporary store, fake dispatcher and fresh gate."""
    app.state.cooldown_gate = CooldownGate(clock=clock)
    app.dependency_overrides[get_menu_store] = lambda: menu_store
    app.dependency_overrides[get_workflow_dispatcher] = lambda: dispatcher
    app.dependency_overrides[get_settings] = lambda: app_settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()
