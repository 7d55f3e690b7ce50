"""Tests for price parsing, normalization and line classification."""

import pytest

from lunch_scraper.models import MenuItem
from lunch_scraper.text import (
    clean_dish_name,
    clean_text,
    create_menu_item,
    is_allergen_line,
    is_boilerplate,
    is_price_line,
    is_section_header,
    normalize_text,
    parse_price,
    split_same_line_price,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("189 Kč", 189),
        ("Kč 189", 189),
        ("189,-", 189),
        ("cena: 95 CZK", 95),
        ("zdarma", 0),
        ("", 0),
        (None, 0),
    ],
)
def test_parse_price(text: str, expected: int) -> None:
    """Test that the first digit run is the price and no digits means 0."""
    assert parse_price(text) == expected


def test_clean_text_collapses_whitespace() -> None:
    """Test that newlines and runs of spaces collapse to single spaces."""
    assert clean_text("  Hovězí \n\n vývar\t s nudlemi ") == "Hovězí vývar s nudlemi"


def test_normalize_text_sentence_case() -> None:
    """Test sentence casing of shouted and mixed-case text."""
    assert normalize_text("HOVĚZÍ GULÁŠ") == "Hovězí guláš"
    assert normalize_text("čočková POLÉVKA") == "Čočková polévka"
    assert normalize_text("   ") == ""


def test_normalize_text_keeps_letters_without_single_uppercase() -> None:
    """Test that a first letter whose uppercase is two characters is left as is."""
    assert normalize_text("ŉ TEST") == "ŉ test"
    assert normalize_text("ß STRASSE") == "ß strasse"


@pytest.mark.parametrize(
    "text", ["SMAŽENÝ SÝR  s hranolky", "řízek", "", "Už normalizováno", "ß straße", "ŉ test"]
)
def test_normalize_text_idempotent(text: str) -> None:
    """Test that normalizing twice equals normalizing once."""
    once = normalize_text(text)
    assert normalize_text(once) == once


def test_create_menu_item() -> None:
    """Test building a normalized item from raw strings."""
    item = create_menu_item("  KUŘECÍ ŘÍZEK ", "169 Kč", "S BRAMBOREM")
    assert item == MenuItem(name="Kuřecí řízek", price=169, description="S bramborem")


def test_create_menu_item_without_description() -> None:
    """Test that a missing or blank description stays empty."""
    assert create_menu_item("Guláš", "159,-").description is None
    assert create_menu_item("Guláš", "159,-", "   ").description is None


def test_is_price_line() -> None:
    """Test price recognition with the supported currency suffixes."""
    assert is_price_line("45 Kč")
    assert is_price_line("Polévka 45Kč")
    assert is_price_line("129,-")
    assert not is_price_line("1, 3, 7")
    assert not is_price_line("Energie 450 kcal")


def test_is_allergen_line() -> None:
    """Test that only short digit-and-comma lines count as allergen codes."""
    assert is_allergen_line("1, 3, 7")
    assert is_allergen_line("9")
    assert not is_allergen_line("1, 2, 3, 4, 5, 6, 7, 8, 9, 10")
    assert not is_allergen_line("Polévka")
    assert not is_allergen_line("")


def test_is_section_header() -> None:
    """Test that all-uppercase lines are headers and mixed case is not."""
    assert is_section_header("POLÉVKA")
    assert is_section_header("HLAVNÍ JÍDLA")
    assert not is_section_header("Hlavní jídla")
    assert not is_section_header("1, 3")


def test_is_boilerplate() -> None:
    """Test recognition of contact and footer lines."""
    assert is_boilerplate("www.restaurace.cz")
    assert is_boilerplate("Alergeny na vyžádání")
    assert not is_boilerplate("Kuřecí stehno")


def test_split_same_line_price() -> None:
    """Test splitting a dish name from a trailing price."""
    assert split_same_line_price("Soup 50 Kč") == ("Soup", "50 Kč")
    assert split_same_line_price("Polévka dne - 45,-") == ("Polévka dne", "45,-")
    assert split_same_line_price("50 Kč") is None


def test_clean_dish_name() -> None:
    """Test removal of allergen suffixes and appended translations."""
    assert clean_dish_name("Guláš s knedlíkem (1,3,7)") == "Guláš s knedlíkem"
    assert clean_dish_name("Hovězí vývar  Beef broth") == "Hovězí vývar"
    assert clean_dish_name("Řízek") == "Řízek"
