"""Tests for locale lookup and phrase rendering."""

from momentkit import Locale, available_locales, get_locale
from momentkit.locales import (
    EnglishLocale,
    FrenchLocale,
    SpanishLocale,
    cldr_locale,
)


def test_get_locale_normalizes_identifiers():
    """Test that case and separators do not matter."""
    assert isinstance(get_locale("en"), EnglishLocale)
    assert isinstance(get_locale("en-US"), EnglishLocale)
    assert isinstance(get_locale("FR_fr"), FrenchLocale)
    assert isinstance(get_locale("es-MX"), SpanishLocale)


def test_get_locale_falls_back_to_language_then_english():
    """Test fallback for unregistered regional and unknown locales."""
    assert isinstance(get_locale("fr_LU"), FrenchLocale)
    assert isinstance(get_locale("pt_BR"), EnglishLocale)


def test_get_locale_passes_instances_through():
    """Test that a Locale instance is used as-is."""
    locale = FrenchLocale()
    assert get_locale(locale) is locale


def test_available_locales():
    """Test that the built-in locales are registered."""
    names = available_locales()
    assert {"en", "fr", "es"} <= set(names)
    assert names == sorted(names)


def test_describe():
    """Test plural substitution and suffix templates."""
    english = get_locale("en")

    assert english.describe("hh", 3, suffixed=False) == "3 hours"
    assert english.describe("hh", 3, suffixed=True, future=False) == "3 hours ago"
    assert english.describe("d", None, suffixed=True, future=True) == "in a day"
    assert get_locale("fr").describe("MM", 4, future=False) == "il y a 4 mois"


def test_cldr_locale_falls_back():
    """Test that calendar names resolve with the same fallback chain."""
    assert cldr_locale("en-US").territory == "US"
    assert cldr_locale("fr_LU").language == "fr"
    assert cldr_locale(FrenchLocale()).language == "fr"
    assert str(cldr_locale("en_x_terse")) == "en"
    assert str(cldr_locale("zz")) == "en"


def test_custom_locale_registers_itself():
    """Test that subclassing Locale plugs a new phrasing strategy in."""

    class TerseLocale(EnglishLocale):
        names = ["en_x_terse"]
        timeframes = {**EnglishLocale.timeframes, "mm": "{0}m", "hh": "{0}h"}
        past = "-{0}"
        future = "+{0}"

    locale = get_locale("en-x-terse")

    assert isinstance(locale, TerseLocale)
    assert isinstance(locale, Locale)
    assert locale.describe("mm", 5, future=False) == "-5m"
    assert locale.describe("h", None, future=True) == "+an hour"


def test_registration_normalizes_names():
    """Test that names listed by a subclass are normalized when registered."""

    class LoudLocale(EnglishLocale):
        names = ["EN-X-Loud"]
        past = "{0} AGO"

    assert "en_x_loud" in available_locales()
    assert isinstance(get_locale("en_x_loud"), LoudLocale)
