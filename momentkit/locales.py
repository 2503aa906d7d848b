"""Locale strategies for relative-time phrases.

Each ``Locale`` subclass registers itself under the names it lists. Lookup
normalizes the requested name ("en-US", "en_us") and falls back first to the
language ("fr_CA" -> "fr") and then to English, so any locale identifier is
accepted.

Month, weekday and period names are not kept here: formatting and parsing
read them from the CLDR data shipped with Babel, resolved by
``cldr_locale`` with the same fallback chain.

Example:
    >>> get_locale("fr_FR").describe("hh", 3, suffixed=True, future=False)
    'il y a 3 heures'
"""

import logging
from typing import ClassVar

import babel

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"

_locale_map: dict[str, type["Locale"]] = {}


def _normalize(name: str) -> str:
    return name.strip().lower().replace("-", "_")


class Locale:
    """Relative-time phrasing for one language.

    Attributes:
        names: Identifiers this locale registers under (lowercase, "_" separated)
        timeframes: Relative-time phrases keyed by range key ("s", "mm", ...);
            plural phrases take the magnitude as ``{0}``
        past: Template wrapping a phrase for past deltas
        future: Template wrapping a phrase for future deltas
    """

    names: ClassVar[list[str]] = []

    timeframes: ClassVar[dict[str, str]] = {}
    past: ClassVar[str] = "{0}"
    future: ClassVar[str] = "{0}"

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        for name in cls.names:
            _locale_map[_normalize(name)] = cls

    def describe(
        self,
        key: str,
        magnitude: int | None = None,
        *,
        suffixed: bool = True,
        future: bool = False,
    ) -> str:
        """Render the phrase for a relative-time range.

        Args:
            key: Range key ("s", "m", "mm", ..., "yy")
            magnitude: Rounded count for plural keys, ignored for singular ones
            suffixed: Wrap the phrase with the past/future template
            future: Direction of the delta, only used when suffixed
        """
        phrase = self.timeframes[key].format(magnitude)
        if not suffixed:
            return phrase
        return (self.future if future else self.past).format(phrase)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class EnglishLocale(Locale):
    names = ["en", "en_us", "en_gb", "en_au", "en_ca", "en_nz", "en_ie"]

    timeframes = {
        "s": "a few seconds",
        "m": "a minute",
        "mm": "{0} minutes",
        "h": "an hour",
        "hh": "{0} hours",
        "d": "a day",
        "dd": "{0} days",
        "M": "a month",
        "MM": "{0} months",
        "y": "a year",
        "yy": "{0} years",
    }
    past = "{0} ago"
    future = "in {0}"


class FrenchLocale(Locale):
    names = ["fr", "fr_fr", "fr_ca", "fr_be", "fr_ch"]

    timeframes = {
        "s": "quelques secondes",
        "m": "une minute",
        "mm": "{0} minutes",
        "h": "une heure",
        "hh": "{0} heures",
        "d": "un jour",
        "dd": "{0} jours",
        "M": "un mois",
        "MM": "{0} mois",
        "y": "un an",
        "yy": "{0} ans",
    }
    past = "il y a {0}"
    future = "dans {0}"


class SpanishLocale(Locale):
    names = ["es", "es_es", "es_mx", "es_ar", "es_co"]

    timeframes = {
        "s": "unos segundos",
        "m": "un minuto",
        "mm": "{0} minutos",
        "h": "una hora",
        "hh": "{0} horas",
        "d": "un día",
        "dd": "{0} días",
        "M": "un mes",
        "MM": "{0} meses",
        "y": "un año",
        "yy": "{0} años",
    }
    past = "hace {0}"
    future = "en {0}"


def get_locale(name: "str | Locale") -> Locale:
    """Return the locale strategy for an identifier.

    Args:
        name: Locale identifier ("en", "en-US", "fr_CA", ...) or a ``Locale``
            instance, which is returned unchanged

    Returns:
        The best matching locale, falling back to English
    """
    if isinstance(name, Locale):
        return name

    normalized = _normalize(name)
    locale_cls = _locale_map.get(normalized)
    if locale_cls is None:
        locale_cls = _locale_map.get(normalized.split("_")[0])
    if locale_cls is None:
        logger.debug("No locale registered for %r, using %r", name, DEFAULT_LOCALE)
        locale_cls = _locale_map[DEFAULT_LOCALE]
    return locale_cls()


def cldr_locale(name: "str | Locale") -> babel.Locale:
    """Return the Babel locale holding calendar names for an identifier.

    Falls back to the language, then to English, when Babel has no data for
    the identifier (or cannot parse it, as with private-use names).
    """
    if isinstance(name, Locale):
        name = name.names[0] if name.names else DEFAULT_LOCALE

    normalized = _normalize(name)
    for candidate in (normalized, normalized.split("_")[0]):
        try:
            return babel.Locale.parse(candidate)
        except (ValueError, babel.UnknownLocaleError):
            continue
    logger.debug("No CLDR data for %r, using %r", name, DEFAULT_LOCALE)
    return babel.Locale.parse(DEFAULT_LOCALE)


def available_locales() -> list[str]:
    """Return every registered locale identifier, sorted."""
    return sorted(_locale_map)


__all__ = [
    "DEFAULT_LOCALE",
    "EnglishLocale",
    "FrenchLocale",
    "Locale",
    "SpanishLocale",
    "available_locales",
    "cldr_locale",
    "get_locale",
]
