# elastic_ransack/config.py
"""Process-wide settings.

Settings may be replaced with ``configure()`` during application startup.
Once anything has read them (the first compile does), they are locked and
further ``configure()`` calls raise ``RuntimeError``.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from elastic_ransack.query.predicates import PREDICATES, Predicate
from elastic_ransack.query.values import DatetimeParser, parse_datetime

logger = logging.getLogger(__name__)


def _default_locale() -> str:
    return "en"


@dataclass(frozen=True)
class Settings:
    predicates: tuple[Predicate, ...] = PREDICATES
    datetime_parser: DatetimeParser = parse_datetime
    locale: Callable[[], str] = _default_locale
    boolean_prefixes: tuple[str, ...] = ("is_",)
    translation_prefix: str = "translations_"
    or_separator: str = "_or_"
    default_per_page: int = 50
    escape_free_text: bool = True


_settings = Settings()
_locked = False


def get_settings() -> Settings:
    """Return the current settings and lock them against further changes."""
    global _locked
    _locked = True
    return _settings


def configure(**changes: Any) -> Settings:
    """Replace individual settings, e.g. ``configure(locale=lambda: "de")``."""
    global _settings
    if _locked:
        raise RuntimeError("Settings are read-only once in use; call configure() at startup")
    _settings = replace(_settings, **changes)
    logger.debug("Settings configured: %s", sorted(changes))
    return _settings
