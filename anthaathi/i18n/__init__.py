"""English and Tamil display strings."""

from anthaathi.i18n.strings import (
    ENGLISH,
    TAMIL,
    TRANSLATIONS,
    get_dictionary,
    greeting_key,
)

__all__ = [
    "ENGLISH",
    "TAMIL",
    "TRANSLATIONS",
    "get_dictionary",
    "greeting_key",
]
