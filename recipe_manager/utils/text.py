"""Text normalisation helpers."""

import unicodedata


def strip_diacritics(value: str) -> str:
    """Remove combining accents, e.g. ``"Crème brûlée"`` -> ``"Creme brulee"``."""
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def to_search_form(value: str | None) -> str | None:
    """Return the lower-cased, trimmed, diacritic-free form used for searching.

    ``None`` stays ``None`` so optional columns keep their emptiness.
    """
    if value is None:
        return None
    return strip_diacritics(value).strip().lower()


def shorten(value: str, limit: int, ellipsis: str = "...") -> str:
    """Cut ``value`` so it fits in ``limit`` characters, marking the cut.

    Values shorter than ``limit`` are returned unchanged; longer ones keep
    ``limit - len(ellipsis) - 2`` characters followed by ``ellipsis``.
    """
    if len(value) < limit:
        return value
    return value[: limit - len(ellipsis) - 2] + ellipsis
