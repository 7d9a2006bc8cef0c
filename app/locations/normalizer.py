"""Text normalization for location matching and name ordering."""

import re
import unicodedata

# Hyphens, whitespace, straight/curly apostrophes and quotation marks
_STRIP_PATTERN = re.compile(r"[-\s'\"‘’‚‛“”„‟«»′]")


def _strip_accents(text: str) -> str:
    """Remove diacritics via NFD decomposition."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def normalize(text: str) -> str:
    """
    Canonical form of a place name or query for comparison.

    "Côte d'Ivoire", "cote divoire" and "COTE-D IVOIRE" all give "cotedivoire".
    """
    if not text:
        return ""
    return _STRIP_PATTERN.sub("", _strip_accents(text.lower()))


def collation_key(name: str) -> tuple:
    """
    Sort key approximating locale-aware comparison of display names.

    Base letters compare first, then accents, then case (lowercase first).
    """
    folded = name.casefold()
    return (_strip_accents(folded), folded, name.swapcase())
