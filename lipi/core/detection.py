import re

DEVANAGARI_RE = re.compile(r"[\u0900-\u097F]")


def is_eligible(text: str) -> bool:
    """True when the text carries at least one Devanagari code point."""
    if not text:
        return False
    return DEVANAGARI_RE.search(text) is not None


def devanagari_ratio(text: str) -> float:
    if not text:
        return 0.0
    chars = [c for c in text if not c.isspace()]
    if not chars:
        return 0.0
    hits = sum(1 for c in chars if "\u0900" <= c <= "\u097F")
    return hits / len(chars)
