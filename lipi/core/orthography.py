"""
Orthographic clean-up applied to transliterated Indic text.

A class nasal written with a virama before a stop of its own class
(e.g. ಙ್ + ಕ) is rewritten as the script's anusvara (ಂಕ), which is how the
words are spelled in modern print. Rules only ever run on text that is
already in the target script.

All Brahmic blocks share the ISCII-derived layout, so each table is built
from the block base plus the same offsets. Tamil only has the unaspirated
stop of each class; its table is an approximation and does not try to model
Tamil's own nasal conventions.
"""
import re
from typing import Dict, List, Tuple

Rule = Tuple["re.Pattern[str]", str]

_ANUSVARA = 0x02
_VIRAMA = 0x4D

# (nasal, stops) offsets per class, in application order
_NASAL_CLASSES = [
    ("velar", 0x19, (0x15, 0x16, 0x17, 0x18)),
    ("palatal", 0x1E, (0x1A, 0x1B, 0x1C, 0x1D)),
    ("retroflex", 0x23, (0x1F, 0x20, 0x21, 0x22)),
    ("dental", 0x28, (0x24, 0x25, 0x26, 0x27)),
    ("labial", 0x2E, (0x2A, 0x2B, 0x2C, 0x2D)),
]

_BLOCK_BASES = {
    "BENGALI": 0x0980,
    "GURMUKHI": 0x0A00,  # anusvara slot is the bindi
    "GUJARATI": 0x0A80,
    "TAMIL": 0x0B80,
    "TELUGU": 0x0C00,
    "KANNADA": 0x0C80,
    "MALAYALAM": 0x0D00,
}

# Tamil keeps one stop per class (க ச ட த ப)
_SINGLE_STOP_SCRIPTS = {"TAMIL"}


def _build_rules(script: str, base: int) -> List[Rule]:
    anusvara = chr(base + _ANUSVARA)
    virama = chr(base + _VIRAMA)
    rules: List[Rule] = []
    for _name, nasal, stops in _NASAL_CLASSES:
        if script in _SINGLE_STOP_SCRIPTS:
            stops = stops[:1]
        stop_class = "".join(chr(base + s) for s in stops)
        pattern = re.compile(re.escape(chr(base + nasal) + virama) + "(?=[" + stop_class + "])")
        rules.append((pattern, anusvara))
    return rules


ORTHOGRAPHIC_RULES: Dict[str, List[Rule]] = {
    script: _build_rules(script, base) for script, base in _BLOCK_BASES.items()
}


def rules_for(script: str) -> List[Rule]:
    return ORTHOGRAPHIC_RULES.get((script or "").upper(), [])


def apply_orthographic_fixes(text: str, script: str) -> str:
    """
    Contract class nasal + virama before a homorganic stop into an anusvara.

    Rules run velar through labial, each on the previous rule's output.
    Scripts without a table (Devanagari, the romanizations) are returned as is.
    """
    if not text:
        return text
    result = text
    for pattern, replacement in rules_for(script):
        result = pattern.sub(replacement, result)
    return result
