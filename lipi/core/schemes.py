"""
Registry of the scripts and languages the reader can display.

Keys are the upper-case names used by clients and persisted in preference
storage; schemes are the identifiers understood by the transliteration
backends.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

DEFAULT_SCRIPT_KEY = "DEVANAGARI"
DEFAULT_SCHEME = "devanagari"
DEFAULT_LANGUAGE = "en"

INDIC = "indic"
ROMAN = "roman"


@dataclass(frozen=True)
class ScriptDefinition:
    key: str
    scheme: str
    label: str
    group: str = INDIC


@dataclass(frozen=True)
class LanguageDefinition:
    code: str
    name: str


_SCRIPTS = [
    ScriptDefinition("DEVANAGARI", "devanagari", "Devanagari"),
    ScriptDefinition("KANNADA", "kannada", "Kannada"),
    ScriptDefinition("TELUGU", "telugu", "Telugu"),
    ScriptDefinition("TAMIL", "tamil", "Tamil"),
    ScriptDefinition("MALAYALAM", "malayalam", "Malayalam"),
    ScriptDefinition("GUJARATI", "gujarati", "Gujarati"),
    ScriptDefinition("BENGALI", "bengali", "Bengali"),
    ScriptDefinition("GURMUKHI", "gurmukhi", "Gurmukhi"),
    ScriptDefinition("IAST", "iast", "IAST (Diacritical)", ROMAN),
    ScriptDefinition("ITRANS", "itrans", "ITRANS (Phonetic)", ROMAN),
    ScriptDefinition("HK", "hk", "Harvard-Kyoto", ROMAN),
    ScriptDefinition("SLP1", "slp1", "SLP1", ROMAN),
]

SCRIPT_DEFINITIONS: Dict[str, ScriptDefinition] = {s.key: s for s in _SCRIPTS}
AVAILABLE_SCRIPT_KEYS: List[str] = list(SCRIPT_DEFINITIONS)

SUPPORTED_LANGUAGES: List[LanguageDefinition] = [
    LanguageDefinition("en", "English"),
    LanguageDefinition("hi", "Hindi"),
    LanguageDefinition("kn", "Kannada"),
    LanguageDefinition("ta", "Tamil"),
    LanguageDefinition("te", "Telugu"),
    LanguageDefinition("bn", "Bengali"),
    LanguageDefinition("gu", "Gujarati"),
    LanguageDefinition("ml", "Malayalam"),
    LanguageDefinition("ne", "Nepali"),
    LanguageDefinition("bo", "Tibetan"),
]

_LANGUAGE_CODES = {lang.code for lang in SUPPORTED_LANGUAGES}


def get_script(key: Optional[str]) -> Optional[ScriptDefinition]:
    """Look up a script by key, ignoring case. Returns None for unknown keys."""
    if not key:
        return None
    return SCRIPT_DEFINITIONS.get(key.strip().upper())


def resolve_scheme(key: Optional[str]) -> str:
    script = get_script(key)
    return script.scheme if script else DEFAULT_SCHEME


def is_supported_script(key: Optional[str]) -> bool:
    # Setters and storage compare the exact key, not a case-folded one
    return bool(key) and key in SCRIPT_DEFINITIONS


def is_supported_language(code: Optional[str]) -> bool:
    return bool(code) and code in _LANGUAGE_CODES


def scripts_by_group() -> Dict[str, List[ScriptDefinition]]:
    groups: Dict[str, List[ScriptDefinition]] = {INDIC: [], ROMAN: []}
    for script in SCRIPT_DEFINITIONS.values():
        groups[script.group].append(script)
    return groups
