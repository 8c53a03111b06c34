from aksharamukha.transliterate import process

from lipi.adapters.sanscript import UnsupportedSchemeError

# scheme id -> Aksharamukha script name
AKSHARA_SCRIPTS = {
    "devanagari": "Devanagari",
    "kannada": "Kannada",
    "telugu": "Telugu",
    "tamil": "Tamil",
    "malayalam": "Malayalam",
    "gujarati": "Gujarati",
    "bengali": "Bengali",
    "gurmukhi": "Gurmukhi",
    "iast": "IAST",
    "itrans": "Itrans",
    "hk": "HK",
    "slp1": "SLP1",
}


class AksharaAdapter:
    """Transliteration primitive backed by Aksharamukha."""

    name = "aksharamukha"

    def supports(self, scheme: str) -> bool:
        return scheme in AKSHARA_SCRIPTS

    def transliterate(self, text: str, from_scheme: str, to_scheme: str) -> str:
        try:
            source = AKSHARA_SCRIPTS[from_scheme]
            target = AKSHARA_SCRIPTS[to_scheme]
        except KeyError as e:
            raise UnsupportedSchemeError(f"aksharamukha has no scheme {e.args[0]!r}") from e
        output = process(source, target, text)
        if output is None:
            raise RuntimeError(f"aksharamukha returned nothing for {source}->{target}")
        return output
