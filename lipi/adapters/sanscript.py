from indic_transliteration import sanscript


class UnsupportedSchemeError(ValueError):
    """Raised when a backend does not know one of the requested schemes."""


class SanscriptAdapter:
    """Transliteration primitive backed by indic_transliteration's sanscript tables."""

    name = "sanscript"

    def supports(self, scheme: str) -> bool:
        return scheme in sanscript.SCHEMES

    def transliterate(self, text: str, from_scheme: str, to_scheme: str) -> str:
        for scheme in (from_scheme, to_scheme):
            if not self.supports(scheme):
                raise UnsupportedSchemeError(f"sanscript has no scheme {scheme!r}")
        return sanscript.transliterate(text, from_scheme, to_scheme)
