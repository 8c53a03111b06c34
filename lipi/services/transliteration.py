import logging
import time
from typing import Optional, Protocol

from lipi.core import config
from lipi.core.cache import LRUCache, make_cache_key
from lipi.core.orthography import apply_orthographic_fixes
from lipi.core.schemes import DEFAULT_SCRIPT_KEY, get_script, resolve_scheme

DEBUG = False


class TransliterationPrimitive(Protocol):
    name: str

    def transliterate(self, text: str, from_scheme: str, to_scheme: str) -> str:
        ...


def build_primitive(backend: Optional[str] = None) -> TransliterationPrimitive:
    backend = (backend or config.settings.TRANSLITERATION_BACKEND or "sanscript").lower()
    if backend == "aksharamukha":
        from lipi.adapters.aksharamukha import AksharaAdapter

        return AksharaAdapter()
    if backend != "sanscript":
        logging.warning("unknown_transliteration_backend backend=%s fallback=sanscript", backend)
    from lipi.adapters.sanscript import SanscriptAdapter

    return SanscriptAdapter()


class TransliterationEngine:
    """
    Converts text between scripts and applies the target script's orthographic fixes.

    The engine never raises for bad input: unknown script names fall back to
    Devanagari, and a failing backend yields the original text.
    """

    def __init__(self, primitive: Optional[TransliterationPrimitive] = None, cache: Optional[LRUCache] = None):
        self.primitive = primitive if primitive is not None else build_primitive()
        self.cache = cache

    @property
    def backend(self) -> str:
        return getattr(self.primitive, "name", type(self.primitive).__name__)

    def transliterate(self, text: str, from_script: str = "devanagari", to_script: str = DEFAULT_SCRIPT_KEY) -> str:
        if not text:
            return text

        from_scheme = resolve_scheme(from_script)
        to_scheme = resolve_scheme(to_script)
        if from_scheme == to_scheme:
            return text

        target = get_script(to_script)
        target_key = target.key if target else DEFAULT_SCRIPT_KEY

        key = None
        if self.cache is not None:
            key = make_cache_key(from_scheme, to_scheme, text)
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        start = time.perf_counter()
        try:
            converted = self.primitive.transliterate(text, from_scheme, to_scheme)
        except Exception:
            logging.exception(
                "transliteration_failure backend=%s from=%s to=%s len=%d",
                self.backend,
                from_scheme,
                to_scheme,
                len(text),
            )
            return text

        result = apply_orthographic_fixes(converted, target_key)
        if DEBUG:
            logging.info(
                "transliteration_success from=%s to=%s latency_ms=%.2f",
                from_scheme,
                to_scheme,
                (time.perf_counter() - start) * 1000,
            )
        if key is not None:
            self.cache.set(key, result)
        return result


def build_engine() -> TransliterationEngine:
    cache = LRUCache(max_size=config.settings.CACHE_MAX_SIZE, default_ttl=config.settings.CACHE_TTL_SECONDS)
    return TransliterationEngine(build_primitive(), cache=cache)
