"""
Per-session reader preferences: target script and target language.

Each context starts from its default and is only usable after ``hydrate``
has pulled the persisted choice out of storage (default-then-hydrate). A
context that has not been hydrated leaves text untouched.
"""
import logging
import threading
from typing import Dict, Optional

from lipi.core.schemes import (
    DEFAULT_LANGUAGE,
    DEFAULT_SCRIPT_KEY,
    is_supported_language,
    is_supported_script,
)
from lipi.services.transliteration import TransliterationEngine
from lipi.state.storage import (
    LANG_STORAGE_KEY,
    SCRIPT_STORAGE_KEY,
    KeyValueStorage,
    NamespacedStorage,
)


def _read(storage: KeyValueStorage, key: str) -> Optional[str]:
    try:
        return storage.get(key)
    except Exception as e:
        logging.warning("[PREFS] storage read failed key=%s error=%s", key, e)
        return None


def _write(storage: KeyValueStorage, key: str, value: str) -> None:
    try:
        storage.set(key, value)
    except Exception as e:
        logging.warning("[PREFS] storage write failed key=%s error=%s", key, e)


class TransliterationContext:
    def __init__(self, storage: KeyValueStorage, engine: TransliterationEngine, default: str = DEFAULT_SCRIPT_KEY):
        self.storage = storage
        self.engine = engine
        self.target_script = default if is_supported_script(default) else DEFAULT_SCRIPT_KEY
        self.initialized = False

    def hydrate(self) -> "TransliterationContext":
        stored = _read(self.storage, SCRIPT_STORAGE_KEY)
        if stored and is_supported_script(stored):
            self.target_script = stored
        elif stored:
            logging.warning("[PREFS] ignoring persisted script value=%r", stored)
        self.initialized = True
        return self

    def set_target_script(self, script: str) -> bool:
        if not is_supported_script(script):
            logging.warning("[PREFS] rejected script value=%r", script)
            return False
        self.target_script = script
        _write(self.storage, SCRIPT_STORAGE_KEY, script)
        return True

    def transliterate(self, text: str, from_script: str = "devanagari") -> str:
        if not self.initialized or not text:
            return text
        return self.engine.transliterate(text, from_script, self.target_script)


class LanguageContext:
    def __init__(self, storage: KeyValueStorage, default: str = DEFAULT_LANGUAGE):
        self.storage = storage
        self.target_lang = default if is_supported_language(default) else DEFAULT_LANGUAGE
        self.initialized = False

    def hydrate(self) -> "LanguageContext":
        stored = _read(self.storage, LANG_STORAGE_KEY)
        if stored and is_supported_language(stored):
            self.target_lang = stored
        self.initialized = True
        return self

    def set_target_lang(self, lang: str) -> bool:
        if not is_supported_language(lang):
            logging.warning("[PREFS] rejected language value=%r", lang)
            return False
        self.target_lang = lang
        _write(self.storage, LANG_STORAGE_KEY, lang)
        return True


class PreferenceSession:
    """Script and language contexts for one client, sharing one store."""

    def __init__(
        self,
        storage: KeyValueStorage,
        engine: TransliterationEngine,
        default_script: str = DEFAULT_SCRIPT_KEY,
        default_lang: str = DEFAULT_LANGUAGE,
    ):
        self.script = TransliterationContext(storage, engine, default_script)
        self.language = LanguageContext(storage, default_lang)

    def hydrate(self) -> "PreferenceSession":
        self.script.hydrate()
        self.language.hydrate()
        return self

    def snapshot(self) -> Dict[str, str]:
        return {"script": self.script.target_script, "language": self.language.target_lang}


class SessionRegistry:
    """Hands out one hydrated session per client id."""

    def __init__(
        self,
        storage: KeyValueStorage,
        engine: TransliterationEngine,
        default_script: str = DEFAULT_SCRIPT_KEY,
        default_lang: str = DEFAULT_LANGUAGE,
    ):
        self.storage = storage
        self.engine = engine
        self.default_script = default_script
        self.default_lang = default_lang
        self._sessions: Dict[str, PreferenceSession] = {}
        self._lock = threading.Lock()

    def get(self, client_id: str) -> PreferenceSession:
        with self._lock:
            session = self._sessions.get(client_id)
            if session is None:
                session = PreferenceSession(
                    NamespacedStorage(self.storage, client_id),
                    self.engine,
                    self.default_script,
                    self.default_lang,
                ).hydrate()
                self._sessions[client_id] = session
                logging.info("[PREFS] session_created client_id=%s %s", client_id, session.snapshot())
            return session

    def __len__(self) -> int:
        return len(self._sessions)
