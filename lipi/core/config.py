import os
import hmac
import hashlib
from dotenv import load_dotenv

load_dotenv()


def hash_key(raw: str) -> str:
    secret = os.environ.get("API_KEY_SECRET", "change-me")
    return hmac.new(secret.encode("utf-8"), raw.encode("utf-8"), hashlib.sha256).hexdigest()


class Settings:
    PORT: int = int(os.environ.get("PORT", 8080))
    MAX_TEXT_LEN: int = int(os.environ.get("MAX_TEXT_LEN", 10000))
    RATE_LIMIT_PER_MIN: int = int(os.environ.get("RATE_LIMIT_PER_MIN", 120))
    CACHE_TTL_SECONDS: int = int(os.environ.get("CACHE_TTL_SECONDS", 600))
    CACHE_MAX_SIZE: int = int(os.environ.get("CACHE_MAX_SIZE", 5000))
    # "sanscript" (indic_transliteration) or "aksharamukha"
    TRANSLITERATION_BACKEND: str = os.environ.get("TRANSLITERATION_BACKEND", "sanscript").strip().lower()
    # Empty path keeps preferences in memory for the lifetime of the process
    PREFERENCES_PATH: str = os.environ.get("PREFERENCES_PATH", "")
    DEFAULT_SCRIPT: str = os.environ.get("DEFAULT_SCRIPT", "DEVANAGARI")
    DEFAULT_LANG: str = os.environ.get("DEFAULT_LANG", "en")
    # Simple in-memory client registry: client_id -> hashed_key
    CLIENT_REGISTRY = {
        os.environ.get("CLIENT_ID", "demo-client"): hash_key(os.environ.get("API_KEY", "demo-key"))
    }


settings = Settings()
