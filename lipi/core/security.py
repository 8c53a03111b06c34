import hmac
from lipi.core import config


def verify_api_key(client_id: str, presented_key: str) -> bool:
    """Validate the presented key by HMAC-ing with API_KEY_SECRET and comparing to the registry."""
    stored = config.settings.CLIENT_REGISTRY.get(client_id)
    if not stored:
        return False
    candidate = config.hash_key(presented_key)
    return hmac.compare_digest(stored, candidate)
