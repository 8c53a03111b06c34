import importlib

import pytest


class FakePrimitive:
    """Records calls and returns a tagged copy of the input."""

    name = "fake"

    def __init__(self, output=None, error=None):
        self.output = output
        self.error = error
        self.calls = []

    def transliterate(self, text, from_scheme, to_scheme):
        self.calls.append((text, from_scheme, to_scheme))
        if self.error is not None:
            raise self.error
        if self.output is not None:
            return self.output
        return f"[{to_scheme}]{text}"


@pytest.fixture
def fake_primitive():
    return FakePrimitive()


def load_app(monkeypatch, **env):
    """Reload config, routes and app so module-level settings pick up ``env``."""
    defaults = {
        "API_KEY": "test-key",
        "API_KEY_SECRET": "test-secret",
        "CLIENT_ID": "test-client",
        "RATE_LIMIT_PER_MIN": "100",
        "PREFERENCES_PATH": "",
        "TRANSLITERATION_BACKEND": "sanscript",
    }
    defaults.update(env)
    for key, value in defaults.items():
        monkeypatch.setenv(key, value)
    import lipi.core.config as config
    importlib.reload(config)
    import lipi.api.routes as routes
    importlib.reload(routes)
    import lipi.main as main
    importlib.reload(main)
    return main.app


AUTH_HEADERS = {"X-API-Key": "test-key", "X-Client-Id": "test-client"}
