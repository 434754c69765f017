"""Root conftest: settings for tests must be in place before office_chat.config
is imported. Values come from .env.test, falling back to local defaults."""
from __future__ import annotations

import os
from pathlib import Path

_DEFAULTS = {
    "POSTGRES_USER": "chat",
    "POSTGRES_PASSWORD": "chat",
    "POSTGRES_DB": "office_chat_test",
    "JWT_SECRET": "test-secret-with-at-least-thirty-two-bytes",
    "CONTACTS_CACHE_TTL": "0",
}

_env_test = Path(__file__).resolve().parent / ".env.test"
if _env_test.exists():
    for line in _env_test.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, _, value = line.partition("=")
        os.environ.setdefault(key.strip(), value.strip())

for key, value in _DEFAULTS.items():
    os.environ.setdefault(key, value)
