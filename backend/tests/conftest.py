"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or emit JSON logs
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("REQUIRE_SLUG", "true")
os.environ.setdefault("PUBLIC_BASE_URL", "http://localhost:5173")
