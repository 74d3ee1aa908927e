"""Root conftest — shared test configuration."""

import os

# Ensure tests don't accidentally use real credentials
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_fake_key")
os.environ.setdefault("FACEBOOK_APP_ID", "test-app-id")
os.environ.setdefault("FACEBOOK_APP_SECRET", "test-app-secret")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
