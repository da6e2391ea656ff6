import os

# Settings are read once at import time, so they must be in place before any
# application module is imported.
os.environ.setdefault("APP_SECRET_KEY", "test-secret-key")
os.environ.setdefault("APP_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("APP_ADMIN_USERNAME", "admin")
os.environ.setdefault("APP_ADMIN_PASSWORD", "admin-secret")
os.environ.setdefault("APP_LOG_LEVEL", "WARNING")
