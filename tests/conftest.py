"""Root conftest — shared test configuration."""

import os

# Never point tests at a real database or a real admin PIN
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ADMIN_PASSWORD", "4321")
os.environ.setdefault("BUSINESS_TIMEZONE", "America/Santiago")
os.environ.setdefault("LOG_FORMAT", "text")
