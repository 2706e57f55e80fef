"""Global pytest configuration."""

import os

# Set environment for tests before any imports
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BACKEND_API_KEY", "test-backend-key")
os.environ.setdefault("BACKEND_API_URL", "https://backend.test")
