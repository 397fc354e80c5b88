"""Test environment: in-memory SQLite, a fixed signing key and cheap bcrypt rounds.

Set before any app module is imported, since settings and the engine are built at import.
"""

import os

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-0123456789-0123456789-0123456789"
os.environ["BCRYPT_ROUNDS"] = "4"
