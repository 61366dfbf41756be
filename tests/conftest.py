"""Test configuration: settings need a DATABASE_URL before app modules are imported."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SESSION_COOKIE_SECURE", "false")
