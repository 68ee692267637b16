"""Root conftest — shared test configuration."""

import os

# Tests never reach real providers: blank keys mean "not configured"
os.environ.setdefault("STRIPE_SECRET_KEY", "")
os.environ.setdefault("GRAPHHOPPER_API_KEY", "")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
