"""Global pytest configuration."""

import os

# Keep tests on the in-memory backend regardless of the developer's .env
os.environ["TRIPS_BACKEND_URL"] = ""
os.environ.setdefault("SEED_FIXTURES", "false")
