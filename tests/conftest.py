"""Pytest configuration and shared fixtures."""

import os

from hypothesis import settings

# Failure tests expect the default partial-update semantics.
os.environ["WIDE_UINT_ATOMIC"] = "0"

# Create a profile named "no_deadline" with deadline disabled.
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")
