"""
Shared pytest configuration.
"""

import os

# Headless plotting for visualization tests
os.environ.setdefault("MPLBACKEND", "Agg")
