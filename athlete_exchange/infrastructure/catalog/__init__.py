"""
Demo catalog and in-memory bootstrap.
"""

from .seed import (
    DEMO_ATHLETES,
    DEMO_USERNAME,
    AthleteListing,
    build_in_memory_exchange,
    seed_demo_catalog,
)

__all__ = [
    "AthleteListing",
    "DEMO_ATHLETES",
    "DEMO_USERNAME",
    "seed_demo_catalog",
    "build_in_memory_exchange",
]
