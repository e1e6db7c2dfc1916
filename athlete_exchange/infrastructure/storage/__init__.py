"""
Storage implementations of the exchange repository.
"""

from .memory_repository import InMemoryRepository

__all__ = ["InMemoryRepository"]
