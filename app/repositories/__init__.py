"""Persistence for user data."""
from .favorites_repository import FavoritesRepository

__all__ = [
    'FavoritesRepository',
]
