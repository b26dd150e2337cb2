"""Business logic sitting between the HTTP layer and the clients."""
from .evolution import extract_evolution_chain
from .favorites_service import FavoritesService
from .pokemon_service import PokemonService

__all__ = [
    'extract_evolution_chain',
    'FavoritesService',
    'PokemonService',
]
