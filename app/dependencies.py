from app.clients import PokeAPIClient
from app.repositories import FavoritesRepository
from app.services import FavoritesService, PokemonService
from fastapi import Depends

_poke_client = None
_favorites_repository = None

def get_poke_client() -> PokeAPIClient:
    global _poke_client
    if _poke_client is None:
        _poke_client = PokeAPIClient()
    return _poke_client

def get_favorites_repository() -> FavoritesRepository:
    global _favorites_repository
    if _favorites_repository is None:
        _favorites_repository = FavoritesRepository()
    return _favorites_repository

def get_pokemon_service(
    poke_client: PokeAPIClient = Depends(get_poke_client),
) -> PokemonService:
    return PokemonService(poke_client=poke_client)

def get_favorites_service(
    repository: FavoritesRepository = Depends(get_favorites_repository),
) -> FavoritesService:
    return FavoritesService(repository=repository)

async def close_clients():
    """Close whichever shared clients were created (called on app shutdown)."""
    global _poke_client, _favorites_repository
    if _poke_client is not None:
        await _poke_client.close()
        _poke_client = None
    if _favorites_repository is not None:
        await _favorites_repository.close()
        _favorites_repository = None
