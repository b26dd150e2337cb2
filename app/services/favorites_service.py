from app.models import AddFavoriteRequest, Favorite, FavoriteStatus
from app.repositories.favorites_repository import FavoritesRepository

class FavoritesService:
    def __init__(self, repository: FavoritesRepository):
        self._repository = repository

    async def add(self, request: AddFavoriteRequest) -> None:
        await self._repository.add_favorite(request.pokemon_id, request.name)

    async def remove(self, pokemon_id: int) -> None:
        await self._repository.remove_favorite(pokemon_id)

    async def get_all(self) -> list[Favorite]:
        """Maps the stored rows to the public Favorite model, newest first."""
        rows = await self._repository.get_favorites()
        return [Favorite.model_validate(row) for row in rows]

    async def status(self, pokemon_id: int) -> FavoriteStatus:
        return FavoriteStatus(
            pokemon_id=pokemon_id,
            is_favorite=await self._repository.is_favorite(pokemon_id),
        )
