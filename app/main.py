import logging
from contextlib import asynccontextmanager
from fastapi import APIRouter, FastAPI, Depends, status, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from redis.exceptions import RedisError
import uvicorn
from app import config
from app.services import FavoritesService, PokemonService
from app.dependencies import close_clients, get_favorites_service, get_pokemon_service
from app.models import (
    AddFavoriteRequest,
    Favorite,
    FavoriteStatus,
    HealthResponse,
    MessageResponse,
    PokemonDetails,
    PokemonListResponse,
)
from app.clients.pokeapi_client import APIClientError

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_clients()

app = FastAPI(
    title="Pokemon Favorites API",
    description="Proxies PokeAPI with evolution chains and stores favorite Pokemon.",
    docs_url="/api-docs",
    openapi_url="/api-docs.json",
    lifespan=lifespan,
)

# The frontend is served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

router = APIRouter(prefix="/api")

# --- Pokemon proxy ---

@router.get(
    "/pokemon",
    response_model=PokemonListResponse,
    summary="Fetch first 150 Pokemon",
    tags=["Pokemon"],
)
async def get_pokemon_list(service: PokemonService = Depends(get_pokemon_service)):
    try:
        return await service.get_list()
    except APIClientError as e:
        logger.error(f"Pokemon list failed: {e.detail}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch Pokémon list",
        )


@router.get(
    "/pokemon/{identifier}",
    response_model=PokemonDetails,
    summary="Get Pokemon details including evolutions",
    tags=["Pokemon"],
)
async def get_pokemon_details(
    identifier: str,
    service: PokemonService = Depends(get_pokemon_service),
):
    """Pokemon ID or name. Any upstream failure fails the whole request, even if the creature itself was fetched."""
    try:
        return await service.get_details(identifier)
    except APIClientError as e:
        logger.error(f"Pokemon details for {identifier} failed: {e.detail}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch Pokémon details",
        )

# --- Favorites ---

@router.post(
    "/favorites",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a favorite (adding twice is a no-op)",
    tags=["Favorites"],
)
async def add_favorite(
    request: AddFavoriteRequest,
    service: FavoritesService = Depends(get_favorites_service),
):
    try:
        await service.add(request)
    except RedisError:
        logger.exception("DB Error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add favorite",
        )
    return MessageResponse(message="Added to favorites")


@router.delete(
    "/favorites/{pokemon_id}",
    response_model=MessageResponse,
    summary="Remove a favorite",
    tags=["Favorites"],
)
async def remove_favorite(
    pokemon_id: int,
    service: FavoritesService = Depends(get_favorites_service),
):
    try:
        await service.remove(pokemon_id)
    except RedisError:
        logger.exception("DB Error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove favorite",
        )
    return MessageResponse(message="Removed from favorites")


@router.get(
    "/favorites",
    response_model=list[Favorite],
    summary="List favorites, newest first",
    tags=["Favorites"],
)
async def get_favorites(service: FavoritesService = Depends(get_favorites_service)):
    try:
        return await service.get_all()
    except RedisError:
        logger.exception("DB Error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch favorites",
        )


@router.get(
    "/favorites/{pokemon_id}",
    response_model=FavoriteStatus,
    summary="Check whether a Pokemon is a favorite",
    tags=["Favorites"],
)
async def get_favorite_status(
    pokemon_id: int,
    service: FavoritesService = Depends(get_favorites_service),
):
    try:
        return await service.status(pokemon_id)
    except RedisError:
        logger.exception("DB Error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch favorites",
        )


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health():
    return HealthResponse(status="ok")


app.include_router(router)


def run():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Server running on http://localhost:{config.PORT}/api")
    logger.info(f"Docs available at http://localhost:{config.PORT}/api-docs")
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
