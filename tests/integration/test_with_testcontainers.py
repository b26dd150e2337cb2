import pytest
from fastapi.testclient import TestClient
from docker.errors import DockerException
from testcontainers.redis import RedisContainer
from app.main import app
from app.dependencies import get_poke_client, get_favorites_repository
from app.clients.pokeapi_client import PokeAPIClient
from app.repositories.favorites_repository import FavoritesRepository
import redis.asyncio as redis


@pytest.fixture(scope="module")
def redis_container():
    """Start a real Redis container for integration tests."""
    try:
        container = RedisContainer("redis:7-alpine").start()
    except DockerException as e:
        pytest.skip(f"Docker is not available: {e}")
    yield container
    container.stop()


@pytest.fixture(scope="module")
def redis_url(redis_container):
    """Get Redis connection URL from the container."""
    host = redis_container.get_container_host_ip()
    port = redis_container.get_exposed_port(6379)
    return f"redis://{host}:{port}"


@pytest.fixture
def test_client(redis_url):
    """TestClient with real Redis from Testcontainers."""
    favorites_repository = FavoritesRepository()
    favorites_repository.redis = redis.from_url(redis_url, decode_responses=True)

    poke_client = PokeAPIClient()

    app.dependency_overrides[get_poke_client] = lambda: poke_client
    app.dependency_overrides[get_favorites_repository] = lambda: favorites_repository

    with TestClient(app) as client:
        # Start every test from an empty store
        client.portal.call(favorites_repository.clear)
        yield client

    app.dependency_overrides.clear()


def test_favorites_persist_across_requests(test_client):
    test_client.post("/api/favorites", json={"pokemonId": 1, "name": "bulbasaur"})
    test_client.post("/api/favorites", json={"pokemonId": 4, "name": "charmander"})

    for _ in range(3):
        response = test_client.get("/api/favorites")
        assert response.status_code == 200
        assert [f["name"] for f in response.json()] == ["charmander", "bulbasaur"]


def test_duplicate_favorite_with_real_redis(test_client):
    test_client.post("/api/favorites", json={"pokemonId": 25, "name": "pikachu"})
    response = test_client.post("/api/favorites", json={"pokemonId": 25, "name": "pikachu"})

    assert response.status_code == 201
    assert len(test_client.get("/api/favorites").json()) == 1


def test_remove_favorite_with_real_redis(test_client):
    test_client.post("/api/favorites", json={"pokemonId": 7, "name": "squirtle"})

    assert test_client.get("/api/favorites/7").json()["isFavorite"] is True

    response = test_client.delete("/api/favorites/7")
    assert response.status_code == 200
    assert test_client.get("/api/favorites/7").json()["isFavorite"] is False


def test_details_with_real_redis_stack(httpx_mock, test_client):
    """Details never touch the store; the chain is fetched fresh on each request."""
    for _ in range(2):
        httpx_mock.add_response(
            url="https://pokeapi.co/api/v2/pokemon/133",
            json={
                "id": 133,
                "name": "eevee",
                "species": {"name": "eevee", "url": "https://pokeapi.co/api/v2/pokemon-species/133/"},
            },
        )
        httpx_mock.add_response(
            url="https://pokeapi.co/api/v2/pokemon-species/133/",
            json={"name": "eevee", "evolution_chain": {"url": "https://pokeapi.co/api/v2/evolution-chain/67/"}},
        )
        httpx_mock.add_response(
            url="https://pokeapi.co/api/v2/evolution-chain/67/",
            json={"chain": {
                "species": {"name": "eevee"},
                "evolves_to": [
                    {"species": {"name": "vaporeon"}, "evolves_to": []},
                    {"species": {"name": "jolteon"}, "evolves_to": []},
                    {"species": {"name": "flareon"}, "evolves_to": []},
                ],
            }},
        )

    first = test_client.get("/api/pokemon/133")
    second = test_client.get("/api/pokemon/133")

    assert first.status_code == 200
    assert first.json()["evolutions"] == ["eevee", "vaporeon", "jolteon", "flareon"]
    assert second.json() == first.json()
