import httpx
from urllib.parse import quote
from pydantic import ValidationError
from fastapi import HTTPException
import logging
from app.config import POKEAPI_BASE_URL, POKEAPI_TIMEOUT, POKEMON_LIST_LIMIT
from app.models import EvolutionNode

logger = logging.getLogger(__name__)

# Single failure kind for anything that goes wrong talking to PokeAPI
class APIClientError(HTTPException):
    def __init__(self, detail: str, status_code: int = 500):
        super().__init__(status_code=status_code, detail=f"External API Error: {detail}")

class PokeAPIClient:
    BASE_URL = POKEAPI_BASE_URL

    def __init__(self, base_url: str = None, timeout: float = POKEAPI_TIMEOUT):
        self.client = httpx.AsyncClient(base_url=base_url or self.BASE_URL, timeout=timeout)

    async def _get_json(self, url: str) -> dict:
        """
        GETs a PokeAPI resource. `url` is either a path relative to the base URL
        or an absolute reference taken from a previous response.
        """
        logger.info(f"Fetching PokeAPI resource: {url}")

        try:
            response = await self.client.get(url)
            response.raise_for_status()  # Raises for 4xx/5xx status codes
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"PokeAPI returned status {e.response.status_code} for {url}")
            raise APIClientError(detail=f"PokeAPI failed with status {e.response.status_code}")
        except httpx.RequestError as e:
            # Handle network failures/timeouts
            logger.error(f"PokeAPI network error for {url}: {str(e)}")
            raise APIClientError(detail=f"PokeAPI network error: {str(e)}")
        except ValueError:
            logger.error(f"PokeAPI returned malformed JSON for {url}")
            raise APIClientError(detail="PokeAPI returned malformed JSON.")

        if not isinstance(data, dict):
            raise APIClientError(detail="PokeAPI returned an unexpected response format.")
        return data

    async def get_pokemon_list(self, limit: int = POKEMON_LIST_LIMIT) -> dict:
        """Fetches the paginated Pokemon index (first `limit` entries)."""
        return await self._get_json(f"/pokemon?limit={limit}")

    async def get_pokemon(self, identifier: str) -> dict:
        """Fetches the full creature record by national dex number or name."""
        # Escaped so the identifier can only ever be one path segment
        return await self._get_json(f"/pokemon/{quote(str(identifier).lower(), safe='')}")

    async def get_species(self, url: str) -> dict:
        """Follows a `species.url` reference from a creature record."""
        return await self._get_json(url)

    async def get_evolution_chain(self, url: str) -> EvolutionNode:
        """Follows an `evolution_chain.url` reference and parses the chain root."""
        data = await self._get_json(url)

        try:
            return EvolutionNode.model_validate(data["chain"])
        except (KeyError, ValidationError):
            logger.error(f"PokeAPI evolution chain at {url} has an unexpected shape")
            raise APIClientError(detail="PokeAPI returned a malformed evolution chain.")

    async def close(self):
        """Close the HTTP connection pool (call on app shutdown)."""
        await self.client.aclose()
