import logging
from pydantic import ValidationError
from app.clients.pokeapi_client import PokeAPIClient, APIClientError
from app.config import EVOLUTION_MAX_DEPTH
from app.models import PokemonDetails, PokemonListResponse
from app.services.evolution import extract_evolution_chain

logger = logging.getLogger(__name__)

class PokemonService:
    def __init__(self, poke_client: PokeAPIClient):
        self._poke_client = poke_client

    async def get_list(self) -> PokemonListResponse:
        """Fetches the first page of Pokemon and passes it through."""
        data = await self._poke_client.get_pokemon_list()

        try:
            return PokemonListResponse.model_validate(data)
        except ValidationError:
            raise APIClientError(detail="PokeAPI returned an unexpected Pokemon list format.")

    async def get_details(self, identifier: str) -> PokemonDetails:
        """
        Fetches a Pokemon and merges its evolution line into the record.

        creature -> species -> evolution chain, awaited one after the other.
        A missing species or chain reference just means no evolutions, but a
        failure at any of the three fetches fails the whole call: no partial
        record is returned.
        """
        pokemon = await self._poke_client.get_pokemon(identifier)

        evolutions: list[str] = []
        species_url = (pokemon.get("species") or {}).get("url")
        if species_url:
            species = await self._poke_client.get_species(species_url)
            chain_url = (species.get("evolution_chain") or {}).get("url")
            if chain_url:
                chain = await self._poke_client.get_evolution_chain(chain_url)
                evolutions = extract_evolution_chain(chain, EVOLUTION_MAX_DEPTH)

        logger.info(f"Resolved {len(evolutions)} evolutions for Pokemon {identifier}")

        try:
            return PokemonDetails.model_validate({**pokemon, "evolutions": evolutions})
        except ValidationError:
            raise APIClientError(detail="PokeAPI returned an unexpected Pokemon format.")
