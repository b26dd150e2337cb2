from pydantic import BaseModel, ConfigDict, Field, field_validator

# Evolution chain node as returned by PokeAPI (Internal Contract)
class SpeciesRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str | None = None
    url: str | None = None

class EvolutionNode(BaseModel):
    # Frozen so the extractor can never mutate the upstream tree
    model_config = ConfigDict(frozen=True)

    species: SpeciesRef | None = None
    evolves_to: tuple["EvolutionNode", ...] = ()

    @field_validator("evolves_to", mode="before")
    @classmethod
    def _null_means_terminal(cls, value):
        return () if value is None else value

# Models for the list endpoint (passed through from PokeAPI)
class PokemonListItem(BaseModel):
    name: str
    url: str

class PokemonListResponse(BaseModel):
    count: int
    next: str | None = None
    previous: str | None = None
    results: list[PokemonListItem]

# Model for the details endpoint. Every upstream field is kept (extra="allow"),
# the evolution list is added as a sibling field.
class PokemonDetails(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    abilities: list[dict] = []
    types: list[dict] = []
    species: dict | None = None
    sprites: dict | None = None
    evolutions: list[str] = []

# Favorites (Public Contract, camelCase on the wire)
class AddFavoriteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pokemon_id: int = Field(alias="pokemonId")
    name: str

class Favorite(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    pokemon_id: int = Field(alias="pokemonId")
    name: str
    created_at: str = Field(alias="createdAt")

class FavoriteStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pokemon_id: int = Field(alias="pokemonId")
    is_favorite: bool = Field(alias="isFavorite")

class MessageResponse(BaseModel):
    message: str

class HealthResponse(BaseModel):
    status: str
