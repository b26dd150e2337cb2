import os

PORT = int(os.getenv("PORT", "4001"))
HOST = os.getenv("HOST", "0.0.0.0")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379")

POKEAPI_BASE_URL = os.getenv("POKEAPI_BASE_URL", "https://pokeapi.co/api/v2")
POKEAPI_TIMEOUT = float(os.getenv("POKEAPI_TIMEOUT", "5.0"))

# Only the first generation is listed
POKEMON_LIST_LIMIT = 150
EVOLUTION_MAX_DEPTH = 3
