from deckscribe.api.decklists import router as decklists_router
from deckscribe.api.health import router as health_router

__all__ = [
    "decklists_router",
    "health_router",
]
