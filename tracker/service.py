"""
Player State Tracker Service.

Receives partial state updates from the game client plugin, merges them into
one player snapshot and serves the snapshot with item names resolved.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Type

from fastapi import Body, Depends, FastAPI, Request
from pydantic import BaseModel

from .baseline import load_initial_state
from .config import Settings, get_settings
from .item_db import ItemDatabase
from .models import EVENT_TYPES, PlayerStateView
from .state import PlayerStateStore

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def get_store(request: Request) -> PlayerStateStore:
    """Get the player state store dependency."""
    return request.app.state.store


def get_item_db(request: Request) -> ItemDatabase:
    """Get the item database dependency."""
    return request.app.state.item_db


def _register_update_route(app: FastAPI, kind: str, model: Type[BaseModel]):
    """Add the POST /<kind>/ route for one update type."""

    def receive_update(
        payload: model,
        store: PlayerStateStore = Depends(get_store)
    ) -> Dict[str, Any]:
        logger.info(f"Received update: {payload!r}")
        store.apply_event(kind, payload)
        return {"status": "processed", "kind": kind}

    receive_update.__name__ = f"receive_{kind}"
    receive_update.__doc__ = f"Merge a {model.__name__} into the player state."
    app.post(f"/{kind}/", response_model=Dict[str, Any], name=kind)(receive_update)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[PlayerStateStore] = None,
    item_db: Optional[ItemDatabase] = None
) -> FastAPI:
    """
    Build the tracker FastAPI app.

    When no store is given, the item database and the hiscores baseline are
    loaded on startup before the first request is served.

    Args:
        settings: Service settings (read from the environment if omitted)
        store: Pre-built player state store
        item_db: Pre-built item database

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Player State Tracker",
        description="Merges game client state updates and serves the current player state",
        version="0.1.0"
    )
    app.state.settings = settings
    app.state.store = store
    app.state.item_db = item_db if item_db is not None else ItemDatabase()

    @app.on_event("startup")
    async def startup_event():
        """Load reference data and the baseline snapshot."""
        if app.state.store is not None:
            return

        if item_db is None:
            app.state.item_db = ItemDatabase.from_file(settings.item_db_path)

        initial_state = await load_initial_state(settings)
        app.state.store = PlayerStateStore(initial_state)

        logger.info("Tracker service started successfully")

    for kind, model in EVENT_TYPES.items():
        _register_update_route(app, kind, model)

    @app.get("/status", response_model=PlayerStateView)
    def get_status(
        store: PlayerStateStore = Depends(get_store),
        item_db: ItemDatabase = Depends(get_item_db)
    ):
        """Get the current player state with item names resolved."""
        return store.get_view(item_db)

    @app.get("/health")
    def health_check(
        store: PlayerStateStore = Depends(get_store),
        item_db: ItemDatabase = Depends(get_item_db)
    ):
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "tracker",
            "username": store.read_snapshot().username,
            "items_loaded": len(item_db),
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    # Registered last so the typed update routes take precedence
    @app.post("/{update_path:path}")
    def receive_unknown_update(update_path: str, payload: Any = Body(None)):
        """Accept and discard update types the tracker does not know."""
        logger.info(f"Received unknown update type {update_path!r}: {payload!r}")
        return {"status": "ignored", "kind": update_path.strip("/")}

    return app


settings = get_settings()
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
