"""
FastAPI Backend dla przeglądarkowej wersji hexdungeon.

Endpoints:
    POST /api/games                     - nowa gra
    GET  /api/games/{id}                - stan gry
    GET  /api/games/{id}/board          - komórki, ścieżka, gobliny
    GET  /api/games/{id}/visibility     - mgła wojny
    GET  /api/games/{id}/events         - dziennik zdarzeń
    POST /api/games/{id}/roll           - rzut kostką
    POST /api/games/{id}/move-complete  - koniec animacji ruchu
    POST /api/games/{id}/reset          - nowa partia

    GET  /api/health                    - health check

Uruchomienie:
    uvicorn api.main:app --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from api.routers import games
from hexdungeon.logger_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown events."""
    # Startup
    configure_logging()
    app.state.sessions = games.SessionRegistry()
    print("🚀 hexdungeon API starting...")
    print("🌐 POST http://localhost:8000/api/games to start a game")
    yield
    # Shutdown
    app.state.sessions.shutdown()
    print("👋 hexdungeon API shutting down...")


app = FastAPI(
    title="hexdungeon API",
    description="Turn-based hex board game engine for a browser presentation layer",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS - allow all origins (including file://)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(games.router, prefix="/api", tags=["Games"])


@app.get("/api/health")
async def health():
    """API health check."""
    return {"status": "healthy"}
