"""
FastAPI main application
FeedRank - Learn why Wilson score ranking beats raw percentages

Modular architecture with separated API routers in feedrank/api/:
- health.py: Health check and system status
- sessions.py: Create, inspect and reset game sessions
- rounds.py: Start a round and submit a ranking
- config.py: Configuration and curated catalog

All routers access shared state via feedrank.state module.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from feedrank import state
from feedrank.config import load_config, resolve_config_path
from feedrank.models import GameConfig

# Import all API routers
from feedrank.api import health, sessions, rounds
from feedrank.api import config as config_router


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup: Load game configuration into global state
    config_path = resolve_config_path()
    try:
        state.apply_config(load_config(config_path))
        logger.info(f"✅ Server started with config from {config_path}")
    except FileNotFoundError:
        state.apply_config(GameConfig())
        logger.warning(f"⚠️ {config_path} not found, using default configuration")
    except Exception as e:
        logger.error(f"❌ Failed to load config: {e}")
        raise

    yield

    # Shutdown
    logger.info("🛑 Server shutting down")


# Create FastAPI app
app = FastAPI(
    title="FeedRank",
    description="Rank posts by votes and compare against the Wilson score lower bound",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware (allow all origins for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== INCLUDE ROUTERS ====================

# Health check (GET /)
app.include_router(health.router)

# Session endpoints (POST /sessions, GET /sessions/{id}, POST /sessions/{id}/reset)
app.include_router(sessions.router)

# Round endpoints (POST /sessions/{id}/rounds, POST /sessions/{id}/submit)
app.include_router(rounds.router)

# Config endpoints (GET /config, GET /examples)
app.include_router(config_router.router)


# ==================== RUN SERVER ====================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
