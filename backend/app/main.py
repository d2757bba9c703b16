# =============================
# backend/app/main.py (app factory)
# =============================
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from . import __version__
from .config import HOST, LOG_LEVEL, PORT, SHUTDOWN_GRACE_SEC
from .mcp.router import router as mcp_router
from .mcp.session import store
from .routes.health import router as health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    # anything still open when the app is served by a plain uvicorn
    store.close_all()


app = FastAPI(title="Perplexity MCP Server", version=__version__, lifespan=lifespan)
app.include_router(health_router)
app.include_router(mcp_router)


class Server(uvicorn.Server):
    """uvicorn server that ends every SSE stream as soon as shutdown starts.

    uvicorn waits for open connections before running the lifespan shutdown,
    and an SSE connection only ends once its session is closed.
    """

    async def shutdown(self, sockets=None):
        logger.info("Shutting down; closing %d open session(s)", len(store))
        store.close_all()
        await super().shutdown(sockets=sockets)


def build_server(host: str = HOST, port: int = PORT) -> Server:
    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level=LOG_LEVEL.lower(),
        timeout_graceful_shutdown=SHUTDOWN_GRACE_SEC,
    )
    return Server(config)


def run():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Perplexity MCP Server running on http://localhost:%s", PORT)
    build_server().run()


if __name__ == "__main__":
    run()
