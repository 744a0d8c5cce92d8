"""Main FastAPI server for the realtime travel assistant bridge."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse

from src.config.server import HOST, PORT
from src.config.websocket import WS_ENDPOINT_PATH
from src.runtime.logging import configure_logging
from src.runtime.dependencies import build_runtime_deps
from src.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)

configure_logging()


@asynccontextmanager
async def _lifespan(app: FastAPI):
    runtime_deps = await build_runtime_deps()
    app.state.runtime_deps = runtime_deps
    logger.info("runtime: ready")
    try:
        yield
    finally:
        deps = getattr(app.state, "runtime_deps", None)
        if deps is not None:
            await deps.shutdown()


app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)


@app.get("/")
async def root() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.websocket(WS_ENDPOINT_PATH)
async def websocket_endpoint(websocket: WebSocket) -> None:
    runtime_deps = getattr(app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    await handle_websocket_connection(websocket, runtime_deps)


def main() -> None:
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
