"""BookFlix FastAPI application.

Run with:
    uvicorn apps.api.main:app --reload

Or with HOST / PORT taken from the environment:
    python -m apps.api.main
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.deps import get_document_store
from .routers import catalog, me

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title="BookFlix API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog.router)
app.include_router(me.router)


@app.on_event("startup")
async def startup_event():
    logger.info("CORS origins: %s", settings.CORS_ORIGINS)
    documents = get_document_store()
    logger.info("Reading documents stored with %s", type(documents).__name__)


@app.get("/")
def health_check():
    return {"status": "ok", "service": "BookFlix API"}


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the BookFlix API")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    parser.add_argument("--reload", action="store_true")
    return parser.parse_args(argv)


if __name__ == "__main__":
    import uvicorn

    args = _parse_args(sys.argv[1:])
    uvicorn.run("apps.api.main:app", host=args.host, port=args.port, reload=args.reload)
