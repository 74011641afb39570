"""
FastAPI application for the Mano engine.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import router

# Configure logging to show INFO from mano modules
logging.basicConfig(level=logging.INFO, format="%(name)s - %(levelname)s - %(message)s")
logging.getLogger("mano").setLevel(logging.INFO)

app = FastAPI(
    title="Mano Coach Engine",
    description="Adaptive prompt composition and suggestion extraction for the Mano coaching assistant",
    version="0.1.0",
)

# CORS for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
async def root():
    return {"message": "Mano Coach Engine API", "docs": "/docs"}
