"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from feecalc.api.routes import evaluation
from feecalc.config import settings

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="Fee Calc",
    description="Investment offer fee and return comparison",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(evaluation.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
