from __future__ import annotations

# src/mrologix/api/main.py
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mrologix.api.routes.auth import router as auth_router
from mrologix.api.routes.chat import router as chat_router


def _parse_csv_list(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _is_truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


_DEFAULT_CORS_ORIGINS = [
    "http://127.0.0.1:3000",
    "http://localhost:3000",
]

cors_origins = _parse_csv_list(os.getenv("MROLOGIX_CORS_ORIGINS")) or _DEFAULT_CORS_ORIGINS
cors_allow_credentials = _is_truthy(os.getenv("MROLOGIX_CORS_ALLOW_CREDENTIALS", "1"))

app = FastAPI(title="MRO Logix")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=cors_allow_credentials,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/status")
def status():
    return {"ok": True}


app.include_router(auth_router, prefix="/api")
app.include_router(chat_router, prefix="/api")
