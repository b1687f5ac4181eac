"""
blog_api.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) with DB connectivity validation.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api import __version__
from blog_api.api.deps import db_session
from blog_api.api.envelope import success_response

router = APIRouter()


@router.get("/healthz")
async def healthz() -> JSONResponse:
    # Liveness: process is up and serving HTTP.
    return success_response({"status": "ok", "version": __version__})


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> JSONResponse:
    # Readiness: verify critical dependency (DB) is reachable.
    await session.execute(text("SELECT 1"))
    return success_response({"status": "ready"})


# --- Module Notes -----------------------------------------------------------
# Kubernetes typically uses /healthz for liveness and /readyz for readiness gating.
