"""Health and readiness endpoints for container orchestration.

- ``GET /health`` -- Liveness probe.  Returns 200 if the process is alive.
- ``GET /ready``  -- Readiness probe.  Returns 200 only when the record
  database answers and the offer parser is initialized.  Returns 503 with
  per-check details otherwise.
"""

from __future__ import annotations

import asyncio
import sqlite3
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


def register_health_routes(app: FastAPI) -> None:
    """Register ``/health`` and ``/ready`` endpoints on *app*.

    Args:
        app: The FastAPI application instance.
    """

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness probe -- always returns 200 if the process is running."""
        return {"status": "healthy"}

    @app.get("/ready")
    async def ready(request: Request) -> JSONResponse:
        """Readiness probe -- checks the record database and parser."""
        services: dict[str, Any] = request.app.state.services
        checks: dict[str, str] = {}

        records_conn = services.get("records_conn")
        if records_conn is not None:
            try:
                await asyncio.to_thread(records_conn.execute, "SELECT 1")
                checks["records_db"] = "ok"
            except sqlite3.Error:
                checks["records_db"] = "fail"
        else:
            checks["records_db"] = "fail"

        checks["parser"] = "ok" if services.get("parser") is not None else "fail"

        all_ok = all(v == "ok" for v in checks.values())
        status = "ready" if all_ok else "not_ready"
        code = 200 if all_ok else 503

        return JSONResponse(content={"status": status, "checks": checks}, status_code=code)
