"""
HTTP adapter for the cart simulator.

    POST /cart/simulate   -> simulated ticket (200) or {"error": ...} (400)

When ``Settings.static_dir`` points to an existing directory it is served
at ``/`` after the API routes.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from cart_sim.schemas import ErrorResponse, MalformedRequestError, TicketResponse
from cart_sim.settings import Settings
from cart_sim.ticket import simulate_ticket

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="Cart simulator")
    app.state.settings = settings

    @app.exception_handler(MalformedRequestError)
    async def _malformed_request(request: Request, exc: MalformedRequestError) -> JSONResponse:
        logger.warning(f"rejected {request.url.path}: {exc.message} {exc.problems}")
        body = ErrorResponse(error=exc.message, details=exc.problems)
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.post(
        "/cart/simulate",
        response_model=TicketResponse,
        responses={400: {"model": ErrorResponse}},
    )
    async def simulate_cart(request: Request) -> TicketResponse:
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedRequestError(problems=[f"body: invalid JSON ({exc})"]) from exc
        return simulate_ticket(payload, settings)

    if settings.static_dir:
        if os.path.isdir(settings.static_dir):
            app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
        else:
            logger.warning(f"static dir {settings.static_dir} not found, static files disabled")

    return app
