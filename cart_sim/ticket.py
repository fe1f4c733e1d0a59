from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from cart_sim.calculator import simulate
from cart_sim.models import SimulationResult, TicketRequest
from cart_sim.schemas import TicketLine, TicketPromotion, TicketResponse, parse_request
from cart_sim.settings import Settings

logger = logging.getLogger(__name__)


def id_text(value: Any) -> str:
    """Render an id the way it reads in the JSON body (true, 7, 7.5, A1)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def iso_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_ticket(
    request: TicketRequest,
    result: SimulationResult,
    settings: Settings,
    now: Optional[datetime] = None,
) -> TicketResponse:
    """
    Assemble the receipt preview around a simulation result.

    ``lines`` echo the raw cart (``tot_line`` is price x quantity before any
    promotion); ``total`` is the promotion- and cashback-adjusted amount.
    """
    lines = [
        TicketLine(
            order=index,
            product_id=line.product_id,
            tot_line=float(line.line_total),
            quantity=line.quantity,
            product_name=settings.product_name(line.product_id),
        )
        for index, line in enumerate(request.lines, start=1)
    ]
    promotions = [TicketPromotion(**promo.to_dict()) for promo in result.promotions_applied]

    return TicketResponse(
        id=request.ticket_id,
        code=f"CODE-{id_text(request.ticket_id)}",
        total=float(result.final_total),
        currency=settings.currency,
        lines=lines,
        promotions=promotions,
        points_earned=result.points_earned,
        ticket_snippet=list(result.snippet_lines),
        location_id=settings.location_id,
        customer_id=settings.customer_id,
        creation_date=request.creation_date or iso_timestamp(now),
        business_name=settings.business_name,
        tpv_id=settings.tpv_id,
    )


def simulate_ticket(payload: Any, settings: Settings, now: Optional[datetime] = None) -> TicketResponse:
    request = parse_request(payload)
    logger.info(
        f"[ticket={request.ticket_id}] SIMULATE lines={len(request.lines)} cashback={request.cashback_to_redeem}"
    )

    result = simulate(request.lines, request.cashback_to_redeem)
    logger.info(
        f"[ticket={request.ticket_id}] total={result.final_total} "
        f"promotions={len(result.promotions_applied)} points={result.points_earned}"
    )
    return build_ticket(request, result, settings, now=now)
