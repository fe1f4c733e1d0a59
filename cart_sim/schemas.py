"""Request and response shapes of the cart simulation endpoint."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cart_sim.models import CartLine, TicketRequest

MALFORMED_REQUEST_MESSAGE = (
    "Missing or invalid required data: a ticket_id and a non-empty array of lines are required."
)


class MalformedRequestError(ValueError):
    def __init__(self, message: str = MALFORMED_REQUEST_MESSAGE, problems: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.problems = problems or []


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

class CartLineIn(BaseModel):
    product_id: Any
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)

    def to_cart_line(self) -> CartLine:
        return CartLine(product_id=self.product_id, price=self.price, quantity=self.quantity)


class SimulateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ticket_id: Any
    creation_date: Optional[str] = None
    lines: List[CartLineIn] = Field(..., min_length=1)
    cashback_to_redeem: Optional[float] = None

    @field_validator("ticket_id", mode="before")
    @classmethod
    def _ticket_id_present(cls, value: Any) -> Any:
        if not value:
            raise ValueError("ticket_id must not be empty")
        return value

    def to_ticket_request(self) -> TicketRequest:
        return TicketRequest(
            ticket_id=self.ticket_id,
            lines=[line.to_cart_line() for line in self.lines],
            cashback_to_redeem=self.cashback_to_redeem or 0.0,
            creation_date=self.creation_date,
        )


def parse_request(payload: Any) -> TicketRequest:
    """Validate a decoded JSON body and turn it into a ``TicketRequest``.

    Raises ``MalformedRequestError`` listing every problem found.
    """
    if not isinstance(payload, dict):
        raise MalformedRequestError(problems=["body: expected a JSON object"])
    try:
        request = SimulateRequest.model_validate(payload)
    except ValidationError as exc:
        problems = [
            f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
            for err in exc.errors()
        ]
        raise MalformedRequestError(problems=problems) from exc
    return request.to_ticket_request()


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------

class TicketLine(BaseModel):
    order: int
    product_id: Any
    tot_line: float
    quantity: int
    product_name: str


class TicketPromotion(BaseModel):
    promotion_id: int
    discount: float
    product_id: Any
    description: str


class TicketResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Any
    code: str
    total: float
    currency: str
    lines: List[TicketLine]
    promotions: List[TicketPromotion]
    points_earned: int
    ticket_snippet: List[str] = Field(default_factory=list, alias="TicketSnippet")
    location_id: int
    customer_id: int
    creation_date: str
    business_name: str
    tpv_id: str

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class ErrorResponse(BaseModel):
    error: str
    details: List[str] = Field(default_factory=list)
