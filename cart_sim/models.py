from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

# product and ticket ids are whatever the client sends (numbers or strings)
Identifier = Any


@dataclass(frozen=True, slots=True)
class CartLine:
    product_id: Identifier
    price: float
    quantity: int

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@dataclass(slots=True)
class PromotionResult:
    promotion_id: int
    discount: float
    product_id: Identifier
    description: str

    def to_dict(self) -> dict:
        return {
            "promotion_id": self.promotion_id,
            "discount": self.discount,
            "product_id": self.product_id,
            "description": self.description,
        }


@dataclass(slots=True)
class SimulationResult:
    final_total: float
    snippet_lines: List[str] = field(default_factory=list)
    promotions_applied: List[PromotionResult] = field(default_factory=list)
    points_earned: int = 0


@dataclass(slots=True)
class TicketRequest:
    """
    Validated request for one ticket simulation.
    Nothing is stored: the request is built, priced and thrown away.
    """

    ticket_id: Identifier
    lines: List[CartLine]
    cashback_to_redeem: float = 0.0
    creation_date: Optional[str] = None
