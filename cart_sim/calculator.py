from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

from cart_sim.models import CartLine, PromotionResult, SimulationResult

logger = logging.getLogger(__name__)

SECOND_UNIT_PROMOTION_ID = 201
SECOND_UNIT_RATE = 0.5
POINTS_PER_EURO = 10

_CENTS = Decimal("0.01")


def format_amount(amount: float) -> str:
    """Two decimals of the exact binary value of ``amount``, ties away from zero."""
    return str(Decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP))


class CartCalculator:
    """
    Prices one cart: "50% off every second unit" per line, then cashback,
    then loyalty points on what is left to pay.

    Amounts are plain floats, so receipts match what a till computing in
    binary floating point prints (0.7 + 0.1 earns 7 points, not 8).

    The calculator holds no state, so one instance can serve any number of
    concurrent requests.
    """

    def simulate(self, lines: Iterable[CartLine], cashback_to_redeem: Optional[float] = None) -> SimulationResult:
        snippet_lines: List[str] = []
        promotions: List[PromotionResult] = []

        subtotal = self._apply_promotions(lines, snippet_lines, promotions)
        total = self._apply_cashback(subtotal, cashback_to_redeem or 0.0, snippet_lines)

        points = self._calculate_points(total)
        if points > 0:
            snippet_lines.append(f"Puntos Acumulados: +{points} pts")

        return SimulationResult(
            final_total=total if total > 0 else 0.0,
            snippet_lines=snippet_lines,
            promotions_applied=promotions,
            points_earned=points,
        )

    def _apply_promotions(
        self,
        lines: Iterable[CartLine],
        snippet_lines: List[str],
        promotions: List[PromotionResult],
    ) -> float:
        subtotal = 0.0
        for line in lines:
            subtotal += line.line_total
            if line.quantity < 2:
                continue

            discounted_units = line.quantity // 2
            discount = discounted_units * (line.price * SECOND_UNIT_RATE)
            subtotal -= discount

            snippet_lines.append(f"Dto. 50% 2ª Ud. (Prod {line.product_id}): -{format_amount(discount)}€")
            promotions.append(
                PromotionResult(
                    promotion_id=SECOND_UNIT_PROMOTION_ID,
                    discount=discount,
                    product_id=line.product_id,
                    description=f"50% discount on {discounted_units} unit(s)",
                )
            )
            logger.debug(
                f"promotion {SECOND_UNIT_PROMOTION_ID} applied: "
                f"product={line.product_id} units={discounted_units} discount={discount}"
            )
        return subtotal

    def _apply_cashback(self, total: float, cashback_to_redeem: float, snippet_lines: List[str]) -> float:
        if cashback_to_redeem <= 0 or total <= 0:
            return total

        # never redeem more than is owed
        actual = min(total, cashback_to_redeem)
        snippet_lines.append(f"Cashback Redimido: -{format_amount(actual)}€")
        logger.debug(f"cashback redeemed: requested={cashback_to_redeem} actual={actual}")
        return total - actual

    def _calculate_points(self, total: float) -> int:
        if total <= 0:
            return 0
        return math.floor(total * POINTS_PER_EURO)


_calculator = CartCalculator()


def simulate(lines: Iterable[CartLine], cashback_to_redeem: Optional[float] = None) -> SimulationResult:
    return _calculator.simulate(lines, cashback_to_redeem)
