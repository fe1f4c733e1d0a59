from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from cart_sim.schemas import MalformedRequestError
from cart_sim.settings import Settings
from cart_sim.ticket import simulate_ticket


def parse_line(value: str) -> dict:
    """PRODUCT:PRICE:QTY -> request line dict."""
    parts = value.rsplit(":", 2)
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"expected PRODUCT:PRICE:QTY, got {value!r}")
    product, price, qty = parts
    return {
        "product_id": int(product) if product.isdigit() else product,
        "price": price,
        "quantity": qty,
    }


def load_payload(path: str) -> object:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stderr)

    p = argparse.ArgumentParser(description="Simulate one cart ticket and print it as JSON.")
    p.add_argument("--json", dest="json_path", type=str, default=None, help="Request body file ('-' for stdin)")
    p.add_argument("--ticket-id", type=str, default="1")
    p.add_argument("--line", dest="lines", type=parse_line, action="append", default=[],
                   help="Cart line as PRODUCT:PRICE:QTY (repeatable)")
    p.add_argument("--cashback", type=str, default=None, help="Cashback to redeem")
    p.add_argument("--creation-date", type=str, default=None)
    args = p.parse_args(argv)

    if args.json_path:
        payload = load_payload(args.json_path)
    else:
        payload = {
            "ticket_id": args.ticket_id,
            "lines": args.lines,
            "cashback_to_redeem": args.cashback,
            "creation_date": args.creation_date,
        }

    try:
        ticket = simulate_ticket(payload, Settings.from_env())
    except MalformedRequestError as e:
        print(f"error: {e.message}", file=sys.stderr)
        for problem in e.problems:
            print(f"  - {problem}", file=sys.stderr)
        return 2

    print(json.dumps(ticket.to_json_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
