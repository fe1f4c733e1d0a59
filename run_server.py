from __future__ import annotations

import argparse
import logging

import uvicorn

from cart_sim.api import create_app
from cart_sim.settings import Settings


def main() -> None:
    settings = Settings.from_env()

    p = argparse.ArgumentParser(description="Serve the cart simulation endpoint over HTTP.")
    p.add_argument("--host", type=str, default=settings.host)
    p.add_argument("--port", type=int, default=settings.port)
    p.add_argument("--static-dir", type=str, default=settings.static_dir, help="Directory served at / (e.g. public)")
    p.add_argument("--log-level", type=str, default=settings.log_level)
    args = p.parse_args()

    settings.host = args.host
    settings.port = args.port
    settings.static_dir = args.static_dir
    settings.log_level = args.log_level.upper()

    logging.basicConfig(level=settings.log_level, format="%(message)s")

    app = create_app(settings)
    print(f"Server listening on http://{settings.host}:{settings.port}")
    print("Simulation endpoint: POST /cart/simulate")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
