from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "CART_SIM_"


@dataclass(slots=True)
class Settings:
    """
    Server and ticket settings.

    The ticket fields (location, customer, business, till) are fixed demo
    values echoed in every simulated ticket.
    """

    host: str = "127.0.0.1"
    port: int = 3000
    static_dir: Optional[str] = None
    log_level: str = "INFO"

    currency: str = "EUR"
    location_id: int = 12
    customer_id: int = 8223
    business_name: str = "SuperMarket S.L. Spain"
    tpv_id: str = "A55"
    product_name_template: str = "Producto {product_id}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()

        def get(name: str, default):
            return env.get(ENV_PREFIX + name, default)

        return cls(
            host=get("HOST", defaults.host),
            port=int(get("PORT", defaults.port)),
            static_dir=get("STATIC_DIR", defaults.static_dir) or None,
            log_level=get("LOG_LEVEL", defaults.log_level).upper(),
            currency=get("CURRENCY", defaults.currency),
            location_id=int(get("LOCATION_ID", defaults.location_id)),
            customer_id=int(get("CUSTOMER_ID", defaults.customer_id)),
            business_name=get("BUSINESS_NAME", defaults.business_name),
            tpv_id=get("TPV_ID", defaults.tpv_id),
            product_name_template=get("PRODUCT_NAME_TEMPLATE", defaults.product_name_template),
        )

    def product_name(self, product_id) -> str:
        return self.product_name_template.format(product_id=product_id)
