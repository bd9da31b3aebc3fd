"""Payment authorization that precedes order creation.

With no payment gateway configured checkout runs in a degraded mode:
``authorize`` returns ``None`` and the order is stored with an empty token.
With a gateway, the amount is converted to minor units and exactly one
authorization is requested. A failed request is raised to the caller; it
never turns into an empty token.
"""

import json
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

from dishcart.domain.errors import CheckoutError
from dishcart.domain.ports import PaymentGateway
from dishcart.utils.settings import PAYMENT_CURRENCY
from dishcart.utils.logging import get_logger

logger = get_logger(__name__)


def to_minor_units(amount) -> int:
    """Convert a major-unit amount (``12.50``) into minor units (``1250``).

    Floats go through ``str`` so 12.5 does not become 1249.99...
    """
    value = Decimal(str(amount))
    if value <= 0:
        raise ValueError("Order amount must be positive")
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class CheckoutAuthorizer:
    def __init__(self, gateway: Optional[PaymentGateway], currency: str = PAYMENT_CURRENCY):
        self.gateway = gateway
        self.currency = currency

    def authorize(self, address: str, amount, dishes: Sequence[int]) -> Optional[str]:
        """Return the authorization token for an order, or ``None`` when skipped.

        Raises:
            GatewayUnavailable: processor unreachable or failing.
            GatewayRejected: processor declined the authorization.
        """
        if self.gateway is None:
            logger.info("Payment authorization skipped: no payment gateway configured")
            return None

        amount_minor = to_minor_units(amount)
        metadata = {
            "address": address,
            "dishes": json.dumps(list(dishes)),
        }

        try:
            authorization = self.gateway.create_authorization(amount_minor, self.currency, metadata)
        except CheckoutError as e:
            e.operation = e.operation or "checkout.authorize"
            logger.warning(f"Payment authorization failed for {amount_minor} {self.currency}: {e}")
            raise

        logger.info(f"Payment authorized: {authorization.id or '-'} ({amount_minor} {self.currency})")
        return authorization.client_secret
