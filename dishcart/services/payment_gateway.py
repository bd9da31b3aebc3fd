# dishcart/services/payment_gateway.py
from typing import Mapping

import requests
from requests import RequestException

from dishcart.domain.entities import PaymentAuthorization
from dishcart.domain.errors import GatewayRejected, GatewayUnavailable
from dishcart.utils.settings import PAYMENT_TIMEOUT_SECONDS, STRIPE_API_BASE, STRIPE_KEY
from dishcart.utils.logging import get_logger

logger = get_logger(__name__)


class StripeGateway:
    """
    Klient payment intents API (form-encoded, basic auth kluczem).
    Bez retry: jedno wywolanie na checkout.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float = PAYMENT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.api_key = api_key
        self.base_url = (base_url or STRIPE_API_BASE).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def create_authorization(
        self,
        amount_minor_units: int,
        currency: str,
        metadata: Mapping[str, str],
    ) -> PaymentAuthorization:
        url = f"{self.base_url}/v1/payment_intents"
        payload = {"amount": amount_minor_units, "currency": currency.lower()}
        #metadata[address]=..., metadata[dishes]=...
        payload.update({f"metadata[{key}]": value for key, value in metadata.items()})

        logger.info(f"StripeGateway POST {url} amount={amount_minor_units} {currency}")

        try:
            resp = self.session.post(
                url,
                data=payload,
                auth=(self.api_key, ""),
                timeout=self.timeout,
            )
        except RequestException as e:
            raise GatewayUnavailable(f"Payment processor unreachable: {e}") from e

        if resp.status_code >= 500:
            raise GatewayUnavailable(f"Payment processor error (HTTP {resp.status_code})")
        if not resp.ok:
            raise GatewayRejected(self._error_message(resp), status_code=resp.status_code)

        body = resp.json()
        secret = body.get("client_secret")
        if not secret:
            raise GatewayRejected("Payment processor returned no client secret", status_code=resp.status_code)

        return PaymentAuthorization(id=body.get("id"), client_secret=secret)

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        try:
            error = resp.json().get("error") or {}
        except ValueError:
            error = {}
        return error.get("message") or f"Payment authorization declined (HTTP {resp.status_code})"


def build_gateway(api_key: str | None = STRIPE_KEY) -> StripeGateway | None:
    if not api_key:
        return None
    return StripeGateway(api_key)
