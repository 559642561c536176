"""
Stripe payment intents over the REST API.

Only the two calls the ledger needs: open an intent and read its status.
"""
import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class GatewayError(RuntimeError):
    pass


def _safe_json(resp):
    try:
        return resp.json()
    except ValueError:
        txt = (resp.text or "")[:600]
        raise GatewayError(f"Non-JSON response. HTTP {resp.status_code}. Body: {txt}")


class StripeGateway:

    def __init__(self, secret_key=None, api_base=None, currency=None, timeout=None):
        self.secret_key = settings.STRIPE_SECRET_KEY if secret_key is None else secret_key
        self.api_base = (api_base or settings.STRIPE_API_BASE).rstrip("/")
        self.currency = currency or settings.STRIPE_CURRENCY
        self.timeout = timeout or settings.STRIPE_TIMEOUT

    def _request(self, method, path, data=None):
        if not self.secret_key:
            raise GatewayError("STRIPE_SECRET_KEY is not configured. Please set it in environment variables.")

        try:
            resp = requests.request(
                method,
                f"{self.api_base}{path}",
                data=data,
                auth=(self.secret_key, ""),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise GatewayError(f"Stripe request failed: {e}") from e

        payload = _safe_json(resp)
        if resp.status_code >= 400:
            message = payload.get("error", {}).get("message") if isinstance(payload, dict) else None
            raise GatewayError(f"Stripe {method} {path} failed. HTTP {resp.status_code}. {message or payload}")
        return payload

    def create_intent(self, amount_minor_units, metadata=None):
        """Returns ``{"id": ..., "client_secret": ...}``."""
        data = {
            "amount": int(amount_minor_units),
            "currency": self.currency,
        }
        for key, value in (metadata or {}).items():
            data[f"metadata[{key}]"] = str(value)

        intent = self._request("POST", "/payment_intents", data=data)
        logger.info(f"Opened payment intent {intent.get('id')} for {amount_minor_units} {self.currency}")
        return {"id": intent["id"], "client_secret": intent.get("client_secret")}

    def retrieve_intent(self, intent_id):
        """Returns ``{"id": ..., "status": ..., "amount": ..., "metadata": {...}}``."""
        intent = self._request("GET", f"/payment_intents/{requests.utils.quote(str(intent_id), safe='')}")
        return {
            "id": intent.get("id", intent_id),
            "status": intent.get("status"),
            "amount": intent.get("amount"),
            "metadata": intent.get("metadata") or {},
        }


def get_gateway():
    return StripeGateway()
