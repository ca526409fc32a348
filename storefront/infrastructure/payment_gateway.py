"""Razorpay client: remote order creation and payment signature checks."""

from typing import Any, Optional
import hashlib
import hmac
import httpx

from shared.core import get_logger
from storefront.domain.errors import PaymentGatewayError

logger = get_logger(__name__)

class RazorpayGateway:
    def __init__(self, key_id: str, key_secret: str, base_url: str,
                 timeout: float = 10.0, transport: Optional[httpx.BaseTransport] = None):
        self.key_id = key_id
        self.key_secret = key_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.key_id and self.key_secret)

    def create_order(self, amount: int, currency: str, receipt: str) -> dict[str, Any]:
        """``amount`` is in minor units (paise)."""
        if not self.configured:
            raise PaymentGatewayError("Payment gateway is not configured")
        try:
            with httpx.Client(base_url=self.base_url, auth=(self.key_id, self.key_secret),
                              timeout=self.timeout, transport=self.transport) as client:
                response = client.post("/orders", json={
                    "amount": amount,
                    "currency": currency,
                    "receipt": receipt,
                })
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Payment gateway order creation failed: {e}",
                         extra={'extra_fields': {'receipt': receipt}})
            raise PaymentGatewayError() from e
        if not isinstance(data, dict) or not data.get("id"):
            raise PaymentGatewayError("Payment gateway returned no order id")
        return data

    def expected_signature(self, gateway_order_id: str, payment_id: str) -> str:
        message = f"{gateway_order_id}|{payment_id}".encode()
        return hmac.new(self.key_secret.encode(), message, hashlib.sha256).hexdigest()

    def verify_signature(self, gateway_order_id: str, payment_id: str, signature: str) -> bool:
        if not self.configured:
            raise PaymentGatewayError("Payment gateway is not configured")
        return hmac.compare_digest(self.expected_signature(gateway_order_id, payment_id), signature)
