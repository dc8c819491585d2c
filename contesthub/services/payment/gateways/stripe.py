"""
Stripe Payment Gateway Implementation
Creates PaymentIntents through the Stripe REST API
"""
import httpx
from typing import Dict, Any, Optional

from contesthub.core import config as settings
from contesthub.services.payment.gateways.base import (
    BasePaymentGateway,
    PaymentIntentResult
)


class StripeGateway(BasePaymentGateway):
    """Stripe Payment Gateway Implementation"""
    
    gateway_id = "stripe"
    gateway_name = "Stripe"
    
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize Stripe gateway"""
        merged = {
            "secret_key": settings.STRIPE_SECRET_KEY,
            "api_url": settings.STRIPE_API_URL,
            "timeout": 30.0,
        }
        if config is not None:
            merged.update({k: v for k, v in config.items() if v is not None})
        
        super().__init__(merged)
        
        self.secret_key = merged["secret_key"]
        self.api_url = merged["api_url"].rstrip("/")
        self.timeout = merged["timeout"]
    
    def _validate_config(self):
        """Validate required Stripe configuration"""
        if not self.config.get("secret_key"):
            raise ValueError("STRIPE_SECRET_KEY is required")
    
    async def create_payment_intent(
        self,
        amount: float,
        currency: str,
        customer_email: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> PaymentIntentResult:
        """Create a card PaymentIntent"""
        amount_minor = self.to_minor_units(amount)
        form = {
            "amount": str(amount_minor),
            "currency": currency,
            "payment_method_types[]": "card",
            "receipt_email": customer_email,
        }
        for key, value in (metadata or {}).items():
            form[f"metadata[{key}]"] = str(value)
        
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.api_url}/payment_intents",
                    data=form,
                    auth=(self.secret_key, "")
                )
        except httpx.HTTPError as e:
            print(f"[ERROR] Stripe request failed: {e}")
            return PaymentIntentResult(success=False, error_message="Payment processor unreachable")
        
        try:
            body = response.json()
        except ValueError:
            body = {}
        
        if response.status_code != 200:
            error = body.get("error", {}) if isinstance(body, dict) else {}
            return PaymentIntentResult(
                success=False,
                error_message=error.get("message") or f"Stripe returned {response.status_code}",
                raw_response=body
            )
        
        return PaymentIntentResult(
            success=True,
            payment_intent_id=body.get("id"),
            client_secret=body.get("client_secret"),
            amount=body.get("amount", amount_minor),
            currency=body.get("currency", currency),
            raw_response=body
        )
