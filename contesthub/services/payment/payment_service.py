from typing import Dict, Optional

from contesthub.core import config
from contesthub.models.payment.package import PaymentIntentRequest
from contesthub.services.payment.gateways.factory import PaymentGatewayFactory
from contesthub.services.payment.package_service import find_package
from contesthub.utils.errors import InvalidInput, Unavailable


class PaymentService:
    """Service delegating payments to the configured gateway"""
    
    def __init__(self, gateway_id: str = "stripe", gateway_config: Optional[Dict] = None):
        self.gateway_id = gateway_id
        self.gateway_config = gateway_config
    
    @staticmethod
    def resolve_price(request: PaymentIntentRequest) -> float:
        """Price comes from the package catalog when a package is named"""
        if request.package_id:
            return find_package(request.package_id).price
        return request.price or 0
    
    async def create_payment_intent(self, email: str, request: PaymentIntentRequest) -> Dict:
        price = self.resolve_price(request)
        if price <= 0:
            raise InvalidInput("Price must be greater than 0")
        
        try:
            gateway = PaymentGatewayFactory.get_gateway(self.gateway_id, self.gateway_config)
        except ValueError as e:
            print(f"[WARN] Payment gateway unavailable: {e}")
            raise Unavailable("Payment processor is not configured")
        
        metadata = {"email": email}
        if request.package_id:
            metadata["packageId"] = request.package_id
        
        result = await gateway.create_payment_intent(
            amount=price,
            currency=config.PAYMENT_CURRENCY,
            customer_email=email,
            metadata=metadata
        )
        if not result.success:
            raise Unavailable(result.error_message or "Payment failed")
        
        return {
            "clientSecret": result.client_secret,
            "paymentIntentId": result.payment_intent_id,
            "amount": result.amount,
            "currency": result.currency
        }
