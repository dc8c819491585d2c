"""
Payment Gateway Factory
Creates payment gateway instances
"""
from typing import Dict, Any, Optional, Type

from contesthub.services.payment.gateways.base import BasePaymentGateway
from contesthub.services.payment.gateways.stripe import StripeGateway


class PaymentGatewayFactory:
    """Factory for creating payment gateway instances"""
    
    # Registry of available gateways
    _gateways: Dict[str, Type[BasePaymentGateway]] = {
        "stripe": StripeGateway,
    }
    
    @classmethod
    def register_gateway(cls, gateway_id: str, gateway_class: Type[BasePaymentGateway]):
        """Register a new payment gateway"""
        cls._gateways[gateway_id] = gateway_class
    
    @classmethod
    def get_available_gateways(cls) -> list:
        """Get list of available gateway IDs"""
        return list(cls._gateways.keys())
    
    @classmethod
    def get_gateway(
        cls,
        gateway_id: str = "stripe",
        config: Optional[Dict[str, Any]] = None
    ) -> BasePaymentGateway:
        """
        Get a payment gateway instance.
        
        Raises:
            ValueError: If gateway is not registered or not configured
        """
        if gateway_id not in cls._gateways:
            raise ValueError(f"Unknown payment gateway: {gateway_id}. Available: {list(cls._gateways.keys())}")
        
        return cls._gateways[gateway_id](config)
