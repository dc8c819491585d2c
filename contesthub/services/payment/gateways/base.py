"""
Base Payment Gateway
Abstract class defining the interface for all payment gateways
"""
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class PaymentIntentResult:
    """Result of creating a payment intent"""
    success: bool
    payment_intent_id: Optional[str] = None
    client_secret: Optional[str] = None
    amount: Optional[int] = None
    currency: Optional[str] = None
    error_message: Optional[str] = None
    raw_response: Optional[Dict[str, Any]] = None


class BasePaymentGateway(ABC):
    """
    Abstract base class for payment gateways.
    All payment gateways must implement these methods.
    """
    
    gateway_id: str = "base"
    gateway_name: str = "Base Gateway"
    
    def __init__(self, config: Dict[str, Any]):
        """
        Initialize gateway with configuration.
        
        Args:
            config: Gateway configuration including API keys, endpoints, etc.
        """
        self.config = config
        self._validate_config()
    
    @abstractmethod
    def _validate_config(self):
        """Validate required configuration parameters"""
        pass
    
    @abstractmethod
    async def create_payment_intent(
        self,
        amount: float,
        currency: str,
        customer_email: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> PaymentIntentResult:
        """
        Create a payment intent the client confirms with its own SDK.
        
        Args:
            amount: Amount in major currency units (e.g. dollars)
            currency: Currency code (usd, eur, etc.)
            customer_email: Customer's email
            metadata: Additional metadata
            
        Returns:
            PaymentIntentResult with the client secret
        """
        pass
    
    @staticmethod
    def to_minor_units(amount: float) -> int:
        """Convert an amount to the smallest currency unit (cents)"""
        return int(round(amount * 100))
