from fastapi import APIRouter, Depends

from contesthub.models.auth.token import TokenData
from contesthub.models.payment.package import PaymentIntentRequest
from contesthub.services.payment.payment_service import PaymentService
from contesthub.routes.auth.dependencies import get_current_user
from contesthub.utils.response import success_response

router = APIRouter(tags=["Payments"])


def get_payment_service() -> PaymentService:
    """Payment service dependency"""
    return PaymentService()


@router.post("/create-payment-intent")
async def create_payment_intent(
    payment_data: PaymentIntentRequest,
    current_user: TokenData = Depends(get_current_user),
    payment_service: PaymentService = Depends(get_payment_service)
):
    """
    Create a Stripe payment intent.
    
    Send either `price` or `packageId`; the client confirms the payment
    with the returned `clientSecret`.
    """
    result = await payment_service.create_payment_intent(current_user.email, payment_data)
    
    return success_response(message="Payment intent created", data=result)
