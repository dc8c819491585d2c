import httpx
import pytest
import respx

from contesthub.core import config
from contesthub.main import app
from contesthub.routes.payment.payment_routes import get_payment_service
from contesthub.services.payment.payment_service import PaymentService

STRIPE_URL = "https://stripe.test/v1"


@pytest.fixture
def stripe_configured():
    app.dependency_overrides[get_payment_service] = lambda: PaymentService(
        gateway_config={"secret_key": "sk_test_123", "api_url": STRIPE_URL}
    )
    yield
    app.dependency_overrides.pop(get_payment_service, None)


async def test_create_payment_intent(client, member, stripe_configured):
    with respx.mock:
        route = respx.post(f"{STRIPE_URL}/payment_intents").mock(
            return_value=httpx.Response(200, json={
                "id": "pi_1",
                "client_secret": "pi_1_secret",
                "amount": 1000,
                "currency": "usd"
            })
        )

        response = await client.post("/create-payment-intent", json={"packageId": "pro"}, headers=member)

    assert response.status_code == 200
    assert response.json()["data"]["clientSecret"] == "pi_1_secret"
    assert response.json()["data"]["amount"] == 1000
    sent = route.calls.last.request
    assert b"amount=1000" in sent.content
    assert sent.headers["Authorization"].startswith("Basic ")


async def test_payment_intent_with_price(client, member, stripe_configured):
    with respx.mock:
        route = respx.post(f"{STRIPE_URL}/payment_intents").mock(
            return_value=httpx.Response(200, json={"id": "pi_2", "client_secret": "s", "amount": 1250})
        )

        response = await client.post("/create-payment-intent", json={"price": 12.5}, headers=member)

    assert response.status_code == 200
    assert b"amount=1250" in route.calls.last.request.content


async def test_payment_intent_rejects_free_amounts(client, member, stripe_configured):
    zero = await client.post("/create-payment-intent", json={"price": 0}, headers=member)
    starter = await client.post("/create-payment-intent", json={"packageId": "starter"}, headers=member)
    unknown = await client.post("/create-payment-intent", json={"packageId": "gold"}, headers=member)

    assert zero.status_code == 400
    assert starter.status_code == 400
    assert unknown.status_code == 400


async def test_payment_processor_error(client, member, stripe_configured):
    with respx.mock:
        respx.post(f"{STRIPE_URL}/payment_intents").mock(
            return_value=httpx.Response(402, json={"error": {"message": "Your card was declined."}})
        )

        response = await client.post("/create-payment-intent", json={"price": 10}, headers=member)

    assert response.status_code == 503
    assert response.json()["message"] == "Your card was declined."


async def test_payment_processor_unreachable(client, member, stripe_configured):
    with respx.mock:
        respx.post(f"{STRIPE_URL}/payment_intents").mock(side_effect=httpx.ConnectError("down"))

        response = await client.post("/create-payment-intent", json={"price": 10}, headers=member)

    assert response.status_code == 503


async def test_payment_processor_not_configured(client, member, monkeypatch):
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", None)

    response = await client.post("/create-payment-intent", json={"price": 10}, headers=member)

    assert response.status_code == 503
    assert response.json()["message"] == "Payment processor is not configured"


async def test_payment_intent_requires_login(client):
    response = await client.post("/create-payment-intent", json={"price": 10})

    assert response.status_code == 401
