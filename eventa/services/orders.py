# eventa/services/orders.py
from loguru import logger
from pydantic import ValidationError

from eventa.api_client import request, unwrap
from eventa.errors import EventaError, InputValidationError
from eventa.models.promo import DiscountCheck
from eventa.models.ticket import OrderDraft, OrderResult


def _parse(model, body):
    try:
        return model.model_validate(body)
    except ValidationError as e:
        logger.error(f"Unexpected {model.__name__} response: {e}")
        raise EventaError("Unexpected response from the server")


async def create_order(session, draft: OrderDraft) -> OrderResult:
    body = await request(
        session.client, "POST", "orders",
        json=draft.to_payload(),
        headers=session.auth_headers(),
        default_error="Could not create the order",
    )
    return _parse(OrderResult, unwrap(body) or {})


async def validate_discount(session, event_id: int, code: str) -> DiscountCheck:
    code = (code or "").strip()
    if not code:
        raise InputValidationError("Please enter a discount code")

    body = await request(
        session.client, "POST", "discounts/validate",
        json={"eventId": event_id, "code": code},
        headers=session.auth_headers(required=False),
        default_error="Invalid discount code",
    )
    return _parse(DiscountCheck, unwrap(body))
