# eventa/models/ticket.py
from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator, model_validator

from eventa.config import PAYMENT_CANCEL_URL, PAYMENT_SUCCESS_URL
from eventa.models.base import ApiModel
from eventa.models.event import EventDetail


class TicketLine(ApiModel):
    ticket_id: int
    quantity: int = Field(gt=0)


class OrderDraft(ApiModel):
    """Payload for POST /orders. Built right before submission and never mutated."""

    model_config = ConfigDict(frozen=True)

    event_id: int
    tickets: List[TicketLine] = Field(min_length=1)
    discount_code: Optional[str] = None
    # Where the payment provider sends the user back to
    return_url: str = PAYMENT_SUCCESS_URL
    cancel_url: str = PAYMENT_CANCEL_URL

    @field_validator("discount_code")
    def blank_code_is_no_code(cls, v):
        if v is None or not v.strip():
            return None
        return v.strip()


class CheckoutParams(ApiModel):
    """What the ticket selection screen hands to the checkout screen."""

    event: EventDetail
    tickets: List[TicketLine] = Field(min_length=1)

    @model_validator(mode="after")
    def tickets_belong_to_event(self):
        for line in self.tickets:
            if str(line.ticket_id) not in self.event.ticket_types:
                raise ValueError(f"Ticket {line.ticket_id} is not sold for event {self.event.event_id}")
        return self


class OrderResult(ApiModel):
    order_id: Optional[int] = None
    checkout_url: Optional[str] = None
