# eventa/flows/checkout.py
import asyncio
import time
from collections import Counter
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from loguru import logger
from pydantic import BaseModel

from eventa.config import PAYMENT_CANCEL_URL, PAYMENT_SUCCESS_URL, RESERVATION_MINUTES
from eventa.errors import (
    EventaError,
    InputValidationError,
    InsufficientInventoryError,
    SaleClosedError,
)
from eventa.flows.discount_applier import DiscountApplier
from eventa.flows.reservation_timer import ReservationTimer, TimerState
from eventa.flows.screen import MY_TICKETS_ROUTE, Screen, ScreenHost
from eventa.models.event import EventDetail
from eventa.models.promo import DiscountResult
from eventa.models.ticket import CheckoutParams, OrderDraft, OrderResult
from eventa.services import orders
from eventa.utils.pricing import calculate_total


class CheckoutOutcome(str, Enum):
    PAYMENT_REDIRECT = "payment_redirect"
    SUCCESS = "success"


class PaymentOutcome(str, Enum):
    SUCCESS = "success"
    CANCELLED = "cancelled"


class CheckoutResult(BaseModel):
    outcome: CheckoutOutcome
    order: OrderResult
    checkout_url: Optional[str] = None


class PaymentRedirect:
    """The payment provider page shown inside the app."""

    def __init__(self, url: str, success_url: str = PAYMENT_SUCCESS_URL, cancel_url: str = PAYMENT_CANCEL_URL):
        self.url = url
        self.success_url = success_url
        self.cancel_url = cancel_url

    def on_navigation(self, url: str) -> Optional[PaymentOutcome]:
        """Match each page the provider navigates to against the callback URLs."""
        self.url = url
        if url.startswith(self.success_url):
            return PaymentOutcome.SUCCESS
        if url.startswith(self.cancel_url):
            return PaymentOutcome.CANCELLED
        return None


class CheckoutSubmitter:
    """Validates an order locally and posts it, one submission at a time."""

    def __init__(self, session, now: Callable[[], datetime] = lambda: datetime.now(timezone.utc)):
        self.session = session
        self._now = now
        self.submitting = False

    def validate(self, draft: OrderDraft, event: EventDetail):
        if draft.event_id != event.event_id:
            raise InputValidationError("Ticket and event information do not match")

        if event.has_started(self._now()):
            raise SaleClosedError("Ticket sales for this event have ended")

        requested = Counter()
        for line in draft.tickets:
            requested[event.type_of(line.ticket_id)] += line.quantity
        for ticket_type, quantity in requested.items():
            available = event.remaining(ticket_type)
            if quantity > available:
                raise InsufficientInventoryError(ticket_type, available)

        self.session.auth_headers()

    async def submit(self, draft: OrderDraft, event: EventDetail) -> Optional[CheckoutResult]:
        if self.submitting:
            logger.debug("Order submission already in flight, ignoring")
            return None

        self.submitting = True
        try:
            self.validate(draft, event)
            order = await orders.create_order(self.session, draft)
        finally:
            self.submitting = False

        if order.checkout_url:
            return CheckoutResult(outcome=CheckoutOutcome.PAYMENT_REDIRECT, order=order, checkout_url=order.checkout_url)
        return CheckoutResult(outcome=CheckoutOutcome.SUCCESS, order=order)


class CheckoutScreen(Screen):
    """
    Checkout for one ticket selection: reservation countdown, optional
    discount code, order submission and the embedded payment page.
    """

    def __init__(
        self,
        host: ScreenHost,
        session,
        params: CheckoutParams,
        duration: float = RESERVATION_MINUTES * 60,
        clock: Callable[[], float] = time.monotonic,
        sleep=asyncio.sleep,
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        on_tick: Optional[Callable[[int, int], None]] = None,
    ):
        super().__init__(host)
        self.session = session
        self.params = params
        self.timer = ReservationTimer(self._on_expire, duration=duration, on_tick=on_tick, clock=clock, sleep=sleep)
        self.discount = DiscountApplier(session, params.event.event_id)
        self.submitter = CheckoutSubmitter(session, now=now)
        self.payment: Optional[PaymentRedirect] = None
        self.completed = False

    def mount(self):
        super().mount()
        self.timer.start()

    def unmount(self):
        super().unmount()
        self.timer.cancel()
        self.discount.close()

    @property
    def event(self) -> EventDetail:
        return self.params.event

    @property
    def subtotal(self) -> float:
        return calculate_total(self.params.tickets, self.event)

    @property
    def total(self) -> float:
        return self.discount.adjusted(self.subtotal)

    @property
    def pay_enabled(self) -> bool:
        return (
            self.mounted
            and not self.completed
            and not self.submitter.submitting
            and self.payment is None
            and self.timer.state != TimerState.EXPIRED
        )

    def time_left(self) -> str:
        return self.timer.display()

    def set_discount_code(self, text: str):
        self.discount.set_code(text)

    async def apply_discount(self, code: Optional[str] = None) -> Optional[DiscountResult]:
        result = await self.discount.apply(self.subtotal, code)
        if result is None or not self.mounted:
            return None
        if self.discount.error is not None:
            self.report(self.discount.error)
        return result

    async def pay(self) -> Optional[CheckoutResult]:
        if not self.pay_enabled:
            return None

        draft = OrderDraft(
            event_id=self.event.event_id,
            tickets=self.params.tickets,
            discount_code=self.discount.code or None,
        )
        try:
            result = await self.submitter.submit(draft, self.event)
        except EventaError as e:
            logger.error(f"Checkout failed for event {self.event.event_id}: {e.detail}")
            if self.mounted:
                self.report(e)
            return None

        if result is None or not self.mounted:
            # Screen left while the order was being created
            return None

        if result.outcome == CheckoutOutcome.PAYMENT_REDIRECT:
            self.payment = PaymentRedirect(result.checkout_url)
        else:
            self._complete()
        return result

    def on_payment_navigation(self, url: str) -> Optional[PaymentOutcome]:
        if self.payment is None:
            return None

        outcome = self.payment.on_navigation(url)
        if outcome == PaymentOutcome.SUCCESS:
            self.payment = None
            self._complete()
        elif outcome == PaymentOutcome.CANCELLED:
            self.payment = None
            self.host.alert("Notice", "Payment was cancelled.")
        return outcome

    def close_payment(self):
        """Back button on the payment page."""
        self.payment = None

    def _complete(self):
        self.completed = True
        self.timer.cancel()
        self.host.alert("Success", "Payment completed!")
        self.host.navigate(MY_TICKETS_ROUTE)

    def _on_expire(self):
        if self.completed:
            return
        self.payment = None
        self.host.alert("Time is up", "Your ticket reservation time has run out. Please try again.")
        self.host.go_back()
        self.unmount()
