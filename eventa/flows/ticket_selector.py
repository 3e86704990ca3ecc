# eventa/flows/ticket_selector.py
from typing import Dict, List, Optional

from loguru import logger

from eventa.errors import InputValidationError
from eventa.flows.screen import CHECKOUT_ROUTE, Screen, ScreenHost
from eventa.models.event import EventDetail
from eventa.models.ticket import CheckoutParams, TicketLine
from eventa.utils.pricing import calculate_total


class TicketSelector(Screen):
    """Per ticket type quantity counters for one visit to the selection screen."""

    def __init__(self, host: ScreenHost, event: EventDetail):
        super().__init__(host)
        self.event = event
        # ticketId -> requested quantity
        self.quantities: Dict[str, int] = {ticket_id: 0 for ticket_id in event.ticket_types}

    def _key(self, ticket_id) -> str:
        key = str(ticket_id)
        if key not in self.quantities:
            raise InputValidationError(f"Unknown ticket type {ticket_id}")
        return key

    def ceiling(self, ticket_id) -> int:
        return self.event.remaining(self.event.type_of(self._key(ticket_id)))

    def increment(self, ticket_id) -> int:
        key = self._key(ticket_id)
        self.quantities[key] = min(self.quantities[key] + 1, self.ceiling(key))
        return self.quantities[key]

    def decrement(self, ticket_id) -> int:
        key = self._key(ticket_id)
        self.quantities[key] = max(0, self.quantities[key] - 1)
        return self.quantities[key]

    @property
    def total_quantity(self) -> int:
        return sum(self.quantities.values())

    @property
    def continue_enabled(self) -> bool:
        return self.total_quantity > 0

    def lines(self) -> List[TicketLine]:
        return [
            TicketLine(ticket_id=int(ticket_id), quantity=quantity)
            for ticket_id, quantity in self.quantities.items()
            if quantity > 0
        ]

    def total(self) -> float:
        return calculate_total(self.lines(), self.event)

    def proceed(self) -> Optional[CheckoutParams]:
        """Hand the selection to the checkout screen."""
        if not self.continue_enabled:
            self.host.alert("Error", "Please choose at least one ticket")
            return None

        params = CheckoutParams(event=self.event, tickets=self.lines())
        logger.debug(f"Checkout for event {self.event.event_id}: {params.tickets}")
        self.host.navigate(CHECKOUT_ROUTE, params)
        return params
