from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import Field

from eventa.errors import InputValidationError
from eventa.models.base import ApiModel
from eventa.utils.pricing import ensure_utc


class EventSummary(ApiModel):
    event_id: int
    event_name: str
    background_url: Optional[str] = None
    min_price: Optional[float] = None
    start_time: Optional[datetime] = None
    category: Optional[str] = None


class EventDetail(ApiModel):
    event_id: int
    event_name: str
    address: Optional[str] = None
    background_url: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    # ticketId (as string, JSON keys) -> ticket type name, e.g. {"1": "VIP"}
    ticket_types: Dict[str, str] = {}
    # Keyed by ticket type name
    ticket_prices: Dict[str, float] = {}
    tickets_total: Dict[str, int] = {}
    tickets_sold: Dict[str, int] = {}

    def type_of(self, ticket_id) -> str:
        try:
            return self.ticket_types[str(ticket_id)]
        except KeyError:
            raise InputValidationError(f"Unknown ticket id {ticket_id} for event {self.event_id}") from None

    def price_of(self, ticket_id) -> float:
        return float(self.ticket_prices.get(self.type_of(ticket_id), 0))

    def remaining(self, ticket_type: str) -> int:
        """Tickets of this type still on sale."""
        total = self.tickets_total.get(ticket_type, 0)
        sold = self.tickets_sold.get(ticket_type, 0)
        return max(0, total - sold)

    def has_started(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return ensure_utc(now) > ensure_utc(self.start_time)

    def price_display(self) -> Optional[float]:
        """
        Price shown on the detail page: the cheapest ticket type that has
        already sold, or the cheapest type overall when nothing has sold yet.
        None means the event is free.
        """
        if not self.ticket_prices:
            return None

        sold_prices = [
            float(price) for ticket_type, price in self.ticket_prices.items()
            if self.tickets_sold.get(ticket_type, 0) > 0
        ]
        if sold_prices:
            return min(sold_prices)
        return min(float(p) for p in self.ticket_prices.values())


class EventPage(ApiModel):
    events: List[EventSummary] = []
    page: int = 1
    total_pages: int = 1
    page_size: int = 10


class Comment(ApiModel):
    comment_id: int
    user_name: Optional[str] = None
    comment_text: str = ""
    created_at: Optional[datetime] = None
    rating: int = Field(default=5, ge=1, le=5)
