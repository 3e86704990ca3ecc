# eventa/flows/discount_applier.py
from typing import Optional

from loguru import logger

from eventa.errors import EventaError, InvalidDiscountError
from eventa.models.promo import DiscountResult
from eventa.services import orders
from eventa.utils.pricing import apply_discount


class DiscountApplier:
    """Checks a promo code with the backend and recomputes the displayed total."""

    def __init__(self, session, event_id: int):
        self.session = session
        self.event_id = event_id
        self.code = ""
        self.result = DiscountResult()
        self.error: Optional[EventaError] = None
        self.pending = False
        self.closed = False

    def set_code(self, text: str):
        # Any edit invalidates the previous check
        self.code = text or ""
        self.result = DiscountResult()
        self.error = None

    def close(self):
        self.closed = True

    async def apply(self, total: float, code: Optional[str] = None) -> Optional[DiscountResult]:
        """
        Validate the current code against `total`.

        Returns None without doing anything while a previous check is still
        pending, and drops the answer if the code changed or the screen went
        away in the meantime.
        """
        if self.pending or self.closed:
            return None
        if code is not None:
            self.set_code(code)

        sent_code = self.code
        self.pending = True
        try:
            check = await orders.validate_discount(self.session, self.event_id, sent_code)
            if not check.valid:
                raise InvalidDiscountError(check.message or "Invalid or expired discount code")
            result = DiscountResult(
                valid=True,
                adjusted_total=apply_discount(total, check.discount_type, check.discount_value),
            )
            error = None
        except EventaError as e:
            logger.info(f"Discount code {sent_code!r} rejected: {e.detail}")
            result, error = DiscountResult(valid=False), e
        finally:
            self.pending = False

        if self.closed or sent_code != self.code:
            return None

        self.result, self.error = result, error
        return result

    def adjusted(self, total: float) -> float:
        if self.result.valid and self.result.adjusted_total is not None:
            return self.result.adjusted_total
        return total
