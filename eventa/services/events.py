# eventa/services/events.py
from datetime import datetime, timezone
from typing import List

from loguru import logger

from eventa.api_client import request, unwrap
from eventa.errors import InputValidationError, NotFoundError
from eventa.models.event import Comment, EventDetail, EventSummary


def _review_to_comment(review: dict) -> Comment:
    return Comment(
        comment_id=review.get("reviewId"),
        user_name=review.get("userFullName"),
        comment_text=review.get("comment") or "",
        created_at=review.get("reviewDate"),
        rating=review.get("rating") or 5,
    )


def _check_rating(rating: int):
    if not 1 <= int(rating) <= 5:
        raise InputValidationError("Rating must be between 1 and 5")


async def get_recommended_events(session, **params) -> List[EventSummary]:
    body = await request(
        session.client, "GET", "events/recommend",
        params=params,
        headers=session.auth_headers(required=False),
    )
    data = unwrap(body) or {}
    events = data.get("listEvents") if isinstance(data, dict) else None
    if not isinstance(events, list) or not events:
        raise NotFoundError("No events found")

    return [EventSummary.model_validate(event) for event in events]


async def get_event_details(session, event_id: int) -> EventDetail:
    body = await request(
        session.client, "GET", f"events/{event_id}",
        headers=session.auth_headers(required=False),
        default_error="Could not load the event.",
    )
    return EventDetail.model_validate(unwrap(body))


async def get_event_comments(session, event_id: int) -> List[Comment]:
    body = await request(
        session.client, "GET", f"review/event/{event_id}",
        headers=session.auth_headers(required=False),
        timeout=5.0,
    )
    data = unwrap(body) or {}
    reviews = data.get("reviewDetails", []) if isinstance(data, dict) else []
    if not isinstance(reviews, list):
        logger.warning(f"reviewDetails is not a list for event {event_id}: {reviews!r}")
        return []

    return [_review_to_comment(review) for review in reviews]


async def post_event_comment(session, event_id: int, rating: int, comment: str) -> Comment:
    _check_rating(rating)
    body = await request(
        session.client, "POST", f"review/upload/{event_id}",
        json={"rating": rating, "comment": comment},
        headers=session.auth_headers(),
        timeout=5.0,
        default_error="Could not post the review.",
    )

    review = unwrap(body)
    if isinstance(review, dict) and review.get("reviewId") is not None:
        return _review_to_comment(review)

    # Backend did not echo the review; show what was sent until the next reload
    return Comment(
        comment_id=int(datetime.now(timezone.utc).timestamp() * 1000),
        user_name=session.user.email,
        comment_text=comment,
        created_at=datetime.now(timezone.utc),
        rating=rating,
    )


async def update_event_comment(session, review_id: int, rating: int, comment: str):
    _check_rating(rating)
    return await request(
        session.client, "PUT", f"review/update/{review_id}",
        json={"rating": rating, "comment": comment},
        headers=session.auth_headers(),
        timeout=5.0,
        default_error="Could not update the review.",
    )
