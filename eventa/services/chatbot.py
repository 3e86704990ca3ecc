# eventa/services/chatbot.py
from typing import List

from loguru import logger
from pydantic import ValidationError

from eventa.api_client import request, unwrap
from eventa.errors import InputValidationError
from eventa.models.chat import ChatMessage
from eventa.storage import CHAT_MESSAGES_KEY


async def chat(session, message: str) -> str:
    """Send one message to the support bot and return its answer."""
    if not message or not message.strip():
        raise InputValidationError("Message is empty")

    body = unwrap(await request(
        session.client, "POST", "chat",
        json={"message": message.strip()},
        headers=session.auth_headers(required=False),
        default_error="The assistant is not available right now",
    ))
    if isinstance(body, dict):
        return body.get("reply") or body.get("message") or ""
    return body or ""


async def get_messages(session) -> List[ChatMessage]:
    saved = await session.storage.get_item(CHAT_MESSAGES_KEY, [])
    try:
        return [ChatMessage.model_validate(m) for m in saved]
    except (TypeError, ValidationError) as e:
        logger.warning(f"Clearing unreadable chat history: {e}")
        await clear_messages(session)
        return []


async def save_messages(session, messages: List[ChatMessage]):
    await session.storage.set_item(CHAT_MESSAGES_KEY, [m.model_dump() for m in messages])


async def clear_messages(session):
    await session.storage.remove_item(CHAT_MESSAGES_KEY)


async def _append(session, sender: str, text: str) -> List[ChatMessage]:
    messages = await get_messages(session)
    messages.append(ChatMessage(sender=sender, text=text))
    await save_messages(session, messages)
    return messages


async def add_user_message(session, text: str) -> List[ChatMessage]:
    return await _append(session, "user", text)


async def add_bot_message(session, text: str) -> List[ChatMessage]:
    return await _append(session, "bot", text)


async def send(session, text: str) -> List[ChatMessage]:
    """Record the user's message, ask the bot, record the reply."""
    if not text or not text.strip():
        raise InputValidationError("Message is empty")
    await add_user_message(session, text.strip())
    reply = await chat(session, text)
    return await add_bot_message(session, reply)
