# eventa/models/chat.py
from typing import Literal

from eventa.models.base import ApiModel


class ChatMessage(ApiModel):
    sender: Literal["user", "bot"]
    text: str
