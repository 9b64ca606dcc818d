import logging
from typing import List

from cyberguard.core.constants import Sender
from cyberguard.core.prompts import CHAT_PROMPT
from cyberguard.core.schemas import ChatMessage, ChatRequest, ChatResult, validate_chat_request
from cyberguard.flows.base import BaseFlow
from cyberguard.llm.generator import StructuredGenerator

logger = logging.getLogger(__name__)


class ChatFlow(BaseFlow[ChatRequest, ChatResult]):
    """Single-turn chat: only the latest message reaches the model."""

    name = "chat"
    template = CHAT_PROMPT
    output_schema = ChatResult

    def validate(self, data):
        return validate_chat_request(data)

    def _prompt_values(self, request: ChatRequest):
        return {"message": request.message}


class ChatSession:
    """Conversation history for one chat session.

    The session keeps the transcript; the flow underneath still sees only
    the latest message. The user's message is appended before the call
    and removed again if the call fails.
    """

    def __init__(self, generator: StructuredGenerator):
        self.flow = ChatFlow(generator)
        self._messages: List[ChatMessage] = []
        self.pending = False

    @property
    def messages(self) -> List[ChatMessage]:
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    async def send(self, text: str) -> ChatMessage:
        """Send ``text`` and record both sides of the exchange.

        Raises whatever the flow raises, after rolling back the
        optimistic user message.
        """
        if self.pending:
            raise RuntimeError("A message is already awaiting a response")

        request = validate_chat_request({"message": text})
        self._messages.append(ChatMessage(sender=Sender.USER, text=text))
        self.pending = True
        try:
            result = await self.flow.run(request)
        except Exception:
            logger.warning("Chat call failed; removing the unanswered message")
            self._messages.pop()
            raise
        finally:
            self.pending = False

        reply = ChatMessage(sender=Sender.ASSISTANT, text=result.response)
        self._messages.append(reply)
        return reply

    def clear(self) -> None:
        self._messages.clear()


async def chat(request, generator: StructuredGenerator) -> ChatResult:
    return await ChatFlow(generator).run(request)
