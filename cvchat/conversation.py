"""Conversation orchestration around the chat-completion API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from openai import OpenAI, OpenAIError

from .config import config
from .exceptions import CompletionError
from .models import ChatExchange, ConversationTurn
from .prompts import PromptComposer

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .state import AppState

logger = config.get_logger(__name__)


class ConversationOrchestrator:
    """Answers one user message given the client-held conversation history.

    The orchestrator keeps no history of its own: every call receives the
    prior turns and returns a new, extended list.
    """

    def __init__(
        self,
        composer: PromptComposer | None = None,
        openai_api_key: str | None = None,
        model: str | None = None,
    ) -> None:
        """Initialize ConversationOrchestrator.

        Args:
            composer: Prompt composer. Defaults to a composer built from config.
            openai_api_key: OpenAI API key.
            model: Chat model name. If None, uses config.CHAT_MODEL.
        """
        self.composer = composer or PromptComposer()
        default_headers = config.get_api_headers()
        self.client = OpenAI(
            api_key=openai_api_key or config.get_openai_api_key(),
            base_url=config.OPENAI_BASE_URL,
            default_headers=default_headers or None,
        )
        self.model = model or config.CHAT_MODEL

    def build_messages(
        self, prompt: str, history: Sequence[ConversationTurn]
    ) -> list[dict[str, str]]:
        """Assemble system instruction, prior turns and the composed prompt.

        Returns:
            list[dict[str, str]]: Messages in chat-completions format.
        """
        return [
            {"role": "system", "content": self.composer.system_instruction()},
            *(turn.to_message() for turn in history),
            {"role": "user", "content": prompt},
        ]

    def complete(self, messages: list[dict[str, str]]) -> str:
        """Send the messages to the completion API and return the reply text.

        Raises:
            CompletionError: If the call fails or the response has no text.
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,  # pyright: ignore[reportArgumentType]
                max_tokens=config.CHAT_MAX_TOKENS,
                temperature=config.CHAT_TEMPERATURE,
                top_p=config.CHAT_TOP_P,
                presence_penalty=config.CHAT_PRESENCE_PENALTY,
                frequency_penalty=config.CHAT_FREQUENCY_PENALTY,
            )
            content = response.choices[0].message.content
        except (OpenAIError, IndexError, AttributeError, TypeError) as e:
            logger.exception("Chat completion failed")
            msg = "Chat completion request failed"
            raise CompletionError(msg) from e

        if not isinstance(content, str):
            msg = "Chat completion returned no text content"
            logger.error(msg)
            raise CompletionError(msg)
        return content.strip()

    def respond(
        self,
        user_message: str,
        history: Sequence[ConversationTurn],
        state: AppState,
    ) -> ChatExchange:
        """Answer ``user_message`` and extend the history by one exchange.

        Returns:
            ChatExchange: The answer and a new history list; ``history`` itself
                is never modified.
        """
        logger.info("Received message: %s", user_message)

        prompt = self.composer.compose(user_message, state)
        answer = self.complete(self.build_messages(prompt, history))
        logger.info("AI response: %s", answer)

        return ChatExchange(
            answer=answer,
            history=[
                *history,
                ConversationTurn(role="user", content=user_message),
                ConversationTurn(role="assistant", content=answer),
            ],
        )
