"""Prompt templates and retrieval-augmented prompt composition."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import config

if TYPE_CHECKING:
    from .state import AppState

logger = config.get_logger(__name__)

SYSTEM_INSTRUCTION = (
    "You are a virtual assistant specialized in answering questions about "
    "{subject}'s CV.\n"
    "Use only the information provided in the examples or in the question to "
    "answer.\n"
    "If information is not available, clearly state so.\n"
    "Focus on {subject}'s skills, experience, and achievements.\n"
    "Respond concisely and professionally."
)

PREAMBLE = "Relevant information from {subject}'s CV:\n\n"

FALLBACK_NOTICE = (
    "No relevant examples could be found. Please answer to the best of your "
    "ability with general information about {subject}.\n\n"
)

EXAMPLE_BLOCK = "Q: {question}\nA: {answer}\n\n"

QUESTION_SUFFIX = "Question: {question}\nAnswer:"


class PromptComposer:
    """Builds the user prompt from retrieved CV examples and the question."""

    def __init__(self, subject: str | None = None, top_k: int | None = None) -> None:
        """Initialize the composer.

        Args:
            subject: Whose CV the dataset describes. Defaults to config.CV_SUBJECT.
            top_k: Maximum number of examples to include. Defaults to
                config.RETRIEVAL_TOP_K.
        """
        self.subject = subject or config.CV_SUBJECT
        self.top_k = top_k if top_k is not None else config.RETRIEVAL_TOP_K

    def system_instruction(self) -> str:
        """Return the fixed system message for this subject."""
        return SYSTEM_INSTRUCTION.format(subject=self.subject)

    def compose(self, question: str, state: AppState) -> str:
        """Compose the prompt sent as the final user turn.

        Returns:
            str: Preamble, retrieved examples (or the fallback notice when the
                index is not ready) and the question.
        """
        prompt = PREAMBLE.format(subject=self.subject)

        if state.initialized:
            examples = state.find_relevant(question, self.top_k)
            logger.debug("Retrieved %d relevant examples", len(examples))
            for example in examples:
                prompt += EXAMPLE_BLOCK.format(
                    question=example.question, answer=example.answer
                )
        else:
            logger.warning("Similarity index not ready; using fallback prompt")
            prompt += FALLBACK_NOTICE.format(subject=self.subject)

        return prompt + QUESTION_SUFFIX.format(question=question)
