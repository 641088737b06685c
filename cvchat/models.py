"""Data models for the CV chat service."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Literal

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class CVRecord:
    """A single question/answer pair from the CV dataset."""

    id: int
    question: str
    answer: str

    @property
    def search_text(self) -> str:
        """Text that gets embedded for similarity search."""
        return f"{self.question} {self.answer}"


class Corpus:
    """Immutable, ordered collection of CV records addressable by id."""

    def __init__(self, records: Iterable[CVRecord] = ()) -> None:
        """Freeze the records and check that ids are dense and 0-based.

        Raises:
            ValueError: If a record id does not match its position.
        """
        self._records: tuple[CVRecord, ...] = tuple(records)
        for position, record in enumerate(self._records):
            if record.id != position:
                msg = f"Record at position {position} has id {record.id}"
                raise ValueError(msg)

    def get(self, record_id: int) -> CVRecord:
        """Return the record with the given id.

        Raises:
            KeyError: If no record has that id.
        """
        if not 0 <= record_id < len(self._records):
            msg = f"Unknown record id: {record_id}"
            raise KeyError(msg)
        return self._records[record_id]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CVRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"Corpus(records={len(self._records)})"


@dataclass(frozen=True)
class ConversationTurn:
    """Represents a single message in the conversation."""

    role: Role
    content: str

    def to_message(self) -> dict[str, str]:
        """Render the turn in the chat-completions message format."""
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ChatExchange:
    """Outcome of one successful chat request."""

    answer: str
    history: list[ConversationTurn] = field(default_factory=list)
