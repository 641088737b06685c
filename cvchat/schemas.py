"""Request and response bodies of the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import config
from .models import ConversationTurn, Role


class TurnModel(BaseModel):
    """A conversation turn as exchanged with the client."""

    role: Role
    content: str

    def to_turn(self) -> ConversationTurn:
        """Convert to the internal turn type."""
        return ConversationTurn(role=self.role, content=self.content)

    @classmethod
    def from_turn(cls, turn: ConversationTurn) -> "TurnModel":
        """Build the wire representation of an internal turn."""
        return cls(role=turn.role, content=turn.content)


class ChatRequest(BaseModel):
    """Body of `POST /chat`; the history is optional and bounded."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(max_length=config.MAX_CONTENT_CHARS)
    conversation_history: list[TurnModel] = Field(
        default_factory=list,
        alias="conversationHistory",
        max_length=config.MAX_HISTORY_TURNS,
    )

    @field_validator("conversation_history")
    @classmethod
    def check_turn_length(cls, turns: list[TurnModel]) -> list[TurnModel]:
        """Reject history turns longer than config.MAX_CONTENT_CHARS.

        Raises:
            ValueError: If a turn is too long.
        """
        for position, turn in enumerate(turns):
            if len(turn.content) > config.MAX_CONTENT_CHARS:
                msg = (
                    f"Turn {position} exceeds {config.MAX_CONTENT_CHARS} characters"
                )
                raise ValueError(msg)
        return turns


class ChatResponse(BaseModel):
    """Successful chat reply with the extended history."""

    model_config = ConfigDict(populate_by_name=True)

    response: str
    conversation_history: list[TurnModel] = Field(alias="conversationHistory")


class ErrorResponse(BaseModel):
    """Fixed failure body; carries no internal error detail."""

    response: str


class HealthResponse(BaseModel):
    """Liveness and readiness report."""

    status: str = "ok"
    initialized: bool
