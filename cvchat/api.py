"""FastAPI application exposing the chat and health endpoints."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import config
from .conversation import ConversationOrchestrator
from .exceptions import CompletionError
from .schemas import ChatRequest, ChatResponse, ErrorResponse, HealthResponse, TurnModel
from .state import NOT_READY, initialize

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from .state import AppState, ReadyState

GENERIC_ERROR_MESSAGE = "Sorry, an error occurred while processing your request."

logger = config.get_logger(__name__)


def create_app(
    ready_state: AppState | None = None,
    orchestrator: ConversationOrchestrator | None = None,
    initializer: Callable[[], ReadyState] | None = initialize,
) -> FastAPI:
    """Build the application.

    Args:
        ready_state: State produced by an earlier ``initialize()`` call. When
            omitted, ``initializer`` runs during the lifespan startup and any
            exception it raises aborts server startup.
        orchestrator: Conversation orchestrator. Defaults to one built from config.
        initializer: Startup routine; ``None`` skips initialization.

    Returns:
        FastAPI: The configured application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if not app.state.ready_state.initialized and initializer is not None:
            app.state.ready_state = initializer()
            logger.info("Service ready")
        yield

    app = FastAPI(
        title="CV Chat",
        description="Answers questions about a CV with retrieval-augmented prompts",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.ready_state = ready_state or NOT_READY
    app.state.orchestrator = orchestrator or ConversationOrchestrator()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def unexpected_error(_request: Request, _exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error while processing request")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(response=GENERIC_ERROR_MESSAGE).model_dump(),
        )

    @app.post(
        "/chat",
        response_model=ChatResponse,
        responses={500: {"model": ErrorResponse}},
    )
    def chat(payload: ChatRequest, request: Request) -> ChatResponse | JSONResponse:
        history = [turn.to_turn() for turn in payload.conversation_history]
        try:
            exchange = request.app.state.orchestrator.respond(
                payload.message, history, request.app.state.ready_state
            )
        except CompletionError:
            logger.exception("An error occurred while answering")
            return JSONResponse(
                status_code=500,
                content=ErrorResponse(response=GENERIC_ERROR_MESSAGE).model_dump(),
            )

        return ChatResponse(
            response=exchange.answer,
            conversation_history=[TurnModel.from_turn(t) for t in exchange.history],
        )

    @app.get("/health", response_model=HealthResponse)
    def health(request: Request) -> HealthResponse:
        return HealthResponse(initialized=request.app.state.ready_state.initialized)

    return app
