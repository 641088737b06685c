"""CV Chat - retrieval-augmented question answering about a CV."""

from .api import create_app
from .conversation import ConversationOrchestrator
from .dataset import DatasetLoader, load_corpus
from .embeddings import EmbeddingService
from .exceptions import (
    CompletionError,
    CVChatError,
    DatasetError,
    IndexBuildError,
    StartupError,
)
from .models import ChatExchange, ConversationTurn, Corpus, CVRecord
from .prompts import PromptComposer
from .similarity_index import SimilarityIndex
from .state import NOT_READY, NotReady, ReadyState, initialize

__all__ = [
    "NOT_READY",
    "CVChatError",
    "CVRecord",
    "ChatExchange",
    "CompletionError",
    "ConversationOrchestrator",
    "ConversationTurn",
    "Corpus",
    "DatasetError",
    "DatasetLoader",
    "EmbeddingService",
    "IndexBuildError",
    "NotReady",
    "PromptComposer",
    "ReadyState",
    "SimilarityIndex",
    "StartupError",
    "create_app",
    "initialize",
    "load_corpus",
]
