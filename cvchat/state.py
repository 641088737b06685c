"""Process readiness and the one-shot startup sequence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from .config import config
from .dataset import load_corpus
from .embeddings import EmbeddingService
from .similarity_index import DEFAULT_TOP_K, SimilarityIndex

if TYPE_CHECKING:
    from pathlib import Path

    from .models import Corpus, CVRecord

logger = config.get_logger(__name__)


@dataclass(frozen=True)
class NotReady:
    """Startup has not completed; retrieval is unavailable."""

    initialized: ClassVar[bool] = False


@dataclass(frozen=True)
class ReadyState:
    """Loaded corpus and its similarity index, read-only after startup."""

    corpus: Corpus
    index: SimilarityIndex

    initialized: ClassVar[bool] = True

    def find_relevant(self, question: str, k: int = DEFAULT_TOP_K) -> list[CVRecord]:
        """Return up to ``k`` records most relevant to ``question``."""
        record_ids = self.index.query(question, k)
        return [self.corpus.get(record_id) for record_id in record_ids]


AppState = NotReady | ReadyState

NOT_READY = NotReady()


def initialize(
    dataset_path: Path | None = None,
    embedding_service: EmbeddingService | None = None,
) -> ReadyState:
    """Load the corpus and build its index.

    Must succeed before the server accepts traffic.

    Returns:
        The ready state to hand to request handlers.

    Raises:
        StartupError: If the dataset or the index cannot be prepared.
    """
    corpus = load_corpus(dataset_path)
    index = SimilarityIndex.build(corpus, embedding_service or EmbeddingService())
    logger.info("Initialization complete: %d records indexed", index.size)
    return ReadyState(corpus=corpus, index=index)
