"""FAISS-backed similarity index over the CV corpus."""

from __future__ import annotations

from typing import TYPE_CHECKING

import faiss
import numpy as np

from .config import config
from .exceptions import IndexBuildError

if TYPE_CHECKING:
    from .embeddings import EmbeddingService
    from .models import Corpus

DEFAULT_TOP_K = 3

logger = config.get_logger(__name__)


def _normalized(vectors: np.ndarray) -> np.ndarray:
    """Return a C-contiguous float32 copy with L2-normalized rows.

    Normalized rows make inner-product search equivalent to cosine similarity.
    """
    matrix = np.array(vectors, dtype="float32", copy=True, ndmin=2, order="C")
    faiss.normalize_L2(matrix)
    return matrix


class SimilarityIndex:
    """Nearest-neighbour search from free text to corpus record ids."""

    def __init__(
        self,
        embedding_service: EmbeddingService,
        index: faiss.IndexIDMap | None = None,
    ) -> None:
        """Wrap an already populated FAISS index.

        Use ``SimilarityIndex.build`` to create one from a corpus.
        """
        self.embedding_service = embedding_service
        self.index = index

    @property
    def size(self) -> int:
        """Number of vectors held by the index."""
        return 0 if self.index is None else int(self.index.ntotal)

    @classmethod
    def build(
        cls,
        corpus: Corpus,
        embedding_service: EmbeddingService,
    ) -> SimilarityIndex:
        """Embed every record and store the vectors keyed by record id.

        Returns:
            A ready-to-query index.

        Raises:
            IndexBuildError: If embedding or indexing fails.
        """
        records = list(corpus)
        if not records:
            logger.warning("CV corpus is empty; similarity index will return nothing")
            return cls(embedding_service)

        try:
            embeddings = embedding_service.embed_documents(
                [record.search_text for record in records]
            )
            vectors = _normalized(embeddings)
            index = faiss.IndexIDMap(faiss.IndexFlatIP(vectors.shape[1]))
            ids = np.asarray([record.id for record in records], dtype="int64")
            index.add_with_ids(vectors, ids)  # pyright: ignore[reportCallIssue]
        except Exception as e:
            logger.exception("Error building similarity index")
            msg = f"Unable to build similarity index: {e}"
            raise IndexBuildError(msg) from e

        logger.info(
            "Similarity index initialized with %d vectors (dimension %d)",
            index.ntotal,
            index.d,
        )
        return cls(embedding_service, index)

    def query(self, text: str, k: int = DEFAULT_TOP_K) -> list[int]:
        """Return the ids of the ``k`` records most similar to ``text``.

        Errors are logged and reported as no matches.

        Returns:
            Record ids, most relevant first, without duplicates.
        """
        index = self.index
        if k <= 0 or index is None or index.ntotal == 0:
            return []

        try:
            query_vector = _normalized(self.embedding_service.embed_query(text))
            _scores, found = index.search(
                query_vector, min(k, index.ntotal)
            )  # pyright: ignore[reportCallIssue]
        except Exception:
            logger.exception("Error finding relevant examples")
            return []

        ids: list[int] = []
        for raw_id in found[0]:
            record_id = int(raw_id)
            if record_id == -1 or record_id in ids:  # -1 pads missing results
                continue
            ids.append(record_id)
        return ids
