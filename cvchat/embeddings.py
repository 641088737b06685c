"""OpenAI embeddings service."""

import numpy as np
from openai import OpenAI

from .config import config

logger = config.get_logger(__name__)


class EmbeddingService:
    """Turns text into float32 vectors through the OpenAI embeddings API."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        batch_size: int | None = None,
    ) -> None:
        """Initialize the EmbeddingService with OpenAI API key and model.

        Args:
            api_key: OpenAI API key. If None,
                reads from OPENAI_API_KEY environment variable.
            model: Embedding model name. If None, uses config.EMBEDDING_MODEL.
            batch_size: Texts sent per request. If None, uses
                config.EMBEDDING_BATCH_SIZE.
        """
        default_headers = config.get_api_headers()
        self.client = OpenAI(
            api_key=api_key or config.get_openai_api_key(),
            base_url=config.OPENAI_BASE_URL,
            default_headers=default_headers or None,
        )
        self.model = model or config.EMBEDDING_MODEL
        self.batch_size = max(1, batch_size or config.EMBEDDING_BATCH_SIZE)

    def embed_query(self, text: str) -> np.ndarray:
        """Embed a single search query.

        Returns:
            np.ndarray: 1-D float32 embedding vector.
        """
        try:
            response = self.client.embeddings.create(model=self.model, input=text)
        except Exception:
            logger.exception("Error generating query embedding")
            raise
        return np.asarray(response.data[0].embedding, dtype="float32")

    def embed_documents(self, texts: list[str]) -> np.ndarray:
        """Embed many documents, batching the requests.

        Returns:
            np.ndarray: float32 matrix with one row per input text, in order.

        Raises:
            ValueError: If the provider returns a different number of vectors.
        """
        rows: list[list[float]] = []

        for start in range(0, len(texts), self.batch_size):
            batch = texts[start : start + self.batch_size]
            try:
                response = self.client.embeddings.create(model=self.model, input=batch)
            except Exception:
                logger.exception("Error generating document embeddings")
                raise
            rows.extend(item.embedding for item in response.data)
            logger.debug("Embedded batch %d", start // self.batch_size + 1)

        if len(rows) != len(texts):
            msg = f"Expected {len(texts)} embeddings, provider returned {len(rows)}"
            raise ValueError(msg)

        if not rows:
            return np.empty((0, 0), dtype="float32")
        return np.asarray(rows, dtype="float32")
