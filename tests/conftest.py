"""Test configuration and fixtures for CV chat tests.

This module provides reusable test fixtures organized by functionality:
- Constants and test data
- Mock services and API responses
- Corpus and similarity index fixtures
- Conversation orchestrator fixtures
- HTTP client fixtures
"""

import hashlib
import json
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import Mock, patch

import numpy as np
import pytest
from fastapi.testclient import TestClient

from cvchat import (
    NOT_READY,
    ConversationOrchestrator,
    Corpus,
    CVRecord,
    EmbeddingService,
    PromptComposer,
    ReadyState,
    SimilarityIndex,
    create_app,
)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
TEST_DATA_DIR = PROJECT_ROOT / "tests" / "data"


class TestConstants:
    """Centralized test constants shared across the suite."""

    TEST_API_KEY = "test-key"
    TEST_EMBEDDING_MODEL = "text-embedding-3-small"
    TEST_SUBJECT = "Mathieu Vialatte"
    DEFAULT_EMBEDDING_DIMENSION = 64


class MockEmbeddingService:
    """Mock embedding service for testing without API calls.

    Generates deterministic embeddings based on text content hash,
    ensuring consistent test results across runs.
    """

    def __init__(
        self, dimension: int = TestConstants.DEFAULT_EMBEDDING_DIMENSION
    ) -> None:
        self.dimension = dimension
        self.query_calls: list[str] = []

    def embed_query(self, text: str) -> np.ndarray:
        """Generate deterministic mock embedding based on text hash."""
        self.query_calls.append(text)
        seed = int.from_bytes(
            hashlib.sha256(text.lower().encode("utf-8")).digest()[:8],
            byteorder="big",
            signed=False,
        )
        rng = np.random.default_rng(seed)
        embedding = rng.normal(0, 1, self.dimension)
        return (embedding / np.linalg.norm(embedding)).astype(np.float32)

    def embed_documents(self, texts: list[str]) -> np.ndarray:
        """Generate a matrix of mock embeddings."""
        return np.vstack([self.embed_query(text) for text in texts])


def create_mock_openai_response(embeddings: list[list[float]]) -> Mock:
    """Create a mock OpenAI embeddings API response."""
    mock_response = Mock()
    mock_response.data = [Mock(embedding=emb) for emb in embeddings]
    return mock_response


def create_mock_chat_response(content: str | None) -> Mock:
    """Create a mock OpenAI chat completion response."""
    mock_response = Mock()
    mock_response.choices = [Mock(message=Mock(content=content))]
    return mock_response


@pytest.fixture
def openai_embeddings_api_mock():
    """Patch the OpenAI embeddings.create method."""
    with patch("openai.resources.embeddings.Embeddings.create") as mock_create:
        yield mock_create


@pytest.fixture
def embedding_service_factory():
    """Factory for creating EmbeddingService instances."""

    def _create_service(api_key=None, model=None, batch_size=None):  # noqa: ANN202
        return EmbeddingService(
            api_key=api_key or TestConstants.TEST_API_KEY,
            model=model,
            batch_size=batch_size,
        )

    return _create_service


@pytest.fixture
def embedding_service(embedding_service_factory):
    """Default EmbeddingService with test API key."""
    return embedding_service_factory()


@pytest.fixture
def mock_embedding_service():
    """Fresh MockEmbeddingService per test."""
    return MockEmbeddingService()


@pytest.fixture(scope="session")
def dataset_path():
    """Path to the read-only sample CV dataset."""
    return TEST_DATA_DIR / "cv_dataset.json"


@pytest.fixture
def write_dataset(tmp_path):
    """Write arbitrary content to a temporary dataset file."""

    def _write(content, name: str = "cv_dataset.json") -> Path:
        path = tmp_path / name
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def corpus_factory():
    """Build a corpus from (question, answer) pairs."""

    def _create_corpus(pairs: list[tuple[str, str]]) -> Corpus:
        return Corpus(
            CVRecord(id=i, question=question, answer=answer)
            for i, (question, answer) in enumerate(pairs)
        )

    return _create_corpus


@pytest.fixture
def sample_corpus(corpus_factory):
    return corpus_factory([
        ("What languages does Mathieu know?", "Python, JavaScript, Go."),
        ("Where did Mathieu study?", "Mathieu studied computer science in France."),
        ("What are Mathieu's hobbies?", "Mathieu enjoys hiking and photography."),
        ("Which cloud platforms does Mathieu use?", "AWS and Google Cloud."),
    ])


@pytest.fixture
def sample_index(sample_corpus, mock_embedding_service):
    return SimilarityIndex.build(sample_corpus, mock_embedding_service)


@pytest.fixture
def ready_state(sample_corpus, sample_index):
    return ReadyState(corpus=sample_corpus, index=sample_index)


@pytest.fixture
def composer():
    return PromptComposer(subject=TestConstants.TEST_SUBJECT, top_k=3)


@pytest.fixture
def orchestrator(composer):
    return ConversationOrchestrator(
        composer=composer, openai_api_key=TestConstants.TEST_API_KEY
    )


@pytest.fixture
def chat_mock_factory():
    """Factory mock fixture for the orchestrator's chat.completions.create."""

    @contextmanager
    def _mock_chat(  # noqa: ANN202
        orchestrator, content: str | None = "Test response", side_effect=None
    ):
        with patch.object(orchestrator.client.chat.completions, "create") as mock:
            if side_effect is not None:
                mock.side_effect = side_effect
                mock.return_value = None
            else:
                mock.side_effect = None
                mock.return_value = create_mock_chat_response(content)
            yield mock

    return _mock_chat


@pytest.fixture
def app_factory(orchestrator):
    """Create an application wired to the test orchestrator."""

    def _create_app(ready_state=None, initializer=None):  # noqa: ANN202
        return create_app(
            ready_state=ready_state,
            orchestrator=orchestrator,
            initializer=initializer,
        )

    return _create_app


@pytest.fixture
def not_ready_client(app_factory):
    """Client whose app never finished startup."""
    return TestClient(app_factory(ready_state=NOT_READY))


@pytest.fixture
def ready_client(app_factory, ready_state):
    """Client whose app was handed a ready state."""
    with TestClient(app_factory(ready_state=ready_state)) as client:
        yield client
