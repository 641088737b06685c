"""Configuration management for the CV chat service."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / ".env"

if env_path.exists():
    load_dotenv(env_path)


class Config:
    """Application configuration loaded from environment variables."""

    # OpenAI Configuration
    @classmethod
    def get_openai_api_key(cls) -> str:
        """Get OpenAI API key from environment variables.

        Returns:
            OpenAI API key from environment or empty string if not set.
        """
        return os.getenv("OPENAI_API_KEY", "")

    OPENAI_BASE_URL: str | None = os.getenv("OPENAI_BASE_URL")

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    OPENAI_LOG_LEVEL: str = os.getenv("OPENAI_LOG_LEVEL", "WARNING").upper()

    # Dataset Configuration
    CV_SUBJECT: str = os.getenv("CV_SUBJECT", "Mathieu Vialatte")
    CV_DATASET_PATH: Path = Path(os.getenv("CV_DATASET_PATH", "data/cv_dataset.json"))

    # Retrieval Configuration
    EMBEDDING_MODEL: str = os.getenv("EMBEDDING_MODEL", "text-embedding-3-small")
    EMBEDDING_BATCH_SIZE: int = int(os.getenv("EMBEDDING_BATCH_SIZE", "100"))
    RETRIEVAL_TOP_K: int = int(os.getenv("RETRIEVAL_TOP_K", "3"))

    # Chat Model Configuration
    CHAT_MODEL: str = os.getenv("CHAT_MODEL", "gpt-4-turbo-preview")
    CHAT_MAX_TOKENS: int = int(os.getenv("CHAT_MAX_TOKENS", "250"))
    CHAT_TEMPERATURE: float = float(os.getenv("CHAT_TEMPERATURE", "0.5"))
    CHAT_TOP_P: float = float(os.getenv("CHAT_TOP_P", "0.9"))
    CHAT_PRESENCE_PENALTY: float = float(os.getenv("CHAT_PRESENCE_PENALTY", "0.6"))
    CHAT_FREQUENCY_PENALTY: float = float(os.getenv("CHAT_FREQUENCY_PENALTY", "0.2"))

    # Request Limits
    MAX_HISTORY_TURNS: int = int(os.getenv("MAX_HISTORY_TURNS", "50"))
    MAX_CONTENT_CHARS: int = int(os.getenv("MAX_CONTENT_CHARS", "8000"))

    # HTTP Server Configuration
    HOST: str = os.getenv("HOST", "0.0.0.0")  # noqa: S104
    PORT: int = int(os.getenv("PORT", "8000"))
    CORS_ALLOW_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    # API Header Configuration
    API_USER_AGENT: str = os.getenv("API_USER_AGENT", "CVChat/1.0")

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration values.

        Raises:
            ValueError: If OPENAI_API_KEY is not set or a limit is not positive.
        """
        if not cls.get_openai_api_key():
            msg = (
                "OPENAI_API_KEY is required. Please set it in .env file or environment."
            )
            raise ValueError(msg)
        if cls.RETRIEVAL_TOP_K < 1:
            msg = f"RETRIEVAL_TOP_K must be at least 1, got {cls.RETRIEVAL_TOP_K}"
            raise ValueError(msg)

    @classmethod
    def setup_logging(cls) -> None:
        """Setup basic logging configuration.

        Configure logging once at process startup with:
        - Console output for all levels
        - Simple, readable format
        - Configurable level via environment variable
        """
        logging.basicConfig(
            level=getattr(logging, cls.LOG_LEVEL, logging.INFO),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )

        # Third-party client chatter is tuned separately
        logging.getLogger("openai").setLevel(
            getattr(logging, cls.OPENAI_LOG_LEVEL, logging.WARNING)
        )

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger with the specified name.

        Args:
            name: Logger name (typically __name__)

        Returns:
            Logger instance
        """
        return logging.getLogger(name)

    @classmethod
    def get_api_headers(cls) -> dict[str, str]:
        """Build default headers for outbound API calls.

        Returns:
            Mapping of header names to values used on outbound HTTP requests.
        """
        headers: dict[str, str] = {}

        if cls.API_USER_AGENT:
            headers["User-Agent"] = cls.API_USER_AGENT

        return headers


config = Config()
