"""Loading of the CV question/answer dataset."""

import json
from pathlib import Path
from typing import Any

from .config import config
from .exceptions import DatasetError
from .models import Corpus, CVRecord

logger = config.get_logger(__name__)


class DatasetLoader:
    """Reads the CV dataset from a JSON file into an immutable corpus."""

    @staticmethod
    def read_json(file_path: Path) -> Any:  # noqa: ANN401
        """Read and decode a JSON file.

        Returns:
            The decoded JSON document.

        Raises:
            DatasetError: If the file cannot be read or decoded.
        """
        try:
            with file_path.open(encoding="utf-8") as file:
                return json.load(file)
        except OSError as e:
            msg = f"Unable to read CV dataset {file_path}: {e}"
            raise DatasetError(msg) from e
        except json.JSONDecodeError as e:
            msg = f"CV dataset {file_path} is not valid JSON: {e}"
            raise DatasetError(msg) from e

    @staticmethod
    def parse_records(items: Any) -> list[CVRecord]:  # noqa: ANN401
        """Validate decoded items and assign each one its 0-based id.

        Returns:
            Records in file order.

        Raises:
            DatasetError: If the document is not a list of question/answer objects.
        """
        if not isinstance(items, list):
            msg = f"CV dataset must be a JSON array, got {type(items).__name__}"
            raise DatasetError(msg)

        records = []
        for position, item in enumerate(items):
            if not isinstance(item, dict):
                msg = f"Item {position} must be an object"
                raise DatasetError(msg)
            question = item.get("question")
            answer = item.get("answer")
            if not isinstance(question, str) or not isinstance(answer, str):
                msg = f"Item {position} needs string 'question' and 'answer' fields"
                raise DatasetError(msg)
            records.append(CVRecord(id=position, question=question, answer=answer))
        return records

    @classmethod
    def load(cls, file_path: Path) -> Corpus:
        """Load the whole dataset into memory.

        Args:
            file_path: Path to the JSON dataset.

        Returns:
            The corpus, with record ids matching file order.
        """
        try:
            corpus = Corpus(cls.parse_records(cls.read_json(file_path)))
        except DatasetError:
            logger.exception("Error loading CV dataset %s", file_path)
            raise
        logger.info("CV dataset loaded successfully (%d records)", len(corpus))
        return corpus


def load_corpus(file_path: Path | None = None) -> Corpus:
    """Load the configured CV dataset.

    Returns:
        The loaded corpus.
    """
    return DatasetLoader.load(Path(file_path or config.CV_DATASET_PATH))
