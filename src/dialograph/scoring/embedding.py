"""Sentence-embedding scorer backed by sentence-transformers.

The model loads lazily in a worker thread; until load() completes the scorer
reports not ready and evaluation fails fast with NotReadyError.
"""

import asyncio
import logging
import time
from pathlib import Path
from typing import Any

import numpy as np

from dialograph.core.errors import NotReadyError

logger = logging.getLogger(__name__)

DEFAULT_EMBEDDING_MODEL = "all-MiniLM-L6-v2"
DEFAULT_EMBEDDING_THRESHOLD = 0.75


class EmbeddingScorer:
    """Cosine similarity of normalized sentence embeddings."""

    def __init__(
        self,
        model_name: str = DEFAULT_EMBEDDING_MODEL,
        threshold: float = DEFAULT_EMBEDDING_THRESHOLD,
        cache_dir: Path | str | None = None,
    ):
        """
        Initialize embedding scorer.

        Args:
            model_name: Sentence transformer model name
            threshold: Match threshold for normalized cosine similarity
            cache_dir: Directory to cache models (optional)
        """
        self.model_name = model_name
        self.cache_dir = cache_dir
        self._threshold = threshold
        self._model: Any = None

    def ready(self) -> bool:
        return self._model is not None

    def threshold(self) -> float:
        return self._threshold

    def set_threshold(self, threshold: float) -> None:
        self._threshold = threshold

    def _load_model(self) -> Any:
        try:
            from sentence_transformers import SentenceTransformer
        except ImportError:
            logger.error(
                "sentence-transformers not installed. Run: pip install 'dialograph[embeddings]'"
            )
            raise

        start = time.monotonic()
        model = SentenceTransformer(
            self.model_name,
            cache_folder=str(self.cache_dir) if self.cache_dir else None,
        )
        logger.info(f"Loaded embedding model {self.model_name} in {time.monotonic() - start:.1f}s")
        return model

    async def load(self) -> None:
        """Load the model without blocking the event loop."""
        if self._model is None:
            self._model = await asyncio.to_thread(self._load_model)

    def _encode(self, texts: list[str]) -> np.ndarray:
        return self._model.encode(
            texts,
            show_progress_bar=False,
            convert_to_numpy=True,
            normalize_embeddings=True,
        )

    async def score(self, utterance: str, candidates: list[str]) -> list[float]:
        if self._model is None:
            raise NotReadyError(f"Embedding model {self.model_name} not loaded yet")
        embeddings = await asyncio.to_thread(self._encode, [utterance, *candidates])
        return [float(s) for s in embeddings[1:] @ embeddings[0]]
