# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-14
# Updated: 2026-01-26
# Description: ProductEmbedder
# -----------------------------------------------------------------------------
import time
from typing import Any, Callable, List, Optional, Sequence

import numpy as np
from openai import OpenAI

from config.Config import Config
from embedding.EmbeddingText import prepare_text_for_embedding
from embedding.errors import EmbeddingError
from utility.logging_utils import get_class_logger


class ProductEmbedder:
    """
    Text -> vector through Ollama's OpenAI-compatible embeddings endpoint.

    Fails loudly: an empty or wrongly sized vector raises EmbeddingError,
    it is never passed on to the vector index.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            client: Any = None,
            batch_size: int = 16,
            normalize: bool = True,
            max_retries: int = 3,
            retry_delay: float = 0.8,
            sleep: Callable[[float], None] = time.sleep,
            logger=None,
    ):
        self.cfg = cfg
        self.batch_size = batch_size
        self.normalize = normalize
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._sleep = sleep
        self.logger = logger or get_class_logger(self.__class__)

        self.model = cfg.embedding_model
        self.dimension = cfg.vector_dimension
        self.client = client or OpenAI(
            base_url=cfg.ollama_openai_url,
            api_key=cfg.ollama_api_key,
        )
        self.logger.info("ProductEmbedder initialized (model=%s, dim=%d)", self.model, self.dimension)

    def _embed_batch(self, texts: List[str]) -> np.ndarray:
        delay = self.retry_delay
        for attempt in range(1, self.max_retries + 1):
            try:
                resp = self.client.embeddings.create(model=self.model, input=texts)
                rows = [d.embedding for d in resp.data]
                break
            except Exception as e:
                self.logger.warning(
                    "Embedding batch failed (attempt %d/%d): %s", attempt, self.max_retries, e
                )
                if attempt == self.max_retries:
                    raise EmbeddingError(f"Embedding failed after {attempt} attempts: {e}") from e
                self._sleep(delay)
                delay *= 1.7  # backoff
        else:
            raise EmbeddingError("Embedding failed: no attempts made")

        if len(rows) != len(texts) or any(not r for r in rows):
            raise EmbeddingError(
                f"Embedding provider returned {len(rows)} vectors for {len(texts)} texts "
                "(or an empty vector)"
            )

        arr = np.asarray(rows, dtype=np.float32)
        if arr.ndim != 2 or arr.shape[1] != self.dimension:
            raise EmbeddingError(
                f"Expected {self.dimension}-dim embeddings from '{self.model}', got shape {arr.shape}"
            )

        # Normalize vectors (cosine-friendly)
        if self.normalize:
            norms = np.linalg.norm(arr, axis=1, keepdims=True) + 1e-12
            arr = arr / norms
        return arr

    def embed_texts(self, texts: Sequence[str]) -> List[List[float]]:
        prepared = [prepare_text_for_embedding(t) for t in texts]
        if any(not t for t in prepared):
            raise EmbeddingError("Cannot embed empty text")

        out: List[List[float]] = []
        for i in range(0, len(prepared), self.batch_size):
            batch = prepared[i:i + self.batch_size]
            out.extend(self._embed_batch(batch).tolist())

        self.logger.debug("Embedded %d text(s)", len(out))
        return out

    def embed_text(self, text: str) -> List[float]:
        return self.embed_texts([text])[0]

    def healthcheck(self) -> bool:
        try:
            vec = self.embed_text("health check")
            return len(vec) == self.dimension
        except Exception as e:
            self.logger.warning("Embedding healthcheck failed: %s", e)
            return False
