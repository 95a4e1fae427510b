"""Embedding capability for semantic search.

Two variants implement :class:`EmbeddingProvider`:

- :class:`EmbeddingsService` wraps a sentence-transformers model. Loading
  is best-effort; if the model cannot be loaded the service records a
  disabled state and every ``embed`` call returns None.
- :class:`DisabledEmbeddings` is the keyword-only variant, used when
  embeddings are switched off in settings.

Model loading and encoding are blocking, so both run in a worker thread.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
from collections import OrderedDict
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..config import settings
from ..engine.scoring.constants import EMBEDDING_CACHE_KEY_CHARS

if TYPE_CHECKING:
    from sentence_transformers import SentenceTransformer

logger = logging.getLogger(__name__)


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Capability interface for producing text embeddings."""

    @property
    def is_enabled(self) -> bool: ...

    async def initialize(self) -> None:
        """Prepare the provider. Idempotent; never raises."""
        ...

    async def embed(self, text: str) -> list[float] | None:
        """Embed text, or return None when no vector can be produced."""
        ...


def cache_key(text: str) -> str:
    """Stable cache key: sha256 of a bounded prefix of the text."""
    prefix = text[:EMBEDDING_CACHE_KEY_CHARS]
    return hashlib.sha256(prefix.encode("utf-8")).hexdigest()


class EmbeddingCache:
    """Bounded LRU cache of embedding vectors."""

    def __init__(self, max_size: int):
        self.max_size = max_size
        self._data: OrderedDict[str, list[float]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: str) -> list[float] | None:
        vector = self._data.get(key)
        if vector is not None:
            self._data.move_to_end(key)
        return vector

    def put(self, key: str, vector: list[float]) -> None:
        if self.max_size <= 0:
            return
        self._data[key] = vector
        self._data.move_to_end(key)
        while len(self._data) > self.max_size:
            self._data.popitem(last=False)

    def clear(self) -> None:
        self._data.clear()


class EmbeddingsService:
    """Sentence-transformers embedding provider.

    Vectors are mean-pooled and L2-normalised (the model's default pooling
    with ``normalize_embeddings=True``).
    """

    def __init__(
        self,
        model_name: str | None = None,
        cache_size: int | None = None,
    ):
        """Initialize the service without loading the model.

        Args:
            model_name: Hugging Face model id. Defaults to settings.
            cache_size: Maximum cached vectors. Defaults to settings.
        """
        self.model_name = model_name or settings.embedding_model
        self.cache = EmbeddingCache(
            settings.embedding_cache_size if cache_size is None else cache_size
        )
        self._model: SentenceTransformer | None = None
        self._attempted = False
        self._lock = asyncio.Lock()

    @property
    def is_enabled(self) -> bool:
        return self._model is not None

    @property
    def dimension(self) -> int | None:
        if self._model is None:
            return None
        return self._model.get_sentence_embedding_dimension()

    def _load_model(self) -> SentenceTransformer:
        from sentence_transformers import SentenceTransformer

        return SentenceTransformer(self.model_name)

    async def initialize(self) -> None:
        """Load the model once. Failure disables the service permanently."""
        if self._attempted:
            return
        async with self._lock:
            if self._attempted:
                return
            self._attempted = True
            logger.info(f"Loading embedding model: {self.model_name}")
            try:
                self._model = await asyncio.to_thread(self._load_model)
            except Exception as e:
                logger.warning(
                    f"Failed to load embedding model, falling back to keyword search only: {e}"
                )
                self._model = None
                return
            logger.info(f"Embedding model loaded (dimension={self.dimension})")

    def _encode(self, text: str) -> list[float]:
        assert self._model is not None
        vector = self._model.encode(text, convert_to_numpy=True, normalize_embeddings=True)
        return [float(v) for v in vector]

    async def embed(self, text: str) -> list[float] | None:
        """Embed text, serving repeated prefixes from the cache.

        Args:
            text: Text to embed.

        Returns:
            The vector, or None when the model is unavailable or encoding
            fails.
        """
        await self.initialize()
        if self._model is None:
            return None

        key = cache_key(text)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        try:
            vector = await asyncio.to_thread(self._encode, text)
        except Exception as e:
            logger.warning(f"Error generating embedding: {e}")
            return None

        self.cache.put(key, vector)
        return vector

    def cache_stats(self) -> dict[str, int]:
        return {"size": len(self.cache), "max_size": self.cache.max_size}


class DisabledEmbeddings:
    """Keyword-only variant: never produces a vector."""

    @property
    def is_enabled(self) -> bool:
        return False

    async def initialize(self) -> None:
        return None

    async def embed(self, text: str) -> list[float] | None:
        return None


def create_embedding_provider(use_embeddings: bool | None = None) -> EmbeddingProvider:
    """Build the provider selected by settings."""
    enabled = settings.use_embeddings if use_embeddings is None else use_embeddings
    if not enabled:
        logger.info("Embeddings disabled by configuration")
        return DisabledEmbeddings()
    return EmbeddingsService()
