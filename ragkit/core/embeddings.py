"""Wrapper around OpenAI text embeddings.

*Keeps everything behind a thin, testable abstraction so you can swap
models later (e.g. Azure, local models) without rewiring callers.*
"""

from __future__ import annotations

import hashlib
import math
import re

from langchain_core.embeddings import Embeddings
from langchain_openai import OpenAIEmbeddings
from pydantic import SecretStr

from ragkit.core.config import Settings

_WORD_RE = re.compile(r"\w+")


class OfflineEmbeddings(Embeddings):
    """Deterministic hashed bag-of-words embeddings for tests and offline runs.

    Texts sharing words end up close in cosine space, which is enough for
    the in-memory store to rank obviously related chunks first.
    """

    def __init__(self, dim: int = 384):
        self.dim = dim

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self._hash_embed(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        return self._hash_embed(text)

    def _hash_embed(self, text: str) -> list[float]:
        vec = [0.0] * self.dim
        for word in _WORD_RE.findall(text.lower()):
            # md5 rather than hash(): stable across interpreter runs
            digest = hashlib.md5(word.encode("utf-8")).digest()
            vec[int.from_bytes(digest[:4], "big") % self.dim] += 1.0
        # L2 normalise
        norm = math.sqrt(sum(v * v for v in vec)) or 1.0
        return [v / norm for v in vec]


def get_embeddings(cfg: Settings | None = None) -> Embeddings:
    """OpenAI embeddings when a key is configured, offline ones otherwise."""
    cfg = cfg or Settings()
    if not cfg.openai_configured:
        return OfflineEmbeddings(dim=cfg.embedding_dim)
    return OpenAIEmbeddings(
        model=cfg.embedding_model,
        api_key=SecretStr(cfg.openai_api_key),
    )
