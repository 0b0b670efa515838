"""In-memory vector store - the retrieval side of the RAG walkthrough."""

from __future__ import annotations

import logging

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.vectorstores import InMemoryVectorStore
from langchain_core.vectorstores import VectorStore
from langchain_core.vectorstores import VectorStoreRetriever

logger = logging.getLogger(__name__)


def build_vector_store(
    chunks: list[Document], embeddings: Embeddings
) -> InMemoryVectorStore:
    """Embed *chunks* and index them in a process-local store."""
    if not chunks:
        raise ValueError("No chunks provided; nothing to index.")
    store = InMemoryVectorStore.from_documents(chunks, embeddings)
    logger.info("Indexed %d chunk(s) in memory", len(chunks))
    return store


def get_retriever(store: VectorStore, k: int = 2) -> VectorStoreRetriever:
    """Retriever returning the top *k* most similar chunks."""
    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")
    return store.as_retriever(search_kwargs={"k": k})
