"""Fetch web pages (and plain files) as ``Document`` objects.

Scraping is delegated to LangChain's ``WebBaseLoader`` (requests +
BeautifulSoup); this module only pre-configures it and normalises the
result so every document carries a ``source`` entry.
"""

from __future__ import annotations

import logging
from pathlib import Path

from langchain_community.document_loaders import TextLoader
from langchain_community.document_loaders import WebBaseLoader
from langchain_core.documents import Document

from ragkit.ingestion.markdown_loader import load_markdown_file
from ragkit.ingestion.markdown_loader import load_markdown_folder

__all__ = ["is_url", "load_sources", "load_web_page"]

logger = logging.getLogger(__name__)


def is_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


def load_web_page(url: str) -> list[Document]:
    """Return the visible text of *url*; raw pages tend to be large and noisy."""
    docs = WebBaseLoader(url).load()
    for doc in docs:
        doc.metadata.setdefault("source", url)
    logger.info(
        "Loaded %s: %d document(s), %d characters",
        url,
        len(docs),
        sum(len(d.page_content) for d in docs),
    )
    return docs


def load_sources(sources: list[str]) -> list[Document]:
    """Load URLs, directories of Markdown, Markdown and text files in order."""
    documents: list[Document] = []
    for source in sources:
        if is_url(source):
            documents.extend(load_web_page(source))
        elif Path(source).is_dir():
            documents.extend(load_markdown_folder(source))
        elif Path(source).suffix.lower() == ".md":
            documents.append(load_markdown_file(source))
        else:
            documents.extend(TextLoader(source, encoding="utf-8").load())
    return documents
