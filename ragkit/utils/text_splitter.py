"""Recursive, overlapping chunking shared by loaders, scripts & RAG chains.

Text is cut on the coarsest separator that occurs in it (paragraphs, then
lines, then words, then single characters). Pieces that still exceed
``chunk_size`` are split again with the finer separators, and adjacent
pieces are merged back greedily into chunks of at most ``chunk_size``
characters. Each new chunk starts with the trailing pieces of the previous
one, up to ``chunk_overlap`` characters.

All lengths are Unicode code points (``len`` of ``str``), for size checks
and for overlap alike.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from collections.abc import Mapping
from collections.abc import Sequence
import copy
from dataclasses import dataclass
import logging
from typing import Any

from langchain_core.documents import Document

from ragkit.core.errors import ConfigurationError
from ragkit.core.errors import InputError
from ragkit.core.types import DocumentLike
from ragkit.core.types import coerce_document

__all__ = [
    "DEFAULT_SEPARATORS",
    "RecursiveTextSplitter",
    "SplitterConfig",
    "split_documents",
]

logger = logging.getLogger(__name__)

DEFAULT_SEPARATORS: tuple[str, ...] = ("\n\n", "\n", " ", "")

# (offset into the source text, text)
_Span = tuple[int, str]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class SplitterConfig:
    """Immutable splitter parameters, validated on construction.

    ``separators`` run from coarsest to finest; ``""`` means "split between
    any two characters". It is the usual last entry but is not required:
    without it, a piece with no finer separator left is emitted whole even
    when it is longer than ``chunk_size``, and a warning is logged.
    """

    chunk_size: int = 200
    chunk_overlap: int = 20
    separators: tuple[str, ...] = DEFAULT_SEPARATORS
    strip_whitespace: bool = True
    add_start_index: bool = False

    def __post_init__(self) -> None:
        if not _is_int(self.chunk_size) or self.chunk_size <= 0:
            raise ConfigurationError(
                f"chunk_size must be a positive integer, got {self.chunk_size!r}"
            )
        if not _is_int(self.chunk_overlap) or self.chunk_overlap < 0:
            raise ConfigurationError(
                f"chunk_overlap must be a non-negative integer, got {self.chunk_overlap!r}"
            )
        if self.chunk_overlap >= self.chunk_size:
            raise ConfigurationError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        if isinstance(self.separators, str):
            raise ConfigurationError("separators must be a sequence of strings")
        separators = tuple(self.separators)
        if not separators:
            raise ConfigurationError("separators must not be empty")
        if not all(isinstance(sep, str) for sep in separators):
            raise ConfigurationError("separators must be a sequence of strings")
        object.__setattr__(self, "separators", separators)


class RecursiveTextSplitter:
    """Split text or documents into overlapping, boundary-aware chunks."""

    def __init__(self, config: SplitterConfig | None = None, **kwargs: Any):
        if config is not None and kwargs:
            raise ConfigurationError(
                "pass either a SplitterConfig or keyword parameters, not both"
            )
        self.config = config if config is not None else SplitterConfig(**kwargs)

    # -------- Public API -------------------------------------------------
    def split_text(self, text: str) -> list[str]:
        """Return the chunk texts for *text*, in reading order."""
        if not isinstance(text, str):
            raise InputError(f"text must be str, got {type(text).__name__}")
        return [content for _, content in self._split_spans(text)]

    def create_documents(
        self,
        texts: Iterable[str],
        metadatas: Sequence[dict[str, Any]] | None = None,
    ) -> list[Document]:
        """Split raw *texts*, attaching ``metadatas[i]`` to chunks of ``texts[i]``."""
        texts = list(texts)
        if metadatas is None:
            metadatas = [{}] * len(texts)
        if len(metadatas) != len(texts):
            raise ValueError(
                f"got {len(metadatas)} metadata entries for {len(texts)} texts"
            )
        for index, text in enumerate(texts):
            if not isinstance(text, str):
                raise InputError(
                    f"content must be str, got {type(text).__name__}", index
                )

        chunks: list[Document] = []
        for text, metadata in zip(texts, metadatas):
            chunks.extend(self._chunk_document(text, metadata))
        return chunks

    def split_documents(self, documents: Iterable[DocumentLike]) -> list[Document]:
        """Split every document, keeping input order and copying metadata.

        Accepts ``Document`` objects or ``{"content": ..., **metadata}``
        mappings. All inputs are validated before any splitting happens.
        """
        # A lone Document or mapping is iterable too; reject it rather than walk it.
        if not isinstance(documents, Iterable) or isinstance(
            documents, (str, bytes, Mapping, Document)
        ):
            kind = type(documents).__name__
            raise InputError(f"expected an iterable of documents, got {kind}")
        docs = [coerce_document(item, index) for index, item in enumerate(documents)]

        chunks: list[Document] = []
        for doc in docs:
            chunks.extend(self._chunk_document(doc.page_content, doc.metadata))

        logger.debug("Split %d document(s) into %d chunk(s)", len(docs), len(chunks))
        return chunks

    # -------- Internals --------------------------------------------------
    def _chunk_document(self, text: str, metadata: dict[str, Any]) -> list[Document]:
        chunks = []
        for start, content in self._split_spans(text):
            chunk_metadata = copy.deepcopy(metadata)
            if self.config.add_start_index:
                chunk_metadata["start_index"] = start
            chunks.append(Document(page_content=content, metadata=chunk_metadata))
        return chunks

    def _split_spans(self, text: str) -> list[_Span]:
        if not text:
            return []
        return self._split_recursive(text, 0, self.config.separators)

    def _split_recursive(
        self, text: str, start: int, separators: tuple[str, ...]
    ) -> list[_Span]:
        separator, finer = _choose_separator(text, separators)
        chunk_size = self.config.chunk_size

        chunks: list[_Span] = []
        fitting: list[_Span] = []
        for span in _cut(text, start, separator):
            offset, piece = span
            if len(piece) <= chunk_size:
                fitting.append(span)
                continue

            if fitting:
                chunks.extend(self._merge(fitting, separator))
                fitting = []
            if finer:
                chunks.extend(self._split_recursive(piece, offset, finer))
            else:
                logger.warning(
                    "Emitting oversized chunk of %d characters at offset %d "
                    "(chunk_size=%d); no finer separator left",
                    len(piece),
                    offset,
                    chunk_size,
                )
                closed = self._close([span], separator)
                if closed:
                    chunks.append(closed)

        if fitting:
            chunks.extend(self._merge(fitting, separator))
        return chunks

    def _merge(self, pieces: list[_Span], separator: str) -> list[_Span]:
        """Greedily join *pieces* into chunks, seeding each with an overlap."""
        chunk_size = self.config.chunk_size
        chunk_overlap = self.config.chunk_overlap
        sep_len = len(separator)

        chunks: list[_Span] = []
        current: deque[_Span] = deque()
        total = 0
        for span in pieces:
            length = len(span[1])
            if current and total + sep_len + length > chunk_size:
                closed = self._close(current, separator)
                if closed:
                    chunks.append(closed)
                # Keep trailing pieces as overlap while they fit both limits.
                while current and (
                    total > chunk_overlap or total + sep_len + length > chunk_size
                ):
                    dropped = current.popleft()
                    total -= len(dropped[1]) + (sep_len if current else 0)

            total += length + (sep_len if current else 0)
            current.append(span)

        if current:
            closed = self._close(current, separator)
            if closed:
                chunks.append(closed)
        return chunks

    def _close(self, pieces: Iterable[_Span], separator: str) -> _Span | None:
        pieces = list(pieces)
        offset = pieces[0][0]
        content = separator.join(piece for _, piece in pieces)
        if self.config.strip_whitespace:
            stripped = content.lstrip()
            offset += len(content) - len(stripped)
            content = stripped.rstrip()
        if not content:
            return None
        return offset, content


def _choose_separator(
    text: str, separators: tuple[str, ...]
) -> tuple[str, tuple[str, ...]]:
    """Return the first separator present in *text* and the finer ones after it."""
    for index, separator in enumerate(separators):
        if separator == "":
            return separator, ()
        if separator in text:
            return separator, separators[index + 1 :]
    return separators[-1], ()


def _cut(text: str, start: int, separator: str) -> list[_Span]:
    """Split *text* on *separator*, dropping empty pieces but keeping offsets."""
    if separator == "":
        return [(start + index, char) for index, char in enumerate(text)]

    spans = []
    position = start
    for piece in text.split(separator):
        if piece:
            spans.append((position, piece))
        position += len(piece) + len(separator)
    return spans


def split_documents(
    documents: Iterable[DocumentLike], config: SplitterConfig | None = None
) -> list[Document]:
    """Split *documents* with *config* (defaults: 200 chars, 20 overlap)."""
    return RecursiveTextSplitter(config).split_documents(documents)
