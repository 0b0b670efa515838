"""Domain models shared across the package."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from langchain_core.documents import Document

from ragkit.core.errors import InputError

DocumentLike = Document | Mapping[str, Any]


def to_document(data: Mapping[str, Any]) -> Document:
    """Convert a dictionary to a Langchain Document.

    The `page_content` will be the `content` field, and the rest of
    the fields will be stored in the `metadata` attribute.
    """
    # Create a copy to avoid mutating the original dictionary
    data_copy = dict(data)
    return Document(page_content=data_copy.pop("content"), metadata=data_copy)


def coerce_document(item: Any, index: int) -> Document:
    """Return *item* as a Document, or raise ``InputError`` naming *index*."""
    if isinstance(item, Document):
        content = item.page_content
    elif isinstance(item, Mapping):
        if "content" not in item:
            raise InputError("mapping has no 'content' field", index)
        content = item["content"]
    else:
        raise InputError(
            f"expected Document or mapping, got {type(item).__name__}", index
        )

    if not isinstance(content, str):
        raise InputError(f"content must be str, got {type(content).__name__}", index)
    if isinstance(item, Document):
        return item
    return to_document(item)
