"""Load Markdown files → ``Document`` objects with accurate timestamps.

Priority rules for ``created_at``
---------------------------------
1. `created:` front-matter (e.g. “Jun 11, 2024 at 9:40 AM”)
2. Date encoded in the **filename**  (yyyy-mm-dd.*) - time fixed to 12:00
3. File-system mtime.
If front-matter *and* filename disagree on the **date**, we keep
the filename date (12 PM) to avoid silent conflicts.

Documents are returned whole; chunking is left to the caller's splitter.
"""

from __future__ import annotations

from datetime import date
from datetime import datetime
import logging
from pathlib import Path
import re
from typing import Any

import frontmatter
from langchain_core.documents import Document

__all__ = ["load_markdown_file", "load_markdown_folder"]

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------- #
# Helpers                                                               #
# --------------------------------------------------------------------- #
_FILENAME_DATE_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})")

_CREATED_FORMATS = ("%b %d, %Y at %I:%M %p", "%b %d, %Y")


def _frontmatter_datetime(value: Any) -> datetime | None:
    """Interpret a `created:` front-matter value; returns tz-naive."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if not isinstance(value, str):
        return None

    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass
    for fmt in _CREATED_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt)
        except ValueError:
            continue
    return None


def _filename_datetime(path: Path) -> datetime | None:
    """Extract yyyy-mm-dd from the filename; attach 12:00."""
    m = _FILENAME_DATE_RE.match(path.stem)
    if not m:
        return None
    try:
        return datetime.fromisoformat(f"{m.group(1)}T12:00:00")
    except ValueError:
        return None


def _json_safe(value: Any) -> Any:
    """Front matter may hold dates; metadata should stay plain scalars."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    return value


# --------------------------------------------------------------------- #
# Public API                                                            #
# --------------------------------------------------------------------- #
def load_markdown_file(path: str | Path) -> Document:
    """Return one Markdown file as a Document (front matter → metadata)."""
    path = Path(path)
    post = frontmatter.load(path)

    fm_dt = _frontmatter_datetime(post.metadata.get("created"))
    fn_dt = _filename_datetime(path)
    mtime_dt = datetime.fromtimestamp(path.stat().st_mtime)

    # Resolve conflicts
    if fn_dt and fm_dt and fn_dt.date() != fm_dt.date():
        chosen_ts = fn_dt  # filename wins on date, 12 PM time
    else:
        chosen_ts = fm_dt or fn_dt or mtime_dt

    metadata = {
        key: _json_safe(value)
        for key, value in post.metadata.items()
        if key != "created"
    }
    metadata.update({"source": str(path), "created_at": chosen_ts.isoformat()})

    logger.debug("Loaded %s (%d characters)", path, len(post.content))
    return Document(page_content=post.content, metadata=metadata)


def load_markdown_folder(directory: str | Path) -> list[Document]:
    """Load every ``.md`` under *directory* (recursive, sorted by path)."""
    paths = sorted(Path(directory).rglob("*.md"))
    documents = [load_markdown_file(p) for p in paths]
    logger.info("Loaded %d markdown file(s) from %s", len(documents), directory)
    return documents
