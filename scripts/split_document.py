"""CLI helper - split files or web pages into overlapping chunks.

Usage::

    python -m scripts.split_document notes/ README.md --chunk-size 300
    python -m scripts.split_document https://example.com --json
"""

from __future__ import annotations

import json
import logging

import click

from ragkit.core.config import Settings
from ragkit.core.errors import RagkitError
from ragkit.ingestion.web_loader import load_sources
from ragkit.utils.text_splitter import RecursiveTextSplitter

# Separators are taken literally from the command line; allow "\n" escapes.
_ESCAPES = {"\\n": "\n", "\\t": "\t"}


def _unescape(value: str) -> str:
    for raw, char in _ESCAPES.items():
        value = value.replace(raw, char)
    return value


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("sources", nargs=-1, required=True)
@click.option("--chunk-size", type=int, default=None, help="Max characters per chunk.")
@click.option(
    "--chunk-overlap", type=int, default=None, help="Characters shared by neighbours."
)
@click.option(
    "--separator",
    "separators",
    multiple=True,
    help='Boundary, coarsest first; repeatable (use "" for any character).',
)
@click.option("--start-index", is_flag=True, help="Record each chunk's offset.")
@click.option("--json", "as_json", is_flag=True, help="Emit chunks as JSON lines.")
@click.option("--stats", is_flag=True, help="Only print chunk counts and sizes.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
def main(
    sources: tuple[str, ...],
    chunk_size: int | None,
    chunk_overlap: int | None,
    separators: tuple[str, ...],
    start_index: bool,
    as_json: bool,
    stats: bool,
    verbose: bool,
    settings: Settings | None = None,
) -> None:
    """Split every SOURCE (URL, file or directory of ``.md``) into chunks."""
    settings = settings or Settings()
    logging.basicConfig(level=logging.DEBUG if verbose else settings.log_level)

    try:
        config = settings.splitter_config(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            separators=tuple(_unescape(s) for s in separators) or None,
            add_start_index=start_index,
        )
        documents = load_sources(list(sources))
        chunks = RecursiveTextSplitter(config).split_documents(documents)
    except RagkitError as err:
        raise click.ClickException(str(err)) from err

    if not chunks:
        click.echo("No chunks produced - exiting.")
        raise SystemExit(0)

    if stats:
        sizes = [len(c.page_content) for c in chunks]
        click.echo(
            f"{len(documents)} document(s) -> {len(chunks)} chunk(s); "
            f"min {min(sizes)}, max {max(sizes)}, "
            f"avg {sum(sizes) / len(sizes):.1f} characters"
        )
        return

    for i, chunk in enumerate(chunks):
        if as_json:
            click.echo(
                json.dumps(
                    {"content": chunk.page_content, "metadata": chunk.metadata},
                    ensure_ascii=False,
                    default=str,
                )
            )
        else:
            click.echo(f"--- chunk {i} ({len(chunk.page_content)} chars) ---")
            click.echo(chunk.page_content)


if __name__ == "__main__":  # pragma: no cover
    main()
