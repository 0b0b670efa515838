"""CLI helper - answer questions about a web page or local notes.

Usage::

    python -m scripts.ask "What is LCEL?"
    python -m scripts.ask --source notes/ --interactive
    python -m scripts.ask "What is LCEL?" --context "LCEL stands for ..."
"""

from __future__ import annotations

import logging

import click
from langchain_core.chat_history import InMemoryChatMessageHistory
from langchain_core.runnables import Runnable

from ragkit.core.chains.rag_chain import build_rag_pipeline
from ragkit.core.chains.rag_chain import get_context_chain
from ragkit.core.config import Settings
from ragkit.core.embeddings import get_embeddings
from ragkit.core.errors import RagkitError
from ragkit.core.llm import get_chat_model
from ragkit.ingestion.web_loader import load_sources

EXIT_WORDS = {"exit", "quit", "bye"}


def _print_answer(result: dict, show_sources: bool) -> None:
    click.echo(result["answer"])
    if show_sources:
        for doc in result["context"]:
            click.echo(f"  [source: {doc.metadata.get('source', 'unknown')}]")


def run_loop(chain: Runnable, show_sources: bool = False) -> int:
    """Ask questions until an exit word; returns the number answered."""
    history = InMemoryChatMessageHistory()
    answered = 0
    while True:
        question = click.prompt("You", default="", show_default=False).strip()
        if question.lower() in EXIT_WORDS:
            break
        if not question:
            continue

        result = chain.invoke(
            {"input": question, "chat_history": list(history.messages)}
        )
        history.add_user_message(question)
        history.add_ai_message(result["answer"])
        _print_answer(result, show_sources)
        answered += 1
    return answered


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("question", required=False)
@click.option(
    "--source",
    "sources",
    multiple=True,
    help="URL, file or directory to answer from (default: SOURCE_URL).",
)
@click.option("-k", type=int, default=None, help="Chunks retrieved per question.")
@click.option(
    "--context",
    default=None,
    help="Answer from this text instead of loading and retrieving sources.",
)
@click.option("--interactive", is_flag=True, help="Keep asking until 'exit'.")
@click.option("--show-sources", is_flag=True, help="Print where answers came from.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
def main(
    question: str | None,
    sources: tuple[str, ...],
    k: int | None,
    context: str | None,
    interactive: bool,
    show_sources: bool,
    verbose: bool,
    settings: Settings | None = None,
    llm=None,
) -> None:
    """Answer QUESTION from the given sources using retrieval + an LLM."""
    settings = settings or Settings()
    logging.basicConfig(level=logging.DEBUG if verbose else settings.log_level)

    if not question and not interactive:
        raise click.UsageError("Provide a QUESTION or use --interactive.")
    if context is not None and interactive:
        raise click.UsageError("--context answers one QUESTION; drop --interactive.")

    try:
        llm = llm or get_chat_model(settings)
    except RagkitError as err:
        raise click.ClickException(str(err)) from err

    if context is not None:
        answer = get_context_chain(llm).invoke({"input": question, "context": context})
        click.echo(answer)
        return

    try:
        documents = load_sources(list(sources) or [settings.source_url])
        chain = build_rag_pipeline(
            documents,
            llm=llm,
            embeddings=get_embeddings(settings),
            config=settings.splitter_config(),
            k=k or settings.retriever_k,
            conversational=interactive,
        )
    except (RagkitError, ValueError) as err:
        raise click.ClickException(str(err)) from err

    if question:
        _print_answer(chain.invoke({"input": question}), show_sources)
    if interactive:
        run_loop(chain, show_sources)


if __name__ == "__main__":  # pragma: no cover
    main()
