"""
End-to-end: Markdown notes on disk → splitter → in-memory store → RAG chain.

Everything runs offline: offline embeddings and a replaying chat model.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from ragkit.core.chains.rag_chain import build_rag_pipeline
from ragkit.ingestion.web_loader import load_sources
from ragkit.utils.text_splitter import SplitterConfig
from scripts.ask import main as ask_main
from tests.helpers import get_test_settings


@pytest.fixture
def notes_dir(tmp_path: Path) -> Path:
    folder = tmp_path / "notes"
    folder.mkdir()
    (folder / "2024-06-11-lcel.md").write_text(
        "---\ntags: [langchain]\n---\n"
        "# LCEL\n\n"
        "LCEL stands for LangChain Expression Language. "
        "It composes prompts, models and parsers with the pipe operator.\n\n"
        "Chains built with LCEL support streaming, batching and async out of the box."
    )
    (folder / "fruit.md").write_text(
        "# Fruit\n\nBananas are yellow fruit that grow in tropical climates.\n\n"
        "Apples grow in cooler climates and come in many varieties."
    )
    return folder


def test_pipeline_over_markdown_folder(notes_dir: Path, embeddings, echo_llm):
    documents = load_sources([str(notes_dir)])
    chain = build_rag_pipeline(
        documents,
        llm=echo_llm,
        embeddings=embeddings,
        config=SplitterConfig(chunk_size=80, chunk_overlap=20),
        k=2,
    )

    result = chain.invoke({"input": "What does LCEL stand for? LangChain Expression Language"})

    top = result["context"][0]
    assert "LangChain Expression Language" in top.page_content
    assert top.metadata["tags"] == ["langchain"]
    assert top.metadata["created_at"] == "2024-06-11T12:00:00"
    assert all(len(d.page_content) <= 80 for d in result["context"])
    # The retrieved chunks are what the model saw
    assert top.page_content in result["answer"]


def test_interactive_cli_session(notes_dir: Path, fake_llm, mocker, capsys):
    mocker.patch(
        "scripts.ask.click.prompt",
        side_effect=["What is LCEL?", "Which fruit is yellow?", "exit"],
    )

    ask_main.callback(
        question=None,
        sources=(str(notes_dir),),
        k=None,
        context=None,
        interactive=True,
        show_sources=False,
        verbose=False,
        settings=get_test_settings(chunk_size=80, chunk_overlap=20),
        llm=fake_llm("LCEL is LangChain Expression Language.", "Bananas."),
    )

    out = capsys.readouterr().out
    assert "LCEL is LangChain Expression Language." in out
    assert "Bananas." in out
