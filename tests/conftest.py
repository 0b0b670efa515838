"""
Shared pytest fixtures for all tests.
"""

from pathlib import Path

from langchain_core.documents import Document
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableLambda
import pytest

from ragkit.core.embeddings import OfflineEmbeddings
from tests.helpers import get_test_settings

# ---------------------------------------------------------------------------
# Automatic test markers based on path
# ---------------------------------------------------------------------------
# We want to avoid sprinkling `@pytest.mark.unit` / `integration` decorators
# throughout the codebase.  Instead, assign the marker implicitly from the
# directory the test file lives in.


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]):
    """Dynamically add pytest markers depending on filepath.

    Any test located in ``tests/unit`` gets the ``unit`` marker and tests in
    ``tests/integration`` get ``integration``, so ``pytest -m unit`` works
    without explicit decorators.
    """

    root_path = Path(config.rootdir)

    for item in items:
        rel_path = Path(item.fspath).resolve().relative_to(root_path).as_posix()

        if rel_path.startswith("tests/unit/"):
            item.add_marker("unit")
        elif rel_path.startswith("tests/integration/"):
            item.add_marker("integration")


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------
# A developer's real OPENAI_API_KEY must never turn a test into a paid API
# call, so it is removed for every test.


@pytest.fixture(autouse=True)
def _no_openai_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


@pytest.fixture
def settings():
    """Settings built from defaults only (no .env, no API key)."""
    return get_test_settings()


@pytest.fixture
def embeddings() -> OfflineEmbeddings:
    return OfflineEmbeddings(dim=1024)


@pytest.fixture
def fake_llm():
    """Factory for a chat model replaying the given responses in order."""

    def _make(*responses: str) -> FakeListChatModel:
        return FakeListChatModel(responses=list(responses))

    return _make


@pytest.fixture
def lcel_documents() -> list[Document]:
    """Two short pages on unrelated topics, for retrieval tests."""
    return [
        Document(
            page_content=(
                "LCEL stands for LangChain Expression Language.\n\n"
                "LCEL makes it easy to compose chains with the pipe operator."
            ),
            metadata={"source": "https://example.com/lcel"},
        ),
        Document(
            page_content=(
                "The password is 1234.\n\n"
                "Bananas are yellow fruit that grow in tropical climates."
            ),
            metadata={"source": "https://example.com/misc"},
        ),
    ]


@pytest.fixture
def echo_llm():
    """Chat model stand-in that answers with the full prompt it was given.

    Lets tests assert on what actually reached the model (stuffed context,
    chat history) without any network access.
    """
    return RunnableLambda(lambda prompt: AIMessage(content=prompt.to_string()))
