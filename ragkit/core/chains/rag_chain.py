"""Retrieval-augmented generation chains.

Three levels, mirroring how context gets into the prompt:

1. :func:`get_context_chain` - the caller passes ``context`` text directly.
2. :func:`create_stuff_documents_chain` - the caller passes ``Document``s,
   whose contents are "stuffed" into ``{context}``.
3. :func:`create_retrieval_chain` - a retriever picks the documents for the
   question, so callers only send ``{"input": question}``.

:func:`build_rag_pipeline` wires loader output → splitter → in-memory
store → retrieval chain in one call.
"""

from __future__ import annotations

from typing import Any

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import BasePromptTemplate
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.prompts import MessagesPlaceholder
from langchain_core.retrievers import BaseRetriever
from langchain_core.runnables import Runnable
from langchain_core.runnables import RunnableLambda
from langchain_core.runnables import RunnablePassthrough

from ragkit.core.vector_store.memory import build_vector_store
from ragkit.core.vector_store.memory import get_retriever
from ragkit.utils.text_splitter import RecursiveTextSplitter
from ragkit.utils.text_splitter import SplitterConfig

DOCUMENT_SEPARATOR = "\n\n"

RAG_TEMPLATE = """Answer the user's question.
Context: {context}
Question: {input}
"""

RAG_PROMPT = ChatPromptTemplate.from_template(RAG_TEMPLATE)

CONVERSATIONAL_SYSTEM_PROMPT = """Answer the user's questions based on the context below.
Context: {context}
"""

CONVERSATIONAL_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", CONVERSATIONAL_SYSTEM_PROMPT),
        MessagesPlaceholder("chat_history", optional=True),
        ("human", "{input}"),
    ]
)


def format_documents(
    docs: list[Document], separator: str = DOCUMENT_SEPARATOR
) -> str:
    return separator.join(doc.page_content for doc in docs)


def get_context_chain(llm: BaseChatModel) -> Runnable:
    """``{"input", "context": str}`` → answer (str)."""
    return RAG_PROMPT | llm | StrOutputParser()


def create_stuff_documents_chain(
    llm: BaseChatModel,
    prompt: BasePromptTemplate = RAG_PROMPT,
    document_separator: str = DOCUMENT_SEPARATOR,
) -> Runnable:
    """``{"input", "context": list[Document]}`` → answer (str).

    Documents are joined in the order given; nothing is truncated, so keep
    them small (that is what the splitter is for).
    """

    def _stuff(inputs: dict[str, Any]) -> str:
        return format_documents(inputs["context"], document_separator)

    return (
        RunnablePassthrough.assign(context=RunnableLambda(_stuff))
        | prompt
        | llm
        | StrOutputParser()
    )


def create_retrieval_chain(
    retriever: BaseRetriever, combine_docs_chain: Runnable
) -> Runnable:
    """``{"input": question}`` → ``{"input", "context", "answer"}``.

    ``context`` holds the retrieved documents so callers can cite sources.
    Extra input keys (e.g. ``chat_history``) are passed through untouched.
    """
    retrieve_docs = RunnableLambda(lambda inputs: inputs["input"]) | retriever
    return RunnablePassthrough.assign(context=retrieve_docs).assign(
        answer=combine_docs_chain
    )


def build_rag_pipeline(
    documents: list[Document],
    llm: BaseChatModel,
    embeddings: Embeddings,
    config: SplitterConfig | None = None,
    k: int = 2,
    conversational: bool = False,
) -> Runnable:
    """Split *documents*, index the chunks and return a retrieval chain."""
    chunks = RecursiveTextSplitter(config).split_documents(documents)
    store = build_vector_store(chunks, embeddings)
    prompt = CONVERSATIONAL_PROMPT if conversational else RAG_PROMPT
    combine_docs_chain = create_stuff_documents_chain(llm, prompt)
    return create_retrieval_chain(get_retriever(store, k=k), combine_docs_chain)
