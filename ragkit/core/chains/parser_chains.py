"""Prompt → model → output-parser chains.

Each builder returns an LCEL ``Runnable`` so callers only deal with
``invoke``; the parser decides the Python type of the result.
"""

from __future__ import annotations

from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import CommaSeparatedListOutputParser
from langchain_core.output_parsers import PydanticOutputParser
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import Runnable
from langchain_core.runnables import RunnableLambda
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import create_model

JOKE_SYSTEM_PROMPT = (
    "You are a comedian, tell me a joke based on a word provided by the user."
)

SYNONYMS_TEMPLATE = (
    "Provide 5 synonyms, separated by commas, for the following word {word}"
)

EXTRACTION_TEMPLATE = """Extract information from the following phrase.
Formatting Instructions: {format_instructions}
Phrase: {phrase}
"""

PERSON_FIELDS = {
    "name": "the name of the person",
    "age": "the age of the person",
}


class Recipe(BaseModel):
    recipe: str = Field(description="the name of the recipe")
    ingredients: list[str] = Field(description="ingredients")


def get_joke_chain(llm: BaseChatModel) -> Runnable:
    """``{"input": word}`` → joke (str)."""
    prompt = ChatPromptTemplate.from_messages(
        [("system", JOKE_SYSTEM_PROMPT), ("human", "{input}")]
    )
    return prompt | llm | StrOutputParser()


def get_synonyms_chain(llm: BaseChatModel) -> Runnable:
    """``{"word": word}`` → list of synonyms."""
    prompt = ChatPromptTemplate.from_template(SYNONYMS_TEMPLATE)
    return prompt | llm | CommaSeparatedListOutputParser()


def model_from_descriptions(name: str, fields: dict[str, str]) -> type[BaseModel]:
    """Build a pydantic model of string fields from ``{field: description}``."""
    if not fields:
        raise ValueError("At least one field is required.")
    definitions: dict[str, Any] = {
        field: (str, Field(description=description))
        for field, description in fields.items()
    }
    # Models often answer numbers unquoted ("age": 40)
    config = ConfigDict(coerce_numbers_to_str=True)
    return create_model(name, __config__=config, **definitions)


def get_structured_chain(
    llm: BaseChatModel, schema: type[BaseModel], as_dict: bool = False
) -> Runnable:
    """``{"phrase": text}`` → *schema* instance (or plain dict).

    The parser's format instructions are baked into the prompt, so callers
    only supply the phrase.
    """
    parser = PydanticOutputParser(pydantic_object=schema)
    prompt = ChatPromptTemplate.from_template(EXTRACTION_TEMPLATE).partial(
        format_instructions=parser.get_format_instructions()
    )
    chain = prompt | llm | parser
    if as_dict:
        chain = chain | RunnableLambda(lambda result: result.model_dump())
    return chain


def get_person_extraction_chain(llm: BaseChatModel) -> Runnable:
    """Extract ``name`` and ``age`` from a phrase into a dict."""
    schema = model_from_descriptions("Person", PERSON_FIELDS)
    return get_structured_chain(llm, schema, as_dict=True)


def get_recipe_chain(llm: BaseChatModel) -> Runnable:
    """Extract a :class:`Recipe` from a phrase."""
    return get_structured_chain(llm, Recipe)
