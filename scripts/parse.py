"""CLI helper - run one prompt → model → output-parser chain.

Usage::

    python -m scripts.parse --demo joke dogs
    python -m scripts.parse --demo recipe "The recipe is called ..."
"""

from __future__ import annotations

import json
import logging

import click
from langchain_core.exceptions import OutputParserException
from pydantic import BaseModel

from ragkit.core.chains.parser_chains import get_joke_chain
from ragkit.core.chains.parser_chains import get_person_extraction_chain
from ragkit.core.chains.parser_chains import get_recipe_chain
from ragkit.core.chains.parser_chains import get_synonyms_chain
from ragkit.core.config import Settings
from ragkit.core.errors import RagkitError
from ragkit.core.llm import get_chat_model

# demo -> (chain builder, input key, text used when none is given)
DEMOS = {
    "joke": (get_joke_chain, "input", "dogs"),
    "synonyms": (get_synonyms_chain, "word", "animals"),
    "person": (get_person_extraction_chain, "phrase", "Max is 40 years old"),
    "recipe": (
        get_recipe_chain,
        "phrase",
        'The recipe is called "Pasta Carbonara" and the ingredients are '
        "eggs, bacon, and cheese.",
    ),
}


def _format(result) -> str:
    if isinstance(result, BaseModel):
        result = result.model_dump()
    if isinstance(result, str):
        return result
    return json.dumps(result, ensure_ascii=False, indent=2)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("text", required=False)
@click.option(
    "--demo",
    type=click.Choice(sorted(DEMOS)),
    default="joke",
    show_default=True,
    help="Which parser chain to run.",
)
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
def main(
    text: str | None,
    demo: str,
    verbose: bool,
    settings: Settings | None = None,
    llm=None,
) -> None:
    """Send TEXT through the chosen chain and print the parsed result."""
    settings = settings or Settings()
    logging.basicConfig(level=logging.DEBUG if verbose else settings.log_level)

    build_chain, input_key, default_text = DEMOS[demo]
    try:
        chain = build_chain(llm or get_chat_model(settings))
    except RagkitError as err:
        raise click.ClickException(str(err)) from err

    try:
        result = chain.invoke({input_key: text or default_text})
    except OutputParserException as err:
        raise click.ClickException(f"Could not parse the model output: {err}") from err
    click.echo(_format(result))


if __name__ == "__main__":  # pragma: no cover
    main()
