from __future__ import annotations

import pytest

from ragkit.core.errors import ConfigurationError
from ragkit.core.llm import get_chat_model
from tests.helpers import get_test_settings


@pytest.mark.unit
def test_missing_key_fails_fast():
    with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
        get_chat_model(get_test_settings())


@pytest.mark.unit
def test_chat_model_is_configured_from_settings(mocker):
    chat_class = mocker.patch("ragkit.core.llm.ChatOpenAI")
    settings = get_test_settings(
        openai_api_key="sk-test", chat_model="gpt-4o-mini", temperature=0.0
    )

    model = get_chat_model(settings)

    assert model is chat_class.return_value
    kwargs = chat_class.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["temperature"] == 0.0
    assert kwargs["max_tokens"] == 1000
    assert kwargs["api_key"].get_secret_value() == "sk-test"
