import dataclasses

import pytest

from palm_api import ConfigurationError, PaLM
from palm_api.config import (
    AskConfig,
    ChatAskConfig,
    CreateChatConfig,
    EmbedTextConfig,
    GenerateTextConfig,
    parse_config,
)


SCHEMAS = [GenerateTextConfig, AskConfig, EmbedTextConfig, CreateChatConfig, ChatAskConfig]

DEFAULTS = {
    GenerateTextConfig: {
        "candidate_count": 1,
        "temperature": 0,
        "top_p": 0.95,
        "top_k": 40,
        "model": "text-bison-001",
        "format": "markdown",
    },
    AskConfig: {
        "candidate_count": 1,
        "temperature": 0.7,
        "top_p": 0.95,
        "top_k": 40,
        "model": "chat-bison-001",
        "format": "markdown",
        "context": "",
        "examples": [],
    },
    EmbedTextConfig: {"model": "embedding-gecko-001"},
    CreateChatConfig: {
        "context": "",
        "messages": [],
        "examples": [],
        "temperature": 0.5,
        "candidate_count": 1,
        "top_p": 0.95,
        "top_k": 40,
        "model": "chat-bison-001",
        "max_output_tokens": 1024,
    },
    ChatAskConfig: {
        "temperature": 0.5,
        "candidate_count": 1,
        "top_p": 0.95,
        "top_k": 40,
        "model": "chat-bison-001",
        "max_output_tokens": 1024,
        "format": "markdown",
    },
}


@pytest.mark.parametrize("schema", SCHEMAS)
def test_empty_options_yield_documented_defaults(schema):
    """Given no options, parse_config should return exactly the documented defaults."""
    assert parse_config(schema, {}).to_dict() == DEFAULTS[schema]


@pytest.mark.parametrize("schema", SCHEMAS)
def test_unknown_key_is_rejected_by_name(schema):
    """Given an unknown option, parse_config should raise ConfigurationError naming it."""
    with pytest.raises(ConfigurationError, match="not available on this function: stream"):
        parse_config(schema, {"stream": True})


def test_all_unknown_keys_are_reported_together():
    with pytest.raises(ConfigurationError) as excinfo:
        parse_config(GenerateTextConfig, {"stream": True, "temperature": 0.1, "cache": False})
    assert str(excinfo.value).endswith(": stream, cache")


@pytest.mark.parametrize("schema", SCHEMAS)
def test_effective_key_set_matches_defaults(schema):
    """Given any valid subset of overrides, the merged key set should equal the defaults' key set."""
    names = [f.name for f in dataclasses.fields(schema)]
    overrides = {name: DEFAULTS[schema][name] for name in names[::2]}
    merged = parse_config(schema, overrides).to_dict()
    assert set(merged) == set(DEFAULTS[schema])


def test_supplied_values_override_defaults():
    config = parse_config(GenerateTextConfig, {"temperature": 0.9, "model": "text-bison-002"})
    assert config.temperature == 0.9
    assert config.model == "text-bison-002"
    assert config.top_k == 40


def test_mutable_defaults_are_not_shared():
    first = parse_config(CreateChatConfig)
    second = parse_config(CreateChatConfig)
    first.messages.append({"content": "hi"})
    assert second.messages == []


def test_base_layers_under_supplied_options():
    """Given session-level values, per-call options should layer on top of them."""
    session = parse_config(CreateChatConfig, {"temperature": 0.1, "model": "chat-bison-002", "context": "ctx"})
    config = parse_config(ChatAskConfig, {"top_k": 5}, base=session.to_dict())
    assert config.temperature == 0.1
    assert config.model == "chat-bison-002"
    assert config.top_k == 5
    assert config.format == "markdown"


def test_base_keys_do_not_count_as_unknown():
    session = parse_config(CreateChatConfig, {"context": "ctx"})
    config = parse_config(ChatAskConfig, {}, base=session.to_dict())
    assert not hasattr(config, "context")


@pytest.mark.parametrize("schema", [GenerateTextConfig, AskConfig, ChatAskConfig])
def test_invalid_format_is_rejected_at_parse_time(schema):
    with pytest.raises(ConfigurationError, match="xyz is not a valid format"):
        parse_config(schema, {"format": "xyz"})


def test_client_rejects_non_callable_transport():
    with pytest.raises(ConfigurationError, match="transport must be an async callable"):
        PaLM("test-key", transport="not-a-function")


def test_client_rejects_unknown_construction_option():
    with pytest.raises(ConfigurationError, match="fetch"):
        PaLM("test-key", fetch=object())
