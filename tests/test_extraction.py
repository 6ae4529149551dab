"""Tests for intent extraction: prompt, reply parsing, and both backends."""

from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import pytest

from voicecart.errors import ExtractionUnavailableError
from voicecart.pipeline.extraction import (
    AnthropicIntentExtractor,
    HuggingFaceIntentExtractor,
    _extract_json,
    build_extractor,
    build_prompt,
    parse_intent_payload,
)

HF_URL = "https://hf.test/v1/chat/completions"


class TestExtractJson:
    def test_plain_object(self):
        assert _extract_json('{"intent": "ADD_ITEM"}') == {"intent": "ADD_ITEM"}

    def test_code_fence(self):
        assert _extract_json('```json\n{"a": 1}\n```') == {"a": 1}

    def test_prose_around_object(self):
        text = 'Sure! Here it is: {"intent": "SEARCH_ITEM", "item": "rice"} Hope that helps.'
        assert _extract_json(text) == {"intent": "SEARCH_ITEM", "item": "rice"}

    def test_braces_inside_strings(self):
        assert _extract_json('x {"item": "a } b"} y') == {"item": "a } b"}

    def test_nested_object(self):
        assert _extract_json('{"a": {"b": 2}} trailing') == {"a": {"b": 2}}

    def test_skips_broken_object(self):
        assert _extract_json('{not json} then {"a": 1}') == {"a": 1}

    def test_object_wrapped_in_array(self):
        text = '[{"intent": "ADD_ITEM", "item": "milk"}]'
        assert _extract_json(text) == {"intent": "ADD_ITEM", "item": "milk"}

    def test_array_is_not_an_object(self):
        assert _extract_json("[1, 2]") is None

    @pytest.mark.parametrize("text", ["", "no json here", "{unclosed"])
    def test_nothing_found(self, text):
        assert _extract_json(text) is None


INTENT_TAGS = ("ADD_ITEM", "REMOVE_ITEM", "SEARCH_ITEM", "UNKNOWN")
SCHEMA_KEYS = (
    "intent",
    "item",
    "quantity",
    "language",
    "brand",
    "min_price",
    "max_price",
    "size",
    "qualifier",
)


def _section(prompt: str, start: str, end: str) -> str:
    return prompt.split(start, 1)[1].split(end, 1)[0]


class TestBuildPrompt:
    def test_embeds_sentence(self):
        prompt = build_prompt("  add two apples ")
        assert prompt.count('Sentence: "add two apples"') == 1
        assert prompt.rstrip().endswith("JSON:")

    def test_schema_lists_every_key_and_tag(self):
        schema = _section(build_prompt("x"), "JSON schema:", "Phrase mapping rules:")
        for key in SCHEMA_KEYS:
            assert f'"{key}":' in schema
        assert '"ADD_ITEM" | "REMOVE_ITEM" | "SEARCH_ITEM" | "UNKNOWN"' in schema

    def test_phrase_rules_cover_every_tag(self):
        rules = _section(build_prompt("x"), "Phrase mapping rules:", "Multilingual input:")
        for tag in INTENT_TAGS:
            assert f"-> {tag}" in rules

    def test_at_least_two_examples_per_tag(self):
        examples = _section(build_prompt("x"), "Examples:", "Sentence:")
        lines = [line for line in examples.splitlines() if "->" in line]
        for tag in INTENT_TAGS:
            matching = [line for line in lines if f'"intent":"{tag}"' in line]
            assert len(matching) >= 2, tag

    def test_examples_are_valid_json(self):
        examples = _section(build_prompt("x"), "Examples:", "Sentence:")
        for line in examples.splitlines():
            if "->" in line:
                payload = json.loads(line.split("->", 1)[1])
                assert payload["intent"] in INTENT_TAGS

    def test_multilingual_hint_maps_to_english(self):
        hint = _section(build_prompt("x"), "Multilingual input:", "Examples:")
        assert '"item" as the English product name' in hint
        assert '"दूध" -> "milk"' in hint
        assert '"manzanas" -> "apples"' in hint

    def test_prompt_is_deterministic(self):
        assert build_prompt("find rice under $3") == build_prompt("find rice under $3")


class TestParseIntentPayload:
    def test_add_item(self):
        intent = parse_intent_payload(
            '{"intent": "ADD_ITEM", "item": "Apples", "quantity": 3, "language": "EN"}'
        )
        assert intent.intent == "ADD_ITEM"
        assert intent.item == "apples"
        assert intent.quantity == 3
        assert intent.language == "en"
        assert intent.source == "llm"

    def test_array_wrapped_reply(self):
        intent = parse_intent_payload(
            '[{"intent": "ADD_ITEM", "item": "milk", "quantity": 2, "language": "en"}]'
        )
        assert (intent.intent, intent.item, intent.quantity) == ("ADD_ITEM", "milk", 2)

    def test_unknown_drops_item(self):
        intent = parse_intent_payload('{"intent": "UNKNOWN", "item": "anything"}')
        assert intent.item is None

    def test_search_keeps_optional_fields(self):
        intent = parse_intent_payload(
            json.dumps(
                {
                    "intent": "SEARCH_ITEM",
                    "item": "toothpaste",
                    "brand": "DentaFresh",
                    "max_price": 4,
                    "min_price": -1,
                    "size": " ",
                    "qualifier": "mint",
                }
            )
        )
        assert intent.brand == "DentaFresh"
        assert intent.max_price == 4.0
        assert intent.min_price is None
        assert intent.size is None
        assert intent.qualifier == "mint"

    def test_non_search_ignores_price_fields(self):
        intent = parse_intent_payload('{"intent": "ADD_ITEM", "item": "milk", "max_price": 3}')
        assert intent.max_price is None

    @pytest.mark.parametrize(
        "quantity, expected",
        [(2, 2), (2.0, 2), (0, None), (-1, None), (True, None), ("3", None), (1.5, None)],
    )
    def test_quantity_coercion(self, quantity, expected):
        raw = json.dumps({"intent": "ADD_ITEM", "item": "eggs", "quantity": quantity})
        assert parse_intent_payload(raw).quantity == expected

    @pytest.mark.parametrize(
        "raw",
        [
            "I think you want milk",
            '{"intent": "BUY_ITEM", "item": "milk"}',
            '{"intent": "ADD_ITEM", "item": ""}',
            '{"intent": "REMOVE_ITEM"}',
            '{"intent": "SEARCH_ITEM", "item": 42}',
        ],
    )
    def test_unusable_payload_raises(self, raw):
        with pytest.raises(ExtractionUnavailableError):
            parse_intent_payload(raw)


def _hf_response(status: int, content: str | None = None, **kwargs) -> httpx.Response:
    if content is not None:
        kwargs["json"] = {"choices": [{"message": {"role": "assistant", "content": content}}]}
    return httpx.Response(status, request=httpx.Request("POST", HF_URL), **kwargs)


def _hf_extractor(post: AsyncMock, api_key: str = "hf-test") -> HuggingFaceIntentExtractor:
    http_client = MagicMock(spec=httpx.AsyncClient)
    http_client.post = post
    return HuggingFaceIntentExtractor(
        api_key=api_key, model="test/model", url=HF_URL, timeout=5, http_client=http_client
    )


class TestHuggingFaceIntentExtractor:
    def test_success(self):
        post = AsyncMock(
            return_value=_hf_response(200, '{"intent": "ADD_ITEM", "item": "milk", "quantity": 2}')
        )
        intent = asyncio.run(_hf_extractor(post).extract("add 2 milk"))

        assert (intent.intent, intent.item, intent.quantity) == ("ADD_ITEM", "milk", 2)
        args, kwargs = post.call_args
        assert args[0] == HF_URL
        body = kwargs["json"]
        assert body["model"] == "test/model"
        assert body["stream"] is False
        assert 'Sentence: "add 2 milk"' in body["messages"][0]["content"]

    def test_missing_key(self):
        post = AsyncMock()
        with pytest.raises(ExtractionUnavailableError) as exc_info:
            asyncio.run(_hf_extractor(post, api_key="").extract("add milk"))
        assert "HF_API_KEY" in exc_info.value.hint
        post.assert_not_called()

    def test_http_error(self):
        post = AsyncMock(return_value=_hf_response(500, text="boom"))
        with pytest.raises(ExtractionUnavailableError, match="HTTP 500"):
            asyncio.run(_hf_extractor(post).extract("add milk"))

    def test_timeout(self):
        post = AsyncMock(side_effect=httpx.ConnectTimeout("slow"))
        with pytest.raises(ExtractionUnavailableError, match="Timeout"):
            asyncio.run(_hf_extractor(post).extract("add milk"))

    def test_unexpected_shape(self):
        post = AsyncMock(return_value=_hf_response(200, json={"choices": []}))
        with pytest.raises(ExtractionUnavailableError):
            asyncio.run(_hf_extractor(post).extract("add milk"))

    def test_prose_reply(self):
        post = AsyncMock(return_value=_hf_response(200, "Sorry, I can't help with that."))
        with pytest.raises(ExtractionUnavailableError, match="no JSON"):
            asyncio.run(_hf_extractor(post).extract("add milk"))


def _anthropic_extractor(create: AsyncMock) -> AnthropicIntentExtractor:
    client = MagicMock()
    client.messages.create = create
    return AnthropicIntentExtractor(api_key="sk-test", model="claude-test", timeout=5, client=client)


class TestAnthropicIntentExtractor:
    def test_success(self):
        response = MagicMock()
        response.content = [MagicMock(text='{"intent": "SEARCH_ITEM", "item": "rice"}')]
        create = AsyncMock(return_value=response)

        intent = asyncio.run(_anthropic_extractor(create).extract("find rice"))

        assert (intent.intent, intent.item) == ("SEARCH_ITEM", "rice")
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "claude-test"
        assert 'Sentence: "find rice"' in kwargs["messages"][0]["content"]

    def test_missing_key_without_client(self):
        extractor = AnthropicIntentExtractor(api_key="")
        with pytest.raises(ExtractionUnavailableError) as exc_info:
            asyncio.run(extractor.extract("add milk"))
        assert "ANTHROPIC_API_KEY" in exc_info.value.hint

    def test_status_error(self):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        error = anthropic.InternalServerError(
            "overloaded", response=httpx.Response(529, request=request), body=None
        )
        with pytest.raises(ExtractionUnavailableError, match="529"):
            asyncio.run(_anthropic_extractor(AsyncMock(side_effect=error)).extract("add milk"))

    def test_connection_error(self):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        error = anthropic.APIConnectionError(request=request)
        with pytest.raises(ExtractionUnavailableError, match="unreachable"):
            asyncio.run(_anthropic_extractor(AsyncMock(side_effect=error)).extract("add milk"))

    def test_timeout(self):
        with pytest.raises(ExtractionUnavailableError, match="timed out"):
            asyncio.run(
                _anthropic_extractor(AsyncMock(side_effect=TimeoutError())).extract("add milk")
            )


class TestBuildExtractor:
    def test_known_backends(self):
        assert isinstance(build_extractor("huggingface"), HuggingFaceIntentExtractor)
        assert isinstance(build_extractor("anthropic"), AnthropicIntentExtractor)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_extractor("openai")
